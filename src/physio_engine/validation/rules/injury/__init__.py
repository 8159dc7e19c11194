"""INJURY tier rules."""

"""PROTOCOL tier rules."""

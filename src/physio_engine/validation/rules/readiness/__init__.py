"""READINESS tier rules."""

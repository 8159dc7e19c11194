"""SCHEDULE tier rules."""

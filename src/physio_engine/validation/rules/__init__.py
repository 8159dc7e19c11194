"""Validation rules, one subpackage per precedence tier."""

"""Numerical building blocks: curve fitting, load statistics, zones, units."""

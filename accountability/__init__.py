"""Accountability scoring and streak engine."""

__version__ = "0.1.0"

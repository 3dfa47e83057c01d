"""Commit history skill analysis."""

__version__ = "0.1.0"

"""taskctl: a small to-do service with sequential task identifiers."""

__version__ = "0.1.0"

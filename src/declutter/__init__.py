"""Declutter: filtered directory scanning and trash-backed cleanup."""

__version__ = "0.1.0"

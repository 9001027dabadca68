"""Scan and cleanup engine."""

"""Deterministic grammar and style linting engine."""
__version__ = "0.4.0"

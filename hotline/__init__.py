"""Hotline protocol helpers, client preferences and a terminal interface."""

__version__ = "0.10.23"

__all__ = ["preferences", "transfer", "ui", "user", "util"]
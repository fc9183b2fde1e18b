"""Cached records core for a clinic records application."""

__version__ = "0.1.0"

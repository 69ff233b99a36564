"""Waitlist landing page subscription service."""

__version__ = "0.1.0"

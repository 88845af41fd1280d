"""Rebirth - find and repair orphaned nodes in a content tree."""

__version__ = "0.1.0"

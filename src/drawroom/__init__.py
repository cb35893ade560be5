"""DRAWROOM: wheel of names for live draw rooms."""

__version__ = "0.1.0"

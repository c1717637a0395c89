"""Studiobook photographer availability calendar."""

__version__ = "1.0.0"

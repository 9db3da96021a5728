"""Matching and validation routines for EDI integration hooks."""

__version__ = "1.0.0"

"""Ashakk - authoritative rule engine for a bluffing domino game."""

__version__ = "0.1.0"

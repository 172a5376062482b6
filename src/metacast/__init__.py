"""Metacast - build podcast feeds from a conference talk archive."""

__version__ = "0.1.0"

"""Checkie: checkers with a human-vs-human and a human-vs-bot mode."""

__version__ = "0.1.0"

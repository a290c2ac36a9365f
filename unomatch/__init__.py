"""UNO rules engine with automated players and a match runner."""

__version__ = "0.1.0"

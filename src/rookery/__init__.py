"""Rookery: a chess rules engine with pluggable move sources."""

__version__ = "0.1.0"

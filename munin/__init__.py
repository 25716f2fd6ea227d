"""Munin core: search, note linking and analytics over a note collection."""

__version__ = "0.1.0"

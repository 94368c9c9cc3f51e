"""Data-access layer for the jobly job board."""

__version__ = "0.1.0"

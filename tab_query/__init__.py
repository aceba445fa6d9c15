"""Search the spaces and tabs of a running browser from a launcher."""

__version__ = "1.0.0"

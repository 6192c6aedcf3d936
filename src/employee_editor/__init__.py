"""Employee record editor backed by a remote document store."""

__version__ = "0.1.0"

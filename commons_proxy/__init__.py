"""Image search proxy for Wikimedia Commons."""

__version__ = "1.0.0"

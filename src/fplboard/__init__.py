"""Fantasy Premier League player dashboard."""

__version__ = "0.1.0"

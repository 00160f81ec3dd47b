"""Compare YouTube search terms by aggregated views and likes."""

__version__ = "0.1.0"

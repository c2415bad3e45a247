"""Terminal browser for the YTS movie catalog."""

__version__ = "0.1.0"

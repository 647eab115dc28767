"""Tokyo event finder: event search, favorites and session authentication."""

__version__ = "0.1.0"

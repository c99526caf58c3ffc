"""Chemical identifier lookups against public web services."""

__version__ = "0.1.0"

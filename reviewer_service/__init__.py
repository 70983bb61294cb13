"""PR reviewer assignment service."""

__version__ = "1.0.0"

"""Source package for healthplanet-csv."""

__version__ = "1.0.0"

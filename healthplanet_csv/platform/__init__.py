"""Configuration and object wiring for the command line tool."""

from .config import Settings, load_settings

__all__ = ["Settings", "load_settings"]

"""Version information for DualStream."""

__version__ = "0.1.0"

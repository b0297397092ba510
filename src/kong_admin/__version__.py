"""Version information for kong_admin."""

__version__ = "0.1.0"

"""Event selection engine for a social-events application."""

__version__ = "0.1.0"

"""pb: command line and terminal UI client for Parseable log analytics."""

__all__ = ["__version__"]

__version__ = "0.1.0"

"""DevElevate: interactive coding challenges with automatic checking."""

__version__ = "0.1.0"

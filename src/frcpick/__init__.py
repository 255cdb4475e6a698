"""Pick-list ranking engine for FRC alliance selection."""

__version__ = "0.1.0"

"""Job aggregation, resume matching and application tracking."""

__version__ = "0.1.0"

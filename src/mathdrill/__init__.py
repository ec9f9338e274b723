"""mathdrill: adaptive arithmetic practice engine."""

__version__ = "0.1.0"

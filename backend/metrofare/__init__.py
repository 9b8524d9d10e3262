"""Metro fare service: station lookup, cached fare lookup and fare totals."""

__version__ = "1.0.0"

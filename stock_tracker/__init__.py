"""Personal stock portfolio tracker backed by Finnhub quotes."""

__version__ = "1.0.0"

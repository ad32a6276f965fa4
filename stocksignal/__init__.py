"""StockSignal: technical indicators and trade recommendations for a price series."""

__version__ = "0.1.0"

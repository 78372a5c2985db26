"""TradeStats - trading journal performance analytics."""

__version__ = "0.1.0"

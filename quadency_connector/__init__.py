"""
Quadency QUADX venue connector.

Translates the Quadency QUADX REST dialect into venue-agnostic market,
ticker, trade, order and balance models.

This package provides:
- Data models for markets, tickers, trades, orders and balances
- A capability interface for venue adapters and an injectable clock
- Request signing, response normalization and error mapping for Quadency
- Configuration management and structured logging setup
"""

__version__ = "0.1.0"

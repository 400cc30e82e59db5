"""
Canonical data models shared by all venue adapters.

All models are frozen pydantic models and use Decimal for financial values.

Modules:
    market: Markets and trading limits
    ticker: Ticker snapshots
    trade: Account trades and fees
    order: Orders, order status and side
    balance: Account balances

Example:
    >>> from quadency_connector.models import Order, OrderStatus, Trade
"""

# Market models
from quadency_connector.models.market import (
    Market,
    MarketLimits,
    MinMax,
)

# Ticker models
from quadency_connector.models.ticker import Ticker

# Trade models
from quadency_connector.models.trade import (
    Trade,
    TradeFee,
)

# Order models
from quadency_connector.models.order import (
    Order,
    OrderSide,
    OrderStatus,
)

# Balance models
from quadency_connector.models.balance import (
    BalanceEntry,
    Balances,
)

__all__ = [
    # Market
    "MinMax",
    "MarketLimits",
    "Market",
    # Ticker
    "Ticker",
    # Trade
    "TradeFee",
    "Trade",
    # Order
    "OrderStatus",
    "OrderSide",
    "Order",
    # Balance
    "BalanceEntry",
    "Balances",
]

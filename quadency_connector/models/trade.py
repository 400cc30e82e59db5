"""
Trade data models.

Models:
    TradeFee: Fee charged on a fill
    Trade: A single fill of one of the account's orders
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TradeFee(BaseModel):
    """
    Fee charged on a trade.

    Attributes:
        cost: Fee amount in fee currency.
        currency: Currency the fee was charged in.
        rate: Fee rate as a fraction.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    cost: Optional[Decimal] = Field(default=Decimal("0"), description="Fee amount")
    currency: Optional[str] = Field(default=None, description="Fee currency")
    rate: Optional[Decimal] = Field(default=Decimal("0"), description="Fee rate")


class Trade(BaseModel):
    """
    A fill of one of the account's orders.

    Attributes:
        id: Venue trade identifier.
        order: Venue identifier of the order that was filled.
        timestamp: Execution time in milliseconds since epoch (UTC).
        datetime: Execution time as ISO 8601 string.
        symbol: Unified symbol.
        type: Order type, not reported by this venue.
        taker_or_maker: Liquidity role, not reported by this venue.
        side: "buy" or "sell" as reported.
        price: Execution price.
        amount: Executed quantity in base currency.
        cost: price * amount.
        fee: Fee charged.
        info: Raw venue payload.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    id: Optional[str] = Field(default=None, description="Venue trade identifier")
    order: Optional[str] = Field(default=None, description="Venue order identifier")
    timestamp: Optional[int] = Field(default=None, description="Execution time (ms)")
    datetime: Optional[str] = Field(default=None, description="Execution time (ISO 8601)")
    symbol: Optional[str] = Field(default=None, description="Unified symbol")
    type: Optional[str] = Field(default=None, description="Order type")
    taker_or_maker: Optional[str] = Field(default=None, description="Liquidity role")
    side: Optional[str] = Field(default=None, description="Trade side")
    price: Optional[Decimal] = Field(default=None, description="Execution price")
    amount: Optional[Decimal] = Field(default=None, description="Executed quantity")
    cost: Optional[Decimal] = Field(default=None, description="Notional value")
    fee: TradeFee = Field(default_factory=TradeFee, description="Fee charged")
    info: Dict[str, Any] = Field(default_factory=dict, description="Raw venue payload")

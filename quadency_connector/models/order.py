"""
Order data models.

Models:
    OrderStatus: Enum for the order lifecycle state
    OrderSide: Enum for the order direction
    Order: An order as reported by the venue, with derived quantities
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """
    Enumeration for order status.

    Attributes:
        OPEN: Working on the book, or status not reported
        CLOSED: Completely filled
        REJECTED: Refused by the venue
        CANCELED: Canceled before completion
    """

    OPEN = "open"
    CLOSED = "closed"
    REJECTED = "rejected"
    CANCELED = "canceled"


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class Order(BaseModel):
    """
    An order as reported by the venue.

    Quantities that the venue does not report directly (filled, remaining,
    cost, average) are derived by the normalizer; fields it cannot derive
    are None.

    Attributes:
        id: Venue order identifier.
        timestamp: Creation time in milliseconds since epoch (UTC).
        datetime: Creation time as ISO 8601 string.
        last_trade_timestamp: Time of the last fill, not reported by this venue.
        symbol: Unified symbol.
        type: Order type as reported ("MARKET" when absent).
        side: Order side as reported.
        price: Order price.
        amount: Order size.
        filled: Executed size in base currency.
        remaining: amount - filled, never negative.
        cost: price * filled, in quote currency.
        average: Average execution price.
        status: Lifecycle state, None when not reported.
        fee: Fee charged, not reported by this venue.
        trades: Fills, not reported by this venue.
        info: Raw venue payload.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    id: Optional[str] = Field(default=None, description="Venue order identifier")
    timestamp: Optional[int] = Field(default=None, description="Creation time (ms)")
    datetime: Optional[str] = Field(default=None, description="Creation time (ISO 8601)")
    last_trade_timestamp: Optional[int] = Field(
        default=None,
        description="Time of the last fill (ms)",
    )
    symbol: Optional[str] = Field(default=None, description="Unified symbol")
    type: Optional[str] = Field(default=None, description="Order type")
    side: Optional[str] = Field(default=None, description="Order side")

    price: Optional[Decimal] = Field(default=None, description="Order price")
    amount: Optional[Decimal] = Field(default=None, description="Order size")
    filled: Optional[Decimal] = Field(default=None, description="Executed size")
    remaining: Optional[Decimal] = Field(
        default=None,
        description="Unexecuted size",
        ge=Decimal("0"),
    )
    cost: Optional[Decimal] = Field(default=None, description="Executed notional")
    average: Optional[Decimal] = Field(default=None, description="Average fill price")

    status: Optional[OrderStatus] = Field(default=None, description="Lifecycle state")
    fee: Optional[Dict[str, Any]] = Field(default=None, description="Fee charged")
    trades: Optional[List[Any]] = Field(default=None, description="Fills")
    info: Dict[str, Any] = Field(default_factory=dict, description="Raw venue payload")

    @property
    def effective_status(self) -> OrderStatus:
        """
        Status with the framework default applied.

        Returns:
            OrderStatus: The reported status, or OPEN when none was reported.
        """
        return self.status if self.status is not None else OrderStatus.OPEN

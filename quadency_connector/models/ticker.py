"""
Ticker data model.

Every price and volume field is optional: the venue omits fields freely and
a missing value is reported as None, never as zero.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Ticker(BaseModel):
    """
    Ticker data for a market.

    Attributes:
        symbol: Unified symbol the ticker was requested for.
        price: Current price.
        last: Last traded price.
        close: Close price of the current period.
        high: Period high.
        low: Period low.
        price_24h: Price 24 hours ago.
        volume: Current period volume.
        volume_24h: 24-hour volume.
        info: Raw venue payload.

    Example:
        >>> ticker = Ticker(symbol="BTC/USDT", last=Decimal("101"), high=Decimal("110"))
        >>> ticker.volume_24h is None
        True
    """

    model_config = {"frozen": True, "extra": "forbid"}

    symbol: Optional[str] = Field(default=None, description="Unified symbol")

    price: Optional[Decimal] = Field(default=None, description="Current price")
    last: Optional[Decimal] = Field(default=None, description="Last traded price")
    close: Optional[Decimal] = Field(default=None, description="Close price")
    high: Optional[Decimal] = Field(default=None, description="Period high")
    low: Optional[Decimal] = Field(default=None, description="Period low")
    price_24h: Optional[Decimal] = Field(
        default=None,
        description="Price 24 hours ago",
    )

    volume: Optional[Decimal] = Field(default=None, description="Current volume")
    volume_24h: Optional[Decimal] = Field(default=None, description="24-hour volume")

    info: Dict[str, Any] = Field(
        default_factory=dict,
        description="Raw venue payload",
    )

"""
Market data models.

A Market describes one tradable pair: identity, fee rates, trading limits
and whether trading is enabled. Fee rates are fractions (0.001 == 0.1%).

Models:
    MinMax: Inclusive lower/upper bound, either side optional
    MarketLimits: Amount, price and cost bounds
    Market: A tradable base/quote pair
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator


class MinMax(BaseModel):
    """Lower and upper bound for a trading limit."""

    model_config = {"frozen": True, "extra": "forbid"}

    min: Optional[Decimal] = Field(default=None, description="Lower bound")
    max: Optional[Decimal] = Field(default=None, description="Upper bound")


class MarketLimits(BaseModel):
    """Trading limits for a market."""

    model_config = {"frozen": True, "extra": "forbid"}

    amount: MinMax = Field(
        default_factory=MinMax,
        description="Order size bounds in base currency",
    )
    price: MinMax = Field(
        default_factory=MinMax,
        description="Price bounds in quote currency",
    )
    cost: MinMax = Field(
        default_factory=MinMax,
        description="Notional bounds in quote currency",
    )


class Market(BaseModel):
    """
    A tradable base/quote pair.

    Attributes:
        id: Venue market identifier ("BTCUSDT").
        symbol: Unified symbol ("BTC/USDT").
        base: Base currency code.
        quote: Quote currency code.
        base_id: Venue base currency identifier.
        quote_id: Venue quote currency identifier.
        precision: Venue precision descriptor, passed through untouched.
        taker: Taker fee as a fraction.
        maker: Maker fee as a fraction.
        limits: Amount, price and cost bounds.
        active: True if either buying or selling is enabled.
        percentage: True if fees are charged as a percentage of cost.
        info: Selected raw fields from the venue.

    Example:
        >>> market = Market(
        ...     id="BTCUSDT",
        ...     symbol="BTC/USDT",
        ...     base="BTC",
        ...     quote="USDT",
        ...     base_id="BTC",
        ...     quote_id="USDT",
        ...     taker=Decimal("0.001"),
        ...     maker=Decimal("0.001"),
        ...     active=True,
        ... )
    """

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(..., description="Venue market identifier", min_length=1)
    symbol: str = Field(
        ...,
        description="Unified symbol",
        min_length=3,
        examples=["BTC/USDT", "ETH/USDC"],
    )
    base: str = Field(..., description="Base currency code", min_length=1)
    quote: str = Field(..., description="Quote currency code", min_length=1)
    base_id: str = Field(..., description="Venue base currency id", min_length=1)
    quote_id: str = Field(..., description="Venue quote currency id", min_length=1)
    precision: Optional[Any] = Field(
        default=None,
        description="Venue precision descriptor",
    )
    taker: Decimal = Field(
        default=Decimal("0"),
        description="Taker fee as a fraction",
    )
    maker: Decimal = Field(
        default=Decimal("0"),
        description="Maker fee as a fraction",
    )
    limits: MarketLimits = Field(
        default_factory=MarketLimits,
        description="Trading limits",
    )
    active: bool = Field(default=True, description="Whether trading is enabled")
    percentage: bool = Field(
        default=True,
        description="Whether fees are a percentage of cost",
    )
    info: Dict[str, Any] = Field(
        default_factory=dict,
        description="Selected raw fields from the venue",
    )

    @model_validator(mode="after")
    def validate_identity(self) -> "Market":
        """Ensure symbol is BASE/QUOTE and id is the symbol without separator."""
        if self.symbol != f"{self.base}/{self.quote}":
            raise ValueError(
                f"Symbol {self.symbol!r} does not match {self.base}/{self.quote}"
            )
        if self.id != self.symbol.replace("/", ""):
            raise ValueError(f"Market id {self.id!r} does not match symbol {self.symbol!r}")
        return self

"""
Balance data models.

Models:
    BalanceEntry: Free, used and total amounts for one asset
    Balances: Per-asset entries plus the raw venue payload
"""

from decimal import Decimal
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel, Field


class BalanceEntry(BaseModel):
    """Amounts held for a single asset."""

    model_config = {"frozen": True, "extra": "forbid"}

    free: Optional[Decimal] = Field(default=None, description="Available amount")
    used: Optional[Decimal] = Field(default=None, description="Amount locked in orders")
    total: Optional[Decimal] = Field(default=None, description="free + used")


class Balances(BaseModel):
    """
    Account balances keyed by asset code.

    Example:
        >>> balances = Balances(
        ...     entries={"BTC": BalanceEntry(free=Decimal("1"), used=Decimal("0"), total=Decimal("1"))},
        ...     info=[{"asset": "BTC", "free": "1", "used": "0", "total": "1"}],
        ... )
        >>> balances["BTC"].free
        Decimal('1')
    """

    model_config = {"frozen": True, "extra": "forbid"}

    entries: Dict[str, BalanceEntry] = Field(
        default_factory=dict,
        description="Balance per asset code",
    )
    info: Any = Field(default=None, description="Raw venue payload")

    def __getitem__(self, asset: str) -> BalanceEntry:
        return self.entries[asset]

    def __contains__(self, asset: object) -> bool:
        return asset in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def assets(self) -> Iterator[str]:
        """Iterate asset codes in venue order."""
        return iter(self.entries)

    def get(self, asset: str) -> Optional[BalanceEntry]:
        """Return the entry for an asset, or None."""
        return self.entries.get(asset)

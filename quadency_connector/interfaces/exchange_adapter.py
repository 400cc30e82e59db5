"""
Abstract base class for venue adapters.

This module defines the ExchangeAdapter capability interface that every
venue-specific implementation must follow, so callers can work with markets,
tickers, trades, orders and balances uniformly across venues.

Adapters are composed from a signer, a transport, an error mapper and a
normalizer; they are looked up by name through the adapter registry in
quadency_connector.adapters rather than subclassed from a shared base
implementation.

Example:
    >>> class MyVenueAdapter(ExchangeAdapter):
    ...     @property
    ...     def exchange_name(self) -> str:
    ...         return "myvenue"
    ...     # ... implement other abstract methods
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from quadency_connector.models.balance import Balances
from quadency_connector.models.market import Market
from quadency_connector.models.order import Order
from quadency_connector.models.ticker import Ticker
from quadency_connector.models.trade import Trade


class ExchangeAdapter(ABC):
    """
    Abstract base class for venue adapters.

    The adapter is responsible for:
    - Signing private requests with the venue's authentication scheme
    - Converting venue-specific payloads to canonical models
    - Translating venue errors into the shared exception hierarchy

    Note:
        All financial values in returned models use Decimal for precision.
        Errors are raised immediately; adapters never retry.
    """

    @property
    @abstractmethod
    def exchange_name(self) -> str:
        """
        Return the lowercase venue identifier.

        Used in logs and in the feedback string of raised exchange errors.

        Returns:
            str: Lowercase venue name (e.g., "quadency").
        """
        pass

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """
        Return static venue metadata.

        Returns:
            Dict[str, Any]: id, name, rate limit, capability flags ("has"),
                supported timeframes and URLs.
        """
        pass

    @abstractmethod
    async def fetch_markets(self) -> List[Market]:
        """
        Fetch every market listed by the venue.

        Returns:
            List[Market]: Markets in venue order.
        """
        pass

    @abstractmethod
    async def load_markets(self, reload: bool = False) -> Dict[str, Market]:
        """
        Fetch and cache markets, keyed by unified symbol.

        Args:
            reload: Refetch even if markets are already cached.

        Returns:
            Dict[str, Market]: Cached markets.
        """
        pass

    @abstractmethod
    def market(self, symbol: str) -> Market:
        """
        Look up a cached market.

        Raises:
            BadSymbol: If the symbol is not a known market.
            ExchangeError: If markets have not been loaded.
        """
        pass

    @abstractmethod
    async def fetch_ticker(self, symbol: str) -> Ticker:
        """Fetch the current ticker for a symbol."""
        pass

    @abstractmethod
    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1h",
        since: Optional[int] = None,
        limit: int = 1000,
    ) -> Any:
        """
        Fetch candles for a symbol.

        Args:
            symbol: Unified symbol.
            timeframe: Candle duration (e.g., "1h").
            since: Start time in milliseconds, defaults to limit candles ago.
            limit: Number of candles.
        """
        pass

    @abstractmethod
    async def fetch_my_trades(
        self,
        symbol: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Trade]:
        """
        Fetch the account's trades.

        Raises:
            ArgumentsRequired: If the venue requires a symbol and none is given.
        """
        pass

    @abstractmethod
    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: Any,
        price: Optional[Any] = None,
    ) -> Order:
        """Place an order and return it as reported by the venue."""
        pass

    @abstractmethod
    async def fetch_balance(self) -> Balances:
        """Fetch account balances."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Release network resources.

        Must be safe to call multiple times.
        """
        pass

    async def __aenter__(self) -> "ExchangeAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(exchange={self.exchange_name})"

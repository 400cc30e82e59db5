"""
Quadency exchange adapter.

Main adapter implementation that implements the ExchangeAdapter interface.
Coordinates request signing, the REST transport, error mapping and data
normalization.

Endpoints:
    Public:  GET markets, GET ticker, GET ohlcv
    Private: GET trades, GET balances, POST order

Example:
    >>> from quadency_connector.adapters.quadency import QuadencyAdapter
    >>> from quadency_connector.config.loader import load_config
    >>>
    >>> config = load_config()
    >>> async with QuadencyAdapter(config.get_exchange("quadency")) as adapter:
    ...     ticker = await adapter.fetch_ticker("BTC/USDT")
    ...     order = await adapter.create_order("BTC/USDT", "market", "buy", Decimal("0.01"))
"""

from typing import Any, Dict, List, Mapping, Optional

import structlog

from quadency_connector.adapters.quadency.errors import QuadencyErrorMapper
from quadency_connector.adapters.quadency.normalizer import QuadencyNormalizer
from quadency_connector.adapters.quadency.rest import QuadencyRestClient
from quadency_connector.adapters.quadency.signer import QuadencySigner
from quadency_connector.config.models import ExchangeConfig
from quadency_connector.exceptions import (
    ArgumentsRequired,
    AuthenticationError,
    BadRequest,
    BadSymbol,
    ExchangeError,
)
from quadency_connector.interfaces.clock import Clock, SystemClock
from quadency_connector.interfaces.exchange_adapter import ExchangeAdapter
from quadency_connector.models.balance import Balances
from quadency_connector.models.market import Market
from quadency_connector.models.order import Order, OrderSide
from quadency_connector.models.ticker import Ticker
from quadency_connector.models.trade import Trade
from quadency_connector.parsing import parse_timeframe

logger = structlog.get_logger(__name__)


class QuadencyAdapter(ExchangeAdapter):
    """
    Quadency exchange adapter implementing ExchangeAdapter interface.

    Every public method issues at most one REST call of its own, plus a
    markets load when markets are not cached yet. Nothing is retried.

    Attributes:
        exchange_name: Always returns "quadency".
        markets: Cached markets keyed by symbol (None until loaded).

    Example:
        >>> adapter = QuadencyAdapter(ExchangeConfig(), clock=SystemClock())
        >>> markets = await adapter.load_markets()
        >>> balance = await adapter.fetch_balance()
        >>> print(balance["USDT"].free)
    """

    def __init__(
        self,
        exchange_config: Optional[ExchangeConfig] = None,
        clock: Optional[Clock] = None,
        rest_client: Optional[QuadencyRestClient] = None,
    ):
        """
        Initialize Quadency adapter.

        Args:
            exchange_config: Venue configuration; defaults to ExchangeConfig().
            clock: Nonce and time source; defaults to SystemClock().
            rest_client: Transport; built from the connection settings if omitted.
        """
        self._config = exchange_config or ExchangeConfig()
        self._clock = clock or SystemClock()

        credentials = self._config.credentials
        self._signer = QuadencySigner(
            urls={
                "public": self._config.get_rest_url("public"),
                "private": self._config.get_rest_url("private"),
            },
            api_key=credentials.api_key.get_secret_value() if credentials.api_key else None,
            secret=credentials.secret.get_secret_value() if credentials.secret else None,
        )
        self._rest = rest_client or QuadencyRestClient(
            rate_limit_per_second=self._config.connection.rate_limit_per_second,
            timeout_seconds=self._config.connection.timeout_seconds,
        )
        self._errors = QuadencyErrorMapper(
            self._config.id,
            self._config.errors,
            self._config.error_messages,
        )
        self._normalizer = QuadencyNormalizer(
            clock=self._clock,
            fee_currency_fallback=self._config.fee_currency_fallback,
        )

        self.markets: Optional[Dict[str, Market]] = None
        self.markets_by_id: Dict[str, Market] = {}

        logger.info(
            "adapter_initialized",
            exchange=self.exchange_name,
            sandbox=self._config.sandbox,
            has_credentials=credentials.is_complete,
        )

    # =========================================================================
    # ExchangeAdapter Interface Implementation
    # =========================================================================

    @property
    def exchange_name(self) -> str:
        """Return exchange name."""
        return self._config.id

    def describe(self) -> Dict[str, Any]:
        """Return static venue metadata."""
        return {
            "id": self._config.id,
            "name": self._config.name,
            "countries": [],
            "rateLimit": 1000 // self._config.connection.rate_limit_per_second,
            "has": {
                "spot": True,
                "margin": None,
                "swap": None,
                "future": None,
                "option": None,
                "createOrder": True,
                "fetchBalance": True,
                "fetchMarkets": True,
                "fetchMyTrades": True,
                "fetchOHLCV": True,
                "fetchTicker": True,
            },
            "timeframes": dict(self._config.timeframes),
            "urls": {
                "api": {
                    "public": self._config.get_rest_url("public"),
                    "private": self._config.get_rest_url("private"),
                },
                "www": self._config.urls.www,
            },
        }

    async def _request(
        self,
        path: str,
        api: str = "public",
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Sign, send and check a request.

        Returns:
            Any: Parsed JSON body.

        Raises:
            AuthenticationError: If a private call is made without credentials.
            ExchangeError: Or a subclass, if the venue reports an error.
            ConnectionError: If the transport fails or the body is not JSON.
        """
        nonce = None
        if api == "private":
            if not self._config.credentials.is_complete:
                raise AuthenticationError(
                    f"{self.exchange_name} requires api_key and secret for {method} {path}"
                )
            nonce = self._clock.nonce()

        request = self._signer.sign(path, api=api, method=method, params=params, nonce=nonce)
        response = await self._rest.send(request)

        self._errors.handle_errors(response.status, response.body, response.data)

        if response.data is None:
            logger.error(
                "rest_invalid_response",
                exchange=self.exchange_name,
                path=path,
                status=response.status,
                meaning=self._config.error_messages.get(str(response.status)),
            )
            raise ConnectionError(
                f"{self.exchange_name} {method} {path} returned non-JSON response "
                f"with status {response.status}: {response.body[:200]}"
            )
        return response.data

    async def fetch_markets(self) -> List[Market]:
        """
        Fetch every market quoted in a recognized quote currency.

        Returns:
            List[Market]: Markets in venue order.
        """
        response = await self._request("markets")
        return self._normalizer.normalize_markets(response, self._config.quote_currencies)

    async def load_markets(self, reload: bool = False) -> Dict[str, Market]:
        """Fetch markets once and cache them by symbol and by id."""
        if self.markets is not None and not reload:
            return self.markets

        markets = await self.fetch_markets()
        self.markets = {market.symbol: market for market in markets}
        self.markets_by_id = {market.id: market for market in markets}

        logger.info(
            "markets_loaded",
            exchange=self.exchange_name,
            count=len(self.markets),
        )
        return self.markets

    def market(self, symbol: str) -> Market:
        """Look up a cached market by unified symbol or venue id."""
        if self.markets is None:
            raise ExchangeError(f"{self.exchange_name} markets not loaded")
        if symbol in self.markets:
            return self.markets[symbol]
        if symbol in self.markets_by_id:
            return self.markets_by_id[symbol]
        raise BadSymbol(f"{self.exchange_name} does not have market symbol {symbol}")

    async def fetch_ticker(self, symbol: str) -> Ticker:
        """Fetch the ticker for a symbol; markets are not loaded."""
        response = await self._request("ticker", params={"pair": symbol})
        return self._normalizer.normalize_ticker(response, symbol)

    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1h",
        since: Optional[int] = None,
        limit: int = 1000,
    ) -> Any:
        """
        Fetch candles covering limit periods starting at since.

        The query window ends at since + limit * duration * 1.5 so partially
        filled periods at the end are included.

        Returns:
            Any: Candle payload as returned by the venue.

        Raises:
            BadRequest: If the timeframe is not supported.
        """
        if timeframe not in self._config.timeframes:
            raise BadRequest(
                f"{self.exchange_name} does not support timeframe {timeframe}, "
                f"expected one of {list(self._config.timeframes)}"
            )
        await self.load_markets()
        market = self.market(symbol)

        duration = parse_timeframe(timeframe)
        if since is None:
            since = self._clock.milliseconds() - limit * duration * 1000
        end_date = since + limit * duration * 1500

        params = {
            "pair": market.symbol,
            "interval": timeframe,
            "startDate": str(since),
            "endDate": str(end_date),
        }
        return await self._request("ohlcv", params=params)

    async def fetch_my_trades(
        self,
        symbol: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Trade]:
        """
        Fetch the account's trades for a symbol.

        Raises:
            ArgumentsRequired: If symbol is None (checked before any request).
        """
        if symbol is None:
            raise ArgumentsRequired(f"{self.exchange_name} fetch_my_trades requires a symbol argument")
        await self.load_markets()
        market = self.market(symbol)

        params: Dict[str, Any] = {"pairs": market.symbol}
        if since is not None:
            params["since"] = str(since)
        if limit is not None:
            params["limit"] = str(limit)

        response = await self._request("trades", api="private", params=params)
        return self._normalizer.normalize_trades(response, market, since, limit)

    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: Any,
        price: Optional[Any] = None,
    ) -> Order:
        """
        Place an order.

        The venue decides execution from side and amount; type is not sent.
        Price is included only when truthy.

        Raises:
            BadRequest: If side is not "buy" or "sell".
        """
        if side.lower() not in {s.value for s in OrderSide}:
            raise BadRequest(f"{self.exchange_name} invalid order side {side}")
        await self.load_markets()
        market = self.market(symbol)

        params: Dict[str, Any] = {
            "pair": market.symbol,
            "side": side,
            "amount": str(amount),
        }
        if price:
            params["price"] = str(price)

        logger.info(
            "order_submitting",
            exchange=self.exchange_name,
            symbol=market.symbol,
            type=type,
            side=side,
            amount=str(amount),
            price=str(price) if price else None,
        )

        response = await self._request("order", api="private", method="POST", params=params)
        return self._normalizer.normalize_order(response, market.symbol)

    async def fetch_balance(self) -> Balances:
        """Fetch account balances."""
        await self.load_markets()
        response = await self._request("balances", api="private")
        return self._normalizer.normalize_balances(response)

    async def close(self) -> None:
        """Close the REST session."""
        await self._rest.close()

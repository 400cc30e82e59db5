"""
Quadency data normalizer.

Converts Quadency QUADX JSON payloads to the canonical Pydantic models.
Quadency omits and renames fields depending on the endpoint and the order
lifecycle stage, so every field is read through the safe_* helpers and
missing values become None.

Quadency Markets Format:
    {
        "markets": {
            "quoteAssets": {
                "USDT": {
                    "baseAssets": {
                        "BTC": {
                            "liquidityPair": "BTC/USDT",
                            "precision": {...},
                            "takerFee": "0.1",       // percent
                            "makerFee": "0.1",       // percent
                            "limits": {
                                "amount": {"min": "0.001", "max": "100"},
                                "price": {"min": "0.01", "max": "1000000"},
                                "cost": {"min": "10", "max": null}
                            },
                            "buyEnabled": true,
                            "sellEnabled": true,
                            ...
                        }
                    }
                }
            }
        }
    }

Quadency Order Format (POST /order response):
    {
        "orderId": "abc123",
        "pair": "BTC/USDC",
        "side": "sell",
        "type": "MARKET",
        "price": "50000",
        "purchaseAmount": "0.5",     // quote currency for sells
        "orderAmount": "0.6",
        "status": "OK",
        "timestamp": 1575523543584
    }

Quadency Trade Format (GET /trades item):
    {
        "e_tradeId": "t1",
        "e_orderId": "o1",
        "e_timestamp": 1575523543584,
        "pair": "BTC/USDT",
        "side": "buy",
        "price": "50000",
        "amount": "0.1",
        "fee": {"cost": "0.5", "currency": "USDT", "rate": "0.001"}
    }
"""

from decimal import Decimal, localcontext
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog

from quadency_connector.interfaces.clock import Clock
from quadency_connector.models.balance import BalanceEntry, Balances
from quadency_connector.models.market import Market, MarketLimits, MinMax
from quadency_connector.models.order import Order, OrderSide, OrderStatus
from quadency_connector.models.ticker import Ticker
from quadency_connector.models.trade import Trade, TradeFee
from quadency_connector.parsing import (
    iso8601,
    safe_decimal,
    safe_integer,
    safe_string,
    safe_value,
)

logger = structlog.get_logger(__name__)

EXCHANGE = "quadency"

# Upstream status (lowercased) -> canonical status
STATUS_MAPPING = {
    "ok": OrderStatus.CLOSED,
    "failed": OrderStatus.REJECTED,
    "cancelled": OrderStatus.CANCELED,
    "canceled": OrderStatus.CANCELED,
}

# Passed through to Market.info
MARKET_INFO_FLAGS = ("buyEnabled", "sellEnabled", "liquiditySource", "filters")
MARKET_INFO_NUMBERS = (
    "quadDiscount",
    "slippageTolerance",
    "priceDeviationTolerance",
    "markupBuy",
    "markupSell",
)

HUNDRED = Decimal("100")
ZERO = Decimal("0")

# Holds the exact product of two default-context operands
DERIVATION_PRECISION = 56


class QuadencyNormalizer:
    """
    Normalizes Quadency payloads to canonical models.

    Stateless apart from the injected clock, which is only read to stamp
    orders the venue returned without a timestamp.

    Example:
        >>> normalizer = QuadencyNormalizer(clock=SystemClock())
        >>> order = normalizer.normalize_order(raw_order, "BTC/USDC")
        >>> print(order.status, order.filled, order.remaining)
    """

    def __init__(self, clock: Clock, fee_currency_fallback: str = "QUAD"):
        """
        Initialize normalizer.

        Args:
            clock: Nonce source used as timestamp fallback for orders.
            fee_currency_fallback: Fee currency when no market is known.
        """
        self.clock = clock
        self.fee_currency_fallback = fee_currency_fallback

    # -------------------------------------------------------------------------
    # Markets
    # -------------------------------------------------------------------------

    @staticmethod
    def _min_max(limits: Optional[Mapping[str, Any]], key: str) -> MinMax:
        bounds = safe_value(limits, key)
        return MinMax(
            min=safe_decimal(bounds, "min"),
            max=safe_decimal(bounds, "max"),
        )

    def normalize_market(
        self,
        base_symbol: str,
        quote_symbol: str,
        entry: Mapping[str, Any],
    ) -> Market:
        """
        Normalize one base-asset entry of the markets payload.

        Args:
            base_symbol: Key of the entry under baseAssets (e.g., "BTC").
            quote_symbol: Key of the enclosing quote asset (e.g., "USDT").
            entry: Per-asset metadata.

        Returns:
            Market: Normalized market.

        Raises:
            ValueError: If the liquidity pair is not BASE/QUOTE.
        """
        symbol = safe_string(entry, "liquidityPair", f"{base_symbol}/{quote_symbol}")
        base, separator, quote = symbol.partition("/")
        if not separator or not base or not quote:
            raise ValueError(f"Invalid liquidity pair in Quadency market: {symbol!r}")

        limits = safe_value(entry, "limits")
        info: Dict[str, Any] = {key: entry.get(key) for key in MARKET_INFO_FLAGS}
        for key in MARKET_INFO_NUMBERS:
            info[key] = safe_decimal(entry, key)

        buy_enabled = safe_value(entry, "buyEnabled")
        sell_enabled = safe_value(entry, "sellEnabled")

        return Market(
            id=symbol.replace("/", ""),
            symbol=symbol,
            base=base,
            quote=quote,
            base_id=base,
            quote_id=quote,
            precision=safe_value(entry, "precision"),
            taker=safe_decimal(entry, "takerFee", ZERO) / HUNDRED,
            maker=safe_decimal(entry, "makerFee", ZERO) / HUNDRED,
            limits=MarketLimits(
                amount=self._min_max(limits, "amount"),
                price=self._min_max(limits, "price"),
                cost=self._min_max(limits, "cost"),
            ),
            active=bool(buy_enabled) or bool(sell_enabled),
            percentage=True,
            info=info,
        )

    def normalize_markets(
        self,
        raw_response: Mapping[str, Any],
        quote_currencies: Sequence[str],
    ) -> List[Market]:
        """
        Flatten the nested markets payload.

        Quote assets are visited in payload order; those not listed in
        quote_currencies are skipped, as are entries whose liquidity pair is
        not BASE/QUOTE.

        Args:
            raw_response: Raw GET /markets response.
            quote_currencies: Recognized quote currencies.

        Returns:
            List[Market]: One market per (quote, base) pair.

        Raises:
            ValueError: If the payload has no markets.quoteAssets mapping.
        """
        quote_assets = safe_value(safe_value(raw_response, "markets"), "quoteAssets")
        if not isinstance(quote_assets, Mapping):
            raise ValueError("Missing markets.quoteAssets in Quadency markets response")

        recognized = set(quote_currencies)
        markets: List[Market] = []
        for quote_symbol, quote_entry in quote_assets.items():
            if quote_symbol not in recognized:
                logger.debug(
                    "market_quote_skipped",
                    exchange=EXCHANGE,
                    quote=quote_symbol,
                )
                continue
            base_assets = safe_value(quote_entry, "baseAssets", {})
            for base_symbol, entry in base_assets.items():
                try:
                    markets.append(self.normalize_market(base_symbol, quote_symbol, entry))
                except ValueError as e:
                    logger.warning(
                        "market_entry_skipped",
                        exchange=EXCHANGE,
                        base=base_symbol,
                        quote=quote_symbol,
                        error=str(e),
                    )

        logger.debug("normalized_markets", exchange=EXCHANGE, count=len(markets))
        return markets

    # -------------------------------------------------------------------------
    # Ticker
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_ticker(
        raw_ticker: Mapping[str, Any],
        symbol: Optional[str] = None,
    ) -> Ticker:
        """
        Normalize a GET /ticker response.

        Never raises on missing or unparseable fields; they become None.

        Args:
            raw_ticker: Raw ticker payload.
            symbol: Unified symbol the ticker was requested for.

        Returns:
            Ticker: Normalized ticker.
        """
        return Ticker(
            symbol=symbol,
            price=safe_decimal(raw_ticker, "price"),
            last=safe_decimal(raw_ticker, "last"),
            close=safe_decimal(raw_ticker, "close"),
            high=safe_decimal(raw_ticker, "high"),
            low=safe_decimal(raw_ticker, "low"),
            price_24h=safe_decimal(raw_ticker, "price24h"),
            volume=safe_decimal(raw_ticker, "volume"),
            volume_24h=safe_decimal(raw_ticker, "volume24h"),
            info=dict(raw_ticker or {}),
        )

    # -------------------------------------------------------------------------
    # Trades
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_trade_fee(raw_trade: Mapping[str, Any], quote: str) -> TradeFee:
        """Fee from the trade's fee object, or a zero fee in the quote currency."""
        if "fee" in raw_trade:
            fee = raw_trade["fee"]
            return TradeFee(
                cost=safe_decimal(fee, "cost", ZERO),
                currency=safe_string(fee, "currency", quote),
                rate=safe_decimal(fee, "rate", ZERO),
            )
        return TradeFee(cost=ZERO, currency=quote, rate=ZERO)

    def normalize_trade(
        self,
        raw_trade: Mapping[str, Any],
        market: Optional[Market] = None,
    ) -> Trade:
        """
        Normalize one item of a GET /trades response.

        Args:
            raw_trade: Raw trade record.
            market: Market of the trade, used for the default fee currency.

        Returns:
            Trade: Normalized trade.
        """
        timestamp = safe_integer(raw_trade, "e_timestamp")
        price = safe_decimal(raw_trade, "price")
        amount = safe_decimal(raw_trade, "amount")
        quote = market.quote if market is not None else self.fee_currency_fallback

        cost = None
        if price is not None and amount is not None:
            cost = price * amount

        return Trade(
            id=safe_string(raw_trade, "e_tradeId"),
            order=safe_string(raw_trade, "e_orderId"),
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            symbol=safe_string(raw_trade, "pair"),
            type=None,
            taker_or_maker=None,
            side=safe_string(raw_trade, "side"),
            price=price,
            amount=amount,
            cost=cost,
            fee=self.normalize_trade_fee(raw_trade, quote),
            info=dict(raw_trade),
        )

    def normalize_trades(
        self,
        raw_trades: Sequence[Mapping[str, Any]],
        market: Optional[Market] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Trade]:
        """
        Normalize a list of trades, sorted by timestamp.

        Args:
            raw_trades: Raw trade records.
            market: Market of the trades.
            since: Drop trades earlier than this timestamp (ms).
            limit: Keep at most this many trades, oldest first.

        Returns:
            List[Trade]: Normalized trades.
        """
        trades = [self.normalize_trade(raw, market) for raw in raw_trades or []]
        # Python's sort is stable; trades without timestamp keep their order at the front
        trades.sort(key=lambda t: t.timestamp if t.timestamp is not None else -1)
        if since is not None:
            trades = [t for t in trades if t.timestamp is not None and t.timestamp >= since]
        if limit is not None:
            trades = trades[:limit]
        return trades

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_order_status(status: Optional[str]) -> Optional[OrderStatus]:
        """
        Map a venue status string to OrderStatus, case-insensitively.

        Example:
            >>> QuadencyNormalizer.normalize_order_status("OK")
            <OrderStatus.CLOSED: 'closed'>
            >>> QuadencyNormalizer.normalize_order_status("PENDING") is None
            True
        """
        if status is None:
            return None
        return STATUS_MAPPING.get(status.lower())

    def normalize_order(
        self,
        raw_order: Mapping[str, Any],
        symbol: Optional[str] = None,
    ) -> Order:
        """
        Normalize an order payload, deriving the quantities it omits.

        The same quantity arrives under different names depending on the
        lifecycle stage, so the following precedence applies:

        - filled: purchaseAmount; for sells it is quote-denominated and is
          divided by price (left unset when price is unknown or zero).
        - amount: orderAmount for sells; otherwise filled.
        - timestamp: venue timestamp, else clock.nonce() * 1000.
        - cost: price * filled; remaining: max(amount - filled, 0);
          average: cost / filled when filled is non-zero.

        Args:
            raw_order: Raw order payload.
            symbol: Unified symbol used when the payload has no pair.

        Returns:
            Order: Normalized order.
        """
        status = self.normalize_order_status(safe_string(raw_order, "status"))
        side = safe_string(raw_order, "side")
        is_sell = side is not None and side.lower() == OrderSide.SELL.value
        price = safe_decimal(raw_order, "price")

        filled: Optional[Decimal] = None
        if "purchaseAmount" in raw_order:
            filled = safe_decimal(raw_order, "purchaseAmount")
            if filled is not None and is_sell:
                filled = filled / price if price else None

        # Buy orders do not report the requested size; filled stands in for it
        amount: Optional[Decimal] = filled
        if "orderAmount" in raw_order and is_sell:
            amount = safe_decimal(raw_order, "orderAmount")

        timestamp = safe_integer(raw_order, "timestamp")
        if timestamp is None:
            timestamp = self.clock.nonce() * 1000

        remaining: Optional[Decimal] = None
        cost: Optional[Decimal] = None
        average: Optional[Decimal] = None
        if filled is not None:
            if amount is not None:
                remaining = max(amount - filled, ZERO)
            if price is not None:
                with localcontext() as ctx:
                    ctx.prec = DERIVATION_PRECISION
                    cost = price * filled
                    if filled:
                        average = cost / filled

        order = Order(
            id=safe_string(raw_order, "orderId"),
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            last_trade_timestamp=None,
            symbol=safe_string(raw_order, "pair", symbol),
            type=safe_string(raw_order, "type", "MARKET"),
            side=side,
            price=price,
            amount=amount,
            filled=filled,
            remaining=remaining,
            cost=cost,
            average=average,
            status=status,
            fee=None,
            trades=None,
            info=dict(raw_order),
        )

        logger.debug(
            "normalized_order",
            exchange=EXCHANGE,
            order_id=order.id,
            symbol=order.symbol,
            status=order.status.value if order.status else None,
            filled=str(filled) if filled is not None else None,
        )

        return order

    # -------------------------------------------------------------------------
    # Balances
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_balances(raw_balances: Sequence[Mapping[str, Any]]) -> Balances:
        """
        Normalize a GET /balances response.

        Args:
            raw_balances: List of {"asset", "free", "used", "total"} records.

        Returns:
            Balances: Entries keyed by asset, raw list under info.
        """
        entries: Dict[str, BalanceEntry] = {}
        for balance in raw_balances or []:
            asset = safe_string(balance, "asset")
            if asset is None:
                logger.warning("balance_without_asset", exchange=EXCHANGE, balance=balance)
                continue
            entries[asset] = BalanceEntry(
                used=safe_decimal(balance, "used"),
                free=safe_decimal(balance, "free"),
                total=safe_decimal(balance, "total"),
            )
        return Balances(entries=entries, info=raw_balances)

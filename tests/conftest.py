"""
Shared fixtures for connector tests.

Provides a deterministic clock and a fake transport so adapters can be
exercised without network access.
"""

import json
from typing import Any, List, Optional

import pytest

from quadency_connector.adapters.quadency import (
    HttpResponse,
    QuadencyAdapter,
    QuadencyNormalizer,
    QuadencySigner,
    SignedRequest,
)
from quadency_connector.config.models import CredentialsConfig, ExchangeConfig
from quadency_connector.interfaces.clock import Clock

FIXED_NONCE = 1575523543
FIXED_MILLISECONDS = 1575523543584


class FixedClock(Clock):
    """Clock returning constant values."""

    def __init__(self, nonce: int = FIXED_NONCE, milliseconds: int = FIXED_MILLISECONDS):
        self._nonce = nonce
        self._milliseconds = milliseconds

    def nonce(self) -> int:
        return self._nonce

    def milliseconds(self) -> int:
        return self._milliseconds


class FakeRestClient:
    """Transport double: records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: List[SignedRequest] = []
        self._responses: List[HttpResponse] = []
        self.closed = False

    def queue(self, data: Any, status: int = 200, body: Optional[str] = None) -> None:
        if body is None:
            body = json.dumps(data)
        self._responses.append(HttpResponse(status=status, body=body, data=data))

    def queue_raw(self, body: str, status: int) -> None:
        self._responses.append(HttpResponse(status=status, body=body, data=None))

    async def send(self, request: SignedRequest) -> HttpResponse:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self._responses.pop(0)

    async def close(self) -> None:
        self.closed = True


MARKETS_RESPONSE = {
    "markets": {
        "quoteAssets": {
            "USDC": {
                "baseAssets": {
                    "BTC": {
                        "liquidityPair": "BTC/USDC",
                        "precision": {"amount": 6, "price": 2},
                        "takerFee": "0.2",
                        "makerFee": "0.1",
                        "limits": {
                            "amount": {"min": "0.0001", "max": "100"},
                            "price": {"min": "0.01", "max": "1000000"},
                            "cost": {"min": "10", "max": None},
                        },
                        "buyEnabled": True,
                        "sellEnabled": False,
                        "quadDiscount": "25",
                        "slippageTolerance": "0.5",
                        "priceDeviationTolerance": "1",
                        "liquiditySource": "aggregated",
                        "markupBuy": "0.1",
                        "markupSell": "0.1",
                        "filters": [],
                    },
                },
            },
            "USDT": {
                "baseAssets": {
                    "ETH": {
                        "liquidityPair": "ETH/USDT",
                        "buyEnabled": False,
                        "sellEnabled": False,
                        "limits": {},
                    },
                    "BTC": {
                        "liquidityPair": "BTC/USDT",
                        "takerFee": 0.1,
                        "makerFee": 0.1,
                        "buyEnabled": True,
                        "sellEnabled": True,
                    },
                },
            },
            "EUR": {
                "baseAssets": {
                    "BTC": {"liquidityPair": "BTC/EUR", "buyEnabled": True},
                },
            },
        },
    },
}


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def normalizer(clock: FixedClock) -> QuadencyNormalizer:
    return QuadencyNormalizer(clock=clock)


@pytest.fixture
def signer() -> QuadencySigner:
    return QuadencySigner(
        urls={
            "public": "https://quadency.com/api/v1/public/quadx",
            "private": "https://quadency.com/api/v1/private/quadx",
        },
        api_key="test-key",
        secret="test-secret",
    )


@pytest.fixture
def exchange_config() -> ExchangeConfig:
    return ExchangeConfig(
        credentials=CredentialsConfig(api_key="test-key", secret="test-secret"),
    )


@pytest.fixture
def rest_client() -> FakeRestClient:
    return FakeRestClient()


@pytest.fixture
def adapter(exchange_config, clock, rest_client) -> QuadencyAdapter:
    return QuadencyAdapter(exchange_config, clock=clock, rest_client=rest_client)

"""Tests for QuadencySigner."""

import hashlib
import hmac

import pytest

from quadency_connector.adapters.quadency.signer import (
    QuadencySigner,
    api_path_of,
    implode_params,
)

NONCE = 1575523543


class TestPublicRequests:
    """Unsigned requests."""

    def test_public_request_has_no_headers(self, signer):
        request = signer.sign("markets")

        assert request.url == "https://quadency.com/api/v1/public/quadx/markets"
        assert request.method == "GET"
        assert request.headers is None
        assert request.body is None

    def test_public_query_is_url_encoded(self, signer):
        request = signer.sign("ticker", params={"pair": "BTC/USDT"})

        assert request.url == "https://quadency.com/api/v1/public/quadx/ticker?pair=BTC%2FUSDT"

    def test_path_params_are_interpolated_not_queried(self, signer):
        request = signer.sign("orders/{id}", params={"id": "abc", "limit": 5})

        assert request.url == "https://quadency.com/api/v1/public/quadx/orders/abc?limit=5"

    def test_implode_params(self):
        assert implode_params("a/{x}/b/{y}", {"x": 1, "y": "z"}) == "a/1/b/z"


class TestPrivateRequests:
    """Signed requests."""

    def test_headers(self, signer):
        request = signer.sign("balances", api="private", nonce=NONCE)

        assert request.headers["ACCESS-KEY"] == "test-key"
        assert request.headers["ACCESS-TIMESTAMP"] == "1575523543000"
        assert request.headers["QUADX"] == "true"
        assert len(request.headers["ACCESS-SIGN"]) == 64

    def test_signature_matches_hmac_of_timestamp_method_path(self, signer):
        request = signer.sign(
            "trades", api="private", params={"pairs": "BTC/USDT", "limit": "10"}, nonce=NONCE
        )

        api_path = "/api/v1/private/quadx/trades?pairs=BTC%2FUSDT&limit=10"
        expected = hmac.new(
            b"test-secret",
            ("1575523543000" + "GET" + api_path).encode(),
            hashlib.sha256,
        ).hexdigest()
        assert request.url.endswith(api_path)
        assert request.headers["ACCESS-SIGN"] == expected

    def test_post_params_are_signed_in_query(self, signer):
        request = signer.sign(
            "order",
            api="private",
            method="POST",
            params={"pair": "BTC/USDT", "side": "buy", "amount": "0.1"},
            nonce=NONCE,
        )

        api_path = "/api/v1/private/quadx/order?pair=BTC%2FUSDT&side=buy&amount=0.1"
        assert request.url == "https://quadency.com" + api_path
        assert request.body is None
        assert "Content-Type" not in request.headers
        expected = hmac.new(
            b"test-secret",
            ("1575523543000POST" + api_path).encode(),
            hashlib.sha256,
        ).hexdigest()
        assert request.headers["ACCESS-SIGN"] == expected

    def test_changing_order_amount_changes_signature(self, signer):
        def sign_order(amount):
            return signer.sign(
                "order",
                api="private",
                method="POST",
                params={"pair": "BTC/USDT", "side": "buy", "amount": amount},
                nonce=NONCE,
            ).headers["ACCESS-SIGN"]

        assert sign_order("0.1") != sign_order("999")

    def test_signature_is_deterministic(self, signer):
        first = signer.sign("balances", api="private", params={"a": "1"}, nonce=NONCE)
        second = signer.sign("balances", api="private", params={"a": "1"}, nonce=NONCE)

        assert first.headers["ACCESS-SIGN"] == second.headers["ACCESS-SIGN"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"path": "trades"},
            {"method": "POST"},
            {"params": {"a": "2"}},
            {"nonce": NONCE + 1},
        ],
    )
    def test_changing_any_input_changes_signature(self, signer, kwargs):
        base = {"path": "balances", "method": "GET", "params": {"a": "1"}, "nonce": NONCE}
        reference = signer.sign(api="private", **base).headers["ACCESS-SIGN"]

        changed = signer.sign(api="private", **{**base, **kwargs}).headers["ACCESS-SIGN"]

        assert changed != reference

    def test_changing_secret_changes_signature(self, signer):
        other = QuadencySigner(urls=signer.urls, api_key="test-key", secret="other-secret")

        assert (
            other.sign("balances", api="private", nonce=NONCE).headers["ACCESS-SIGN"]
            != signer.sign("balances", api="private", nonce=NONCE).headers["ACCESS-SIGN"]
        )

    def test_changing_key_changes_key_header(self, signer):
        other = QuadencySigner(urls=signer.urls, api_key="other-key", secret="test-secret")

        assert other.sign("balances", api="private", nonce=NONCE).headers["ACCESS-KEY"] == "other-key"

    def test_private_request_requires_nonce(self, signer):
        with pytest.raises(ValueError):
            signer.sign("balances", api="private")

    def test_private_request_requires_credentials(self):
        signer = QuadencySigner(urls={"private": "https://quadency.com/api/v1/private/quadx"})

        with pytest.raises(ValueError):
            signer.sign("balances", api="private", nonce=NONCE)

    def test_repr_hides_credentials(self, signer):
        assert "test-secret" not in repr(signer)


class TestApiPath:
    """Host marker handling."""

    def test_path_after_host(self):
        assert api_path_of("https://staging.quadency.com/api/v1/x?a=1") == "/api/v1/x?a=1"

    def test_url_without_marker_is_rejected(self):
        with pytest.raises(ValueError):
            api_path_of("http://localhost:8080/api")

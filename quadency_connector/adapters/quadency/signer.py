"""
Quadency request signer.

Builds the URL and headers for a REST call. Public calls are sent
unsigned; private calls carry an HMAC-SHA256 signature.

Signature:
    timestamp = nonce * 1000
    message   = str(timestamp) + METHOD + api_path
    signature = hex(HMAC_SHA256(secret, message))

where api_path is everything in the final URL after the host's ".com",
i.e. the path and query string exactly as sent.

Private Headers:
    ACCESS-KEY:       API key
    ACCESS-SIGN:      hex signature
    ACCESS-TIMESTAMP: str(timestamp)
    QUADX:            "true" (selects the QUADX API dialect)

Example:
    >>> signer = QuadencySigner(
    ...     urls={"public": "https://quadency.com/api/v1/public/quadx",
    ...           "private": "https://quadency.com/api/v1/private/quadx"},
    ...     api_key="key",
    ...     secret="secret",
    ... )
    >>> request = signer.sign("balances", api="private", method="GET", nonce=1575523543)
    >>> request.headers["ACCESS-TIMESTAMP"]
    '1575523543000'
"""

import hashlib
import hmac
import re
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field

HOST_MARKER = ".com"
DIALECT_HEADER = "QUADX"

_PATH_PARAM = re.compile(r"\{([^}]+)\}")


class SignedRequest(BaseModel):
    """
    A request ready to hand to the transport.

    Attributes:
        url: Fully qualified URL including query string.
        method: HTTP method.
        body: Request body; parameters travel in the query string, so None.
        headers: Request headers, None for public calls.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    url: str = Field(..., description="Fully qualified URL", min_length=1)
    method: str = Field(..., description="HTTP method")
    body: Optional[str] = Field(default=None, description="Serialized body")
    headers: Optional[Dict[str, str]] = Field(default=None, description="Headers")


def extract_params(path: str) -> List[str]:
    """Return the names of {placeholders} in a path template."""
    return _PATH_PARAM.findall(path)


def implode_params(path: str, params: Mapping[str, Any]) -> str:
    """Substitute {placeholders} in a path template with values from params."""
    return _PATH_PARAM.sub(lambda m: str(params[m.group(1)]), path)


def hmac_sha256_hex(message: str, secret: str) -> str:
    """Hex-encoded HMAC-SHA256 of message keyed with secret."""
    return hmac.new(
        secret.encode(),
        message.encode(),
        hashlib.sha256,
    ).hexdigest()


def api_path_of(url: str) -> str:
    """
    Return the portion of url after the host marker.

    Raises:
        ValueError: If the URL does not contain the host marker.
    """
    _, marker, api_path = url.partition(HOST_MARKER)
    if not marker:
        raise ValueError(f"URL {url!r} has no {HOST_MARKER!r} host marker")
    return api_path


class QuadencySigner:
    """
    Stateless request builder for the Quadency REST API.

    The signer never reads the clock; callers pass the nonce.

    Attributes:
        urls: Base URL per API section ("public", "private").
        api_key: API key for private calls.
        secret: API secret for private calls.
    """

    def __init__(
        self,
        urls: Mapping[str, str],
        api_key: Optional[str] = None,
        secret: Optional[str] = None,
    ):
        self.urls = dict(urls)
        self.api_key = api_key
        self.secret = secret

    def sign(
        self,
        path: str,
        api: str = "public",
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        nonce: Optional[int] = None,
    ) -> SignedRequest:
        """
        Build a request for an endpoint.

        Args:
            path: Endpoint path template (e.g., "ticker").
            api: "public" or "private".
            method: HTTP method.
            params: Path parameters; the rest form the query string for every method.
            nonce: Nonce for private calls (seconds).

        Returns:
            SignedRequest: URL, method, body and headers.

        Raises:
            ValueError: If a private call has no nonce or credentials, or the
                base URL lacks the host marker.
        """
        params = dict(params or {})
        url = self.urls[api] + "/" + implode_params(path, params)
        path_params = set(extract_params(path))
        query = {k: v for k, v in params.items() if k not in path_params}

        headers: Optional[Dict[str, str]] = None

        if query:
            url += "?" + urlencode(query)

        if api == "private":
            if nonce is None:
                raise ValueError("Private requests require a nonce")
            if not self.api_key or not self.secret:
                raise ValueError("Private requests require api_key and secret")
            str_ts = str(nonce * 1000)
            message = str_ts + method + api_path_of(url)
            headers = {
                "ACCESS-KEY": self.api_key,
                "ACCESS-SIGN": hmac_sha256_hex(message, self.secret),
                "ACCESS-TIMESTAMP": str_ts,
                DIALECT_HEADER: "true",
            }

        return SignedRequest(url=url, method=method, headers=headers)

    def __repr__(self) -> str:
        """Return string representation (credentials omitted)."""
        return f"QuadencySigner(urls={self.urls})"

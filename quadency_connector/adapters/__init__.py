"""
Venue adapters.

Every adapter implements the ExchangeAdapter interface and is registered
here by venue name, so callers can create one without importing it.

Supported Exchanges:
    - Quadency (spot, QUADX API)

Example:
    >>> from quadency_connector.adapters import create_adapter
    >>> adapter = create_adapter("quadency")
"""

from typing import Dict, List, Optional, Type

from quadency_connector.adapters.quadency import QuadencyAdapter
from quadency_connector.config.models import ExchangeConfig
from quadency_connector.interfaces.clock import Clock
from quadency_connector.interfaces.exchange_adapter import ExchangeAdapter

ADAPTERS: Dict[str, Type[ExchangeAdapter]] = {
    "quadency": QuadencyAdapter,
}


def list_supported() -> List[str]:
    """Return the names of registered venues."""
    return sorted(ADAPTERS)


def create_adapter(
    name: str,
    exchange_config: Optional[ExchangeConfig] = None,
    clock: Optional[Clock] = None,
) -> ExchangeAdapter:
    """
    Create an adapter for a registered venue.

    Args:
        name: Venue name (e.g., "quadency").
        exchange_config: Venue configuration; adapter defaults if omitted.
        clock: Nonce and time source; SystemClock if omitted.

    Returns:
        ExchangeAdapter: A new adapter instance.

    Raises:
        ValueError: If the venue is not registered.
    """
    try:
        adapter_class = ADAPTERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported exchange '{name}', expected one of {list_supported()}")
    return adapter_class(exchange_config, clock=clock)


__all__ = [
    "ADAPTERS",
    "QuadencyAdapter",
    "create_adapter",
    "list_supported",
]

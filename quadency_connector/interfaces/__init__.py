"""
Abstract interfaces for venue adapters.

The key interface is ExchangeAdapter, the capability contract every venue
implementation fulfils. Clock is the injected nonce/time source.

Example:
    >>> from quadency_connector.interfaces import ExchangeAdapter, SystemClock
    >>> clock = SystemClock()

Modules:
    exchange_adapter: ExchangeAdapter ABC for venue integrations
    clock: Clock ABC and the SystemClock implementation
"""

from quadency_connector.interfaces.clock import Clock, SystemClock
from quadency_connector.interfaces.exchange_adapter import ExchangeAdapter

__all__: list[str] = [
    "Clock",
    "ExchangeAdapter",
    "SystemClock",
]

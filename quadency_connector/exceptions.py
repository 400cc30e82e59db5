"""
Typed exception hierarchy shared by venue adapters.

Hierarchy:
    ExchangeError
    ├── BadRequest
    │   ├── BadSymbol
    │   └── ArgumentsRequired
    └── AuthenticationError
        └── PermissionDenied

Error tables in configuration reference exceptions by class name; use
get_exception_class() to resolve them.
"""

from typing import Dict, Type


class ExchangeError(Exception):
    """Base class for errors reported by, or about, an exchange."""

    pass


class BadRequest(ExchangeError):
    """The exchange rejected the request parameters."""

    pass


class BadSymbol(BadRequest):
    """The requested symbol is not a known market."""

    pass


class ArgumentsRequired(BadRequest):
    """A mandatory argument was not supplied by the caller."""

    pass


class AuthenticationError(ExchangeError):
    """Invalid or missing credentials, or a rejected signature."""

    pass


class PermissionDenied(AuthenticationError):
    """The credentials are valid but the call is not allowed (incl. rate limits)."""

    pass


EXCEPTION_REGISTRY: Dict[str, Type[ExchangeError]] = {
    cls.__name__: cls
    for cls in (
        ExchangeError,
        BadRequest,
        BadSymbol,
        ArgumentsRequired,
        AuthenticationError,
        PermissionDenied,
    )
}


def get_exception_class(name: str) -> Type[ExchangeError]:
    """
    Resolve an exception class by name.

    Args:
        name: Class name as used in configuration (e.g., "BadRequest").

    Returns:
        Type[ExchangeError]: The matching exception class.

    Raises:
        ValueError: If the name is not a known exchange exception.
    """
    try:
        return EXCEPTION_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown exception class '{name}', expected one of "
            f"{sorted(EXCEPTION_REGISTRY)}"
        )

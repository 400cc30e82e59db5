"""
Quadency error mapper.

Translates an HTTP status and response body into a typed exception.

Quadency Error Format:
    {"error": {"timestamp": "05.12.2019T05:25:43.584+0000",
               "status": "BAD_REQUEST",
               "message": "Insufficient ETH balance. Required: 1, actual: 0.",
               "code": 4001}}
    {"error": {"timestamp": "05.12.2019T04:03:25.419+0000",
               "status": "FORBIDDEN",
               "message": "Access denied",
               "code": 4300}}

Resolution order for status >= 400:
    1. message contains a key of the broad table
    2. code equals a key of the exact table
    3. message equals a key of the exact table
    4. HTTP status default (400, 401, 403, 429)
    5. ExchangeError
"""

from typing import Any, Dict, Mapping, NoReturn, Optional, Type

import structlog

from quadency_connector.config.models import ErrorTablesConfig
from quadency_connector.exceptions import ExchangeError, get_exception_class
from quadency_connector.parsing import safe_string_2, safe_value

logger = structlog.get_logger(__name__)


class QuadencyErrorMapper:
    """
    Raises typed exceptions for failed Quadency responses.

    Attributes:
        exchange_id: Venue identifier embedded in every error message.
        exact: Exact-match table (code or message -> exception class).
        broad: Substring table (message fragment -> exception class).
        http: HTTP status table (status code -> exception class).

    Example:
        >>> mapper = QuadencyErrorMapper("quadency", ErrorTablesConfig())
        >>> mapper.handle_errors(200, "{}", {}) is None
        True
    """

    def __init__(
        self,
        exchange_id: str,
        tables: Optional[ErrorTablesConfig] = None,
        error_messages: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize error mapper.

        Args:
            exchange_id: Venue identifier.
            tables: Exception tables; defaults to ErrorTablesConfig().
            error_messages: Documented meaning of HTTP status codes, for logs.
        """
        tables = tables or ErrorTablesConfig()
        self.exchange_id = exchange_id
        self.exact = self._resolve(tables.exact)
        self.broad = self._resolve(tables.broad)
        self.http = self._resolve(tables.http)
        self.error_messages = dict(error_messages or {})

    @staticmethod
    def _resolve(table: Mapping[str, str]) -> Dict[str, Type[ExchangeError]]:
        return {key: get_exception_class(name) for key, name in table.items()}

    def _raise(self, error_class: Type[ExchangeError], feedback: str, **context: Any) -> NoReturn:
        logger.warning(
            "exchange_error_raised",
            exchange=self.exchange_id,
            error_class=error_class.__name__,
            **context,
        )
        raise error_class(feedback)

    def handle_errors(
        self,
        status_code: int,
        response_body: str,
        response: Optional[Any],
    ) -> None:
        """
        Raise a typed exception if the response reports an error.

        Args:
            status_code: HTTP status code.
            response_body: Raw response text.
            response: Parsed JSON body, or None if it could not be parsed.

        Raises:
            ExchangeError: Or a subclass, when status_code >= 400.
        """
        if response is None:
            return None
        if status_code < 400:
            return None

        feedback = f"{self.exchange_id} {response_body}"
        error = safe_value(response, "error")
        if error is None:
            error = response
        code = safe_string_2(error, "code", "status")
        message = safe_string_2(error, "message", "debugMessage")
        context = {
            "status_code": status_code,
            "code": code,
            "error_message": message,
            "meaning": self.error_messages.get(str(status_code)),
        }

        if message is not None:
            for fragment, error_class in self.broad.items():
                if fragment in message:
                    self._raise(error_class, feedback, match="broad", **context)
        if code is not None and code in self.exact:
            self._raise(self.exact[code], feedback, match="exact_code", **context)
        if message is not None and message in self.exact:
            self._raise(self.exact[message], feedback, match="exact_message", **context)
        http_class = self.http.get(str(status_code))
        if http_class is not None:
            self._raise(http_class, feedback, match="http_status", **context)
        self._raise(ExchangeError, feedback, match="none", **context)

"""Custom exception hierarchy for tff.

All application exceptions inherit from :class:`TffError`, which carries an
optional ``source`` naming where the failure originated -- a CLI flag such as
``--date-from`` for input errors, or ``feedfactory`` for remote failures.

The hierarchy is organized by where the error is detected:

    TffError  (base -- catch-all for any tff error)
    +-- FilterValidationError           (local filter input, before any request)
    |   +-- DateFormatError             (time expression matches no grammar)
    |   +-- GeoFilterInvalidError       (geo radius without geo center)
    |   +-- ExportFormatRequiresRangeError  (uitkrant export without date range)
    +-- ConfigurationError              (missing token / unreadable config)
    +-- APIError                        (remote returned HTTP status >= 400)
    +-- ProviderUnavailableError        (network-level failure)
    +-- ResponseParseError              (response body is not the expected JSON)
    +-- DictionaryLookupError           (account lacks a dictionary field)

Filter validation errors are never transient; the CLI reports them verbatim
and nothing retries them.
"""

from __future__ import annotations

ACCEPTED_TIME_FORMS = "3d, 2w, 1mo, 1y, or 2026-01-15"


class TffError(Exception):
    """Base exception for all tff errors.

    ``__str__`` prefixes the source when one is set, e.g.
    ``--date-from: invalid time expression "abc" ...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source: str | None = None,
    ) -> None:
        self._message = message
        self._source = source
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source(self) -> str | None:
        return self._source

    def with_source(self, source: str) -> TffError:
        """Return this error re-labelled with *source* (used to name CLI flags)."""
        self._source = source
        return self

    def __str__(self) -> str:
        if self._source:
            return f"{self._source}: {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Local filter validation
# ---------------------------------------------------------------------------

class FilterValidationError(TffError):
    """Raised when filter input is invalid. Detected before any network call."""

    def __init__(
        self,
        message: str = "Invalid filter input",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


class DateFormatError(FilterValidationError):
    """Raised when a time expression is neither relative nor ``YYYY-MM-DD``."""

    def __init__(self, expression: str, source: str | None = None) -> None:
        self._expression = expression
        super().__init__(
            message=f'invalid time expression "{expression}" (use e.g. {ACCEPTED_TIME_FORMS})',
            source=source,
        )

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def accepted_forms(self) -> str:
        return ACCEPTED_TIME_FORMS


class GeoFilterInvalidError(FilterValidationError):
    """Raised when a geo radius is given without a geo center, or the center is malformed."""

    def __init__(
        self,
        message: str = "--geo-distance requires --geo flag",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


class ExportFormatRequiresRangeError(FilterValidationError):
    """Raised when the ``uitkrant`` export format is requested without both date bounds."""

    def __init__(
        self,
        message: str = "format 'uitkrant' requires both --date-from and --date-to",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ConfigurationError(TffError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


# ---------------------------------------------------------------------------
# Remote service errors
# ---------------------------------------------------------------------------

class APIError(TffError):
    """Raised when the API answers with an HTTP error status.

    The message is taken from the response body's ``message`` field, then
    ``error``, then the raw body text.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        source: str | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=f"API error ({status_code}): {message}", source=source)

    @property
    def status_code(self) -> int:
        return self._status_code


class ProviderUnavailableError(TffError):
    """Raised when the API cannot be reached (DNS, connect, timeout)."""

    def __init__(
        self,
        message: str = "FeedFactory API is unavailable",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


class ResponseParseError(TffError):
    """Raised when a response body is not the JSON structure the caller needs."""

    def __init__(
        self,
        message: str = "Could not parse API response",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)


class DictionaryLookupError(TffError):
    """Raised when the account document lacks a requested dictionary field."""

    def __init__(
        self,
        message: str = "Dictionary field not found on account",
        source: str | None = None,
    ) -> None:
        super().__init__(message=message, source=source)

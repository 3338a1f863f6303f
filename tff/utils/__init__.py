"""Utility modules for tff.

- **errors** -- Domain exception hierarchy rooted at TffError; local filter
  validation failures are separated from remote/API failures.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production, always on
  stderr.
- **time_expressions** -- Relative (``3d``, ``1mo``) and absolute
  (``2026-01-15``) time expression parsing.
"""

from tff.utils.errors import (
    APIError,
    ConfigurationError,
    DateFormatError,
    DictionaryLookupError,
    ExportFormatRequiresRangeError,
    FilterValidationError,
    GeoFilterInvalidError,
    ProviderUnavailableError,
    ResponseParseError,
    TffError,
)
from tff.utils.logging import configure_logging, get_logger
from tff.utils.time_expressions import (
    parse_relative_date,
    parse_relative_iso,
    parse_relative_time,
)

__all__ = [
    "APIError",
    "ConfigurationError",
    "DateFormatError",
    "DictionaryLookupError",
    "ExportFormatRequiresRangeError",
    "FilterValidationError",
    "GeoFilterInvalidError",
    "ProviderUnavailableError",
    "ResponseParseError",
    "TffError",
    "configure_logging",
    "get_logger",
    "parse_relative_date",
    "parse_relative_iso",
    "parse_relative_time",
]

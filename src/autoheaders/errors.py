"""
Error kinds for heading numbering, and the single channel they are reported through.

Every failure is an `AutoHeaderError` subclass carrying an `ErrorKind`. Low-level code
always raises; the engine decides what to do with the error by calling `report_error()`:

- `debug=True`: the error is re-raised and the document is not labeled.
- `debug=False`: the error is logged as a warning and the caller passes its input
  through unmodified.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Distinguishable failure kinds."""

    configuration_not_set = "configuration_not_set"
    invalid_level_type = "invalid_level_type"
    invalid_level_range = "invalid_level_range"
    mismatched_separator = "mismatched_separator"
    missing_signifier = "missing_signifier"
    malformed_signifier = "malformed_signifier"
    invalid_sidebar_flag = "invalid_sidebar_flag"
    exiting_error = "exiting_error"


class AutoHeaderError(ValueError):
    """Base class for all numbering errors."""

    kind: ErrorKind
    default_message: str = "Heading numbering failed"

    def __init__(self, message: str | None = None) -> None:
        self.message: str = message or self.default_message
        super().__init__(self.message)


class ConfigurationNotSet(AutoHeaderError):
    kind = ErrorKind.configuration_not_set
    default_message = "Config settings not set"


class InvalidLevelType(AutoHeaderError):
    kind = ErrorKind.invalid_level_type
    default_message = "The levels parameter needs to be either a number (1-6) or an object"


class InvalidLevelRange(AutoHeaderError):
    kind = ErrorKind.invalid_level_range
    default_message = "Heading levels need to be a value of 1 through to 6"


class NonNumericBound(InvalidLevelRange):
    default_message = "The levels start or finish need to be numeric"


class InvertedRange(InvalidLevelRange):
    default_message = "Heading start level cannot be greater than finish level"


class OutOfRange(InvalidLevelRange):
    default_message = "Heading levels need to be between 1-6"


class MismatchedSeparator(AutoHeaderError):
    kind = ErrorKind.mismatched_separator
    default_message = "The config separator does not match the signifier separator"


class MissingSignifier(AutoHeaderError):
    kind = ErrorKind.missing_signifier
    default_message = (
        "The markdown file is missing the @autoHeader: or <!-- autoHeader: --> signifier"
    )


class MalformedSignifier(AutoHeaderError):
    kind = ErrorKind.malformed_signifier
    default_message = "The markdown file has the signifier, but it is misconfigured"


class InvalidSidebarFlag(AutoHeaderError):
    kind = ErrorKind.invalid_sidebar_flag
    default_message = "The sidebar parameter needs to be a boolean - true or false"


class ExitingError(AutoHeaderError):
    kind = ErrorKind.exiting_error
    default_message = (
        "An error has been found in your configuration, or setup. "
        "Please review your code and markdown data"
    )


def report_error(error: AutoHeaderError, *, debug: bool) -> None:
    """
    Report a numbering failure. Raises `error` when `debug` is set, otherwise logs it
    as a warning and returns so the caller can fall back to its unmodified input.
    """
    if debug:
        raise error
    logger.warning("Auto headers skipped (%s): %s", error.kind.value, error.message)

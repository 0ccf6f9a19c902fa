"""Error taxonomy and error sinks for the sidebar menu pipeline.

Every failure observed while loading the menu ends up in an
:class:`ErrorSink`. Transport and parse failures are retried by the
controller; :class:`RetryBudgetExhausted` is reported once when the retry
ceiling is reached; :class:`MenuDataAssertionError` flags a successful fetch
that returned unusable data and is reported without a retry.

Example
-------
>>> from wiki_menu.errors import NullErrorSink, TransportError
>>> NullErrorSink().capture(TransportError("boom"))
"""

from __future__ import annotations

import logging
import typing as typ

logger = logging.getLogger(__name__)


class MenuError(RuntimeError):
    """Base class for failures raised while loading the sidebar menu."""


class TransportError(MenuError):
    """Raised when the sidebar source could not be fetched.

    Attributes
    ----------
    payload : object
        Response body or underlying exception reported by the transport.
    """

    def __init__(self, message: str, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


class MenuParseError(MenuError):
    """Raised when fetched markup could not be parsed or rendered."""


class RetryBudgetExhausted(MenuError):
    """Raised once the controller has used every permitted attempt."""


class MenuDataAssertionError(AssertionError):
    """Raised when a successful fetch produced empty or non-text data."""


class MenuConfigError(ValueError):
    """Raised when the menu configuration is invalid or incomplete."""


class PlaceholderNotFoundError(LookupError):
    """Raised when the placeholder menu element is missing from a page."""


@typ.runtime_checkable
class ErrorSink(typ.Protocol):
    """Receiver for errors that should be reported outside the pipeline."""

    def capture(self, error: BaseException) -> None:
        """Record ``error``; implementations must not block the caller."""
        ...


class NullErrorSink:
    """Sink that discards every error."""

    def capture(self, error: BaseException) -> None:  # noqa: ARG002
        return None


class LoggingErrorSink:
    """Sink that reports captured errors through :mod:`logging`."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def capture(self, error: BaseException) -> None:
        self._logger.error(
            "sidebar menu error: %s",
            error,
            exc_info=(type(error), error, error.__traceback__),
        )


def report_error(sink: ErrorSink | None, error: BaseException) -> None:
    """Hand ``error`` to ``sink`` without letting the sink disturb the caller.

    Parameters
    ----------
    sink : ErrorSink or None
        Destination for the error. ``None`` makes the call a no-op.
    error : BaseException
        Error to report.

    Notes
    -----
    Reporting is fire-and-forget: a sink that raises is logged and otherwise
    ignored so a broken reporter never changes the menu outcome.
    """
    if sink is None:
        return
    try:
        sink.capture(error)
    except Exception:
        logger.exception("error sink %r failed to capture %r", sink, error)


__all__ = [
    "ErrorSink",
    "LoggingErrorSink",
    "MenuConfigError",
    "MenuDataAssertionError",
    "MenuError",
    "MenuParseError",
    "NullErrorSink",
    "PlaceholderNotFoundError",
    "RetryBudgetExhausted",
    "TransportError",
    "report_error",
]

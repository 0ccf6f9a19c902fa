"""Unit tests for error sinks."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from wiki_menu.errors import (
    ErrorSink,
    LoggingErrorSink,
    NullErrorSink,
    RetryBudgetExhausted,
    TransportError,
    report_error,
)

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def test_logging_sink_logs_with_traceback(caplog: pytest.LogCaptureFixture) -> None:
    error = TransportError("fetch failed", payload="503")
    with caplog.at_level(logging.ERROR, logger="wiki_menu.errors"):
        LoggingErrorSink().capture(error)

    assert "fetch failed" in caplog.text
    assert caplog.records[0].exc_info is not None
    assert caplog.records[0].exc_info[1] is error


def test_report_error_ignores_missing_sink() -> None:
    report_error(None, RetryBudgetExhausted("Could not load sidebar."))


def test_report_error_logs_failing_sink(
    mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    sink = mocker.Mock()
    sink.capture.side_effect = RuntimeError("offline")

    with caplog.at_level(logging.ERROR, logger="wiki_menu.errors"):
        report_error(sink, TransportError("boom"))

    assert "failed to capture" in caplog.text


def test_sinks_satisfy_protocol() -> None:
    assert isinstance(NullErrorSink(), ErrorSink)
    assert isinstance(LoggingErrorSink(), ErrorSink)
    assert NullErrorSink().capture(TransportError("ignored")) is None

"""Shared fixtures for the wiki_menu test suite.

The fixtures stand in for the collaborators the controller talks to: a
scripted transport that replays canned results, an error sink that records
what it captured, and a small host page with a placeholder menu.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import pytest
from bs4 import BeautifulSoup

from wiki_menu.transport import TransportResult

SIDEBAR_MARKUP = (
    "* navigation\n"
    "** Main_Page|Main page\n"
    "** Special:RecentChanges|Recent changes\n"
    "\n"
    "* Tools\n"
    "** Special:Random|Random page\n"
)

HOST_PAGE = (
    "<html><body>"
    '<nav class="navigation-drawer">'
    '<p class="before">Menu</p>'
    '<div class="menu"><p class="menu-placeholder">Loading</p></div>'
    '<p class="after">Footer</p>'
    "</nav>"
    "</body></html>"
)


class ScriptedTransport:
    """Transport that replays results in order, repeating the last one."""

    def __init__(self, results: cabc.Sequence[TransportResult | Exception]) -> None:
        self._results = list(results)
        self.calls: list[tuple[str, str]] = []

    def request(
        self,
        method: str,
        path: str,
        *,
        body: str | bytes | None = None,  # noqa: ARG002
        expect_json: bool = False,  # noqa: ARG002
    ) -> TransportResult:
        self.calls.append((method, path))
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, Exception):
            raise result
        return result


class CollectingSink:
    """Error sink that keeps every captured error."""

    def __init__(self) -> None:
        self.errors: list[BaseException] = []

    def capture(self, error: BaseException) -> None:
        self.errors.append(error)


@pytest.fixture
def sidebar_markup() -> str:
    """Return representative sidebar markup with two sections."""
    return SIDEBAR_MARKUP


@pytest.fixture
def host_document() -> BeautifulSoup:
    """Parse a host page holding a ``.navigation-drawer .menu`` placeholder."""
    return BeautifulSoup(HOST_PAGE, "html.parser")


@pytest.fixture
def error_sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def scripted_transport() -> cabc.Callable[..., ScriptedTransport]:
    """Return a factory building transports from canned results.

    Strings become successful responses, ``None`` becomes an HTTP 503 error,
    and exceptions are raised from ``request``.
    """

    def _factory(*outcomes: str | Exception | None) -> ScriptedTransport:
        results: list[TransportResult | Exception] = []
        for outcome in outcomes:
            match outcome:
                case None:
                    results.append(TransportResult(is_error=True, payload="503 Service Unavailable"))
                case Exception():
                    results.append(outcome)
                case _:
                    results.append(TransportResult(is_error=False, payload=typ.cast("str", outcome)))
        return ScriptedTransport(results)

    return _factory

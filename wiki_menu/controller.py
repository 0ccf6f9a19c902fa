"""Fetch, parse, render, and mount the sidebar menu with bounded retries.

:class:`MenuController` is a small state machine driven by an asyncio event
loop::

    IDLE -> FETCHING -> SUCCEEDED
                     -> FAILED -> FETCHING        (retry)
                               -> TERMINAL_ERROR  (retry budget exhausted)
                     -> ABANDONED                 (fetched data unusable)

Only one request is ever in flight. The blocking transport call runs on the
loop's executor and hands its outcome to a single processing callback. Retries
are scheduled with ``loop.call_soon`` so a failed attempt never re-enters the
fetch from its own call stack.

Example
-------
>>> import asyncio
>>> from bs4 import BeautifulSoup
>>> from wiki_menu.controller import MenuController
>>> from wiki_menu.transport import RequestsTransport
>>> from wiki_menu.user_state import UserState
>>> soup = BeautifulSoup('<nav><div class="menu"></div></nav>', "html.parser")
>>> controller = MenuController(
...     RequestsTransport("https://psychonautwiki.org"),
...     soup,
...     soup.select_one(".menu"),
...     UserState(),
... )
>>> asyncio.run(controller.run())  # doctest: +SKIP
<MenuState.SUCCEEDED: 'succeeded'>
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import enum
import functools
import logging
import typing as typ

from ._constants import (
    DEFAULT_ANCHOR_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    MENU_PATH,
    RETRY_EXHAUSTED_MESSAGE,
)
from .errors import (
    MenuDataAssertionError,
    MenuParseError,
    RetryBudgetExhausted,
    TransportError,
    report_error,
)
from .markup_parser import parse_sections
from .models import DEFAULT_USER_LINKS
from .renderer import MenuRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from concurrent.futures import Executor

    from bs4 import BeautifulSoup, Tag

    from .errors import ErrorSink
    from .models import UserLink
    from .renderer import MenuTree
    from .transport import Transport, TransportResult
    from .user_state import UserState

logger = logging.getLogger(__name__)


class MenuState(enum.Enum):
    """Lifecycle states of a :class:`MenuController`."""

    IDLE = "idle"
    FETCHING = "fetching"
    FAILED = "failed"
    SUCCEEDED = "succeeded"
    TERMINAL_ERROR = "terminal_error"
    ABANDONED = "abandoned"


@dc.dataclass(slots=True)
class RetryState:
    """Attempt counter and ceiling; the counter only ever grows."""

    attempt_count: int = 0
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def record_attempt(self) -> int:
        self.attempt_count += 1
        return self.attempt_count

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_attempts


@dc.dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of one fetch attempt handed to the processing step."""

    error: BaseException | None
    data: object = None


def _assert_menu_data(data: object) -> str:
    if not data:
        msg = "Sidebar data is empty"
        raise MenuDataAssertionError(msg)
    if not isinstance(data, str):
        msg = f"Sidebar data is not a string: {type(data).__name__}"
        raise MenuDataAssertionError(msg)
    return data


class MenuController:
    """Load the sidebar once and swap it in for the placeholder menu."""

    def __init__(
        self,
        transport: Transport,
        document: BeautifulSoup,
        menu: Tag,
        user_state: UserState,
        *,
        error_sink: ErrorSink | None = None,
        renderer: MenuRenderer | None = None,
        anchor_base_url: str = DEFAULT_ANCHOR_BASE_URL,
        menu_path: str = MENU_PATH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        user_links: cabc.Sequence[UserLink] = DEFAULT_USER_LINKS,
        executor: Executor | None = None,
    ) -> None:
        """Wire the controller to its collaborators.

        Parameters
        ----------
        transport : Transport
            Performs the HTTP request for ``menu_path``.
        document : BeautifulSoup
            Document that owns ``menu``; also the element factory for the
            default renderer.
        menu : Tag
            Placeholder element replaced on success. It must have a parent.
        user_state : UserState
            Decides whether ``user_links`` are appended to the menu.
        error_sink : ErrorSink, optional
            Receives every reported error. ``None`` disables reporting.
        renderer : MenuRenderer, optional
            Custom renderer; defaults to one rooted at ``anchor_base_url``.
        anchor_base_url : str, optional
            Origin for rendered anchors when no renderer is supplied.
        menu_path : str, optional
            Path of the raw sidebar source.
        max_attempts : int, optional
            Number of fetch attempts before giving up. Defaults to ``3``.
        user_links : Sequence[UserLink], optional
            Links shown to logged-in users.
        executor : Executor, optional
            Executor for the blocking transport call; the loop default is used
            when omitted.

        Raises
        ------
        ValueError
            If ``max_attempts`` is not positive or ``menu`` is detached.
        """
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {max_attempts}"
            raise ValueError(msg)
        if menu.parent is None:
            msg = "Placeholder menu element must be attached to a parent"
            raise ValueError(msg)
        self.transport = transport
        self.document = document
        self.menu = menu
        self.user_state = user_state
        self.error_sink = error_sink
        self.renderer = renderer or MenuRenderer(document, anchor_base_url)
        self.menu_path = menu_path
        self.user_links = tuple(user_links)
        self.retry = RetryState(max_attempts=max_attempts)
        self.state = MenuState.IDLE
        self.mounted: Tag | None = None
        self._executor = executor
        self._loop: asyncio.AbstractEventLoop | None = None
        self._done: asyncio.Future[MenuState] | None = None

    def start(self) -> asyncio.Future[MenuState]:
        """Begin the first attempt and return a future for the final state.

        Must be called while an event loop is running. The future resolves
        with ``SUCCEEDED``, ``TERMINAL_ERROR``, or ``ABANDONED``.

        Raises
        ------
        RuntimeError
            If the controller was already started or no loop is running.
        """
        if self.state is not MenuState.IDLE:
            msg = f"Menu controller already started (state: {self.state.value})"
            raise RuntimeError(msg)
        self._loop = asyncio.get_running_loop()
        self._done = self._loop.create_future()
        self._retrieve()
        return self._done

    async def run(self) -> MenuState:
        """Start the controller and wait for it to settle."""
        return await self.start()

    def _transition(self, state: MenuState) -> None:
        logger.debug("sidebar menu: %s -> %s", self.state.value, state.value)
        self.state = state

    def _finish(self, state: MenuState) -> None:
        self._transition(state)
        if self._done is not None and not self._done.done():
            self._done.set_result(state)

    def _retrieve(self) -> None:
        loop = typ.cast("asyncio.AbstractEventLoop", self._loop)
        self._transition(MenuState.FETCHING)
        attempt = self.retry.record_attempt()
        logger.debug(
            "fetching %s (attempt %d/%d)", self.menu_path, attempt, self.retry.max_attempts
        )
        request = functools.partial(self.transport.request, "GET", self.menu_path)
        pending = loop.run_in_executor(self._executor, request)
        pending.add_done_callback(self._on_response)

    def _on_response(self, pending: asyncio.Future[TransportResult]) -> None:
        try:
            result = pending.result()
        except Exception as exc:
            outcome = FetchOutcome(
                error=TransportError(f"Transport raised: {exc}", exc)
            )
        else:
            if result.is_error:
                outcome = FetchOutcome(
                    error=TransportError(
                        f"Could not fetch {self.menu_path}: {_describe(result.payload)}",
                        result.payload,
                    )
                )
            else:
                outcome = FetchOutcome(error=None, data=result.payload)
        self._process(outcome)

    def _process(self, outcome: FetchOutcome) -> None:
        if outcome.error is not None:
            self._handle_failure(outcome.error)
            return
        try:
            data = _assert_menu_data(outcome.data)
        except MenuDataAssertionError as exc:
            report_error(self.error_sink, exc)
            self._finish(MenuState.ABANDONED)
            return
        try:
            tree = self._build(data)
        except MenuParseError as exc:
            self._handle_failure(exc)
            return
        self._mount(tree)
        self._finish(MenuState.SUCCEEDED)

    def _build(self, data: str) -> MenuTree:
        try:
            sections = parse_sections(data)
            links = self.user_links if self.user_state.is_logged_in() else ()
            return self.renderer.render(sections, links)
        except Exception as exc:
            msg = f"Could not render sidebar markup: {exc}"
            raise MenuParseError(msg) from exc

    def _mount(self, tree: MenuTree) -> None:
        container = tree.to_container(self.document)
        parent = typ.cast("Tag", self.menu.parent)
        position = parent.index(self.menu)
        self.menu.extract()
        parent.insert(position, container)
        self.mounted = container

    def _handle_failure(self, error: BaseException) -> None:
        report_error(self.error_sink, error)
        self._transition(MenuState.FAILED)
        if self.retry.exhausted:
            logger.error(
                "giving up on sidebar after %d attempts", self.retry.attempt_count
            )
            report_error(self.error_sink, RetryBudgetExhausted(RETRY_EXHAUSTED_MESSAGE))
            self._finish(MenuState.TERMINAL_ERROR)
            return
        logger.warning(
            "sidebar attempt %d/%d failed: %s",
            self.retry.attempt_count,
            self.retry.max_attempts,
            error,
        )
        loop = typ.cast("asyncio.AbstractEventLoop", self._loop)
        loop.call_soon(self._retrieve)


def _describe(payload: object) -> str:
    text = str(payload)
    return text[:200] if text else "<empty response>"


__all__ = ["FetchOutcome", "MenuController", "MenuState", "RetryState"]

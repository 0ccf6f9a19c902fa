"""Cyclopts CLI entrypoint for building the wiki sidebar menu.

The ``menu`` console script fetches ``MediaWiki:Sidebar`` from the configured
wiki, renders it, and writes the host page with the placeholder menu
replaced. ``menu parse`` inspects a local copy of the sidebar markup.

Examples
--------
Render the menu into the bundled skeleton page:

>>> from wiki_menu.cli import app
>>> app(["render", "--output", "menu.html"])  # doctest: +SKIP

Mount the menu into an existing page as a logged-in user:

>>> app(
...     ["render", "--page", "index.html", "--username", "Alice"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import load_menu_config
from .controller import MenuController, MenuState
from .errors import LoggingErrorSink
from .markup_parser import parse_sections, split_item
from .page import find_placeholder, load_page
from .transport import RequestsTransport
from .user_state import UserState

app = App(name="menu", config=cyclopts.config.Env("MENU_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )


@app.command(help="Fetch the wiki sidebar and mount it into an HTML page.")
def render(
    *,
    page: typ.Annotated[
        Path | None,
        Parameter(help="Host page containing the placeholder menu", env_var="MENU_PAGE"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Where to write the page (defaults to --page)", env_var="MENU_OUTPUT"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to menu config", env_var="MENU_CONFIG")
    ] = None,
    username: typ.Annotated[
        str | None,
        Parameter(help="Render as this logged-in user", env_var="MENU_USERNAME"),
    ] = None,
    source_url: typ.Annotated[
        str | None,
        Parameter(help="Override the wiki base URL", env_var="MENU_SOURCE_URL"),
    ] = None,
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="MENU_LOG_LEVEL")
    ] = "WARNING",
) -> None:
    """Render the sidebar menu into a page.

    Parameters
    ----------
    page : Path or None, optional
        HTML page holding the placeholder menu. When ``None`` the bundled
        skeleton page is used.
    output : Path or None, optional
        Destination for the rendered page; falls back to ``page``. When both
        are ``None`` the HTML is printed to stdout.
    config : Path or None, optional
        Menu configuration YAML; defaults apply when omitted.
    username : str or None, optional
        Treat the visitor as logged in under this name. Otherwise the
        ``wgUserName`` embedded in the page decides.
    source_url : str or None, optional
        Override ``source_base_url`` from the configuration.
    log_level : str, optional
        Standard logging level name.

    Raises
    ------
    SystemExit
        With status ``1`` when the menu could not be rendered.
    """
    _configure_logging(log_level)
    menu_config = load_menu_config(config)
    if source_url:
        menu_config = dc.replace(menu_config, source_base_url=source_url.rstrip("/"))

    document = load_page(page, username=username)
    placeholder = find_placeholder(document, menu_config.placeholder_selector)
    user_state = UserState(username) if username else UserState.from_document(document)
    transport = RequestsTransport(
        menu_config.source_base_url, timeout=menu_config.timeout
    )
    controller = MenuController(
        transport,
        document,
        placeholder,
        user_state,
        error_sink=LoggingErrorSink(),
        anchor_base_url=menu_config.anchor_base_url,
        menu_path=menu_config.menu_path,
        max_attempts=menu_config.max_attempts,
        user_links=menu_config.user_links,
    )
    try:
        state = asyncio.run(controller.run())
    finally:
        transport.close()

    if state is not MenuState.SUCCEEDED:
        print(f"menu not rendered ({state.value})")
        raise SystemExit(1)

    html = str(document)
    target = output or page
    if target is None:
        print(html)
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(target)}")


@app.command(name="parse", help="Print the sections of a local sidebar markup file.")
def parse_markup(source: Path) -> None:
    """Parse ``source`` and print its sections as JSON."""
    sections = parse_sections(source.read_text(encoding="utf-8"))
    payload = [
        {"title": section.title, "items": [split_item(item) for item in section.items]}
        for section in sections
    ]
    print(msgspec_json.encode(payload).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application that powers the `menu` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

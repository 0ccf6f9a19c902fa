"""Load the HTML page that hosts the placeholder menu.

Pages either come from disk or, when none is given, from the bundled
``drawer_page.jinja`` skeleton: a minimal MediaWiki-style document with a
``.navigation-drawer .menu`` placeholder and an ``RLCONF`` script carrying
``wgUserName`` so :class:`~wiki_menu.user_state.UserState` can read it back.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader

from .errors import PlaceholderNotFoundError

if typ.TYPE_CHECKING:
    from bs4 import Tag


class DrawerPageBuilder:
    """Render the skeleton page used when no host page is supplied."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``wiki_menu/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("drawer_page.jinja")

    def render(self, *, title: str = "Menu", username: str | None = None) -> str:
        """Return the skeleton page HTML, ending with a newline."""
        context = {
            "title": title,
            "mw_config": {"wgUserName": username},
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html


def parse_page(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def load_page(path: Path | None, *, username: str | None = None) -> BeautifulSoup:
    """Parse the page at ``path``, or the rendered skeleton when ``path`` is None."""
    if path is None:
        return parse_page(DrawerPageBuilder().render(username=username))
    return parse_page(path.read_text(encoding="utf-8"))


def find_placeholder(document: BeautifulSoup, selector: str) -> Tag:
    """Return the placeholder menu element matching ``selector``.

    Raises
    ------
    PlaceholderNotFoundError
        If nothing matches ``selector`` or the match has no parent.
    """
    menu = document.select_one(selector)
    if menu is None or menu.parent is None:
        msg = f"No placeholder menu matches selector {selector!r}."
        raise PlaceholderNotFoundError(msg)
    return menu


__all__ = ["DrawerPageBuilder", "find_placeholder", "load_page", "parse_page"]

"""Render parsed sidebar sections into BeautifulSoup nodes.

The renderer only builds nodes. It never touches the placeholder in the live
document; the controller mounts the finished :class:`MenuTree`.

Example
-------
>>> from bs4 import BeautifulSoup
>>> from wiki_menu.markup_parser import Section
>>> renderer = MenuRenderer(BeautifulSoup("", "html.parser"), "https://wiki.example")
>>> tree = renderer.render([Section("Tools", ["Special:Random|Random page"])])
>>> tree.sections[0].select_one("a")["href"]
'https://wiki.example/wiki/Special:Random'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import ANCHOR_CLASSES, CONTAINER_CLASSES, ICON_CLASS_PREFIX
from .markup_parser import split_item

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import BeautifulSoup, Tag

    from .markup_parser import Section
    from .models import UserLink

WHITESPACE_RUN = re.compile(r"\s+")


def icon_class(label: str) -> str:
    """Return the icon class for ``label``, e.g. ``icon-Label-One``."""
    return f"{ICON_CLASS_PREFIX}{WHITESPACE_RUN.sub('-', label)}"


@dc.dataclass(slots=True)
class MenuTree:
    """Mount-ready menu nodes.

    Attributes
    ----------
    sections : list[Tag]
        One ``<ul>`` per parsed section, in display order.
    user_links : list[Tag]
        ``<li>`` nodes for the user links, appended after the sections.
    """

    sections: list[Tag]
    user_links: list[Tag]

    @property
    def nodes(self) -> list[Tag]:
        """Return section nodes followed by user-link nodes."""
        return [*self.sections, *self.user_links]

    def to_container(self, document: BeautifulSoup) -> Tag:
        """Wrap every node in a ``<div class="menu view-border-box">``."""
        container = document.new_tag("div")
        container["class"] = list(CONTAINER_CLASSES)
        for node in self.nodes:
            container.append(node)
        return container


class MenuRenderer:
    """Build menu nodes with a document acting as the element factory."""

    def __init__(self, document: BeautifulSoup, anchor_base_url: str) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        document : BeautifulSoup
            Document used to create tags and strings.
        anchor_base_url : str
            Origin prepended to every ``/wiki/<link>`` anchor target.
        """
        self.document = document
        self.anchor_base_url = anchor_base_url.rstrip("/")

    def render(
        self,
        sections: cabc.Sequence[Section],
        user_links: cabc.Sequence[UserLink] = (),
    ) -> MenuTree:
        """Render ``sections`` and optional ``user_links`` into a MenuTree.

        Parameters
        ----------
        sections : Sequence[Section]
            Parsed sections in display order. They are not modified.
        user_links : Sequence[UserLink], optional
            Links appended after the sections; pass an empty sequence for
            anonymous users.

        Returns
        -------
        MenuTree
            Freshly created nodes with no references back to the inputs.
        """
        return MenuTree(
            sections=[self._render_section(section) for section in sections],
            user_links=[
                self.link_item(link.label, link.link, link.icon_classes)
                for link in user_links
            ],
        )

    def link_item(
        self, label: str, link: str, classes: cabc.Iterable[str]
    ) -> Tag:
        """Return ``<li><a>`` pointing at ``link`` with the icon classes applied."""
        anchor = self.document.new_tag("a", href=f"{self.anchor_base_url}/wiki/{link}")
        anchor["class"] = [*ANCHOR_CLASSES, *classes]
        anchor.string = label
        return self._wrap("li", anchor)

    def _render_section(self, section: Section) -> Tag:
        heading = self.document.new_tag("h3")
        heading.string = section.title
        container = self.document.new_tag("ul")
        container.append(self._wrap("li", heading))
        for item in section.items:
            parts = split_item(item)
            container.append(
                self.link_item(parts.label, parts.link, [icon_class(parts.label)])
            )
        return container

    def _wrap(self, name: str, element: Tag) -> Tag:
        wrapper = self.document.new_tag(name)
        wrapper.append(element)
        return wrapper


__all__ = ["MenuRenderer", "MenuTree", "icon_class"]

r"""Parse MediaWiki sidebar bullet markup into structured sections.

The sidebar source is a list of bullet lines. A single leading ``*`` opens a
section whose payload is the section title; deeper bullets (``**``) add
``link|label`` items to the most recent section.

Example
-------
>>> from wiki_menu.markup_parser import parse_sections
>>> sections = parse_sections("* navigation\n** Main_Page|Main page")
>>> sections[0].title
'navigation'
>>> sections[0].items
['Main_Page|Main page']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re

from ._constants import ITEM_SEPARATOR

logger = logging.getLogger(__name__)

BULLET_PATTERN = re.compile(r"^(\**)(.*)$")


@dc.dataclass(slots=True)
class Section:
    """Top-level menu group and its raw item references.

    Attributes
    ----------
    title : str
        Payload of the level-one bullet line.
    items : list[str]
        Raw ``link|label`` payloads in display order.
    """

    title: str
    items: list[str] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class ItemLink:
    """Link target and display text split from an item reference."""

    link: str
    label: str


def classify_line(line: str) -> tuple[int, str]:
    """Return the bullet level and stripped payload for ``line``.

    The level is the length of the leading run of ``*`` characters, so a line
    without a leading star has level ``0``.
    """
    match = BULLET_PATTERN.match(line.strip())
    if match is None:  # pragma: no cover - the pattern matches any line
        return 0, line.strip()
    stars, payload = match.groups()
    return len(stars), payload.strip()


def split_item(item: str) -> ItemLink:
    """Split a raw item reference into its link and label.

    Parameters
    ----------
    item : str
        Raw ``link|label`` payload.

    Returns
    -------
    ItemLink
        The text before the first ``|`` is the link and everything after it,
        further ``|`` characters included, is the label. Items without a
        separator use the whole payload for both.
    """
    link, separator, label = item.partition(ITEM_SEPARATOR)
    if not separator:
        text = item.strip()
        return ItemLink(link=text, label=text)
    return ItemLink(link=link.strip(), label=label.strip())


def parse_sections(raw_text: str) -> list[Section]:
    """Split sidebar markup into ordered Section objects.

    Parameters
    ----------
    raw_text : str
        Raw sidebar markup, one bullet per line.

    Returns
    -------
    list[Section]
        One section per level-one line, in source order. Item lines that
        appear before the first section and lines without a leading bullet are
        skipped. Returns an empty list when no level-one lines are present.
    """
    sections: list[Section] = []
    current: Section | None = None
    for lineno, line in enumerate(raw_text.split("\n"), start=1):
        if not line.strip():
            continue
        level, payload = classify_line(line)
        if level == 0:
            logger.debug("skipping line %d without a bullet: %r", lineno, line)
            continue
        if level == 1:
            current = Section(title=payload)
            sections.append(current)
            continue
        if current is None:
            logger.debug("dropping item on line %d before any section", lineno)
            continue
        current.items.append(payload)
    return sections


__all__ = ["ItemLink", "Section", "classify_line", "parse_sections", "split_item"]

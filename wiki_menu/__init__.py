"""Fetch, parse, and render the MediaWiki sidebar as a navigation menu.

This package exposes the ``menu`` CLI plus the building blocks it wires
together: the sidebar markup parser, the BeautifulSoup menu renderer, and
the retrying controller that mounts the result in place of a placeholder.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``MenuController``: Fetch/parse/render state machine.
- ``parse_sections``: Sidebar markup parser.

Examples
--------
>>> from wiki_menu import parse_sections
>>> [section.title for section in parse_sections("* navigation\\n* tools")]
['navigation', 'tools']
"""

from __future__ import annotations

from .cli import app, main
from .controller import MenuController, MenuState
from .markup_parser import Section, parse_sections
from .renderer import MenuRenderer, MenuTree

__all__ = [
    "MenuController",
    "MenuRenderer",
    "MenuState",
    "MenuTree",
    "Section",
    "app",
    "main",
    "parse_sections",
]

"""Logged-in user lookup for MediaWiki pages.

MediaWiki embeds its client configuration in an inline script
(``RLCONF = {"wgUserName": ...}`` on current releases, ``mw.config.set`` on
older ones). :meth:`UserState.from_document` reads ``wgUserName`` from it; a
JSON ``null`` marks an anonymous visitor.
"""

from __future__ import annotations

import json
import re
import typing as typ

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup

USERNAME_PATTERN = re.compile(r'"wgUserName"\s*:\s*(null|"(?:[^"\\]|\\.)*")')


class UserState:
    """Expose whether the current visitor is logged in."""

    def __init__(self, username: str | None = None) -> None:
        self._username = username or None

    @classmethod
    def from_document(cls, document: BeautifulSoup) -> UserState:
        """Build a UserState from the MediaWiki config in ``document`` scripts."""
        for script in document.find_all("script"):
            match = USERNAME_PATTERN.search(script.string or "")
            if match:
                return cls(json.loads(match.group(1)))
        return cls()

    def get_username(self) -> str | None:
        return self._username

    def is_logged_in(self) -> bool:
        return self._username is not None


__all__ = ["UserState"]

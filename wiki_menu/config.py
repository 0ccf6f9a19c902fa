"""Load and validate the menu configuration YAML.

The configuration names the wiki the sidebar is fetched from, the origin used
for rendered anchors, the retry ceiling, and the links shown to logged-in
users. Every key is optional; :func:`load_menu_config` fills gaps with the
defaults from :mod:`wiki_menu._constants`.

Examples
--------
>>> from pathlib import Path
>>> from wiki_menu.config import load_menu_config
>>> config = load_menu_config(Path("config/menu.yaml"))  # doctest: +SKIP
>>> config.max_attempts  # doctest: +SKIP
3
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import (
    DEFAULT_ANCHOR_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_PLACEHOLDER_SELECTOR,
    DEFAULT_SOURCE_BASE_URL,
    DEFAULT_TIMEOUT,
    MENU_PATH,
)
from .errors import MenuConfigError
from .models import DEFAULT_USER_LINKS, UserLink


@dc.dataclass(slots=True)
class MenuConfig:
    """Settings shared by the CLI and the menu controller.

    Attributes
    ----------
    source_base_url : str
        Origin of the wiki serving the raw sidebar.
    anchor_base_url : str
        Origin prepended to rendered ``/wiki/<link>`` anchors.
    menu_path : str
        Path of the raw sidebar source.
    max_attempts : int
        Fetch attempts before the controller gives up.
    timeout : float
        Per-request timeout in seconds.
    placeholder_selector : str
        CSS selector locating the placeholder menu in a page.
    user_links : tuple[UserLink, ...]
        Links appended for logged-in users.
    """

    source_base_url: str = DEFAULT_SOURCE_BASE_URL
    anchor_base_url: str = DEFAULT_ANCHOR_BASE_URL
    menu_path: str = MENU_PATH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    timeout: float = DEFAULT_TIMEOUT
    placeholder_selector: str = DEFAULT_PLACEHOLDER_SELECTOR
    user_links: tuple[UserLink, ...] = DEFAULT_USER_LINKS


def load_menu_config(path: Path | None) -> MenuConfig:
    """Load the YAML configuration describing where and how to build the menu.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML file. ``None`` returns the defaults.

    Returns
    -------
    MenuConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    MenuConfigError
        If a value has the wrong type or is out of range.
    """
    if path is None:
        return MenuConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_menu_config(loaded)


def build_menu_config(raw: typ.Mapping[str, typ.Any]) -> MenuConfig:
    """Build a MenuConfig from an already parsed mapping."""
    base = MenuConfig()
    user_links_raw = raw.get("user_links")
    return MenuConfig(
        source_base_url=_url(raw, "source_base_url", base.source_base_url),
        anchor_base_url=_url(raw, "anchor_base_url", base.anchor_base_url),
        menu_path=_optional_str(raw.get("menu_path")) or base.menu_path,
        max_attempts=_positive_int(raw.get("max_attempts", base.max_attempts)),
        timeout=_positive_float(raw.get("timeout", base.timeout)),
        placeholder_selector=(
            _optional_str(raw.get("placeholder_selector"))
            or base.placeholder_selector
        ),
        user_links=(
            base.user_links
            if user_links_raw is None
            else _build_user_links(user_links_raw)
        ),
    )


def _url(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = _optional_str(raw.get(key))
    if value is None:
        return default
    if not value.startswith(("http://", "https://")):
        msg = f"'{key}' must be an http(s) URL, got {value!r}."
        raise MenuConfigError(msg)
    return value.rstrip("/")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value: object) -> int:
    match value:
        case bool():
            pass
        case int() if value > 0:
            return value
    msg = f"'max_attempts' must be a positive integer, got {value!r}."
    raise MenuConfigError(msg)


def _positive_float(value: object) -> float:
    match value:
        case bool():
            pass
        case int() | float() if value > 0:
            return float(value)
    msg = f"'timeout' must be a positive number, got {value!r}."
    raise MenuConfigError(msg)


def _normalize_classes(value: str | list[object] | None) -> tuple[str, ...]:
    """Normalize class definitions into a tuple of non-empty strings."""
    if isinstance(value, str):
        return tuple(segment for segment in value.split() if segment)
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return tuple(normalized)
    return ()


def _build_user_links(payload: object) -> tuple[UserLink, ...]:
    if not isinstance(payload, list):
        msg = "'user_links' must be a list of mappings."
        raise MenuConfigError(msg)
    links: list[UserLink] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            msg = f"user_links[{index}] must be a mapping."
            raise MenuConfigError(msg)
        label = _optional_str(entry.get("label"))
        link = _optional_str(entry.get("link"))
        if not label or not link:
            msg = f"user_links[{index}] requires 'label' and 'link'."
            raise MenuConfigError(msg)
        links.append(UserLink(label, link, _normalize_classes(entry.get("classes"))))
    return tuple(links)


__all__ = ["MenuConfig", "build_menu_config", "load_menu_config"]

"""Shared dataclasses used by the menu rendering pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class UserLink:
    """Static menu entry shown to logged-in users.

    Attributes
    ----------
    label : str
        Visible anchor text.
    link : str
        Wiki page path appended to ``/wiki/``.
    icon_classes : tuple[str, ...]
        CSS classes applied to the anchor in place of the derived icon class.
    """

    label: str
    link: str
    icon_classes: tuple[str, ...] = ()


DEFAULT_USER_LINKS: tuple[UserLink, ...] = (
    UserLink("Watchlist", "Special:Watchlist", ("mw-ui-icon-watchlist",)),
    UserLink("Upload", "Special:Uploads", ("mw-ui-icon-uploads", "menu-item-upload")),
    UserLink("Settings", "Special:MobileOptions", ("mw-ui-icon-mobileoptions",)),
)


__all__ = ["DEFAULT_USER_LINKS", "UserLink"]

"""Common literal values used across wiki_menu.

These constants keep endpoint paths, link targets, and CSS class names
centralized so the renderer, controller, configuration loader, and tests can
import the same values without drifting.

Examples
--------
>>> from wiki_menu import _constants
>>> _constants.MENU_PATH
'/wiki/MediaWiki:Sidebar?action=raw'
>>> _constants.ANCHOR_CLASSES
('mw-ui-icon', 'mw-ui-icon-before')
"""

MENU_PATH = "/wiki/MediaWiki:Sidebar?action=raw"
DEFAULT_SOURCE_BASE_URL = "https://psychonautwiki.org"
DEFAULT_ANCHOR_BASE_URL = "https://www.psychonautwiki.org"
DEFAULT_PLACEHOLDER_SELECTOR = ".navigation-drawer .menu"
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT = 10.0

ANCHOR_CLASSES = ("mw-ui-icon", "mw-ui-icon-before")
CONTAINER_CLASSES = ("menu", "view-border-box")
ICON_CLASS_PREFIX = "icon-"
ITEM_SEPARATOR = "|"
RETRY_EXHAUSTED_MESSAGE = "Could not load sidebar."

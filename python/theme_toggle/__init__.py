"""
theme-toggle: light/dark theme resolution and style synchronization.

Resolves a visitor's theme preference, marks the page with it and injects an
override stylesheet built from the design tokens already present in the
page's stylesheets. Toggle controls share one reactive cell and a change
channel so they stay consistent without referencing each other.

Add to INSTALLED_APPS and MIDDLEWARE::

    INSTALLED_APPS = [
        ...
        "theme_toggle",
    ]
    MIDDLEWARE = [
        ...
        "django.contrib.sessions.middleware.SessionMiddleware",
        "theme_toggle.middleware.ThemeMiddleware",
    ]
"""

from .applier import ThemeApplier, apply_theme
from .bridge import (
    CellRegistry,
    Subscription,
    ThemeCell,
    ThemeChangeChannel,
    ToggleBridge,
    get_request_theme_cell,
    get_theme_cell,
    get_theme_channel,
)
from .document import ThemeDocument
from .exceptions import (
    BackendConfigurationError,
    InvalidThemeError,
    StylesheetAccessError,
    ThemeToggleError,
)
from .extractor import TokenExtractor, TokenSet
from .injector import SingletonRegistry, StyleInjector
from .resolver import (
    ClientHintSystemPreference,
    StaticSystemPreference,
    SystemPreference,
    ThemeResolver,
)
from .store import PreferenceStore
from .themes import Theme

__version__ = "0.1.0"

__all__ = [
    "Theme",
    "PreferenceStore",
    "ThemeResolver",
    "SystemPreference",
    "StaticSystemPreference",
    "ClientHintSystemPreference",
    "TokenExtractor",
    "TokenSet",
    "StyleInjector",
    "SingletonRegistry",
    "ThemeDocument",
    "ThemeApplier",
    "apply_theme",
    "ThemeCell",
    "CellRegistry",
    "ThemeChangeChannel",
    "Subscription",
    "ToggleBridge",
    "get_theme_cell",
    "get_request_theme_cell",
    "get_theme_channel",
    "ThemeToggleError",
    "InvalidThemeError",
    "StylesheetAccessError",
    "BackendConfigurationError",
]

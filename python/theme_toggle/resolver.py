"""
Effective theme resolution.

The system colour-scheme preference is an injectable capability, so
resolution is testable without a browser. In a request/response cycle the
browser reports it through the ``Sec-CH-Prefers-Color-Scheme`` client hint,
which the server requests with ``Accept-CH``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .config import get_config
from .themes import Theme

logger = logging.getLogger(__name__)

CLIENT_HINT_HEADER = "Sec-CH-Prefers-Color-Scheme"


class SystemPreference(ABC):
    """Answers whether the environment currently prefers a dark scheme."""

    @abstractmethod
    def is_dark_preferred(self) -> bool:
        ...


class StaticSystemPreference(SystemPreference):
    """A fixed answer. Useful for tests and server-side defaults."""

    def __init__(self, dark: bool = False):
        self.dark = dark

    def is_dark_preferred(self) -> bool:
        return self.dark

    def __repr__(self) -> str:
        return f"StaticSystemPreference(dark={self.dark!r})"


class ClientHintSystemPreference(SystemPreference):
    """
    Reads the colour-scheme client hint from a Django request.

    Browsers only send the hint after the server advertised it with
    ``Accept-CH`` (see ThemeMiddleware), so the first request of a visit
    usually falls back to ``default_dark``.
    """

    def __init__(self, request, default_dark: Optional[bool] = None):
        self.request = request
        if default_dark is None:
            default_dark = bool(get_config().get("default_dark", False))
        self.default_dark = default_dark

    def is_dark_preferred(self) -> bool:
        hint = self.request.headers.get(CLIENT_HINT_HEADER)
        if hint is None:
            return self.default_dark
        return hint.strip().strip('"').lower() == Theme.DARK.value


class ThemeResolver:
    """Turns a requested theme into a concrete dark/light theme."""

    def __init__(self, system_preference: SystemPreference):
        self.system_preference = system_preference

    def resolve_effective(self, requested) -> Theme:
        theme = requested if isinstance(requested, Theme) else Theme.parse(requested)
        if theme is not None and theme.is_concrete:
            return theme
        effective = Theme.DARK if self.system_preference.is_dark_preferred() else Theme.LIGHT
        logger.debug("Resolved %s against system preference: %s", requested, effective)
        return effective

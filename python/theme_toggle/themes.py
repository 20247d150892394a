"""
Theme values understood by the toggle engine.

``SYSTEM`` is a request ("follow the OS setting"), never a resolved state:
only ``DARK`` and ``LIGHT`` are ever written to a preference store.
"""

from enum import Enum
from typing import Optional

from .exceptions import InvalidThemeError


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Theme"]:
        """Return the member matching ``value``, or None for anything else."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_concrete(self) -> bool:
        return self in CONCRETE_THEMES

    def opposite(self) -> "Theme":
        """Return the other concrete theme (light <-> dark)."""
        if self is Theme.LIGHT:
            return Theme.DARK
        if self is Theme.DARK:
            return Theme.LIGHT
        raise InvalidThemeError(self.value)


CONCRETE_THEMES = (Theme.DARK, Theme.LIGHT)


def ensure_concrete(value) -> Theme:
    """Coerce ``value`` to a concrete Theme or raise InvalidThemeError."""
    theme = value if isinstance(value, Theme) else Theme.parse(value)
    if theme is None or not theme.is_concrete:
        raise InvalidThemeError(str(value))
    return theme

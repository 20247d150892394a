"""
The single persisted theme preference.

Wraps a :class:`~theme_toggle.storage.PreferenceBackend` and enforces the
stored-value invariant: the entry is either absent or a Theme member, and
only concrete themes are ever written.
"""

import logging
from typing import Optional

from .config import get_config
from .storage.base import PreferenceBackend
from .themes import Theme, ensure_concrete

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Reads and writes the theme preference under one fixed key.

    Example::

        store = PreferenceStore(SessionPreferenceBackend(request.session))
        store.sanitize()
        requested = store.read()  # Theme.SYSTEM when nothing usable is stored
    """

    def __init__(self, backend: PreferenceBackend, key: Optional[str] = None):
        self.backend = backend
        self.key = key or get_config().get("store_key", "theme")

    def sanitize(self) -> None:
        """Delete the stored value if it is not a Theme member."""
        stored = self.backend.get(self.key)
        if stored is None:
            return
        if Theme.parse(stored) is None:
            logger.debug("Removing invalid stored theme %r", stored)
            self.backend.delete(self.key)

    def read(self) -> Theme:
        """
        Return the stored theme if it is dark or light, otherwise SYSTEM.

        Absent values, invalid values and a literal 'system' entry are all
        treated as a request to follow the system preference.
        """
        theme = Theme.parse(self.backend.get(self.key))
        if theme is None or not theme.is_concrete:
            return Theme.SYSTEM
        return theme

    def write(self, value) -> None:
        """Overwrite the stored value with a concrete theme."""
        theme = ensure_concrete(value)
        self.backend.set(self.key, theme.value)

    def __repr__(self) -> str:
        return f"PreferenceStore(key={self.key!r}, backend={self.backend.__class__.__name__})"

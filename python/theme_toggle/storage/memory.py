"""
In-memory preference backend for development, tests and single-node use.
"""

import logging
from threading import RLock
from typing import Dict, Optional

from .base import PreferenceBackend

logger = logging.getLogger(__name__)


class InMemoryPreferenceBackend(PreferenceBackend):
    """
    Thread-safe in-memory key-value store.

    Limitations:
        - Single-process only; other workers won't see this data.
        - Shared by every client of the process.
        - Data lost on restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

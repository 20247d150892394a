"""
Django-cache preference backend for deployments sharing a cache (e.g. Redis).

Keys are namespaced per client so one cache can hold every visitor's
preference::

    theme_toggle:{client_id}:{key}
"""

import logging
from typing import Optional

from .base import PreferenceBackend

logger = logging.getLogger(__name__)

KEY_PREFIX = "theme_toggle"


class CachePreferenceBackend(PreferenceBackend):
    def __init__(self, client_id: str, cache=None, timeout: Optional[int] = None) -> None:
        if cache is None:
            from django.core.cache import cache as default_cache

            cache = default_cache
        self._cache = cache
        self._client_id = client_id
        self._timeout = timeout

    def _cache_key(self, key: str) -> str:
        return f"{KEY_PREFIX}:{self._client_id}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self._cache.get(self._cache_key(key))

    def set(self, key: str, value: str) -> None:
        self._cache.set(self._cache_key(key), value, self._timeout)

    def delete(self, key: str) -> None:
        self._cache.delete(self._cache_key(key))

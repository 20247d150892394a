"""
theme_toggle.storage — Pluggable backends holding the persisted preference.

Configured via THEME_TOGGLE_CONFIG['preference_backend']:
    'session' — Django session of the current request (default)
    'cache'   — Django cache, keyed per client session
    'memory'  — In-process dict (single-node, development and tests)
"""

from .base import PreferenceBackend
from .cache import CachePreferenceBackend
from .memory import InMemoryPreferenceBackend
from .registry import (
    get_preference_backend,
    reset_preference_backend,
    set_preference_backend,
)
from .session import SessionPreferenceBackend

__all__ = [
    "PreferenceBackend",
    "InMemoryPreferenceBackend",
    "SessionPreferenceBackend",
    "CachePreferenceBackend",
    "get_preference_backend",
    "set_preference_backend",
    "reset_preference_backend",
]

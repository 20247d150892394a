"""
Preference backend registry.

Reads THEME_TOGGLE_CONFIG['preference_backend']:
    'session' (default) — SessionPreferenceBackend over request.session
    'cache'             — CachePreferenceBackend keyed on the session key
    'memory'            — one InMemoryPreferenceBackend shared by the process

An explicitly set backend (``set_preference_backend``) wins over all of them.
"""

import logging
from typing import Optional

from ..config import get_config
from ..exceptions import BackendConfigurationError
from .base import PreferenceBackend

logger = logging.getLogger(__name__)

_backend: Optional[PreferenceBackend] = None


def get_preference_backend(request=None) -> PreferenceBackend:
    """
    Get the configured preference backend.

    Request-scoped backends ('session', 'cache') are built per call; the
    memory backend is created once and shared.
    """
    global _backend
    if _backend is not None:
        return _backend

    config = get_config()
    backend_type = config.get("preference_backend", "session")

    if backend_type == "memory":
        from .memory import InMemoryPreferenceBackend

        _backend = InMemoryPreferenceBackend()
        logger.info("Initialized preference backend: %s", backend_type)
        return _backend

    if backend_type not in ("session", "cache"):
        raise BackendConfigurationError(backend_type, "unknown backend type")

    session = getattr(request, "session", None)
    if session is None:
        raise BackendConfigurationError(
            backend_type, "a request with session support is required"
        )

    if backend_type == "session":
        from .session import SessionPreferenceBackend

        return SessionPreferenceBackend(session)

    from .cache import CachePreferenceBackend

    if not session.session_key:
        session.save()
    return CachePreferenceBackend(
        session.session_key, timeout=config.get("cache_timeout")
    )


def set_preference_backend(backend: PreferenceBackend) -> None:
    """Manually set the preference backend (useful for testing)."""
    global _backend
    _backend = backend


def reset_preference_backend() -> None:
    """Reset to force re-initialization on next access."""
    global _backend
    _backend = None

"""
Django-session preference backend: the preference lives with the visitor.
"""

from typing import Optional

from .base import PreferenceBackend


class SessionPreferenceBackend(PreferenceBackend):
    """
    Stores the preference in ``request.session``.

    Any mapping with ``get``/``__setitem__``/``pop`` works, which keeps the
    backend usable with a plain dict in tests.
    """

    def __init__(self, session) -> None:
        self._session = session

    def get(self, key: str) -> Optional[str]:
        value = self._session.get(key)
        return value if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        self._session[key] = value

    def delete(self, key: str) -> None:
        self._session.pop(key, None)

"""
Abstract base class for preference backends.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PreferenceBackend(ABC):
    """
    Abstract interface for a scalar key-value store.

    Values are stored verbatim; validating them is the job of
    :class:`theme_toggle.store.PreferenceStore`.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the stored value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the value. Deleting an absent key is a no-op."""
        ...

"""
Exceptions raised by the theme toggle engine.

None of these reach the page: stylesheet access failures are caught by the
token scanner, and invalid stored values are sanitized away. They surface only
for programming and configuration mistakes.
"""

from typing import Optional


class ThemeToggleError(Exception):
    """Base exception for theme toggle errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class InvalidThemeError(ThemeToggleError, ValueError):
    """Raised when a concrete theme (dark/light) is required but not given."""

    def __init__(self, value: str):
        message = f"'{value}' is not a concrete theme; expected 'dark' or 'light'."
        hint = (
            "\n    Resolve 'system' first:\n"
            "        effective = resolver.resolve_effective(store.read())\n"
            "        store.write(effective)"
        )
        super().__init__(message, hint)
        self.value = value


class StylesheetAccessError(ThemeToggleError):
    """Raised when a stylesheet's rules cannot be read."""

    def __init__(self, href: Optional[str], reason: str):
        message = f"Cannot access stylesheet {href or '<inline>'}: {reason}"
        super().__init__(message)
        self.href = href
        self.reason = reason


class BackendConfigurationError(ThemeToggleError):
    """Raised when the preference backend cannot be built from configuration."""

    def __init__(self, backend: str, issue: str):
        message = f"Invalid preference backend '{backend}': {issue}"
        hint = (
            "\n    Configure one of the built-in backends in settings.py:\n"
            "        THEME_TOGGLE_CONFIG = {\n"
            "            'preference_backend': 'session',  # or 'memory', 'cache'\n"
            "        }"
        )
        super().__init__(message, hint)
        self.backend = backend


__all__ = [
    "ThemeToggleError",
    "InvalidThemeError",
    "StylesheetAccessError",
    "BackendConfigurationError",
]

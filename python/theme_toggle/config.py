"""
Configuration system for theme-toggle

Provides centralized configuration for:
- Preference storage (key, backend)
- Marking attribute and injected style element identifier
- Token extraction selectors and markers
- Change notification naming
"""

from typing import Dict, Any


class ThemeConfig:
    """
    Central configuration for theme toggle behavior.

    Usage:
        # In settings.py
        THEME_TOGGLE_CONFIG = {
            'preference_backend': 'cache',
            'token_marker': '--brand',
        }

        # Or programmatically
        from theme_toggle.config import config
        config.set('default_dark', True)
    """

    # Default configuration
    _defaults = {
        # Persisted preference
        "store_key": "theme",  # Key holding the single scalar preference
        "preference_backend": "session",  # Options: 'session', 'cache', 'memory'
        "cache_timeout": None,  # Cache backend TTL in seconds (None = never expire)
        # Page marking
        "attribute": "toggle-theme",  # Attribute set on <html> and <body>
        "style_element_id": "toggle-theme",  # id of the injected <style> singleton
        # Token extraction
        "token_marker": "--token",  # Custom properties containing this are tokens
        "light_selector": "body",  # Selector of the rule holding light tokens
        "dark_media_condition": "(prefers-color-scheme: dark)",
        "dark_exclusion_marker": "body:not([data-framer-theme])",
        # System preference fallback when no client hint is sent
        "default_dark": False,
        # Change notification
        "change_event": "themeChange",
        "broadcast_group": "theme_toggle",  # channels group for cross-worker relay
        # Linked stylesheet resolution
        "static_url": None,  # None = settings.STATIC_URL
    }

    def __init__(self):
        self._config = self._defaults.copy()
        self._load_from_settings()

    def _load_from_settings(self):
        """Load configuration from Django settings if available"""
        try:
            from django.conf import settings
            from django.core.exceptions import ImproperlyConfigured

            try:
                overrides = getattr(settings, "THEME_TOGGLE_CONFIG", None)
            except ImproperlyConfigured:
                overrides = None
            if overrides:
                self._config.update(overrides)
        except ImportError:
            pass

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found or set to None

        Returns:
            Configuration value or default

        Example:
            config.get('attribute')  # 'toggle-theme'
        """
        value = self._config.get(key)
        return value if value is not None else default

    def set(self, key: str, value: Any):
        """Set a configuration value."""
        self._config[key] = value

    def reset(self):
        """Reset configuration to defaults"""
        self._config = self._defaults.copy()
        self._load_from_settings()

    def update(self, config_dict: Dict[str, Any]):
        """
        Update multiple configuration values at once.

        Example:
            config.update({
                'preference_backend': 'memory',
                'default_dark': True,
            })
        """
        self._config.update(config_dict)

    def as_dict(self) -> Dict[str, Any]:
        """Get the entire configuration as a dictionary"""
        return self._config.copy()


# Global configuration instance
config = ThemeConfig()


def get_config() -> ThemeConfig:
    """Get the global configuration instance"""
    return config

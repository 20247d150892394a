"""
Pytest configuration and fixtures for theme-toggle tests.
"""

import pytest
from django.contrib.sessions.middleware import SessionMiddleware
from django.core.cache import cache
from django.test import RequestFactory

from theme_toggle.bridge import reset_theme_state
from theme_toggle.config import config
from theme_toggle.resolver import StaticSystemPreference, ThemeResolver
from theme_toggle.storage import InMemoryPreferenceBackend, reset_preference_backend
from theme_toggle.store import PreferenceStore

SAMPLE_PAGE = """<!DOCTYPE html>
<html>
<head>
<title>Themed</title>
<style>
body { --token-bg: white; --token-fg: black; font-family: sans-serif; }
@media (prefers-color-scheme: dark) {
  body { --token-bg: black; --token-fg: white; }
}
</style>
</head>
<body><main>Content</main></body>
</html>"""


@pytest.fixture(autouse=True)
def clean_state():
    """Reset global configuration, backends and shared cells around each test."""
    config.reset()
    reset_preference_backend()
    reset_theme_state()
    cache.clear()
    yield
    config.reset()
    reset_preference_backend()
    reset_theme_state()
    cache.clear()


@pytest.fixture
def request_factory():
    """Provide Django RequestFactory for creating test requests."""
    return RequestFactory()


@pytest.fixture
def get_request(request_factory):
    """Create a basic GET request with session support."""
    request = request_factory.get('/')

    # Add session support
    middleware = SessionMiddleware(lambda x: None)
    middleware.process_request(request)
    request.session.save()

    return request


@pytest.fixture
def backend():
    return InMemoryPreferenceBackend()


@pytest.fixture
def store(backend):
    return PreferenceStore(backend)


@pytest.fixture
def light_resolver():
    """Resolver whose system preference reports light."""
    return ThemeResolver(StaticSystemPreference(dark=False))


@pytest.fixture
def dark_resolver():
    """Resolver whose system preference reports dark."""
    return ThemeResolver(StaticSystemPreference(dark=True))


@pytest.fixture
def sample_page():
    return SAMPLE_PAGE

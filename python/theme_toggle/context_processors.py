"""
Template context for themed pages.

Add to settings.py::

    TEMPLATES = [{
        'OPTIONS': {
            'context_processors': [
                ...
                'theme_toggle.context_processors.theme',
            ],
        },
    }]

Then in templates::

    <button data-variant="{{ theme_variant }}">...</button>
"""

from .config import get_config
from .exceptions import BackendConfigurationError
from .storage.registry import get_preference_backend
from .store import PreferenceStore
from .themes import Theme


def theme(request):
    try:
        store = PreferenceStore(get_preference_backend(request))
    except BackendConfigurationError:
        return {}
    current = store.read()
    return {
        "theme": current.value,
        "theme_variant": "Light" if current is Theme.LIGHT else "Dark",
        "theme_attribute": get_config().get("attribute"),
    }

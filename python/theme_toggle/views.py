"""
HTTP endpoint behind the toggle control.

Each request is its own mount: the request-scoped cell is seeded from the
visitor's stored preference, corrected once, toggled and persisted. The
response tells the control which variant to render.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_POST

from .bridge import ToggleBridge, get_request_theme_cell
from .resolver import ClientHintSystemPreference, ThemeResolver
from .storage.registry import get_preference_backend
from .store import PreferenceStore


def _bridge_for(request) -> ToggleBridge:
    store = PreferenceStore(get_preference_backend(request))
    store.sanitize()
    resolver = ThemeResolver(ClientHintSystemPreference(request))
    return ToggleBridge(get_request_theme_cell(request, store), store, resolver)


def current_theme(request):
    bridge = _bridge_for(request)
    theme = bridge.mount()
    return JsonResponse({"theme": theme.value, "variant": bridge.variant})


@require_POST
def toggle_theme(request):
    bridge = _bridge_for(request)
    bridge.mount()
    theme = bridge.toggle()
    return JsonResponse({"theme": theme.value, "variant": bridge.variant})

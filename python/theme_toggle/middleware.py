"""
Applies the theme to HTML responses before they reach the browser.

Add after SessionMiddleware::

    MIDDLEWARE = [
        ...
        "django.contrib.sessions.middleware.SessionMiddleware",
        "theme_toggle.middleware.ThemeMiddleware",
    ]

The response advertises the colour-scheme client hint (``Accept-CH``) so
later requests let the server resolve 'system' without a client round trip.
"""

import logging

from django.utils.cache import patch_vary_headers

from .applier import apply_theme
from .exceptions import BackendConfigurationError
from .resolver import CLIENT_HINT_HEADER

logger = logging.getLogger(__name__)


class ThemeMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return self.process_response(request, response)

    def process_response(self, request, response):
        accept_ch = response.get("Accept-CH")
        if not accept_ch:
            response["Accept-CH"] = CLIENT_HINT_HEADER
        elif CLIENT_HINT_HEADER.lower() not in accept_ch.lower():
            response["Accept-CH"] = f"{accept_ch}, {CLIENT_HINT_HEADER}"
        patch_vary_headers(response, (CLIENT_HINT_HEADER,))

        if not self._is_themeable(response):
            return response

        charset = response.charset or "utf-8"
        try:
            source = response.content.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(
                "Theme not applied to %s: cannot decode as %s (%s)", request.path, charset, e
            )
            return response

        try:
            html = apply_theme(source, request=request)
        except BackendConfigurationError as e:
            logger.warning("Theme not applied to %s: %s", request.path, e.message)
            return response

        response.content = html.encode(charset)
        if response.has_header("Content-Length"):
            response["Content-Length"] = str(len(response.content))
        return response

    @staticmethod
    def _is_themeable(response) -> bool:
        if getattr(response, "streaming", False) or response.status_code != 200:
            return False
        content_type = response.get("Content-Type", "")
        return content_type.split(";", 1)[0].strip().lower() == "text/html"

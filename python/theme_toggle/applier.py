"""
Page-load orchestration: resolve the preference and materialize the theme.

Run once per page before it is shown (ThemeMiddleware does this for every
HTML response); running it again is safe and yields the same document.
"""

import logging
from typing import Optional

from .config import get_config
from .document import ThemeDocument
from .extractor import TokenExtractor
from .injector import StyleInjector
from .resolver import (
    ClientHintSystemPreference,
    StaticSystemPreference,
    ThemeResolver,
)
from .storage.registry import get_preference_backend
from .store import PreferenceStore
from .stylesheets import StaticFilesLoader, StylesheetLoader
from .themes import Theme

logger = logging.getLogger(__name__)


class ThemeApplier:
    """
    Orchestrates store -> resolver -> document marking -> extraction -> injection.

    Example::

        applier = ThemeApplier(store, ThemeResolver(StaticSystemPreference(dark=True)))
        document = ThemeDocument.parse(html)
        effective = applier.apply(document)
        html = document.render()
    """

    def __init__(
        self,
        store: PreferenceStore,
        resolver: ThemeResolver,
        extractor: Optional[TokenExtractor] = None,
        injector: Optional[StyleInjector] = None,
        loader: Optional[StylesheetLoader] = None,
        attribute: Optional[str] = None,
    ):
        self.store = store
        self.resolver = resolver
        self.extractor = extractor or TokenExtractor()
        self.injector = injector or StyleInjector(attribute=attribute)
        self.loader = loader
        self.attribute = attribute or get_config().get("attribute")

    def apply(self, document: ThemeDocument) -> Theme:
        self.store.sanitize()
        requested = self.store.read()
        effective = self.resolver.resolve_effective(requested)
        # Always written, so a resolved 'system' request is never left stored
        self.store.write(effective)

        document.mark(effective, self.attribute)

        light, dark = self.extractor.scan(document.stylesheets(self.loader))
        self.injector.install(document, light, dark)
        logger.debug("Applied theme %s (requested %s)", effective, requested)
        return effective


def apply_theme(
    html: str,
    request=None,
    store: Optional[PreferenceStore] = None,
    resolver: Optional[ThemeResolver] = None,
    loader: Optional[StylesheetLoader] = None,
) -> str:
    """
    Apply the theme to an HTML string and return the rendered result.

    With a ``request``, the preference comes from the configured request
    backend and the system preference from the colour-scheme client hint.
    Without one, the shared backend and the configured ``default_dark`` are
    used.
    """
    if store is None:
        store = PreferenceStore(get_preference_backend(request))
    if resolver is None:
        if request is not None:
            resolver = ThemeResolver(ClientHintSystemPreference(request))
        else:
            default_dark = bool(get_config().get("default_dark", False))
            resolver = ThemeResolver(StaticSystemPreference(default_dark))
    if loader is None:
        loader = StaticFilesLoader()

    document = ThemeDocument.parse(html)
    ThemeApplier(store, resolver, loader=loader).apply(document)
    return document.render()

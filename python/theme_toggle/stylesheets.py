"""
Stylesheet sources scanned for theme tokens.

Inline ``<style>`` elements carry their text; linked stylesheets are read
through a :class:`StylesheetLoader`. A loader raises
:class:`~theme_toggle.exceptions.StylesheetAccessError` when a sheet cannot be
read (another origin, missing or unreadable file), which the token scanner
treats as "skip this sheet".
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import urlsplit

from .config import get_config
from .css import Rule, parse_stylesheet
from .exceptions import StylesheetAccessError

logger = logging.getLogger(__name__)


class StylesheetLoader(ABC):
    """Fetches the text of a linked stylesheet."""

    @abstractmethod
    def load(self, href: str) -> str:
        """Return the stylesheet text or raise StylesheetAccessError."""
        ...


class StaticFilesLoader(StylesheetLoader):
    """
    Reads same-origin stylesheets served from ``STATIC_URL`` through the
    staticfiles finders.

    Any href with a scheme or host is treated as cross-origin and refused,
    mirroring what a browser allows a script to read.
    """

    def __init__(self, static_url: Optional[str] = None):
        self._static_url = static_url

    @property
    def static_url(self) -> str:
        if self._static_url is None:
            configured = get_config().get("static_url")
            if configured is None:
                from django.conf import settings

                configured = getattr(settings, "STATIC_URL", None) or "/static/"
            self._static_url = configured
        return self._static_url

    def load(self, href: str) -> str:
        parts = urlsplit(href)
        if parts.scheme or parts.netloc:
            raise StylesheetAccessError(href, "cross-origin stylesheet")

        prefix = urlsplit(self.static_url).path
        if not prefix.endswith("/"):
            prefix += "/"
        if not parts.path.startswith(prefix):
            raise StylesheetAccessError(href, f"not served from {prefix}")

        from django.contrib.staticfiles import finders

        path = finders.find(parts.path[len(prefix):])
        if not path:
            raise StylesheetAccessError(href, "static file not found")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StylesheetAccessError(href, str(e)) from e


class Stylesheet:
    """
    One stylesheet of a document.

    Rules are parsed lazily on first access to ``rules``; accessing them on
    an unreadable linked sheet raises StylesheetAccessError.
    """

    def __init__(
        self,
        text: Optional[str] = None,
        href: Optional[str] = None,
        loader: Optional[StylesheetLoader] = None,
    ):
        self.text = text
        self.href = href
        self.loader = loader
        self._rules: Optional[List[Rule]] = None

    @classmethod
    def inline(cls, text: str) -> "Stylesheet":
        return cls(text=text)

    @classmethod
    def linked(cls, href: str, loader: Optional[StylesheetLoader]) -> "Stylesheet":
        return cls(href=href, loader=loader)

    @property
    def rules(self) -> List[Rule]:
        if self._rules is None:
            if self.text is None:
                if self.loader is None:
                    raise StylesheetAccessError(self.href, "no stylesheet loader configured")
                self.text = self.loader.load(self.href)
            self._rules = parse_stylesheet(self.text)
        return self._rules

    def __repr__(self) -> str:
        if self.href:
            return f"Stylesheet(href={self.href!r})"
        return "Stylesheet(<inline>)"

"""
Injection of the generated theme override stylesheet.

The generated ``<style>`` element is a singleton keyed by its id: every
install removes any element carrying the id before appending the new one, so
repeated runs leave exactly one element with the latest content.
"""

import logging
from typing import List, Optional

from bs4 import Tag

from .config import get_config
from .document import ThemeDocument
from .extractor import TokenSet
from .themes import Theme

logger = logging.getLogger(__name__)


class SingletonRegistry:
    """Create-or-replace access to id-keyed elements of one document."""

    def __init__(self, document: ThemeDocument):
        self.document = document

    def get(self, element_id: str) -> Optional[Tag]:
        matches = self.document.find_all_by_id(element_id)
        return matches[0] if matches else None

    def all(self, element_id: str) -> List[Tag]:
        return self.document.find_all_by_id(element_id)

    def replace(self, element_id: str, element: Tag) -> Tag:
        """Remove every element with ``element_id``, then append ``element`` to <head>."""
        for existing in self.document.find_all_by_id(element_id):
            existing.decompose()
        element["id"] = element_id
        self.document.ensure_head().append(element)
        return element


class StyleInjector:
    def __init__(self, attribute: Optional[str] = None, element_id: Optional[str] = None):
        config = get_config()
        self.attribute = attribute or config.get("attribute")
        self.element_id = element_id or config.get("style_element_id")

    def build_css(self, light: TokenSet, dark: TokenSet) -> str:
        attr = self.attribute
        return (
            f'body[{attr}="{Theme.LIGHT}"] {{{light.to_css()}}} '
            f'body[{attr}="{Theme.DARK}"] {{{dark.to_css()}}} '
            f'html[{attr}="{Theme.LIGHT}"] {{ color-scheme: light; }} '
            f'html[{attr}="{Theme.DARK}"] {{ color-scheme: dark; }}'
        )

    def install(self, document: ThemeDocument, light: TokenSet, dark: TokenSet) -> Tag:
        element = document.new_tag("style")
        element.string = self.build_css(light, dark)
        SingletonRegistry(document).replace(self.element_id, element)
        logger.debug("Installed theme override stylesheet #%s", self.element_id)
        return element

"""
HTML document wrapper used by the applier, injector and toggle bridge.

Backed by BeautifulSoup; exposes only what the engine touches: the root and
body elements (for the marking attribute), the head (for the injected
stylesheet) and the document's stylesheets in source order.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .stylesheets import Stylesheet, StylesheetLoader


class ThemeDocument:
    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def parse(cls, html: str, parser: str = "html.parser") -> "ThemeDocument":
        return cls(BeautifulSoup(html, parser))

    @property
    def root(self) -> Optional[Tag]:
        return self.soup.find("html")

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.find("body")

    @property
    def head(self) -> Optional[Tag]:
        return self.soup.find("head")

    def ensure_head(self) -> Tag:
        """Return <head>, creating it at the top of <html> if missing."""
        head = self.head
        if head is None:
            head = self.soup.new_tag("head")
            root = self.root
            (root if root is not None else self.soup).insert(0, head)
        return head

    def mark(self, theme, attribute: str) -> None:
        """Set the marking attribute on <html> and <body>; absent ones are skipped."""
        value = str(theme)
        for element in (self.root, self.body):
            if element is not None:
                element[attribute] = value

    def stylesheets(self, loader: Optional[StylesheetLoader] = None) -> List[Stylesheet]:
        """Inline and linked stylesheets, in document order."""
        sheets = []
        for tag in self.soup.find_all(["style", "link"]):
            if tag.name == "style":
                sheets.append(Stylesheet.inline(tag.get_text()))
                continue
            rel = tag.get("rel") or []
            if isinstance(rel, str):
                rel = rel.split()
            href = tag.get("href")
            if href and "stylesheet" in (r.lower() for r in rel):
                sheets.append(Stylesheet.linked(href, loader))
        return sheets

    def find_all_by_id(self, element_id: str) -> List[Tag]:
        return self.soup.find_all(id=element_id)

    def new_tag(self, name: str, **attrs) -> Tag:
        return self.soup.new_tag(name, attrs=attrs)

    def render(self) -> str:
        return str(self.soup)

    __str__ = render

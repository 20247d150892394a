"""
Theme token extraction from loaded stylesheets.

Light tokens come from the root-body style rule::

    body { --token-bg: white; --token-fg: black; }

A trailing ``!important`` is dropped from light values, as the CSSOM does when
reading a single property.

Dark tokens come from the first rule nested in a dark colour-scheme media
rule, unless that media rule targets a page that already carries an explicit
theme (the exclusion marker), which would apply the dark values twice::

    @media (prefers-color-scheme: dark) {
      body { --token-bg: black; --token-fg: white; }
    }

Across all rules of all stylesheets the latest non-empty match wins; sets are
replaced, never merged, so a stylesheet loaded later overrides earlier ones.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .config import get_config
from .css import (
    Declaration,
    MediaRule,
    OtherRule,
    Rule,
    StyleRule,
    normalize_condition,
    normalize_whitespace,
    strip_priority,
)
from .exceptions import StylesheetAccessError
from .stylesheets import Stylesheet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenSet:
    """Ordered (property name, value) pairs for one theme branch."""

    tokens: Tuple[Declaration, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.tokens)

    def to_css(self) -> str:
        return " ".join(f"{name}: {value};" for name, value in self.tokens)


EMPTY = TokenSet()


class TokenExtractor:
    """
    Derives the light and dark token sets from a document's stylesheets.

    Selector, condition and markers default to the global configuration.
    """

    def __init__(
        self,
        token_marker: Optional[str] = None,
        light_selector: Optional[str] = None,
        dark_condition: Optional[str] = None,
        exclusion_marker: Optional[str] = None,
    ):
        config = get_config()
        self.token_marker = token_marker or config.get("token_marker")
        self.light_selector = normalize_whitespace(
            light_selector or config.get("light_selector")
        )
        self.dark_condition = normalize_condition(
            dark_condition or config.get("dark_media_condition")
        )
        self.exclusion_marker = exclusion_marker or config.get("dark_exclusion_marker")

    def extract_light(self, rule: Rule) -> TokenSet:
        if isinstance(rule, StyleRule):
            if rule.selector != self.light_selector:
                return EMPTY
            return TokenSet(
                tuple(
                    (name, strip_priority(value))
                    for name, value in rule.declarations
                    if self.token_marker in name
                )
            )
        if isinstance(rule, (MediaRule, OtherRule)):
            return EMPTY
        raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    def extract_dark(self, rule: Rule) -> TokenSet:
        if isinstance(rule, MediaRule):
            if normalize_condition(rule.condition) != self.dark_condition:
                return EMPTY
            if self.exclusion_marker and self.exclusion_marker in rule.css_text:
                return EMPTY
            if not rule.rules:
                return EMPTY
            first = rule.rules[0]
            if isinstance(first, StyleRule):
                return TokenSet(first.declarations)
            return EMPTY
        if isinstance(rule, (StyleRule, OtherRule)):
            return EMPTY
        raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    def scan(self, stylesheets: Iterable[Stylesheet]) -> Tuple[TokenSet, TokenSet]:
        """Return ``(light, dark)`` token sets, last match winning."""
        light = EMPTY
        dark = EMPTY
        for sheet in stylesheets:
            try:
                rules = sheet.rules
            except StylesheetAccessError as e:
                logger.warning("Cannot access stylesheet: %s (%s)", sheet.href, e.reason)
                continue
            for rule in rules:
                light = self.extract_light(rule) or light
                dark = self.extract_dark(rule) or dark
        logger.debug("Extracted %d light and %d dark tokens", len(light), len(dark))
        return light, dark

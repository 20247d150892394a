"""
Tests for theme token extraction.
"""

import logging

import pytest

from theme_toggle.css import MediaRule, OtherRule, StyleRule, parse_stylesheet
from theme_toggle.exceptions import StylesheetAccessError
from theme_toggle.extractor import TokenExtractor, TokenSet
from theme_toggle.stylesheets import Stylesheet, StylesheetLoader


class RefusingLoader(StylesheetLoader):
    def load(self, href):
        raise StylesheetAccessError(href, "cross-origin stylesheet")


def rule(css):
    return parse_stylesheet(css)[0]


@pytest.fixture
def extractor():
    return TokenExtractor()


class TestTokenSet:
    def test_empty_is_falsy(self):
        assert not TokenSet()
        assert len(TokenSet()) == 0
        assert TokenSet().to_css() == ""

    def test_to_css(self):
        tokens = TokenSet((("--token-bg", "white"), ("--token-fg", "black")))
        assert tokens
        assert tokens.to_css() == "--token-bg: white; --token-fg: black;"
        assert tokens.names() == ("--token-bg", "--token-fg")


class TestExtractLight:
    def test_body_rule_tokens_only(self, extractor):
        tokens = extractor.extract_light(
            rule("body { --token-bg: white; margin: 0; --other: 1; --token-fg: black; }")
        )
        assert tokens.tokens == (("--token-bg", "white"), ("--token-fg", "black"))

    @pytest.mark.parametrize("selector", ["html", "body.dark", "body, html", ":root", "main body"])
    def test_other_selectors_ignored(self, extractor, selector):
        assert not extractor.extract_light(rule(f"{selector} {{ --token-bg: white; }}"))

    def test_media_and_other_rules_ignored(self, extractor):
        assert not extractor.extract_light(rule("@media print { body { --token-bg: white; } }"))
        assert not extractor.extract_light(OtherRule("@import url(a.css);"))

    def test_custom_marker_and_selector(self):
        extractor = TokenExtractor(token_marker="--brand", light_selector=":root")
        tokens = extractor.extract_light(rule(":root { --brand-primary: blue; --token-bg: white; }"))
        assert tokens.tokens == (("--brand-primary", "blue"),)

    def test_important_dropped_from_light_values(self, extractor):
        tokens = extractor.extract_light(
            rule("body { --token-bg: white !important; --token-fg: black; }")
        )
        assert tokens.tokens == (("--token-bg", "white"), ("--token-fg", "black"))

    def test_nested_rule_does_not_produce_tokens(self, extractor):
        tokens = extractor.extract_light(
            rule("body { --token-a: 1; &:hover { --token-x: red; } --token-b: 2; }")
        )
        assert tokens.names() == ("--token-a", "--token-b")

    def test_unsupported_rule_type(self, extractor):
        with pytest.raises(TypeError):
            extractor.extract_light("body { }")


class TestExtractDark:
    def test_first_nested_rule_flattened(self, extractor):
        tokens = extractor.extract_dark(
            rule(
                "@media (prefers-color-scheme: dark) {"
                "  body { --token-bg: black; color: white; }"
                "  p { --token-ignored: 1; }"
                "}"
            )
        )
        # All declarations of the first nested rule, not only tokens
        assert tokens.tokens == (("--token-bg", "black"), ("color", "white"))

    def test_condition_spacing_tolerated(self, extractor):
        tokens = extractor.extract_dark(
            rule("@media (prefers-color-scheme:dark) { body { --token-bg: black; } }")
        )
        assert tokens.to_css() == "--token-bg: black;"

    def test_other_conditions_ignored(self, extractor):
        assert not extractor.extract_dark(
            rule("@media (prefers-color-scheme: light) { body { --token-bg: white; } }")
        )
        assert not extractor.extract_dark(
            rule("@media screen and (prefers-color-scheme: dark) { body { --token-bg: black; } }")
        )

    def test_explicit_theme_variant_excluded(self, extractor):
        assert not extractor.extract_dark(
            rule(
                "@media (prefers-color-scheme: dark) {"
                "  body:not([data-framer-theme]) { --token-bg: black; }"
                "}"
            )
        )

    def test_exclusion_marker_anywhere_in_rule(self, extractor):
        assert not extractor.extract_dark(
            rule(
                "@media (prefers-color-scheme: dark) {"
                "  body { --token-bg: black; }"
                "  body:not([data-framer-theme]) { --token-fg: white; }"
                "}"
            )
        )

    def test_empty_media_rule(self, extractor):
        assert not extractor.extract_dark(MediaRule("(prefers-color-scheme: dark)"))

    def test_first_nested_rule_not_style(self, extractor):
        media = MediaRule(
            "(prefers-color-scheme: dark)",
            (OtherRule("@font-face { font-family: X; }"), StyleRule("body", (("--token-bg", "black"),))),
        )
        assert not extractor.extract_dark(media)

    def test_style_rules_ignored(self, extractor):
        assert not extractor.extract_dark(rule("body { --token-bg: black; }"))


class TestScan:
    def test_light_and_dark(self, extractor):
        sheet = Stylesheet.inline(
            "body { --token-bg: white; }"
            "@media (prefers-color-scheme: dark) { body { --token-bg: black; } }"
        )
        light, dark = extractor.scan([sheet])
        assert light.to_css() == "--token-bg: white;"
        assert dark.to_css() == "--token-bg: black;"

    def test_no_matches_gives_empty_sets(self, extractor):
        light, dark = extractor.scan([Stylesheet.inline("p { color: red; }")])
        assert not light
        assert not dark

    def test_last_match_wins_across_stylesheets(self, extractor):
        first = Stylesheet.inline("body { --token-bg: white; --token-fg: black; }")
        second = Stylesheet.inline("body { --token-bg: ivory; }")

        light, _ = extractor.scan([first, second])

        # Replaced, not merged
        assert light.tokens == (("--token-bg", "ivory"),)

    def test_last_match_wins_within_stylesheet(self, extractor):
        sheet = Stylesheet.inline(
            "@media (prefers-color-scheme: dark) { body { --token-bg: #111; } }"
            "@media (prefers-color-scheme: dark) { body { --token-bg: #222; } }"
        )
        _, dark = extractor.scan([sheet])
        assert dark.to_css() == "--token-bg: #222;"

    def test_later_empty_match_does_not_clear(self, extractor):
        first = Stylesheet.inline("body { --token-bg: white; }")
        second = Stylesheet.inline("body { margin: 0; }")
        light, _ = extractor.scan([first, second])
        assert light.to_css() == "--token-bg: white;"

    def test_excluded_dark_rule_keeps_previous(self, extractor):
        sheet = Stylesheet.inline(
            "@media (prefers-color-scheme: dark) { body { --token-bg: black; } }"
            "@media (prefers-color-scheme: dark) {"
            "  body:not([data-framer-theme]) { --token-bg: #050505; } }"
        )
        _, dark = extractor.scan([sheet])
        assert dark.to_css() == "--token-bg: black;"

    def test_inaccessible_stylesheet_skipped(self, extractor, caplog):
        before = Stylesheet.inline("body { --token-bg: white; }")
        blocked = Stylesheet.linked("https://cdn.example.com/theme.css", RefusingLoader())
        after = Stylesheet.inline(
            "@media (prefers-color-scheme: dark) { body { --token-bg: black; } }"
        )

        with caplog.at_level(logging.WARNING, logger="theme_toggle.extractor"):
            light, dark = extractor.scan([before, blocked, after])

        assert light.to_css() == "--token-bg: white;"
        assert dark.to_css() == "--token-bg: black;"
        assert "Cannot access stylesheet: https://cdn.example.com/theme.css" in caplog.text

    def test_linked_stylesheet_without_loader_skipped(self, extractor, caplog):
        with caplog.at_level(logging.WARNING, logger="theme_toggle.extractor"):
            light, dark = extractor.scan([Stylesheet.linked("/static/a.css", None)])
        assert not light and not dark
        assert "/static/a.css" in caplog.text

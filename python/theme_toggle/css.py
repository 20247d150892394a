"""
Minimal CSS rule model and parser.

Only the structure the token extractor needs is modelled: top-level style
rules, ``@media`` rules (with their nested rules) and everything else as an
opaque ``OtherRule``. Each variant carries a ``kind`` tag and a canonical
``css_text`` close to what a browser's CSSOM serializes::

    body { --token-bg: white; }
    @media (prefers-color-scheme: dark) {
      body { --token-bg: black; }
    }
"""

import re
from dataclasses import dataclass
from typing import ClassVar, List, Tuple, Union

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)

Declaration = Tuple[str, str]


@dataclass(frozen=True)
class StyleRule:
    selector: str
    declarations: Tuple[Declaration, ...] = ()

    kind: ClassVar[str] = "style"

    @property
    def declaration_text(self) -> str:
        return " ".join(f"{name}: {value};" for name, value in self.declarations)

    @property
    def css_text(self) -> str:
        body = self.declaration_text
        return f"{self.selector} {{ {body} }}" if body else f"{self.selector} {{ }}"


@dataclass(frozen=True)
class MediaRule:
    condition: str
    rules: Tuple["Rule", ...] = ()

    kind: ClassVar[str] = "media"

    @property
    def css_text(self) -> str:
        inner = "".join(f"\n  {rule.css_text}" for rule in self.rules)
        return f"@media {self.condition} {{{inner}\n}}"


@dataclass(frozen=True)
class OtherRule:
    text: str

    kind: ClassVar[str] = "other"

    @property
    def css_text(self) -> str:
        return self.text


Rule = Union[StyleRule, MediaRule, OtherRule]


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_condition(condition: str) -> str:
    """
    Canonical form of a media condition for comparison.

    ``( PREFERS-COLOR-SCHEME :dark )`` -> ``(prefers-color-scheme: dark)``
    """
    text = normalize_whitespace(condition).lower()
    text = re.sub(r"\(\s+", "(", text)
    text = re.sub(r"\s+\)", ")", text)
    return re.sub(r"\s*:\s*", ": ", text)


def parse_stylesheet(text: str) -> List[Rule]:
    """Parse stylesheet text into top-level rules, in source order."""
    return _parse_rules(_COMMENT_RE.sub("", text or ""))


def parse_declarations(text: str) -> Tuple[Declaration, ...]:
    """
    Parse a declaration block body into ordered (name, value) pairs.

    A property declared twice keeps its last value, at the position of its
    last declaration. Custom property names keep their case. Nested rules
    (``&:hover { ... }``) are skipped whole.
    """
    found = {}
    for chunk in _split_declarations(text):
        colon = _find_top_level(chunk, 0, ":")
        if colon == -1:
            continue
        name = chunk[:colon].strip()
        value = chunk[colon + 1:].strip()
        if not name:
            continue
        if not name.startswith("--"):
            name = name.lower()
        found.pop(name, None)
        found[name] = value
    return tuple(found.items())


def strip_priority(value: str) -> str:
    """``white !important`` -> ``white``"""
    return _IMPORTANT_RE.sub("", value)


def _parse_rules(text: str) -> List[Rule]:
    rules: List[Rule] = []
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and (text[pos].isspace() or text[pos] == ";"):
            pos += 1
        if pos >= length:
            break
        if text.startswith("<!--", pos) or text.startswith("-->", pos):
            pos += 4 if text[pos] == "<" else 3
            continue

        stop = _find_top_level(text, pos, "{;")
        if stop == -1:
            # Trailing prelude without a block
            break
        prelude = text[pos:stop].strip()
        if text[stop] == ";":
            rules.append(OtherRule(f"{prelude};"))
            pos = stop + 1
            continue

        end = _find_block_end(text, stop)
        body = text[stop + 1:end]
        pos = end + 1
        rules.append(_make_rule(prelude, body))
    return rules


def _make_rule(prelude: str, body: str) -> Rule:
    if prelude.startswith("@"):
        name = prelude.split(None, 1)[0].lower()
        if name == "@media":
            condition = normalize_whitespace(prelude[len(name):])
            return MediaRule(condition=condition, rules=tuple(_parse_rules(body)))
        return OtherRule(f"{normalize_whitespace(prelude)} {{ {normalize_whitespace(body)} }}")
    return StyleRule(
        selector=normalize_whitespace(prelude),
        declarations=parse_declarations(body),
    )


def _skip_string(text: str, pos: int) -> int:
    """Return the index just past the string literal starting at ``pos``."""
    quote = text[pos]
    pos += 1
    while pos < len(text):
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == quote:
            return pos + 1
        pos += 1
    return pos


def _find_top_level(text: str, start: int, stops: str) -> int:
    """Index of the first ``stops`` character outside strings and parens."""
    depth = 0
    pos = start
    while pos < len(text):
        char = text[pos]
        if char in "\"'":
            pos = _skip_string(text, pos)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif depth == 0 and char in stops:
            return pos
        pos += 1
    return -1


def _find_block_end(text: str, open_pos: int) -> int:
    """Index of the brace closing the block opened at ``open_pos``."""
    depth = 0
    pos = open_pos
    while pos < len(text):
        char = text[pos]
        if char in "\"'":
            pos = _skip_string(text, pos)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return len(text)


def _split_declarations(text: str) -> List[str]:
    """Split on top-level ``;``, dropping nested blocks and their preludes."""
    parts = []
    start = 0
    while True:
        stop = _find_top_level(text, start, ";{")
        if stop == -1:
            parts.append(text[start:])
            return parts
        if text[stop] == "{":
            start = _find_block_end(text, stop) + 1
            continue
        parts.append(text[start:stop])
        start = stop + 1

"""
highlighter.py — Minimal syntax highlighting
=============================================
Annotates generated code for display as HTML.

Source text is split into (text, category) spans by a single left-to-right
scan over one combined pattern, then each span is escaped once and wrapped
in a coloured <span>. Text already claimed by a string or comment is never
revisited, so keywords inside literals stay plain.
"""

from __future__ import annotations

import html
import re
from functools import lru_cache
from typing import Iterator, NamedTuple, Optional

COMPONENT_LANGS = frozenset({"ts", "typescript", "component"})

KEYWORDS = (
    "import", "export", "class", "const", "let", "var", "return", "if", "else",
    "for", "while", "function", "async", "await", "new", "this", "true", "false",
    "null", "undefined", "from", "default", "interface", "type", "extends",
    "implements", "public", "private", "protected", "readonly", "static",
)

# Alternatives are tried in order at each position; the scan itself is leftmost-first.
_COMPONENT_PATTERN = re.compile(
    r"(?P<comment>//.*)"
    r"|(?P<string>'.*?'|\".*?\")"
    r"|(?P<decorator>@\w+)"
    r"|(?P<keyword>\b(?:" + "|".join(KEYWORDS) + r")\b)"
)

_MARKUP_PATTERN = re.compile(
    r"(?P<tag></?[\w-]+)"
    r"|(?P<directive>\*ngFor|\*ngIf|\[[\w.]+\]|\([\w.]+\))"
    r"|(?P<attribute>[\w-]+=)"
    r"|(?P<string>\".*?\")"
)

COLORS = {
    "comment": "#6a9955",
    "keyword": "#569cd6",
    "decorator": "#4ec9b0",
    "string": "#ce9178",
    "tag": "#4ec9b0",
    "attribute": "#9cdcfe",
    "directive": "#c586c0",
}


class Span(NamedTuple):
    text: str
    category: Optional[str] = None


def _pattern_for(language_tag: str) -> re.Pattern:
    if (language_tag or "").lower() in COMPONENT_LANGS:
        return _COMPONENT_PATTERN
    return _MARKUP_PATTERN


def tokenize(source_text: str, language_tag: str) -> Iterator[Span]:
    """Yields spans covering ``source_text`` exactly, in order."""
    position = 0
    for match in _pattern_for(language_tag).finditer(source_text):
        if match.start() > position:
            yield Span(source_text[position:match.start()])
        yield Span(match.group(), match.lastgroup)
        position = match.end()
    if position < len(source_text):
        yield Span(source_text[position:])


def render(spans) -> str:
    parts = []
    for span in spans:
        escaped = html.escape(span.text, quote=False)
        if span.category is None:
            parts.append(escaped)
        else:
            parts.append(f'<span style="color:{COLORS[span.category]}">{escaped}</span>')
    return "".join(parts)


@lru_cache(maxsize=256)
def highlight(source_text: str, language_tag: str) -> str:
    if not source_text:
        return ""
    return render(tokenize(source_text, language_tag))

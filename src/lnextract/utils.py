from __future__ import annotations

from .models import TokenKind
from .tokenizer import tokenize

RAW_TEXT_ELEMENTS = {"script", "style"}

# Invisible format characters dropped from text, hard spaces made plain.
_TEXT_TABLE = dict.fromkeys(map(ord, "\u00ad\u200b\u200e\u200f\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069\ufeff"))
_TEXT_TABLE.update({0xA0: " ", 0x202F: " "})


def norm_text(s: str) -> str:
    """Collapse whitespace and remove invisible formatting characters."""
    return " ".join(s.translate(_TEXT_TABLE).split())


def fragment_text(fragment: str) -> str:
    """Plain text of a markup fragment; script/style bodies and comments are skipped."""
    parts = []
    raw_depth = 0
    for token in tokenize(fragment):
        if token.name in RAW_TEXT_ELEMENTS:
            if token.kind is TokenKind.OPEN:
                raw_depth += 1
            elif token.kind is TokenKind.CLOSE:
                raw_depth = max(0, raw_depth - 1)
        elif token.kind is TokenKind.SELF_CLOSING and token.name == "br":
            parts.append("\n")
        elif token.name == "#text" and not raw_depth:
            parts.append(token.data)
    return norm_text("".join(parts))

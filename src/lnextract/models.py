from __future__ import annotations

import enum
import html
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class TokenKind(enum.Enum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    raw: str  # verbatim source text
    name: str = ""
    attrs: Tuple[Tuple[str, str], ...] = ()

    def render(self) -> str:
        return self.raw

    @property
    def is_tag(self) -> bool:
        return self.kind is not TokenKind.OTHER

    @property
    def data(self) -> str:
        """Text content of an OTHER token with character references decoded."""
        if self.kind is not TokenKind.OTHER:
            return ""
        return html.unescape(self.raw)

    def attr(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for k, v in self.attrs:
            if k == key:
                return v
        return default


@dataclass
class Extraction:
    fragments: List[str] = field(default_factory=list)
    clean: bool = True
    error: Optional[BaseException] = None
    dropped: int = 0  # captures still open when the stream ended

    @property
    def first(self) -> str:
        return self.fragments[0] if self.fragments else ""

    def __bool__(self) -> bool:
        return any(self.fragments)


@dataclass
class Section:
    heading: str
    items: List[str] = field(default_factory=list)

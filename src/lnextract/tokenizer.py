from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

from .log import get_logger
from .models import Token, TokenKind

log = get_logger(__name__)

# Elements that never take an end tag; `<br>` is reported like `<br/>`.
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

CHUNK_SIZE = 64 * 1024

_NL = re.compile("\n")

_Event = Tuple[int, int, TokenKind, str, Tuple[Tuple[str, str], ...]]


class _EventCollector(HTMLParser):
    """Record where every construct starts; the text is sliced out afterwards."""

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self.events: List[_Event] = []

    def _mark(self, kind: TokenKind, name: str, attrs=()) -> None:
        lineno, offset = self.getpos()
        pairs = tuple((k, v if v is not None else "") for k, v in attrs)
        self.events.append((lineno, offset, kind, name, pairs))

    def handle_starttag(self, tag, attrs):
        kind = TokenKind.SELF_CLOSING if tag in VOID_ELEMENTS else TokenKind.OPEN
        self._mark(kind, tag, attrs)

    def handle_startendtag(self, tag, attrs):
        self._mark(TokenKind.SELF_CLOSING, tag, attrs)

    def handle_endtag(self, tag):
        if tag in VOID_ELEMENTS:
            self._mark(TokenKind.OTHER, "#invalid")
        else:
            self._mark(TokenKind.CLOSE, tag)

    def handle_data(self, data):
        self._mark(TokenKind.OTHER, "#text")

    def handle_entityref(self, name):
        self._mark(TokenKind.OTHER, "#text")

    def handle_charref(self, name):
        self._mark(TokenKind.OTHER, "#text")

    def handle_comment(self, data):
        self._mark(TokenKind.OTHER, "#comment")

    def handle_decl(self, decl):
        self._mark(TokenKind.OTHER, "#decl")

    def unknown_decl(self, data):
        self._mark(TokenKind.OTHER, "#decl")

    def handle_pi(self, data):
        self._mark(TokenKind.OTHER, "#pi")


def _chunks(source: Union[str, IO[str]], size: int) -> Iterator[str]:
    if isinstance(source, str):
        for i in range(0, len(source), size):
            yield source[i:i + size]
        return
    while True:
        chunk = source.read(size)
        if not chunk:
            return
        yield chunk


def tokenize(source: Union[str, IO[str]], *, chunk_size: int = CHUNK_SIZE) -> Iterator[Token]:
    """Lazily split markup into structural tokens.

    SOURCE is a string or a text file object read CHUNK_SIZE characters at a
    time. Every input character lands in exactly one token's `raw`, so joining
    the renderings reproduces the input.
    """
    parser = _EventCollector()
    line_starts = [0]
    buf = ""
    base = 0  # absolute offset of buf[0]
    fed = 0

    def drain(boundary: int) -> Iterator[Token]:
        nonlocal buf, base
        events = parser.events
        parser.events = []
        cuts = [base]
        cuts.extend(line_starts[lineno - 1] + offset for lineno, offset, *_ in events[1:])
        cuts.append(boundary)
        for (_l, _o, kind, name, attrs), start, end in zip(events, cuts, cuts[1:]):
            raw = buf[start - base:end - base]
            if raw:
                yield Token(kind, raw, name, attrs)
        if events:
            buf = buf[boundary - base:]
            base = boundary

    for chunk in _chunks(source, chunk_size):
        line_starts.extend(fed + m.end() for m in _NL.finditer(chunk))
        fed += len(chunk)
        buf += chunk
        parser.feed(chunk)
        yield from drain(fed - len(parser.rawdata))
    parser.close()
    yield from drain(fed - len(parser.rawdata))
    if buf:
        # Unterminated raw text (e.g. an unclosed <script>) the parser never reported.
        yield Token(TokenKind.OTHER, buf, "#text")


class TokenStream:
    """Forward-only, single-owner pull stream of tokens.

    Exceptions raised by the underlying iterable end the stream instead of
    propagating; inspect `error` (or `clean`) afterwards to tell a broken source
    from a clean end.
    """

    def __init__(self, source: Union[str, Iterable[Token]]):
        if isinstance(source, str):
            source = tokenize(source)
        self._it = iter(source)
        self.error: Optional[BaseException] = None
        self.exhausted = False
        self.count = 0

    def next_token(self) -> Optional[Token]:
        if self.exhausted:
            return None
        try:
            token = next(self._it)
        except StopIteration:
            self.exhausted = True
            return None
        except Exception as e:  # noqa: BLE001
            log.debug("token stream failed after %d tokens: %r", self.count, e)
            self.error = e
            self.exhausted = True
            return None
        self.count += 1
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def clean(self) -> bool:
        return self.exhausted and self.error is None


def as_stream(tokens: Union[str, Iterable[Token], TokenStream]) -> TokenStream:
    if isinstance(tokens, TokenStream):
        return tokens
    return TokenStream(tokens)

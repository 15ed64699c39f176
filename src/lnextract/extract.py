"""Single-pass extraction of matching elements from a token stream.

Both extractors track nesting depth so that an element's own closing tag is
told apart from the closing tag of a same-named descendant, and both degrade
silently on truncated or broken input: whatever was captured is returned and
the reason the stream stopped is reported on the `Extraction`.
"""
from __future__ import annotations

import io
from typing import Iterable, List, Optional, Union

from .exceptions import ExtractError
from .log import get_logger
from .matchers import AttrCond, key_in_attr, tag_matches
from .models import Extraction, Token, TokenKind
from .tokenizer import TokenStream, as_stream

log = get_logger(__name__)

Tokens = Union[str, Iterable[Token], TokenStream]


class _Frame:
    """One open capture of `scan_all`."""

    __slots__ = ("open_depth", "buf")

    def __init__(self, open_depth: int):
        self.open_depth = open_depth
        self.buf = io.StringIO()


def _check_tag(tag: str) -> None:
    if not tag:
        raise ExtractError("tag name must not be empty")


def _finish(stream: TokenStream, fragments: List[str], dropped: int = 0) -> Extraction:
    return Extraction(
        fragments=fragments,
        clean=stream.error is None,
        error=stream.error,
        dropped=dropped,
    )


def scan_first(tokens: Tokens, tag: str, cond: Optional[AttrCond] = None) -> Extraction:
    """Capture the first TAG element whose attributes satisfy COND.

    COND is called with each attribute's key and value; None ignores
    attributes. The capture runs from the opening tag through its matching
    closing tag. A stream that ends first yields the partial capture.
    """
    _check_tag(tag)
    stream = as_stream(tokens)
    depth = 0
    capture_depth: Optional[int] = None
    out = io.StringIO()
    done = False
    for token in stream:
        kind = token.kind
        if kind is TokenKind.OPEN:
            depth += 1
            if capture_depth is None and tag_matches(token, tag, cond):
                capture_depth = depth
        elif kind is TokenKind.SELF_CLOSING:
            if capture_depth is None and tag_matches(token, tag, cond):
                return _finish(stream, [token.render()])
        elif kind is TokenKind.CLOSE:
            if capture_depth is not None and token.name == tag and depth == capture_depth:
                done = True
            depth -= 1
        if capture_depth is not None:
            out.write(token.render())
        if done:
            break
    if capture_depth is not None and not done:
        log.debug("<%s> capture cut short by end of stream", tag)
    text = out.getvalue()
    return _finish(stream, [text] if text else [])


def find_first(tokens: Tokens, tag: str, cond: Optional[AttrCond] = None) -> str:
    """Return the markup of the first matching element, or ""."""
    return scan_first(tokens, tag, cond).first


def find_by_attr(tokens: Tokens, tag: str, key: str, value: str) -> str:
    """Return the first TAG whose attribute KEY contains VALUE."""
    return find_first(tokens, tag, key_in_attr(key, value))


def scan_all(tokens: Tokens, tag: str, cond: Optional[AttrCond] = None) -> Extraction:
    """Capture every TAG element satisfying COND, nested ones included.

    Each token is written to every open capture, so a match inside another
    match is reported on its own as well as inside its parent. Fragments are
    ordered by when their element closed; captures never closed are dropped.
    """
    _check_tag(tag)
    stream = as_stream(tokens)
    depth = 0
    frames: List[_Frame] = []
    results: List[str] = []
    for token in stream:
        kind = token.kind
        text = token.render()
        closed: Optional[_Frame] = None
        if kind is TokenKind.SELF_CLOSING:
            if tag_matches(token, tag, cond):
                results.append(text)
        elif kind is TokenKind.OPEN:
            depth += 1
            if tag_matches(token, tag, cond):
                frames.append(_Frame(depth))
        elif kind is TokenKind.CLOSE:
            if frames and token.name == tag and frames[-1].open_depth == depth:
                closed = frames.pop()
            depth -= 1
        for frame in frames:
            frame.buf.write(text)
        if closed is not None:
            closed.buf.write(text)
            results.append(closed.buf.getvalue())
    if frames:
        log.debug("dropping %d unterminated <%s> capture(s)", len(frames), tag)
    return _finish(stream, results, dropped=len(frames))


def find_all(tokens: Tokens, tag: str, cond: Optional[AttrCond] = None) -> List[str]:
    """Return the markup of every matching element in closing order."""
    return scan_all(tokens, tag, cond).fragments

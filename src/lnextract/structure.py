"""Helpers for walking an extracted container: split it into its direct
children, group those children under headings, and strip unwanted elements.
"""
from __future__ import annotations

import io
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .extract import Tokens
from .matchers import AttrCond, tag_matches
from .models import Section, Token, TokenKind
from .tokenizer import as_stream, tokenize

Rule = Tuple[str, Optional[AttrCond]]


def _starts_element(token: Token, rule: Rule) -> bool:
    if token.kind not in (TokenKind.OPEN, TokenKind.SELF_CLOSING):
        return False
    tag, cond = rule
    return tag_matches(token, tag, cond)


def children(fragment: str) -> List[str]:
    """Return the markup of each direct child of the element in FRAGMENT.

    Child elements come back whole; top-level text between them is returned
    as one item per run and skipped when it is only whitespace.
    """
    items: List[str] = []
    text_run = io.StringIO()
    current = io.StringIO()
    depth = 0
    opened = False

    def flush_text() -> None:
        nonlocal text_run
        run = text_run.getvalue()
        if run.strip():
            items.append(run)
        text_run = io.StringIO()

    for token in tokenize(fragment):
        kind = token.kind
        if not opened:
            if kind is TokenKind.OPEN:
                opened = True
            elif kind is TokenKind.SELF_CLOSING:
                return []
            continue
        if depth == 0:
            if kind is TokenKind.CLOSE:
                break
            if kind is TokenKind.OTHER:
                text_run.write(token.render())
                continue
            flush_text()
            if kind is TokenKind.SELF_CLOSING:
                items.append(token.render())
                continue
            current = io.StringIO()
            current.write(token.render())
            depth = 1
            continue
        current.write(token.render())
        if kind is TokenKind.OPEN:
            depth += 1
        elif kind is TokenKind.CLOSE:
            depth -= 1
            if depth == 0:
                items.append(current.getvalue())
    if depth > 0:
        items.append(current.getvalue())
    flush_text()
    return items


def element_matches(fragment: str, tag: str, cond: Optional[AttrCond] = None) -> bool:
    """True if the first tag in FRAGMENT is TAG and satisfies COND."""
    for token in tokenize(fragment):
        if token.is_tag:
            return _starts_element(token, (tag, cond))
    return False


def group_sections(
    items: Iterable[str],
    is_heading: Callable[[str], bool],
    is_end: Optional[Callable[[str], bool]] = None,
) -> List[Section]:
    """Group ITEMS into sections, each started by an item IS_HEADING accepts.

    Items before the first heading are ignored; IS_END stops the walk.
    """
    sections: List[Section] = []
    for item in items:
        if is_end is not None and is_end(item):
            break
        if is_heading(item):
            sections.append(Section(heading=item))
        elif sections:
            sections[-1].items.append(item)
    return sections


def prune(tokens: Tokens, drop: Sequence[Rule] = (), stop: Optional[Rule] = None) -> str:
    """Copy TOKENS back to markup without the elements matching DROP.

    Each rule is a (tag, cond) pair. A dropped element takes all of its
    content with it. Copying ends before the first element matching STOP.
    """
    stream = as_stream(tokens)
    out = io.StringIO()
    skip_depth = 0
    for token in stream:
        if skip_depth:
            if token.kind is TokenKind.OPEN:
                skip_depth += 1
            elif token.kind is TokenKind.CLOSE:
                skip_depth -= 1
            continue
        if stop is not None and _starts_element(token, stop):
            break
        if any(_starts_element(token, rule) for rule in drop):
            if token.kind is TokenKind.OPEN:
                skip_depth = 1
            continue
        out.write(token.render())
    return out.getvalue()

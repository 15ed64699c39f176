from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

from .models import Token

AttrCond = Callable[[str, str], bool]


def value_contains(target: str, value: str) -> bool:
    """Return True if attribute VALUE contains TARGET as one of its space-separated
    words (class-list semantics), or equals it when VALUE has no space.

    The split is on a literal single space, so runs of spaces produce empty
    words that never match a non-empty TARGET.
    """
    if " " in value:
        return target in value.split(" ")
    return value == target


def key_in_attr(key: str, target: str) -> AttrCond:
    """Condition that holds for attribute KEY whose value contains TARGET."""

    def cond(k: str, v: str) -> bool:
        if k != key:
            return False
        return value_contains(target, v)

    return cond


def key_prefix(key: str, prefix: str) -> AttrCond:
    """Condition that holds for attribute KEY whose value starts with PREFIX."""

    def cond(k: str, v: str) -> bool:
        return k == key and v.startswith(prefix)

    return cond


def any_of(*conds: AttrCond) -> AttrCond:
    def cond(k: str, v: str) -> bool:
        return any(c(k, v) for c in conds)

    return cond


def check_attrs(cond: Optional[AttrCond], attrs: Iterable[Tuple[str, str]]) -> bool:
    """True if COND holds for some attribute; None accepts any attributes."""
    if cond is None:
        return True
    for k, v in attrs:
        if cond(k, v):
            return True
    return False


def tag_matches(token: Token, tag: str, cond: Optional[AttrCond] = None) -> bool:
    return token.is_tag and token.name == tag and check_attrs(cond, token.attrs)

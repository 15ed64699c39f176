"""lnextract public API (library-first).

Exports stable functions and classes for pulling verbatim elements out of
HTML for other applications. The CLI is thin and delegates to these modules.
"""
from __future__ import annotations

from .models import Extraction, Section, Token, TokenKind
from .tokenizer import TokenStream, tokenize
from .matchers import any_of, check_attrs, key_in_attr, key_prefix, tag_matches, value_contains
from .extract import find_all, find_by_attr, find_first, scan_all, scan_first
from .structure import children, element_matches, group_sections, prune
from .utils import fragment_text
from .sanitizer import sanitize_fragment
from .exceptions import ExtractError, InputError, LnextractError
from .log import configure_logging

__all__ = [
    "Extraction",
    "Section",
    "Token",
    "TokenKind",
    "TokenStream",
    "tokenize",
    "any_of",
    "check_attrs",
    "key_in_attr",
    "key_prefix",
    "tag_matches",
    "value_contains",
    "find_all",
    "find_by_attr",
    "find_first",
    "scan_all",
    "scan_first",
    "children",
    "element_matches",
    "group_sections",
    "prune",
    "fragment_text",
    "sanitize_fragment",
    "ExtractError",
    "InputError",
    "LnextractError",
    "configure_logging",
]

from __future__ import annotations

import bleach

from .exceptions import ExtractError

BASE_TAGS = frozenset({
    "p", "br", "strong", "em", "b", "i", "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "ul", "ol", "li", "sup", "sub", "table", "thead", "tbody", "tr", "th", "td",
    "pre", "code", "figure", "figcaption", "hr", "div", "span", "a",
})

BASE_ATTRS = {
    "*": ["id", "class"],
    "a": ["href", "name"],
    "table": ["summary"],
    "th": ["scope"],
}

PROFILES = {
    "minimal": (BASE_TAGS, BASE_ATTRS),
    # Keep inline images for callers that embed them later
    "images": (
        BASE_TAGS | {"img"},
        dict(BASE_ATTRS, img=["src", "alt", "width", "height"]),
    ),
}


def sanitize_fragment(html_text: str, profile: str = "minimal") -> str:
    """Profile-based allow-list sanitizer for extracted fragments.

    Disallowed tags are stripped (their text is kept), comments are removed.
    Profiles: minimal, images.
    """
    try:
        tags, attrs = PROFILES[profile]
    except KeyError:
        raise ExtractError(f"unknown sanitizer profile {profile!r}; choose from {', '.join(PROFILES)}")
    cleaner = bleach.Cleaner(tags=tags, attributes=attrs, strip=True, strip_comments=True)
    return cleaner.clean(html_text)

from __future__ import annotations


class LnextractError(Exception):
    """Base user-facing error for lnextract.

    Use this for predictable, actionable failures (unreadable input, bad
    arguments). The CLI catches it and prints a concise message without a
    traceback. Malformed markup is never an error.
    """


class InputError(LnextractError):
    """Input markup could not be read or a command line value is invalid."""


class ExtractError(LnextractError):
    """An extraction helper was called with unusable arguments."""

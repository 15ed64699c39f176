"""Thin CLI over the extraction library.

Keeps a stable entrypoint at `lnextract.cli:main`; all behavior lives in the
library modules.
"""
from __future__ import annotations

from typing import IO, Iterator, List, Optional, Tuple
import argparse
import io
import os
import sys

from .exceptions import InputError, LnextractError
from .extract import scan_all, scan_first
from .log import configure_logging, get_logger
from .matchers import AttrCond, key_in_attr
from .sanitizer import PROFILES, sanitize_fragment
from .structure import children
from .tokenizer import TokenStream, tokenize
from .utils import fragment_text

log = get_logger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2
EXIT_BROKEN_INPUT = 3


def _parse_attr(pair: Optional[str]) -> Optional[AttrCond]:
    if not pair:
        return None
    key, sep, value = pair.partition("=")
    if not sep or not key.strip():
        raise InputError(f"--attr expects KEY=VALUE, got {pair!r}")
    return key_in_attr(key.strip().lower(), value)


def _stdin_text(encoding: str) -> IO[str]:
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding=encoding, errors="replace")


def _open_inputs(paths: List[str], encoding: str) -> Iterator[Tuple[str, IO[str]]]:
    if not paths:
        paths = ["-"]
    for path in paths:
        if path == "-":
            fh = _stdin_text(encoding)
            try:
                yield "<stdin>", fh
            finally:
                # leave sys.stdin's buffer open for later reads
                if fh is not sys.stdin:
                    fh.detach()
            continue
        try:
            fh = open(path, "r", encoding=encoding, errors="replace")
        except OSError as e:
            raise InputError(f"cannot read {path}: {e.strerror or e}")
        with fh:
            yield path, fh


def _render(fragments: List[str], args: argparse.Namespace) -> List[str]:
    out = fragments
    if args.children:
        out = [c for f in out for c in children(f)]
    if args.sanitize:
        out = [sanitize_fragment(f, profile=args.sanitize) for f in out]
    if args.text:
        out = [t for t in (fragment_text(f) for f in out) if t]
    return out


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lnextract",
        description="Print the verbatim markup of elements matching a tag and attribute",
    )
    ap.add_argument("tag", help="Tag name to look for, e.g. div")
    ap.add_argument("files", nargs="*", help="HTML files to read (default: stdin)")
    ap.add_argument("--attr", help="Only match tags whose attribute KEY contains VALUE, e.g. class=entry-content")
    ap.add_argument("--all", action="store_true", help="Print every match instead of the first")
    ap.add_argument("--children", action="store_true", help="Print the direct children of each match")
    ap.add_argument("--text", action="store_true", help="Print plain text instead of markup")
    ap.add_argument("--sanitize", choices=sorted(PROFILES), help="Clean output with an allow-list profile")
    ap.add_argument("--encoding", default=None, help="Input encoding (default: $LNEXTRACT_ENCODING or utf-8)")
    ap.add_argument("--strict", action="store_true", help="Exit 3 when the markup could not be read to the end")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
    return ap


def main(argv: Optional[List[str]] = None, stdout: Optional[IO[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    out = stdout or sys.stdout
    if args.verbose:
        configure_logging("DEBUG" if args.verbose > 1 else "INFO")
    else:
        configure_logging()
    encoding = args.encoding or os.environ.get("LNEXTRACT_ENCODING") or "utf-8"
    tag = args.tag.lower()

    try:
        cond = _parse_attr(args.attr)
        printed = 0
        broken = False
        for name, fh in _open_inputs(args.files, encoding):
            stream = TokenStream(tokenize(fh))
            if args.all:
                result = scan_all(stream, tag, cond)
            else:
                result = scan_first(stream, tag, cond)
            if not result.clean:
                broken = True
                log.warning("%s: markup ended early: %s", name, result.error)
            if result.dropped:
                log.info("%s: %d unterminated <%s> element(s) skipped", name, result.dropped, tag)
            for piece in _render(result.fragments, args):
                print(piece, file=out)
                printed += 1
            log.info("%s: %d match(es)", name, len(result.fragments))
        if broken and args.strict:
            return EXIT_BROKEN_INPUT
        return EXIT_OK if printed else EXIT_NO_MATCH
    except LnextractError as e:
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_ERROR

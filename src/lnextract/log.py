from __future__ import annotations

import logging
import os
from typing import IO, Optional, Union

ROOT = "lnextract"
FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it for module NAME."""
    if not name or name == ROOT:
        return logging.getLogger(ROOT)
    if name.startswith(ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT}.{name}")


def configure_logging(level: Union[int, str, None] = None, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Attach a single console handler to the package logger.

    LEVEL defaults to $LNEXTRACT_LOG_LEVEL, then WARNING. STREAM defaults to
    stderr. Calling this again adjusts the level, and the stream when given.
    """
    if level is None:
        level = os.environ.get("LNEXTRACT_LOG_LEVEL") or "WARNING"
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT)
    logger.setLevel(level)
    for h in logger.handlers:
        if getattr(h, "_lnextract", False):
            if stream is not None:
                h.setStream(stream)
            break
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(FORMAT))
        handler._lnextract = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger

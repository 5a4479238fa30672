# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Logging helpers for the decoder and the CLI."""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT = "lagrange_secret"
_HANDLER_NAME = "lagrange_secret.stderr"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(level: str | int = "WARNING", stream: Optional[IO[str]] = None) -> logging.Handler:
    """Set the package log level and attach one stream handler.

    Calling it again updates the level and points the existing handler at
    *stream* (``sys.stderr`` by default).
    """
    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    target = stream if stream is not None else sys.stderr
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setStream(target)  # type: ignore[attr-defined]
            return handler
    handler = logging.StreamHandler(target)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    return handler


def remove_handler(handler: logging.Handler) -> None:
    """Detach *handler* from the package logger."""
    logging.getLogger(_ROOT).removeHandler(handler)


__all__ = ["configure_logging", "get_logger", "remove_handler"]

# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Runtime configuration for the command line tools.

Values come from ``LAGRANGE_SECRET_*`` environment variables so scripted
deployments can change defaults without passing flags. Malformed values fall
back to the built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _load_str(name: str, default: str) -> str:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _load_int(name: str, default: int, *, minimum: int = 0) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _load_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


def _load_level(name: str, default: str) -> str:
    value = _load_str(name, default).upper()
    if isinstance(logging.getLevelName(value), int):
        return value
    return default


@dataclass(frozen=True)
class Settings:
    """Defaults used by :mod:`lagrange_secret.cli`."""

    input_path: str = "input.json"
    log_level: str = "WARNING"
    strict: bool = False
    term_digits: int = 10


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment."""

    return Settings(
        input_path=_load_str("LAGRANGE_SECRET_INPUT", "input.json"),
        log_level=_load_level("LAGRANGE_SECRET_LOG_LEVEL", "WARNING"),
        strict=_load_bool("LAGRANGE_SECRET_STRICT", False),
        term_digits=_load_int("LAGRANGE_SECRET_TERM_DIGITS", 10),
    )


settings = load_settings()


__all__ = ["Settings", "load_settings", "settings"]

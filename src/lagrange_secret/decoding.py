# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Turn share documents into points for :func:`lagrange_secret.reconstruct`.

A share document looks like::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

Every top-level key made of decimal digits is a share whose x-coordinate is
the key itself. The y-coordinate is ``value`` read in radix ``base``.
"""

from __future__ import annotations

import json
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import DecodingError
from .interpolation import Point
from .log import get_logger

MIN_BASE = 2
MAX_BASE = 36
_DIGITS = string.digits + string.ascii_lowercase
_YAML_SUFFIXES = {".yaml", ".yml"}

_log = get_logger(__name__)


def _unique_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise DecodingError("duplicate key", field=key)
        obj[key] = value
    return obj


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that rejects repeated keys within one mapping."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    continue
                if duplicate:
                    raise DecodingError("duplicate key", field=str(key))
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _as_int(raw: Any, field: str) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    raise DecodingError(f"expected a non-negative integer, got {raw!r}", field=field)


def parse_base(base: Union[int, str], *, field: str = "base") -> int:
    """Validate a radix given as ``int`` or decimal string."""
    radix = _as_int(base, field)
    if not MIN_BASE <= radix <= MAX_BASE:
        raise DecodingError(f"base must be between {MIN_BASE} and {MAX_BASE}, got {radix}", field=field)
    return radix


def decode_value(value: str, base: Union[int, str], *, field: str = "value") -> int:
    """Decode *value* written in radix *base* into an integer.

    Only the digits of the radix are accepted (letters in either case); signs,
    prefixes such as ``0x`` and digit separators are rejected.

    >>> decode_value("111", 2)
    7
    """
    radix = parse_base(base)
    if not isinstance(value, str):
        raise DecodingError(
            f"expected a quoted string, got {type(value).__name__}; quote values in YAML "
            f"documents, unquoted numbers lose digits (0111 reads as octal)",
            field=field,
        )
    text = value.strip()
    if not text:
        raise DecodingError("empty value", field=field)
    if not text.isascii():
        raise DecodingError(f"non-ASCII digits in {text!r}", field=field)
    digits = text.lower()
    allowed = _DIGITS[:radix]
    for ch in digits:
        if ch not in allowed:
            raise DecodingError(f"invalid digit {ch!r} for base {radix}", field=field)
    return int(digits, radix)


@dataclass(frozen=True)
class DecodedShare:
    x: int
    base: int
    encoded: str
    y: int

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class ShareDocument:
    """A decoded share document, shares kept in document order."""

    threshold: int
    shares: tuple[DecodedShare, ...]
    declared_count: Optional[int] = None

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(share.point for share in self.shares)


def _share_key(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and key.isascii() and key.isdigit():
        return int(key)
    return None


def _decode_share(x: int, entry: Any) -> DecodedShare:
    field = str(x)
    if not isinstance(entry, Mapping):
        raise DecodingError("share entry must be an object with base and value", field=field)
    if "base" not in entry:
        raise DecodingError("missing base", field=f"{field}.base")
    if "value" not in entry:
        raise DecodingError("missing value", field=f"{field}.value")
    base = parse_base(entry["base"], field=f"{field}.base")
    encoded = entry["value"]
    y = decode_value(encoded, base, field=f"{field}.value")
    _log.debug("Point %s: %s (base %s) = %s", x, encoded, base, y)
    return DecodedShare(x=x, base=base, encoded=encoded.strip(), y=y)


def parse_document(document: Any) -> ShareDocument:
    """Validate an already-parsed document and decode its shares."""
    if not isinstance(document, Mapping):
        raise DecodingError("document must be an object")

    keys = document.get("keys")
    if keys is not None and not isinstance(keys, Mapping):
        raise DecodingError("must be an object", field="keys")
    keys = keys or {}

    if "k" in keys:
        threshold = _as_int(keys["k"], "keys.k")
    elif "k" in document:
        threshold = _as_int(document["k"], "k")
    else:
        raise DecodingError("missing threshold", field="keys.k")

    declared = None
    if "n" in keys:
        declared = _as_int(keys["n"], "keys.n")
    elif "n" in document:
        declared = _as_int(document["n"], "n")

    shares = []
    for key, entry in document.items():
        x = _share_key(key)
        if x is None:
            continue
        shares.append(_decode_share(x, entry))

    if declared is not None and declared != len(shares):
        _log.warning("Document declares n=%s but contains %s shares", declared, len(shares))
    _log.info("Decoded %s shares with threshold k=%s", len(shares), threshold)
    return ShareDocument(threshold=threshold, shares=tuple(shares), declared_count=declared)


def loads(text: str, *, fmt: str = "json") -> ShareDocument:
    """Parse *text* as JSON (``fmt="json"``) or YAML (``fmt="yaml"``)."""
    if fmt == "json":
        try:
            document = json.loads(text, object_pairs_hook=_unique_object)
        except json.JSONDecodeError as exc:
            raise DecodingError(f"invalid JSON: {exc}") from exc
    elif fmt == "yaml":
        try:
            document = yaml.load(text, Loader=_UniqueKeyLoader)
        except yaml.YAMLError as exc:
            raise DecodingError(f"invalid YAML: {exc}") from exc
    else:
        raise ValueError(f"unknown format {fmt!r}")
    return parse_document(document)


def load_document(path: Union[str, Path]) -> ShareDocument:
    """Read a share document from *path*; ``.yaml``/``.yml`` files are YAML."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise DecodingError(f"cannot read {p}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise DecodingError(f"{p} is not UTF-8 text") from exc
    fmt = "yaml" if p.suffix.lower() in _YAML_SUFFIXES else "json"
    _log.debug("Loading %s document from %s", fmt, p)
    return loads(text, fmt=fmt)


__all__ = [
    "DecodedShare",
    "MAX_BASE",
    "MIN_BASE",
    "ShareDocument",
    "decode_value",
    "load_document",
    "loads",
    "parse_base",
    "parse_document",
]

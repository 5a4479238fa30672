# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Exact reconstruction of Shamir-shared secrets.

``reconstruct``
    Recover ``f(0)`` from the first ``k`` decoded points.

``load_document``
    Read a share document (JSON or YAML) and decode its base-encoded values.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .decoding import DecodedShare, ShareDocument, decode_value, load_document, parse_document
from .errors import (
    DecodingError,
    DegenerateInput,
    InconsistentResult,
    InsufficientPoints,
    InvalidThreshold,
    LagrangeSecretError,
    ReconstructionError,
)
from .interpolation import LagrangeTerm, Point, Secret, interpolate, lagrange_basis, reconstruct, round_half_up

__all__ = [
    "DecodedShare",
    "DecodingError",
    "DegenerateInput",
    "InconsistentResult",
    "InsufficientPoints",
    "InvalidThreshold",
    "LagrangeSecretError",
    "LagrangeTerm",
    "Point",
    "ReconstructionError",
    "Secret",
    "ShareDocument",
    "__version__",
    "decode_value",
    "interpolate",
    "lagrange_basis",
    "load_document",
    "parse_document",
    "reconstruct",
    "round_half_up",
]

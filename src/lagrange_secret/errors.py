# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Exception hierarchy shared by the interpolator and its collaborators."""

from __future__ import annotations

from typing import Any


class LagrangeSecretError(Exception):
    """Base class for every error raised by :mod:`lagrange_secret`."""


class ReconstructionError(LagrangeSecretError, ValueError):
    """A fatal condition that prevents the secret from being reconstructed."""


class InvalidThreshold(ReconstructionError):
    """The threshold is not a positive integer or exceeds the points given."""

    def __init__(self, message: str, *, threshold: Any = None) -> None:
        super().__init__(message)
        self.threshold = threshold


class InsufficientPoints(InvalidThreshold):
    """Fewer points were supplied than the threshold requires."""

    def __init__(self, threshold: int, available: int) -> None:
        super().__init__(
            f"Not enough points. Need {threshold}, got {available}",
            threshold=threshold,
        )
        self.available = available


class DegenerateInput(ReconstructionError):
    """Two selected points share an x-coordinate."""

    def __init__(self, x: Any, first: int, second: int) -> None:
        super().__init__(
            f"Duplicate x-coordinate {x} at positions {first} and {second}"
        )
        self.x = x
        self.indices = (first, second)


class InconsistentResult(UserWarning):
    """The interpolated value at zero is not an integer.

    Never raised by the interpolator itself; it is attached to the returned
    :class:`~lagrange_secret.interpolation.Secret` so callers can decide
    whether to trust the rounded value.
    """

    def __init__(self, value: Any, rounded: int) -> None:
        super().__init__(
            f"Points are not consistent with an integer polynomial: "
            f"f(0) = {value}, rounded to {rounded}"
        )
        self.value = value
        self.rounded = rounded


class DecodingError(LagrangeSecretError, ValueError):
    """Raised when a share document or an encoded value cannot be decoded."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message if field is None else f"{field}: {message}")
        self.field = field


__all__ = [
    "DecodingError",
    "DegenerateInput",
    "InconsistentResult",
    "InsufficientPoints",
    "InvalidThreshold",
    "LagrangeSecretError",
    "ReconstructionError",
]

# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2025 lagrange-secret contributors

"""Exact Lagrange interpolation of a shared secret.

``reconstruct``
    Recover ``f(0)`` from the first ``k`` points of a point set.

``interpolate``
    Evaluate the polynomial passing through the given points at any rational
    ``x``.

All arithmetic is done with :class:`fractions.Fraction`, so the result is
exact for any coordinate size. Nothing in this module logs or prints; callers
that want to trace the computation pass an ``on_term`` observer.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, NamedTuple, Optional, Sequence

from .errors import DegenerateInput, InconsistentResult, InsufficientPoints, InvalidThreshold


class Point(NamedTuple):
    x: numbers.Rational
    y: numbers.Rational


@dataclass(frozen=True)
class LagrangeTerm:
    """One summand ``y_i * L_i(at)`` of the interpolation."""

    index: int
    x: Fraction
    y: Fraction
    basis: Fraction

    @property
    def contribution(self) -> Fraction:
        return self.y * self.basis


TermObserver = Callable[[LagrangeTerm], None]


def round_half_up(value: numbers.Rational) -> int:
    """Round to the nearest integer, ties away from zero."""
    value = Fraction(value)
    magnitude = (2 * abs(value.numerator) + value.denominator) // (2 * value.denominator)
    return magnitude if value >= 0 else -magnitude


@dataclass(frozen=True)
class Secret:
    """Result of a reconstruction.

    ``value`` is the exact interpolated ``f(0)`` in lowest terms. ``integer``
    is the value rounded half-up, which equals ``value`` whenever the points
    were consistent.
    """

    value: Fraction
    threshold: int
    points: tuple[Point, ...]

    @property
    def exact(self) -> bool:
        return self.value.denominator == 1

    @property
    def integer(self) -> int:
        return round_half_up(self.value)

    @property
    def warning(self) -> Optional[InconsistentResult]:
        if self.exact:
            return None
        return InconsistentResult(self.value, self.integer)

    def __int__(self) -> int:
        return self.integer


def _as_fraction(value: object, name: str) -> Fraction:
    if isinstance(value, bool) or not isinstance(value, numbers.Rational):
        raise TypeError(f"{name} must be an int or Fraction, got {type(value).__name__}")
    return Fraction(value)


def _coerce(points: Sequence[Sequence[numbers.Rational]]) -> list[Point]:
    coerced = []
    for i, point in enumerate(points):
        x, y = point
        coerced.append(Point(_as_fraction(x, f"x[{i}]"), _as_fraction(y, f"y[{i}]")))
    return coerced


def _check_distinct(points: Sequence[Point]) -> None:
    seen: dict[Fraction, int] = {}
    for i, point in enumerate(points):
        if point.x in seen:
            raise DegenerateInput(point.x, seen[point.x], i)
        seen[point.x] = i


def lagrange_basis(xs: Sequence[numbers.Rational], i: int, at: numbers.Rational = 0) -> Fraction:
    """Return ``L_i(at) = prod_{j != i} (at - x_j) / (x_i - x_j)``."""
    xi = Fraction(xs[i])
    num = Fraction(1)
    den = Fraction(1)
    for j, xj in enumerate(xs):
        if j == i:
            continue
        if xj == xi:
            raise DegenerateInput(xi, min(i, j), max(i, j))
        num *= at - xj
        den *= xi - xj
    return num / den


def _terms(points: Sequence[Point], at: Fraction) -> list[LagrangeTerm]:
    xs = [p.x for p in points]
    return [
        LagrangeTerm(index=i, x=p.x, y=p.y, basis=lagrange_basis(xs, i, at))
        for i, p in enumerate(points)
    ]


def interpolate(
    points: Sequence[Sequence[numbers.Rational]],
    at: numbers.Rational = 0,
    *,
    on_term: Optional[TermObserver] = None,
) -> Fraction:
    """Evaluate the interpolating polynomial through *points* at *at*.

    Every point is used. Raises :class:`DegenerateInput` on a repeated x and
    :class:`InsufficientPoints` when *points* is empty.
    """
    selected = _coerce(points)
    if not selected:
        raise InsufficientPoints(1, 0)
    _check_distinct(selected)

    total = Fraction(0)
    for term in _terms(selected, _as_fraction(at, "at")):
        if on_term is not None:
            on_term(term)
        total += term.contribution
    return total


def reconstruct(
    points: Sequence[Sequence[numbers.Rational]],
    k: int,
    *,
    on_term: Optional[TermObserver] = None,
) -> Secret:
    """Recover the secret ``f(0)`` from the first *k* of *points*.

    Points beyond the first *k* are ignored; pre-filter *points* to use a
    different subset. *on_term* is called once per selected point, in order.
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidThreshold(f"Threshold must be an integer, got {k!r}", threshold=k)
    if k < 1:
        raise InvalidThreshold(f"Threshold must be at least 1, got {k}", threshold=k)
    if len(points) < k:
        raise InsufficientPoints(int(k), len(points))

    selected = _coerce(points[:k])
    value = interpolate(selected, 0, on_term=on_term)
    return Secret(value=value, threshold=int(k), points=tuple(selected))


__all__ = [
    "LagrangeTerm",
    "Point",
    "Secret",
    "TermObserver",
    "interpolate",
    "lagrange_basis",
    "reconstruct",
    "round_half_up",
]

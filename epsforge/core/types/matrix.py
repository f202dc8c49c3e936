# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge Types Matrix Module

Affine transformation matrix in PostScript's six-element form [a b c d tx ty]:

    x' = a*x + c*y + tx
    y' = b*x + d*y + ty

Products and inverses are computed with high-precision decimal arithmetic on
the decimal values of the float operands and converted back once, so chains
such as translate(5, 5) translate(-5, -5) land on exact values and tiny
scale factors keep their full precision. Rotation factors within 1e-15 of 0
or +-1 are snapped, so rotate(pi/2) is exact.
"""

from __future__ import annotations

import math
from decimal import Decimal, getcontext
from typing import Iterator, Tuple, Union

from ..error import NonInvertibleTransformError

# Set high precision for decimal arithmetic
getcontext().prec = 50

_TRIG_EPSILON = 1e-15

Number = Union[int, float]


def _dec(value: Number) -> Decimal:
    return Decimal(str(value))


def _float(value: Decimal) -> float:
    result = float(value)
    return 0.0 if result == 0 else result


def _snap(value: float) -> float:
    for exact in (0.0, 1.0, -1.0):
        if abs(value - exact) < _TRIG_EPSILON:
            return exact
    return value


def _matmult(m1: "Matrix", m2: "Matrix") -> "Matrix":
    """
    Multiplies m1 by m2: the result applies m1 first, then m2.
    """
    a1, b1, c1, d1, tx1, ty1 = (_dec(v) for v in m1)
    a2, b2, c2, d2, tx2, ty2 = (_dec(v) for v in m2)

    # [a1  b1  0]   [a2  b2  0]
    # [c1  d1  0] x [c2  d2  0]
    # [tx1 ty1 1]   [tx2 ty2 1]
    return Matrix(
        _float(a1 * a2 + b1 * c2),
        _float(a1 * b2 + b1 * d2),
        _float(c1 * a2 + d1 * c2),
        _float(c1 * b2 + d1 * d2),
        _float(tx1 * a2 + ty1 * c2 + tx2),
        _float(tx1 * b2 + ty1 * d2 + ty2),
    )


def _matrix_inverse(m: "Matrix") -> "Matrix":
    """
    Inverse of an affine matrix using the direct formula.

    Intermediate results are kept at full Decimal precision; the final
    entries are converted back to float once.

    Raises:
        NonInvertibleTransformError: if the determinant is zero
    """
    a, b, c, d, tx, ty = (_dec(v) for v in m)

    det = a * d - b * c
    if det == 0:
        raise NonInvertibleTransformError(m)

    return Matrix(
        _float(d / det),
        _float(-b / det),
        _float(-c / det),
        _float(a / det),
        _float((c * ty - d * tx) / det),
        _float((b * tx - a * ty) / det),
    )


class Matrix:
    """Immutable 2D affine transform."""

    __slots__ = ('a', 'b', 'c', 'd', 'tx', 'ty')

    def __init__(self, a: Number = 1.0, b: Number = 0.0, c: Number = 0.0,
                 d: Number = 1.0, tx: Number = 0.0, ty: Number = 0.0) -> None:
        object.__setattr__(self, 'a', float(a))
        object.__setattr__(self, 'b', float(b))
        object.__setattr__(self, 'c', float(c))
        object.__setattr__(self, 'd', float(d))
        object.__setattr__(self, 'tx', float(tx))
        object.__setattr__(self, 'ty', float(ty))

    def __setattr__(self, name, value):
        raise AttributeError("Matrix is immutable")

    # factories

    @classmethod
    def identity(cls) -> "Matrix":
        return cls()

    @classmethod
    def translation(cls, tx: Number, ty: Number) -> "Matrix":
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: Number, sy: Number) -> "Matrix":
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def shearing(cls, shx: Number, shy: Number) -> "Matrix":
        return cls(1.0, shy, shx, 1.0, 0.0, 0.0)

    @classmethod
    def rotation(cls, theta: float, x: Number = 0.0, y: Number = 0.0) -> "Matrix":
        """Rotation by theta radians about (x, y)."""
        cos_t = _snap(math.cos(theta))
        sin_t = _snap(math.sin(theta))
        rotate = cls(cos_t, sin_t, -sin_t, cos_t, 0.0, 0.0)
        if x == 0 and y == 0:
            return rotate
        return cls.translation(x, y).concatenate(rotate).concatenate(cls.translation(-x, -y))

    # algebra

    def concatenate(self, other: "Matrix") -> "Matrix":
        """self o other: ``other`` is applied to a point first."""
        return _matmult(other, self)

    def pre_concatenate(self, other: "Matrix") -> "Matrix":
        """other o self: ``self`` is applied to a point first."""
        return _matmult(self, other)

    def inverse(self) -> "Matrix":
        return _matrix_inverse(self)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def is_identity(self) -> bool:
        return (self.a == 1.0 and self.b == 0.0 and self.c == 0.0
                and self.d == 1.0 and self.tx == 0.0 and self.ty == 0.0)

    def transform_point(self, x: Number, y: Number) -> Tuple[float, float]:
        return (self.a * x + self.c * y + self.tx,
                self.b * x + self.d * y + self.ty)

    def transform_delta(self, x: Number, y: Number) -> Tuple[float, float]:
        return (self.a * x + self.c * y,
                self.b * x + self.d * y)

    # container protocol

    def __iter__(self) -> Iterator[float]:
        return iter((self.a, self.b, self.c, self.d, self.tx, self.ty))

    def as_list(self) -> list:
        return list(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Matrix({self.a!r}, {self.b!r}, {self.c!r}, {self.d!r}, {self.tx!r}, {self.ty!r})"

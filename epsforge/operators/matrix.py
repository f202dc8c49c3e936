# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import Optional, Tuple, Union

from ..core import types as ps
from .graphics_state import append_font, append_stroke

Number = Union[int, float]


def concat(ctxt, m: ps.Matrix) -> None:
    """
    Concatenate ``m`` onto the current transform.

    The new matrix is applied to coordinates first, so after
    ``concat(A); concat(B)`` a point p lands on A(B(p)). The stroke and font
    are re-asserted as by set_matrix().
    """
    set_matrix(ctxt, ctxt.gstate.transform.concatenate(m))


def translate(ctxt, tx: Number, ty: Number) -> None:
    concat(ctxt, ps.Matrix.translation(tx, ty))


def scale(ctxt, sx: Number, sy: Number) -> None:
    concat(ctxt, ps.Matrix.scaling(sx, sy))


def rotate(ctxt, theta: float, x: Optional[Number] = None, y: Optional[Number] = None) -> None:
    """Rotate by ``theta`` radians, about (x, y) when given."""
    if x is None or y is None:
        concat(ctxt, ps.Matrix.rotation(theta))
    else:
        concat(ctxt, ps.Matrix.rotation(theta, x, y))


def shear(ctxt, shx: Number, shy: Number) -> None:
    concat(ctxt, ps.Matrix.shearing(shx, shy))


def set_matrix(ctxt, m: Optional[ps.Matrix]) -> None:
    """
    Replace the current transform; None means identity.

    The stroke is re-asserted without output and the font operator is
    re-emitted in native text mode, since both are interpreted in the new
    user space.
    """
    ctxt.gstate.transform = ps.Matrix.identity() if m is None else m
    append_stroke(ctxt, ctxt.gstate.stroke)
    append_font(ctxt, ctxt.gstate.font)


def current_matrix(ctxt) -> ps.Matrix:
    return ctxt.gstate.transform


def device_point(ctxt, x: Number, y: Number) -> Tuple[float, float]:
    """User space point through the current transform, before the Y flip."""
    m = ctxt.gstate.transform
    if m.is_identity():
        return (x, y)
    return m.transform_point(x, y)


def device_path(ctxt, path: ps.Path, matrix: Optional[ps.Matrix] = None) -> ps.Path:
    """``path`` through ``matrix`` (the current transform by default)."""
    m = ctxt.gstate.transform if matrix is None else matrix
    if m.is_identity():
        return path
    return path.transformed(m)

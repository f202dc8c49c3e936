# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path decomposition.

A shape in device space (Y up after the flip applied here) is written as one
operator per segment, bracketed by ``newpath`` so that no path leaks into
the next drawing call:

    newpath
    x y moveto
    x y lineto
    x1 y1 x2 y2 x3 y3 curveto
    closepath
    <action>
    newpath
"""

from typing import Iterator, Tuple, Union

from ..core import types as ps

Number = Union[int, float]


def quad_to_cubic(x0: Number, y0: Number, x1: Number, y1: Number,
                  x2: Number, y2: Number) -> Tuple[float, float, float, float, float, float]:
    """
    Degree-elevate the quadratic Bezier P0, Q, P1 to the identical cubic:
    C1 = P0 + 2/3 (Q - P0), C2 = Q + 1/3 (P1 - Q).

    Args:
        x0, y0: start point (the current point)
        x1, y1: quadratic control point
        x2, y2: end point

    Returns:
        (c1x, c1y, c2x, c2y, x2, y2) operands for curveto
    """
    c1x = x0 + 2.0 / 3.0 * (x1 - x0)
    c1y = y0 + 2.0 / 3.0 * (y1 - y0)
    c2x = x1 + 1.0 / 3.0 * (x2 - x1)
    c2y = y1 + 1.0 / 3.0 * (y2 - y1)
    return (c1x, c1y, c2x, c2y, x2, y2)


def path_operators(path: ps.Path) -> Iterator[str]:
    """Yield one operator line per segment of ``path``, negating every Y."""
    current = None
    start = None
    for segment in path:
        if isinstance(segment, ps.MoveTo):
            current = start = segment.p
            yield f"{ps.fmt_all(segment.p.x, -segment.p.y)} moveto"
        elif isinstance(segment, ps.LineTo):
            current = segment.p
            yield f"{ps.fmt_all(segment.p.x, -segment.p.y)} lineto"
        elif isinstance(segment, ps.QuadTo):
            c1x, c1y, c2x, c2y, x3, y3 = quad_to_cubic(
                current.x, current.y, segment.p1.x, segment.p1.y, segment.p2.x, segment.p2.y)
            current = segment.p2
            yield f"{ps.fmt_all(c1x, -c1y, c2x, -c2y, x3, -y3)} curveto"
        elif isinstance(segment, ps.CurveTo):
            p1, p2, p3 = segment.p1, segment.p2, segment.p3
            current = p3
            yield f"{ps.fmt_all(p1.x, -p1.y, p2.x, -p2.y, p3.x, -p3.y)} curveto"
        elif isinstance(segment, ps.ClosePath):
            current = start
            yield "closepath"


def emit_path(ctxt, device_path: ps.Path, action: str) -> None:
    """
    Write ``device_path`` followed by ``action`` (stroke, fill or clip).

    The path must already be in device orientation (transformed by the
    current matrix); only the Y flip happens here. An empty path still
    produces ``newpath <action> newpath``: for clip that clips everything,
    for stroke and fill it paints nothing.
    """
    ctxt.emit("newpath")
    for line in path_operators(device_path):
        ctxt.emit(line)
    ctxt.emit(action)
    ctxt.emit("newpath")

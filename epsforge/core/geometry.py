# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Geometry adapters over Cairo and Shapely.

Shape construction (ovals, arcs, rounded rectangles) is delegated to Cairo's
path builder: the shape is traced on a scratch context and read back with
copy_path(), so curves come out as the same cubic approximations Cairo
renders with. Area operations (clip intersection, hit testing) flatten the
outline with copy_path_flat() and hand the resulting rings to Shapely.

All coordinates are in the caller's (Y down) user space.
"""

import math
from typing import Optional, Sequence

import cairo
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, box
from shapely.validation import make_valid

from . import types as ps
from ..operators.path import quad_to_cubic


def scratch_context() -> cairo.Context:
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 1, 1)
    return cairo.Context(surface)


def path_from_cairo(cairo_path) -> ps.Path:
    """
    Convert a Cairo path (from copy_path) into a ps.Path.

    Cairo starts a new implicit subpath after every close_path; a MoveTo that
    is immediately superseded by another MoveTo draws nothing, so it is
    dropped.
    """
    path = ps.Path()
    pending_move = None
    for kind, points in cairo_path:
        if kind == cairo.PATH_MOVE_TO:
            pending_move = points
            continue
        if pending_move is not None:
            path.move_to(*pending_move)
            pending_move = None
        if kind == cairo.PATH_LINE_TO:
            path.line_to(*points)
        elif kind == cairo.PATH_CURVE_TO:
            path.curve_to(*points)
        elif kind == cairo.PATH_CLOSE_PATH:
            path.close_path()
    return path


def load_path(cairo_ctx: cairo.Context, path: ps.Path) -> None:
    """Replace the current Cairo path with ``path``."""
    cairo_ctx.new_path()
    for segment in path:
        if isinstance(segment, ps.MoveTo):
            cairo_ctx.move_to(segment.p.x, segment.p.y)
        elif isinstance(segment, ps.LineTo):
            cairo_ctx.line_to(segment.p.x, segment.p.y)
        elif isinstance(segment, ps.QuadTo):
            x0, y0 = cairo_ctx.get_current_point()
            cairo_ctx.curve_to(*quad_to_cubic(x0, y0, segment.p1.x, segment.p1.y,
                                              segment.p2.x, segment.p2.y))
        elif isinstance(segment, ps.CurveTo):
            cairo_ctx.curve_to(segment.p1.x, segment.p1.y,
                               segment.p2.x, segment.p2.y,
                               segment.p3.x, segment.p3.y)
        elif isinstance(segment, ps.ClosePath):
            cairo_ctx.close_path()


# Shape constructors

def rectangle(x: float, y: float, width: float, height: float) -> ps.Path:
    path = ps.Path()
    if width < 0 or height < 0:
        return path
    return (path.move_to(x, y)
            .line_to(x + width, y)
            .line_to(x + width, y + height)
            .line_to(x, y + height)
            .close_path())


def line(x1: float, y1: float, x2: float, y2: float) -> ps.Path:
    return ps.Path().move_to(x1, y1).line_to(x2, y2)


def polyline(x_points: Sequence[float], y_points: Sequence[float],
             n_points: Optional[int] = None) -> ps.Path:
    if n_points is None:
        n_points = min(len(x_points), len(y_points))
    path = ps.Path()
    if n_points <= 0:
        return path
    path.move_to(x_points[0], y_points[0])
    for i in range(1, n_points):
        path.line_to(x_points[i], y_points[i])
    return path


def polygon(x_points: Sequence[float], y_points: Sequence[float],
            n_points: Optional[int] = None) -> ps.Path:
    path = polyline(x_points, y_points, n_points)
    if not path.is_empty():
        path.close_path()
    return path


def ellipse(x: float, y: float, width: float, height: float) -> ps.Path:
    if width <= 0 or height <= 0:
        return ps.Path()
    cc = scratch_context()
    cc.save()
    cc.translate(x + width / 2.0, y + height / 2.0)
    cc.scale(width / 2.0, height / 2.0)
    cc.arc(0.0, 0.0, 1.0, 0.0, 2.0 * math.pi)
    cc.restore()
    cc.close_path()
    return path_from_cairo(cc.copy_path())


def arc(x: float, y: float, width: float, height: float,
        start_angle: float, arc_angle: float, closure: int = ps.ARC_OPEN) -> ps.Path:
    """
    Elliptical arc inside the given frame.

    Angles are in degrees, 0 at three o'clock, positive counter-clockwise as
    seen on the page. Since user space has Y pointing down, that is Cairo's
    negative direction.
    """
    if width <= 0 or height <= 0:
        return ps.Path()
    cx = x + width / 2.0
    cy = y + height / 2.0
    cc = scratch_context()
    cc.new_path()
    if closure == ps.ARC_PIE:
        cc.move_to(cx, cy)
    cc.save()
    cc.translate(cx, cy)
    cc.scale(width / 2.0, height / 2.0)
    a1 = -math.radians(start_angle)
    a2 = -math.radians(start_angle + arc_angle)
    if arc_angle >= 0:
        cc.arc_negative(0.0, 0.0, 1.0, a1, a2)
    else:
        cc.arc(0.0, 0.0, 1.0, a1, a2)
    cc.restore()
    if closure != ps.ARC_OPEN:
        cc.close_path()
    return path_from_cairo(cc.copy_path())


def _corner(cc: cairo.Context, cx: float, cy: float, rx: float, ry: float,
            a1: float, a2: float) -> None:
    cc.save()
    cc.translate(cx, cy)
    cc.scale(rx, ry)
    cc.arc(0.0, 0.0, 1.0, a1, a2)
    cc.restore()


def round_rectangle(x: float, y: float, width: float, height: float,
                    arc_width: float, arc_height: float) -> ps.Path:
    if width < 0 or height < 0:
        return ps.Path()
    rx = min(abs(arc_width) / 2.0, width / 2.0)
    ry = min(abs(arc_height) / 2.0, height / 2.0)
    if rx <= 0 or ry <= 0:
        return rectangle(x, y, width, height)
    half_pi = math.pi / 2.0
    cc = scratch_context()
    cc.new_path()
    _corner(cc, x + width - rx, y + ry, rx, ry, -half_pi, 0.0)
    _corner(cc, x + width - rx, y + height - ry, rx, ry, 0.0, half_pi)
    _corner(cc, x + rx, y + height - ry, rx, ry, half_pi, math.pi)
    _corner(cc, x + rx, y + ry, rx, ry, math.pi, 3.0 * half_pi)
    cc.close_path()
    return path_from_cairo(cc.copy_path())


# Area operations

def _polygonal(geometry):
    """Keep only the polygon parts of a Shapely geometry."""
    if geometry.is_empty:
        return GeometryCollection()
    if isinstance(geometry, (Polygon, MultiPolygon)):
        return geometry
    parts = [g for g in getattr(geometry, 'geoms', ()) if isinstance(g, (Polygon, MultiPolygon))]
    if not parts:
        return GeometryCollection()
    result = parts[0]
    for part in parts[1:]:
        result = result.union(part)
    return result


def to_geometry(path: ps.Path):
    """
    Flatten an outline into a Shapely area.

    Subpaths are combined with the even-odd rule, which is how glyph
    counters and other nested outlines become holes.
    """
    cc = scratch_context()
    cc.set_tolerance(ps.FLATNESS)
    load_path(cc, path)

    rings = []
    current = []
    for kind, points in cc.copy_path_flat():
        if kind == cairo.PATH_MOVE_TO:
            if len(current) >= 3:
                rings.append(current)
            current = [points]
        elif kind == cairo.PATH_LINE_TO:
            current.append(points)
        elif kind == cairo.PATH_CLOSE_PATH:
            if len(current) >= 3:
                rings.append(current)
            current = []
    if len(current) >= 3:
        rings.append(current)

    area = None
    for ring in rings:
        piece = _polygonal(make_valid(Polygon(ring)))
        if piece.is_empty:
            continue
        area = piece if area is None else _polygonal(area.symmetric_difference(piece))
    return area if area is not None else GeometryCollection()


def from_geometry(geometry) -> ps.Path:
    """Trace every polygon ring of a Shapely area as a closed subpath."""
    path = ps.Path()
    geometry = _polygonal(geometry)
    if geometry.is_empty:
        return path
    polygons = geometry.geoms if isinstance(geometry, MultiPolygon) else [geometry]
    for poly in polygons:
        for ring in [poly.exterior, *poly.interiors]:
            coords = list(ring.coords)[:-1]
            if len(coords) < 3:
                continue
            path.move_to(*coords[0])
            for x, y in coords[1:]:
                path.line_to(x, y)
            path.close_path()
    return path


def intersect(a: ps.Path, b: ps.Path) -> ps.Path:
    """The area common to both outlines, as a polygonal path (possibly empty)."""
    return from_geometry(to_geometry(a).intersection(to_geometry(b)))


def intersects_rect(path: ps.Path, x: float, y: float, width: float, height: float) -> bool:
    area = to_geometry(path)
    if area.is_empty:
        return False
    return area.intersects(box(x, y, x + width, y + height))

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import Optional

from ..core import types as ps
from .graphics_state import emit_stroke
from .matrix import device_path
from .path import emit_path


def visible_bounds(ctxt, shape_bounds):
    """
    Device-space bounds of a mark, clipped to the active clip's device bounds.

    Returns None when the mark lies entirely outside the clip.
    """
    gstate = ctxt.gstate
    if gstate.clip is None:
        return shape_bounds
    clip_bounds = device_path(ctxt, gstate.clip, gstate.clip_transform).bounds()
    if clip_bounds is None:
        return None
    min_x = max(shape_bounds[0], clip_bounds[0])
    min_y = max(shape_bounds[1], clip_bounds[1])
    max_x = min(shape_bounds[2], clip_bounds[2])
    max_y = min(shape_bounds[3], clip_bounds[3])
    if min_x > max_x or min_y > max_y:
        return None
    return (min_x, min_y, max_x, max_y)


def update_bounds(ctxt, shape_bounds, line_radius: float = 0.0) -> None:
    """Grow the document bounding box by a device-space rectangle (Y down)."""
    bounds = visible_bounds(ctxt, shape_bounds)
    if bounds is None:
        return
    min_x, min_y, max_x, max_y = bounds
    ctxt.document.update_bounds(min_x - line_radius, -(min_y - line_radius))
    ctxt.document.update_bounds(max_x + line_radius, -(max_y + line_radius))


def draw(ctxt, shape: Optional[ps.Path], action: str, matrix: Optional[ps.Matrix] = None) -> None:
    """
    Paint ``shape`` with ``action`` (stroke or fill).

    The stroke parameters are written before every mark, the shape is mapped
    through ``matrix`` (the current transform by default) and the bounding
    box grows by the mark's visible extent plus half the line width.
    """
    if shape is None or shape.is_empty():
        return

    emit_stroke(ctxt)
    transformed = device_path(ctxt, shape, matrix)
    update_bounds(ctxt, transformed.bounds(), 0.5 * ctxt.gstate.stroke.width)
    emit_path(ctxt, transformed, action)


def stroke(ctxt, shape: Optional[ps.Path]) -> None:
    draw(ctxt, shape, ps.ACTION_STROKE)


def fill(ctxt, shape: Optional[ps.Path]) -> None:
    draw(ctxt, shape, ps.ACTION_FILL)

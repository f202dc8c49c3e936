# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Clip compositing.

PostScript has no operator that replaces the clip, only one that narrows it,
so each clip is installed inside its own gsave level. The document keeps one
flag recording whether that level is open: installing a new clip first pops
the previous one with grestore, and the trailer pops whatever is still open.
The stack is therefore never deeper than one.
"""

from typing import Optional, Tuple

from ..core import error as ps_error
from ..core import geometry
from ..core import types as ps
from .color_ops import append_color
from .graphics_state import append_font
from .matrix import device_path
from .path import emit_path


def restore_appearance(ctxt) -> None:
    """Re-emit the color and font that a grestore rolled back."""
    append_color(ctxt, ctxt.gstate.color)
    append_font(ctxt, ctxt.gstate.font)


def set_clip(ctxt, shape: Optional[ps.Path]) -> None:
    """
    Replace the clip with ``shape`` (user space); None removes the clip.

    An empty, non-None shape clips everything away. Popping the previous
    clip level also rolls back color and font, so both are written again
    afterwards.
    """
    document = ctxt.document
    document.activate(ctxt.id)
    gstate = ctxt.gstate

    if shape is None:
        if document.clip_set:
            ctxt.emit("grestore")
            document.clip_set = False
            restore_appearance(ctxt)
        gstate.clip = None
        return

    replacing = document.clip_set
    if replacing:
        ctxt.emit("grestore")
        ctxt.emit("gsave")
    else:
        document.clip_set = True
        ctxt.emit("gsave")

    emit_path(ctxt, device_path(ctxt, shape), ps.ACTION_CLIP)
    gstate.clip = shape.copy()
    gstate.clip_transform = gstate.transform
    if replacing:
        restore_appearance(ctxt)


def install_clip(ctxt, shape: ps.Path, clip_transform: ps.Matrix) -> None:
    """Re-install a clip recorded under ``clip_transform``, restoring the current transform afterwards."""
    gstate = ctxt.gstate
    transform = gstate.transform
    gstate.transform = clip_transform
    try:
        set_clip(ctxt, shape)
    finally:
        gstate.transform = transform


def get_clip(ctxt) -> Optional[ps.Path]:
    """
    The clip in the current user space.

    The clip was recorded under the transform active at the time, so it is
    mapped through inverse(current) o clip_transform.

    Raises:
        NonInvertibleTransformError: the current transform or the transform
            the clip was installed under is singular
    """
    gstate = ctxt.gstate
    if gstate.clip is None:
        return None
    if gstate.clip_transform.determinant() == 0:
        raise ps_error.NonInvertibleTransformError(gstate.clip_transform)
    m = gstate.transform.inverse().concatenate(gstate.clip_transform)
    if m.is_identity():
        return gstate.clip.copy()
    return gstate.clip.transformed(m)


def get_clip_bounds(ctxt) -> Optional[Tuple[float, float, float, float]]:
    """(x, y, width, height) of the clip in user space, or None without a clip."""
    path = get_clip(ctxt)
    if path is None:
        return None
    bounds = path.bounds()
    if bounds is None:
        return (0.0, 0.0, 0.0, 0.0)
    min_x, min_y, max_x, max_y = bounds
    return (min_x, min_y, max_x - min_x, max_y - min_y)


def clip(ctxt, shape: Optional[ps.Path]) -> None:
    """Narrow the clip to its intersection with ``shape``."""
    if ctxt.gstate.clip is None or shape is None:
        set_clip(ctxt, shape)
        return
    set_clip(ctxt, geometry.intersect(get_clip(ctxt), shape))


def clip_rect(ctxt, x: float, y: float, width: float, height: float) -> None:
    clip(ctxt, geometry.rectangle(x, y, width, height))


def set_clip_rect(ctxt, x: float, y: float, width: float, height: float) -> None:
    set_clip(ctxt, geometry.rectangle(x, y, width, height))


def hit(x: float, y: float, width: float, height: float, shape: ps.Path) -> bool:
    """True when ``shape`` overlaps the rectangle."""
    return geometry.intersects_rect(shape, x, y, width, height)


def hit_clip(ctxt, x: float, y: float, width: float, height: float) -> bool:
    """True when the rectangle might intersect the clip; always True without a clip."""
    if ctxt.gstate.clip is None:
        return True
    return hit(x, y, width, height, get_clip(ctxt))

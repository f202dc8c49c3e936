# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import Optional

from ..core import fonts
from ..core import geometry
from ..core import types as ps
from .matrix import device_path, device_point
from .painting import fill, update_bounds


def draw_string(ctxt, text: Optional[str], x: float, y: float) -> None:
    """
    Draw ``text`` with its baseline starting at (x, y).

    In accurate text mode the glyph outlines are filled, so the output does
    not depend on the fonts installed where the EPS file is viewed. Otherwise
    the text is written with ``show`` in the font most recently selected with
    findfont/scalefont; the transform then only moves the starting point.
    """
    if not text:
        return
    if ctxt.gstate.accurate_text:
        show_outline(ctxt, text, x, y)
    else:
        show_native(ctxt, text, x, y)


def show_outline(ctxt, text: str, x: float, y: float) -> None:
    fill(ctxt, fonts.text_outline(text, ctxt.gstate.font, x, y))


def show_native(ctxt, text: str, x: float, y: float) -> None:
    dx, dy = device_point(ctxt, x, y)
    ctxt.emit("newpath")
    ctxt.emit(f"{ps.fmt_all(dx, -dy)} moveto")
    ctxt.emit(f"({ps.ps_string(text)}) show")

    x_bearing, y_bearing, width, height, x_advance, _y_advance = fonts.text_extents(text, ctxt.gstate.font)
    extent = geometry.rectangle(x + min(x_bearing, 0.0), y + y_bearing,
                                max(width + x_bearing, x_advance) - min(x_bearing, 0.0), height)
    bounds = device_path(ctxt, extent).bounds()
    if bounds is not None:
        update_bounds(ctxt, bounds)


def draw_glyph_outline(ctxt, outline: Optional[ps.Path], x: float, y: float) -> None:
    """Fill a glyph outline given relative to its origin, placed at (x, y)."""
    if outline is None:
        return
    fill(ctxt, outline.transformed(ps.Matrix.translation(x, y)))

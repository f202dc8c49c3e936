# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Graphics-state setters.

Each setter updates the context's GraphicsState and, where the attribute has
a PostScript counterpart, writes the operator that brings the output's
graphics state in line. Stroke parameters are not written when the stroke
is set; painting re-emits them in front of every stroke or fill instead.
"""

from typing import Optional

from ..core import error as ps_error
from ..core import types as ps
from .color_ops import set_color


def stroke_operators(stroke: ps.BasicStroke):
    """Operator lines for the stroke parameters, in the order they are written."""
    miter_limit = stroke.miter_limit if stroke.miter_limit >= 1.0 else 1.0
    dashes = " ".join(ps.fmt(d) for d in stroke.dash) if stroke.dash else ""
    dash_array = f"[ {dashes} ]" if dashes else "[ ]"
    return [
        f"{ps.fmt(stroke.width)} setlinewidth",
        f"{ps.fmt(miter_limit)} setmiterlimit",
        f"{stroke.join} setlinejoin",
        f"{stroke.cap} setlinecap",
        f"{dash_array} {ps.fmt(stroke.dash_phase)} setdash",
    ]


def append_stroke(ctxt, stroke: ps.BasicStroke) -> None:
    """
    Make ``stroke`` the current stroke without writing anything.

    Raises:
        UnsupportedStrokeError: ``stroke`` is not a BasicStroke
    """
    if not isinstance(stroke, ps.BasicStroke):
        raise ps_error.UnsupportedStrokeError(stroke)
    ctxt.gstate.stroke = stroke


def emit_stroke(ctxt) -> None:
    for line in stroke_operators(ctxt.gstate.stroke):
        ctxt.emit(line)


def set_stroke(ctxt, stroke: ps.BasicStroke) -> None:
    append_stroke(ctxt, stroke)


def font_operator(font: ps.Font) -> str:
    return f"/{font.ps_name} findfont {ps.fmt(font.size)} scalefont setfont"


def append_font(ctxt, font: ps.Font) -> None:
    """Write the font selection, which only native text mode uses."""
    if not ctxt.gstate.accurate_text:
        ctxt.emit(font_operator(font))


def set_font(ctxt, font: Optional[ps.Font]) -> None:
    """Set the current font. None means the default font."""
    ctxt.gstate.font = ps.Font() if font is None else font
    append_font(ctxt, ctxt.gstate.font)


def set_accurate_text(ctxt, accurate: bool) -> None:
    ctxt.gstate.accurate_text = bool(accurate)
    if not ctxt.gstate.accurate_text:
        set_font(ctxt, ctxt.gstate.font)


def set_background(ctxt, color: Optional[ps.Color]) -> None:
    ctxt.gstate.background = ps.Color.BLACK if color is None else color


def set_paint(ctxt, paint: Optional[ps.Paint]) -> None:
    """
    Set the current paint.

    A flat Color paint is also made the current color and written. Other
    paints (gradients) cannot be expressed in EPS and are only stored.
    """
    ctxt.gstate.paint = paint
    if isinstance(paint, ps.Color):
        set_color(ctxt, paint)


def set_composite(ctxt, composite: Optional[ps.AlphaComposite]) -> None:
    ctxt.gstate.composite = composite

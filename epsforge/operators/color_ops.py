# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Color-mode encoding.

Every color is written as exactly one operator line, chosen by the document
color mode:

- BLACK_AND_WHITE: ``0 setgray`` or ``1 setgray`` by the channel-sum threshold
- GRAYSCALE: ``g setgray`` with g the channel average in [0, 1]
- COLOR_RGB: ``r g b setrgbcolor``
- COLOR_CMYK: ``c m y k setcmykcolor`` with black generation K = min(C, M, Y)
"""

from typing import Optional, Tuple

from ..core import types as ps


def rgb_to_cmyk(red: int, green: int, blue: int) -> Tuple[float, float, float, float]:
    """
    Naive device CMYK with full under-color removal.

    Pure black is special-cased to (0, 0, 0, 1), which would otherwise divide
    by 1 - K = 0.
    """
    if red == 0 and green == 0 and blue == 0:
        return (0.0, 0.0, 0.0, 1.0)
    c = 1.0 - red / 255.0
    m = 1.0 - green / 255.0
    y = 1.0 - blue / 255.0
    k = min(c, m, y)
    return ((c - k) / (1.0 - k), (m - k) / (1.0 - k), (y - k) / (1.0 - k), k)


def gray_level(red: int, green: int, blue: int) -> float:
    return (red + green + blue) / (3.0 * 255.0)


def is_white(red: int, green: int, blue: int) -> bool:
    """Black-and-white decision: True when the channel sum clears the threshold."""
    return red + green + blue > ps.BW_THRESHOLD


def color_operator(color: ps.Color, mode: ps.ColorMode) -> str:
    """The operator line that selects ``color`` under ``mode``."""
    r, g, b = color.rgb
    if mode == ps.ColorMode.BLACK_AND_WHITE:
        return "1 setgray" if is_white(r, g, b) else "0 setgray"
    if mode == ps.ColorMode.GRAYSCALE:
        return f"{ps.fmt(gray_level(r, g, b))} setgray"
    if mode == ps.ColorMode.COLOR_CMYK:
        return f"{ps.fmt_all(*rgb_to_cmyk(r, g, b))} setcmykcolor"
    return f"{ps.fmt_all(r / 255.0, g / 255.0, b / 255.0)} setrgbcolor"


def append_color(ctxt, color: ps.Color) -> None:
    ctxt.emit(color_operator(color, ctxt.gstate.color_mode))


def set_color(ctxt, color: Optional[ps.Color]) -> None:
    """Set and emit the current color. None means black."""
    if color is None:
        color = ps.Color.BLACK
    ctxt.gstate.color = color
    append_color(ctxt, color)


def set_color_mode(ctxt, mode: ps.ColorMode) -> None:
    """Switch the color mode; the current color is re-emitted when it changes."""
    if mode == ctxt.gstate.color_mode:
        return
    ctxt.gstate.color_mode = mode
    append_color(ctxt, ctxt.gstate.color)

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Font metrics and glyph outlines from the platform text stack.

Cairo's toy font API resolves a family name through fontconfig, lays the text
out and hands back the glyph outlines as a path. Accurate text mode fills
those outlines; native text mode only needs the metrics, to place the
bounding box around a ``show``.
"""

from dataclasses import dataclass

import cairo

from . import types as ps
from .geometry import scratch_context, path_from_cairo


@dataclass(frozen=True)
class FontMetrics:
    ascent: float
    descent: float
    height: float
    max_advance: float

    @property
    def leading(self) -> float:
        return max(0.0, self.height - self.ascent - self.descent)


def _select_font(cc: cairo.Context, font: ps.Font) -> None:
    slant = cairo.FONT_SLANT_ITALIC if font.is_italic else cairo.FONT_SLANT_NORMAL
    weight = cairo.FONT_WEIGHT_BOLD if font.is_bold else cairo.FONT_WEIGHT_NORMAL
    cc.select_font_face(font.family, slant, weight)
    cc.set_font_size(font.size)


def font_metrics(font: ps.Font) -> FontMetrics:
    cc = scratch_context()
    _select_font(cc, font)
    ascent, descent, height, max_x_advance, _max_y_advance = cc.font_extents()
    return FontMetrics(ascent, descent, height, max_x_advance)


def text_extents(text: str, font: ps.Font):
    """
    Cairo text extents of ``text`` relative to its baseline origin:
    (x_bearing, y_bearing, width, height, x_advance, y_advance).
    """
    cc = scratch_context()
    _select_font(cc, font)
    return cc.text_extents(text)


def string_width(text: str, font: ps.Font) -> float:
    return text_extents(text, font)[4]


def text_outline(text: str, font: ps.Font, x: float, y: float) -> ps.Path:
    """Glyph outlines of ``text`` with the baseline starting at (x, y)."""
    cc = scratch_context()
    _select_font(cc, font)
    cc.move_to(x, y)
    cc.text_path(text)
    return path_from_cairo(cc.copy_path())

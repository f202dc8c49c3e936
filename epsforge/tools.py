# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
One-call export of anything that can draw itself on a graphics context.
"""

from __future__ import annotations

import logging
import os
from typing import Protocol, TextIO, Tuple, Union

from .core import types as ps
from .graphics import EpsGraphics

logger = logging.getLogger(__name__)


class Drawable(Protocol):
    """An object that renders itself into ``area`` (x, y, width, height) of ``g``."""

    def draw(self, g: EpsGraphics, area: Tuple[float, float, float, float]) -> None:
        ...


def create_from_drawable(drawable: Drawable,
                         output: Union[TextIO, str, os.PathLike],
                         title: str = "Drawable Export",
                         x: float = 0.0, y: float = 0.0,
                         width: float = 0.0, height: float = 0.0,
                         color_mode: ps.ColorMode = ps.ColorMode.default_value()) -> bool:
    """
    Render ``drawable`` into a new EPS document written to ``output``.

    The frame (x, y, width, height) seeds the bounding box and is handed to
    the drawable as its drawing area.

    Returns:
        True on success; False if drawing or writing failed (the exception
        is logged)
    """
    try:
        g = EpsGraphics(title, output, (x, y, x + width, y + height), color_mode=color_mode)
        drawable.draw(g, (x, y, width, height))
        g.finish()
        return True
    except Exception:
        logger.exception("Could not export %r to EPS", drawable)
        return False

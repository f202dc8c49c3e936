# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge Types Constants Module

Numeric codes and enumerations shared by the graphics state, the operator
emitters and the output document. Line cap and join codes are the values
PostScript's setlinecap and setlinejoin operators expect.
"""

import enum

VERSION = "1.5.0"

# line cap types
LINE_CAP_BUTT = 0
LINE_CAP_ROUND = 1
LINE_CAP_SQUARE = 2

# line join types
LINE_JOIN_MITER = 0
LINE_JOIN_ROUND = 1
LINE_JOIN_BEVEL = 2

# font styles (bit flags)
FONT_PLAIN = 0
FONT_BOLD = 1
FONT_ITALIC = 2

# arc closures
ARC_OPEN = 0
ARC_CHORD = 1
ARC_PIE = 2

# path actions
ACTION_STROKE = "stroke"
ACTION_FILL = "fill"
ACTION_CLIP = "clip"

# Black-and-white threshold on the channel sum: (R + G + B) > 1.5 * 255 - 1
BW_THRESHOLD = 255 * 1.5 - 1

# Hex image payload line width in characters
HEX_LINE_WIDTH = 64

# Fractional digits written for coordinates and color components
NUMBER_PRECISION = 6

# Tolerance used when flattening curves into polygons
FLATNESS = 0.1


class ColorMode(enum.Enum):
    """Interpretation of RGB input for ink or gray output."""

    BLACK_AND_WHITE = "bw"
    GRAYSCALE = "gray"
    COLOR_RGB = "rgb"
    COLOR_CMYK = "cmyk"

    @classmethod
    def default_value(cls) -> "ColorMode":
        return cls.COLOR_RGB

    @classmethod
    def from_name(cls, name: str) -> "ColorMode":
        """Accept either the short value (``cmyk``) or the member name (``COLOR_CMYK``)."""
        key = name.strip()
        for mode in cls:
            if key.lower() == mode.value or key.upper() == mode.name:
                return mode
        raise ValueError(f"Unknown color mode: '{name}'")

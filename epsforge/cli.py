# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge command line.

    epsforge photo.png -o photo.eps --color-mode gray --width 288 --text "Figure 1"

The image is placed with its top left corner at the origin, scaled to the
requested size (keeping the aspect ratio when only one dimension is given),
with an optional caption under it.
"""

from __future__ import annotations

import logging
import os
import sys

from .cli_args import get_output_name, parse_args
from .core import error as ps_error
from .core import types as ps
from .core.pixel_buffer import PixelBuffer
from .graphics import EpsGraphics

logger = logging.getLogger(__name__)

CAPTION_GAP = 6.0


def _placed_size(pixels: PixelBuffer, width, height):
    if width is None and height is None:
        return float(pixels.width), float(pixels.height)
    if width is None:
        return height * pixels.width / pixels.height, height
    if height is None:
        return width, width * pixels.height / pixels.width
    return width, height


def render(args) -> str:
    """
    Write the EPS file described by ``args``. Returns the output path.

    Raises:
        OSError: the input image could not be read
        EpsError: the document could not be produced
    """
    pixels = PixelBuffer.open(args.inputfile)
    width, height = _placed_size(pixels, args.width, args.height)
    output = get_output_name(args.outputfile, args.inputfile)
    title = args.title or os.path.basename(args.inputfile)

    logger.info("Embedding %s (%dx%d) as %s, %s x %s pt, %s",
                args.inputfile, pixels.width, pixels.height, output,
                ps.fmt(width), ps.fmt(height), args.color_mode.value)

    g = EpsGraphics(title, output, color_mode=args.color_mode)
    # the image matrix needs integer source dimensions, so scale the context
    # and place the image at its natural size
    g.scale(width / pixels.width, height / pixels.height)
    g.draw_image(pixels, 0, 0)
    g.set_transform(None)

    if args.text:
        metrics = g.get_font_metrics()
        g.draw_string(args.text, 0, height + CAPTION_GAP + metrics.ascent)

    g.close()
    logger.info("Bounding box %s", g.document.bounding_box)
    return output


def main(argv=None) -> int:
    """
    Main entry point for the EpsForge command line.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = render(args)
    except OSError as e:
        print(f"epsforge: {e}", file=sys.stderr)
        return 1
    except ps_error.EpsError as e:
        print(f"epsforge: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Inline image emission.

Images are written as 8-bit samples read by ``image`` (one gray channel) or
``colorimage`` (three RGB channels) from hex data that follows the operator
in the body:

    gsave
    <background fill of the destination rectangle>
    sw sh 8 [a b c d tx ty]
    {currentfile sw string readhexstring pop} bind
    image
    <hex lines>
    grestore

The image matrix maps user space onto the unit sample grid, which is the
inverse of the placement transform, flipped so that the first sample row is
the top of the image.
"""

from typing import Iterator

import numpy as np

from ..core import error as ps_error
from ..core import geometry
from ..core import types as ps
from ..core.pixel_buffer import PixelBuffer
from .color_ops import set_color
from .painting import fill


def sample_bytes(rgb: np.ndarray, mode: ps.ColorMode) -> np.ndarray:
    """
    Encode an (h, w, 3) uint8 array as the sample bytes for ``mode``.

    B&W gives one 0x00/0xff sample per pixel, grayscale one integer channel
    average, RGB and CMYK three RGB samples (CMYK images are written as RGB).
    """
    channels = rgb.astype(np.uint16)
    total = channels[..., 0] + channels[..., 1] + channels[..., 2]
    if mode == ps.ColorMode.BLACK_AND_WHITE:
        samples = np.where(total > ps.BW_THRESHOLD, 255, 0).astype(np.uint8)
    elif mode == ps.ColorMode.GRAYSCALE:
        samples = (total // 3).astype(np.uint8)
    else:
        samples = rgb.astype(np.uint8)
    return np.ascontiguousarray(samples).reshape(-1)


def hex_lines(samples: np.ndarray, line_width: int = ps.HEX_LINE_WIDTH) -> Iterator[str]:
    """Lowercase hex of ``samples`` in lines of ``line_width`` characters."""
    data = samples.tobytes().hex()
    for start in range(0, len(data), line_width):
        yield data[start:start + line_width]


def image_matrix(ctxt, dx1: float, dy1: float, dw: float, dh: float,
                 sw: int, sh: int) -> ps.Matrix:
    """
    Matrix operand for ``image``: inverse(T . translate(dx1, dy1) . scale(dw/sw, dh/sh)) . scale(1, -1).

    Raises:
        NonInvertibleTransformError: the placement transform is singular
    """
    placement = (ctxt.gstate.transform
                 .concatenate(ps.Matrix.translation(dx1, dy1))
                 .concatenate(ps.Matrix.scaling(dw / sw, dh / sh)))
    return placement.inverse().concatenate(ps.Matrix.scaling(1, -1))


def draw_image(ctxt, image, dx1: int, dy1: int, dx2: int, dy2: int,
               sx1: int, sy1: int, sx2: int, sy2: int) -> bool:
    """
    Draw the source rectangle [sx1, sx2) x [sy1, sy2) of ``image`` scaled
    into the destination rectangle [dx1, dx2) x [dy1, dy2).

    Nothing is written unless every check passes.

    Raises:
        InvalidArgumentError: a rectangle is empty or inverted, or the source
            rectangle leaves the image
        NonInvertibleTransformError: the placement transform is singular
    """
    if dx1 >= dx2:
        raise ps_error.InvalidArgumentError("dx1 >= dx2")
    if sx1 >= sx2:
        raise ps_error.InvalidArgumentError("sx1 >= sx2")
    if dy1 >= dy2:
        raise ps_error.InvalidArgumentError("dy1 >= dy2")
    if sy1 >= sy2:
        raise ps_error.InvalidArgumentError("sy1 >= sy2")

    pixels = PixelBuffer.coerce(image)
    if sx1 < 0 or sy1 < 0 or sx2 > pixels.width or sy2 > pixels.height:
        raise ps_error.InvalidArgumentError(
            f"Source rectangle ({sx1}, {sy1}, {sx2}, {sy2}) outside image of size {pixels.size}")

    sw = sx2 - sx1
    sh = sy2 - sy1
    dw = dx2 - dx1
    dh = dy2 - dy1
    m = image_matrix(ctxt, dx1, dy1, dw, dh, sw, sh)
    mode = ctxt.gstate.color_mode
    samples = sample_bytes(pixels.rgb(sx1, sy1, sx2, sy2), mode)

    ctxt.emit("gsave")

    # the background fill also grows the bounding box over the image area
    color = ctxt.gstate.color
    set_color(ctxt, ctxt.gstate.background)
    fill(ctxt, geometry.rectangle(dx1, dy1, dw, dh))
    set_color(ctxt, color)

    ctxt.emit(f"{sw} {sh} 8 [{ps.fmt_all(*m)}]")
    if mode in (ps.ColorMode.BLACK_AND_WHITE, ps.ColorMode.GRAYSCALE):
        ctxt.emit(f"{{currentfile {sw} string readhexstring pop}} bind")
        ctxt.emit("image")
    else:
        ctxt.emit(f"{{currentfile 3 {sw} mul string readhexstring pop}} bind")
        ctxt.emit("false 3 colorimage")

    for line in hex_lines(samples):
        ctxt.emit(line)
    ctxt.emit("grestore")
    return True

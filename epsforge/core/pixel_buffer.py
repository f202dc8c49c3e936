# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Raster source for image emission.

A PixelBuffer wraps a ``numpy.uint8`` array of shape (height, width, 3) or
(height, width, 4). It can be built from a Pillow image, an array, or the
path of any image file Pillow can read. Alpha is carried along but ignored
when the samples are encoded.
"""

from __future__ import annotations

import os
from typing import Union

import numpy as np
from PIL import Image

from .error import InvalidArgumentError


class PixelBuffer:

    def __init__(self, pixels: np.ndarray) -> None:
        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            pixels = np.stack([pixels] * 3, axis=-1)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InvalidArgumentError(f"Expected a (height, width, 3|4) array, got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            pixels = np.clip(pixels, 0, 255).astype(np.uint8)
        self.pixels = pixels

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> "PixelBuffer":
        with Image.open(path) as image:
            image.load()
            return cls.from_image(image)

    @classmethod
    def coerce(cls, source) -> "PixelBuffer":
        """Accept a PixelBuffer, a Pillow image, an array or an image path."""
        if isinstance(source, PixelBuffer):
            return source
        if isinstance(source, Image.Image):
            return cls.from_image(source)
        if isinstance(source, (str, os.PathLike)):
            return cls.open(source)
        return cls(source)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self):
        return (self.width, self.height)

    def rgb(self, x1: int = 0, y1: int = 0, x2: int = None, y2: int = None) -> np.ndarray:
        """The RGB channels of the source rectangle [x1, x2) x [y1, y2)."""
        x2 = self.width if x2 is None else x2
        y2 = self.height if y2 is None else y2
        return self.pixels[y1:y2, x1:x2, :3]

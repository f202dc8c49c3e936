from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest

import numpy as np
from PIL import Image

from epsforge import cli
from epsforge.cli_args import get_output_name, parse_args
from epsforge.core import types as ps
from epsforge.core.pixel_buffer import PixelBuffer


class CommandLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.image_path = os.path.join(self.tmp, "swatch.png")
        Image.new("RGB", (4, 2), (255, 0, 0)).save(self.image_path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_eps(self) -> None:
        out = os.path.join(self.tmp, "swatch.eps")
        self.assertEqual(cli.main([self.image_path, "-o", out, "--color-mode", "gray"]), 0)
        with open(out, encoding="latin-1") as f:
            text = f.read()
        self.assertIn("%%Title: swatch.png", text)
        self.assertIn("4 2 8 [1 0 0 -1 0 0]", text)
        self.assertIn("\nimage\n", text)
        self.assertIn("%%BoundingBox: -1 -3 5 1", text)

    def test_scaled_placement(self) -> None:
        out = os.path.join(self.tmp, "wide.eps")
        self.assertEqual(cli.main([self.image_path, "-o", out, "--width", "8", "--title", "Wide"]), 0)
        with open(out, encoding="latin-1") as f:
            text = f.read()
        self.assertIn("%%Title: Wide", text)
        self.assertIn("%%HiResBoundingBox: -0.5 -4.5 8.5 0.5", text)

    def test_missing_input(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = cli.main([os.path.join(self.tmp, "missing.png")])
        self.assertEqual(code, 1)
        self.assertTrue(stderr.getvalue().startswith("epsforge: "))

    def test_bad_color_mode(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args([self.image_path, "--color-mode", "sepia"])

    def test_non_positive_width(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args([self.image_path, "--width", "0"])

    def test_defaults(self) -> None:
        args = parse_args([self.image_path])
        self.assertIsNone(args.outputfile)
        self.assertIs(args.color_mode, ps.ColorMode.COLOR_RGB)
        self.assertFalse(args.verbose)


class OutputNameTests(unittest.TestCase):
    def test_explicit_name_wins(self) -> None:
        self.assertEqual(get_output_name("out.eps", "in.png"), "out.eps")

    def test_derived_from_input(self) -> None:
        self.assertEqual(get_output_name(None, os.path.join("photos", "cat.jpeg")), "cat.eps")


class PlacementTests(unittest.TestCase):
    def test_aspect_ratio_is_kept(self) -> None:
        pixels = PixelBuffer(np.zeros((2, 4, 3), dtype=np.uint8))
        self.assertEqual(cli._placed_size(pixels, None, None), (4.0, 2.0))
        self.assertEqual(cli._placed_size(pixels, 8.0, None), (8.0, 4.0))
        self.assertEqual(cli._placed_size(pixels, None, 1.0), (2.0, 1.0))
        self.assertEqual(cli._placed_size(pixels, 3.0, 3.0), (3.0, 3.0))


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from epsforge.core import types as ps
from epsforge.graphics import EpsGraphics
from epsforge.operators.color_ops import color_operator, rgb_to_cmyk

BW = ps.ColorMode.BLACK_AND_WHITE
GRAY = ps.ColorMode.GRAYSCALE
RGB = ps.ColorMode.COLOR_RGB
CMYK = ps.ColorMode.COLOR_CMYK


class ColorOperatorTests(unittest.TestCase):
    def test_black_and_white_threshold(self) -> None:
        self.assertEqual(color_operator(ps.Color(200, 200, 200), BW), "1 setgray")
        self.assertEqual(color_operator(ps.Color(127, 127, 127), BW), "0 setgray")
        self.assertEqual(color_operator(ps.Color(128, 127, 127), BW), "1 setgray")
        self.assertEqual(color_operator(ps.Color(0, 0, 0), BW), "0 setgray")

    def test_grayscale(self) -> None:
        self.assertEqual(color_operator(ps.Color.WHITE, GRAY), "1 setgray")
        self.assertEqual(color_operator(ps.Color.BLACK, GRAY), "0 setgray")
        self.assertEqual(color_operator(ps.Color(51, 102, 153), GRAY), "0.4 setgray")

    def test_rgb(self) -> None:
        self.assertEqual(color_operator(ps.Color(255, 0, 51), RGB), "1 0 0.2 setrgbcolor")
        self.assertEqual(color_operator(ps.Color.BLACK, RGB), "0 0 0 setrgbcolor")

    def test_cmyk(self) -> None:
        self.assertEqual(color_operator(ps.Color.BLACK, CMYK), "0 0 0 1 setcmykcolor")
        self.assertEqual(color_operator(ps.Color.WHITE, CMYK), "0 0 0 0 setcmykcolor")
        self.assertEqual(color_operator(ps.Color(255, 0, 0), CMYK), "0 1 1 0 setcmykcolor")
        self.assertEqual(color_operator(ps.Color(1, 1, 1), CMYK), "0 0 0 0.996078 setcmykcolor")

    def test_every_mode_writes_one_line(self) -> None:
        for mode in ps.ColorMode:
            self.assertNotIn("\n", color_operator(ps.Color(12, 200, 99), mode))


class ColorGridTests(unittest.TestCase):
    LEVELS = sorted(set(range(0, 256, 5)) | {1, 254})

    def operands(self, color: ps.Color, mode: ps.ColorMode, operator: str, count: int) -> list:
        tokens = color_operator(color, mode).split()
        self.assertEqual(tokens[-1], operator, color)
        self.assertEqual(len(tokens), count + 1, color)
        return [float(token) for token in tokens[:-1]]

    def test_every_mode_stays_in_range(self) -> None:
        for r in self.LEVELS:
            for g in self.LEVELS:
                for b in self.LEVELS:
                    color = ps.Color(r, g, b)
                    (bw,) = self.operands(color, BW, "setgray", 1)
                    self.assertIn(bw, (0.0, 1.0))
                    (gray,) = self.operands(color, GRAY, "setgray", 1)
                    self.assertTrue(0.0 <= gray <= 1.0, color)
                    for value in self.operands(color, RGB, "setrgbcolor", 3):
                        self.assertTrue(0.0 <= value <= 1.0, color)
                    for value in self.operands(color, CMYK, "setcmykcolor", 4):
                        self.assertTrue(0.0 <= value <= 1.0, color)

    def test_edges(self) -> None:
        self.assertEqual(self.operands(ps.Color.BLACK, CMYK, "setcmykcolor", 4), [0, 0, 0, 1])
        self.assertEqual(self.operands(ps.Color.WHITE, CMYK, "setcmykcolor", 4), [0, 0, 0, 0])
        self.assertEqual(self.operands(ps.Color(254, 254, 254), BW, "setgray", 1), [1.0])
        self.assertEqual(self.operands(ps.Color(1, 1, 1), BW, "setgray", 1), [0.0])


class CmykNearBlackTests(unittest.TestCase):
    def test_components_stay_in_range_as_k_approaches_one(self) -> None:
        for level in range(0, 8):
            for color in ((level, level, level), (level + 1, level, level), (level, 0, level + 2)):
                c, m, y, k = rgb_to_cmyk(*color)
                for value in (c, m, y, k):
                    self.assertGreaterEqual(value, 0.0, color)
                    self.assertLessEqual(value, 1.0 + 1e-12, color)

    def test_gray_inks_only_black(self) -> None:
        for level in (1, 2, 64, 254):
            c, m, y, k = rgb_to_cmyk(level, level, level)
            self.assertEqual((c, m, y), (0.0, 0.0, 0.0))
            self.assertAlmostEqual(k, 1.0 - level / 255.0)

    def test_near_black_red_keeps_full_magenta_and_yellow(self) -> None:
        c, m, y, k = rgb_to_cmyk(1, 0, 0)
        self.assertAlmostEqual(c, 0.0)
        self.assertAlmostEqual(m, 1.0)
        self.assertAlmostEqual(y, 1.0)
        self.assertAlmostEqual(k, 254.0 / 255.0)


class ContextColorTests(unittest.TestCase):
    def test_initial_color_is_written(self) -> None:
        self.assertEqual(EpsGraphics().document.body_lines(), ["0 0 0 setrgbcolor"])
        self.assertEqual(EpsGraphics(color_mode=CMYK).document.body_lines(),
                         ["0 0 0 1 setcmykcolor"])

    def test_set_color_none_is_black(self) -> None:
        g = EpsGraphics()
        g.set_color(ps.Color(255, 0, 0))
        g.set_color(None)
        self.assertEqual(g.get_color(), ps.Color.BLACK)
        self.assertEqual(g.document.body_lines()[-1], "0 0 0 setrgbcolor")

    def test_color_mode_change_rewrites_current_color(self) -> None:
        g = EpsGraphics()
        g.set_color(ps.Color(255, 0, 0))
        mark = len(g.document.body_lines())
        g.set_color_mode(GRAY)
        self.assertEqual(g.document.body_lines()[mark:], ["0.333333 setgray"])
        g.set_color_mode(GRAY)
        self.assertEqual(len(g.document.body_lines()), mark + 1)
        self.assertEqual(g.get_color_mode(), GRAY)

    def test_color_mode_from_name(self) -> None:
        self.assertIs(ps.ColorMode.from_name("cmyk"), CMYK)
        self.assertIs(ps.ColorMode.from_name("BLACK_AND_WHITE"), BW)
        with self.assertRaises(ValueError):
            ps.ColorMode.from_name("sepia")


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from epsforge.core import geometry
from epsforge.core import types as ps
from epsforge.core.error import NonInvertibleTransformError
from epsforge.graphics import EpsGraphics

RED = ps.Color(255, 0, 0)
BLUE = ps.Color(0, 0, 255)


def _balanced(lines) -> bool:
    depth = 0
    for line in lines:
        if line == "gsave":
            depth += 1
        elif line == "grestore":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


CLIP_SQUARE = [
    "newpath",
    "0 0 moveto",
    "10 0 lineto",
    "10 -10 lineto",
    "0 -10 lineto",
    "closepath",
    "clip",
    "newpath",
]


class ClipCompositorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.g = EpsGraphics()
        self.mark = len(self.g.document.body_lines())
        self.square = geometry.rectangle(0, 0, 10, 10)

    def emitted(self) -> list:
        return self.g.document.body_lines()[self.mark:]

    def test_first_clip_opens_a_level(self) -> None:
        self.g.set_clip(self.square)
        self.assertEqual(self.emitted(), ["gsave"] + CLIP_SQUARE)
        self.assertTrue(self.g.document.clip_set)

    def test_setting_the_same_clip_twice(self) -> None:
        self.g.set_clip(self.square)
        self.g.set_clip(self.square)
        lines = self.emitted()
        self.assertEqual(lines, ["gsave"] + CLIP_SQUARE + ["grestore", "gsave"] + CLIP_SQUARE
                         + ["0 0 0 setrgbcolor"])
        self.assertEqual(lines.count("grestore"), 1)
        self.assertEqual(lines.count("gsave"), 2)

    def test_clip_does_not_write_stroke_parameters(self) -> None:
        self.g.set_clip(self.square)
        self.assertNotIn("1 setlinewidth", self.emitted())

    def test_removing_the_clip(self) -> None:
        self.g.set_clip(self.square)
        mark = len(self.g.document.body_lines())
        self.g.set_clip(None)
        self.g.set_clip(None)
        self.assertEqual(self.g.document.body_lines()[mark:], ["grestore", "0 0 0 setrgbcolor"])
        self.assertFalse(self.g.document.clip_set)
        self.assertIsNone(self.g.get_clip())
        self.assertIsNone(self.g.get_clip_bounds())

    def test_empty_clip_clips_everything(self) -> None:
        self.g.set_clip(ps.Path())
        self.assertEqual(self.emitted(), ["gsave", "newpath", "clip", "newpath"])

    def test_trailer_closes_open_clip(self) -> None:
        self.g.set_clip(self.square)
        text = self.g.getvalue()
        self.assertTrue(text.endswith("newpath\ngrestore\ngrestore\nshowpage\n%%Trailer\n%%EOF\n"))

    def test_clip_read_back_in_current_user_space(self) -> None:
        self.g.set_clip(self.square)
        self.g.translate(5, 5)
        self.assertEqual(self.g.get_clip().bounds(), (-5.0, -5.0, 5.0, 5.0))
        self.assertEqual(self.g.get_clip_bounds(), (-5.0, -5.0, 10.0, 10.0))

    def test_clip_read_back_with_singular_transform(self) -> None:
        self.g.set_clip(self.square)
        self.g.scale(0, 0)
        with self.assertRaises(NonInvertibleTransformError):
            self.g.get_clip()

    def test_clip_read_back_when_installed_under_singular_transform(self) -> None:
        self.g.scale(0, 0)
        self.g.set_clip(self.square)
        self.g.set_transform(None)
        with self.assertRaises(NonInvertibleTransformError):
            self.g.get_clip()

    def test_replacing_a_clip_restores_color(self) -> None:
        self.g.set_clip(self.square)
        self.g.set_color(RED)
        self.g.set_clip_rect(0, 0, 5, 5)
        self.assertEqual(self.emitted()[-1], "1 0 0 setrgbcolor")

    def test_removing_a_clip_restores_native_font(self) -> None:
        g = EpsGraphics(accurate_text=False)
        g.set_clip(self.square)
        mark = len(g.document.body_lines())
        g.set_clip(None)
        self.assertEqual(g.document.body_lines()[mark:], [
            "grestore", "0 0 0 setrgbcolor", "/Helvetica findfont 12 scalefont setfont"])

    def test_clip_is_placed_by_the_transform(self) -> None:
        self.g.translate(100, 0)
        self.g.set_clip(self.square)
        self.assertIn("100 0 moveto", self.emitted())
        self.assertEqual(self.g.get_clip_bounds(), (0.0, 0.0, 10.0, 10.0))

    def test_clip_intersects(self) -> None:
        self.g.set_clip(self.square)
        self.g.clip(geometry.rectangle(5, 5, 10, 10))
        min_x, min_y, max_x, max_y = self.g.get_clip().bounds()
        self.assertAlmostEqual(min_x, 5.0)
        self.assertAlmostEqual(min_y, 5.0)
        self.assertAlmostEqual(max_x, 10.0)
        self.assertAlmostEqual(max_y, 10.0)
        self.assertEqual(self.emitted().count("grestore"), 1)

    def test_disjoint_intersection_clips_everything(self) -> None:
        self.g.set_clip(self.square)
        self.g.clip_rect(50, 50, 5, 5)
        self.assertTrue(self.g.get_clip().is_empty())
        self.assertEqual(self.emitted()[-4:], ["newpath", "clip", "newpath", "0 0 0 setrgbcolor"])

    def test_clip_without_active_clip_sets_it(self) -> None:
        self.g.clip(self.square)
        self.assertEqual(self.emitted(), ["gsave"] + CLIP_SQUARE)

    def test_hit_clip(self) -> None:
        self.assertTrue(self.g.hit_clip(500, 500, 1, 1))
        self.g.set_clip_rect(0, 0, 10, 10)
        self.assertTrue(self.g.hit_clip(5, 5, 2, 2))
        self.assertFalse(self.g.hit_clip(20, 20, 5, 5))

    def test_hit(self) -> None:
        self.assertTrue(self.g.hit((8, 8, 4, 4), self.square))
        self.assertFalse(self.g.hit((11, 11, 4, 4), self.square))

    def test_marks_are_bounded_by_the_clip(self) -> None:
        self.g.set_clip(self.square)
        self.g.fill_rect(5, 5, 100, 100)
        self.assertEqual(self.g.document.bounding_box.as_tuple(), (4.5, -10.5, 10.5, -4.5))

    def test_marks_outside_the_clip_leave_bounds_alone(self) -> None:
        self.g.set_clip(self.square)
        self.g.fill_rect(50, 50, 10, 10)
        self.assertTrue(self.g.document.bounding_box.is_empty())


class SharedDocumentClipTests(unittest.TestCase):
    def setUp(self) -> None:
        self.g = EpsGraphics()
        self.child = self.g.create()
        self.child.set_clip_rect(0, 0, 10, 10)
        self.mark = len(self.g.document.body_lines())

    def emitted(self) -> list:
        return self.g.document.body_lines()[self.mark:]

    def test_clearing_a_clip_installed_by_another_context(self) -> None:
        self.g.set_clip(None)
        self.assertEqual(self.emitted(), ["grestore", "0 0 0 setrgbcolor"])
        self.assertFalse(self.g.document.clip_set)
        self.assertTrue(_balanced(self.g.getvalue().splitlines()))

    def test_replacing_a_clip_installed_by_another_context(self) -> None:
        self.g.set_clip_rect(0, 0, 5, 5)
        self.assertEqual(self.emitted(), [
            "grestore",
            "0 0 0 setrgbcolor",
            "gsave",
            "newpath",
            "0 0 moveto",
            "5 0 lineto",
            "5 -5 lineto",
            "0 -5 lineto",
            "closepath",
            "clip",
            "newpath",
        ])
        self.assertEqual(self.emitted().count("grestore"), 1)
        self.assertTrue(_balanced(self.g.getvalue().splitlines()))

    def test_popping_another_clip_restores_this_context_color(self) -> None:
        a = EpsGraphics()
        b = a.create()
        b.set_color(BLUE)
        a.set_color(RED)
        a.set_clip_rect(0, 0, 10, 10)
        a.set_color(BLUE)
        mark = len(a.document.body_lines())
        b.fill_rect(0, 0, 1, 1)
        lines = a.document.body_lines()[mark:]
        self.assertEqual(lines[:3], ["grestore", "0 0 1 setrgbcolor", "1 setlinewidth"])
        self.assertTrue(_balanced(a.getvalue().splitlines()))

    def test_contexts_alternating_clips_stay_balanced(self) -> None:
        other = self.g.create(20, 20, 5, 5)
        for _ in range(3):
            self.g.fill_rect(0, 0, 1, 1)
            self.child.fill_rect(0, 0, 1, 1)
            other.fill_rect(0, 0, 1, 1)
        self.g.set_clip(None)
        self.assertTrue(_balanced(self.g.getvalue().splitlines()))


if __name__ == "__main__":
    unittest.main()

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge Types Graphics Classes Module

This module contains the value types that flow through the graphics state and
the operator emitters: colors, strokes, fonts, composites, paths and the
per-context GraphicsState record itself.
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Tuple, Union

from ..error import InvalidArgumentError
from .constants import (
    FONT_BOLD, FONT_ITALIC, FONT_PLAIN, LINE_CAP_SQUARE, LINE_JOIN_MITER, ColorMode,
)
from .matrix import Matrix


# COLOR
@dataclass(frozen=True)
class Color:
    """sRGB color with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    FACTOR = 0.7

    def __post_init__(self) -> None:
        for name in ('red', 'green', 'blue', 'alpha'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidArgumentError(f"Color {name} out of range: {value}")

    @classmethod
    def from_floats(cls, red: float, green: float, blue: float, alpha: float = 1.0) -> "Color":
        return cls(int(round(red * 255)), int(round(green * 255)),
                   int(round(blue * 255)), int(round(alpha * 255)))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def brighter(self) -> "Color":
        """Scale each channel up by 1/FACTOR; pure black becomes a dark gray."""
        i = int(1.0 / (1.0 - self.FACTOR))
        r, g, b = self.red, self.green, self.blue
        if r == 0 and g == 0 and b == 0:
            return Color(i, i, i, self.alpha)
        if 0 < r < i:
            r = i
        if 0 < g < i:
            g = i
        if 0 < b < i:
            b = i
        return Color(min(int(r / self.FACTOR), 255),
                     min(int(g / self.FACTOR), 255),
                     min(int(b / self.FACTOR), 255),
                     self.alpha)

    def darker(self) -> "Color":
        return Color(max(int(self.red * self.FACTOR), 0),
                     max(int(self.green * self.FACTOR), 0),
                     max(int(self.blue * self.FACTOR), 0),
                     self.alpha)


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)


# PAINT
@dataclass(frozen=True)
class GradientPaint:
    """Two-point linear gradient. EPS output has no gradient support, so this is stored only."""

    x1: float
    y1: float
    color1: Color
    x2: float
    y2: float
    color2: Color
    cyclic: bool = False


Paint = Union[Color, GradientPaint]


# COMPOSITE
@dataclass(frozen=True)
class AlphaComposite:
    rule: str = "SRC_OVER"
    alpha: float = 1.0


# STROKE
@dataclass(frozen=True)
class BasicStroke:
    """
    The only stroke model PostScript can express: width, cap, join,
    miter limit and a dash array with phase.
    """

    width: float = 1.0
    cap: int = LINE_CAP_SQUARE
    join: int = LINE_JOIN_MITER
    miter_limit: float = 10.0
    dash: Optional[Tuple[float, ...]] = None
    dash_phase: float = 0.0

    def __post_init__(self) -> None:
        if self.width < 0:
            raise InvalidArgumentError(f"Negative stroke width: {self.width}")
        if self.dash is not None:
            object.__setattr__(self, 'dash', tuple(float(d) for d in self.dash))


# FONT
_PS_BASE_NAMES = {
    # family: (plain, bold, italic, bold italic)
    'helvetica': ('Helvetica', 'Helvetica-Bold', 'Helvetica-Oblique', 'Helvetica-BoldOblique'),
    'courier': ('Courier', 'Courier-Bold', 'Courier-Oblique', 'Courier-BoldOblique'),
    'times': ('Times-Roman', 'Times-Bold', 'Times-Italic', 'Times-BoldItalic'),
    'times new roman': ('Times-Roman', 'Times-Bold', 'Times-Italic', 'Times-BoldItalic'),
}


@dataclass(frozen=True)
class Font:
    family: str = "Helvetica"
    style: int = FONT_PLAIN
    size: float = 12.0

    @property
    def is_bold(self) -> bool:
        return bool(self.style & FONT_BOLD)

    @property
    def is_italic(self) -> bool:
        return bool(self.style & FONT_ITALIC)

    @property
    def ps_name(self) -> str:
        """PostScript font name, e.g. ``Helvetica-BoldOblique`` or ``DejaVuSans-Bold``."""
        index = (1 if self.is_bold else 0) + (2 if self.is_italic else 0)
        names = _PS_BASE_NAMES.get(self.family.lower())
        if names is not None:
            return names[index]
        base = "".join(self.family.split())
        suffix = ("", "-Bold", "-Italic", "-BoldItalic")[index]
        return base + suffix

    def derive(self, size: Optional[float] = None, style: Optional[int] = None) -> "Font":
        return replace(self,
                       size=self.size if size is None else size,
                       style=self.style if style is None else style)


# Path Elements
class Point(object):
    __slots__ = ('x', 'y')

    def __init__(self, x: Union[int, float], y: Union[int, float]) -> None:
        self.x = x
        self.y = y

    def __eq__(self, other) -> bool:
        return isinstance(other, Point) and self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Point({self.x!r}, {self.y!r})"


class _Segment(object):
    __slots__ = ()

    def points(self) -> Tuple[Point, ...]:
        return tuple(getattr(self, name) for name in self.__slots__)

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.points() == other.points()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(p) for p in self.points())})"


class MoveTo(_Segment):
    __slots__ = ('p',)

    def __init__(self, p: Point) -> None:
        self.p = p


class LineTo(_Segment):
    __slots__ = ('p',)

    def __init__(self, p: Point) -> None:
        self.p = p


class QuadTo(_Segment):
    __slots__ = ('p1', 'p2')

    def __init__(self, p1: Point, p2: Point) -> None:
        self.p1 = p1
        self.p2 = p2


class CurveTo(_Segment):
    __slots__ = ('p1', 'p2', 'p3')

    def __init__(self, p1: Point, p2: Point, p3: Point) -> None:
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3


class ClosePath(_Segment):
    __slots__ = ()

    def __init__(self):
        pass


class Path(list):
    """
    An outline: an ordered list of MoveTo, LineTo, QuadTo, CurveTo and
    ClosePath segments.

    Every segment other than MoveTo and ClosePath needs a current point, so a
    path must start with a MoveTo before any drawing segment.
    """

    def __init__(self, segments=()) -> None:
        super().__init__()
        self._current = None
        self._start = None
        for segment in segments:
            self.append(segment)

    def append(self, segment) -> None:
        if isinstance(segment, MoveTo):
            self._current = self._start = segment.p
        elif isinstance(segment, ClosePath):
            if self._current is None:
                return
            self._current = self._start
        elif isinstance(segment, (LineTo, QuadTo, CurveTo)):
            if self._current is None:
                raise InvalidArgumentError(
                    f"{type(segment).__name__} without a current point; path must begin with MoveTo")
            self._current = segment.points()[-1]
        else:
            raise InvalidArgumentError(f"Not a path segment: {segment!r}")
        super().append(segment)

    def extend(self, segments) -> None:
        for segment in segments:
            self.append(segment)

    # builder API

    def move_to(self, x, y) -> "Path":
        self.append(MoveTo(Point(x, y)))
        return self

    def line_to(self, x, y) -> "Path":
        self.append(LineTo(Point(x, y)))
        return self

    def quad_to(self, x1, y1, x2, y2) -> "Path":
        self.append(QuadTo(Point(x1, y1), Point(x2, y2)))
        return self

    def curve_to(self, x1, y1, x2, y2, x3, y3) -> "Path":
        self.append(CurveTo(Point(x1, y1), Point(x2, y2), Point(x3, y3)))
        return self

    def close_path(self) -> "Path":
        self.append(ClosePath())
        return self

    @property
    def current_point(self) -> Optional[Point]:
        return self._current

    def is_empty(self) -> bool:
        return len(self) == 0

    def iter_points(self) -> Iterator[Point]:
        for segment in self:
            yield from segment.points()

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) over all points, control points included."""
        xs = []
        ys = []
        for p in self.iter_points():
            xs.append(p.x)
            ys.append(p.y)
        if not xs:
            return None
        return (min(xs), min(ys), max(xs), max(ys))

    def transformed(self, matrix: Matrix) -> "Path":
        result = Path()
        for segment in self:
            if isinstance(segment, ClosePath):
                result.append(ClosePath())
                continue
            points = [Point(*matrix.transform_point(p.x, p.y)) for p in segment.points()]
            result.append(type(segment)(*points))
        return result

    def copy(self) -> "Path":
        return Path(self)

    def __eq__(self, other) -> bool:
        return isinstance(other, Path) and list.__eq__(self, other)

    def __ne__(self, other) -> bool:
        return not self == other

    __hash__ = None


# GSTATE
class GraphicsState(object):
    """Per-context drawing state. The output document is not part of it."""

    def __init__(self) -> None:
        self.color = Color.BLACK
        self.background = Color.WHITE
        self.paint = Color.BLACK
        self.composite = AlphaComposite()
        self.stroke = BasicStroke()
        self.font = Font()
        self.transform = Matrix.identity()
        self.clip = None  # a Path in user space when not None
        self.clip_transform = Matrix.identity()  # the transform active when the clip was set
        self.accurate_text = True
        self.color_mode = ColorMode.default_value()

    def copy(self):  # -> GraphicsState
        """Everything is immutable except the clip path, which is copied."""
        new_gs = copy.copy(self)
        if self.clip is not None:
            new_gs.clip = self.clip.copy()
        return new_gs

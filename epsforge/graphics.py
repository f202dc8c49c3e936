# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsGraphics - the drawing surface.

An EpsGraphics is a 2D graphics context whose drawing calls become
PostScript operator lines in an EpsDocument. User space has Y growing
downward; the output is flipped to PostScript's Y-up device space as it is
written.

```python
from epsforge.graphics import EpsGraphics
from epsforge.core import types as ps

g = EpsGraphics("Example", output="example.eps")
g.set_color(ps.Color(200, 30, 30))
g.fill_rect(10, 10, 100, 50)
g.set_stroke(ps.BasicStroke(2.0))
g.draw_oval(20, 20, 80, 30)
g.close()
```

Several contexts may draw on one document (see create()); each keeps its
own GraphicsState and the document re-synchronizes the output state when
the drawing context changes.
"""

from __future__ import annotations

import itertools
import logging
import os
from typing import Optional, Sequence, TextIO, Tuple, Union

from .core import error as ps_error
from .core import fonts
from .core import geometry
from .core import types as ps
from .core.pixel_buffer import PixelBuffer
from .devices.eps.document import EpsDocument
from .operators import clipping, color_ops, graphics_state, image, matrix, painting, text_show

logger = logging.getLogger(__name__)

_context_ids = itertools.count(1)


class EpsGraphics:
    """
    Graphics context writing EPS.

    Args:
        title: document title (%%Title)
        output: writable text stream, filesystem path, or None for an
            in-memory document (read it back with getvalue())
        bounds: optional (min_x, min_y, max_x, max_y) page frame in user
            space, included in the bounding box
        color_mode: how colors and images are written
        accurate_text: fill glyph outlines instead of using ``show``
    """

    def __init__(self, title: str = "Untitled",
                 output: Union[TextIO, str, os.PathLike, None] = None,
                 bounds: Optional[Tuple[float, float, float, float]] = None,
                 color_mode: ps.ColorMode = ps.ColorMode.default_value(),
                 accurate_text: bool = True) -> None:
        gstate = ps.GraphicsState()
        gstate.color_mode = color_mode
        gstate.accurate_text = accurate_text
        self._bind(EpsDocument(title, output, bounds), gstate)

        color_ops.set_color(self, gstate.color)
        graphics_state.set_font(self, gstate.font)

    def _bind(self, document: EpsDocument, gstate: ps.GraphicsState) -> None:
        self.id = next(_context_ids)
        self.gstate = gstate
        self._document = document
        document.attach(self)

    # Output plumbing

    @property
    def document(self) -> EpsDocument:
        """
        Raises:
            ContextDisposedError: the context has been disposed
        """
        if self._document is None:
            raise ps_error.ContextDisposedError(f"Graphics context {self.id} has been disposed")
        return self._document

    @property
    def disposed(self) -> bool:
        return self._document is None

    def emit(self, line: str) -> None:
        self.document.append(self.id, line)

    def sync_state(self, theirs: Optional[ps.GraphicsState]) -> None:
        """
        Re-emit the parts of this context's state that differ from
        ``theirs``, the state of the context that wrote the preceding line.
        """
        if theirs is None:
            return
        mine = self.gstate

        # clip first: its grestore rolls back color and font, which set_clip
        # then re-emits from this context's state
        if mine.clip != theirs.clip or (mine.clip is not None
                                        and mine.clip_transform != theirs.clip_transform):
            popped = self.document.clip_set
            if mine.clip is None:
                clipping.set_clip(self, None)
            else:
                clipping.install_clip(self, mine.clip, mine.clip_transform)
            if popped:
                return
        if mine.color != theirs.color or mine.color_mode != theirs.color_mode:
            color_ops.append_color(self, mine.color)
        if mine.font != theirs.font or (not mine.accurate_text and theirs.accurate_text):
            graphics_state.append_font(self, mine.font)
        # paint, composite, background and stroke have no standing operator:
        # they are applied per drawing call

    def create(self, x: Optional[float] = None, y: Optional[float] = None,
               width: Optional[float] = None, height: Optional[float] = None) -> "EpsGraphics":
        """
        A new context on the same document, starting with a copy of this
        context's state. With a rectangle, the child is translated to (x, y)
        and clipped to width x height.
        """
        child = EpsGraphics.__new__(type(self))
        child._bind(self.document, self.gstate.copy())
        logger.debug("Context %d created from context %d", child.id, self.id)
        if x is not None and y is not None:
            child.translate(x, y)
            if width is not None and height is not None:
                child.clip_rect(0, 0, width, height)
        return child

    def dispose(self) -> None:
        """Detach from the document. The document itself stays open."""
        if self._document is None:
            return
        remaining = self._document.detach(self)
        self._document = None
        logger.debug("Context %d disposed, %d context(s) remain", self.id, remaining)

    # Color and paint

    def get_color(self) -> ps.Color:
        return self.gstate.color

    def set_color(self, color: Optional[ps.Color]) -> None:
        color_ops.set_color(self, color)

    def get_paint(self) -> Optional[ps.Paint]:
        return self.gstate.paint

    def set_paint(self, paint: Optional[ps.Paint]) -> None:
        graphics_state.set_paint(self, paint)

    def get_composite(self) -> Optional[ps.AlphaComposite]:
        return self.gstate.composite

    def set_composite(self, composite: Optional[ps.AlphaComposite]) -> None:
        graphics_state.set_composite(self, composite)

    def get_background(self) -> ps.Color:
        return self.gstate.background

    def set_background(self, color: Optional[ps.Color]) -> None:
        graphics_state.set_background(self, color)

    def get_color_mode(self) -> ps.ColorMode:
        return self.gstate.color_mode

    def set_color_mode(self, mode: ps.ColorMode) -> None:
        color_ops.set_color_mode(self, mode)

    def set_paint_mode(self) -> None:
        """Overwrite painting is the only mode EPS has."""

    def set_xor_mode(self, color: ps.Color) -> ps_error.Diagnostic:
        return ps_error.unsupported(self, "set_xor_mode")

    # Stroke and font

    def get_stroke(self) -> ps.BasicStroke:
        return self.gstate.stroke

    def set_stroke(self, stroke: ps.BasicStroke) -> None:
        graphics_state.set_stroke(self, stroke)

    def get_font(self) -> ps.Font:
        return self.gstate.font

    def set_font(self, font: Optional[ps.Font]) -> None:
        graphics_state.set_font(self, font)

    def is_accurate_text(self) -> bool:
        return self.gstate.accurate_text

    def set_accurate_text(self, accurate: bool) -> None:
        graphics_state.set_accurate_text(self, accurate)

    def get_font_metrics(self, font: Optional[ps.Font] = None) -> fonts.FontMetrics:
        return fonts.font_metrics(self.gstate.font if font is None else font)

    def string_width(self, text: str, font: Optional[ps.Font] = None) -> float:
        return fonts.string_width(text, self.gstate.font if font is None else font)

    # Transform

    def get_transform(self) -> ps.Matrix:
        return matrix.current_matrix(self)

    def set_transform(self, m: Optional[ps.Matrix]) -> None:
        matrix.set_matrix(self, m)

    def transform(self, m: ps.Matrix) -> None:
        matrix.concat(self, m)

    def translate(self, tx: float, ty: float) -> None:
        matrix.translate(self, tx, ty)

    def scale(self, sx: float, sy: float) -> None:
        matrix.scale(self, sx, sy)

    def rotate(self, theta: float, x: Optional[float] = None, y: Optional[float] = None) -> None:
        matrix.rotate(self, theta, x, y)

    def shear(self, shx: float, shy: float) -> None:
        matrix.shear(self, shx, shy)

    # Clip

    def get_clip(self) -> Optional[ps.Path]:
        return clipping.get_clip(self)

    def set_clip(self, shape: Optional[ps.Path]) -> None:
        clipping.set_clip(self, shape)

    def set_clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        clipping.set_clip_rect(self, x, y, width, height)

    def clip(self, shape: Optional[ps.Path]) -> None:
        clipping.clip(self, shape)

    def clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        clipping.clip_rect(self, x, y, width, height)

    def get_clip_bounds(self) -> Optional[Tuple[float, float, float, float]]:
        return clipping.get_clip_bounds(self)

    def hit_clip(self, x: float, y: float, width: float, height: float) -> bool:
        return clipping.hit_clip(self, x, y, width, height)

    def hit(self, rect: Tuple[float, float, float, float], shape: ps.Path) -> bool:
        """True when ``shape`` overlaps ``rect`` (x, y, width, height)."""
        return clipping.hit(*rect, shape)

    # Shapes

    def draw(self, shape: Optional[ps.Path]) -> None:
        painting.stroke(self, shape)

    def fill(self, shape: Optional[ps.Path]) -> None:
        painting.fill(self, shape)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.draw(geometry.line(x1, y1, x2, y2))

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.draw(geometry.rectangle(x, y, width, height))

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.fill(geometry.rectangle(x, y, width, height))

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Fill the rectangle with the background color."""
        color = self.gstate.color
        self.set_color(self.gstate.background)
        self.fill_rect(x, y, width, height)
        self.set_color(color)

    def draw_oval(self, x: float, y: float, width: float, height: float) -> None:
        self.draw(geometry.ellipse(x, y, width, height))

    def fill_oval(self, x: float, y: float, width: float, height: float) -> None:
        self.fill(geometry.ellipse(x, y, width, height))

    def draw_arc(self, x: float, y: float, width: float, height: float,
                 start_angle: float, arc_angle: float) -> None:
        self.draw(geometry.arc(x, y, width, height, start_angle, arc_angle, ps.ARC_OPEN))

    def fill_arc(self, x: float, y: float, width: float, height: float,
                 start_angle: float, arc_angle: float) -> None:
        self.fill(geometry.arc(x, y, width, height, start_angle, arc_angle, ps.ARC_PIE))

    def draw_round_rect(self, x: float, y: float, width: float, height: float,
                        arc_width: float, arc_height: float) -> None:
        self.draw(geometry.round_rectangle(x, y, width, height, arc_width, arc_height))

    def fill_round_rect(self, x: float, y: float, width: float, height: float,
                        arc_width: float, arc_height: float) -> None:
        self.fill(geometry.round_rectangle(x, y, width, height, arc_width, arc_height))

    def draw_polygon(self, x_points: Sequence[float], y_points: Sequence[float],
                     n_points: Optional[int] = None) -> None:
        self.draw(geometry.polygon(x_points, y_points, n_points))

    def fill_polygon(self, x_points: Sequence[float], y_points: Sequence[float],
                     n_points: Optional[int] = None) -> None:
        self.fill(geometry.polygon(x_points, y_points, n_points))

    def draw_polyline(self, x_points: Sequence[float], y_points: Sequence[float],
                      n_points: Optional[int] = None) -> None:
        self.draw(geometry.polyline(x_points, y_points, n_points))

    def draw_3d_rect(self, x: float, y: float, width: float, height: float, raised: bool) -> None:
        """
        Rectangle outline with highlighted and shadowed edges. When raised,
        the light comes from the top left.
        """
        color = self.gstate.color
        stroke = self.gstate.stroke
        bright = color.brighter().brighter()
        dark = color.darker().darker()

        self.set_stroke(ps.BasicStroke(1.0))
        self.set_color(bright if raised else dark)
        self.draw_line(x, y, x + width, y)
        self.draw_line(x, y, x, y + height)
        self.set_color(dark if raised else bright)
        self.draw_line(x + width, y + height, x, y + height)
        self.draw_line(x + width, y + height, x + width, y)

        self.set_color(color)
        self.set_stroke(stroke)

    def fill_3d_rect(self, x: float, y: float, width: float, height: float, raised: bool) -> None:
        color = self.gstate.color
        self.set_color(color.brighter().brighter() if raised else color.darker().darker())
        self.fill_rect(x, y, width, height)
        self.set_color(color)
        self.draw_3d_rect(x, y, width, height, raised)

    # Text

    def draw_string(self, text: Optional[str], x: float, y: float) -> None:
        text_show.draw_string(self, text, x, y)

    def draw_glyph_outline(self, outline: Optional[ps.Path], x: float, y: float) -> None:
        text_show.draw_glyph_outline(self, outline, x, y)

    # Images

    def draw_image_region(self, img, dx1: int, dy1: int, dx2: int, dy2: int,
                          sx1: int, sy1: int, sx2: int, sy2: int) -> bool:
        return image.draw_image(self, img, dx1, dy1, dx2, dy2, sx1, sy1, sx2, sy2)

    def draw_image(self, img, x: int = 0, y: int = 0,
                   width: Optional[int] = None, height: Optional[int] = None) -> bool:
        """
        Draw a whole image with its top left corner at (x, y), at its natural
        size or scaled to width x height.
        """
        pixels = PixelBuffer.coerce(img)
        width = pixels.width if width is None else width
        height = pixels.height if height is None else height
        return image.draw_image(self, pixels, x, y, x + width, y + height,
                                0, 0, pixels.width, pixels.height)

    def draw_image_transformed(self, img, m: ps.Matrix) -> bool:
        """Draw an image at the origin of the user space ``m`` leads to."""
        saved = self.gstate.transform
        self.transform(m)
        try:
            return self.draw_image(img, 0, 0)
        finally:
            self.set_transform(saved)

    # Unsupported

    def copy_area(self, x: float, y: float, width: float, height: float,
                  dx: float, dy: float) -> ps_error.Diagnostic:
        return ps_error.unsupported(self, "copy_area")

    # Document lifecycle

    def flush(self) -> None:
        self.document.flush()

    def finish(self) -> None:
        self.document.flush()
        self.document.finish()

    def close(self) -> None:
        self.document.close()

    def getvalue(self) -> str:
        """The complete document as it stands."""
        return self.document.getvalue()

    def __enter__(self) -> "EpsGraphics":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else f"'{self._document.title}'"
        return f"<EpsGraphics {self.id} {state}>"

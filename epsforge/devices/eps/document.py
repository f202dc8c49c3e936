# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EPS Output Document

The document is the one resource shared by every graphics context drawing on
the same output. It owns:

- the buffered body of operator lines
- the running bounding box (device space, Y up)
- the "clip established" flag used by the clip compositor
- the diagnostics reported by unsupported operations

The header cannot be written until the bounding box is known, so the body is
buffered in memory and the complete file (header, body, trailer) is produced
by finish(). Contexts attach on creation and detach on dispose; finishing is
an explicit, idempotent terminal action that no context triggers implicitly.
"""

from __future__ import annotations

import io
import logging
import math
import os
import time
from typing import Optional, TextIO, Tuple, Union

from ...core import types as ps
from ...core.error import OUTPUT_ERROR_MSG, OutputError

logger = logging.getLogger(__name__)


class BoundingBox:
    """Smallest rectangle enclosing every point it has been fed. Never shrinks."""

    def __init__(self) -> None:
        self.min_x = None
        self.min_y = None
        self.max_x = None
        self.max_y = None

    def is_empty(self) -> bool:
        return self.min_x is None

    def update(self, x: float, y: float) -> None:
        if self.min_x is None:
            self.min_x = self.max_x = x
            self.min_y = self.max_y = y
            return
        if x < self.min_x:
            self.min_x = x
        if x > self.max_x:
            self.max_x = x
        if y < self.min_y:
            self.min_y = y
        if y > self.max_y:
            self.max_y = y

    def as_tuple(self) -> Tuple[float, float, float, float]:
        if self.is_empty():
            return (0.0, 0.0, 0.0, 0.0)
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def __repr__(self) -> str:
        return f"BoundingBox{self.as_tuple()!r}"


class EpsDocument:
    """
    Buffered EPS output shared by one or more graphics contexts.

    Args:
        title: written to the %%Title comment
        output: a writable text stream, a filesystem path, or None to keep
            the document in memory (see getvalue())
        bounds: optional (min_x, min_y, max_x, max_y) page frame in user
            space (Y down); it seeds the bounding box
    """

    def __init__(self, title: str = "Untitled",
                 output: Union[TextIO, str, os.PathLike, None] = None,
                 bounds: Optional[Tuple[float, float, float, float]] = None) -> None:
        self.title = title
        self.created = time.localtime()
        self.bounding_box = BoundingBox()
        self.diagnostics = []

        self._output = output
        self._body = io.StringIO()
        self._clip_set = False
        self._contexts = {}  # context id -> EpsGraphics
        self._last_context = None
        self._last_state = None  # GraphicsState of the context that wrote the last line
        self._finished = False
        self._closed = False

        if bounds is not None:
            min_x, min_y, max_x, max_y = bounds
            self.update_bounds(min_x, -min_y)
            self.update_bounds(max_x, -max_y)

    # Shared ownership

    def attach(self, ctxt) -> int:
        """Register a context drawing on this document. Returns the new reference count."""
        self._contexts[ctxt.id] = ctxt
        logger.debug("Context %d attached to '%s' (%d attached)", ctxt.id, self.title, len(self._contexts))
        return len(self._contexts)

    def detach(self, ctxt) -> int:
        """Forget a disposed context. Returns the remaining reference count."""
        self._contexts.pop(ctxt.id, None)
        logger.debug("Context %d detached from '%s' (%d attached)", ctxt.id, self.title, len(self._contexts))
        return len(self._contexts)

    @property
    def ref_count(self) -> int:
        return len(self._contexts)

    # Body

    def activate(self, context_id: int) -> None:
        """
        Make ``context_id`` the context writing the next line.

        When it differs from the context that wrote the previous line, the
        new context first re-emits whatever part of its state differs from
        the previous context, since both write into the same PostScript
        graphics state. Callers that inspect document state (the clip flag)
        before writing activate first, so they see the state after the sync.

        Raises:
            OutputError: the document is finished
        """
        if self._finished:
            raise OutputError(f"{OUTPUT_ERROR_MSG}document '{self.title}' is already finished")

        current = self._contexts.get(context_id)
        previous = self._last_state
        switched = self._last_context is not None and context_id != self._last_context
        self._last_context = context_id
        if current is not None:
            self._last_state = current.gstate
            if switched:
                current.sync_state(previous)

    def append(self, context_id: int, line: str) -> None:
        """
        Append one operator line on behalf of a context, activating it first.

        Raises:
            OutputError: the document is finished or the buffer rejected the line
        """
        self.activate(context_id)

        try:
            self._body.write(line)
            self._body.write("\n")
        except (OSError, ValueError) as e:
            raise OutputError(f"{OUTPUT_ERROR_MSG}{e}") from e

    def body_lines(self) -> list:
        return self._body.getvalue().splitlines()

    def update_bounds(self, x: float, y: float) -> None:
        self.bounding_box.update(x, y)

    @property
    def clip_set(self) -> bool:
        return self._clip_set

    @clip_set.setter
    def clip_set(self, value: bool) -> None:
        self._clip_set = value

    @property
    def finished(self) -> bool:
        return self._finished

    # Rendering

    def _header(self) -> str:
        min_x, min_y, max_x, max_y = self.bounding_box.as_tuple()
        lines = [
            "%!PS-Adobe-3.0 EPSF-3.0",
            f"%%Creator: EpsForge {ps.VERSION}",
            f"%%Title: {self.title}",
            f"%%CreationDate: {time.strftime('%a %b %d %H:%M:%S %Y', self.created)}",
            f"%%BoundingBox: {math.floor(min_x)} {math.floor(min_y)} {math.ceil(max_x)} {math.ceil(max_y)}",
            f"%%HiResBoundingBox: {ps.fmt_all(min_x, min_y, max_x, max_y)}",
            "%%DocumentData: Clean7Bit",
            "%%LanguageLevel: 2",
            "%%Pages: 1",
            "%%EndComments",
            "%%BeginProlog",
            "%%EndProlog",
            "%%Page: 1 1",
            "gsave",
        ]
        return "\n".join(lines) + "\n"

    def _trailer(self) -> str:
        lines = []
        if self._clip_set:
            lines.append("grestore")
        lines.extend(["grestore", "showpage", "%%Trailer", "%%EOF"])
        return "\n".join(lines) + "\n"

    def write(self, writer: TextIO) -> None:
        """Write the complete document (header, body, trailer) to a text stream."""
        try:
            writer.write(self._header())
            writer.write(self._body.getvalue())
            writer.write(self._trailer())
        except OSError as e:
            raise OutputError(f"{OUTPUT_ERROR_MSG}{e}") from e

    def getvalue(self) -> str:
        buffer = io.StringIO()
        self.write(buffer)
        return buffer.getvalue()

    # Lifecycle

    def flush(self) -> None:
        if self._closed or self._output is None or isinstance(self._output, (str, os.PathLike)):
            return
        try:
            self._output.flush()
        except OSError as e:
            raise OutputError(f"{OUTPUT_ERROR_MSG}{e}") from e

    def finish(self) -> None:
        """Write the document to its output. Subsequent calls do nothing."""
        if self._finished:
            return
        if isinstance(self._output, (str, os.PathLike)):
            try:
                with open(self._output, "w", encoding="latin-1", newline="\n") as f:
                    self.write(f)
            except OSError as e:
                raise OutputError(f"{OUTPUT_ERROR_MSG}{e}") from e
        elif self._output is not None:
            self.write(self._output)
            self.flush()
        self._finished = True
        logger.debug("Finished '%s' with bounding box %s", self.title, self.bounding_box)

    def close(self) -> None:
        """Finish the document and close a caller-supplied stream. Idempotent."""
        if self._closed:
            return
        self.finish()
        if self._output is not None and not isinstance(self._output, (str, os.PathLike)):
            try:
                self._output.close()
            except OSError as e:
                raise OutputError(f"{OUTPUT_ERROR_MSG}{e}") from e
        self._closed = True

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge error handling.

Failures that leave the document in an undefined state are raised as
subclasses of EpsError and propagate to the caller. Operations that the EPS
imaging model simply cannot express are reported through a Diagnostic
instead: the call becomes a no-op, the diagnostic is logged, recorded on the
shared document and handed back to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# diagnostic codes
UNSUPPORTED = "unsupported"

OUTPUT_ERROR_MSG = "Could not write to the output: "
METHOD_NOT_SUPPORTED_MSG = "Operation not supported by the EPS output format"
INVERSE_MATRIX_ERROR_MSG = "Unable to get inverse of matrix: "
STROKE_CLASS_ERROR_MSG = "Stroke must be an instance of BasicStroke: "


class EpsError(Exception):
    """Base class of every error raised by the library."""


class InvalidArgumentError(EpsError, ValueError):
    """Malformed geometry, e.g. an inverted or empty image rectangle."""


class NonInvertibleTransformError(EpsError):
    """A required matrix inversion hit a singular matrix."""

    def __init__(self, matrix) -> None:
        super().__init__(f"{INVERSE_MATRIX_ERROR_MSG}{matrix}")
        self.matrix = matrix


class UnsupportedStrokeError(EpsError, TypeError):
    """The stroke description is outside what setlinewidth/setdash can express."""

    def __init__(self, stroke) -> None:
        super().__init__(f"{STROKE_CLASS_ERROR_MSG}{stroke!r}")
        self.stroke = stroke


class OutputError(EpsError):
    """The output target could not accept or finalize data."""


class ContextDisposedError(EpsError):
    """A disposed graphics context was used again."""


@dataclass(frozen=True)
class Diagnostic:
    code: str
    operation: str
    message: str


def unsupported(ctxt, func_name: str) -> Diagnostic:
    """
    Report an operation that has no EPS equivalent.

    Nothing is written to the document. The returned Diagnostic is also kept
    in the document's diagnostics list so callers sharing the output can
    assert that no corruption occurred.

    Args:
        ctxt: the EpsGraphics context the call was made on
        func_name: name of the unsupported operation

    Returns:
        The recorded Diagnostic
    """
    diagnostic = Diagnostic(UNSUPPORTED, func_name, f"{METHOD_NOT_SUPPORTED_MSG}: {func_name}")
    logger.warning("%s (context %d)", diagnostic.message, ctxt.id)
    if ctxt.document is not None:
        ctxt.document.diagnostics.append(diagnostic)
    return diagnostic

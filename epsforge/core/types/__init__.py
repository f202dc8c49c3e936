# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge Types Package - Public API

Re-exports every value type and constant so the rest of the code base can use
the single import pattern:

```python
from ..core import types as ps

path = ps.Path().move_to(0, 0).line_to(10, 10)
stroke = ps.BasicStroke(2.0, cap=ps.LINE_CAP_ROUND)
```

**Internal Module Organization:**
- constants.py: numeric codes, ColorMode and output tuning constants
- matrix.py: the affine Matrix
- graphics.py: colors, strokes, fonts, paths and the GraphicsState
- utility.py: number and string formatting for operator lines
"""

from .constants import *
from .matrix import Matrix
from .graphics import (
    AlphaComposite, BasicStroke, ClosePath, Color, CurveTo, Font, GradientPaint,
    GraphicsState, LineTo, MoveTo, Paint, Path, Point, QuadTo,
)
from .utility import fmt, fmt_all, ps_string

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
EpsForge Types Utility Module

Number and string formatting for PostScript operator lines.
"""

from __future__ import annotations

import math
from typing import Union

from ..error import InvalidArgumentError
from .constants import NUMBER_PRECISION


def fmt(value: Union[int, float]) -> str:
    """
    Format a number as a plain PostScript decimal, stripping trailing zeros.

    Raises:
        InvalidArgumentError: ``value`` is NaN or infinite
    """
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Not a finite number: {value!r}")
    if value == int(value):
        result = str(int(value))
    else:
        result = f'{value:.{NUMBER_PRECISION}f}'.rstrip('0').rstrip('.')
    if result == '-0':
        return '0'
    return result


def fmt_all(*values: Union[int, float]) -> str:
    return " ".join(fmt(v) for v in values)


def ps_string(text: str) -> str:
    """
    Encode text as the body of a PostScript string literal (without the
    surrounding parentheses).

    Parentheses and backslashes are escaped. Characters outside printable
    ASCII are written as three-digit octal escapes of their Latin-1 code;
    characters with no Latin-1 code become '?'.
    """
    out = []
    for ch in text:
        if ch in '()\\':
            out.append('\\' + ch)
            continue
        code = ord(ch)
        if 32 <= code < 127:
            out.append(ch)
        elif code < 256:
            out.append(f'\\{code:03o}')
        else:
            out.append('?')
    return "".join(out)

# EpsForge - An Encapsulated PostScript Graphics Writer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for EpsForge.

Handles command-line argument definition, parsing, option validation and
output file naming.
"""

from __future__ import annotations

import argparse
import os
from typing import Optional

from .core import types as ps


def _color_mode(name: str) -> ps.ColorMode:
    """argparse type for --color-mode."""
    try:
        return ps.ColorMode.from_name(name)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: '{value}'")
    return number


def get_output_name(outputfile: Optional[str], inputfile: str) -> str:
    """
    Derive the output file name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        inputfile: The input image path

    Returns:
        The -o value when given, otherwise the input name with an .eps
        extension, in the current directory.
    """
    if outputfile:
        return outputfile
    base = os.path.basename(inputfile)
    return os.path.splitext(base)[0] + ".eps"


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the EpsForge argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="epsforge",
        description="EpsForge - embed a raster image in an Encapsulated PostScript file",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"EpsForge {ps.VERSION}"
    )
    parser.add_argument("inputfile", help="Image file to embed (any format Pillow can read)")
    parser.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename (default: <input>.eps)"
    )
    parser.add_argument(
        "--title", help="Document title (default: the input file name)"
    )
    parser.add_argument(
        "--color-mode", dest="color_mode", type=_color_mode,
        default=ps.ColorMode.default_value(),
        help="Color mode: bw, gray, rgb or cmyk (default: rgb)"
    )
    parser.add_argument(
        "--width", type=_positive_float,
        help="Width of the placed image in points (default: pixel width)"
    )
    parser.add_argument(
        "--height", type=_positive_float,
        help="Height of the placed image in points (default: pixel height)"
    )
    parser.add_argument(
        "--text",
        help="Caption drawn below the image"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    return build_argument_parser().parse_args(argv)

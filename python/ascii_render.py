"""
ASCII rendering for beam fields.

Draws the grid one character per cell. Mirrors and splitters are coloured,
and an optional energized set is overlaid as '#'.
"""

from __future__ import annotations

from typing import Callable, Collection

import simple_chalk as chalk  # type: ignore[import-untyped]

from beam_types import CellKind, Grid, Position

__all__ = ["ENERGIZED_CHAR", "render_grid"]

ENERGIZED_CHAR = "#"


def render_grid(
    grid: Grid,
    energized: Collection[Position] | None = None,
    color: bool = True,
) -> str:
    """
    Render a grid to an ASCII string.

    Args:
        grid: The grid to render
        energized: Optional set of energized positions, drawn as '#'
        color: If True, add ANSI colours (mirrors yellow, splitters cyan,
               energized cells red)

    Returns:
        One line per row, joined by newlines
    """
    palette: dict[CellKind, Callable[[str], str]] = {
        CellKind.EMPTY: lambda s: s,
        CellKind.POSITIVE_MIRROR: chalk.yellow,
        CellKind.NEGATIVE_MIRROR: chalk.yellow,
        CellKind.VERTICAL_SPLITTER: chalk.cyan,
        CellKind.HORIZONTAL_SPLITTER: chalk.cyan,
    }
    lit: Callable[[str], str] = chalk.redBright

    lines: list[str] = []
    for r, row in enumerate(grid.cells):
        chars: list[str] = []
        for c, kind in enumerate(row):
            if energized is not None and Position(c, r) in energized:
                char = ENERGIZED_CHAR
                colorize = lit
            else:
                char = kind.value
                colorize = palette[kind]
            chars.append(colorize(char) if color else char)
        lines.append("".join(chars))
    return "\n".join(lines)

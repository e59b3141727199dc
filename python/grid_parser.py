"""
Grid parsing utilities for beam fields.

One character per cell, one line per row:
    .  empty space
    /  positive mirror
    \\  negative mirror
    |  vertical splitter
    -  horizontal splitter
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from beam_types import CellKind, Grid, InvalidCellKind, MalformedGrid

__all__ = ["build_grid", "parse_grid", "load_grid", "format_grid"]

_SYMBOLS = {kind.value: kind for kind in CellKind}


def build_grid(rows: Sequence[str]) -> Grid:
    """
    Build a Grid from a sequence of row strings.

    Example:
        [".|.", "/.-"]
        Creates a 3x2 grid:
        - Row 0: EMPTY, VERTICAL_SPLITTER, EMPTY
        - Row 1: POSITIVE_MIRROR, EMPTY, HORIZONTAL_SPLITTER

    Args:
        rows: Row strings, top row first

    Returns:
        The parsed Grid

    Raises:
        MalformedGrid: If there are no rows, the rows are empty, or row lengths differ
        InvalidCellKind: If any character is not a known cell symbol
    """
    if not rows:
        raise MalformedGrid("Grid definition has no rows")

    cols = len(rows[0])
    if cols == 0:
        raise MalformedGrid("Grid definition has no columns (row 0 is empty)")

    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{rows[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise MalformedGrid(error_msg)

    cells: list[tuple[CellKind, ...]] = []
    for row_idx, row_str in enumerate(rows):
        row: list[CellKind] = []
        for col_idx, char in enumerate(row_str):
            kind = _SYMBOLS.get(char)
            if kind is None:
                raise InvalidCellKind(
                    f"Invalid character {char!r}\n"
                    f"  Row {row_idx}, column {col_idx}: \"{row_str}\"\n"
                    f"  Valid characters: {' '.join(_SYMBOLS)}"
                )
            row.append(kind)
        cells.append(tuple(row))

    return Grid(tuple(cells))


def parse_grid(text: str) -> Grid:
    """
    Parse a grid from a multi-line string.

    Leading and trailing blank lines are ignored, so triple-quoted literals
    can be used directly. Interior lines are taken as-is.
    """
    lines = text.strip("\n").split("\n")
    if lines == [""]:
        lines = []
    return build_grid([line.rstrip("\r") for line in lines])


def load_grid(path: str | Path) -> Grid:
    """
    Read and parse a grid file.

    Raises:
        InvalidCellKind: If the file is not UTF-8 text or holds an unknown symbol
        MalformedGrid: If the rows do not form a rectangle
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        bad = exc.object[exc.start:exc.start + 1]
        raise InvalidCellKind(
            f"Undecodable byte {bad!r} in '{path}'\n"
            f"  Byte offset: {exc.start}\n"
            "  Grid files must be UTF-8 text"
        ) from exc
    return parse_grid(text)


def format_grid(grid: Grid) -> str:
    """Render a grid back to its textual form, one line per row."""
    return "\n".join("".join(kind.value for kind in row) for row in grid.cells)

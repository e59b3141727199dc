"""
Shared type definitions for the beam field system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction a beam travels in."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    E = "E"  # Right (increasing col)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(col_delta, row_delta) for one step in this direction."""
        return _DELTAS[self]


_DELTAS = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}


class CellKind(Enum):
    """Optical element occupying a cell. Values are the input symbols."""

    EMPTY = "."
    POSITIVE_MIRROR = "/"  # Like the line y = x
    NEGATIVE_MIRROR = "\\"  # Like the line y = -x
    VERTICAL_SPLITTER = "|"
    HORIZONTAL_SPLITTER = "-"


# =============================================================================
# Errors
# =============================================================================


class GridError(ValueError):
    """Base class for problems with a grid definition or lookup."""


class InvalidCellKind(GridError):
    """A character in the input is not one of the known cell symbols."""


class MalformedGrid(GridError):
    """The input has no rows, or rows of differing length."""


class OutOfBounds(GridError, IndexError):
    """A position lies outside the grid."""


# =============================================================================
# Positions, Beams and the Grid
# =============================================================================


@dataclass(frozen=True, order=True)
class Position:
    """A cell coordinate. Origin is top-left; col grows east, row grows south."""

    col: int
    row: int

    def step(self, direction: Direction) -> Position:
        dc, dr = direction.delta
        return Position(self.col + dc, self.row + dr)


@dataclass(frozen=True)
class Beam:
    """A point of light at a position, travelling in a direction."""

    position: Position
    direction: Direction


@dataclass(frozen=True)
class Grid:
    """An immutable, rectangular field of optical elements."""

    cells: tuple[tuple[CellKind, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise MalformedGrid("Grid must have at least one row and one column")
        cols = len(self.cells[0])
        if any(len(row) != cols for row in self.cells):
            raise MalformedGrid(
                f"Inconsistent row lengths\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Got: {[len(row) for row in self.cells]}"
            )

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    def contains(self, position: Position) -> bool:
        return 0 <= position.col < self.width and 0 <= position.row < self.height

    def cell_at(self, position: Position) -> CellKind:
        """
        Look up the cell kind at a position.

        Raises:
            OutOfBounds: If the position lies outside [0, width) x [0, height)
        """
        if not self.contains(position):
            raise OutOfBounds(
                f"Position (col={position.col}, row={position.row}) is outside the grid\n"
                f"  Grid size: {self.width} columns x {self.height} rows"
            )
        return self.cells[position.row][position.col]


__all__ = [
    "Direction",
    "CellKind",
    "GridError",
    "InvalidCellKind",
    "MalformedGrid",
    "OutOfBounds",
    "Position",
    "Beam",
    "Grid",
]

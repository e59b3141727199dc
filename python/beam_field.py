"""
Beam propagation through a field of mirrors and splitters.
Frontier expansion over (position, direction) states with cycle detection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from beam_types import Beam, CellKind, Direction, Grid, OutOfBounds, Position

logger = logging.getLogger(__name__)


class TerminationReason(Enum):
    """Reason why a simulation stopped."""

    QUIESCENT = "quiescent"  # No active beams left
    MAX_STEPS_REACHED = "max_steps_reached"  # Hit max_steps with beams still active


@dataclass(frozen=True)
class SimulationConfig:
    """Limits governing a simulation run."""

    max_steps: int = 1000

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            raise ValueError(
                f"Invalid max_steps: {self.max_steps}\n"
                "  max_steps must be at least 1 so the starting beams are recorded"
            )


# =============================================================================
# Propagation Rules
# =============================================================================

_N, _S, _E, _W = Direction.N, Direction.S, Direction.E, Direction.W

RULES: dict[tuple[Direction, CellKind], tuple[Direction, ...]] = {
    # Empty space: pass through
    (_N, CellKind.EMPTY): (_N,),
    (_S, CellKind.EMPTY): (_S,),
    (_E, CellKind.EMPTY): (_E,),
    (_W, CellKind.EMPTY): (_W,),
    # '/' reflects E<->N and W<->S
    (_E, CellKind.POSITIVE_MIRROR): (_N,),
    (_W, CellKind.POSITIVE_MIRROR): (_S,),
    (_N, CellKind.POSITIVE_MIRROR): (_E,),
    (_S, CellKind.POSITIVE_MIRROR): (_W,),
    # '\' reflects E<->S and W<->N
    (_E, CellKind.NEGATIVE_MIRROR): (_S,),
    (_W, CellKind.NEGATIVE_MIRROR): (_N,),
    (_N, CellKind.NEGATIVE_MIRROR): (_W,),
    (_S, CellKind.NEGATIVE_MIRROR): (_E,),
    # '|' passes vertical beams, splits horizontal ones
    (_N, CellKind.VERTICAL_SPLITTER): (_N,),
    (_S, CellKind.VERTICAL_SPLITTER): (_S,),
    (_E, CellKind.VERTICAL_SPLITTER): (_N, _S),
    (_W, CellKind.VERTICAL_SPLITTER): (_N, _S),
    # '-' passes horizontal beams, splits vertical ones
    (_E, CellKind.HORIZONTAL_SPLITTER): (_E,),
    (_W, CellKind.HORIZONTAL_SPLITTER): (_W,),
    (_N, CellKind.HORIZONTAL_SPLITTER): (_E, _W),
    (_S, CellKind.HORIZONTAL_SPLITTER): (_E, _W),
}


def outgoing_directions(direction: Direction, kind: CellKind) -> tuple[Direction, ...]:
    """Directions leaving a cell of the given kind, entered travelling `direction`."""
    return RULES[(direction, kind)]


def next_beams(grid: Grid, beam: Beam) -> list[Beam]:
    """
    Advance a beam by one cell.

    The cell under the beam decides the outgoing direction(s); each is turned
    into a beam one step further on. Beams that would leave the grid are
    dropped.

    Args:
        grid: The field being simulated
        beam: A beam on an in-bounds cell

    Returns:
        Zero, one or two beams

    Raises:
        OutOfBounds: If the beam itself is not on the grid
    """
    kind = grid.cell_at(beam.position)
    result: list[Beam] = []
    for direction in outgoing_directions(beam.direction, kind):
        position = beam.position.step(direction)
        if grid.contains(position):
            result.append(Beam(position, direction))
    return result


# =============================================================================
# Simulation
# =============================================================================


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a single simulation run."""

    energized: frozenset[Position]
    steps: int
    termination_reason: TerminationReason

    @property
    def power(self) -> int:
        """Number of distinct energized cells."""
        return len(self.energized)


def simulate(
    grid: Grid,
    initial_beams: Iterable[Beam],
    config: SimulationConfig | None = None,
) -> SimulationResult:
    """
    Run beams through the grid until none remain active.

    Each step records the frontier's positions as energized and its beams as
    seen, then replaces the frontier with the successors of every active beam
    that have not been seen before. Every (position, direction) pair is
    expanded at most once.

    If config.max_steps is reached while beams are still active, a warning is
    logged and the cells energized so far are returned.

    Args:
        grid: The field to simulate
        initial_beams: Starting beams, all on the grid
        config: Step limit (default SimulationConfig())

    Returns:
        SimulationResult with the energized cells and why the run stopped

    Raises:
        OutOfBounds: If an initial beam is not on the grid
    """
    if config is None:
        config = SimulationConfig()

    frontier: set[Beam] = set()
    for beam in initial_beams:
        if not grid.contains(beam.position):
            raise OutOfBounds(
                f"Initial beam at (col={beam.position.col}, row={beam.position.row}) "
                f"is outside the {grid.width}x{grid.height} grid"
            )
        frontier.add(beam)

    energized: set[Position] = set()
    seen: set[Beam] = set()
    steps = 0

    while frontier and steps < config.max_steps:
        energized.update(beam.position for beam in frontier)
        seen.update(frontier)
        frontier = {
            successor
            for beam in frontier
            for successor in next_beams(grid, beam)
            if successor not in seen
        }
        steps += 1

    if frontier:
        logger.warning(
            "Simulation stopped after %d steps with %d unfinished beams",
            steps,
            len(frontier),
        )
        reason = TerminationReason.MAX_STEPS_REACHED
    else:
        reason = TerminationReason.QUIESCENT

    logger.debug("simulate: steps=%d, energized=%d, reason=%s", steps, len(energized), reason.value)
    return SimulationResult(frozenset(energized), steps, reason)


def power(
    grid: Grid,
    initial_beams: Iterable[Beam],
    config: SimulationConfig | None = None,
) -> int:
    """Count the cells energized by the given starting beams."""
    return simulate(grid, initial_beams, config).power


# =============================================================================
# Border Scans
# =============================================================================


class Border(Enum):
    """Grid edge that beams enter from."""

    WEST = "west"
    EAST = "east"
    NORTH = "north"
    SOUTH = "south"

    @property
    def heading(self) -> Direction:
        """Direction of a beam entering from this border."""
        return _HEADINGS[self]


_HEADINGS = {
    Border.WEST: Direction.E,
    Border.EAST: Direction.W,
    Border.NORTH: Direction.S,
    Border.SOUTH: Direction.N,
}


def border_beams(grid: Grid, border: Border) -> Iterator[Beam]:
    """
    Yield every entry beam along a border.

    West/east borders yield one beam per row, north/south borders one per
    column, so non-square grids are covered exactly.
    """
    heading = border.heading
    if border is Border.WEST:
        for row in range(grid.height):
            yield Beam(Position(0, row), heading)
    elif border is Border.EAST:
        for row in range(grid.height):
            yield Beam(Position(grid.width - 1, row), heading)
    elif border is Border.NORTH:
        for col in range(grid.width):
            yield Beam(Position(col, 0), heading)
    else:
        for col in range(grid.width):
            yield Beam(Position(col, grid.height - 1), heading)


def max_border_power(grid: Grid, border: Border, config: SimulationConfig | None = None) -> int:
    """Best power achievable by a single beam entering from the given border."""
    return max(power(grid, [beam], config) for beam in border_beams(grid, border))


def best_entry_power(grid: Grid, config: SimulationConfig | None = None) -> int:
    """Best power achievable by a single beam entering from any border."""
    return max(max_border_power(grid, border, config) for border in Border)

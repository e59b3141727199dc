#!/usr/bin/env python3
"""
Energize a beam field read from a file and report the reference queries.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ascii_render import render_grid
from beam_field import Border, SimulationConfig, max_border_power, simulate
from beam_types import Beam, Direction, GridError, Position
from grid_parser import load_grid

logger = logging.getLogger(__name__)

BORDER_LABELS = [
    (Border.WEST, "western"),
    (Border.EAST, "eastern"),
    (Border.NORTH, "northern"),
    (Border.SOUTH, "southern"),
]


def positive_int(value: str) -> int:
    """argparse type for step ceilings."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the five queries and print their results."""
    parser = argparse.ArgumentParser("beamfield", description="Count cells energized by light beams")
    parser.add_argument("path", help="Grid file, one row per line")
    parser.add_argument("--max-steps", type=positive_int, default=SimulationConfig.max_steps, help="Step ceiling per simulation")
    parser.add_argument("--show", action="store_true", help="Print the energized map for the (0, 0) east beam")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable ANSI colours in --show output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        grid = load_grid(args.path)
    except OSError as exc:
        logger.error("Could not read %s: %s", args.path, exc)
        return 1
    except GridError as exc:
        logger.error("Invalid grid in %s:\n%s", args.path, exc)
        return 1

    config = SimulationConfig(max_steps=args.max_steps)
    logger.info("Loaded %dx%d grid from %s", grid.width, grid.height, args.path)

    result = simulate(grid, [Beam(Position(0, 0), Direction.E)], config)
    print(f"Power going east from 0, 0: {result.power}")
    if args.show:
        print(render_grid(grid, result.energized, color=args.color))

    for border, label in BORDER_LABELS:
        print(f"Max power from {label} border: {max_border_power(grid, border, config)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

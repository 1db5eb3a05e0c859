"""Terminal-sized ASCII art rendering of the Mandelbrot set."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from .kernel import escape_time, pixel_to_complex

WIDTH = 80
HEIGHT = 40
ITERATIONS = 100
ESCAPE_RADIUS = 2.0

# (highest count in bucket, character), from sparse to dense ink
_BUCKETS = (
    (5, "."),
    (10, "*"),
    (20, ":"),
    (30, "o"),
    (40, "&"),
    (50, "8"),
    (60, "#"),
)
_DENSEST = "@"


def to_ascii_char(value: int) -> str:
    """Convert an escape count to the character representing its intensity."""

    for upper, char in _BUCKETS:
        if value <= upper:
            return char
    return _DENSEST


def pixel_index(x: int, y: int, width: int = WIDTH) -> int:
    return y * width + x


def compose_ascii() -> list[str]:
    """Render the fixed 80x40 view, one character per cell.

    The result is indexed by :func:`pixel_index`, so row ``y`` occupies
    ``grid[y * WIDTH:(y + 1) * WIDTH]``.
    """

    grid = []
    for y in range(HEIGHT):
        for x in range(WIDTH):
            c = pixel_to_complex(x, y, WIDTH, HEIGHT)
            count = escape_time(c, ITERATIONS, ESCAPE_RADIUS, count_escape=True)
            grid.append(to_ascii_char(count))
    return grid


def ascii_rows(grid: Sequence[str]) -> list[str]:
    """Split ``grid`` into ``HEIGHT`` strings of ``WIDTH`` characters each."""

    if len(grid) != WIDTH * HEIGHT:
        raise ValueError(f"ASCII grid must have {WIDTH * HEIGHT} cells, got {len(grid)}.")
    rows = []
    for y in range(HEIGHT):
        rows.append("".join(grid[pixel_index(x, y)] for x in range(WIDTH)))
    return rows


def format_ascii(grid: Sequence[str]) -> str:
    return "".join(row + "\n" for row in ascii_rows(grid))


def print_ascii(grid: Sequence[str], stream: TextIO | None = None) -> None:
    """Print ``grid`` row by row, each row followed by a newline."""

    stream = stream if stream is not None else sys.stdout
    stream.write(format_ascii(grid))
    stream.flush()

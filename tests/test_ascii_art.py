import io

import pytest

from escapetime.ascii_art import (
    ESCAPE_RADIUS,
    HEIGHT,
    ITERATIONS,
    WIDTH,
    ascii_rows,
    compose_ascii,
    format_ascii,
    pixel_index,
    print_ascii,
    to_ascii_char,
)
from escapetime.kernel import escape_time, pixel_to_complex

INK_ORDER = ".*:o&8#@"


@pytest.mark.parametrize(
    "value, char",
    [
        (0, "."), (5, "."),
        (6, "*"), (10, "*"),
        (11, ":"), (20, ":"),
        (21, "o"), (30, "o"),
        (31, "&"), (40, "&"),
        (41, "8"), (50, "8"),
        (51, "#"), (60, "#"),
        (61, "@"), (100, "@"), (200, "@"),
    ],
)
def test_bucket_boundaries(value, char):
    assert to_ascii_char(value) == char


def test_bucket_examples():
    assert to_ascii_char(3) == "."
    assert to_ascii_char(8) == "*"
    assert to_ascii_char(55) == "#"
    assert to_ascii_char(200) == "@"


def test_buckets_are_monotonic():
    densities = [INK_ORDER.index(to_ascii_char(value)) for value in range(0, 150)]
    assert densities == sorted(densities)


def test_constants():
    assert (WIDTH, HEIGHT, ITERATIONS, ESCAPE_RADIUS) == (80, 40, 100, 2.0)


def test_pixel_index():
    assert pixel_index(0, 0) == 0
    assert pixel_index(79, 0) == 79
    assert pixel_index(0, 1) == 80
    assert pixel_index(79, 39) == 3199
    assert pixel_index(2, 3, width=10) == 32


def test_compose_ascii_full_coverage():
    grid = compose_ascii()
    assert len(grid) == 3200
    assert all(len(cell) == 1 and cell in INK_ORDER for cell in grid)


def test_compose_ascii_cells_follow_kernel():
    grid = compose_ascii()
    for y in range(HEIGHT):
        for x in range(WIDTH):
            c = pixel_to_complex(x, y, WIDTH, HEIGHT)
            count = escape_time(c, ITERATIONS, ESCAPE_RADIUS, count_escape=True)
            assert grid[pixel_index(x, y)] == to_ascii_char(count)


def test_compose_ascii_is_pure():
    assert compose_ascii() == compose_ascii()


def test_compose_ascii_shows_the_set():
    grid = compose_ascii()
    # c = 0 sits at x = 2.5 / 3.5 * 80, y = 20
    assert grid[pixel_index(57, 20)] == "@"
    assert grid[pixel_index(0, 0)] == "."


def test_ascii_rows_shape():
    rows = ascii_rows(compose_ascii())
    assert len(rows) == HEIGHT
    assert all(len(row) == WIDTH for row in rows)


def test_ascii_rows_rejects_incomplete_grid():
    with pytest.raises(ValueError, match="3200"):
        ascii_rows(["."] * 3199)


def test_format_ascii_lines():
    grid = compose_ascii()
    text = format_ascii(grid)
    lines = text.split("\n")
    assert text.endswith("\n")
    assert lines[-1] == ""
    assert len(lines) == HEIGHT + 1
    assert lines[3] == "".join(grid[3 * WIDTH:4 * WIDTH])


def test_print_ascii_writes_rows_in_order():
    grid = [chr(ord("a") + (i // WIDTH) % 26) for i in range(WIDTH * HEIGHT)]
    stream = io.StringIO()
    print_ascii(grid, stream)
    lines = stream.getvalue().splitlines()
    assert lines[0] == "a" * WIDTH
    assert lines[1] == "b" * WIDTH
    assert lines[26] == "a" * WIDTH


def test_print_ascii_defaults_to_stdout(capsys):
    print_ascii(compose_ascii())
    out = capsys.readouterr().out
    assert out.count("\n") == HEIGHT


def _checked_before_step(c):
    cx, cy = c
    x = y = 0.0
    n = 0
    while x * x + y * y <= ESCAPE_RADIUS * ESCAPE_RADIUS and n < ITERATIONS:
        x, y = x * x - y * y + cx, 2.0 * x * y + cy
        n += 1
    return n


def test_compose_ascii_counts_the_escaping_step():
    grid = compose_ascii()
    for y in range(HEIGHT):
        for x in range(WIDTH):
            expected = to_ascii_char(_checked_before_step(pixel_to_complex(x, y, WIDTH, HEIGHT)))
            assert grid[pixel_index(x, y)] == expected, (x, y)


def test_compose_ascii_bucket_edge_cells():
    grid = compose_ascii()
    assert grid[pixel_index(52, 0)] == "*"
    assert grid[pixel_index(56, 0)] == ":"
    assert grid[pixel_index(51, 1)] == "*"

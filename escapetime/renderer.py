"""Full-resolution grayscale rendering of the Mandelbrot set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import PIL.Image

from .kernel import DEFAULT_ESCAPE_RADIUS, escape_time, pixel_to_complex

BACKENDS = ("python", "tensorflow")
CHANNEL_MAX = 255


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single grayscale render."""

    width: int
    height: int
    max_iterations: int
    escape_radius: float = DEFAULT_ESCAPE_RADIUS
    backend: str = "python"


def _compose_python(params: RenderParameters, progress: Optional[Callable[[int], None]]) -> np.ndarray:
    counts = np.empty((params.height, params.width), dtype=np.int64)
    for y in range(params.height):
        row = counts[y]
        for x in range(params.width):
            c = pixel_to_complex(x, y, params.width, params.height)
            row[x] = escape_time(c, params.max_iterations, params.escape_radius)
        if progress is not None:
            progress(params.width)
    return counts


def _compose_tensorflow(params: RenderParameters, progress: Optional[Callable[[int], None]]) -> np.ndarray:
    from .accelerated import escape_time_grid

    counts = escape_time_grid(params.width, params.height, params.max_iterations, params.escape_radius)
    if progress is not None:
        progress(params.width * params.height)
    return counts


def render(params: RenderParameters, *, progress: Optional[Callable[[int], None]] = None) -> np.ndarray:
    """Render ``params`` into a ``(height, width, 3)`` uint8 pixel buffer.

    Every channel of a pixel holds its escape count, saturated at 255 when the
    iteration cap is larger than a channel can hold. ``progress`` is called
    with the number of pixels finished since the previous call.
    """

    if params.backend == "python":
        counts = _compose_python(params, progress)
    elif params.backend == "tensorflow":
        counts = _compose_tensorflow(params, progress)
    else:
        raise ValueError(f"Unknown backend '{params.backend}'. Valid choices: {', '.join(BACKENDS)}.")

    gray = np.minimum(counts, CHANNEL_MAX).astype(np.uint8)
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def compose(
    width: int,
    height: int,
    iterations_cap: int,
    *,
    backend: str = "python",
    progress: Optional[Callable[[int], None]] = None,
) -> np.ndarray:
    """Compose the fixed Mandelbrot view at ``width`` x ``height`` pixels."""

    params = RenderParameters(width=width, height=height, max_iterations=iterations_cap, backend=backend)
    return render(params, progress=progress)


def to_image(buffer: np.ndarray) -> PIL.Image.Image:
    return PIL.Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))

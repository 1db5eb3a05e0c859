"""Public API for Mandelbrot escape-time rendering."""

from .ascii_art import (
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
from .kernel import complex_to_pixel, escape_time, pixel_to_complex
from .output import write_ascii, write_image
from .renderer import BACKENDS, RenderParameters, compose, render, to_image
from .settings import Settings, SettingsError, load_settings

__all__ = [
    "BACKENDS",
    "ESCAPE_RADIUS",
    "HEIGHT",
    "ITERATIONS",
    "RenderParameters",
    "Settings",
    "SettingsError",
    "WIDTH",
    "ascii_rows",
    "complex_to_pixel",
    "compose",
    "compose_ascii",
    "escape_time",
    "format_ascii",
    "load_settings",
    "pixel_index",
    "pixel_to_complex",
    "print_ascii",
    "render",
    "to_ascii_char",
    "to_image",
    "write_ascii",
    "write_image",
]

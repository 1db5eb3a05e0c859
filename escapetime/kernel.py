"""Escape-time primitives shared by the raster and ASCII renderers."""

from __future__ import annotations

X_MIN = -2.5
X_SPAN = 3.5
Y_MIN = -1.0
Y_SPAN = 2.0

DEFAULT_ESCAPE_RADIUS = 2.0


def pixel_to_complex(x: int, y: int, width: int, height: int) -> tuple[float, float]:
    """Map pixel ``(x, y)`` of a ``width`` x ``height`` grid onto the fixed view.

    The real axis covers [-2.5, 1.0) and the imaginary axis [-1.0, 1.0).
    """

    real = x / float(width) * X_SPAN + X_MIN
    imag = y / float(height) * Y_SPAN + Y_MIN
    return real, imag


def complex_to_pixel(c: tuple[float, float], width: int, height: int) -> tuple[int, int]:
    """Return the pixel nearest to ``c``, the inverse of :func:`pixel_to_complex`."""

    real, imag = c
    x = (real - X_MIN) / X_SPAN * float(width)
    y = (imag - Y_MIN) / Y_SPAN * float(height)
    return int(round(x)), int(round(y))


def escape_time(
    c: tuple[float, float],
    cap: int,
    escape_radius: float = DEFAULT_ESCAPE_RADIUS,
    *,
    count_escape: bool = False,
) -> int:
    """Count the iterations of ``z <- z*z + c`` that stay inside ``escape_radius``.

    Starting from ``z = 0`` the orbit is advanced one step at a time. The count
    stops at the first step whose squared magnitude exceeds the squared radius,
    so a point that escapes on the very first step scores ``0``. Points that
    never escape score ``cap``.

    With ``count_escape`` the escaping step is included in the count, so a
    first-step escape scores ``1``. The result never exceeds ``cap``.
    """

    cx, cy = c
    horizon = escape_radius * escape_radius
    x = 0.0
    y = 0.0
    i = 0
    while i < cap:
        x_next = x * x - y * y + cx
        y = 2.0 * x * y + cy
        x = x_next
        if x * x + y * y > horizon:
            if count_escape:
                i += 1
            break
        i += 1
    return i

"""TensorFlow implementation of the escape-time loop over a whole grid."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

from .kernel import X_MIN, X_SPAN, Y_MIN, Y_SPAN


@tf.function
def _escape_step(
    xs: tf.Tensor,
    ys: tf.Tensor,
    cx: tf.Tensor,
    cy: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
    horizon: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every orbit that has not escaped by one step."""

    xs_new = xs * xs - ys * ys + cx
    ys_new = 2.0 * xs * ys + cy
    bounded = tf.logical_not(xs_new * xs_new + ys_new * ys_new > horizon)
    still_active = tf.logical_and(active, bounded)
    xs = tf.where(active, xs_new, xs)
    ys = tf.where(active, ys_new, ys)
    ns = ns + tf.cast(still_active, tf.int32)
    return xs, ys, ns, still_active


@tf.function
def _escape_run(cx: tf.Tensor, cy: tf.Tensor, max_iterations: tf.Tensor, horizon: tf.Tensor) -> tf.Tensor:
    """Iterate until every orbit escaped or ``max_iterations`` steps were taken."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    xs = tf.zeros_like(cx)
    ys = tf.zeros_like(cy)
    ns = tf.zeros_like(cx, dtype=tf.int32)
    active = tf.ones_like(ns, tf.bool)

    def cond(i, xs, ys, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, xs, ys, ns, active):
        xs, ys, ns, active = _escape_step(xs, ys, cx, cy, ns, active, horizon)
        return i + 1, xs, ys, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, xs, ys, ns, active))
    return ns


def escape_time_grid(width: int, height: int, cap: int, escape_radius: float, *, device: str | None = None) -> np.ndarray:
    """Return a ``(height, width)`` array of escape counts for the fixed view."""

    if width == 0 or height == 0 or cap <= 0:
        return np.zeros((height, width), dtype=np.int64)

    # same arithmetic as kernel.pixel_to_complex, one axis at a time
    real = np.arange(width, dtype=np.float64) / np.float64(width) * np.float64(X_SPAN) + np.float64(X_MIN)
    imag = np.arange(height, dtype=np.float64) / np.float64(height) * np.float64(Y_SPAN) + np.float64(Y_MIN)

    with tf.device(device if device is not None else "/CPU:0"):
        real_tf = tf.convert_to_tensor(real, dtype=tf.float64)
        imag_tf = tf.convert_to_tensor(imag, dtype=tf.float64)
        cx, cy = tf.meshgrid(real_tf, imag_tf)
        horizon = tf.constant(escape_radius * escape_radius, dtype=tf.float64)
        ns = _escape_run(cx, cy, tf.constant(cap, dtype=tf.int32), horizon)

    return ns.numpy().astype(np.int64)

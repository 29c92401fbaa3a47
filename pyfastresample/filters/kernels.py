"""
Reconstruction filter kernels for PyFastResample.

Each kernel is a pure Taichi function giving the weight of a source sample at
a signed distance x (in source pixels) from the reconstruction point. The
single dispatcher kernel_weight() is what the weight builder and the
resampler call, so every family goes through the same code path on device.

Kernels:
- Lanczos: windowed sinc, a * sin(pi x) * sin(pi x / a) / (pi x)^2 for |x| < a
- Mitchell-Netravali: two-piece cubic in |x| with free (B, C)
- Gaussian: exp(-x^2 / (2 sigma^2)) / (sigma sqrt(2 pi)), untruncated; the tap
  window of the weight builder does the truncation
- Box and tent for the nearest and linear pass-through kinds

References:
    Mitchell, D. P. & Netravali, A. N. (1988). Reconstruction filters in
    computer graphics. SIGGRAPH '88.
    Duchon, C. E. (1979). Lanczos filtering in one and two dimensions.

Author: B.G.
"""

import math

import numpy as np
import taichi as ti

from .. import constants as cte
from .filter_kind import FilterKind


@ti.func
def lanczos_weight(x: cte.FLOAT_TYPE_TI, a: cte.FLOAT_TYPE_TI) -> cte.FLOAT_TYPE_TI:
    """
    Lanczos windowed sinc.

    Returns exactly 1.0 near the origin (the 0/0 limit of the sinc product)
    and exactly 0.0 from |x| = a outwards.
    """
    w = 0.0
    ax = ti.abs(x)
    if ax < cte.LANCZOS_EPSILON:
        w = 1.0
    elif ax < a:
        px = math.pi * x
        w = a * ti.sin(px) * ti.sin(px / a) / (px * px)
    return w


@ti.func
def mitchell_weight(
    x: cte.FLOAT_TYPE_TI, b: cte.FLOAT_TYPE_TI, c: cte.FLOAT_TYPE_TI
) -> cte.FLOAT_TYPE_TI:
    """
    Mitchell-Netravali cubic with parameters B and C.

    (B, C) = (1/3, 1/3) is the Mitchell filter, (0, 0.5) Catmull-Rom and
    (1, 0) the cubic B-spline.
    """
    t = ti.abs(x)
    w = 0.0
    if t < 1.0:
        w = (
            (12.0 - 9.0 * b - 6.0 * c) * t * t * t
            + (-18.0 + 12.0 * b + 6.0 * c) * t * t
            + (6.0 - 2.0 * b)
        ) / 6.0
    elif t < 2.0:
        w = (
            (-b - 6.0 * c) * t * t * t
            + (6.0 * b + 30.0 * c) * t * t
            + (-12.0 * b - 48.0 * c) * t
            + (8.0 * b + 24.0 * c)
        ) / 6.0
    return w


@ti.func
def gaussian_weight(x: cte.FLOAT_TYPE_TI, sigma: cte.FLOAT_TYPE_TI) -> cte.FLOAT_TYPE_TI:
    """Normal density with standard deviation sigma."""
    return ti.exp(-(x * x) / (2.0 * sigma * sigma)) / (sigma * cte.SQRT_2PI)


@ti.func
def box_weight(x: cte.FLOAT_TYPE_TI) -> cte.FLOAT_TYPE_TI:
    w = 0.0
    if x >= -0.5 and x < 0.5:
        w = 1.0
    return w


@ti.func
def tent_weight(x: cte.FLOAT_TYPE_TI) -> cte.FLOAT_TYPE_TI:
    return ti.max(0.0, 1.0 - ti.abs(x))


@ti.func
def kernel_weight(
    kind: ti.i32, p0: cte.FLOAT_TYPE_TI, p1: cte.FLOAT_TYPE_TI, x: cte.FLOAT_TYPE_TI
) -> cte.FLOAT_TYPE_TI:
    """
    Evaluate the filter identified by kind at distance x.

    Args:
        kind: One of the cte.FILTER_* identifiers
        p0: First filter parameter (Lanczos a, Mitchell B, Gaussian sigma)
        p1: Second filter parameter (Mitchell C, unused otherwise)
        x: Signed distance in source pixels

    Returns:
        Filter weight (0 outside the support)
    """
    w = 0.0
    if kind == cte.FILTER_LANCZOS:
        w = lanczos_weight(x, p0)
    elif kind == cte.FILTER_MITCHELL:
        w = mitchell_weight(x, p0, p1)
    elif kind == cte.FILTER_GAUSSIAN:
        w = gaussian_weight(x, p0)
    elif kind == cte.FILTER_LINEAR:
        w = tent_weight(x)
    else:
        w = box_weight(x)
    return w


@ti.kernel
def evaluate_kernel(
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    x: cte.FLOAT_TYPE_TI,
) -> cte.FLOAT_TYPE_TI:
    return kernel_weight(kind, p0, p1, x)


@ti.kernel
def evaluate_array_kernel(
    distances: ti.types.ndarray(),
    weights: ti.types.ndarray(),
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
):
    for i in range(distances.shape[0]):
        weights[i] = kernel_weight(kind, p0, p1, distances[i])


def evaluate(kind, distance):
    """
    Evaluate a filter kernel at one signed distance.

    Args:
        kind: FilterKind or filter string (e.g. 'lanczos3')
        distance: Signed distance in source pixels

    Returns:
        float: Filter weight, 0 outside the kernel support

    Example:
        evaluate('lanczos3', 0.0)   # 1.0
        evaluate('cubic', 1.0)      # 1/18
    """
    kind = FilterKind.parse(kind)
    p0, p1 = kind.params
    return evaluate_kernel(kind.kind_id, p0, p1, float(distance))


def sample_kernel(kind, distances):
    """Evaluate a filter kernel at every entry of a 1D array of distances."""
    kind = FilterKind.parse(kind)
    d = np.ascontiguousarray(np.asarray(distances, dtype=np.float32).ravel())
    out = np.zeros_like(d)
    p0, p1 = kind.params
    evaluate_array_kernel(d, out, kind.kind_id, p0, p1)
    return out


__all__ = [
    "lanczos_weight",
    "mitchell_weight",
    "gaussian_weight",
    "box_weight",
    "tent_weight",
    "kernel_weight",
    "evaluate_kernel",
    "evaluate_array_kernel",
    "evaluate",
    "sample_kernel",
]

"""
Per-axis weight rows for PyFastResample.

For a fractional offset f in [0, 1) between the reconstruction point and the
centre texel, the weight of tap i (an integer offset from the centre texel)
is kernel_weight(i - f). Tap ranges come from the FilterKind:

    Lanczos(a)          [-a, a]
    Mitchell-Netravali  [-1, 2]
    Gaussian(radius)    [-radius, radius]

Gaussian rows are divided by their own sum, which restores unit mass after
the window cut the tails off. Lanczos and cubic rows are returned raw; the
resampler divides by the accumulated 2D weight sum for every kind.

Rows are never stored in fixed-size local arrays on device: the resampler
recomputes a tap's weight from (i, f) when it needs it, so any radius allowed
by FilterKind is honoured in full.

Author: B.G.
"""

import taichi as ti

from .. import constants as cte
from .. import pool
from .filter_kind import FilterKind
from .kernels import kernel_weight


def row_layout(kind):
    """
    Kernel arguments describing how rows are built for a filter.

    Returns:
        tuple: (kind_id, p0, p1, first_tap, last_tap, normalize_rows)
    """
    kind = FilterKind.parse(kind)
    p0, p1 = kind.params
    first, last = kind.tap_range
    normalize = 1 if kind.family == "gaussian" else 0
    return kind.kind_id, p0, p1, first, last, normalize


@ti.func
def row_normalizer(
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    first: ti.i32,
    last: ti.i32,
    normalize: ti.i32,
    offset: cte.FLOAT_TYPE_TI,
) -> cte.FLOAT_TYPE_TI:
    """
    Factor applied to every entry of a row: 1 / row sum for normalized rows,
    1 otherwise. A row whose sum underflows keeps factor 1 so its zeros reach
    the resampler's degenerate weight_sum path.
    """
    factor = 1.0
    if normalize != 0:
        total = 0.0
        for i in range(first, last + 1):
            total += kernel_weight(kind, p0, p1, i - offset)
        if total > cte.WEIGHT_SUM_EPSILON:
            factor = 1.0 / total
    return factor


@ti.func
def axis_weight(
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    tap: ti.i32,
    offset: cte.FLOAT_TYPE_TI,
    factor: cte.FLOAT_TYPE_TI,
) -> cte.FLOAT_TYPE_TI:
    """Weight of one tap of a row, factor being the row's row_normalizer()."""
    return kernel_weight(kind, p0, p1, tap - offset) * factor


@ti.kernel
def axis_weights_kernel(
    row: ti.template(),
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    first: ti.i32,
    last: ti.i32,
    normalize: ti.i32,
    offset: cte.FLOAT_TYPE_TI,
):
    for k in range(last - first + 1):
        factor = row_normalizer(kind, p0, p1, first, last, normalize, offset)
        row[k] = axis_weight(kind, p0, p1, first + k, offset, factor)


def build_axis_weights(kind, fractional_offset):
    """
    Build the weight row of one axis.

    Args:
        kind: FilterKind or filter string
        fractional_offset: Offset of the reconstruction point from the centre
                           texel, expected in [0, 1)

    Returns:
        numpy.ndarray: float32 row indexed from the first tap offset
                       (kind.tap_range[0]) to the last

    Example:
        row = build_axis_weights('gaussian(1.5,3)', 0.25)
        row.sum()  # 1.0
    """
    kind = FilterKind.parse(kind)
    kind_id, p0, p1, first, last, normalize = row_layout(kind)
    n = last - first + 1

    row = pool.get_temp_field(cte.FLOAT_TYPE_TI, (n,))
    axis_weights_kernel(
        row.field, kind_id, p0, p1, first, last, normalize, float(fractional_offset)
    )
    result = row.field.to_numpy()
    row.release()
    return result


def tap_offsets(kind):
    """Integer tap offsets matching the entries of build_axis_weights()."""
    first, last = FilterKind.parse(kind).tap_range
    return list(range(first, last + 1))


__all__ = [
    "row_layout",
    "row_normalizer",
    "axis_weight",
    "axis_weights_kernel",
    "build_axis_weights",
    "tap_offsets",
]

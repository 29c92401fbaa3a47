"""
Per-pixel weighted resampling.

resample_pixel() reconstructs one output colour from the source texture:

1. pixel = (u * width, v * height) - 0.5, so texel centres sit on integers
2. centre = floor(pixel), offset = pixel - centre in [0, 1)
3. weight of tap (dx, dy) = row_x(dx) * row_y(dy), rows from filters.weights
4. every non-zero tap fetches the texel at (centre + d + 0.5) / size with
   coordinates clamped to [0, 1] and accumulates colour and weight_sum
5. colour / weight_sum, or a bilinear fetch at (u, v) when weight_sum is
   below WEIGHT_SUM_EPSILON (counted in stats[0])

Clamping plus division by the weight actually accumulated keeps flat regions
flat up to the image border: taps that fall outside repeat the edge texel
instead of dropping their weight.

The tap grid is the full 2D product of the row ranges, (2a+1)^2 for Lanczos,
(2r+1)^2 for Gaussian and 4x4 for the cubic, evaluated in one pass.

Author: B.G.
"""

import taichi as ti

from .. import constants as cte
from .. import pool
from ..errors import DegenerateInputError
from ..filters.filter_kind import FilterKind
from ..filters.weights import axis_weight, row_layout, row_normalizer
from .texture import SampleParams, SourceTexture, fetch_bilinear, fetch_point


@ti.func
def resample_pixel(
    tex: ti.template(),
    stats: ti.template(),
    src_w: ti.i32,
    src_h: ti.i32,
    u: cte.FLOAT_TYPE_TI,
    v: cte.FLOAT_TYPE_TI,
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    first: ti.i32,
    last: ti.i32,
    normalize: ti.i32,
):
    """
    Filtered colour at normalized source position (u, v).

    Args:
        tex: Flat RGBA source field (see texture.SourceTexture.upload)
        stats: 1-element i32 field, incremented for each degenerate pixel
        src_w, src_h: Source texture size in texels
        u, v: Normalized source coordinates of the output pixel centre
        kind, p0, p1: Filter identifier and parameters
        first, last: Inclusive tap range of a row
        normalize: Non-zero to normalize each row to unit sum

    Returns:
        ti.Vector: RGBA colour
    """
    px = u * src_w - 0.5
    py = v * src_h - 0.5
    cx = ti.floor(px)
    cy = ti.floor(py)
    ox = px - cx
    oy = py - cy

    fx = row_normalizer(kind, p0, p1, first, last, normalize, ox)
    fy = row_normalizer(kind, p0, p1, first, last, normalize, oy)

    color = ti.Vector([0.0, 0.0, 0.0, 0.0])
    weight_sum = 0.0
    for dy in range(first, last + 1):
        wy = axis_weight(kind, p0, p1, dy, oy, fy)
        for dx in range(first, last + 1):
            weight = axis_weight(kind, p0, p1, dx, ox, fx) * wy
            if weight != 0.0:
                su = (cx + dx + 0.5) / src_w
                sv = (cy + dy + 0.5) / src_h
                color += fetch_point(tex, su, sv, src_w, src_h) * weight
                weight_sum += weight

    result = ti.Vector([0.0, 0.0, 0.0, 0.0])
    if weight_sum < cte.WEIGHT_SUM_EPSILON:
        result = fetch_bilinear(tex, u, v, src_w, src_h)
        ti.atomic_add(stats[0], 1)
    else:
        result = color / weight_sum
    return result


@ti.kernel
def resample_pixel_kernel(
    tex: ti.template(),
    out: ti.template(),
    stats: ti.template(),
    src_w: ti.i32,
    src_h: ti.i32,
    u: cte.FLOAT_TYPE_TI,
    v: cte.FLOAT_TYPE_TI,
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    first: ti.i32,
    last: ti.i32,
    normalize: ti.i32,
):
    for k in range(1):
        color = resample_pixel(
            tex, stats, src_w, src_h, u, v, kind, p0, p1, first, last, normalize
        )
        for c in ti.static(range(4)):
            out[c] = color[c]


def resample_pixel_at(source, params, kind, output_uv):
    """
    Resample a single output pixel on device.

    Host-side entry point to the same code the full pass runs per pixel,
    mostly useful for inspection and tests.

    Args:
        source: SourceTexture or image array
        params: SampleParams (source size must match the texture)
        kind: FilterKind or filter string using a kernel (lanczos, cubic,
              gaussian)
        output_uv: (u, v) normalized source coordinates of the pixel centre

    Returns:
        tuple: (rgba, degenerate) with rgba a float32 array of 4 values and
               degenerate True when the bilinear fallback was used
    """
    if not isinstance(source, SourceTexture):
        source = SourceTexture(source)
    if not isinstance(params, SampleParams):
        raise TypeError("params must be a SampleParams instance")
    kind = FilterKind.parse(kind)
    if not kind.uses_kernel:
        raise ValueError(f"Filter '{kind.name}' does not use a reconstruction kernel")
    if (params.source_width, params.source_height) != (source.width, source.height):
        raise DegenerateInputError(
            f"params describe a {params.source_width:g}x{params.source_height:g} source, "
            f"texture is {source.width}x{source.height}"
        )

    kind_id, p0, p1, first, last, normalize = row_layout(kind)
    u, v = output_uv

    tex = source.upload()
    out = pool.get_temp_field(cte.FLOAT_TYPE_TI, (cte.CHANNELS,))
    stats = pool.get_temp_field(ti.i32, (1,))
    stats.field.fill(0)

    resample_pixel_kernel(
        tex.field,
        out.field,
        stats.field,
        source.width,
        source.height,
        float(u),
        float(v),
        kind_id,
        p0,
        p1,
        first,
        last,
        normalize,
    )
    rgba = out.field.to_numpy()
    degenerate = bool(stats.field[0] > 0)

    tex.release()
    out.release()
    stats.release()
    return rgba, degenerate


__all__ = ["resample_pixel", "resample_pixel_kernel", "resample_pixel_at"]

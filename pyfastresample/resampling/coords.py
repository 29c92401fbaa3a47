"""
Output-to-source coordinate mapping.

Convention used throughout PyFastResample:

- Images are row-major with row 0 at the top, for sources and outputs alike.
  Normalized source coordinates (u, v) therefore have (0, 0) at the top-left
  corner of texel (0, 0) and v grows downwards.
- Output pixel (i, j) samples at its centre:
      u = (i + 0.5) * scale_x / source_width
      v = (j + 0.5) * scale_y / source_height
  which for scale = source / output is ((i + 0.5) / out_w, (j + 0.5) / out_h).
- flip_y=True targets bottom-left-origin surfaces (OpenGL framebuffers):
  output row 0 is the bottom row, so v becomes 1 - v.
- Normalized device coordinates (x, y in [-1, 1], y up) map to
  u = (x + 1) / 2, v = (1 - y) / 2.

Author: B.G.
"""

import taichi as ti

from .. import constants as cte


def to_source_uv(output_pixel_pos, params, flip_y=False):
    """
    Map an output pixel to normalized source coordinates.

    Args:
        output_pixel_pos: (i, j) integer pixel position in the output image
        params: SampleParams of the pass
        flip_y: True when output row 0 is the bottom row

    Returns:
        tuple: (u, v) in [0, 1] source-texture space
    """
    i, j = output_pixel_pos
    u = (i + 0.5) * params.scale_x / params.source_width
    v = (j + 0.5) * params.scale_y / params.source_height
    if flip_y:
        v = 1.0 - v
    return u, v


def ndc_to_uv(x, y):
    """Map normalized device coordinates (y up) to top-left-origin (u, v)."""
    return (x + 1.0) * 0.5, (1.0 - y) * 0.5


def uv_to_ndc(u, v):
    """Inverse of ndc_to_uv()."""
    return u * 2.0 - 1.0, 1.0 - v * 2.0


@ti.func
def source_uv(
    i: ti.i32,
    j: ti.i32,
    src_w: ti.i32,
    src_h: ti.i32,
    scale_x: cte.FLOAT_TYPE_TI,
    scale_y: cte.FLOAT_TYPE_TI,
    flip_y: ti.i32,
):
    """Device counterpart of to_source_uv(), returns ti.Vector([u, v])."""
    u = (i + 0.5) * scale_x / src_w
    v = (j + 0.5) * scale_y / src_h
    if flip_y != 0:
        v = 1.0 - v
    return ti.Vector([u, v])


__all__ = ["to_source_uv", "ndc_to_uv", "uv_to_ndc", "source_uv"]

"""
Source textures, per-pass parameters and texel fetches.

SourceTexture is the host-side, read-only image handed to a resampling pass.
On device it lives in a flat ti.f32 field of height * width * 4 entries laid
out row-major RGBA, the same layout as the host buffer:

    field[(j * width + i) * 4 + c]   row j (0 = top), column i, channel c

The fetch functions are the sampling interface of the resampler (level 0
only): a point fetch and a bilinear fetch at normalized coordinates, both
clamping to the texture edge.

Author: B.G.
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from .. import constants as cte
from .. import pool
from ..errors import DegenerateInputError


def as_rgba_float(data):
    """
    Convert an image array to C-contiguous float32 RGBA in [0, 1].

    Accepts (H, W) greyscale, (H, W, 1), (H, W, 3) RGB and (H, W, 4) RGBA.
    uint8 and uint16 inputs are divided by their full range; float inputs are
    taken as already normalized. Missing alpha is set to 1.

    Raises:
        DegenerateInputError: Empty image, wrong rank or channel count,
                              non-finite values.
    """
    arr = np.asarray(data)
    if arr.ndim == 2:
        arr = arr[:, :, None]
    if arr.ndim != 3:
        raise DegenerateInputError(
            f"Image must be (H, W) or (H, W, C), got shape {arr.shape}"
        )
    h, w, c = arr.shape
    if h < 1 or w < 1:
        raise DegenerateInputError(f"Image must be at least 1x1, got {w}x{h}")
    if c not in (1, 3, 4):
        raise DegenerateInputError(f"Image must have 1, 3 or 4 channels, got {c}")

    if arr.dtype == np.uint8:
        rgba = arr.astype(np.float32) / 255.0
    elif arr.dtype == np.uint16:
        rgba = arr.astype(np.float32) / 65535.0
    elif np.issubdtype(arr.dtype, np.floating):
        rgba = arr.astype(np.float32)
    else:
        raise DegenerateInputError(f"Unsupported image dtype {arr.dtype}")

    if not np.all(np.isfinite(rgba)):
        raise DegenerateInputError("Image contains NaN or Inf samples")

    if c == 1:
        rgba = np.concatenate(
            [np.repeat(rgba, 3, axis=2), np.ones((h, w, 1), dtype=np.float32)], axis=2
        )
    elif c == 3:
        rgba = np.concatenate([rgba, np.ones((h, w, 1), dtype=np.float32)], axis=2)
    return np.ascontiguousarray(rgba, dtype=np.float32)


class SourceTexture:
    """
    Immutable RGBA float image.

    The pixel array is copied on construction and flagged read-only, so a
    texture can be shared between passes without the host mutating it under
    a running pass.
    """

    def __init__(self, data):
        rgba = as_rgba_float(data).copy()
        rgba.flags.writeable = False
        self._rgba = rgba

    @classmethod
    def from_bytes(cls, data, width, height):
        """Build a texture from a packed RGBA8 buffer (4 bytes per pixel, row-major)."""
        width = int(width)
        height = int(height)
        if width < 1 or height < 1:
            raise DegenerateInputError(f"Image must be at least 1x1, got {width}x{height}")
        buf = np.frombuffer(bytes(data), dtype=np.uint8)
        if buf.size != width * height * 4:
            raise DegenerateInputError(
                f"Expected {width * height * 4} bytes for {width}x{height} RGBA8, got {buf.size}"
            )
        return cls(buf.reshape(height, width, 4))

    @property
    def width(self):
        return self._rgba.shape[1]

    @property
    def height(self):
        return self._rgba.shape[0]

    @property
    def size(self):
        """(width, height)"""
        return (self.width, self.height)

    @property
    def rgba(self):
        """Read-only (H, W, 4) float32 view of the pixels."""
        return self._rgba

    def upload(self):
        """
        Copy the texture into a pooled device field.

        Returns:
            TPField: Flat field of height * width * 4 samples. The caller
                     releases it when the pass is done.
        """
        tex = pool.get_temp_field(cte.FLOAT_TYPE_TI, (self.height * self.width * cte.CHANNELS,))
        tex.field.from_numpy(self._rgba.reshape(-1).copy())
        return tex

    def __repr__(self):
        return f"SourceTexture({self.width}x{self.height})"


@dataclass(frozen=True)
class SampleParams:
    """
    Uniform parameters of one pass.

    scale_x and scale_y are source_dimension / output_dimension; values
    above 1 mean the axis is downsampled.
    """

    source_width: float
    source_height: float
    scale_x: float
    scale_y: float

    def __post_init__(self):
        for name in ("source_width", "source_height", "scale_x", "scale_y"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise DegenerateInputError(f"{name} must be a number, got {value!r}") from None
            if not math.isfinite(value) or value <= 0:
                raise DegenerateInputError(f"{name} must be finite and > 0, got {value}")
            object.__setattr__(self, name, value)

    @classmethod
    def for_sizes(cls, source_size, output_size):
        """Parameters for resampling a (width, height) source to a (width, height) output."""
        sw, sh = validate_size(source_size, "source size")
        ow, oh = validate_size(output_size, "output size")
        return cls(sw, sh, sw / ow, sh / oh)

    @property
    def is_downsampling(self):
        return self.scale_x > 1.0 or self.scale_y > 1.0

    @property
    def output_size(self):
        """Output (width, height) implied by the scale factors, at least 1x1."""
        return (
            max(1, int(round(self.source_width / self.scale_x))),
            max(1, int(round(self.source_height / self.scale_y))),
        )


def validate_size(size, what="size"):
    """Check a (width, height) pair of integers >= 1 and return it as ints."""
    try:
        w, h = size
    except (TypeError, ValueError):
        raise DegenerateInputError(f"{what} must be a (width, height) pair, got {size!r}") from None
    for v in (w, h):
        if isinstance(v, float) and not v.is_integer():
            raise DegenerateInputError(f"{what} must be integers, got {size!r}")
        try:
            iv = int(v)
        except (TypeError, ValueError, OverflowError):
            raise DegenerateInputError(f"{what} must be integers, got {size!r}") from None
        if iv < 1:
            raise DegenerateInputError(f"{what} must be >= 1 on both axes, got {size!r}")
    return int(w), int(h)


@ti.func
def texel(tex: ti.template(), i: ti.i32, j: ti.i32, w: ti.i32, h: ti.i32):
    """RGBA of texel (i, j), indices clamped to the texture."""
    ii = ti.min(ti.max(i, 0), w - 1)
    jj = ti.min(ti.max(j, 0), h - 1)
    base = (jj * w + ii) * 4
    return ti.Vector([tex[base], tex[base + 1], tex[base + 2], tex[base + 3]])


@ti.func
def fetch_point(tex: ti.template(), u: cte.FLOAT_TYPE_TI, v: cte.FLOAT_TYPE_TI, w: ti.i32, h: ti.i32):
    """Nearest-texel fetch at normalized (u, v), coordinates clamped to [0, 1]."""
    uc = ti.min(ti.max(u, 0.0), 1.0)
    vc = ti.min(ti.max(v, 0.0), 1.0)
    i = ti.cast(ti.floor(uc * w), ti.i32)
    j = ti.cast(ti.floor(vc * h), ti.i32)
    return texel(tex, i, j, w, h)


@ti.func
def fetch_bilinear(tex: ti.template(), u: cte.FLOAT_TYPE_TI, v: cte.FLOAT_TYPE_TI, w: ti.i32, h: ti.i32):
    """Bilinear fetch at normalized (u, v) with clamp-to-edge addressing."""
    uc = ti.min(ti.max(u, 0.0), 1.0)
    vc = ti.min(ti.max(v, 0.0), 1.0)
    x = uc * w - 0.5
    y = vc * h - 0.5
    x0 = ti.floor(x)
    y0 = ti.floor(y)
    fx = x - x0
    fy = y - y0
    i0 = ti.cast(x0, ti.i32)
    j0 = ti.cast(y0, ti.i32)
    top = texel(tex, i0, j0, w, h) * (1.0 - fx) + texel(tex, i0 + 1, j0, w, h) * fx
    bottom = texel(tex, i0, j0 + 1, w, h) * (1.0 - fx) + texel(tex, i0 + 1, j0 + 1, w, h) * fx
    return top * (1.0 - fy) + bottom * fy


__all__ = [
    "as_rgba_float",
    "SourceTexture",
    "SampleParams",
    "validate_size",
    "texel",
    "fetch_point",
    "fetch_bilinear",
]

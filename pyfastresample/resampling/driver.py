"""
Full-pass resampling driver.

ResamplePipeline runs one pass over the output grid: the source texture is
uploaded to a pooled field, one Taichi struct-for iteration computes each
output pixel independently, and the result is read back as an (H, W, 4)
float32 array.

The reconstruction kernel is only applied when the pass downsamples
(scale_x > 1 or scale_y > 1). Equal-size and upsampling passes, as well as
the 'nearest' and 'linear' kinds, take a single point or bilinear fetch per
pixel instead. The choice is made once per pass.

Usage:
    import taichi as ti
    import pyfastresample as pfr

    ti.init(ti.gpu)
    image = np.random.rand(512, 512, 4).astype(np.float32)

    small = pfr.resampling.render(image, (128, 128), kind="lanczos3")

    pipe = pfr.resampling.ResamplePipeline("gaussian(1.5,3)")
    small = pipe.render(image, (200, 150))
    pipe.last_mode        # 'filtered'
    pipe.fallback_count   # pixels that fell back to a bilinear fetch

Author: B.G.
"""

import logging

import taichi as ti

from .. import constants as cte
from .. import pool
from ..errors import DegenerateInputError
from ..filters.filter_kind import FilterKind
from ..filters.weights import row_layout
from .coords import source_uv
from .resampler import resample_pixel
from .texture import SampleParams, SourceTexture, fetch_bilinear, fetch_point, validate_size

logger = logging.getLogger(__name__)

_MODE_NEAREST = 0
_MODE_LINEAR = 1
_MODE_FILTERED = 2

_MODES = {"nearest": _MODE_NEAREST, "linear": _MODE_LINEAR, "filtered": _MODE_FILTERED}


@ti.kernel
def render_kernel(
    tex: ti.template(),
    target: ti.template(),
    stats: ti.template(),
    src_w: ti.i32,
    src_h: ti.i32,
    out_w: ti.i32,
    out_h: ti.i32,
    scale_x: cte.FLOAT_TYPE_TI,
    scale_y: cte.FLOAT_TYPE_TI,
    flip_y: ti.i32,
    mode: ti.i32,
    kind: ti.i32,
    p0: cte.FLOAT_TYPE_TI,
    p1: cte.FLOAT_TYPE_TI,
    first: ti.i32,
    last: ti.i32,
    normalize: ti.i32,
):
    """
    Compute every output pixel of a pass.

    Args:
        tex: Flat RGBA source field (src_h * src_w * 4)
        target: Flat RGBA output field (out_h * out_w * 4)
        stats: 1-element i32 field counting degenerate pixels
        src_w, src_h: Source size in texels
        out_w, out_h: Output size in pixels
        scale_x, scale_y: Source / output scale factors
        flip_y: Non-zero when output row 0 is the bottom row
        mode: _MODE_FILTERED, _MODE_LINEAR or _MODE_NEAREST
        kind, p0, p1, first, last, normalize: Filter layout (filters.weights.row_layout)
    """
    for idx in range(out_w * out_h):
        j = idx // out_w
        i = idx % out_w
        uv = source_uv(i, j, src_w, src_h, scale_x, scale_y, flip_y)

        color = ti.Vector([0.0, 0.0, 0.0, 0.0])
        if mode == _MODE_FILTERED:
            color = resample_pixel(
                tex, stats, src_w, src_h, uv[0], uv[1],
                kind, p0, p1, first, last, normalize,
            )
        elif mode == _MODE_NEAREST:
            color = fetch_point(tex, uv[0], uv[1], src_w, src_h)
        else:
            color = fetch_bilinear(tex, uv[0], uv[1], src_w, src_h)

        for c in ti.static(range(4)):
            target[idx * 4 + c] = color[c]


def select_mode(kind, params):
    """
    Sampling mode of a pass.

    Returns:
        str: 'filtered' when kind has a kernel and params downsample,
             otherwise 'nearest' for the nearest kind and 'linear' for the rest
    """
    kind = FilterKind.parse(kind)
    if kind.uses_kernel and params.is_downsampling:
        return "filtered"
    if kind.family == "nearest":
        return "nearest"
    return "linear"


class ResamplePipeline:
    """
    Resampling passes with a fixed filter.

    Holds the filter choice and the target convention; each call to render()
    is a self-contained pass over immutable inputs.

    Attributes:
        kind (FilterKind): Filter used for downsampling passes
        flip_y (bool): True for bottom-left-origin targets
        last_mode (str|None): Sampling mode of the most recent pass
        fallback_count (int): Pixels of the most recent pass whose weight sum
                              was degenerate and which used a bilinear fetch
    """

    def __init__(self, kind=None, flip_y=False):
        self.kind = FilterKind.default() if kind is None else FilterKind.parse(kind)
        self.flip_y = bool(flip_y)
        self.last_mode = None
        self.fallback_count = 0

    def render(self, source, output_size=None, params=None, return_field=False):
        """
        Resample source to output_size.

        Args:
            source: SourceTexture or image array ((H, W), (H, W, 3) or (H, W, 4))
            output_size: (width, height) of the output. Derived from params
                         when omitted.
            params: SampleParams of the pass. Derived as source / output when
                    omitted.
            return_field: If True, return the flat Taichi output field
                          (out_h * out_w * 4, owned by the caller) instead of a
                          numpy array

        Returns:
            numpy.ndarray: float32 array of shape (out_h, out_w, 4), or a
                           taichi field when return_field is True

        Raises:
            DegenerateInputError: Empty sizes, invalid scale factors, params not
                                  matching the source, malformed image arrays.
                                  Nothing is allocated on device in that case.
        """
        if not isinstance(source, SourceTexture):
            source = SourceTexture(source)

        if output_size is None and params is None:
            raise DegenerateInputError("render() needs output_size or params")
        if params is None:
            params = SampleParams.for_sizes(source.size, output_size)
        elif not isinstance(params, SampleParams):
            raise TypeError("params must be a SampleParams instance")
        if (params.source_width, params.source_height) != (source.width, source.height):
            raise DegenerateInputError(
                f"params describe a {params.source_width:g}x{params.source_height:g} source, "
                f"texture is {source.width}x{source.height}"
            )
        out_w, out_h = validate_size(
            params.output_size if output_size is None else output_size, "output size"
        )

        mode_name = select_mode(self.kind, params)
        mode = _MODES[mode_name]
        kind_id, p0, p1, first, last, normalize = row_layout(self.kind)

        logger.debug(
            "Resampling %dx%d -> %dx%d with %s (mode=%s, scale=%.4f,%.4f, flip_y=%s)",
            source.width, source.height, out_w, out_h, self.kind.name,
            mode_name, params.scale_x, params.scale_y, self.flip_y,
        )

        tex = source.upload()
        target = pool.get_temp_field(cte.FLOAT_TYPE_TI, (out_h * out_w * cte.CHANNELS,))
        stats = pool.get_temp_field(ti.i32, (1,))
        stats.field.fill(0)

        render_kernel(
            tex.field,
            target.field,
            stats.field,
            source.width,
            source.height,
            out_w,
            out_h,
            params.scale_x,
            params.scale_y,
            1 if self.flip_y else 0,
            mode,
            kind_id,
            p0,
            p1,
            first,
            last,
            normalize,
        )
        ti.sync()

        self.last_mode = mode_name
        self.fallback_count = int(stats.field[0])
        if self.fallback_count:
            logger.warning(
                "%d pixel(s) had a degenerate weight sum with %s and used a bilinear fetch",
                self.fallback_count, self.kind.name,
            )

        tex.release()
        stats.release()

        if return_field:
            return target.field

        result = target.field.to_numpy().reshape(out_h, out_w, cte.CHANNELS)
        target.release()
        return result


def render(source, output_size=None, params=None, kind=None, flip_y=False, return_field=False):
    """
    Resample an image in one pass.

    Args:
        source: SourceTexture or image array
        output_size: (width, height) of the output
        params: Optional SampleParams (defaults to source / output scales)
        kind: FilterKind or filter string, default 'lanczos3'
        flip_y: True for bottom-left-origin targets
        return_field: If True, return the flat Taichi output field

    Returns:
        numpy.ndarray: float32 (out_h, out_w, 4) image

    Example:
        small = render(image, (64, 48), kind='cubic')
    """
    pipe = ResamplePipeline(kind, flip_y=flip_y)
    return pipe.render(source, output_size, params, return_field=return_field)


__all__ = ["render_kernel", "select_mode", "ResamplePipeline", "render"]

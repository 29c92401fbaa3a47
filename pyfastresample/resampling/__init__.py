"""
Image resampling module for PyFastResample.

GPU-accelerated resampling of RGBA images with Lanczos, Mitchell-Netravali
and Gaussian reconstruction filters. Each output pixel is computed
independently by one Taichi iteration that gathers a clamped 2D neighbourhood
of the source and divides by the accumulated weight.

Components:
- texture: SourceTexture, SampleParams, clamp-to-edge point/bilinear fetches
- coords: output pixel -> source UV mapping (top-left origin, optional flip)
- resampler: per-pixel weighted reconstruction
- driver: full passes (ResamplePipeline, render)
- fit: content fit modes deriving output size and scale factors from bounds

Author: B.G.
"""

from .coords import ndc_to_uv, to_source_uv, uv_to_ndc
from .driver import ResamplePipeline, render, select_mode
from .fit import DEFAULT_FIT, FIT_MODES, fit_size, fitted_params, placement
from .resampler import resample_pixel, resample_pixel_at
from .texture import SampleParams, SourceTexture, as_rgba_float, validate_size

__all__ = [
    "SourceTexture",
    "SampleParams",
    "as_rgba_float",
    "validate_size",
    "to_source_uv",
    "ndc_to_uv",
    "uv_to_ndc",
    "resample_pixel",
    "resample_pixel_at",
    "ResamplePipeline",
    "render",
    "select_mode",
    "FIT_MODES",
    "DEFAULT_FIT",
    "fit_size",
    "fitted_params",
    "placement",
]

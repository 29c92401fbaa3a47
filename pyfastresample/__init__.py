"""
PyFastResample: GPU image resampling with reconstruction filters.

Downsamples RGBA images on the GPU (or CPU) through Taichi with Lanczos,
Mitchell-Netravali and Gaussian filters, with nearest and bilinear sampling
as pass-through references.

Submodules:
- constants: numerical guards and filter defaults
- pool: Taichi field pool
- filters: filter kinds, kernels and per-axis weights
- resampling: textures, coordinate mapping, per-pixel resampler, passes
- misc: image file helpers and kernel plots
- cli: command line entry points

Usage:
    import numpy as np
    import taichi as ti
    import pyfastresample as pfr

    ti.init(ti.gpu)
    image = pfr.misc.load_image("photo.png")
    small = pfr.resampling.render(image, (320, 240), kind="lanczos3")
    pfr.misc.save_image(small, "photo_small.png")

Author: B.G.
"""

__version__ = "0.0.1"

from . import constants
from . import pool
from . import filters
from . import resampling
from . import misc
from . import cli
from .errors import DegenerateInputError
from .filters import FilterKind
from .resampling import ResamplePipeline, SampleParams, SourceTexture, render

__all__ = [
    "constants",
    "pool",
    "filters",
    "resampling",
    "misc",
    "cli",
    "DegenerateInputError",
    "FilterKind",
    "ResamplePipeline",
    "SampleParams",
    "SourceTexture",
    "render",
]

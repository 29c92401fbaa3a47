"""
Reconstruction filters for PyFastResample.

Filter kernels (Kernel Library) and per-axis weight rows (Weight Table
Builder). All kernels are Taichi functions so the resampler evaluates them on
device; evaluate(), sample_kernel() and build_axis_weights() run the same code
from Python.

Filter Families:
- Lanczos (a = 2 or 3): windowed sinc, sharp with mild ringing
- Mitchell-Netravali (B, C): cubic, default B = C = 1/3
- Gaussian (sigma, radius): smooth, rows renormalized to unit sum
- nearest / linear: pass-through kinds, no kernel

Usage:
    import pyfastresample as pfr

    kind = pfr.filters.FilterKind.parse("cubic(0, 0.5)")   # Catmull-Rom
    pfr.filters.evaluate(kind, 0.5)
    pfr.filters.build_axis_weights("gaussian(1.5,3)", 0.25)

Author: B.G.
"""

from .filter_kind import FILTER_NAMES, FilterKind
from .kernels import (
    box_weight,
    evaluate,
    gaussian_weight,
    kernel_weight,
    lanczos_weight,
    mitchell_weight,
    sample_kernel,
    tent_weight,
)
from .weights import axis_weight, build_axis_weights, row_layout, row_normalizer, tap_offsets

__all__ = [
    "FilterKind",
    "FILTER_NAMES",
    "evaluate",
    "sample_kernel",
    "kernel_weight",
    "lanczos_weight",
    "mitchell_weight",
    "gaussian_weight",
    "box_weight",
    "tent_weight",
    "build_axis_weights",
    "tap_offsets",
    "row_layout",
    "row_normalizer",
    "axis_weight",
]

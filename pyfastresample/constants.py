"""
Global constants for PyFastResample.

Numerical guards, default filter parameters and limits shared by the Taichi
kernels and the Python-side validation. Kernels read these at compile time,
so changing them after the first kernel launch requires a fresh ti.init().

Author: B.G.
"""

import math

import taichi as ti

# Float precision used on device for samples, weights and accumulators
FLOAT_TYPE_TI = ti.f32

# Number of channels per texel (RGBA)
CHANNELS = 4

# |x| below which the Lanczos kernel returns its limit value 1.0
LANCZOS_EPSILON = 1e-4

# weight_sum below which a pixel falls back to a bilinear fetch
WEIGHT_SUM_EPSILON = 1e-6

# Lanczos lobes
LANCZOS_DEFAULT_A = 3
LANCZOS_ALLOWED_A = (2, 3)

# Mitchell-Netravali (B, C) recommended by Mitchell & Netravali (1988)
MITCHELL_DEFAULT_B = 1.0 / 3.0
MITCHELL_DEFAULT_C = 1.0 / 3.0

# Gaussian window
GAUSSIAN_DEFAULT_SIGMA = 1.5
GAUSSIAN_DEFAULT_RADIUS = 3
GAUSSIAN_MAX_RADIUS = 16

SQRT_2PI = math.sqrt(2.0 * math.pi)

# Filter identifiers passed to the kernels
FILTER_NEAREST = 0
FILTER_LINEAR = 1
FILTER_LANCZOS = 2
FILTER_MITCHELL = 3
FILTER_GAUSSIAN = 4

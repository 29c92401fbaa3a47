"""
Unit tests for the reconstruction filter kernels.

Author: B.G.
"""

import math

import numpy as np
import pytest

from pyfastresample.filters import FilterKind, evaluate, sample_kernel


@pytest.mark.unit
class TestLanczos:
    def test_one_at_origin(self):
        assert evaluate("lanczos3", 0.0) == 1.0
        assert evaluate("lanczos2", 0.0) == 1.0
        # inside the epsilon band
        assert evaluate("lanczos3", 5e-5) == 1.0

    def test_zero_at_integers(self):
        for x in (1.0, 2.0, -1.0, -2.0):
            assert abs(evaluate("lanczos3", x)) < 1e-5

    def test_zero_outside_support(self):
        for x in (3.0, 3.5, -3.0, 10.0):
            assert evaluate("lanczos3", x) == 0.0
        assert evaluate("lanczos2", 2.0) == 0.0
        assert evaluate("lanczos2", -2.5) == 0.0

    def test_known_values(self):
        expected3 = 3.0 * math.sin(math.pi / 2) * math.sin(math.pi / 6) / (math.pi / 2) ** 2
        expected2 = 2.0 * math.sin(math.pi / 2) * math.sin(math.pi / 4) / (math.pi / 2) ** 2
        assert evaluate("lanczos3", 0.5) == pytest.approx(expected3, abs=1e-5)
        assert evaluate("lanczos2", 0.5) == pytest.approx(expected2, abs=1e-5)

    def test_negative_lobe(self):
        assert evaluate("lanczos3", 1.5) < 0.0

    def test_symmetry(self):
        x = np.linspace(0.0, 3.5, 57, dtype=np.float32)
        pos = sample_kernel("lanczos3", x)
        neg = sample_kernel("lanczos3", -x)
        assert np.allclose(pos, neg, atol=1e-6)

    def test_near_partition_of_unity(self):
        for f in (0.0, 0.25, 0.5):
            taps = np.arange(-3, 4, dtype=np.float32) - f
            assert sample_kernel("lanczos3", taps).sum() == pytest.approx(1.0, abs=0.02)


@pytest.mark.unit
class TestMitchell:
    def test_known_values(self):
        assert evaluate("cubic", 0.0) == pytest.approx(8.0 / 9.0, abs=1e-5)
        assert evaluate("cubic", 1.0) == pytest.approx(1.0 / 18.0, abs=1e-5)
        assert evaluate("cubic", -1.0) == pytest.approx(1.0 / 18.0, abs=1e-5)

    def test_catmull_rom(self):
        kind = FilterKind.mitchell(0.0, 0.5)
        assert evaluate(kind, 0.0) == pytest.approx(1.0, abs=1e-4)
        assert evaluate(kind, 1.0) == pytest.approx(0.0, abs=1e-5)
        assert evaluate(kind, 0.5) == pytest.approx(0.5625, abs=1e-5)

    def test_zero_outside_support(self):
        for x in (2.0, 2.5, -2.0):
            assert evaluate("cubic", x) == 0.0

    @pytest.mark.parametrize("spec", ["cubic", "cubic(0,0.5)", "cubic(1,0)"])
    def test_partition_of_unity(self, spec):
        for f in (0.0, 0.25, 0.5, 0.75):
            taps = np.arange(-1, 3, dtype=np.float32) - f
            assert sample_kernel(spec, taps).sum() == pytest.approx(1.0, abs=1e-4)


@pytest.mark.unit
class TestGaussian:
    def test_peak(self):
        expected = 1.0 / (1.5 * math.sqrt(2.0 * math.pi))
        assert evaluate("gaussian", 0.0) == pytest.approx(expected, rel=1e-5)

    def test_one_sigma(self):
        peak = evaluate("gaussian", 0.0)
        assert evaluate("gaussian", 1.5) == pytest.approx(peak * math.exp(-0.5), rel=1e-5)

    def test_not_truncated(self):
        # The tap window truncates, not the kernel
        assert evaluate("gaussian", 4.0) > 0.0

    def test_sigma_parameter(self):
        narrow = evaluate("gaussian(0.5)", 1.0)
        wide = evaluate("gaussian(3.0)", 1.0)
        assert wide > narrow


@pytest.mark.unit
class TestPassThroughKernels:
    def test_box(self):
        assert evaluate("nearest", 0.0) == 1.0
        assert evaluate("nearest", -0.5) == 1.0
        assert evaluate("nearest", 0.5) == 0.0

    def test_tent(self):
        assert evaluate("linear", 0.0) == 1.0
        assert evaluate("linear", 0.5) == pytest.approx(0.5)
        assert evaluate("linear", 1.0) == 0.0


@pytest.mark.unit
def test_sample_kernel_matches_evaluate():
    x = np.array([-2.25, -0.75, 0.0, 0.3, 1.1, 2.9], dtype=np.float32)
    for kind in FilterKind.ALL:
        arr = sample_kernel(kind, x)
        assert arr.dtype == np.float32
        assert arr.shape == x.shape
        for xi, wi in zip(x, arr):
            assert wi == pytest.approx(evaluate(kind, float(xi)), abs=1e-5)


@pytest.mark.unit
def test_mitchell_continuous_at_one():
    for spec in ("cubic", "cubic(0,0.5)", "cubic(1,0)"):
        below = evaluate(spec, 1.0 - 1e-4)
        above = evaluate(spec, 1.0 + 1e-4)
        assert below == pytest.approx(above, abs=1e-3)

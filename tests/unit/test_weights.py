"""
Unit tests for per-axis weight rows.

Author: B.G.
"""

import numpy as np
import pytest

from pyfastresample.filters import (
    FilterKind,
    build_axis_weights,
    row_layout,
    sample_kernel,
    tap_offsets,
)


@pytest.mark.unit
class TestRowLayout:
    def test_lanczos_layout(self):
        kind_id, p0, p1, first, last, normalize = row_layout("lanczos3")
        assert kind_id == FilterKind.lanczos().kind_id
        assert (p0, p1) == (3.0, 0.0)
        assert (first, last) == (-3, 3)
        assert normalize == 0

    def test_gaussian_rows_are_normalized(self):
        assert row_layout("gaussian")[-1] == 1
        assert row_layout("cubic")[-1] == 0

    def test_tap_offsets(self):
        assert tap_offsets("cubic") == [-1, 0, 1, 2]
        assert tap_offsets("lanczos2") == [-2, -1, 0, 1, 2]
        assert tap_offsets("gaussian(1.0,1)") == [-1, 0, 1]


@pytest.mark.unit
class TestBuildAxisWeights:
    @pytest.mark.parametrize("spec", ["lanczos2", "lanczos3", "cubic", "gaussian", "gaussian(2.5,6)"])
    def test_row_length(self, spec):
        row = build_axis_weights(spec, 0.3)
        assert row.dtype == np.float32
        assert row.shape == (len(tap_offsets(spec)),)

    def test_raw_rows_match_kernel(self):
        f = 0.4
        for spec in ("lanczos3", "cubic"):
            taps = np.array(tap_offsets(spec), dtype=np.float32)
            expected = sample_kernel(spec, taps - np.float32(f))
            assert np.allclose(build_axis_weights(spec, f), expected, atol=1e-6)

    @pytest.mark.parametrize("f", [0.0, 0.2, 0.5, 0.9])
    def test_gaussian_rows_sum_to_one(self, f):
        for spec in ("gaussian", "gaussian(0.6,1)", "gaussian(4.0,3)"):
            assert build_axis_weights(spec, f).sum() == pytest.approx(1.0, abs=1e-5)

    def test_gaussian_row_shape(self):
        row = build_axis_weights("gaussian", 0.0)
        # symmetric around the centre tap, peak at the centre
        assert np.allclose(row, row[::-1], atol=1e-6)
        assert np.argmax(row) == 3

    def test_cubic_row_sums_to_one(self):
        for f in (0.0, 0.5, 0.75):
            assert build_axis_weights("cubic", f).sum() == pytest.approx(1.0, abs=1e-4)

    def test_lanczos_row_at_zero_offset(self):
        row = build_axis_weights("lanczos3", 0.0)
        assert row[3] == 1.0
        assert np.all(np.abs(np.delete(row, 3)) < 1e-5)

    def test_rows_are_independent_of_pool_reuse(self):
        a = build_axis_weights("lanczos3", 0.25)
        b = build_axis_weights("lanczos3", 0.75)
        c = build_axis_weights("lanczos3", 0.25)
        assert np.array_equal(a, c)
        assert not np.array_equal(a, b)

    def test_pass_through_kinds(self):
        assert np.allclose(build_axis_weights("linear", 0.25), [0.75, 0.25])
        assert np.allclose(build_axis_weights("nearest", 0.25), [1.0])


@pytest.mark.unit
@pytest.mark.parametrize("spec", ["lanczos2", "lanczos3", "cubic", "cubic(0,0.5)", "gaussian", "gaussian(0.8,2)"])
def test_rows_finite_with_positive_2d_sum(spec):
    for f in np.linspace(0.0, 0.95, 20):
        row = build_axis_weights(spec, float(f))
        assert np.all(np.isfinite(row))
        # the 2D weight sum is the product of the two row sums
        assert row.sum() * row.sum() > 1e-6

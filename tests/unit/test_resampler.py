"""
Unit tests for single-pixel filtered resampling.

Author: B.G.
"""

import numpy as np
import pytest

from pyfastresample import DegenerateInputError
from pyfastresample.resampling import SampleParams, SourceTexture, resample_pixel_at


def _ramp(width, height):
    image = np.ones((height, width, 4), dtype=np.float32)
    image[..., 0] = np.arange(width, dtype=np.float32)[None, :] / width
    image[..., 1] = np.arange(height, dtype=np.float32)[:, None] / height
    image[..., 2] = 0.0
    return image


@pytest.mark.unit
class TestResamplePixelAt:
    @pytest.mark.parametrize("spec", ["lanczos2", "lanczos3", "cubic", "gaussian", "gaussian(0.7,2)"])
    def test_constant_colour_preserved(self, images, spec):
        rgba = (0.2, 0.4, 0.6, 0.8)
        image = images.solid(8, 8, rgba)
        params = SampleParams.for_sizes((8, 8), (3, 3))
        for uv in ((0.01, 0.01), (0.5, 0.5), (0.99, 0.3), (0.17, 0.83)):
            color, degenerate = resample_pixel_at(image, params, spec, uv)
            assert not degenerate
            assert np.allclose(color, rgba, atol=1e-5)

    def test_texel_centre_with_lanczos(self, images):
        image = images.random(8, 8)
        params = SampleParams.for_sizes((8, 8), (4, 4))
        color, _ = resample_pixel_at(image, params, "lanczos3", (2.5 / 8, 5.5 / 8))
        assert np.allclose(color, image[5, 2], atol=1e-5)

    @pytest.mark.parametrize("spec", ["cubic", "cubic(0,0.5)"])
    def test_cubic_reproduces_linear_ramp(self, spec):
        image = _ramp(16, 16)
        params = SampleParams.for_sizes((16, 16), (8, 8))
        px, py = 7.3, 8.6
        color, _ = resample_pixel_at(image, params, spec, ((px + 0.5) / 16, (py + 0.5) / 16))
        assert color[0] == pytest.approx(px / 16, abs=1e-5)
        assert color[1] == pytest.approx(py / 16, abs=1e-5)

    def test_lanczos_approximates_linear_ramp(self):
        image = _ramp(16, 16)
        params = SampleParams.for_sizes((16, 16), (8, 8))
        color, _ = resample_pixel_at(image, params, "lanczos3", (7.8 / 16, 0.5))
        assert color[0] == pytest.approx(7.3 / 16, abs=0.01)

    def test_edge_is_clamped(self, images):
        image = images.gradient(8, 8)
        params = SampleParams.for_sizes((8, 8), (2, 2))
        color, degenerate = resample_pixel_at(image, params, "lanczos3", (0.0, 0.0))
        assert not degenerate
        assert np.all(np.isfinite(color))
        assert color[3] == pytest.approx(1.0, abs=1e-5)

    def test_degenerate_weight_sum_falls_back_to_bilinear(self, images):
        # sigma so small that every tap at distance >= 0.5 underflows to 0
        image = images.random(8, 8)
        params = SampleParams.for_sizes((8, 8), (4, 4))
        color, degenerate = resample_pixel_at(image, params, "gaussian(0.01,1)", (0.5, 0.5))
        assert degenerate
        expected = image[3:5, 3:5].mean(axis=(0, 1))
        assert np.allclose(color, expected, atol=1e-5)

    def test_accepts_source_texture(self, images):
        tex = SourceTexture(images.solid(4, 4))
        params = SampleParams.for_sizes((4, 4), (2, 2))
        color, _ = resample_pixel_at(tex, params, "cubic", (0.25, 0.25))
        assert np.allclose(color, (1, 0, 0, 1), atol=1e-5)

    def test_rejects_pass_through_kind(self, images):
        params = SampleParams.for_sizes((4, 4), (2, 2))
        with pytest.raises(ValueError):
            resample_pixel_at(images.solid(4, 4), params, "linear", (0.5, 0.5))

    def test_rejects_params_type(self, images):
        with pytest.raises(TypeError):
            resample_pixel_at(images.solid(4, 4), (4, 4, 2.0, 2.0), "cubic", (0.5, 0.5))

    def test_rejects_mismatched_params(self, images):
        params = SampleParams.for_sizes((8, 8), (2, 2))
        with pytest.raises(DegenerateInputError):
            resample_pixel_at(images.solid(4, 4), params, "cubic", (0.5, 0.5))

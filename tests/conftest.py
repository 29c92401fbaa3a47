"""
Pytest configuration and fixtures for PyFastResample test suite.

Taichi is initialised once per session on the CPU backend. Tests that
re-run ti.init (the CLI commands do) must leave the pool cleared, which
the CLI does itself.
"""
import os
import sys

import numpy as np
import pytest
import taichi as ti


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("unit", "integration", "slow", "gpu", "importtest"):
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and ordering."""
    for item in items:
        if "gpu" in item.keywords:
            item.add_marker("slow")

        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    """Initialise Taichi on the CPU for the whole session."""
    from pyfastresample import pool

    ti.init(arch=ti.cpu, offline_cache=False)
    pool.taipool.clear()
    yield


@pytest.fixture
def skip_if_no_gpu():
    """Run on the GPU backend (Taichi falls back to CPU without one), then restore the CPU runtime."""
    from pyfastresample import pool

    try:
        ti.init(arch=ti.gpu, offline_cache=False)
        pool.taipool.clear()
        yield True
    except Exception:
        pytest.skip("GPU backend not available")
    finally:
        ti.init(arch=ti.cpu, offline_cache=False)
        pool.taipool.clear()


class TestImageFactory:
    """Helper class for building test images."""

    @staticmethod
    def solid(width, height, rgba=(1.0, 0.0, 0.0, 1.0)):
        """Constant colour image of shape (height, width, 4)."""
        image = np.empty((height, width, 4), dtype=np.float32)
        image[...] = np.asarray(rgba, dtype=np.float32)
        return image

    @staticmethod
    def bright_pixel(width, height, i, j, value=1.0):
        """Black opaque image with a single pixel (i, j) set to value on RGB."""
        image = np.zeros((height, width, 4), dtype=np.float32)
        image[..., 3] = 1.0
        image[j, i, :3] = value
        return image

    @staticmethod
    def gradient(width, height):
        """Horizontal red ramp and vertical green ramp, opaque."""
        x = (np.arange(width, dtype=np.float32) + 0.5) / width
        y = (np.arange(height, dtype=np.float32) + 0.5) / height
        X, Y = np.meshgrid(x, y)
        image = np.ones((height, width, 4), dtype=np.float32)
        image[..., 0] = X
        image[..., 1] = Y
        image[..., 2] = 0.25
        return image

    @staticmethod
    def random(width, height, seed=42):
        """Uniform random RGBA image."""
        rng = np.random.default_rng(seed)
        return rng.random((height, width, 4), dtype=np.float32)


@pytest.fixture
def images():
    """Provide access to test image creation utilities."""
    return TestImageFactory()

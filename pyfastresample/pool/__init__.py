"""
Memory pool for PyFastResample.

Recycles Taichi fields between resampling passes. See pool.pool for details.

Author: B.G.
"""

from . import pool
from .pool import TaiPool, TPField, get_temp_field, taipool

__all__ = ["pool", "TaiPool", "TPField", "get_temp_field", "taipool"]

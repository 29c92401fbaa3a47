"""
Miscellaneous Utilities for PyFastResample

Helpers around the resampling core that don't fit elsewhere, mostly image
file conversion for the CLI and for scripts.

Available Functions:
- load_image: Read an image file as float32 RGBA
- save_image: Write a float RGBA array to an image file
- to_uint8: Quantize float RGBA to 8 bits
- plot_kernels: Plot filter kernel profiles with matplotlib

Author: B.G.
"""

from .image_utils import load_image, save_image, to_uint8
from .kernel_plots import plot_kernels

# Export public API
__all__ = ["load_image", "save_image", "to_uint8", "plot_kernels"]

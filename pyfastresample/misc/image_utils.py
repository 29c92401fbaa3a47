"""
Image file utilities for PyFastResample.

Reads image files into the float RGBA layout used by SourceTexture and
writes resampled results back, using Pillow for the file formats.

Dependencies:
- pillow: image file reading and writing
- numpy: array conversion

Author: B.G.
"""

import numpy as np
from PIL import Image

from ..resampling.texture import as_rgba_float


def load_image(path):
    """
    Load an image file as float32 RGBA in [0, 1].

    Any mode Pillow can open is converted to RGBA first (palette, greyscale
    and RGB images get an opaque alpha channel).

    Args:
        path (str): Path to the image file (PNG, JPEG, TIFF, ...)

    Returns:
        numpy.ndarray: Array of shape (height, width, 4), dtype float32

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If Pillow cannot decode the file
    """
    with Image.open(path) as img:
        rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    return as_rgba_float(rgba)


def to_uint8(image):
    """Quantize float RGBA in [0, 1] to uint8, clamping out-of-range values."""
    arr = np.asarray(image, dtype=np.float32)
    return (np.clip(arr, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def save_image(image, path):
    """
    Save a float RGBA image to a file.

    Args:
        image: Array of shape (height, width, 4) with values in [0, 1]
        path (str): Output path, format chosen by Pillow from the extension

    Raises:
        ValueError: If the array is not (H, W, 4)
        OSError: If the file cannot be written
    """
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) array, got shape {arr.shape}")
    Image.fromarray(to_uint8(arr)).save(path)


__all__ = ["load_image", "save_image", "to_uint8"]

"""
Content fit: how an image is sized inside a target rectangle.

Given an image size and the bounds it is displayed in, a fit mode decides
the on-screen size of the image, and that size decides the scale factors
of the resampling pass (scale = image_dim / fitted_dim).

Modes:
- contain: largest uniform scaling that fits inside the bounds
- cover: smallest uniform scaling that fills the bounds (default; overflow
  is cropped by the caller)
- fill: stretch to the bounds, aspect ratio not preserved
- none: keep the image size
- scale_down: 'none' when the image already fits, 'contain' otherwise

Author: B.G.
"""

from .texture import SampleParams, validate_size

FIT_MODES = ("contain", "cover", "fill", "none", "scale_down")
DEFAULT_FIT = "cover"


def _check_mode(mode):
    mode = mode.lower().replace("-", "_")
    if mode not in FIT_MODES:
        raise ValueError(f"fit mode must be one of {FIT_MODES}, got '{mode}'")
    return mode


def fit_size(image_size, bounds_size, mode=DEFAULT_FIT):
    """
    Fitted (width, height) of an image inside bounds.

    Args:
        image_size: (width, height) of the image in pixels
        bounds_size: (width, height) of the target rectangle
        mode: One of FIT_MODES

    Returns:
        tuple: (width, height) as floats
    """
    mode = _check_mode(mode)
    iw, ih = (float(v) for v in validate_size(image_size, "image size"))
    bw, bh = (float(v) for v in bounds_size)
    if not (bw > 0 and bh > 0):
        raise ValueError(f"bounds must be > 0 on both axes, got {bounds_size!r}")

    if mode == "fill":
        return bw, bh
    if mode == "none":
        return iw, ih

    contain = min(bw / iw, bh / ih)
    if mode == "contain":
        return iw * contain, ih * contain
    if mode == "cover":
        cover = max(bw / iw, bh / ih)
        return iw * cover, ih * cover
    # scale_down
    if iw <= bw and ih <= bh:
        return iw, ih
    return iw * contain, ih * contain


def fitted_params(image_size, bounds_size, mode=DEFAULT_FIT):
    """
    Pass parameters for drawing an image fitted into bounds.

    Returns:
        tuple: (SampleParams, (out_width, out_height)) where the scale factors
               come from the unrounded fitted size and the output size is the
               fitted size rounded to whole pixels (at least 1x1)
    """
    iw, ih = validate_size(image_size, "image size")
    fw, fh = fit_size((iw, ih), bounds_size, mode)
    params = SampleParams(iw, ih, iw / fw, ih / fh)
    out_size = (max(1, int(round(fw))), max(1, int(round(fh))))
    return params, out_size


def placement(image_size, bounds, mode=DEFAULT_FIT):
    """
    Rectangle of the fitted image centred in bounds.

    Args:
        image_size: (width, height) of the image
        bounds: (x, y, width, height) of the target rectangle
        mode: One of FIT_MODES

    Returns:
        tuple: (x, y, width, height) floats; x or y is negative when the
               fitted image overflows the bounds ('cover')
    """
    bx, by, bw, bh = (float(v) for v in bounds)
    fw, fh = fit_size(image_size, (bw, bh), mode)
    return (bx + (bw - fw) / 2.0, by + (bh - fh) / 2.0, fw, fh)


__all__ = ["FIT_MODES", "DEFAULT_FIT", "fit_size", "fitted_params", "placement"]

"""
Filter kernel plots for PyFastResample.

Draws the profile of one or more filter kernels over their support, as
evaluated on device, to compare sharpness and ringing between families.

Author: B.G.
"""

import matplotlib.pyplot as plt
import numpy as np

from ..filters import FilterKind, sample_kernel


def plot_kernels(kinds=None, path=None, n_samples=401, ax=None):
    """
    Plot filter kernels against distance.

    Args:
        kinds: Iterable of FilterKind or filter strings (default: FilterKind.ALL)
        path: If given, save the figure there and close it
        n_samples: Number of evaluation points over the widest support
        ax: Existing matplotlib Axes to draw into

    Returns:
        matplotlib.axes.Axes: The axes drawn into (None once saved to path)

    Example:
        plot_kernels(['lanczos2', 'lanczos3', 'cubic(0,0.5)'], 'kernels.png')
    """
    kinds = [FilterKind.parse(k) for k in (FilterKind.ALL if kinds is None else kinds)]
    if not kinds:
        raise ValueError("No filter to plot")

    extent = max(max(k.radius, 1) for k in kinds) + 0.5
    x = np.linspace(-extent, extent, int(n_samples), dtype=np.float32)

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 4))
    else:
        fig = ax.figure

    for kind in kinds:
        ax.plot(x, sample_kernel(kind, x), label=kind.name)

    ax.axhline(0.0, color="0.6", lw=0.8)
    ax.set_xlabel("distance (source pixels)")
    ax.set_ylabel("weight")
    ax.legend()

    if path is not None:
        fig.savefig(path, dpi=100, bbox_inches="tight")
        plt.close(fig)
        return None
    return ax


__all__ = ["plot_kernels"]

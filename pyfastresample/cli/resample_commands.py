"""
Image Resampling CLI Commands for PyFastResample

Command line interface for downsampling image files with the GPU filters.

Author: B.G.
"""

import logging
import sys

import click
import taichi as ti

from .. import pool
from ..filters import FilterKind, FILTER_NAMES
from ..misc import load_image, plot_kernels, save_image
from ..resampling import FIT_MODES, ResamplePipeline, SampleParams, fitted_params


def _init_taichi(arch):
    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu)
    # Fields from a previous runtime are invalid after ti.init
    pool.taipool.clear()


def _output_size(src_w, src_h, width, height, scale):
    if scale is not None:
        if scale <= 0:
            raise click.BadParameter("scale must be > 0", param_hint="--scale")
        return max(1, int(round(src_w * scale))), max(1, int(round(src_h * scale)))
    if width is None and height is None:
        raise click.UsageError("Specify --width and/or --height, or --scale")
    if width is None:
        width = max(1, int(round(src_w * height / src_h)))
    if height is None:
        height = max(1, int(round(src_h * width / src_w)))
    return width, height


@click.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.argument("output_image", type=click.Path())
@click.option("--width", "-W", type=int, default=None, help="Output width in pixels")
@click.option("--height", "-H", type=int, default=None, help="Output height in pixels")
@click.option(
    "--scale",
    "-s",
    type=float,
    default=None,
    help="Output size as a fraction of the input size (0.5 halves each axis)",
)
@click.option(
    "--filter",
    "-f",
    "filter_spec",
    default="lanczos3",
    show_default=True,
    help="Filter: " + ", ".join(FILTER_NAMES),
)
@click.option(
    "--fit",
    type=click.Choice(FIT_MODES),
    default=None,
    help="Fit the image into WIDTH x HEIGHT bounds instead of stretching to it",
)
@click.option("--flip-y", is_flag=True, help="Write rows bottom to top")
@click.option(
    "--arch",
    type=click.Choice(["gpu", "cpu"]),
    default="gpu",
    show_default=True,
    help="Taichi backend",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def resample(
    input_image, output_image, width, height, scale, filter_spec, fit, flip_y, arch, verbose
):
    """
    Resample INPUT_IMAGE and save it to OUTPUT_IMAGE.

    The filter is applied when the output is smaller than the input on at
    least one axis; otherwise pixels are fetched bilinearly.

    Examples:

        # Halve a photo with Lanczos-3
        pfr-resample photo.png small.png --scale 0.5

        # 320 px wide, height from the aspect ratio, Mitchell cubic
        pfr-resample photo.png thumb.png -W 320 -f cubic

        # Fit into 200x200 bounds with a Gaussian
        pfr-resample photo.png icon.png -W 200 -H 200 --fit contain -f "gaussian(1.5,3)"
    """
    try:
        if verbose:
            logging.basicConfig(level=logging.DEBUG)
        kind = FilterKind.parse(filter_spec)
        _init_taichi(arch)

        if verbose:
            click.echo(f"Loading image from '{input_image}'...")
        image = load_image(input_image)
        src_h, src_w = image.shape[:2]

        if fit is not None:
            if width is None or height is None:
                raise click.UsageError("--fit needs both --width and --height")
            params, out_size = fitted_params((src_w, src_h), (width, height), fit)
        else:
            out_size = _output_size(src_w, src_h, width, height, scale)
            params = SampleParams.for_sizes((src_w, src_h), out_size)

        pipe = ResamplePipeline(kind, flip_y=flip_y)
        result = pipe.render(image, out_size, params)

        if verbose:
            click.echo(
                f"Resampled {src_w}x{src_h} -> {out_size[0]}x{out_size[1]} "
                f"with {kind.name} (mode: {pipe.last_mode})"
            )
            if pipe.fallback_count:
                click.echo(f"{pipe.fallback_count} pixel(s) used the bilinear fallback")
            click.echo(f"Saving image to '{output_image}'...")

        save_image(result, output_image)

        if not verbose:
            click.echo(f"Resampled '{input_image}' -> '{output_image}'")

    except click.ClickException:
        raise
    except ImportError as e:
        click.echo(f"Error: Missing dependency - {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.option(
    "--plot",
    "plot_path",
    type=click.Path(),
    default=None,
    help="Also save a plot of the kernel profiles to this file",
)
@click.option(
    "--arch",
    type=click.Choice(["gpu", "cpu"]),
    default="cpu",
    show_default=True,
    help="Taichi backend used to evaluate the kernels for --plot",
)
def filters(plot_path, arch):
    """List the recognised filters and their support."""
    kinds = [
        FilterKind.nearest(),
        FilterKind.linear(),
        FilterKind.lanczos(2),
        FilterKind.lanczos(3),
        FilterKind.mitchell(),
        FilterKind.gaussian(),
    ]
    for kind in kinds:
        first, last = kind.tap_range
        click.echo(
            f"{kind.name:<10} radius={kind.radius} taps=[{first}, {last}]"
            + ("" if kind.uses_kernel else " (pass-through)")
        )
    click.echo("Parameterised: " + ", ".join(n for n in FILTER_NAMES if "(" in n))

    if plot_path is not None:
        try:
            _init_taichi(arch)
            plot_kernels([k for k in kinds if k.uses_kernel], plot_path)
        except Exception as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        click.echo(f"Saved kernel plot to '{plot_path}'")


__all__ = ["resample", "filters"]

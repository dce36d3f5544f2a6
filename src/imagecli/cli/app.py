"""imagecli command-line application.

Every command reads one image (``--input`` or stdin), applies a single
adjustment, and writes the result (``--output`` or PNG on stdout).

Commands:
    blur, unsharpen, grayscale, resize, channel   - pass-through filters
    curve, color, color-grade, vignette, grain    - tone and color adjustments
    structure                                     - local contrast
    show-curve                                    - debug plot of the tone curve
    decode-raw                                    - develop a camera RAW file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console

from imagecli import __version__
from imagecli import config as cfg
from imagecli.core.types import (
    Bitmap,
    ChannelColor,
    ColorBalanceParams,
    ColorGradeParams,
    CurveAdjustments,
    GradeBand,
    GrainParams,
    VignetteParams,
)
from imagecli.errors import ImageCliError, ValidationError

app = typer.Typer(
    name="imagecli",
    help="A simple image processing CLI.",
    no_args_is_help=True,
)
# stdout may carry image bytes, so all messages go to stderr
console = Console(stderr=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)


def version_callback(value: bool):
    if value:
        console.print(f"imagecli v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    input: Optional[Path] = typer.Option(
        None, "-i", "--input", help="Input file path (reads from stdin if omitted).",
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output file path (writes PNG to stdout if omitted).",
    ),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit.",
        callback=version_callback, is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    if verbose:
        logging.getLogger("imagecli").setLevel(logging.DEBUG)
    ctx.obj = {"input": input, "output": output}


def _fail(e: Exception):
    console.print(f"[red]Error:[/red] {e}")
    raise typer.Exit(code=1)


def _save(ctx: typer.Context, bitmap: Bitmap) -> None:
    from imagecli.io.image import save_image

    try:
        save_image(bitmap, ctx.obj["output"])
    except (ImageCliError, OSError) as e:
        _fail(e)


def _run(ctx: typer.Context, transform: Callable[[Bitmap], Bitmap]) -> None:
    """Load the input image, apply ``transform`` and save the result."""
    from imagecli.io.image import load_image

    try:
        bitmap = load_image(ctx.obj["input"])
    except (ImageCliError, OSError) as e:
        _fail(e)
    _save(ctx, transform(bitmap))


@app.command()
def blur(
    ctx: typer.Context,
    sigma: float = typer.Option(cfg.DEFAULT_BLUR_SIGMA, "-s", "--sigma", help="Blur radius (sigma)."),
):
    """Apply a Gaussian blur."""
    from imagecli.adjust.filters import blur as _blur

    _run(ctx, lambda bitmap: _blur(bitmap, sigma))


@app.command()
def unsharpen(
    ctx: typer.Context,
    sigma: float = typer.Option(cfg.DEFAULT_UNSHARPEN_SIGMA, "-s", "--sigma", help="Blur radius (sigma)."),
    threshold: int = typer.Option(
        cfg.DEFAULT_UNSHARPEN_THRESHOLD, "-t", "--threshold", help="Sharpening threshold.",
    ),
):
    """Apply an unsharp mask."""
    from imagecli.adjust.filters import unsharpen as _unsharpen

    _run(ctx, lambda bitmap: _unsharpen(bitmap, sigma, threshold))


@app.command()
def grayscale(ctx: typer.Context):
    """Convert to grayscale (black and white)."""
    from imagecli.adjust.filters import grayscale as _grayscale

    _run(ctx, _grayscale)


@app.command()
def resize(
    ctx: typer.Context,
    output_size: int = typer.Option(
        ..., "-s", "--output-size", min=1, help="Target size for the longest side in pixels.",
    ),
):
    """Resize so the longest side equals OUTPUT_SIZE (no-op if already smaller)."""
    from imagecli.adjust.filters import resize as _resize

    _run(ctx, lambda bitmap: _resize(bitmap, output_size))


@app.command()
def channel(
    ctx: typer.Context,
    color: ChannelColor = typer.Argument(..., help="Which channel to extract."),
):
    """Extract a single RGB channel as a grayscale image."""
    from imagecli.adjust.filters import extract_channel

    _run(ctx, lambda bitmap: extract_channel(bitmap, color))


@app.command()
def curve(
    ctx: typer.Context,
    darks: int = typer.Option(0, "--darks", help="Dark point adjustment (input=0)."),
    middarks: int = typer.Option(0, "--middarks", help="Mid-dark point adjustment (input=25)."),
    mids: int = typer.Option(0, "--mids", help="Mid point adjustment (input=50)."),
    midhighlights: int = typer.Option(
        0, "--midhighlights", help="Mid-highlight point adjustment (input=75).",
    ),
    highlights: int = typer.Option(0, "--highlights", help="Highlight point adjustment (input=100)."),
):
    """Tone curve adjustment via a 5-point spline (values on a 0-100 scale)."""
    from imagecli.adjust import tone_curve

    params = CurveAdjustments(darks, middarks, mids, midhighlights, highlights)
    _run(ctx, lambda bitmap: tone_curve.apply(bitmap, params))


@app.command("show-curve")
def show_curve(
    ctx: typer.Context,
    darks: int = typer.Option(0, "--darks", help="Dark point adjustment (input=0)."),
    middarks: int = typer.Option(0, "--middarks", help="Mid-dark point adjustment (input=25)."),
    mids: int = typer.Option(0, "--mids", help="Mid point adjustment (input=50)."),
    midhighlights: int = typer.Option(
        0, "--midhighlights", help="Mid-highlight point adjustment (input=75).",
    ),
    highlights: int = typer.Option(0, "--highlights", help="Highlight point adjustment (input=100)."),
):
    """Debug: render the tone curve as a 256x256 plot (no input image needed)."""
    from imagecli.core.spline import curve_points
    from imagecli.render.curve_plot import render_curve_plot

    params = CurveAdjustments(darks, middarks, mids, midhighlights, highlights)
    _save(ctx, render_curve_plot(curve_points(params)))


@app.command()
def color(
    ctx: typer.Context,
    temperature: int = typer.Option(
        0, "--temperature", help="White balance: -100 (cool/blue) to 100 (warm/orange).",
    ),
    tint: int = typer.Option(0, "--tint", help="Green-magenta axis: -100 (green) to 100 (magenta)."),
    vibrance: int = typer.Option(0, "--vibrance", help="Smart saturation for muted colors: -100 to 100."),
    saturation: int = typer.Option(
        0, "--saturation", help="Linear saturation: -100 (grayscale) to 100 (oversaturated).",
    ),
):
    """Adjust color: temperature, tint, vibrance, saturation."""
    from imagecli.adjust import color_balance

    params = ColorBalanceParams(temperature, tint, vibrance, saturation)
    _run(ctx, lambda bitmap: color_balance.apply(bitmap, params))


@app.command("color-grade")
def color_grade(
    ctx: typer.Context,
    shadows_hue: float = typer.Option(0, "--shadows-hue", help="Shadows hue (0-360 degrees)."),
    shadows_sat: float = typer.Option(0, "--shadows-sat", help="Shadows saturation (0-100)."),
    shadows_lum: float = typer.Option(0, "--shadows-lum", help="Shadows luminance shift (-100 to 100)."),
    midtones_hue: float = typer.Option(0, "--midtones-hue", help="Midtones hue (0-360 degrees)."),
    midtones_sat: float = typer.Option(0, "--midtones-sat", help="Midtones saturation (0-100)."),
    midtones_lum: float = typer.Option(0, "--midtones-lum", help="Midtones luminance shift (-100 to 100)."),
    highlights_hue: float = typer.Option(0, "--highlights-hue", help="Highlights hue (0-360 degrees)."),
    highlights_sat: float = typer.Option(0, "--highlights-sat", help="Highlights saturation (0-100)."),
    highlights_lum: float = typer.Option(
        0, "--highlights-lum", help="Highlights luminance shift (-100 to 100).",
    ),
):
    """Color grading: tint shadows, midtones, and highlights independently."""
    from imagecli.adjust import color_grade as grade

    params = ColorGradeParams(
        shadows=GradeBand(shadows_hue, shadows_sat, shadows_lum),
        midtones=GradeBand(midtones_hue, midtones_sat, midtones_lum),
        highlights=GradeBand(highlights_hue, highlights_sat, highlights_lum),
    )
    _run(ctx, lambda bitmap: grade.apply(bitmap, params))


@app.command()
def vignette(
    ctx: typer.Context,
    amount: int = typer.Option(
        cfg.DEFAULT_VIGNETTE_AMOUNT, "-a", "--amount",
        help="Vignette strength: -100 (darken edges) to 100 (lighten edges).",
    ),
    midpoint: int = typer.Option(
        cfg.DEFAULT_VIGNETTE_MIDPOINT, "-m", "--midpoint",
        help="How far from center the effect starts (0-100).",
    ),
    roundness: int = typer.Option(
        cfg.DEFAULT_VIGNETTE_ROUNDNESS, "-r", "--roundness",
        help="Shape: -100 (rectangular) to 100 (circular).",
    ),
    feather: int = typer.Option(
        cfg.DEFAULT_VIGNETTE_FEATHER, "-f", "--feather",
        help="Softness of the transition (0-100).",
    ),
):
    """Apply a Lightroom-style vignette effect."""
    from imagecli.adjust import vignette as _vignette

    params = VignetteParams(amount, midpoint, roundness, feather)
    _run(ctx, lambda bitmap: _vignette.apply(bitmap, params))


@app.command()
def grain(
    ctx: typer.Context,
    amount: int = typer.Option(cfg.DEFAULT_GRAIN_AMOUNT, "-a", "--amount", help="Grain strength (0-100)."),
    size: int = typer.Option(cfg.DEFAULT_GRAIN_SIZE, "-s", "--size", help="Grain size (0-100)."),
    roughness: int = typer.Option(
        cfg.DEFAULT_GRAIN_ROUGHNESS, "-r", "--roughness",
        help="0 = smooth dye clouds, 100 = fine grit.",
    ),
    monochrome: bool = typer.Option(False, "--monochrome", help="Same grain in every channel."),
):
    """Add deterministic film grain."""
    from imagecli.adjust import grain as _grain

    params = GrainParams(amount, size, roughness, monochrome)
    _run(ctx, lambda bitmap: _grain.apply(bitmap, params))


@app.command()
def structure(
    ctx: typer.Context,
    amount: int = typer.Option(0, "-a", "--amount", help="Local contrast: -100 (soften) to 100."),
):
    """Boost or soften local contrast."""
    from imagecli.adjust.filters import structure as _structure

    _run(ctx, lambda bitmap: _structure(bitmap, amount))


@app.command("decode-raw")
def decode_raw(ctx: typer.Context):
    """Develop a camera RAW file given with --input."""
    from imagecli.io.raw import decode_raw as _decode_raw

    path = ctx.obj["input"]
    if path is None:
        _fail(ValidationError("decode-raw needs --input; RAW files are not read from stdin."))
    try:
        bitmap = _decode_raw(path)
    except (ImageCliError, OSError) as e:
        _fail(e)
    _save(ctx, bitmap)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

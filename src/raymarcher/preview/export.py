"""Image export utilities for rendered images.

Colors are quantized to bytes by scaling with 255.999 and truncating, so that
1.0 maps to 255 and the 256 output levels are evenly sized. Values outside
[0, 1] are clamped, and NaN channels become 0.

Supported formats:
    - PPM (plain-text P3), streamed straight from a color iterator
    - PNG (8-bit RGB via Pillow), from a NumPy image buffer

Example:
    >>> from raymarcher.config import Config, ImageSettings
    >>> from raymarcher.core.integrator import render
    >>> from raymarcher.preview.export import write_ppm
    >>> from raymarcher.scene.demo import create_demo_scene
    >>>
    >>> config = Config(ImageSettings(width=64, height=36))
    >>> scene = create_demo_scene(config.aspect_ratio)
    >>> write_ppm("image.ppm", 64, 36, render(config, scene))
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raymarcher.core.vec import Color

# Scale applied before truncating a [0, 1] channel to a byte
BYTE_SCALE = 255.999

StrPath = str | PathLike[str]


def convert_to_byte(channel: float) -> int:
    """Quantize one color channel to an integer in [0, 255]."""
    if math.isnan(channel):
        return 0
    res = channel * BYTE_SCALE
    if res > 255.0:
        return 255
    if res < 0.0:
        return 0
    return int(res)


def color_to_rgb(color: Color) -> tuple[int, int, int]:
    """Quantize a Color to an 8-bit RGB triple."""
    return convert_to_byte(color.r), convert_to_byte(color.g), convert_to_byte(color.b)


def _write_ppm_stream(stream: TextIO, width: int, height: int, colors: Iterable[Color]) -> None:
    expected = width * height
    stream.write(f"P3\n{width} {height}\n255\n")
    count = 0
    for color in colors:
        count += 1
        if count > expected:
            raise ValueError(f"Got more than {expected} colors for a {width}x{height} image")
        r, g, b = color_to_rgb(color)
        stream.write(f"{r} {g} {b}\n")
    if count != expected:
        raise ValueError(f"Expected {expected} colors for a {width}x{height} image, got {count}")


def write_ppm(
    target: StrPath | TextIO,
    width: int,
    height: int,
    colors: Iterable[Color],
) -> None:
    """Write colors as a plain-text (P3) PPM image.

    The colors are consumed one at a time in scan order (top row first), so
    a lazy render can be streamed to disk without buffering the frame.

    Args:
        target: A path, or an open text stream.
        width: Image width in pixels.
        height: Image height in pixels.
        colors: Exactly ``width * height`` colors.

    Raises:
        ValueError: If the number of colors does not match the image size.
    """
    if isinstance(target, (str, PathLike)):
        with open(target, "w", encoding="ascii", newline="\n") as f:
            _write_ppm_stream(f, width, height, colors)
    else:
        _write_ppm_stream(target, width, height, colors)


def colors_to_array(
    colors: Iterable[Color],
    width: int,
    height: int,
) -> npt.NDArray[np.float64]:
    """Collect scan-ordered colors into an (H, W, 3) float array.

    Raises:
        ValueError: If the number of colors does not match the image size.
    """
    flat = np.array([c.to_tuple() for c in colors], dtype=np.float64)
    if flat.shape[0] != width * height:
        raise ValueError(
            f"Expected {width * height} colors for a {width}x{height} image, got {flat.shape[0]}"
        )
    return flat.reshape(height, width, 3)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Quantize a float image to uint8 with the same rule as convert_to_byte.

    Args:
        image: Image array of shape (H, W, 3) with channels nominally in [0, 1].

    Returns:
        8-bit image array of the same shape.
    """
    scaled = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0) * BYTE_SCALE
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


def save_png_from_array(image: npt.NDArray[np.floating], filepath: StrPath) -> None:
    """Save a float image as an 8-bit RGB PNG file."""
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def save_ppm_from_array(image: npt.NDArray[np.floating], filepath: StrPath) -> None:
    """Save a float image as a plain-text PPM file."""
    height, width, _ = image.shape
    data = image_to_uint8(image).reshape(-1, 3)
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for r, g, b in data.tolist():
            f.write(f"{r} {g} {b}\n")


def save_image(image: npt.NDArray[np.floating], filepath: StrPath) -> None:
    """Save a float image, choosing the format from the file suffix.

    Raises:
        ValueError: If the suffix is neither ``.ppm`` nor ``.png``.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm_from_array(image, filepath)
    elif suffix == ".png":
        save_png_from_array(image, filepath)
    else:
        raise ValueError(f"Unsupported image format '{suffix}', use .ppm or .png")


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))

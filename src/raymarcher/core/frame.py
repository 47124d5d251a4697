"""Buffered frame renderer with progress reporting.

FrameRenderer drains the lazy pixel stream of the integrator into a NumPy
image buffer, a batch of rows at a time, and reports progress between
batches. It supports:
- Rendering the whole frame in one call, with an optional progress callback
- Generator-based rendering that yields after each batch of rows
- Reading back a partial image at any point (unrendered rows stay black)
- Reset for a fresh render

Example:
    >>> from raymarcher.config import Config, ImageSettings
    >>> from raymarcher.core.frame import FrameRenderer
    >>> from raymarcher.scene.demo import create_demo_scene
    >>>
    >>> config = Config(ImageSettings(width=160, height=90))
    >>> scene = create_demo_scene(config.aspect_ratio)
    >>> renderer = FrameRenderer(config, scene)
    >>> for done, total in renderer.render_progressive(batch_rows=10):
    ...     print(f"{done}/{total} rows")
    >>> renderer.save_image("demo.png")
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from itertools import islice
from os import PathLike
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from raymarcher.core.integrator import render_pixels
from raymarcher.core.vec import Color

if TYPE_CHECKING:
    from raymarcher.config import Config
    from raymarcher.scene.scene import Scene

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class FrameRenderer:
    """Render a Scene into an in-memory image buffer.

    The buffer has shape (height, width, 3), row 0 at the top, and holds the
    unclamped colors produced by the integrator.

    Attributes:
        config: Image size and render settings.
        scene: The scene being rendered.
    """

    def __init__(self, config: Config, scene: Scene) -> None:
        self.config = config
        self.scene = scene
        self._image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self._pixels: Iterator[tuple[tuple[int, int], Color]] | None = None
        self._rendered_rows = 0

    @property
    def width(self) -> int:
        return self.config.image.width

    @property
    def height(self) -> int:
        return self.config.image.height

    @property
    def rendered_rows(self) -> int:
        """Number of complete rows in the buffer, counted from the top."""
        return self._rendered_rows

    @property
    def is_complete(self) -> bool:
        return self._rendered_rows == self.height

    def reset(self) -> None:
        """Clear the buffer and restart the scan from the top row."""
        self._image.fill(0.0)
        self._pixels = None
        self._rendered_rows = 0

    def _render_rows(self, count: int) -> None:
        if self._pixels is None:
            self._pixels = render_pixels(self.config, self.scene)
        for (row, col), color in islice(self._pixels, count * self.width):
            self._image[row, col] = (color.r, color.g, color.b)
        self._rendered_rows = min(self.height, self._rendered_rows + count)

    def render_progressive(
        self,
        batch_rows: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the remaining rows, yielding progress after each batch.

        Args:
            batch_rows: Number of rows to render before each yield.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            ValueError: If batch_rows is smaller than 1.
        """
        if batch_rows < 1:
            raise ValueError(f"batch_rows must be at least 1, got {batch_rows}")
        while not self.is_complete:
            self._render_rows(min(batch_rows, self.height - self._rendered_rows))
            yield (self._rendered_rows, self.height)

    def render(
        self,
        callback: ProgressCallback | None = None,
        batch_rows: int = 1,
    ) -> None:
        """Render the remaining rows with an optional progress callback.

        Args:
            callback: Called after each batch with (rows_done, total_rows).
            batch_rows: Number of rows to render before each callback.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(progress, batch_rows=10)
        """
        for done, total in self.render_progressive(batch_rows):
            if callback is not None:
                callback(done, total)

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Get a copy of the float image buffer, shape (height, width, 3)."""
        return self._image.copy()

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the image quantized to 8 bits per channel."""
        from raymarcher.preview.export import image_to_uint8

        return image_to_uint8(self._image)

    def save_image(self, filepath: str | PathLike[str]) -> None:
        """Save the image; the format follows the suffix (.ppm or .png)."""
        from raymarcher.preview.export import save_image

        save_image(self._image, filepath)

    def __repr__(self) -> str:
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"rows={self._rendered_rows}/{self.height})"
        )

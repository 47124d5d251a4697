"""Matplotlib-based preview display for rendered images.

Matplotlib is an optional dependency (the ``preview`` extra) and is only
imported when a window is actually shown.

Example:
    >>> from raymarcher.core.frame import FrameRenderer
    >>> from raymarcher.preview.display import show_preview
    >>>
    >>> renderer = FrameRenderer(config, scene)
    >>> renderer.render()
    >>> show_preview(renderer.get_image_numpy(), title="Demo")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.floating]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value. 1.0 leaves the image unchanged.

    Returns:
        Gamma corrected image.
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Gamma correct, clamp to [0, 1] and replace NaN with 0."""
    result = apply_gamma(np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0), gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: npt.NDArray[np.floating],
    title: str | None = None,
    block: bool = True,
    *,
    gamma: float = 1.0,
    figsize: tuple[float, float] = (8, 4.5),
) -> None:
    """Display an image as a Matplotlib figure.

    Args:
        image: Float image array of shape (H, W, 3).
        title: Figure title (default shows the image size).
        block: Whether to block execution until figure is closed.
        gamma: Gamma correction value.
        figsize: Figure size in inches (width, height).
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)

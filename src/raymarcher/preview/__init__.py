"""Preview module for output and visualization.

Components:
    export: Byte quantization, streamed PPM output and PNG export via Pillow
    display: Matplotlib-based preview display

Example:
    >>> from raymarcher.preview import save_image, show_preview
    >>> image = renderer.get_image_numpy()
    >>> save_image(image, "output.png")
    >>> show_preview(image)
"""

from raymarcher.preview.display import apply_gamma, process_image_for_display, show_preview
from raymarcher.preview.export import (
    color_to_rgb,
    colors_to_array,
    compute_rmse,
    convert_to_byte,
    image_to_uint8,
    save_image,
    save_png_from_array,
    save_ppm_from_array,
    write_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "apply_gamma",
    "process_image_for_display",
    # Export functions
    "convert_to_byte",
    "color_to_rgb",
    "write_ppm",
    "colors_to_array",
    "image_to_uint8",
    "save_png_from_array",
    "save_ppm_from_array",
    "save_image",
    "compute_rmse",
]

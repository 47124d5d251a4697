#!/usr/bin/env python3
"""Render the demo scene, or a scene loaded from a JSON file.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH           Image width in pixels (default: 400)
    --height HEIGHT         Image height in pixels (default: width * 9 / 16)
    --output OUTPUT         Output file path, .ppm or .png (default: image.ppm)
    --scene FILE            JSON scene description (default: built-in demo scene)
    --normals               Shade surfaces by their normal instead of materials
    --max-steps N           Marching step budget per ray (default: 1000)
    --max-recursions N      Reflection bounce cap (default: 3)
    --epsilon EPS           Hit threshold (default: 1e-5)
    --batch-rows N          Rows per progress update (default: 10)
    --show                  Show the result in a Matplotlib window
    --quiet                 Suppress progress output

Example:
    python -m examples.render_scene --width 320 --output demo.png
    python -m examples.render_scene --scene examples/demo_scene.json --normals
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from raymarcher.config import (
    EPSILON,
    MAX_LIGHT_RECURSIONS,
    MAX_MARCHING_STEPS,
    Config,
    ImageSettings,
    MaterialOverride,
    RenderSettings,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a signed distance field scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width * 9 / 16)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.ppm",
        help="Output file path, .ppm or .png (default: image.ppm)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: built-in demo scene)",
    )
    parser.add_argument(
        "--normals",
        action="store_true",
        help="Shade surfaces by their normal instead of their material",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=MAX_MARCHING_STEPS,
        help=f"Marching step budget per ray (default: {MAX_MARCHING_STEPS})",
    )
    parser.add_argument(
        "--max-recursions",
        type=int,
        default=MAX_LIGHT_RECURSIONS,
        help=f"Reflection bounce cap (default: {MAX_LIGHT_RECURSIONS})",
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=EPSILON,
        help=f"Hit threshold (default: {EPSILON})",
    )
    parser.add_argument(
        "--batch-rows",
        type=int,
        default=10,
        help="Rows per progress update (default: 10)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Turn parsed arguments into a render Config."""
    height = args.height if args.height is not None else int(args.width * 9 / 16)
    return Config(
        image=ImageSettings(width=args.width, height=height),
        render=RenderSettings(
            epsilon=args.epsilon,
            max_marching_steps=args.max_steps,
            max_light_recursions=args.max_recursions,
            material_override=MaterialOverride.NORMAL if args.normals else None,
        ),
    )


def render_scene(
    config: Config,
    scene_path: str | None = None,
    output_path: str = "image.ppm",
    batch_rows: int = 10,
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        config: Image size and render settings.
        scene_path: JSON scene file, or None for the demo scene.
        output_path: Output file path (.ppm or .png).
        batch_rows: Number of rows to render between progress updates.
        show: If True, display the image when done.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from raymarcher.core.frame import FrameRenderer
    from raymarcher.scene.demo import create_demo_scene
    from raymarcher.scene.manager import load_scene_file

    width, height = config.image.width, config.image.height
    start_time = time.time()

    if scene_path is None:
        if not quiet:
            print(f"Creating demo scene ({width}x{height})...")
        scene = create_demo_scene(config.aspect_ratio)
    else:
        if not quiet:
            print(f"Loading scene from {scene_path} ({width}x{height})...")
        scene = load_scene_file(scene_path).build(config.aspect_ratio)

    renderer = FrameRenderer(config, scene)

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            rows_per_sec = done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    renderer.render(callback=progress_callback, batch_rows=batch_rows)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    renderer.save_image(output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Done! Took {total_time:.3f} seconds.")

    if show:
        from raymarcher.preview.display import show_preview

        show_preview(renderer.get_image_numpy(), title=output_file.name)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
        render_scene(
            config,
            scene_path=args.scene,
            output_path=args.output,
            batch_rows=args.batch_rows,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

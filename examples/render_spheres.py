#!/usr/bin/env python3
"""Render a sphere scene with the projection-wall camera.

This script demonstrates end-to-end rendering: it builds one of the stock
worlds, sweeps one ray per pixel through the shading core and saves the
result as a PNG.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 256)
    --scene SCENE       Stock scene: "default" or "single" (default: single)
    --scene-file PATH   Load the world from a JSON file instead
    --tone-map METHOD   Tone mapping: none, reinhard or exposure (default: none)
    --output OUTPUT     Output file path (default: spheres.png)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python examples/render_spheres.py --width 512 --height 512 --scene default
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from spheretrace.camera.wall import WallCamera, render
from spheretrace.preview.export import save_png
from spheretrace.scene.world import World, default_world, single_sphere_world

SCENES = {
    "default": default_world,
    "single": single_sphere_world,
}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=256,
        help="Image width in pixels (default: 256)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=256,
        help="Image height in pixels (default: 256)",
    )
    parser.add_argument(
        "--scene",
        choices=sorted(SCENES),
        default="single",
        help="Stock scene to render (default: single)",
    )
    parser.add_argument(
        "--scene-file",
        type=Path,
        default=None,
        help="JSON world description; overrides --scene",
    )
    parser.add_argument(
        "--tone-map",
        choices=["none", "reinhard", "exposure"],
        default="none",
        help="Tone mapping applied before export (default: none)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def load_world(scene: str, scene_file: Path | None) -> World:
    """Build the world from a stock scene name or a JSON file."""
    if scene_file is not None:
        with scene_file.open() as f:
            return World.from_dict(json.load(f))
    return SCENES[scene]()


def render_spheres(
    width: int = 256,
    height: int = 256,
    scene: str = "single",
    scene_file: Path | None = None,
    tone_map: str = "none",
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Returns:
        Path to the saved image file.
    """
    world = load_world(scene, scene_file)
    camera = WallCamera(width=width, height=height)

    if not quiet:
        print(f"Rendering {len(world)} spheres at {width}x{height}...")

    start_time = time.time()
    canvas = render(world, camera)

    output_file = Path(output_path)
    save_png(canvas, output_file, tone_map=tone_map)  # type: ignore[arg-type]

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            scene=args.scene,
            scene_file=args.scene_file,
            tone_map=args.tone_map,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

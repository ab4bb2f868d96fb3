#!/usr/bin/env python3
"""Render a demo scene.

This script renders one of the built-in demo scenes to a plain-text PPM
file, or to PNG when the output path ends in ``.png``.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene NAME            Demo scene: spheres or mirrors (default: spheres)
    --width WIDTH           Image width in pixels (default: 512)
    --height HEIGHT         Image height in pixels (default: 512)
    --output OUTPUT         Output file path (default: render.ppm)
    --strategy STRATEGY     adaptive or stochastic (default: adaptive)
    --samples SAMPLES       Stochastic samples per pixel (default: 8)
    --depth DEPTH           Maximum reflection depth (default: 5)
    --dof-samples N         Depth-of-field rays per sample (default: 1)
    --seed SEED             Random seed (default: 0)
    --gpu                   Use the CUDA backend when available
    --preview               Show the result in a Matplotlib window
    --quiet                 Suppress progress output

Example:
    python -m examples.render_scene --scene mirrors --dof-samples 16 --output mirrors.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=["spheres", "mirrors"],
        default="spheres",
        help="Demo scene to render (default: spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=512,
        help="Image width in pixels (default: 512)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=512,
        help="Image height in pixels (default: 512)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.ppm",
        help="Output file path, .ppm or .png (default: render.ppm)",
    )
    parser.add_argument(
        "--strategy",
        choices=["adaptive", "stochastic"],
        default="adaptive",
        help="Anti-aliasing strategy (default: adaptive)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=8,
        help="Jittered samples per pixel for stochastic anti-aliasing (default: 8)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Maximum reflection depth (default: 5)",
    )
    parser.add_argument(
        "--dof-samples",
        type=int,
        default=1,
        help="Depth-of-field rays per sample point (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--gpu",
        action="store_true",
        help="Use the CUDA backend when available",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene_name: str = "spheres",
    width: int = 512,
    height: int = 512,
    output_path: str = "render.ppm",
    strategy: str = "adaptive",
    samples: int = 8,
    depth: int = 5,
    dof_samples: int = 1,
    seed: int = 0,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a demo scene and save it to file.

    Args:
        scene_name: Name of the demo scene.
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PPM, or PNG by extension).
        strategy: Anti-aliasing strategy.
        samples: Jittered samples per pixel for stochastic anti-aliasing.
        depth: Maximum reflection depth.
        dof_samples: Depth-of-field rays per sample point.
        seed: Random seed.
        preview: If True, show the render in a Matplotlib window.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.core.config import RenderConfig
    from whitted.core.image import Image
    from whitted.core.renderer import Renderer
    from whitted.preview.export import save_png, write_ppm
    from whitted.scene.demo import SCENES

    if not quiet:
        print(f"Creating '{scene_name}' scene ({width}x{height})...")

    scene, camera = SCENES[scene_name]()
    config = RenderConfig(
        max_ray_depth=depth,
        num_dof_samples=dof_samples,
        strategy=strategy,
        antialiasing_samples=samples if strategy == "stochastic" else 0,
        seed=seed,
    )
    renderer = Renderer(scene, camera, config)
    image = Image(width, height)

    if not quiet:
        print(f"Rendering with {strategy} anti-aliasing, depth {depth}, {dof_samples} DoF samples...")

    renderer.render(image)

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".png":
        save_png(image, output_file)
    else:
        write_ppm(image, output_file)

    stats = renderer.stats
    if not quiet and stats is not None:
        print(f"Saved to: {output_file.absolute()}")
        print(
            f"Traces: {stats.traces} ({stats.traces_per_pixel:.2f} per pixel), "
            f"rays: {stats.rays}, supersampled pixels: {stats.supersampled_pixels}"
        )
        print(f"Total time: {stats.elapsed:.2f}s")

    if preview:
        from whitted.preview.display import show_preview

        show_preview(image, stats=stats)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    import whitted

    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    # Device kernels run in double precision, which not every GPU backend
    # supports; CPU is the default.
    if args.gpu:
        try:
            whitted.init(arch=ti.cuda)
            if not args.quiet:
                print("Using CUDA backend")
        except Exception:
            whitted.init(arch=ti.cpu)
            if not args.quiet:
                print("CUDA unavailable, using CPU backend")
    else:
        whitted.init(arch=ti.cpu)

    try:
        render_scene(
            scene_name=args.scene,
            width=args.width,
            height=args.height,
            output_path=args.output,
            strategy=args.strategy,
            samples=args.samples,
            depth=args.depth,
            dof_samples=args.dof_samples,
            seed=args.seed,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

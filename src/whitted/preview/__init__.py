"""Image output: PPM/PNG export and Matplotlib preview."""

from whitted.preview.display import (
    apply_gamma,
    apply_saturation,
    process_image_for_display,
    show_preview,
)
from whitted.preview.export import (
    compute_rmse,
    format_ppm,
    parse_ppm,
    read_ppm,
    save_png,
    write_ppm,
)

__all__ = [
    "apply_gamma",
    "apply_saturation",
    "process_image_for_display",
    "show_preview",
    "compute_rmse",
    "format_ppm",
    "parse_ppm",
    "read_ppm",
    "save_png",
    "write_ppm",
]

"""Polar-plot geometry of the SH basis functions."""

from .lobe_geometry import (
    LobeStrip,
    lobe_origin,
    sample_directions,
    sign_colors,
    lobe_strips,
    build_lobe_scene,
    strips_to_arrays,
    POSITIVE_COLOR,
    NEGATIVE_COLOR,
)

__all__ = [
    "LobeStrip",
    "lobe_origin",
    "sample_directions",
    "sign_colors",
    "lobe_strips",
    "build_lobe_scene",
    "strips_to_arrays",
    "POSITIVE_COLOR",
    "NEGATIVE_COLOR",
]

"""Offline viewer for the spherical harmonics lobes.

Renders the 16 lobes of bands 0-3 into an image with matplotlib and can print
the Newton-derived normalization constants next to the library values.
"""

import warnings
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .harmonics.constants import NormalizationConstants, check_constants
from .lobes.lobe_geometry import LobeStrip, build_lobe_scene
from .utils.config import LobeConfig


def render_lobe_scene(
    scene: Dict[Tuple[int, int], List[LobeStrip]],
    output_path: Optional[Path] = None,
    figsize: Tuple[float, float] = (12, 8),
    elevation: float = 15.0,
    azimuth: float = -80.0
):
    """Draw every lobe strip as a coloured 3D line collection.

    Args:
        scene: Output of build_lobe_scene
        output_path: Save the figure here when given
        figsize: Figure size in inches
        elevation, azimuth: Camera angles in degrees

    Returns:
        The matplotlib figure
    """
    import matplotlib.pyplot as plt
    from mpl_toolkits.mplot3d.art3d import Line3DCollection

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')

    all_points = []
    for strips in scene.values():
        for strip in strips:
            # Segment i joins vertex i and i+1 and takes the colour of vertex i
            segments = np.stack([strip.points[:-1], strip.points[1:]], axis=1)
            collection = Line3DCollection(
                segments,
                colors=strip.colors[:-1] / 255.0,
                linewidths=0.5
            )
            ax.add_collection3d(collection)
            all_points.append(strip.points)

    if all_points:
        points = np.concatenate(all_points)
        lo, hi = points.min(axis=0), points.max(axis=0)
        center = (lo + hi) / 2
        half = max(float(np.max(hi - lo)) / 2, 1e-6)
        ax.set_xlim(center[0] - half, center[0] + half)
        ax.set_ylim(center[1] - half, center[1] + half)
        ax.set_zlim(center[2] - half, center[2] + half)

    ax.view_init(elev=elevation, azim=azimuth)
    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title('Real spherical harmonics, bands 0-3 (red: Y > 0, blue: Y <= 0)')

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig


def report_constants(dtype: type = np.float64, rtol: float = 1e-6) -> Dict[str, float]:
    """Print the Newton-derived constants beside np.sqrt.

    Warns if any constant deviates from the library value by more than rtol.

    Returns:
        Deviations above rtol (empty when the table agrees)
    """
    constants = NormalizationConstants.compute(dtype=dtype)
    radicands = constants.radicands()

    print(f"\n=== Normalization constants ({np.dtype(dtype).name}) ===")
    for name, value in constants.as_dict().items():
        reference = float(np.sqrt(radicands[name]))
        print(f"  {name:8s} newton={value:.17g}  numpy={reference:.17g}  "
              f"diff={value - reference:+.3e}")

    deviations = check_constants(constants, rtol=rtol)
    if deviations:
        warnings.warn(
            f"Newton square roots deviate from np.sqrt beyond rtol={rtol}: "
            + ", ".join(f"{k}={v:.3e}" for k, v in deviations.items()),
            UserWarning
        )
    return deviations


def main(argv: Optional[List[str]] = None):
    """Command line entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Render the real spherical harmonics lobes of bands 0-3"
    )
    parser.add_argument(
        "--n-theta",
        type=int,
        default=100,
        help="Samples per meridian"
    )
    parser.add_argument(
        "--n-phi",
        type=int,
        default=100,
        help="Number of meridians"
    )
    parser.add_argument(
        "--spacing",
        type=float,
        default=1.5,
        help="Distance between neighbouring lobes"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("renders"),
        help="Output directory"
    )
    parser.add_argument(
        "--output-name",
        type=str,
        default="sh_lobes",
        help="Image file name (without extension)"
    )
    parser.add_argument(
        "--constants",
        action="store_true",
        help="Print the normalization constants table and exit"
    )
    parser.add_argument(
        "--dtype",
        choices=["float32", "float64"],
        default="float64",
        help="Working precision for --constants"
    )

    args = parser.parse_args(argv)

    if args.constants:
        report_constants(dtype=np.dtype(args.dtype).type)
        return

    config = LobeConfig(
        n_theta=args.n_theta,
        n_phi=args.n_phi,
        spacing=args.spacing,
        output_dir=args.output_dir
    )

    # Rendering always goes to a file
    import matplotlib
    matplotlib.use("Agg")

    scene = build_lobe_scene(config, progress=True)
    output_path = config.get_image_path(args.output_name)
    render_lobe_scene(scene, output_path=output_path)

    print(f"\nRendered {len(scene)} lobes "
          f"({config.samples_per_lobe} samples each) to {output_path}")


if __name__ == "__main__":
    main()

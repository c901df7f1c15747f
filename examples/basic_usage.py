"""Basic usage example for the SH lobes package."""

from pathlib import Path

import numpy as np

from sh_lobes import LobeConfig, newton_sqrt, sh_basis, lm_to_index
from sh_lobes.harmonics import index_to_lm, spherical_to_direction
from sh_lobes.lobes import lobe_strips


def example_constants():
    """Derive a few square roots by Newton iteration."""
    for a in [2.0, 3.0, np.pi, 105.0]:
        single = newton_sqrt(a, dtype=np.float32)
        double = newton_sqrt(a)
        print(f"sqrt({a:.6g}): float32={single!s:>12}  float64={double!r}")


def example_basis():
    """Evaluate the 16 basis functions for one direction."""
    direction = spherical_to_direction(np.pi / 4, 0.0)
    values = sh_basis(*direction)

    print(f"\nDirection: {direction}")
    for i, value in enumerate(values):
        l, m = index_to_lm(i)
        print(f"  Y_{l}^{m:+d} = {value:+.6f}")


def example_single_lobe():
    """Sample the Y_2^0 lobe on a coarse grid."""
    config = LobeConfig(n_theta=20, n_phi=8, output_dir=Path("output/lobes"))
    strips = lobe_strips(2, 0, config)

    values = np.concatenate([s.values for s in strips])
    print(f"\nY_2^0 (index {lm_to_index(2, 0)}): {len(strips)} strips, "
          f"range [{values.min():.4f}, {values.max():.4f}]")


if __name__ == "__main__":
    example_constants()
    example_basis()
    example_single_lobe()

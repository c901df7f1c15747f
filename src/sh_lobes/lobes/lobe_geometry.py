"""Lobe geometry for visualizing the band 0-3 SH basis.

Samples the unit sphere on a (theta, phi) grid, evaluates the basis once per
direction and turns the selected function into polar-plot polylines: each
point sits at |Y_l^m(d)| * d and is coloured by the sign of Y_l^m(d).
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from ..harmonics.spherical_harmonics import sh_basis, lm_to_index, BAND_OFFSETS, MAX_SH_ORDER
from ..utils.config import LobeConfig

POSITIVE_COLOR = np.array([255, 0, 0], dtype=np.uint8)
NEGATIVE_COLOR = np.array([0, 0, 255], dtype=np.uint8)


@dataclass
class LobeStrip:
    """One meridian of a lobe, drawn as a line strip.

    Attributes:
        l: Band of the visualized basis function
        m: Order of the visualized basis function
        phi: Azimuth of the meridian
        points: Vertex positions including the lobe origin (n_theta, 3)
        colors: RGB vertex colors (n_theta, 3), uint8
        values: Basis function value at each vertex (n_theta,)
    """
    l: int
    m: int
    phi: float
    points: np.ndarray
    colors: np.ndarray
    values: np.ndarray


def lobe_origin(
    l: int,
    m: int,
    spacing: float = 1.5,
    top_height: float = 3.0
) -> np.ndarray:
    """Position of the (l, m) lobe: bands stack downwards, orders spread along x."""
    return np.array([m * spacing, 0.0, top_height - l * spacing])


def sample_directions(n_theta: int, n_phi: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sample unit directions on a (phi, theta) grid.

    Args:
        n_theta: Samples per meridian, theta in [0, pi] with both poles included
        n_phi: Meridians, phi in [0, 2*pi)

    Returns:
        Tuple of (theta (n_theta,), phi (n_phi,), directions (n_phi, n_theta, 3))
    """
    theta = np.linspace(0.0, np.pi, n_theta)
    phi = np.linspace(0.0, 2.0 * np.pi, n_phi, endpoint=False)

    sin_theta = np.sin(theta)[None, :]
    directions = np.stack([
        sin_theta * np.cos(phi)[:, None],
        sin_theta * np.sin(phi)[:, None],
        np.broadcast_to(np.cos(theta)[None, :], (n_phi, n_theta))
    ], axis=-1)

    return theta, phi, directions


def sign_colors(values: np.ndarray) -> np.ndarray:
    """Red where the value is strictly positive, blue otherwise."""
    values = np.asarray(values)
    return np.where((values > 0)[..., None], POSITIVE_COLOR, NEGATIVE_COLOR).astype(np.uint8)


def lobe_strips(l: int, m: int, config: Optional[LobeConfig] = None) -> List[LobeStrip]:
    """Build the line strips of one basis function.

    Args:
        l: Band (0-3)
        m: Order (-l..l)
        config: Sampling and layout configuration

    Returns:
        One LobeStrip per meridian, length config.n_phi

    Raises:
        ValueError: If (l, m) is not a band 0-3 basis function
    """
    config = config or LobeConfig()
    index = lm_to_index(l, m)
    origin = lobe_origin(l, m, config.spacing, config.top_height)

    _, phi, directions = sample_directions(config.n_theta, config.n_phi)

    strips = []
    for row, row_phi in enumerate(phi):
        meridian = directions[row]
        values = np.array([sh_basis(*d)[index] for d in meridian])
        points = meridian * np.abs(values)[:, None] + origin

        strips.append(LobeStrip(
            l=l,
            m=m,
            phi=float(row_phi),
            points=points,
            colors=sign_colors(values),
            values=values
        ))

    return strips


def build_lobe_scene(
    config: Optional[LobeConfig] = None,
    progress: bool = False
) -> Dict[Tuple[int, int], List[LobeStrip]]:
    """Build the strips of all 16 lobes.

    The basis is evaluated once per direction and shared by every lobe.

    Args:
        config: Sampling and layout configuration
        progress: Show a progress bar over the meridians

    Returns:
        Dict mapping (l, m) to that lobe's strips, band-major with m ascending
    """
    config = config or LobeConfig()
    _, phi, directions = sample_directions(config.n_theta, config.n_phi)

    keys = [(l, m) for l in range(MAX_SH_ORDER + 1) for m in range(-l, l + 1)]
    origins = {key: lobe_origin(*key, config.spacing, config.top_height) for key in keys}
    scene = {key: [] for key in keys}

    rows = tqdm(range(config.n_phi), desc="Sampling lobes", disable=not progress)
    for row in rows:
        meridian = directions[row]
        basis = np.stack([sh_basis(*d) for d in meridian])  # (n_theta, 16)

        for l, m in keys:
            values = basis[:, BAND_OFFSETS[l] + l + m]
            scene[(l, m)].append(LobeStrip(
                l=l,
                m=m,
                phi=float(phi[row]),
                points=meridian * np.abs(values)[:, None] + origins[(l, m)],
                colors=sign_colors(values),
                values=values
            ))

    return scene


def strips_to_arrays(strips: List[LobeStrip]) -> Dict[str, np.ndarray]:
    """Stack strips into arrays of shape (n_strips, n_theta, ...)."""
    return {
        'points': np.stack([s.points for s in strips]),
        'colors': np.stack([s.colors for s in strips]),
        'values': np.stack([s.values for s in strips]),
        'phi': np.array([s.phi for s in strips]),
    }

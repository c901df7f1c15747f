"""Real spherical harmonics basis for bands 0 through 3.

Evaluates the 16 closed-form basis functions for a single direction, using
normalization constants derived by Newton iteration rather than a math
library. Index layout follows l * l + l + m.
"""

import numpy as np
from typing import Optional, Sequence, Tuple

from .constants import NormalizationConstants, SH_CONSTANTS

MAX_SH_ORDER = 3
N_SH_COEFFS = (MAX_SH_ORDER + 1) ** 2  # 16

# First coefficient index of each band
BAND_OFFSETS = (0, 1, 4, 9)


def band_factors(constants: NormalizationConstants) -> Tuple[float, ...]:
    """Fold the square roots into the signed scalar factor of each closed form.

    Returns:
        16 factors, one per basis function, sign included.
    """
    rpi = constants.sqrt_pi
    r2 = constants.sqrt2

    k1 = constants.sqrt3 / (2.0 * rpi)
    k2 = constants.sqrt15 / (2.0 * rpi)
    k3_1 = r2 * constants.sqrt35 / (8.0 * rpi)
    k3_2 = r2 * constants.sqrt21 / (8.0 * rpi)

    return (
        # L=0
        1.0 / (2.0 * rpi),
        # L=1
        -k1, k1, -k1,
        # L=2
        k2, -k2,
        constants.sqrt5 / (4.0 * rpi),
        -k2,
        constants.sqrt15 / (4.0 * rpi),
        # L=3
        -k3_1,
        constants.sqrt105 / (2.0 * rpi),
        -k3_2,
        constants.sqrt7 / (4.0 * rpi),
        -k3_2,
        constants.sqrt105 / (4.0 * rpi),
        -k3_1,
    )


# Read-only after import
SH_FACTORS = band_factors(SH_CONSTANTS)


def sh_basis(
    x: float,
    y: float,
    z: float,
    constants: Optional[NormalizationConstants] = None
) -> np.ndarray:
    """Evaluate the 16 real SH basis functions of bands 0-3.

    The direction is expected to be a unit vector. This is not checked: a
    non-unit vector gives scaled values, and NaN or inf components propagate
    into the outputs that use them.

    Args:
        x, y, z: Direction components
        constants: Alternative normalization table (defaults to SH_CONSTANTS)

    Returns:
        SH values, shape (16,)
        Order: Y_0^0, Y_1^-1, Y_1^0, Y_1^1, Y_2^-2, ..., Y_3^3
    """
    k = SH_FACTORS if constants is None else band_factors(constants)
    x, y, z = float(x), float(y), float(z)

    xy = x * y
    yz = y * z
    xz = x * z
    xx = x * x
    yy = y * y
    zz = z * z
    xyz = xy * z

    return np.array([
        # L=0
        k[0],

        # L=1
        k[1] * y,
        k[2] * z,
        k[3] * x,

        # L=2
        k[4] * xy,
        k[5] * yz,
        k[6] * (3.0 * zz - 1.0),
        k[7] * xz,
        k[8] * (xx - yy),

        # L=3
        k[9] * y * (3.0 * xx - yy),
        k[10] * xyz,
        k[11] * y * (5.0 * zz - 1.0),
        k[12] * z * (5.0 * zz - 3.0),
        k[13] * x * (5.0 * zz - 1.0),
        k[14] * (xx - yy) * z,
        k[15] * x * (xx - 3.0 * yy),
    ], dtype=np.float64)


def eval_sh_basis(
    direction: Sequence[float],
    constants: Optional[NormalizationConstants] = None
) -> np.ndarray:
    """Evaluate the basis for one direction given as a length-3 sequence.

    Raises:
        ValueError: If ``direction`` does not have exactly three components
    """
    direction = np.asarray(direction, dtype=np.float64)
    if direction.shape != (3,):
        raise ValueError(f"Expected a single direction of shape (3,), got {direction.shape}")
    return sh_basis(direction[0], direction[1], direction[2], constants=constants)


def lm_to_index(l: int, m: int) -> int:
    """Flat coefficient index of Y_l^m.

    Raises:
        ValueError: If (l, m) is outside bands 0-3
    """
    if not 0 <= l <= MAX_SH_ORDER:
        raise ValueError(f"Band must be in [0, {MAX_SH_ORDER}], got {l}")
    if not -l <= m <= l:
        raise ValueError(f"Order must be in [{-l}, {l}] for band {l}, got {m}")
    return l * l + l + m


def index_to_lm(index: int) -> Tuple[int, int]:
    """Band and order of a flat coefficient index."""
    if not 0 <= index < N_SH_COEFFS:
        raise ValueError(f"Index must be in [0, {N_SH_COEFFS - 1}], got {index}")
    l = int(np.sqrt(index))
    return l, index - l * l - l


def get_sh_order(n_coeffs: int) -> int:
    """Get SH order from number of coefficients.

    Args:
        n_coeffs: Number of SH coefficients

    Returns:
        SH order (l_max)

    Raises:
        ValueError: If n_coeffs is not a valid coefficient count up to band 3
    """
    # n_coeffs = (order + 1)^2
    order = int(np.sqrt(n_coeffs)) - 1
    if (order + 1) ** 2 != n_coeffs or not 0 <= order <= MAX_SH_ORDER:
        raise ValueError(f"Invalid SH coefficient count: {n_coeffs}")
    return order


def get_n_sh_coeffs(order: int) -> int:
    """Get number of SH coefficients for given order (0-3)."""
    if not 0 <= order <= MAX_SH_ORDER:
        raise ValueError(f"SH order must be in [0, {MAX_SH_ORDER}], got {order}")
    return (order + 1) ** 2


def spherical_to_direction(theta: float, phi: float) -> np.ndarray:
    """Unit direction for polar angle theta and azimuth phi (z-up)."""
    sin_theta = np.sin(theta)
    return np.array([
        sin_theta * np.cos(phi),
        sin_theta * np.sin(phi),
        np.cos(theta)
    ])


def sample_uniform_sphere(n_samples: int, seed: int = None) -> np.ndarray:
    """Sample directions uniformly on unit sphere.

    Args:
        n_samples: Number of samples
        seed: Random seed

    Returns:
        Directions, shape (n_samples, 3)
    """
    rng = np.random.default_rng(seed)
    u = rng.random((n_samples, 2))

    z = 1 - 2 * u[:, 0]
    r = np.sqrt(np.maximum(0, 1 - z * z))
    phi = 2 * np.pi * u[:, 1]

    return np.stack([
        r * np.cos(phi),
        r * np.sin(phi),
        z
    ], axis=-1)


def verify_sh_orthonormality(n_samples: int = 20000, seed: int = 42) -> np.ndarray:
    """Verify SH basis orthonormality via Monte Carlo integration.

    Args:
        n_samples: Number of samples for integration
        seed: Random seed

    Returns:
        Inner product matrix, shape (16, 16). Should be close to identity.
    """
    directions = sample_uniform_sphere(n_samples, seed)
    sh_values = np.stack([sh_basis(*d) for d in directions])  # (N, 16)

    # int Y_i * Y_j dw = (4pi/N) sum Y_i * Y_j
    weight = 4 * np.pi / n_samples
    return weight * (sh_values.T @ sh_values)

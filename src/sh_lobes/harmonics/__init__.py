"""Real spherical harmonics up to band 3.

Main Components:
    newton-derived normalization constants (SH_CONSTANTS)
    sh_basis: 16 closed-form basis functions for a unit direction

Example:
    >>> from sh_lobes.harmonics import sh_basis, lm_to_index
    >>> values = sh_basis(0.0, 0.0, 1.0)
    >>> values.shape
    (16,)
    >>> round(float(values[lm_to_index(2, 0)]), 6)
    0.630783
"""

from .constants import (
    NormalizationConstants,
    SH_CONSTANTS,
    RADICANDS,
    check_constants,
)
from .spherical_harmonics import (
    sh_basis,
    eval_sh_basis,
    band_factors,
    lm_to_index,
    index_to_lm,
    get_n_sh_coeffs,
    get_sh_order,
    spherical_to_direction,
    sample_uniform_sphere,
    verify_sh_orthonormality,
    SH_FACTORS,
    BAND_OFFSETS,
    MAX_SH_ORDER,
    N_SH_COEFFS,
)

__all__ = [
    # Constants
    "NormalizationConstants",
    "SH_CONSTANTS",
    "RADICANDS",
    "check_constants",

    # Basis evaluation
    "sh_basis",
    "eval_sh_basis",
    "band_factors",
    "SH_FACTORS",

    # Indexing
    "lm_to_index",
    "index_to_lm",
    "get_n_sh_coeffs",
    "get_sh_order",
    "BAND_OFFSETS",
    "MAX_SH_ORDER",
    "N_SH_COEFFS",

    # Sampling and validation
    "spherical_to_direction",
    "sample_uniform_sphere",
    "verify_sh_orthonormality",
]

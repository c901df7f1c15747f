"""Real spherical harmonics (bands 0-3) with Newton-derived normalization."""

from .numerics.newton_sqrt import newton_sqrt
from .harmonics.constants import NormalizationConstants, SH_CONSTANTS
from .harmonics.spherical_harmonics import sh_basis, eval_sh_basis, lm_to_index
from .lobes.lobe_geometry import build_lobe_scene, lobe_strips
from .utils.config import LobeConfig

__version__ = "0.1.0"
__all__ = [
    "newton_sqrt",
    "NormalizationConstants",
    "SH_CONSTANTS",
    "sh_basis",
    "eval_sh_basis",
    "lm_to_index",
    "build_lobe_scene",
    "lobe_strips",
    "LobeConfig",
]

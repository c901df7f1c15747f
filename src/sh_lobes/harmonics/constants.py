"""Normalization constants for the band 0-3 spherical harmonics basis.

Every irrational factor the basis needs is derived here with
:func:`newton_sqrt`. The default table is built once at import time and is
never written afterwards, so it can be shared freely between threads.
"""

import math
from dataclasses import dataclass, fields
from typing import Dict

import numpy as np

from ..numerics.newton_sqrt import newton_sqrt

# Integer radicands used by the closed forms (pi is handled separately)
RADICANDS = (2, 3, 5, 7, 15, 21, 35, 105)


@dataclass(frozen=True)
class NormalizationConstants:
    """Square roots required by the real SH closed forms up to band 3.

    Attributes:
        sqrt_pi: sqrt(pi)
        sqrt2 ... sqrt105: sqrt of the matching integer radicand
    """
    sqrt_pi: float
    sqrt2: float
    sqrt3: float
    sqrt5: float
    sqrt7: float
    sqrt15: float
    sqrt21: float
    sqrt35: float
    sqrt105: float

    @classmethod
    def compute(cls, dtype: type = np.float64) -> "NormalizationConstants":
        """Derive the table with Newton iteration in the given precision."""
        values = {"sqrt_pi": float(newton_sqrt(math.pi, dtype=dtype))}
        for radicand in RADICANDS:
            values[f"sqrt{radicand}"] = float(newton_sqrt(radicand, dtype=dtype))
        return cls(**values)

    def radicands(self) -> Dict[str, float]:
        """Map each field name to the value it is the square root of."""
        result = {"sqrt_pi": math.pi}
        for radicand in RADICANDS:
            result[f"sqrt{radicand}"] = float(radicand)
        return result

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def check_constants(
    constants: NormalizationConstants,
    rtol: float = 1e-6
) -> Dict[str, float]:
    """Compare a constants table against ``np.sqrt``.

    Args:
        constants: Table to check
        rtol: Relative deviation tolerated before reporting

    Returns:
        Relative deviation per constant, only for entries exceeding ``rtol``.
        An empty dict means the table agrees with the library square root.
    """
    deviations = {}
    radicands = constants.radicands()
    for name, value in constants.as_dict().items():
        reference = float(np.sqrt(radicands[name]))
        error = abs(value - reference) / reference
        if not error <= rtol:
            deviations[name] = error
    return deviations


SH_CONSTANTS = NormalizationConstants.compute()

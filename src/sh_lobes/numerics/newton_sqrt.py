"""Newton-Raphson square root for deriving normalization constants.

The routine needs nothing beyond basic arithmetic, so the constants used by the
spherical harmonics basis can be derived without a runtime math library. All
arithmetic happens in the requested numpy floating point type, which makes it
possible to reproduce single-precision behaviour with ``np.float32``.
"""

import numpy as np

# Extra rounds allowed once the residual stops decreasing. Empirically enough
# to settle single-precision results on the correctly rounded value.
PLATEAU_EXTRA_ITERATIONS = 4


def _newton_iterate(a, dtype: type, extra_iterations: int):
    """Run the iteration from x0 = a until the residual plateau budget is spent."""
    half = dtype(0.5)
    xn = a
    extra = 0
    while True:
        xnp1 = xn - (xn * xn - a) * half / xn
        e0 = abs(xn * xn - a)
        e1 = abs(xnp1 * xnp1 - a)
        if e1 < e0:
            xn = xnp1
        elif extra < extra_iterations:
            xn = xnp1
            extra += 1
        else:
            return xn


def newton_sqrt(
    a: float,
    dtype: type = np.float64,
    extra_iterations: int = PLATEAU_EXTRA_ITERATIONS
) -> np.floating:
    """Compute sqrt(a) by Newton-Raphson iteration on f(x) = x^2 - a.

    Iteration starts at x0 = a. It keeps going while the residual |x^2 - a|
    strictly decreases, then runs at most ``extra_iterations`` further rounds
    and returns the current estimate.

    Radicands the iteration cannot handle directly (subnormal, or with a square
    that overflows ``dtype``) are written as m * 4**k with ``np.frexp``. The
    same iteration then runs on m and the root is scaled back by 2**k, which is
    exact in binary floating point.

    Args:
        a: Radicand
        dtype: numpy floating point type used for every operation
        extra_iterations: Rounds allowed after the residual plateaus

    Returns:
        Square root of ``a`` as ``dtype``. NaN if ``a`` is negative, infinite
        or NaN.

    Example:
        >>> round(float(newton_sqrt(2.0)), 6)
        1.414214
        >>> bool(np.isnan(newton_sqrt(-1.0)))
        True
    """
    with np.errstate(over="ignore", invalid="ignore", divide="ignore", under="ignore"):
        a = dtype(a)

        # NaN fails both comparisons
        if not (0 <= a < np.inf):
            return dtype(np.nan)
        if a == 0:
            return dtype(0)

        if np.finfo(dtype).tiny <= a and a * a < np.inf:
            return _newton_iterate(a, dtype, extra_iterations)

        # a = mantissa * 2**exponent with an even exponent, mantissa in [0.5, 2)
        mantissa, exponent = np.frexp(a)
        exponent = int(exponent)
        if exponent % 2:
            mantissa = mantissa * dtype(2)
            exponent -= 1

        root = _newton_iterate(dtype(mantissa), dtype, extra_iterations)
        return dtype(np.ldexp(root, exponent // 2))

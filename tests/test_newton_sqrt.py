"""Tests for the Newton-Raphson square root."""

import math

import numpy as np
import pytest

from sh_lobes.numerics import newton_sqrt, PLATEAU_EXTRA_ITERATIONS


RADICANDS = [1.0, 2.0, 3.0, 5.0, 7.0, 15.0, 21.0, 35.0, 105.0, math.pi]


class TestValidInput:
    """Tests for finite, non-negative radicands."""

    def test_zero_is_exact(self):
        """Test that sqrt(0) returns exactly zero."""
        assert newton_sqrt(0.0) == 0.0
        assert newton_sqrt(0.0, dtype=np.float32) == 0.0

    def test_negative_zero(self):
        """Test that -0.0 is treated as zero."""
        assert newton_sqrt(-0.0) == 0.0

    def test_one(self):
        """Test that sqrt(1) stays at the starting estimate."""
        assert newton_sqrt(1.0) == 1.0

    def test_perfect_squares(self):
        """Test exact results for perfect squares."""
        for root in [2.0, 3.0, 12.0, 1024.0]:
            assert newton_sqrt(root * root) == root

    @pytest.mark.parametrize("a", RADICANDS)
    def test_round_trip_double(self, a):
        """Test sqrt(a)^2 recovers a in double precision."""
        r = float(newton_sqrt(a))
        assert np.isclose(r * r, a, rtol=1e-12, atol=0.0)
        assert np.isclose(r, math.sqrt(a), rtol=1e-15, atol=0.0)

    @pytest.mark.parametrize("a", RADICANDS)
    def test_round_trip_single(self, a):
        """Test sqrt(a)^2 recovers a in single precision."""
        r = float(newton_sqrt(a, dtype=np.float32))
        assert np.isclose(r * r, a, rtol=1e-6, atol=0.0)

    @pytest.mark.parametrize("a", RADICANDS)
    def test_single_within_one_ulp(self, a):
        """Test single-precision results land next to the library value."""
        r = newton_sqrt(a, dtype=np.float32)
        reference = np.sqrt(np.float32(a))
        assert abs(r - reference) <= np.spacing(reference)

    def test_wide_range_double(self):
        """Test relative accuracy across many magnitudes."""
        for a in [1e-12, 1e-6, 0.25, 0.5, 10.0, 12345.678, 1e12, 1e100]:
            r = float(newton_sqrt(a))
            assert np.isclose(r * r, a, rtol=1e-12, atol=0.0), a

    def test_wide_range_single(self):
        """Test relative accuracy across magnitudes representable in float32."""
        for a in [1e-6, 0.25, 0.5, 10.0, 12345.678, 1e12]:
            r = float(newton_sqrt(a, dtype=np.float32))
            a32 = float(np.float32(a))
            assert np.isclose(r * r, a32, rtol=1e-6, atol=0.0), a

    def test_result_dtype(self):
        """Test the result carries the requested precision."""
        assert isinstance(newton_sqrt(2.0, dtype=np.float32), np.float32)
        assert isinstance(newton_sqrt(2.0), np.float64)
        assert isinstance(newton_sqrt(-2.0, dtype=np.float32), np.float32)

    def test_no_extra_iterations(self):
        """Test that stopping at the first plateau is already accurate."""
        r = float(newton_sqrt(2.0, extra_iterations=0))
        assert np.isclose(r, math.sqrt(2.0), rtol=1e-15)

    def test_default_extra_iterations(self):
        """Test the plateau budget default."""
        assert PLATEAU_EXTRA_ITERATIONS == 4


class TestInvalidInput:
    """Tests for inputs that produce NaN."""

    @pytest.mark.parametrize("a", [-1.0, -1e-30, -np.inf, np.inf, np.nan])
    def test_invalid_is_nan(self, a):
        """Test negative, infinite and NaN radicands give NaN."""
        assert np.isnan(newton_sqrt(a))
        assert np.isnan(newton_sqrt(a, dtype=np.float32))

    def test_out_of_range_cast_is_nan(self):
        """Test radicands outside the float32 range give NaN in float32."""
        assert np.isnan(newton_sqrt(1e300, dtype=np.float32))


class TestExtremeMagnitudes:
    """Tests for radicands whose square overflows or that are subnormal."""

    def test_large_single(self):
        """Test a float32 radicand whose square overflows float32."""
        r = newton_sqrt(1e30, dtype=np.float32)
        a32 = float(np.float32(1e30))

        assert isinstance(r, np.float32)
        assert np.isclose(float(r) ** 2, a32, rtol=1e-6, atol=0.0)

    def test_large_double(self):
        """Test float64 radicands whose square overflows float64."""
        for a in [1e200, 1e300, np.finfo(np.float64).max]:
            r = float(newton_sqrt(a))
            assert np.isclose(r, math.sqrt(a), rtol=1e-15, atol=0.0), a

    def test_max_single(self):
        """Test the largest finite float32."""
        a = np.finfo(np.float32).max
        r = newton_sqrt(a, dtype=np.float32)
        assert np.isclose(float(r), math.sqrt(float(a)), rtol=1e-6, atol=0.0)

    def test_smallest_subnormal_double(self):
        """Test the smallest positive float64, 2**-1074."""
        a = np.nextafter(0.0, 1.0)
        assert newton_sqrt(a) == 2.0 ** -537

    def test_smallest_subnormal_single(self):
        """Test the smallest positive float32, 2**-149."""
        a = np.nextafter(np.float32(0), np.float32(1))
        r = newton_sqrt(a, dtype=np.float32)

        assert isinstance(r, np.float32)
        assert np.isclose(float(r) ** 2, float(a), rtol=1e-6, atol=0.0)

    def test_subnormal_double(self):
        """Test a float64 subnormal away from the bottom of the range."""
        a = 1e-310
        r = float(newton_sqrt(a))
        assert np.isclose(r, math.sqrt(a), rtol=1e-15, atol=0.0)


def recursive_newton_sqrt_r(xn, a, e, budget):
    """Float32 recursion with the residual-plateau rule, carried over literally."""
    half = np.float32(0.5)
    xnp1 = xn - (xn * xn - a) * half / xn
    e0 = abs(xn * xn - a)
    e1 = abs(xnp1 * xnp1 - a)
    if e1 < e0:
        return recursive_newton_sqrt_r(xnp1, a, e, budget)
    if e < budget:
        return recursive_newton_sqrt_r(xnp1, a, e + 1, budget)
    return xn


def float32_bits(value):
    return int(np.array(value, dtype=np.float32).view(np.uint32))


class TestIterationPolicy:
    """Tests for the stopping rule of the iteration."""

    SPREAD = sorted(set(
        [float(np.float32(v)) for v in np.geomspace(1e-6, 1e18, 61)]
        + [float(np.float32(v)) for v in RADICANDS]
        + [0.3, 0.7, 1.5, 12345.678, 99.0, 1e-3]
    ))

    @pytest.mark.parametrize("budget", [0, 1, 2, 3, 4])
    def test_matches_recursive_rule_bitwise(self, budget):
        """Test the loop returns x_n exactly as the recursive rule does."""
        for value in self.SPREAD:
            a = np.float32(value)
            expected = recursive_newton_sqrt_r(a, a, 0, budget)
            actual = newton_sqrt(a, dtype=np.float32, extra_iterations=budget)

            assert isinstance(actual, np.float32)
            assert float32_bits(actual) == float32_bits(expected), (value, budget)

    def test_default_budget_matches_recursive_rule(self):
        """Test the default budget is the four extra rounds of the recursion."""
        for value in self.SPREAD:
            a = np.float32(value)
            expected = recursive_newton_sqrt_r(a, a, 0, PLATEAU_EXTRA_ITERATIONS)
            assert float32_bits(newton_sqrt(a, dtype=np.float32)) == float32_bits(expected)

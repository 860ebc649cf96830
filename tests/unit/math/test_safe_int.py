"""Tests for SafeInt width-checked arithmetic."""

import pytest

from ioc_engine.constants import UINT256_MAX
from ioc_engine.errors import AmountOverflowError, DomainError
from ioc_engine.math.safe_int import DivisionByZero, S, SafeInt, SafeIntError, Underflow


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        assert SafeInt(SafeInt(42)).value == 42

    def test_alias_s(self):
        assert S is SafeInt

    def test_negative_raises(self):
        with pytest.raises(Underflow):
            SafeInt(-1)

    def test_above_uint256_raises(self):
        with pytest.raises(AmountOverflowError):
            SafeInt(UINT256_MAX + 1)

    def test_uint256_max_allowed(self):
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt(True)


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_basic_operations(self):
        assert (S(10) + 5).value == 15
        assert (S(10) - S(4)).value == 6
        assert (S(6) * 7).value == 42
        assert (S(43) // S(7)).value == 6
        assert (3 * S(4)).value == 12
        assert (3 + S(4)).value == 7

    def test_product_overflow_raises(self):
        """A reserve product wider than uint256 is caught."""
        with pytest.raises(AmountOverflowError):
            S(2**200) * S(2**200)

    def test_sum_overflow_raises(self):
        with pytest.raises(AmountOverflowError):
            S(UINT256_MAX) + 1

    def test_underflow_raises(self):
        with pytest.raises(Underflow):
            S(5) - S(6)

    def test_division_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(5) // 0

    def test_errors_are_domain_and_arithmetic(self):
        """SafeInt errors can be caught as engine domain errors or ArithmeticError."""
        with pytest.raises(DomainError):
            S(5) // 0
        with pytest.raises(ArithmeticError):
            S(5) - 6
        with pytest.raises(SafeIntError):
            S(1) - 2

    def test_comparisons(self):
        assert S(3) < S(4)
        assert S(4) <= 4
        assert S(5) > 4
        assert S(5) >= S(5)
        assert S(5) == 5
        assert bool(S(0)) is False

"""Tests for PoolState."""

from fractions import Fraction

import pytest

from ioc_engine.amm.pool import PoolState
from ioc_engine.constants import DEFAULT_FEE_BPS, Q96, UINT256_MAX
from ioc_engine.errors import AmountOverflowError, DomainError
from tests.helpers import CURRENCY0, E18, make_pool


class TestPoolStateValidation:
    """Tests for construction-time validation."""

    def test_defaults(self):
        pool = PoolState(reserve0=100, reserve1=200)
        assert pool.fee_bps == DEFAULT_FEE_BPS
        assert pool.currency0 is None
        assert pool.pool_id is None

    @pytest.mark.parametrize("fee_bps", [-1, 10_000, 20_000])
    def test_fee_out_of_range(self, fee_bps):
        with pytest.raises(DomainError):
            PoolState(reserve0=100, reserve1=100, fee_bps=fee_bps)

    def test_fee_bounds_accepted(self):
        assert PoolState(reserve0=1, reserve1=1, fee_bps=0).fee_multiplier == 10_000
        assert PoolState(reserve0=1, reserve1=1, fee_bps=9_999).fee_multiplier == 1

    def test_negative_reserve(self):
        with pytest.raises(DomainError):
            PoolState(reserve0=-1, reserve1=100)

    def test_reserve_above_uint256(self):
        with pytest.raises(AmountOverflowError):
            PoolState(reserve0=UINT256_MAX + 1, reserve1=100)

    def test_non_int_reserve(self):
        with pytest.raises(DomainError):
            PoolState(reserve0=1.5, reserve1=100)  # type: ignore[arg-type]

    def test_zero_reserve_allowed_but_not_swappable(self):
        pool = PoolState(reserve0=0, reserve1=100)
        assert not pool.is_swappable


class TestPoolStatePricing:
    """Tests for derived prices."""

    def test_price_is_exact_ratio(self):
        pool = make_pool(1100 * E18, 900 * E18)
        assert pool.price == Fraction(11, 9)

    def test_balanced_pool_prices(self):
        pool = make_pool()
        assert pool.price == 1
        assert pool.sqrt_price_x96 == Q96
        assert pool.price_decimal == 1

    def test_price_undefined_for_zero_reserve1(self):
        with pytest.raises(DomainError):
            _ = PoolState(reserve0=100, reserve1=0).price

    def test_k(self):
        assert make_pool(3, 7).k == 21


class TestPoolStateCopies:
    """Tests for clone and with_reserves."""

    def test_clone_is_equal_and_independent(self):
        pool = make_pool(with_ids=True)
        copy = pool.clone()
        assert copy == pool
        assert copy is not pool
        assert copy.currency0 == CURRENCY0

    def test_frozen(self):
        pool = make_pool()
        with pytest.raises(AttributeError):
            pool.reserve0 = 1  # type: ignore[misc]

    def test_with_reserves_keeps_fee_and_ids(self):
        pool = make_pool(with_ids=True)
        updated = pool.with_reserves(1, 2)
        assert (updated.reserve0, updated.reserve1) == (1, 2)
        assert updated.fee_bps == pool.fee_bps
        assert updated.pool_id == pool.pool_id
        assert (pool.reserve0, pool.reserve1) == (1000 * E18, 1000 * E18)

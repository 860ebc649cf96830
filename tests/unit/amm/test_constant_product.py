"""Tests for constant product swap simulation.

Scenario values come from the reference pool simulator: a 1000 / 1000 pool
charging 3000 / 10000 of input, with the full input credited to the reserve
and only the fee-discounted input used inside k.
"""

from fractions import Fraction

import pytest

from ioc_engine.amm.base import Direction, SwapRequest, SwapResult, SwapSimulator
from ioc_engine.amm.constant_product import ConstantProductPool, constant_product
from ioc_engine.amm.pool import PoolState
from ioc_engine.constants import Q96
from ioc_engine.errors import AmountOverflowError, DomainError
from ioc_engine.math.price_codec import price_codec
from tests.helpers import E18, make_pool


class TestGetAmountOut:
    """Tests for the reserve-level swap formula."""

    def test_exact_formula(self):
        """new_out = k // (reserve_in + after_fee), full input credited."""
        amount_out, new_in, new_out = constant_product.get_amount_out(
            100 * E18, 1000 * E18, 1000 * E18, 3000
        )
        expected_new_out = (1000 * E18) ** 2 // (1000 * E18 + 70 * E18)
        assert new_out == expected_new_out
        assert new_in == 1100 * E18
        assert amount_out == 1000 * E18 - expected_new_out

    def test_fee_is_floored(self):
        """after_fee = floor(amount_in * (10000 - fee) / 10000)."""
        # after_fee = floor(3 * 7000 / 10000) = 2
        amount_out, new_in, new_out = constant_product.get_amount_out(3, 100, 100, 3000)
        assert new_out == 10_000 // 102
        assert new_in == 103
        assert amount_out == 100 - new_out

    def test_zero_input(self):
        assert constant_product.get_amount_out(0, 100, 200, 30) == (0, 100, 200)

    def test_non_positive_reserves(self):
        with pytest.raises(DomainError):
            constant_product.get_amount_out(1, 0, 100, 30)
        with pytest.raises(DomainError):
            constant_product.get_amount_out(1, 100, 0, 30)

    def test_product_overflow(self):
        with pytest.raises(AmountOverflowError):
            constant_product.get_amount_out(1, 2**200, 2**200, 30)


class TestSwapScenarios:
    """Reference scenarios on the 1000 / 1000 pool."""

    def test_buy_100(self, pool: PoolState):
        """100 token0 in yields ~65.42 token1 and pushes the price above 1."""
        result = constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 100 * E18))

        assert abs(result.amount_out - 65_42 * E18 // 100) < E18
        assert result.price_after > 1
        assert result.sqrt_price_x96_after > price_codec.encode(1)
        assert result.resulting_pool.reserve0 == 1100 * E18

    def test_sell_100(self, pool: PoolState):
        """100 token1 in is the mirror image: ~65.42 token0 out, price below 1."""
        result = constant_product.swap(pool, SwapRequest(Direction.ONE_FOR_ZERO, 100 * E18))

        assert abs(result.amount_out - 65_42 * E18 // 100) < E18
        assert result.price_after < 1
        assert result.sqrt_price_x96_after < Q96

    def test_large_buy_200(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 200 * E18))
        assert Fraction(13, 10) < result.price_after < Fraction(14, 10)

    def test_large_sell_200(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ONE_FOR_ZERO, 200 * E18))
        assert Fraction(70, 100) < result.price_after < Fraction(75, 100)

    def test_buy_50_stays_below_1_2(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 50 * E18))
        assert 1 < result.price_after < Fraction(6, 5)

    def test_sell_50_stays_above_0_9(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ONE_FOR_ZERO, 50 * E18))
        assert Fraction(9, 10) < result.price_after < 1


class TestSwapSemantics:
    """Tests for swap value semantics and edge cases."""

    def test_zero_amount_is_no_op(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 0))
        assert result.amount_out == 0
        assert result.resulting_pool == pool

    def test_input_pool_unchanged(self, pool: PoolState):
        before = (pool.reserve0, pool.reserve1, pool.fee_bps)
        constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 100 * E18))
        assert (pool.reserve0, pool.reserve1, pool.fee_bps) == before

    def test_result_carries_both_pools(self, pool: PoolState):
        result = constant_product.swap(pool, SwapRequest(Direction.ONE_FOR_ZERO, E18))
        assert isinstance(result, SwapResult)
        assert result.pool_before is pool
        assert result.resulting_pool is not pool
        assert result.price_before == 1

    def test_directions_are_mirror_images(self):
        """Swapping currency1 into (a, b) equals swapping currency0 into (b, a)."""
        forward = constant_product.swap(
            make_pool(700 * E18, 1300 * E18), SwapRequest(Direction.ONE_FOR_ZERO, 37 * E18)
        )
        mirrored = constant_product.swap(
            make_pool(1300 * E18, 700 * E18), SwapRequest(Direction.ZERO_FOR_ONE, 37 * E18)
        )
        assert forward.amount_out == mirrored.amount_out
        assert forward.resulting_pool.reserve0 == mirrored.resulting_pool.reserve1
        assert forward.resulting_pool.reserve1 == mirrored.resulting_pool.reserve0

    def test_ids_survive_swap(self):
        pool = make_pool(with_ids=True)
        result = constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, E18))
        assert result.resulting_pool.pool_id == pool.pool_id
        assert result.resulting_pool.currency1 == pool.currency1

    def test_empty_pool_raises(self):
        with pytest.raises(DomainError):
            constant_product.swap(
                PoolState(reserve0=0, reserve1=100), SwapRequest(Direction.ZERO_FOR_ONE, 1)
            )

    def test_negative_amount_rejected(self):
        with pytest.raises(DomainError):
            SwapRequest(Direction.ZERO_FOR_ONE, -1)

    def test_overflowing_pool_raises(self):
        pool = PoolState(reserve0=2**200, reserve1=2**200)
        with pytest.raises(AmountOverflowError):
            constant_product.swap(pool, SwapRequest(Direction.ZERO_FOR_ONE, 1))

    def test_clone(self, pool: PoolState):
        copy = constant_product.clone(pool)
        assert copy == pool
        assert copy is not pool

    def test_satisfies_simulator_protocol(self):
        assert isinstance(ConstantProductPool(), SwapSimulator)


class TestDirection:
    """Tests for the Direction enum."""

    def test_reverse(self):
        assert Direction.ZERO_FOR_ONE.reverse is Direction.ONE_FOR_ZERO
        assert Direction.ONE_FOR_ZERO.reverse is Direction.ZERO_FOR_ONE

    def test_from_zero_for_one(self):
        assert Direction.from_zero_for_one(True) is Direction.ZERO_FOR_ONE
        assert Direction.from_zero_for_one(False) is Direction.ONE_FOR_ZERO

    def test_parse_from_value(self):
        assert Direction("zeroForOne") is Direction.ZERO_FOR_ONE

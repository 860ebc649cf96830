"""Constant product AMM simulation with a flat proportional fee.

Fee accounting follows the reference pool simulator exactly:

    after_fee  = amount_in * (10000 - fee_bps) // 10000
    k          = reserve_in * reserve_out
    new_in     = reserve_in + amount_in              # full amount credited
    new_out    = k // (reserve_in + after_fee)       # discounted amount in k
    amount_out = reserve_out - new_out

The full input is added to the reserve ledger while only the fee-discounted
input enters the invariant used to derive the counter-reserve. The product
of the resulting reserves therefore drifts away from k; InvariantChecker
bounds how far.
"""

from __future__ import annotations

from ioc_engine.amm.base import Direction, SwapRequest, SwapResult
from ioc_engine.amm.pool import PoolState
from ioc_engine.constants import BPS_DENOMINATOR
from ioc_engine.errors import DomainError
from ioc_engine.math.safe_int import S


class ConstantProductPool:
    """Constant product swap math over immutable PoolState values."""

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
    ) -> tuple[int, int, int]:
        """Apply one exact-input swap to a pair of reserves.

        Args:
            amount_in: Input amount, full (pre-fee)
            reserve_in: Reserve of the input currency
            reserve_out: Reserve of the output currency
            fee_bps: Fee in basis points of 10000

        Returns:
            Tuple of (amount_out, new_reserve_in, new_reserve_out)

        Raises:
            DomainError: If a reserve is not positive
            AmountOverflowError: If an intermediate value exceeds uint256
        """
        if reserve_in <= 0 or reserve_out <= 0:
            raise DomainError(
                f"Cannot swap against non-positive reserves: in={reserve_in}, out={reserve_out}"
            )
        if amount_in == 0:
            return 0, reserve_in, reserve_out

        amount_in_after_fee = S(amount_in) * S(BPS_DENOMINATOR - fee_bps) // S(BPS_DENOMINATOR)
        k = S(reserve_in) * S(reserve_out)
        new_reserve_in = S(reserve_in) + S(amount_in)
        new_reserve_out = k // (S(reserve_in) + amount_in_after_fee)
        amount_out = S(reserve_out) - new_reserve_out

        return amount_out.value, new_reserve_in.value, new_reserve_out.value

    def swap(self, state: PoolState, request: SwapRequest) -> SwapResult:
        """Simulate an exact-input swap.

        A zero amount is a legal no-op: amount_out is 0 and the resulting pool
        equals the input pool.

        Args:
            state: Pool snapshot to swap against (not modified)
            request: Direction and input amount

        Returns:
            SwapResult holding a new PoolState

        Raises:
            DomainError: If either reserve is zero
            AmountOverflowError: If an intermediate value exceeds uint256
        """
        if not state.is_swappable:
            raise DomainError(
                f"Cannot swap against empty pool: reserve0={state.reserve0}, "
                f"reserve1={state.reserve1}"
            )

        if request.direction is Direction.ZERO_FOR_ONE:
            amount_out, new_reserve0, new_reserve1 = self.get_amount_out(
                request.amount_in, state.reserve0, state.reserve1, state.fee_bps
            )
        else:
            amount_out, new_reserve1, new_reserve0 = self.get_amount_out(
                request.amount_in, state.reserve1, state.reserve0, state.fee_bps
            )

        return SwapResult(
            direction=request.direction,
            amount_in=request.amount_in,
            amount_out=amount_out,
            pool_before=state,
            resulting_pool=state.with_reserves(new_reserve0, new_reserve1),
        )

    def clone(self, state: PoolState) -> PoolState:
        """Return an independent copy of a pool state."""
        return state.clone()


# Singleton instance
constant_product = ConstantProductPool()

__all__ = ["ConstantProductPool", "constant_product"]

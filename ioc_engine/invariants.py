"""Invariant checks over simulated swaps.

Used by the verification layer only; execution code never calls these.
Every check returns a CheckResult instead of raising, so callers decide
whether a failure is fatal.

Checks:
- constant_product_drift: k after the swap stays inside the band the fee
  rule allows. The full input is credited to the reserve while only the
  discounted input enters k, and the output reserve is floored, so
      k_before - new_reserve_in <= k_after
      k_after * (reserve_in + after_fee) <= k_before * new_reserve_in
- price_monotonicity: price moves in the direction of the swap (strictly
  for positive input, not at all for zero input)
- reserve_accounting: input reserve grows by amount_in, output reserve
  shrinks by amount_out
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ioc_engine.amm.base import Direction, SwapRequest, SwapResult, SwapSimulator
from ioc_engine.amm.constant_product import constant_product
from ioc_engine.amm.pool import PoolState
from ioc_engine.constants import BPS_DENOMINATOR
from ioc_engine.errors import PriceOverflowError


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one invariant check.

    Attributes:
        name: Check identifier
        passed: True if the invariant holds
        detail: Human-readable explanation when the check fails
        deltas: Numeric values behind the verdict
    """

    name: str
    passed: bool
    detail: str | None = None
    deltas: dict[str, int | Decimal | None] = field(default_factory=dict)


@dataclass(frozen=True)
class InvariantReport:
    """All checks for one (pre_state, swap result) pair."""

    checks: tuple[CheckResult, ...]

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failures(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.passed]

    def get(self, name: str) -> CheckResult | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None


def _side_reserves(pool: PoolState, direction: Direction) -> tuple[int, int]:
    """Reserves ordered as (reserve_in, reserve_out)."""
    if direction is Direction.ZERO_FOR_ONE:
        return pool.reserve0, pool.reserve1
    return pool.reserve1, pool.reserve0


def _encoded_price(pool: PoolState) -> int | None:
    """sqrtPriceX96 of a pool, or None if the price cannot be encoded."""
    if not pool.is_swappable:
        return None
    try:
        return pool.sqrt_price_x96
    except PriceOverflowError:
        return None


def check_constant_product_drift(
    pre_state: PoolState,
    request: SwapRequest,
    result: SwapResult,
) -> CheckResult:
    pool = result.resulting_pool
    k_before = pre_state.reserve0 * pre_state.reserve1
    k_after = pool.reserve0 * pool.reserve1
    delta = k_after - k_before
    drift_bps = Decimal(delta * BPS_DENOMINATOR) / Decimal(k_before) if k_before else Decimal(0)

    reserve_in, _ = _side_reserves(pre_state, request.direction)
    new_reserve_in, _ = _side_reserves(pool, request.direction)
    after_fee = request.amount_in * pre_state.fee_multiplier // BPS_DENOMINATOR

    lower = k_before - new_reserve_in
    deltas: dict[str, int | Decimal] = {
        "k_before": k_before,
        "k_after": k_after,
        "delta": delta,
        "drift_bps": drift_bps,
        "lower_bound": lower,
    }

    if request.amount_in == 0:
        if k_after != k_before:
            return CheckResult(
                "constant_product_drift", False, "k changed on a zero-amount swap", deltas
            )
        return CheckResult("constant_product_drift", True, deltas=deltas)

    if k_after < lower:
        return CheckResult(
            "constant_product_drift",
            False,
            f"k fell by {-delta}, more than floor rounding allows ({new_reserve_in})",
            deltas,
        )
    if k_after * (reserve_in + after_fee) > k_before * new_reserve_in:
        return CheckResult(
            "constant_product_drift",
            False,
            "k grew more than the fee credited to the input reserve allows",
            deltas,
        )
    return CheckResult("constant_product_drift", True, deltas=deltas)


def check_price_monotonicity(
    pre_state: PoolState,
    request: SwapRequest,
    result: SwapResult,
) -> CheckResult:
    pool = result.resulting_pool
    # price = reserve0 / reserve1, compared by cross-multiplication
    before = pre_state.reserve0 * pool.reserve1
    after = pool.reserve0 * pre_state.reserve1
    deltas: dict[str, int | Decimal | None] = {
        "sqrt_price_before": _encoded_price(pre_state),
        "sqrt_price_after": _encoded_price(pool),
    }

    if request.amount_in == 0:
        passed = before == after
        detail = None if passed else "price moved on a zero-amount swap"
    elif request.direction is Direction.ZERO_FOR_ONE:
        passed = after > before
        detail = None if passed else "price did not rise on a zeroForOne swap"
    else:
        passed = after < before
        detail = None if passed else "price did not fall on a oneForZero swap"
    return CheckResult("price_monotonicity", passed, detail, deltas)


def check_reserve_accounting(
    pre_state: PoolState,
    request: SwapRequest,
    result: SwapResult,
) -> CheckResult:
    reserve_in, reserve_out = _side_reserves(pre_state, request.direction)
    new_reserve_in, new_reserve_out = _side_reserves(result.resulting_pool, request.direction)
    deltas: dict[str, int | Decimal] = {
        "reserve_in_delta": new_reserve_in - reserve_in,
        "reserve_out_delta": reserve_out - new_reserve_out,
    }
    if new_reserve_in - reserve_in != request.amount_in:
        return CheckResult(
            "reserve_accounting", False, "input reserve did not grow by amount_in", deltas
        )
    if reserve_out - new_reserve_out != result.amount_out:
        return CheckResult(
            "reserve_accounting", False, "output reserve did not shrink by amount_out", deltas
        )
    if result.resulting_pool.fee_bps != pre_state.fee_bps:
        return CheckResult("reserve_accounting", False, "fee changed across swap", deltas)
    return CheckResult("reserve_accounting", True, deltas=deltas)


def check_swap(pre_state: PoolState, request: SwapRequest, result: SwapResult) -> InvariantReport:
    """Run every swap invariant check."""
    return InvariantReport(
        checks=(
            check_constant_product_drift(pre_state, request, result),
            check_price_monotonicity(pre_state, request, result),
            check_reserve_accounting(pre_state, request, result),
        )
    )


def check_round_trip(
    state: PoolState,
    direction: Direction,
    amount_in: int,
    simulator: SwapSimulator | None = None,
    tolerance: int = 0,
) -> CheckResult:
    """Swap one way, swap the proceeds back, and check nothing was gained.

    Args:
        state: Starting pool
        direction: First swap direction
        amount_in: First swap input
        simulator: Swap model (default: constant product)
        tolerance: Base units of gain accepted as rounding

    Returns:
        CheckResult passing when the returned amount <= amount_in + tolerance
    """
    simulator = simulator or constant_product
    forward = simulator.swap(simulator.clone(state), SwapRequest(direction, amount_in))
    backward = simulator.swap(
        forward.resulting_pool, SwapRequest(direction.reverse, forward.amount_out)
    )
    gain = backward.amount_out - amount_in
    deltas: dict[str, int | Decimal] = {
        "amount_in": amount_in,
        "intermediate_out": forward.amount_out,
        "returned": backward.amount_out,
        "gain": gain,
    }
    if gain > tolerance:
        return CheckResult("round_trip", False, f"round trip returned {gain} more than paid", deltas)
    return CheckResult("round_trip", True, deltas=deltas)


class InvariantChecker:
    """Bundles the swap checks behind one object for test harnesses."""

    def __init__(self, simulator: SwapSimulator | None = None) -> None:
        self.simulator = simulator or constant_product

    def check(self, pre_state: PoolState, request: SwapRequest, result: SwapResult) -> InvariantReport:
        return check_swap(pre_state, request, result)

    def simulate_and_check(self, state: PoolState, request: SwapRequest) -> InvariantReport:
        result = self.simulator.swap(self.simulator.clone(state), request)
        return check_swap(state, request, result)

    def round_trip(self, state: PoolState, direction: Direction, amount_in: int) -> CheckResult:
        return check_round_trip(state, direction, amount_in, self.simulator)


__all__ = [
    "CheckResult",
    "InvariantReport",
    "InvariantChecker",
    "check_swap",
    "check_constant_product_drift",
    "check_price_monotonicity",
    "check_reserve_accounting",
    "check_round_trip",
]

"""Off-chain planning helpers built on swap simulation and IOC execution.

These answer the questions a planner asks before submitting an order:
how far does a trade move the price, how much fills under each of several
limits, and how much input moves the pool to a given price.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, localcontext
from fractions import Fraction

from ioc_engine.amm.base import Direction, SwapRequest, SwapSimulator
from ioc_engine.amm.constant_product import constant_product
from ioc_engine.amm.pool import PoolState
from ioc_engine.ioc.executor import IOCExecutor, ioc_executor
from ioc_engine.ioc.types import FillOutcome, LimitOrder
from ioc_engine.math.price_codec import DECODE_PRECISION, PriceLike, to_price

# Upper bound on search-range doublings in amount_to_reach_price
MAX_BOUND_DOUBLINGS = 256


@dataclass(frozen=True)
class PriceImpact:
    """Price movement caused by one swap.

    Attributes:
        amount_in: Input amount
        amount_out: Output received
        price_before: Pool price before the swap
        price_after: Pool price after the swap, or None if reserve1 was
            drained
        impact_pct: Relative price change in percent (signed; Infinity
            when price_after is None)
        effective_price: Input paid per unit of output, or None if nothing
            came out
    """

    amount_in: int
    amount_out: int
    price_before: Fraction
    price_after: Fraction | None
    impact_pct: Decimal
    effective_price: Fraction | None


@dataclass(frozen=True)
class LadderRow:
    """One limit of a limit ladder and the fill it allows."""

    limit: Fraction
    outcome: FillOutcome


def price_impact(
    state: PoolState,
    request: SwapRequest,
    simulator: SwapSimulator | None = None,
) -> PriceImpact:
    """Measure how far a swap moves the pool price.

    A swap that drains reserve1 leaves the price unbounded: price_after is
    None and impact_pct is Decimal("Infinity").
    """
    simulator = simulator or constant_product
    result = simulator.swap(simulator.clone(state), request)
    before = result.price_before

    after = None
    impact_pct = Decimal("Infinity")
    if result.resulting_pool.reserve1 > 0:
        after = result.price_after
        change = (after / before - 1) * 100
        with localcontext() as ctx:
            ctx.prec = DECODE_PRECISION
            impact_pct = Decimal(change.numerator) / Decimal(change.denominator)

    effective = None
    if result.amount_out > 0:
        effective = Fraction(result.amount_in, result.amount_out)

    return PriceImpact(
        amount_in=result.amount_in,
        amount_out=result.amount_out,
        price_before=before,
        price_after=after,
        impact_pct=impact_pct,
        effective_price=effective,
    )


def limit_ladder(
    state: PoolState,
    direction: Direction,
    limits: Iterable[PriceLike],
    requested_amount_in: int,
    executor: IOCExecutor | None = None,
) -> list[LadderRow]:
    """Execute the same requested amount under each limit.

    Rows keep the order of ``limits``. Each execution starts from ``state``.
    """
    executor = executor or ioc_executor
    rows = []
    for limit in limits:
        order = LimitOrder(direction, requested_amount_in, to_price(limit))
        rows.append(LadderRow(limit=order.price_limit, outcome=executor.execute(state, order)))
    return rows


def amount_to_reach_price(
    state: PoolState,
    direction: Direction,
    target: PriceLike,
    upper_bound: int | None = None,
    executor: IOCExecutor | None = None,
) -> int:
    """Largest input that moves the pool price up to, but not beyond, target.

    Without an upper bound, the search range starts at the input-side reserve
    and doubles until the target is crossed.

    Returns:
        Input amount; 0 if the pool is already at or beyond the target
    """
    executor = executor or ioc_executor
    target_price = to_price(target)

    if upper_bound is not None:
        return executor.execute(state, LimitOrder(direction, upper_bound, target_price)).filled_amount_in

    bound = state.reserve0 if direction is Direction.ZERO_FOR_ONE else state.reserve1
    outcome = executor.execute(state, LimitOrder(direction, bound, target_price))
    doublings = 0
    while outcome.is_full_fill and doublings < MAX_BOUND_DOUBLINGS:
        bound *= 2
        doublings += 1
        outcome = executor.execute(state, LimitOrder(direction, bound, target_price))
    return outcome.filled_amount_in


__all__ = [
    "PriceImpact",
    "LadderRow",
    "price_impact",
    "limit_ladder",
    "amount_to_reach_price",
    "MAX_BOUND_DOUBLINGS",
]

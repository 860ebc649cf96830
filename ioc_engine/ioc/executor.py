"""Immediate-or-cancel execution against a single constant-product pool.

The post-swap price is monotonic in the input amount (non-decreasing for
ZERO_FOR_ONE, non-increasing for ONE_FOR_ZERO), so the largest input that
keeps the price on the trader's side of the limit is found by integer
bisection over [0, requested_amount_in]:

1. Pool already beyond the limit: nothing fills.
2. Full amount stays within the limit: everything fills.
3. Smallest positive amount already crosses: nothing fills.
4. Otherwise bisect with low (within limit) and high (crossed) until
   high - low <= min_granularity or max_iterations is reached.

Every trial runs on a clone of the input snapshot. The reported outcome is
recomputed from one swap of the final amount against the original snapshot.
"""

from __future__ import annotations

import structlog

from ioc_engine.amm.base import SwapRequest, SwapResult, SwapSimulator
from ioc_engine.amm.constant_product import constant_product
from ioc_engine.amm.pool import PoolState
from ioc_engine.config import DEFAULT_EXECUTOR_CONFIG, ExecutorConfig
from ioc_engine.errors import ConvergenceWarning, DomainError
from ioc_engine.ioc.types import FillOutcome, FillReason, LimitOrder

logger = structlog.get_logger()

# Smallest positive input probed before bisecting
MIN_PROBE_AMOUNT = 1


class IOCExecutor:
    """Splits limit orders into filled and cancelled input.

    Args:
        simulator: Swap model used for trials (default: constant product)
        config: Search bounds (default: DEFAULT_EXECUTOR_CONFIG)
    """

    def __init__(
        self,
        simulator: SwapSimulator | None = None,
        config: ExecutorConfig | None = None,
    ) -> None:
        self.simulator = simulator or constant_product
        self.config = config or DEFAULT_EXECUTOR_CONFIG

    def execute(self, state: PoolState, order: LimitOrder) -> FillOutcome:
        """Fill as much of an order as the price limit allows.

        Args:
            state: Pool snapshot (not modified)
            order: IOC order with direction, requested amount and limit

        Returns:
            FillOutcome with filled + cancelled == requested

        Raises:
            DomainError: If the pool has a zero reserve
            AmountOverflowError: Propagated from swap simulation
        """
        if not state.is_swappable:
            raise DomainError(
                f"Cannot execute against empty pool: reserve0={state.reserve0}, "
                f"reserve1={state.reserve1}"
            )

        requested = order.requested_amount_in

        if order.is_crossed_by(state):
            logger.debug(
                "ioc_limit_already_crossed",
                direction=order.direction.value,
                price=str(state.price),
                limit=str(order.price_limit),
            )
            return self._unfilled(state, order, FillReason.LIMIT_ALREADY_CROSSED)

        full = self._trial(state, order, requested)
        if not order.is_crossed_by(full.resulting_pool):
            logger.debug("ioc_full_fill", direction=order.direction.value, amount_in=requested)
            return self._filled(order, full, FillReason.FULL)

        probe_amount = min(MIN_PROBE_AMOUNT, requested)
        probe = self._trial(state, order, probe_amount)
        if order.is_crossed_by(probe.resulting_pool):
            logger.debug(
                "ioc_no_liquidity_within_limit",
                direction=order.direction.value,
                limit=str(order.price_limit),
            )
            return self._unfilled(state, order, FillReason.NO_LIQUIDITY_WITHIN_LIMIT)

        low, high, iterations = self._bisect(state, order, probe_amount, requested)

        warning = None
        gap = high - low
        if gap > self.config.min_granularity:
            warning = ConvergenceWarning(iterations, gap, self.config.min_granularity)
            logger.warning(
                "ioc_search_not_converged",
                iterations=iterations,
                gap=gap,
                tolerance=self.config.min_granularity,
                filled_amount_in=low,
            )

        # Authoritative result: one swap of the final amount on the original snapshot
        final = self.simulator.swap(state, SwapRequest(order.direction, low))
        logger.debug(
            "ioc_partial_fill",
            direction=order.direction.value,
            requested=requested,
            filled=low,
            iterations=iterations,
        )
        return self._filled(order, final, FillReason.PARTIAL, iterations, warning)

    def _bisect(
        self,
        state: PoolState,
        order: LimitOrder,
        low: int,
        high: int,
    ) -> tuple[int, int, int]:
        """Narrow [low, high] where low stays within the limit and high crosses."""
        iterations = 0
        while high - low > self.config.min_granularity and iterations < self.config.max_iterations:
            mid = (low + high) // 2
            trial = self._trial(state, order, mid)
            iterations += 1
            if order.is_crossed_by(trial.resulting_pool):
                high = mid
            else:
                low = mid
        return low, high, iterations

    def _trial(self, state: PoolState, order: LimitOrder, amount_in: int) -> SwapResult:
        snapshot = self.simulator.clone(state)
        return self.simulator.swap(snapshot, SwapRequest(order.direction, amount_in))

    @staticmethod
    def _filled(
        order: LimitOrder,
        result: SwapResult,
        reason: FillReason,
        iterations: int = 0,
        warning: ConvergenceWarning | None = None,
    ) -> FillOutcome:
        return FillOutcome(
            order=order,
            filled_amount_in=result.amount_in,
            cancelled_amount_in=order.requested_amount_in - result.amount_in,
            amount_out=result.amount_out,
            final_pool=result.resulting_pool,
            reason=reason,
            iterations=iterations,
            convergence_warning=warning,
        )

    @staticmethod
    def _unfilled(state: PoolState, order: LimitOrder, reason: FillReason) -> FillOutcome:
        return FillOutcome(
            order=order,
            filled_amount_in=0,
            cancelled_amount_in=order.requested_amount_in,
            amount_out=0,
            final_pool=state,
            reason=reason,
        )


# Singleton instance
ioc_executor = IOCExecutor()


def execute_ioc(
    state: PoolState,
    order: LimitOrder,
    config: ExecutorConfig | None = None,
) -> FillOutcome:
    """Execute an IOC order with the constant product simulator."""
    if config is None:
        return ioc_executor.execute(state, order)
    return IOCExecutor(config=config).execute(state, order)


__all__ = ["IOCExecutor", "ioc_executor", "execute_ioc", "MIN_PROBE_AMOUNT"]

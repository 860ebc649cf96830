"""Limit order and fill outcome types for IOC execution."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction

from ioc_engine.amm.base import Direction
from ioc_engine.amm.pool import PoolState
from ioc_engine.errors import ConvergenceWarning, DomainError
from ioc_engine.math.price_codec import price_codec, to_price


@dataclass(frozen=True)
class LimitOrder:
    """Immediate-or-cancel intent against one pool.

    Trade up to requested_amount_in, but stop before the pool price crosses
    price_limit in the direction adverse to the trader:
    - ZERO_FOR_ONE pays currency0 and pushes the price up; the limit is a
      maximum price
    - ONE_FOR_ZERO pays currency1 and pushes the price down; the limit is a
      minimum price

    A price exactly equal to the limit is not crossed. A limit that cannot
    be encoded as sqrtPriceX96 (above ~2^128 or below ~2^-192) raises
    PriceOverflowError at construction.

    Attributes:
        direction: Which currency is paid in
        requested_amount_in: Maximum input, in base units
        price_limit: Limit price (currency0 per currency1); any PriceLike
            value is normalized to an exact Fraction
    """

    direction: Direction
    requested_amount_in: int
    price_limit: Fraction

    def __post_init__(self) -> None:
        """Normalize the limit and validate positivity and encodability."""
        if not isinstance(self.price_limit, Fraction):
            object.__setattr__(self, "price_limit", to_price(self.price_limit))
        if isinstance(self.requested_amount_in, bool) or not isinstance(
            self.requested_amount_in, int
        ):
            raise DomainError(
                f"requested_amount_in must be an int, got {type(self.requested_amount_in).__name__}"
            )
        if self.requested_amount_in <= 0:
            raise DomainError(
                f"requested_amount_in must be positive, got {self.requested_amount_in}"
            )
        if self.price_limit <= 0:
            raise DomainError(f"price_limit must be positive, got {self.price_limit}")
        # Settlement receives the limit as sqrtPriceX96; it must fit uint160
        price_codec.encode(self.price_limit)

    @classmethod
    def from_sqrt_price_x96(
        cls,
        direction: Direction,
        requested_amount_in: int,
        sqrt_price_limit_x96: int,
    ) -> LimitOrder:
        """Build an order whose limit arrives already encoded."""
        return cls(
            direction=direction,
            requested_amount_in=requested_amount_in,
            price_limit=price_codec.decode_exact(sqrt_price_limit_x96),
        )

    @property
    def sqrt_price_limit_x96(self) -> int:
        """Limit encoded for the settlement layer."""
        return price_codec.encode(self.price_limit)

    def is_crossed_by(self, pool: PoolState) -> bool:
        """Check whether a pool's price lies strictly beyond the limit.

        Uses exact cross-multiplication, so pools with a drained reserve
        (price zero or unbounded) compare correctly.
        """
        lhs = pool.reserve0 * self.price_limit.denominator
        rhs = self.price_limit.numerator * pool.reserve1
        if self.direction is Direction.ZERO_FOR_ONE:
            return lhs > rhs
        return lhs < rhs


class FillReason(str, Enum):
    """Why an IOC order filled the way it did."""

    FULL = "full"
    PARTIAL = "partial"
    LIMIT_ALREADY_CROSSED = "limit_already_crossed"
    NO_LIQUIDITY_WITHIN_LIMIT = "no_liquidity_within_limit"


@dataclass(frozen=True)
class ExactInputSingleParams:
    """Values a settlement encoder needs to submit the filled part.

    amount_out_minimum is 0: the price limit, not a slippage floor, bounds
    the execution.
    """

    zero_for_one: bool
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int
    fee_bps: int
    currency_in: str | None = None
    currency_out: str | None = None
    pool_id: str | None = None


@dataclass(frozen=True)
class FillOutcome:
    """Split of an IOC order into filled and cancelled input.

    Attributes:
        order: The order that was executed
        filled_amount_in: Input applied to the pool
        cancelled_amount_in: Input returned unexecuted
        amount_out: Output received for filled_amount_in
        final_pool: Pool after the filled swap (the input pool if nothing filled)
        reason: Classification of the fill
        iterations: Bisection steps taken (0 when no search was needed)
        convergence_warning: Set when the iteration cap stopped the search
            before the tolerance was reached; the fill is then a
            conservative lower bound
    """

    order: LimitOrder
    filled_amount_in: int
    cancelled_amount_in: int
    amount_out: int
    final_pool: PoolState
    reason: FillReason
    iterations: int = 0
    convergence_warning: ConvergenceWarning | None = None

    def __post_init__(self) -> None:
        """Validate the fill split."""
        if self.filled_amount_in < 0 or self.cancelled_amount_in < 0:
            raise DomainError("Fill amounts cannot be negative")
        if self.filled_amount_in + self.cancelled_amount_in != self.order.requested_amount_in:
            raise DomainError(
                f"Fill split {self.filled_amount_in} + {self.cancelled_amount_in} "
                f"!= requested {self.order.requested_amount_in}"
            )

    @property
    def is_full_fill(self) -> bool:
        return self.cancelled_amount_in == 0

    @property
    def is_partial_fill(self) -> bool:
        return self.filled_amount_in > 0 and self.cancelled_amount_in > 0

    @property
    def is_unfilled(self) -> bool:
        return self.filled_amount_in == 0

    @property
    def converged(self) -> bool:
        """True unless the search stopped at the iteration cap."""
        return self.convergence_warning is None

    @property
    def fill_ratio(self) -> Decimal:
        """Filled share of the requested input, 0 to 1."""
        return Decimal(self.filled_amount_in) / Decimal(self.order.requested_amount_in)

    @property
    def final_price(self) -> Fraction:
        return self.final_pool.price

    def to_swap_params(self) -> ExactInputSingleParams:
        """Hand-off values for the settlement layer."""
        zero_for_one = self.order.direction.zero_for_one
        pool = self.final_pool
        return ExactInputSingleParams(
            zero_for_one=zero_for_one,
            amount_in=self.filled_amount_in,
            amount_out_minimum=0,
            sqrt_price_limit_x96=self.order.sqrt_price_limit_x96,
            fee_bps=pool.fee_bps,
            currency_in=pool.currency0 if zero_for_one else pool.currency1,
            currency_out=pool.currency1 if zero_for_one else pool.currency0,
            pool_id=pool.pool_id,
        )


__all__ = [
    "LimitOrder",
    "FillReason",
    "FillOutcome",
    "ExactInputSingleParams",
]

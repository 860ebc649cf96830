"""Base types for swap simulation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Protocol, runtime_checkable

from ioc_engine.amm.pool import PoolState
from ioc_engine.errors import DomainError


class Direction(str, Enum):
    """Which currency is paid into the pool."""

    ZERO_FOR_ONE = "zeroForOne"  # currency0 in, currency1 out; price rises
    ONE_FOR_ZERO = "oneForZero"  # currency1 in, currency0 out; price falls

    @property
    def zero_for_one(self) -> bool:
        return self is Direction.ZERO_FOR_ONE

    @property
    def reverse(self) -> Direction:
        if self is Direction.ZERO_FOR_ONE:
            return Direction.ONE_FOR_ZERO
        return Direction.ZERO_FOR_ONE

    @classmethod
    def from_zero_for_one(cls, zero_for_one: bool) -> Direction:
        return cls.ZERO_FOR_ONE if zero_for_one else cls.ONE_FOR_ZERO


@dataclass(frozen=True)
class SwapRequest:
    """An exact-input swap against one pool."""

    direction: Direction
    amount_in: int

    def __post_init__(self) -> None:
        """Validate amount is a non-negative int."""
        if isinstance(self.amount_in, bool) or not isinstance(self.amount_in, int):
            raise DomainError(f"amount_in must be an int, got {type(self.amount_in).__name__}")
        if self.amount_in < 0:
            raise DomainError(f"amount_in cannot be negative, got {self.amount_in}")


@dataclass(frozen=True)
class SwapResult:
    """Result of simulating a swap through a pool.

    Both pools are independent values; the caller owns them.
    """

    direction: Direction
    amount_in: int
    amount_out: int
    pool_before: PoolState
    resulting_pool: PoolState

    @property
    def price_before(self) -> Fraction:
        return self.pool_before.price

    @property
    def price_after(self) -> Fraction:
        return self.resulting_pool.price

    @property
    def sqrt_price_x96_after(self) -> int:
        return self.resulting_pool.sqrt_price_x96


@runtime_checkable
class SwapSimulator(Protocol):
    """Protocol for single-pool swap simulators.

    The IOC executor only needs an exact-input swap and a clone operation,
    so any pool model offering both can drive the search.
    """

    def swap(self, state: PoolState, request: SwapRequest) -> SwapResult:
        """Simulate an exact-input swap, returning a new pool state."""
        ...

    def clone(self, state: PoolState) -> PoolState:
        """Return an independent copy of a pool state."""
        ...


__all__ = ["Direction", "SwapRequest", "SwapResult", "SwapSimulator"]

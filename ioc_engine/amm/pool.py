"""PoolState: reserve snapshot of a single constant-product pair."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, localcontext
from fractions import Fraction

from ioc_engine.constants import BPS_DENOMINATOR, DEFAULT_FEE_BPS, UINT256_MAX
from ioc_engine.errors import AmountOverflowError, DomainError
from ioc_engine.math.price_codec import DECODE_PRECISION, price_codec


@dataclass(frozen=True)
class PoolState:
    """Immutable reserves and fee of one pool version.

    Every simulated swap produces a new PoolState; reserve0 and reserve1 are
    never updated independently. Identifiers are opaque values passed through
    from the chain-state provider and do not take part in pricing.

    Attributes:
        reserve0: Reserve of currency0 in base units
        reserve1: Reserve of currency1 in base units
        fee_bps: Fee as a fraction of input, in basis points of 10000
        currency0: Optional currency0 identifier
        currency1: Optional currency1 identifier
        pool_id: Optional pool identifier
    """

    reserve0: int
    reserve1: int
    fee_bps: int = DEFAULT_FEE_BPS
    currency0: str | None = None
    currency1: str | None = None
    pool_id: str | None = None

    def __post_init__(self) -> None:
        """Validate reserve and fee ranges."""
        for name in ("reserve0", "reserve1", "fee_bps"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DomainError(f"{name} must be an int, got {type(value).__name__}")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise DomainError(
                f"Reserves cannot be negative: reserve0={self.reserve0}, reserve1={self.reserve1}"
            )
        if self.reserve0 > UINT256_MAX or self.reserve1 > UINT256_MAX:
            raise AmountOverflowError("Reserve exceeds uint256")
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            raise DomainError(f"fee_bps must be in [0, {BPS_DENOMINATOR}), got {self.fee_bps}")

    @property
    def fee_multiplier(self) -> int:
        """Share of input kept after the fee, in basis points (10000 - fee_bps)."""
        return BPS_DENOMINATOR - self.fee_bps

    @property
    def is_swappable(self) -> bool:
        """True if both reserves are positive."""
        return self.reserve0 > 0 and self.reserve1 > 0

    @property
    def price(self) -> Fraction:
        """Exact price: currency0 per unit of currency1.

        Raises:
            DomainError: If reserve1 is zero
        """
        if self.reserve1 == 0:
            raise DomainError("Price undefined for a pool with zero reserve1")
        return Fraction(self.reserve0, self.reserve1)

    @property
    def price_decimal(self) -> Decimal:
        """Price rendered as Decimal for display."""
        price = self.price
        with localcontext() as ctx:
            ctx.prec = DECODE_PRECISION
            return Decimal(price.numerator) / Decimal(price.denominator)

    @property
    def sqrt_price_x96(self) -> int:
        """Current price encoded as sqrtPriceX96."""
        return price_codec.encode_reserves(self.reserve0, self.reserve1)

    @property
    def k(self) -> int:
        """Constant product reserve0 * reserve1."""
        return self.reserve0 * self.reserve1

    def with_reserves(self, reserve0: int, reserve1: int) -> PoolState:
        """Return a new version of this pool with both reserves replaced."""
        return replace(self, reserve0=reserve0, reserve1=reserve1)

    def clone(self) -> PoolState:
        """Return an independent copy of this pool."""
        return replace(self)


__all__ = ["PoolState"]

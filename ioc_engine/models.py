"""Pydantic models for data crossing the engine boundary.

The chain-state provider delivers pool reserves as uint256 decimal strings
(JSON cannot carry them as numbers safely); planners submit orders the same
way. These models validate that payload and convert it to engine types.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from ioc_engine.amm.base import Direction
from ioc_engine.amm.pool import PoolState
from ioc_engine.constants import BPS_DENOMINATOR, DEFAULT_FEE_BPS, UINT160_MAX, UINT256_MAX
from ioc_engine.ioc.types import LimitOrder
from ioc_engine.math.price_codec import to_price


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return str(int_value)


# Currency or contract address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


class PoolSnapshot(BaseModel):
    """Pool reserves and fee as reported by the chain-state provider."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    reserve0: Uint256
    reserve1: Uint256
    fee_bps: int = Field(default=DEFAULT_FEE_BPS, alias="feeBps", ge=0, lt=BPS_DENOMINATOR)
    currency0: Address | None = None
    currency1: Address | None = None
    pool_id: str | None = Field(default=None, alias="poolId")

    def to_state(self) -> PoolState:
        """Convert to the engine's PoolState."""
        return PoolState(
            reserve0=int(self.reserve0),
            reserve1=int(self.reserve1),
            fee_bps=self.fee_bps,
            currency0=self.currency0.lower() if self.currency0 else None,
            currency1=self.currency1.lower() if self.currency1 else None,
            pool_id=self.pool_id,
        )


class LimitOrderRequest(BaseModel):
    """IOC order as submitted by a planner.

    Exactly one of price_limit (decimal string, currency0 per currency1) or
    sqrt_price_limit_x96 must be given.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    direction: Direction
    requested_amount_in: Uint256 = Field(alias="requestedAmountIn")
    price_limit: Decimal | None = Field(default=None, alias="priceLimit", gt=0)
    sqrt_price_limit_x96: int | None = Field(
        default=None, alias="sqrtPriceLimitX96", gt=0, le=UINT160_MAX
    )

    @model_validator(mode="after")
    def check_one_limit(self) -> LimitOrderRequest:
        if (self.price_limit is None) == (self.sqrt_price_limit_x96 is None):
            raise ValueError("Provide exactly one of priceLimit or sqrtPriceLimitX96")
        return self

    def to_order(self) -> LimitOrder:
        """Convert to the engine's LimitOrder."""
        amount = int(self.requested_amount_in)
        if self.sqrt_price_limit_x96 is not None:
            return LimitOrder.from_sqrt_price_x96(self.direction, amount, self.sqrt_price_limit_x96)
        return LimitOrder(self.direction, amount, to_price(self.price_limit))


__all__ = [
    "validate_uint256",
    "Address",
    "Uint256",
    "PoolSnapshot",
    "LimitOrderRequest",
]

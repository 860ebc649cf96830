"""Constant product AMM implementation."""

from ioc_engine.amm.base import Direction, SwapRequest, SwapResult, SwapSimulator
from ioc_engine.amm.constant_product import ConstantProductPool, constant_product
from ioc_engine.amm.pool import PoolState

__all__ = [
    # Base types
    "Direction",
    "SwapRequest",
    "SwapResult",
    "SwapSimulator",
    # Pool
    "PoolState",
    "ConstantProductPool",
    "constant_product",
]

"""Immediate-or-cancel limit order execution."""

from ioc_engine.ioc.executor import IOCExecutor, execute_ioc, ioc_executor
from ioc_engine.ioc.planning import (
    LadderRow,
    PriceImpact,
    amount_to_reach_price,
    limit_ladder,
    price_impact,
)
from ioc_engine.ioc.types import ExactInputSingleParams, FillOutcome, FillReason, LimitOrder

__all__ = [
    # Types
    "LimitOrder",
    "FillOutcome",
    "FillReason",
    "ExactInputSingleParams",
    # Executor
    "IOCExecutor",
    "ioc_executor",
    "execute_ioc",
    # Planning
    "PriceImpact",
    "LadderRow",
    "price_impact",
    "limit_ladder",
    "amount_to_reach_price",
]

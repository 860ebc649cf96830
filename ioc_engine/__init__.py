"""IOC limit order engine for constant product AMM pools."""

from ioc_engine.amm import ConstantProductPool, Direction, PoolState, SwapRequest, SwapResult
from ioc_engine.config import DEFAULT_EXECUTOR_CONFIG, ExecutorConfig
from ioc_engine.errors import (
    AmountOverflowError,
    ConvergenceWarning,
    DomainError,
    EngineOverflowError,
    IOCEngineError,
    PriceOverflowError,
)
from ioc_engine.invariants import InvariantChecker, InvariantReport
from ioc_engine.ioc import FillOutcome, FillReason, IOCExecutor, LimitOrder, execute_ioc
from ioc_engine.math import PriceCodec, price_codec

__version__ = "0.1.0"
__all__ = [
    "PoolState",
    "Direction",
    "SwapRequest",
    "SwapResult",
    "ConstantProductPool",
    "PriceCodec",
    "price_codec",
    "LimitOrder",
    "FillOutcome",
    "FillReason",
    "IOCExecutor",
    "execute_ioc",
    "ExecutorConfig",
    "DEFAULT_EXECUTOR_CONFIG",
    "InvariantChecker",
    "InvariantReport",
    "IOCEngineError",
    "DomainError",
    "EngineOverflowError",
    "AmountOverflowError",
    "PriceOverflowError",
    "ConvergenceWarning",
    "__version__",
]

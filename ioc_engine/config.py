"""Configuration for the IOC executor."""

from dataclasses import dataclass

from ioc_engine.constants import DEFAULT_MAX_ITERATIONS, DEFAULT_MIN_GRANULARITY
from ioc_engine.errors import DomainError


@dataclass(frozen=True)
class ExecutorConfig:
    """Bounds for the IOC fill search.

    The search stops when the gap between the largest known non-crossing
    amount and the smallest known crossing amount is at most
    min_granularity, or after max_iterations bisection steps, whichever
    comes first.

    Attributes:
        max_iterations: Hard cap on bisection steps (default: 128)
        min_granularity: Smallest meaningful input amount, in base units
            (default: 1)
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    min_granularity: int = DEFAULT_MIN_GRANULARITY

    def __post_init__(self) -> None:
        """Validate bounds are positive."""
        if self.max_iterations <= 0:
            raise DomainError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.min_granularity <= 0:
            raise DomainError(f"min_granularity must be positive, got {self.min_granularity}")


# Default configuration instance
DEFAULT_EXECUTOR_CONFIG = ExecutorConfig()

__all__ = ["ExecutorConfig", "DEFAULT_EXECUTOR_CONFIG"]

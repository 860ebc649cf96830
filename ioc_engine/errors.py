"""Error classes for the IOC engine.

Domain and overflow errors are raised to the immediate caller.
ConvergenceWarning is never raised by the executor; it is attached to the
FillOutcome it qualifies.
"""


class IOCEngineError(Exception):
    """Base error for engine operations."""

    pass


class DomainError(IOCEngineError, ValueError):
    """Input outside the operation's domain.

    Non-positive reserves, fee outside [0, 10000), non-positive requested
    amount or price limit.
    """

    pass


class EngineOverflowError(IOCEngineError, OverflowError):
    """Arithmetic exceeded the representable integer width."""

    pass


class AmountOverflowError(EngineOverflowError):
    """Amount, reserve or product exceeds uint256."""

    pass


class PriceOverflowError(EngineOverflowError):
    """Encoded sqrt price does not fit in uint160 or floors to zero."""

    pass


class ConvergenceWarning(UserWarning):
    """Bisection hit its iteration cap before reaching the tolerance.

    The accompanying fill is the best conservative bound found, not an
    exact maximum.
    """

    def __init__(self, iterations: int, gap: int, tolerance: int) -> None:
        self.iterations = iterations
        self.gap = gap
        self.tolerance = tolerance
        super().__init__(
            f"IOC search stopped after {iterations} iterations with gap {gap} "
            f"(tolerance {tolerance})"
        )


__all__ = [
    "IOCEngineError",
    "DomainError",
    "EngineOverflowError",
    "AmountOverflowError",
    "PriceOverflowError",
    "ConvergenceWarning",
]

"""Width-checked integer wrapper for reserve and price arithmetic.

Python integers never overflow, but the values produced here are consumed by
a settlement layer with fixed-width registers. SafeInt makes the width an
explicit part of every intermediate result:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Any sum or product wider than uint256 raises AmountOverflowError

Usage pattern:
    from ioc_engine.math.safe_int import S

    def constant_product(reserve_in: int, reserve_out: int) -> int:
        # Wrap at entry
        k = S(reserve_in) * S(reserve_out)  # Raises if k > 2^256 - 1
        # Unwrap at exit
        return k.value
"""

from __future__ import annotations

from ioc_engine.constants import UINT256_MAX
from ioc_engine.errors import AmountOverflowError, DomainError


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError, DomainError):
    """Division by zero (a drained or empty reserve)."""

    pass


class Underflow(SafeIntError, DomainError):
    """Subtraction would produce a negative result."""

    pass


class SafeInt:
    """Non-negative integer bounded by uint256.

    Every arithmetic result is validated against [0, 2^256 - 1], so an
    intermediate product such as reserve0 * reserve1 cannot silently exceed
    what the settlement layer can represent.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected)
            Underflow: If value is negative
            AmountOverflowError: If value exceeds uint256
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = _check_width(value)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value


def _check_width(value: int) -> int:
    if value < 0:
        raise Underflow(f"Negative amount: {value}")
    if value > UINT256_MAX:
        raise AmountOverflowError(f"Value exceeds uint256 max: {value}")
    return value


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

__all__ = ["SafeInt", "S", "SafeIntError", "DivisionByZero", "Underflow"]

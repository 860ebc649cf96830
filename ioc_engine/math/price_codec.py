"""Price representation and sqrtPriceX96 fixed-point conversion.

A pool price is reserve0 / reserve1: the amount of currency0 paid per unit of
currency1. Prices cross the engine boundary in two forms:

- an exact rational (fractions.Fraction) used for limit comparisons
- sqrtPriceX96 = floor(sqrt(price) * 2^96), the integer a settlement layer
  checks a price bound against

The encoding is computed exactly with an integer square root of
price * 2^192, so it always floors and is never rounded up by float error.
Decoding is lossy only in the Decimal form; decode_exact recovers the
rational x^2 / 2^192 that the encoded integer represents.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from math import isqrt

from ioc_engine.constants import Q96, Q192, UINT160_MAX
from ioc_engine.errors import DomainError, PriceOverflowError

# Digits used when rendering a decoded price as Decimal
DECODE_PRECISION = 50

PriceLike = Fraction | Decimal | int | float | str


def to_price(value: PriceLike) -> Fraction:
    """Normalize a caller-supplied price to an exact Fraction.

    Floats go through their shortest repr so that 1.2 means exactly 6/5,
    not the nearest binary double.

    Raises:
        DomainError: If the value cannot be parsed or is not finite
    """
    if isinstance(value, bool):
        raise DomainError(f"Price must be numeric, got {value!r}")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, float):
        parsed = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as err:
            raise DomainError(f"Invalid price: {value!r}") from err
    else:
        raise DomainError(f"Unsupported price type: {type(value).__name__}")

    if not parsed.is_finite():
        raise DomainError(f"Price must be finite, got {parsed}")
    return Fraction(parsed)


class PriceCodec:
    """Bidirectional conversion between prices and sqrtPriceX96.

    Stateless; the module-level ``price_codec`` instance is shared.
    """

    def encode(self, price: PriceLike) -> int:
        """Encode a price ratio as floor(sqrt(price) * 2^96).

        Args:
            price: Positive price (currency0 per currency1)

        Returns:
            sqrtPriceX96 as an integer

        Raises:
            DomainError: If price <= 0
            PriceOverflowError: If the result exceeds uint160, or the price
                is so small that its encoding floors to zero
        """
        ratio = to_price(price)
        if ratio <= 0:
            raise DomainError(f"Price must be positive, got {ratio}")
        return self._encode_ratio(ratio.numerator, ratio.denominator)

    def encode_reserves(self, reserve0: int, reserve1: int) -> int:
        """Encode the price of a pool directly from its reserves.

        Raises:
            DomainError: If either reserve is not positive
            PriceOverflowError: If the result does not fit the encoding
        """
        if reserve0 <= 0 or reserve1 <= 0:
            raise DomainError(
                f"Reserves must be positive to price a pool: {reserve0}, {reserve1}"
            )
        return self._encode_ratio(reserve0, reserve1)

    def decode(self, sqrt_price_x96: int) -> Decimal:
        """Decode sqrtPriceX96 to an approximate Decimal price.

        Intended for diagnostics and display; precision is bounded by the
        2^96 scaling, so decode(encode(p)) is at most p.
        """
        exact = self.decode_exact(sqrt_price_x96)
        with localcontext() as ctx:
            ctx.prec = DECODE_PRECISION
            return Decimal(exact.numerator) / Decimal(exact.denominator)

    def decode_exact(self, sqrt_price_x96: int) -> Fraction:
        """Decode sqrtPriceX96 to the exact rational it represents.

        Raises:
            DomainError: If the value is negative
            PriceOverflowError: If the value exceeds uint160
        """
        if sqrt_price_x96 < 0:
            raise DomainError(f"sqrtPriceX96 cannot be negative: {sqrt_price_x96}")
        if sqrt_price_x96 > UINT160_MAX:
            raise PriceOverflowError(f"sqrtPriceX96 exceeds uint160: {sqrt_price_x96}")
        return Fraction(sqrt_price_x96 * sqrt_price_x96, Q192)

    @staticmethod
    def compare(a: int, b: int) -> int:
        """Order two encoded prices: -1 if a < b, 0 if equal, 1 if a > b."""
        return (a > b) - (a < b)

    def _encode_ratio(self, numerator: int, denominator: int) -> int:
        # floor(sqrt(floor(y))) == floor(sqrt(y)) for y >= 0
        encoded = isqrt(numerator * Q192 // denominator)
        if encoded > UINT160_MAX:
            raise PriceOverflowError(
                f"sqrtPriceX96 exceeds uint160 for price {numerator}/{denominator}"
            )
        if encoded == 0:
            raise PriceOverflowError(
                f"Price {numerator}/{denominator} is below sqrtPriceX96 resolution"
            )
        return encoded


# Singleton instance
price_codec = PriceCodec()


__all__ = [
    "PriceCodec",
    "PriceLike",
    "price_codec",
    "to_price",
    "DECODE_PRECISION",
]

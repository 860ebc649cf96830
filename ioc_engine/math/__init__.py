"""Mathematical utilities for the IOC engine.

This package provides the numeric primitives behind swap simulation:
- SafeInt: uint256 width-checked integer arithmetic
- PriceCodec: sqrtPriceX96 fixed-point price encoding
"""

from ioc_engine.math.price_codec import PriceCodec, price_codec, to_price
from ioc_engine.math.safe_int import S, SafeInt

__all__ = ["PriceCodec", "price_codec", "to_price", "SafeInt", "S"]

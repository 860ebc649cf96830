"""Numeric constants shared by the pricing and execution modules.

Widths mirror the settlement layer that enforces price limits on-chain.
"""

# Fee denominator: fee_bps / BPS_DENOMINATOR is the fraction of input kept as fee
BPS_DENOMINATOR = 10_000

# Fee used by the reference pool simulator (3000 / 10000 of input)
DEFAULT_FEE_BPS = 3000

# sqrtPriceX96 fixed-point scale
Q96 = 2**96
Q192 = Q96 * Q96

# Integer widths
UINT160_MAX = 2**160 - 1
UINT256_MAX = 2**256 - 1

# Base units per whole token for 18-decimal currencies
ONE_ETHER = 10**18

# IOC search defaults
DEFAULT_MAX_ITERATIONS = 128
DEFAULT_MIN_GRANULARITY = 1

__all__ = [
    "BPS_DENOMINATOR",
    "DEFAULT_FEE_BPS",
    "Q96",
    "Q192",
    "UINT160_MAX",
    "UINT256_MAX",
    "ONE_ETHER",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MIN_GRANULARITY",
]

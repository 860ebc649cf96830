"""Test helpers module for shared test utilities.

- constants: Currency identifiers and common amounts
- factories: Pool and order factory functions
"""

from tests.helpers.constants import CURRENCY0, CURRENCY1, E18, POOL_ID, REFERENCE_FEE_BPS
from tests.helpers.factories import make_order, make_pool

__all__ = [
    # Constants
    "E18",
    "CURRENCY0",
    "CURRENCY1",
    "POOL_ID",
    "REFERENCE_FEE_BPS",
    # Factories
    "make_pool",
    "make_order",
]

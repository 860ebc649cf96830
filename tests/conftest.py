"""Pytest configuration and fixtures."""

from dataclasses import dataclass, field

import pytest

from ioc_engine.amm.base import SwapRequest, SwapResult
from ioc_engine.amm.constant_product import ConstantProductPool
from ioc_engine.amm.pool import PoolState
from tests.helpers import make_pool


@pytest.fixture
def pool() -> PoolState:
    """Fresh 1000 / 1000 reference pool with the reference fee."""
    return make_pool()


# =============================================================================
# Recording simulator for dependency injection
# =============================================================================


@dataclass
class RecordingSimulator:
    """Constant product simulator that records every call.

    Usage:
        sim = RecordingSimulator()
        IOCExecutor(simulator=sim).execute(pool, order)
        assert sim.clone_calls == len(sim.swap_calls) - 1
    """

    inner: ConstantProductPool = field(default_factory=ConstantProductPool)
    swap_calls: list[tuple[PoolState, SwapRequest]] = field(default_factory=list)
    cloned: list[PoolState] = field(default_factory=list)

    @property
    def clone_calls(self) -> int:
        return len(self.cloned)

    def swap(self, state: PoolState, request: SwapRequest) -> SwapResult:
        self.swap_calls.append((state, request))
        return self.inner.swap(state, request)

    def clone(self, state: PoolState) -> PoolState:
        copy = self.inner.clone(state)
        self.cloned.append(copy)
        return copy


@pytest.fixture
def recording_simulator() -> RecordingSimulator:
    return RecordingSimulator()

"""Test fixtures for model lifecycle testing."""

from .engine_mocks import (
    AllocationCounter,
    CountingEngine,
    create_counting_engine_factory,
    create_failing_engine_factory,
)

__all__ = [
    'AllocationCounter',
    'CountingEngine',
    'create_counting_engine_factory',
    'create_failing_engine_factory',
]

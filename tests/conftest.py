"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from safelp import Model
from tests.fixtures.engine_mocks import create_counting_engine_factory


DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    """Directory holding the instance files used by the tests."""
    return DATA_DIR


@pytest.fixture
def counting_factory():
    """Fixture for a counting engine factory and its allocation counter."""
    return create_counting_engine_factory()


@pytest.fixture
def counting_model(counting_factory):
    """Fixture for a model backed by the in-memory counting engine."""
    factory, _ = counting_factory
    model = Model(engine_factory=factory)
    yield model
    model.close()


@pytest.fixture
def highs_model():
    """Fixture for an empty model backed by HiGHS."""
    model = Model()
    yield model
    model.close()


@pytest.fixture
def round_trip_model():
    """Fixture for the two-column, one-row instance used across HiGHS tests.

    max x + y  s.t.  1 <= x + y <= 5,  0 <= x <= 5,  0 <= y <= 10
    """
    model = Model()
    model.add_col(objective=1.0, lower_bound=0.0, upper_bound=5.0)
    model.add_col(objective=1.0, lower_bound=0.0, upper_bound=10.0)
    model.add_row([1.0, 1.0], lhs=1.0, rhs=5.0)
    yield model
    model.close()

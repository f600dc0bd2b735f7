"""
Pytest Configuration and Fixtures
"""

import pytest

from shuttle import Shuttle
from shuttle.models.testing import (
    EchoModel,
    ProgrammableModel,
    define_echo_model,
    define_programmable_model,
)


@pytest.fixture
def ai() -> Shuttle:
    """Returns a fresh engine with no default model."""
    return Shuttle()


@pytest.fixture
def echo_model(ai: Shuttle) -> EchoModel:
    return define_echo_model(ai)


@pytest.fixture
def pm(ai: Shuttle) -> ProgrammableModel:
    return define_programmable_model(ai)

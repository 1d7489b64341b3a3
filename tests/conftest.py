"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from deccalc import Calculator
from deccalc.constants import SCALE_ENV_VAR


@pytest.fixture(autouse=True)
def _clear_scale_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DECCALC_SCALE from leaking into tests."""
    monkeypatch.delenv(SCALE_ENV_VAR, raising=False)


@pytest.fixture
def calculator() -> Calculator:
    """A calculator with the default scale (15)."""
    return Calculator()


@pytest.fixture
def make_calculator() -> Callable[[int], Calculator]:
    """Factory for calculators with an explicit scale.

    Usage:
        def test_something(make_calculator):
            calc = make_calculator(2)
    """

    def _make(scale: int) -> Calculator:
        return Calculator(scale=scale)

    return _make

"""Shared fixtures for runsummary tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from runsummary.model.identifier import Identifier
from runsummary.model.plan import TestPlan

DATA_DIR = Path(__file__).parent / "data"


class FakeClock:
    """Manually advanced wall clock (seconds)."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def containers() -> List[Identifier]:
    return [Identifier.container(f"c{i}") for i in range(1, 5)]


@pytest.fixture
def tests() -> List[Identifier]:
    return [Identifier.test(f"t{i}") for i in range(1, 5)]


@pytest.fixture
def flat_plan(containers: List[Identifier], tests: List[Identifier]) -> TestPlan:
    """Four containers followed by four tests, all roots."""
    return TestPlan.from_identifiers(containers + tests)

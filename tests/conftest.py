# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List

import pytest

from typedfsm import TransitionOutcome


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "concurrency: mark test as exercising concurrent callers")


class OutcomeRecorder:
    """Observer callback that records every outcome it receives."""

    def __init__(self) -> None:
        self.outcomes: List[TransitionOutcome] = []

    def __call__(self, outcome: TransitionOutcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture
def recorder() -> OutcomeRecorder:
    return OutcomeRecorder()

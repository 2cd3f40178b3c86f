# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pickle

import pytest

from typedfsm import (
    ConfigurationError,
    FSMError,
    HandlerFault,
    InvalidTransition,
    PayloadMismatchError,
    RecursionDetectedError,
)


@pytest.mark.parametrize(
    "error_cls", [ConfigurationError, HandlerFault, InvalidTransition, PayloadMismatchError, RecursionDetectedError]
)
def test_error_hierarchy(error_cls):
    assert issubclass(error_cls, FSMError)


def test_exceptions_instantiation():
    assert str(ConfigurationError("Duplicate state")) == "Duplicate state"
    assert str(RecursionDetectedError("Recursion")) == "Recursion"
    assert str(HandlerFault("Bad handler")) == "Bad handler"


def test_payload_mismatch_error_attributes():
    e = PayloadMismatchError("locked", int, "abc")
    assert e.value == "locked"
    assert e.expected_type is int
    assert e.actual == "abc"
    assert "str" in str(e) and "int" in str(e)


def test_invalid_transition_carries_state_and_event():
    e = InvalidTransition("idle", "stop")
    assert e.from_state == "idle"
    assert e.event == "stop"
    assert "idle" in str(e)


def test_invalid_transition_structural_equality():
    assert InvalidTransition("idle", "stop") == InvalidTransition("idle", "stop")
    assert InvalidTransition("idle", "stop") != InvalidTransition("idle", "go")
    assert hash(InvalidTransition("idle", "stop")) == hash(InvalidTransition("idle", "stop"))


def test_invalid_transition_pickles():
    e = pickle.loads(pickle.dumps(InvalidTransition("idle", "stop")))
    assert e == InvalidTransition("idle", "stop")

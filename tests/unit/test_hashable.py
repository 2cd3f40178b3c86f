# tests/unit/test_hashable.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from enum import Enum

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.machines import Broken, InsertCoin, Locked, Phase, TurnstileState, Unlocked
from typedfsm import PayloadMismatchError, StateMachineHashable, cast_payload, identifier_of, payload_of


class Tag(Enum):
    RED = "red"
    GREEN = "green"


class Light(StateMachineHashable):
    pass


@dataclass(frozen=True)
class Blinking(Light):
    tag: Tag
    period: float

    @property
    def hashable_identifier(self):
        return self.tag


class Mode(StateMachineHashable, Enum):
    IDLE = "idle"
    BUSY = "busy"


@dataclass(frozen=True)
class Plain:
    x: int
    y: int


# -----------------------------------------------------------------------------
# DISCRIMINANTS
# -----------------------------------------------------------------------------
def test_dataclass_variant_keyed_by_class():
    assert identifier_of(Locked(credit=10)) is Locked
    assert identifier_of(Locked(credit=10)) == identifier_of(Locked(credit=99))
    assert identifier_of(Unlocked()) is Unlocked


def test_variant_class_is_its_own_discriminant():
    assert identifier_of(Locked) is Locked


def test_enum_member_is_its_own_discriminant():
    assert identifier_of(Phase.ONE) is Phase.ONE
    assert identifier_of(Phase.ONE) != identifier_of(Phase.TWO)


def test_hashable_enum_member_is_its_own_discriminant():
    assert Mode.IDLE.hashable_identifier is Mode.IDLE
    assert identifier_of(Mode.BUSY) is Mode.BUSY
    assert identifier_of(Mode.IDLE) != identifier_of(Mode.BUSY)
    assert payload_of(Mode.IDLE) is None


def test_custom_hashable_identifier():
    assert identifier_of(Blinking(Tag.RED, 0.5)) is Tag.RED
    assert identifier_of(Blinking(Tag.RED, 0.5)) == identifier_of(Blinking(Tag.RED, 2.0))


def test_plain_dataclass_keyed_by_class():
    assert identifier_of(Plain(1, 2)) is Plain


def test_hashable_value_is_its_own_discriminant():
    assert identifier_of("idle") == "idle"
    assert identifier_of(3) == 3


def test_unhashable_value_falls_back_to_type():
    assert identifier_of([1, 2]) is list


def test_recursive_payload_does_not_affect_discriminant():
    nested = Broken(old_state=Broken(old_state=Locked(credit=5)))
    assert identifier_of(nested) is Broken


# -----------------------------------------------------------------------------
# PAYLOADS
# -----------------------------------------------------------------------------
def test_single_field_payload():
    assert Locked(credit=25).associated_value == 25
    assert payload_of(InsertCoin(10)) == 10


def test_no_field_payload_is_none():
    assert Unlocked().associated_value is None
    assert payload_of(Phase.ONE) is None
    assert payload_of("idle") is None


def test_multi_field_payload_is_tuple():
    assert payload_of(Plain(1, 2)) == (1, 2)
    assert Blinking(Tag.GREEN, 1.5).associated_value == (Tag.GREEN, 1.5)


def test_nested_state_payload():
    assert Broken(old_state=Locked(credit=15)).associated_value_as(TurnstileState) == Locked(credit=15)


def test_cast_payload_mismatch_raises_typed_error():
    with pytest.raises(PayloadMismatchError) as exc_info:
        Unlocked().associated_value_as(int)
    assert exc_info.value.expected_type is int
    assert exc_info.value.actual is None


def test_cast_payload_function():
    assert cast_payload(InsertCoin(5), int) == 5
    with pytest.raises(PayloadMismatchError):
        cast_payload(Broken(old_state=Unlocked()), int)


# -----------------------------------------------------------------------------
# EQUALITY
# -----------------------------------------------------------------------------
@given(a=st.integers(), b=st.integers())
def test_equality_is_structural_while_identity_ignores_payload(a, b):
    assert (Locked(credit=a) == Locked(credit=b)) == (a == b)
    assert identifier_of(Locked(credit=a)) == identifier_of(Locked(credit=b))


def test_variants_with_same_payload_are_not_equal():
    assert Locked(credit=0) != Unlocked()
    assert Broken(old_state=Locked(credit=1)) != Broken(old_state=Locked(credit=2))

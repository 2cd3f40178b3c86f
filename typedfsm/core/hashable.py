# typedfsm/core/hashable.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Identity projection for states and events.

States and events are usually tagged unions: a small base class with one frozen
dataclass per variant, or an ``Enum``. The graph indexes handlers by the
variant alone (the *discriminant*), while tests and observers compare complete
values. Variants may carry arbitrary, even recursive, payloads, so the payload
never takes part in the lookup key.
"""

import dataclasses
from enum import Enum
from typing import Any, Hashable, Type, TypeVar

from typedfsm.core.errors import PayloadMismatchError

T = TypeVar("T")


class StateMachineHashable:
    """
    Mixin for state and event base classes.

    Subclasses are expected to be (frozen) dataclasses, one per variant, or
    enums. The default discriminant is the concrete class for dataclasses and
    the member itself for enums; override ``hashable_identifier`` to group
    several classes under one key or to key on an enum tag instead.
    """

    __slots__ = ()

    @property
    def hashable_identifier(self) -> Hashable:
        """The discriminant used to look up handlers for this value."""
        if isinstance(self, Enum):
            return self
        return type(self)

    @property
    def associated_value(self) -> Any:
        """
        The payload carried by this variant: the sole field value, a tuple when
        there are several fields, ``None`` when there are none.
        """
        return _dataclass_payload(self)

    def associated_value_as(self, expected_type: Type[T]) -> T:
        """
        Return the payload, checking it is an instance of ``expected_type``.

        :raises PayloadMismatchError: If the payload has another type.
        """
        return cast_payload(self, expected_type)


def _dataclass_payload(value: Any) -> Any:
    if not dataclasses.is_dataclass(value):
        return None
    fields = dataclasses.fields(value)
    if not fields:
        return None
    if len(fields) == 1:
        return getattr(value, fields[0].name)
    return tuple(getattr(value, f.name) for f in fields)


def identifier_of(value: Any) -> Hashable:
    """
    Project a state or event (or a variant class) onto its discriminant.

    - ``StateMachineHashable`` instances use ``hashable_identifier``.
    - Enum members and classes are their own discriminant.
    - Other dataclass instances are keyed by their class.
    - Any other hashable value is its own discriminant; unhashable values fall
      back to their type.
    """
    if isinstance(value, StateMachineHashable):
        return value.hashable_identifier
    if isinstance(value, (Enum, type)):
        return value
    if dataclasses.is_dataclass(value):
        return type(value)
    try:
        hash(value)
    except TypeError:
        return type(value)
    return value


def payload_of(value: Any) -> Any:
    """Return the associated value carried by a state or event, or ``None``."""
    if isinstance(value, StateMachineHashable):
        return value.associated_value
    if isinstance(value, Enum):
        return None
    return _dataclass_payload(value)


def cast_payload(value: Any, expected_type: Type[T]) -> T:
    """
    Defensive payload extraction for handlers.

    :param value: The state or event whose payload is needed.
    :param expected_type: The type the handler assumes the payload has.
    :raises PayloadMismatchError: If the payload is not an ``expected_type``.
    """
    payload = payload_of(value)
    if not isinstance(payload, expected_type):
        raise PayloadMismatchError(value, expected_type, payload)
    return payload

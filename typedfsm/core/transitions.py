# typedfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from typedfsm.core.errors import FSMError
from typedfsm.core.hashable import identifier_of

S = TypeVar("S")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True)
class ValidTransition(Generic[S, E, F]):
    """
    Record of one successful transition attempt. ``to_state`` equals
    ``from_state`` when the handler chose not to transition.
    """

    from_state: S
    event: E
    to_state: S
    side_effect: Optional[F] = None


class InvalidTransition(FSMError):
    """
    Raised (and broadcast to observers) when the current state has no handler
    for the event. This is routine control flow, not a defect.
    """

    def __init__(self, from_state: Any, event: Any) -> None:
        super().__init__(f"Invalid transition from {from_state!r} on {event!r}")
        self.from_state = from_state
        self.event = event

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidTransition):
            return NotImplemented
        return self.from_state == other.from_state and self.event == other.event

    def __hash__(self) -> int:
        return hash((identifier_of(self.from_state), identifier_of(self.event)))

    def __reduce__(self):
        return (type(self), (self.from_state, self.event))


class HandlerResult:
    """Base class for values an event handler may return."""

    __slots__ = ()


@dataclass(frozen=True)
class Transition(HandlerResult):
    """Move to ``to_state``, optionally emitting a side effect."""

    to_state: Any
    side_effect: Any = None


@dataclass(frozen=True)
class NoTransition(HandlerResult):
    """Stay in the current state; the attempt still counts as valid."""

    side_effect: Any = None


@dataclass(frozen=True)
class TransitionOutcome:
    """
    What observers receive for every transition attempt: either a
    ``ValidTransition`` (success) or an ``InvalidTransition`` (failure).
    """

    transition: Optional[ValidTransition] = None
    error: Optional[InvalidTransition] = None

    def __post_init__(self) -> None:
        if (self.transition is None) == (self.error is None):
            raise ValueError("TransitionOutcome needs exactly one of transition or error")

    @classmethod
    def success(cls, transition: ValidTransition) -> "TransitionOutcome":
        return cls(transition=transition)

    @classmethod
    def failure(cls, error: InvalidTransition) -> "TransitionOutcome":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.transition is not None

    def unwrap(self) -> ValidTransition:
        """Return the valid transition or raise the invalid one."""
        if self.error is not None:
            raise self.error
        return self.transition

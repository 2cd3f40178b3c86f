# typedfsm/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Fluent authoring surface producing the ordered state definitions a
``TransitionGraph`` is built from.

    machine = (
        StateMachineBuilder()
        .initial_state(Locked(credit=0))
        .state(Locked)
        .on(InsertCoin, insert_coin)
        .on(AdmitPerson, dont_transition(emit=SoundAlarm()))
        .state(Unlocked)
        .on(AdmitPerson, transition_to(Locked(credit=0), emit=CloseDoors()))
        .build()
    )

Handlers may take ``()``, ``(state)`` or ``(state, event)`` and must return a
``Transition`` or ``NoTransition``.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Hashable, List, Optional, Tuple

from typedfsm.core.errors import ConfigurationError
from typedfsm.core.hashable import identifier_of
from typedfsm.core.transitions import HandlerResult, NoTransition, Transition
from typedfsm.runtime.graph import EventHandler, Handler, StateDefinition, TransitionGraph
from typedfsm.runtime.machine import StateMachine

_MISSING = object()


def transition_to(state: Any, emit: Any = None) -> Callable[[], HandlerResult]:
    """Handler that always moves to ``state``, emitting ``emit``."""
    return lambda: Transition(state, emit)


def dont_transition(emit: Any = None) -> Callable[[], HandlerResult]:
    """Handler that stays in the current state, emitting ``emit``."""
    return lambda: NoTransition(emit)


def _positional_arity(fn: Callable[..., Any]) -> int:
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return 2
    count = 0
    for p in parameters:
        if p.kind == p.VAR_POSITIONAL:
            return 2
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            count += 1
    return min(count, 2)


def adapt_handler(fn: Any) -> Handler:
    """
    Normalise a handler to the ``(state, event)`` shape the graph expects.
    A bare ``HandlerResult`` is accepted as a constant handler.
    """
    if isinstance(fn, HandlerResult):
        return lambda state, event: fn
    if not callable(fn):
        raise ConfigurationError(f"{fn!r} is neither a handler nor a HandlerResult")
    arity = _positional_arity(fn)
    if arity == 0:
        return lambda state, event: fn()
    if arity == 1:
        return lambda state, event: fn(state)
    return fn


class StateMachineBuilder:
    """
    Collects an initial state and ordered state definitions. Validation of the
    collected definitions happens in ``TransitionGraph.build``.
    """

    def __init__(self) -> None:
        self._initial_state: Any = _MISSING
        self._definitions: List[Tuple[Hashable, List[EventHandler]]] = []

    def initial_state(self, state: Any) -> "StateMachineBuilder":
        self._initial_state = state
        return self

    def state(self, state: Any) -> "StateMachineBuilder":
        """
        Start a definition for ``state``. Pass a variant class, an enum member,
        a plain value, or an instance whose discriminant should be used.
        """
        self._definitions.append((identifier_of(state), []))
        return self

    def on(self, event: Any, handler: Any) -> "StateMachineBuilder":
        """Bind ``handler`` to ``event`` in the most recently started state."""
        if not self._definitions:
            raise ConfigurationError(f"on({event!r}) called before any state()")
        self._definitions[-1][1].append(EventHandler(identifier_of(event), adapt_handler(handler)))
        return self

    def definitions(self) -> Tuple[StateDefinition, ...]:
        return tuple(StateDefinition(state, tuple(handlers)) for state, handlers in self._definitions)

    def build_graph(self) -> TransitionGraph:
        """
        :raises ConfigurationError: If no initial state was given, or the
            definitions are malformed.
        """
        if self._initial_state is _MISSING:
            raise ConfigurationError("No initial state was given")
        return TransitionGraph.build(self._initial_state, self.definitions())

    def build(self, logger: Optional[logging.Logger] = None) -> StateMachine:
        return StateMachine(self.build_graph(), logger=logger)

# typedfsm/runtime/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from contextvars import ContextVar
from typing import Any, FrozenSet, Generic, Hashable, Iterable, Optional, TypeVar

from typedfsm.core.errors import HandlerFault, RecursionDetectedError
from typedfsm.core.transitions import InvalidTransition, TransitionOutcome, ValidTransition
from typedfsm.runtime.executor import TransitionExecutor
from typedfsm.runtime.graph import DefinitionLike, TransitionGraph
from typedfsm.runtime.machine_status import MachineStatus
from typedfsm.runtime.observers import ObserverCallback, ObserverRegistry

S = TypeVar("S")
E = TypeVar("E")
F = TypeVar("F")

# Tokens of the transitions the current call chain is nested in. Tasks created
# inside a transition copy this, so they count as part of the same chain.
_active_transitions: ContextVar[FrozenSet[object]] = ContextVar("typedfsm_active_transitions", default=frozenset())


class StateMachine(Generic[S, E, F]):
    """
    Drives one automaton over an immutable ``TransitionGraph``.

    Transitions are serialized with an ``asyncio.Lock``: concurrent callers wait
    their turn, while a caller already nested inside an in-flight transition of
    this machine (an observer calling back into ``transition``) is rejected with
    ``RecursionDetectedError`` instead of deadlocking.
    """

    def __init__(
        self,
        graph: TransitionGraph,
        executor: Optional[TransitionExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        :param graph: The fully built transition graph; its initial state becomes the current state.
        :param executor: Optional executor; a plain ``TransitionExecutor`` by default.
        :param logger: Optional logger; defaults to this module's logger.
        """
        self._graph = graph
        self._state: S = graph.initial_state
        self._executor = executor or TransitionExecutor()
        self._observers = ObserverRegistry()
        self._logger = logger or logging.getLogger(__name__)
        self._guard = asyncio.Lock()
        self._in_flight: Optional[object] = None

    @classmethod
    def build(cls, initial_state: S, state_definitions: Iterable[DefinitionLike], **kwargs: Any) -> "StateMachine":
        """Build the graph from ``state_definitions`` and wrap it in a machine."""
        return cls(TransitionGraph.build(initial_state, state_definitions), **kwargs)

    @property
    def current_state(self) -> S:
        """The last committed state. Safe to read while a transition is in flight."""
        return self._state

    @property
    def status(self) -> MachineStatus:
        return MachineStatus.IDLE if self._in_flight is None else MachineStatus.TRANSITION_IN_FLIGHT

    @property
    def graph(self) -> TransitionGraph:
        return self._graph

    async def transition(self, event: E) -> ValidTransition[S, E, F]:
        """
        Attempt ``event`` against the current state.

        :return: The valid transition; the new state is already committed.
        :raises InvalidTransition: No handler for ``event`` in the current state.
        :raises RecursionDetectedError: Called from within this machine's own in-flight transition.
        :raises HandlerFault: The handler failed; state is unchanged and nothing is broadcast.
        """
        if self._in_flight is not None and self._in_flight in _active_transitions.get():
            self._logger.error("Recursive transition on %r with %r while in state %r", self, event, self._state)
            raise RecursionDetectedError(f"Recursive transition with {event!r} detected")

        async with self._guard:
            token = object()
            self._in_flight = token
            context_token = _active_transitions.set(_active_transitions.get() | {token})
            try:
                return await self._run(event)
            finally:
                _active_transitions.reset(context_token)
                self._in_flight = None

    async def _run(self, event: E) -> ValidTransition[S, E, F]:
        try:
            result = self._executor.execute(self._graph, self._state, event)
        except HandlerFault as e:
            self._logger.error("Handler fault in state %r on %r: %s", self._state, event, e)
            raise

        if isinstance(result, InvalidTransition):
            self._logger.warning("Invalid transition from %r on %r", result.from_state, result.event)
            await self._observers.broadcast(TransitionOutcome.failure(result))
            raise result

        self._state = result.to_state
        self._logger.debug(
            "Transition %r --%r--> %r (side effect %r)",
            result.from_state,
            result.event,
            result.to_state,
            result.side_effect,
        )
        await self._observers.broadcast(TransitionOutcome.success(result))
        return result

    def start_observing(self, identity: Hashable, callback: ObserverCallback) -> "StateMachine[S, E, F]":
        """
        Register ``callback`` under ``identity`` (replacing any previous one)
        and return the machine for chaining.
        """
        self._observers.subscribe(identity, callback)
        return self

    def stop_observing(self, identity: Hashable) -> None:
        """Remove the observer registered under ``identity``, if any."""
        self._observers.unsubscribe(identity)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self._state!r} status={self.status.name}>"

# typedfsm/runtime/executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Optional, Union

from typedfsm.core.errors import HandlerFault
from typedfsm.core.hashable import identifier_of
from typedfsm.core.transitions import InvalidTransition, NoTransition, Transition, ValidTransition
from typedfsm.runtime.graph import EventHandler, TransitionGraph


class TransitionExecutor:
    """
    Resolves a single transition attempt against a graph. Holds no state of its
    own; the runtime decides what to do with the result.
    """

    def execute(
        self, graph: TransitionGraph, current_state: Any, event: Any
    ) -> Union[ValidTransition, InvalidTransition]:
        """
        Evaluate the first handler bound to ``event`` in ``current_state``.

        :param graph: The transition graph to consult.
        :param current_state: The last committed state.
        :param event: The incoming event.
        :return: A ``ValidTransition``, or an ``InvalidTransition`` when no handler
            matches or the matching handler raises ``InvalidTransition``.
        :raises HandlerFault: If the handler raises or returns something other
            than a ``Transition``/``NoTransition``.
        """
        binding = self._select(graph, current_state, event)
        if binding is None:
            return InvalidTransition(current_state, event)

        try:
            result = binding.handler(current_state, event)
        except InvalidTransition:
            # Guard rejected the event
            return InvalidTransition(current_state, event)
        except Exception as e:
            raise HandlerFault(f"Handler for {event!r} in {current_state!r} failed: {e}") from e

        if isinstance(result, Transition):
            return ValidTransition(current_state, event, result.to_state, result.side_effect)
        if isinstance(result, NoTransition):
            return ValidTransition(current_state, event, current_state, result.side_effect)
        raise HandlerFault(f"Handler for {event!r} in {current_state!r} returned {result!r}, not a HandlerResult")

    def _select(self, graph: TransitionGraph, current_state: Any, event: Any) -> Optional[EventHandler]:
        for binding in graph.handlers_for(identifier_of(current_state)):
            if binding.matches(event):
                return binding
        return None

"""typedfsm: a small, strongly-typed finite state machine engine.

A machine is built from an initial state and ordered state definitions, each
binding event discriminants to handlers. Handlers compute a ``Transition`` or
``NoTransition`` (optionally emitting a side effect). The runtime serializes
transitions, rejects recursive re-entry from observers, and broadcasts every
attempt, valid or invalid, to registered observers.

Error Handling:
    - ``InvalidTransition``: no handler matched; routine, broadcast to observers
    - ``RecursionDetectedError``: observer re-entered ``transition``; not broadcast
    - ``HandlerFault``: handler logic failed; not broadcast, state unchanged

Logging:
    - Standard ``logging`` loggers under the ``typedfsm`` namespace
    - No handlers are configured by the library
"""

from typedfsm.builder import StateMachineBuilder, adapt_handler, dont_transition, transition_to
from typedfsm.core.errors import (
    ConfigurationError,
    FSMError,
    HandlerFault,
    PayloadMismatchError,
    RecursionDetectedError,
)
from typedfsm.core.hashable import StateMachineHashable, cast_payload, identifier_of, payload_of
from typedfsm.core.transitions import (
    HandlerResult,
    InvalidTransition,
    NoTransition,
    Transition,
    TransitionOutcome,
    ValidTransition,
)
from typedfsm.runtime.executor import TransitionExecutor
from typedfsm.runtime.graph import EventHandler, StateDefinition, TransitionGraph
from typedfsm.runtime.machine import StateMachine
from typedfsm.runtime.machine_status import MachineStatus
from typedfsm.runtime.observers import ObserverRegistry

__version__ = "0.1.0"

__all__ = [
    # Errors
    "FSMError",
    "ConfigurationError",
    "InvalidTransition",
    "RecursionDetectedError",
    "HandlerFault",
    "PayloadMismatchError",
    # Identity
    "StateMachineHashable",
    "identifier_of",
    "payload_of",
    "cast_payload",
    # Transitions
    "ValidTransition",
    "HandlerResult",
    "Transition",
    "NoTransition",
    "TransitionOutcome",
    # Runtime
    "EventHandler",
    "StateDefinition",
    "TransitionGraph",
    "TransitionExecutor",
    "StateMachine",
    "MachineStatus",
    "ObserverRegistry",
    # Authoring
    "StateMachineBuilder",
    "adapt_handler",
    "transition_to",
    "dont_transition",
]

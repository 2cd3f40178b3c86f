"""
Core value types shared by the graph and the runtime.

Architecture:
- Error taxonomy for authoring, routine and defect failures
- Identity projection of states and events onto discriminants
- Transition records and handler results

Cross-cutting:
- Values are immutable once built
- Structural equality everywhere a test or observer compares outcomes
"""

from .errors import ConfigurationError, FSMError, HandlerFault, PayloadMismatchError, RecursionDetectedError
from .hashable import StateMachineHashable, cast_payload, identifier_of, payload_of
from .transitions import HandlerResult, InvalidTransition, NoTransition, Transition, TransitionOutcome, ValidTransition

__all__ = [
    "FSMError",
    "ConfigurationError",
    "RecursionDetectedError",
    "HandlerFault",
    "PayloadMismatchError",
    "StateMachineHashable",
    "identifier_of",
    "payload_of",
    "cast_payload",
    "ValidTransition",
    "InvalidTransition",
    "HandlerResult",
    "Transition",
    "NoTransition",
    "TransitionOutcome",
]

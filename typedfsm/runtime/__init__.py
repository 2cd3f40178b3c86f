"""
Runtime package: transition graph, executor, observers and the machine.

Architecture:
- Graph is built once and read without locking
- Executor resolves one attempt and holds no state
- Machine owns current state, the execution guard and the observer registry

Cross-cutting:
- asyncio cooperative suspension only; no thread is ever blocked waiting
- Observer registry mutation guarded by a short threading lock
"""

from .executor import TransitionExecutor
from .graph import EventHandler, StateDefinition, TransitionGraph
from .machine import StateMachine
from .machine_status import MachineStatus
from .observers import ObserverRegistry

__all__ = [
    "EventHandler",
    "StateDefinition",
    "TransitionGraph",
    "TransitionExecutor",
    "StateMachine",
    "MachineStatus",
    "ObserverRegistry",
]

"""Immutable transition table mapping state discriminants to event handlers."""

import dataclasses
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Sequence, Tuple, Union

from ..core.errors import ConfigurationError
from ..core.hashable import identifier_of
from ..core.transitions import HandlerResult

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Any], HandlerResult]


def _discriminant(value: Any) -> Any:
    # Unhashable plain values are kept as given so build() can reject them.
    try:
        hash(value)
    except TypeError:
        if not dataclasses.is_dataclass(value):
            return value
    return identifier_of(value)


@dataclass(frozen=True)
class EventHandler:
    """
    Binds an event discriminant to the handler invoked for it. An event value
    given in place of its discriminant is projected onto it.
    """

    event: Hashable
    handler: Handler

    def __post_init__(self) -> None:
        object.__setattr__(self, "event", _discriminant(self.event))

    def matches(self, event: Any) -> bool:
        return self.event == identifier_of(event)


@dataclass(frozen=True)
class StateDefinition:
    """Ordered event handlers accepted by one state discriminant."""

    state: Hashable
    handlers: Tuple[EventHandler, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", _discriminant(self.state))
        object.__setattr__(self, "handlers", tuple(self.handlers))


DefinitionLike = Union[StateDefinition, Tuple[Any, Sequence[Any]]]


def _coerce_handler(item: Any) -> EventHandler:
    if isinstance(item, EventHandler):
        return item
    event, handler = item
    if not callable(handler):
        raise ConfigurationError(f"Handler for event {event!r} is not callable")
    return EventHandler(event=event, handler=handler)


def _coerce_definition(item: DefinitionLike) -> StateDefinition:
    if isinstance(item, StateDefinition):
        return item
    state, handlers = item
    return StateDefinition(state=state, handlers=tuple(_coerce_handler(h) for h in handlers))


class TransitionGraph:
    """
    Read-only lookup of event handlers by state discriminant. Built once from
    an ordered sequence of state definitions and never mutated afterwards.
    """

    def __init__(self, initial_state: Any, table: Mapping[Hashable, Tuple[EventHandler, ...]]) -> None:
        self._initial_state = initial_state
        self._table = MappingProxyType(dict(table))

    @classmethod
    def build(cls, initial_state: Any, state_definitions: Iterable[DefinitionLike]) -> "TransitionGraph":
        """
        Build a graph from ordered state definitions.

        :param initial_state: The state a machine using this graph starts in.
        :param state_definitions: ``StateDefinition`` objects, or
            ``(state, [(event, handler), ...])`` pairs.
        :raises ConfigurationError: If a state is defined twice or has no handlers.
        """
        table: Dict[Hashable, Tuple[EventHandler, ...]] = {}
        for item in state_definitions:
            definition = _coerce_definition(item)
            try:
                hash(definition.state)
            except TypeError:
                raise ConfigurationError(f"State discriminant {definition.state!r} is not hashable") from None
            if definition.state in table:
                raise ConfigurationError(f"State {definition.state!r} is defined more than once")
            if not definition.handlers:
                raise ConfigurationError(f"State {definition.state!r} has no event handlers")

            seen = set()
            for binding in definition.handlers:
                if binding.event in seen:
                    logger.warning(
                        "State %r binds event %r more than once; only the first handler is reachable",
                        definition.state,
                        binding.event,
                    )
                seen.add(binding.event)

            table[definition.state] = tuple(definition.handlers)

        logger.debug("Built transition graph with %d states", len(table))
        return cls(initial_state, table)

    @property
    def initial_state(self) -> Any:
        return self._initial_state

    @property
    def state_identifiers(self) -> Tuple[Hashable, ...]:
        """State discriminants in declaration order."""
        return tuple(self._table)

    def handlers_for(self, state_identifier: Hashable) -> Tuple[EventHandler, ...]:
        """Return the ordered handlers for a state discriminant; empty if unknown."""
        try:
            return self._table.get(state_identifier, ())
        except TypeError:
            return ()

    def __contains__(self, state_identifier: object) -> bool:
        return state_identifier in self._table

    def __len__(self) -> int:
        return len(self._table)

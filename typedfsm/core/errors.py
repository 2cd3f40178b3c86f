# typedfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FSMError(Exception):
    """
    Base exception class for errors raised by the state machine engine.
    """


class ConfigurationError(FSMError):
    """
    Raised while building a transition graph from malformed state definitions,
    e.g. a state defined twice or a state with no event handlers.
    """


class RecursionDetectedError(FSMError):
    """
    Raised when ``transition`` is called again from inside a transition that is
    still in flight on the same call chain, typically from an observer callback.
    """


class HandlerFault(FSMError):
    """
    Raised when an event handler fails while computing its result. The original
    exception is available as ``__cause__``.
    """


class PayloadMismatchError(FSMError):
    """
    Raised by a defensive payload cast when a state or event does not carry the
    associated value a handler expected.
    """

    def __init__(self, value: object, expected_type: type, actual: object) -> None:
        super().__init__(
            f"{value!r} carries {type(actual).__name__} payload, expected {expected_type.__name__}"
        )
        self.value = value
        self.expected_type = expected_type
        self.actual = actual

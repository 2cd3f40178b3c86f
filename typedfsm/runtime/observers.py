# typedfsm/runtime/observers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
import logging
import threading
from typing import Any, Awaitable, Callable, Dict, Hashable, Tuple, Union

from typedfsm.core.transitions import TransitionOutcome

logger = logging.getLogger(__name__)

ObserverCallback = Callable[[TransitionOutcome], Union[None, Awaitable[None]]]


class ObserverRegistry:
    """
    Keyed collection of transition observers. At most one callback per
    subscriber identity; callbacks are invoked in registration order.

    Subscribing and unsubscribing are safe while a broadcast is running: each
    broadcast works on a snapshot taken before the first callback is invoked.
    """

    def __init__(self) -> None:
        self._observers: Dict[Hashable, ObserverCallback] = {}
        self._lock = threading.Lock()

    def subscribe(self, identity: Hashable, callback: ObserverCallback) -> None:
        """
        Register ``callback`` for ``identity``, replacing any previous callback.

        :param identity: Any hashable subscriber identity (an object, a name).
        :param callback: Called with a ``TransitionOutcome``; may be a coroutine function.
        """
        if not callable(callback):
            raise TypeError(f"Observer callback for {identity!r} is not callable")
        with self._lock:
            self._observers[identity] = callback
        logger.debug("Observer %r subscribed", identity)

    def unsubscribe(self, identity: Hashable) -> None:
        """Remove the registration for ``identity``; no-op when absent."""
        with self._lock:
            removed = self._observers.pop(identity, None)
        if removed is not None:
            logger.debug("Observer %r unsubscribed", identity)

    def snapshot(self) -> Tuple[Tuple[Hashable, ObserverCallback], ...]:
        with self._lock:
            return tuple(self._observers.items())

    async def broadcast(self, outcome: TransitionOutcome) -> None:
        """
        Deliver ``outcome`` to every observer registered when the call starts.
        An exception raised by a callback propagates and ends this pass.
        """
        for identity, callback in self.snapshot():
            result: Any = callback(outcome)
            if inspect.isawaitable(result):
                await result

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

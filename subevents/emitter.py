"""Flat-namespace emitter the bus is layered on."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class Handle(Protocol):
    def remove(self) -> None:
        ...


class Emitter(Protocol):
    """What the bus needs from the transport underneath it."""

    def add_listener(self, name: str, callback: Callback) -> Handle:
        ...

    def emit(self, name: str, payload: Any = None) -> None:
        ...


class ListenerHandle:
    """Subscription token returned by :meth:`LocalEmitter.add_listener`.

    Handles compare by identity, so registering the same callback twice
    produces two independent handles.
    """

    __slots__ = ("name", "callback", "_emitter")

    def __init__(self, emitter: "LocalEmitter", name: str, callback: Callback) -> None:
        self._emitter: Optional[LocalEmitter] = emitter
        self.name = name
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._emitter is not None

    def remove(self) -> None:
        emitter, self._emitter = self._emitter, None
        if emitter is not None:
            emitter._detach(self)

    def __repr__(self) -> str:
        state = "active" if self.active else "removed"
        return f"<ListenerHandle {self.name!r} {state}>"


class LocalEmitter:
    """In-memory synchronous emitter; callbacks run in registration order."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[ListenerHandle]] = defaultdict(list)

    def add_listener(self, name: str, callback: Callback) -> ListenerHandle:
        if not callable(callback):
            raise TypeError("callback must be callable")
        handle = ListenerHandle(self, name, callback)
        self._listeners[name].append(handle)
        return handle

    def _detach(self, handle: ListenerHandle) -> None:
        handles = self._listeners.get(handle.name)
        if not handles:
            return
        handles[:] = [item for item in handles if item is not handle]
        if not handles:
            self._listeners.pop(handle.name, None)

    def emit(self, name: str, payload: Any = None) -> None:
        """Invoke every listener for ``name``; a no-op when nobody listens."""
        handles = list(self._listeners.get(name, ()))
        if not handles:
            return
        logger.debug("Emitting %r to %d listener(s)", name, len(handles))
        for handle in handles:
            handle.callback(payload)

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, ()))

    def clear(self) -> None:
        """Remove all listeners (useful for tests)."""
        for handles in list(self._listeners.values()):
            for handle in list(handles):
                handle.remove()
        self._listeners.clear()


__all__ = ["Callback", "Emitter", "Handle", "ListenerHandle", "LocalEmitter"]

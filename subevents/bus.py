"""Hierarchical publish/subscribe on top of a flat emitter.

Event types are plain names, paths such as ``["match", "inning", "out"]`` or
JSON-like mappings. Listeners registered with :meth:`EventBus.register`
receive only exact matches. Listeners registered with
:meth:`EventBus.register_with_sub_event` on a path also receive every trigger
on a longer path sharing that prefix::

    bus = EventBus()
    bus.register_with_sub_event(["match"], on_anything_in_match)
    bus.trigger(["match", "inning", "out"], {"outs": 2})

Within one trigger the exact emission comes first, followed by ancestor
emissions from the most specific prefix to the root.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional

from subevents.config_loader import BusSettings
from subevents.emitter import Callback, Emitter, Handle, LocalEmitter
from subevents.errors import UnknownKeyError
from subevents.event_types import Path, coerce_event_type
from subevents.naming import NameEncoder
from subevents.registry import ListenerRegistry

logger = logging.getLogger(__name__)


class EventBus:
    """Owns a listener registry, a name encoder and the emitter they feed."""

    def __init__(self, settings: Optional[BusSettings] = None, emitter: Optional[Emitter] = None) -> None:
        self.settings = settings or BusSettings.from_config()
        self.emitter: Emitter = emitter if emitter is not None else LocalEmitter()
        self.encoder = NameEncoder(self.settings.separator, self.settings.hierarchy_marker)
        self.registry: ListenerRegistry[Handle] = ListenerRegistry()

    @property
    def separator(self) -> str:
        return self.encoder.separator

    @separator.setter
    def separator(self, value: str) -> None:
        # Existing keys are not re-encoded; they become unreachable, and paths
        # whose segments contain the new separator are rejected from now on.
        previous = self.encoder.separator
        self.encoder.separator = value
        self.settings.separator = value
        if value != previous and len(self.registry):
            logger.warning(
                "Separator changed from %r to %r with %d registered key(s); "
                "those listeners will no longer match and paths containing %r "
                "will be rejected",
                previous,
                value,
                len(self.registry),
                value,
            )

    @property
    def inner_event_type_key(self) -> str:
        return self.settings.inner_event_type_key

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def register(self, event_type: Any, callback: Callback) -> Handle:
        """Listen for triggers on exactly ``event_type``."""
        key = self.encoder.normal_key(coerce_event_type(event_type))
        return self._subscribe(key, callback)

    def register_with_sub_event(self, path: Any, callback: Callback) -> Handle:
        """Listen for triggers on ``path`` and on every path below it."""
        key = self.encoder.hierarchical_key(coerce_event_type(path))
        return self._subscribe(key, callback)

    def _subscribe(self, key: str, callback: Callback) -> Handle:
        handle = self.emitter.add_listener(key, callback)
        self.registry.add(key, handle)
        logger.debug("Registered listener on %r", key)
        return handle

    def unregister(self, event_type: Any, handle: Optional[Handle] = None) -> None:
        """Remove ``handle``, or every listener of ``event_type`` when omitted.

        Raises :class:`UnknownKeyError` when removing everything from a type
        that has no registered listeners.
        """
        resolved = coerce_event_type(event_type)
        keys = [self.encoder.normal_key(resolved)]
        if isinstance(resolved, Path):
            keys.append(self.encoder.hierarchical_key(resolved))

        if handle is not None:
            matched = False
            for key in keys:
                matched = self.registry.remove_one(key, handle) or matched
            if not matched:
                logger.debug("Handle %r was not registered under %r", handle, keys)
            handle.remove()
            return

        if all(key not in self.registry for key in keys):
            raise UnknownKeyError(
                f"No listeners registered for {keys[0]!r}", {"keys": keys}
            )
        for key in keys:
            removed = self.registry.remove_all(key)
            for item in removed:
                item.remove()
            if removed:
                logger.debug("Removed %d listener(s) from %r", len(removed), key)

    def clear(self) -> None:
        """Release every subscription this bus created."""
        for key in self.registry:
            for item in self.registry.remove_all(key):
                item.remove()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def trigger(self, event_type: Any, state: Any = None) -> List[str]:
        """Emit ``state`` for ``event_type`` and bubble it to listening ancestors.

        Mapping payloads are copied with the originating event type stored
        under :attr:`inner_event_type_key`; other payloads pass through
        untouched. Returns the keys emitted on, in order.
        """
        resolved = coerce_event_type(event_type)
        if isinstance(state, Mapping):
            payload = {**state, self.inner_event_type_key: resolved}
        else:
            payload = state

        key = self.encoder.normal_key(resolved)
        self.emitter.emit(key, payload)
        emitted = [key]

        if isinstance(resolved, Path):
            # Registry is re-read per step so reentrant changes apply to later prefixes.
            for prefix in resolved.ancestors():
                upper_key = self.encoder.hierarchical_key(prefix)
                if not self.registry.is_empty(upper_key):
                    self.emitter.emit(upper_key, payload)
                    emitted.append(upper_key)

        logger.debug("Triggered %r on %d key(s)", key, len(emitted))
        return emitted

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def listener_count(self, event_type: Any, with_sub_events: bool = False) -> int:
        resolved = coerce_event_type(event_type)
        if with_sub_events:
            key = self.encoder.hierarchical_key(resolved)
        else:
            key = self.encoder.normal_key(resolved)
        return len(self.registry.handles(key))

    def has_listeners(self, event_type: Any, with_sub_events: bool = False) -> bool:
        return self.listener_count(event_type, with_sub_events=with_sub_events) > 0


__all__ = ["EventBus"]

"""Turns event types into the flat names the emitter understands."""
from __future__ import annotations

import json

from subevents.config_loader import DEFAULT_HIERARCHY_MARKER, DEFAULT_SEPARATOR, validate_separator
from subevents.errors import InvalidEventTypeError
from subevents.event_types import EventType, Keyed, Path, Simple


class NameEncoder:
    """Derives normal and hierarchical keys from event types.

    Normal keys address exact matches. Hierarchical keys live behind
    ``marker`` so a listener subscribed with sub-events on ``["A", "B"]``
    never collides with a plain listener on the literal string ``"A$B"``.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR, marker: str = DEFAULT_HIERARCHY_MARKER) -> None:
        self._separator = validate_separator(separator)
        self.marker = marker

    @property
    def separator(self) -> str:
        return self._separator

    @separator.setter
    def separator(self, value: str) -> None:
        self._separator = validate_separator(value)

    def _join(self, path: Path) -> str:
        for segment in path.segments:
            if self._separator in segment:
                raise InvalidEventTypeError(
                    "Path segment contains the separator",
                    {"segment": segment, "separator": self._separator},
                )
        return self._separator.join(path.segments)

    def normal_key(self, event_type: EventType) -> str:
        if isinstance(event_type, Simple):
            key = event_type.name
        elif isinstance(event_type, Path):
            key = self._join(event_type)
        elif isinstance(event_type, Keyed):
            try:
                key = json.dumps(event_type.fields, sort_keys=True, separators=(",", ":"))
            except (TypeError, ValueError) as exc:
                raise InvalidEventTypeError(
                    "Keyed event type must be JSON serialisable", {"detail": str(exc)}
                ) from exc
        else:
            raise InvalidEventTypeError(
                "Unsupported event type", {"type": type(event_type).__name__}
            )
        if key.startswith(self.marker):
            raise InvalidEventTypeError(
                "Event name collides with the hierarchical namespace", {"name": key}
            )
        return key

    def hierarchical_key(self, event_type: EventType) -> str:
        if not isinstance(event_type, Path):
            raise InvalidEventTypeError(
                "Sub-event keys require a path event type",
                {"type": type(event_type).__name__},
            )
        return self.marker + self._separator + self._join(event_type)


__all__ = ["NameEncoder"]

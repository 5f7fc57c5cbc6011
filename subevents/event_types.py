"""Tagged variants describing what an event is addressed to."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Tuple, Union

from subevents.errors import InvalidEventTypeError


@dataclass(frozen=True)
class Simple:
    """A flat event name."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidEventTypeError(
                "Simple event name must be a string", {"name": repr(self.name)}
            )


@dataclass(frozen=True, init=False)
class Path:
    """A hierarchical address, most general segment first.

    Accepts either ``Path("A", "B")`` or ``Path(["A", "B"])``.
    """

    segments: Tuple[str, ...]

    def __init__(self, *segments: Any) -> None:
        if len(segments) == 1 and isinstance(segments[0], (list, tuple)):
            segments = tuple(segments[0])
        if not segments:
            raise InvalidEventTypeError("Path must contain at least one segment")
        for segment in segments:
            if not isinstance(segment, str):
                raise InvalidEventTypeError(
                    "Path segments must be strings",
                    {"segment": repr(segment)},
                )
        object.__setattr__(self, "segments", tuple(segments))

    def __len__(self) -> int:
        return len(self.segments)

    def prefix(self, length: int) -> "Path":
        """Return the leading ``length`` segments as a new path."""
        if not 1 <= length <= len(self.segments):
            raise ValueError(f"prefix length must be between 1 and {len(self.segments)}")
        return Path(self.segments[:length])

    def ancestors(self):
        """Yield this path and every shorter prefix, longest first."""
        for length in range(len(self.segments), 0, -1):
            yield self.prefix(length)


@dataclass(frozen=True)
class Keyed:
    """An event addressed by an arbitrary JSON-compatible mapping."""

    # Equal mappings hash alike; the hash ignores field contents.
    fields: Mapping = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.fields, Mapping):
            raise InvalidEventTypeError(
                "Keyed event type requires a mapping", {"fields": repr(self.fields)}
            )


EventType = Union[Simple, Path, Keyed]


def coerce_event_type(value: Any) -> EventType:
    """Classify a raw value into one of the EventType variants."""
    if isinstance(value, (Simple, Path, Keyed)):
        return value
    if isinstance(value, str):
        return Simple(value)
    if isinstance(value, (list, tuple)):
        return Path(value)
    if isinstance(value, Mapping):
        return Keyed(value)
    raise InvalidEventTypeError(
        "Event type must be a string, a sequence of strings or a mapping",
        {"type": type(value).__name__},
    )


__all__ = ["EventType", "Keyed", "Path", "Simple", "coerce_event_type"]

# subevents/__init__.py
from .bus import EventBus
from .config_loader import BusSettings, ConfigLoader
from .emitter import Emitter, ListenerHandle, LocalEmitter
from .errors import EventBusError, InvalidEventTypeError, UnknownKeyError
from .event_types import EventType, Keyed, Path, Simple, coerce_event_type
from .naming import NameEncoder
from .registry import ListenerRegistry

__all__ = [
    "BusSettings",
    "ConfigLoader",
    "Emitter",
    "EventBus",
    "EventBusError",
    "EventType",
    "InvalidEventTypeError",
    "Keyed",
    "ListenerHandle",
    "ListenerRegistry",
    "LocalEmitter",
    "NameEncoder",
    "Path",
    "Simple",
    "UnknownKeyError",
    "coerce_event_type",
]

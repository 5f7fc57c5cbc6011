"""Bookkeeping of which listener handles live under which key."""
from __future__ import annotations

from typing import Dict, Generic, Iterator, List, TypeVar

HandleT = TypeVar("HandleT")


class ListenerRegistry(Generic[HandleT]):
    """Maps canonical keys to the handles registered under them.

    A key is only present while it has at least one handle. The registry
    never talks to the emitter; releasing subscriptions is the caller's job.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, List[HandleT]] = {}

    def add(self, key: str, handle: HandleT) -> None:
        self._entries.setdefault(key, []).append(handle)

    def remove_one(self, key: str, handle: HandleT) -> bool:
        """Drop every occurrence of ``handle`` under ``key``; True if any matched."""
        handles = self._entries.get(key)
        if not handles:
            return False
        remaining = [item for item in handles if item != handle]
        if len(remaining) == len(handles):
            return False
        if remaining:
            self._entries[key] = remaining
        else:
            del self._entries[key]
        return True

    def remove_all(self, key: str) -> List[HandleT]:
        """Delete ``key`` and return its handles (empty list if absent)."""
        return self._entries.pop(key, [])

    def is_empty(self, key: str) -> bool:
        return not self._entries.get(key)

    def handles(self, key: str) -> List[HandleT]:
        return list(self._entries.get(key, ()))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ListenerRegistry"]

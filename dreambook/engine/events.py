"""Change notifications for persisted entities.

Replaces a UI-bound live query: anything that needs to refresh after a
write subscribes a listener and receives one ChangeEvent per committed
mutation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    entity: str  # "profile" | "dream"
    action: str  # "created" | "updated" | "deleted"
    entity_id: str | None = None


Listener = Callable[[ChangeEvent], None]


class ChangeFeed:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

# src/utils/event_bus.py
from __future__ import annotations
from typing import Any, Callable, DefaultDict, Dict, List
from collections import defaultdict
import threading

# Event names shared by the host loop and the motion components
POINTER_MOVE = "pointer_move"        # x, y (device pixels)
VIEWPORT_RESIZE = "viewport_resize"  # width, height
HOVER_ENTER = "hover_enter"          # key
HOVER_LEAVE = "hover_leave"          # key

Handler = Callable[[Dict[str, Any]], None]


class EventBus:
    """
    Ultra-light pub/sub bus:
        off = bus.on(POINTER_MOVE, lambda payload: ...)
        bus.emit(POINTER_MOVE, x=10, y=20)
        off()  # unsubscribe, safe to call more than once

    Components receive a bus instance instead of reaching for a global, so each
    owner can release exactly what it subscribed.
    """
    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event: str, handler: Handler) -> Callable[[], None]:
        with self._lock:
            self._subs[event].append(handler)

        def off() -> None:
            with self._lock:
                try:
                    self._subs[event].remove(handler)
                except ValueError:
                    pass
        return off

    def emit(self, event: str, **payload: Any) -> int:
        """Deliver `payload` to every handler of `event`; returns the number of handlers called."""
        with self._lock:
            handlers = list(self._subs.get(event, ()))
        for h in handlers:
            h(payload)
        return len(handlers)

    def subscriber_count(self, event: str) -> int:
        with self._lock:
            return len(self._subs.get(event, ()))


__all__ = [
    "EventBus",
    "Handler",
    "POINTER_MOVE",
    "VIEWPORT_RESIZE",
    "HOVER_ENTER",
    "HOVER_LEAVE",
]

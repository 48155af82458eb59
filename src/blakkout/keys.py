"""keys.py - the global key-down bus.

every key the user presses is emitted here once. whoever cares subscribes.
one bad handler doesn't break the chain.

in the world: the wiretap on the keyboard. it hears everything,
even what you type into the console.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable

from blakkout.log import warn


# ============================================================
# EVENT
# ============================================================

@dataclass(frozen=True)
class KeyEvent:
    """one key-down."""
    key: str
    at_ms: float
    source: str = ""


KeyHandler = Callable[[KeyEvent], None]


# ============================================================
# BUS
# ============================================================

class KeyBus:
    """subscribe, emit. handlers run in subscription order."""

    def __init__(self, history_size: int = 200):
        self._handlers: list[KeyHandler] = []
        self._history: deque[KeyEvent] = deque(maxlen=history_size)

    def subscribe(self, fn: KeyHandler):
        """register a handler. subscribing twice is a no-op."""
        if fn not in self._handlers:
            self._handlers.append(fn)

    def unsubscribe(self, fn: KeyHandler):
        """remove a handler. missing handlers are fine."""
        self._handlers = [f for f in self._handlers if f != fn]

    def emit(self, key, at_ms: float, source: str = "") -> KeyEvent:
        """fire a key-down. all handlers run, bad ones get caught."""
        event = KeyEvent(key=key if isinstance(key, str) else str(key),
                         at_ms=at_ms, source=source)
        self._history.append(event)
        for fn in list(self._handlers):
            try:
                fn(event)
            except Exception as e:
                warn("keys", f"handler failed on {event.key!r}: {e}")
        return event

    def listeners(self) -> int:
        return len(self._handlers)

    def clear(self):
        self._handlers.clear()

    def history(self, limit: int = 50) -> list[KeyEvent]:
        """recent key events, newest last."""
        items = list(self._history)
        return items[-limit:] if limit < len(items) else items

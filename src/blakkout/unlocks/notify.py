"""notify.py - toasts. fire and forget.

the registry says notify(kind, text, duration_ms) and moves on.
the toaster keeps what's on screen, dismisses it when time is up,
and hands each toast to whatever draws it.

in the world: the little popup in the corner. it never waits for you.
"""

import itertools
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional

from blakkout.log import warn

INFO = "info"
SUCCESS = "success"
KINDS = (INFO, SUCCESS)


@dataclass
class Toast:
    """one notification on screen."""
    id: int
    kind: str
    text: str
    duration_ms: int
    shown_at_ms: float = 0.0
    dismissed: bool = False
    timer: object = field(default=None, repr=False, compare=False)


class Toaster:
    """notification sink with auto-dismiss.

    on_show(toast) draws a toast. on_dismiss(toast) takes it down.
    both are optional and neither may break the caller.
    """

    def __init__(self, scheduler, on_show: Optional[Callable] = None,
                 on_dismiss: Optional[Callable] = None, history_size: int = 100):
        self.scheduler = scheduler
        self.on_show = on_show
        self.on_dismiss = on_dismiss
        self._active: dict[int, Toast] = {}
        self._history: deque[Toast] = deque(maxlen=history_size)
        self._ids = itertools.count(1)

    def notify(self, kind: str, text: str, duration_ms: int):
        """show a toast. no return value, no acknowledgment."""
        if kind not in KINDS:
            kind = INFO
        toast = Toast(
            id=next(self._ids), kind=kind, text=text,
            duration_ms=int(duration_ms),
            shown_at_ms=self.scheduler.now_ms(),
        )
        self._active[toast.id] = toast
        self._history.append(toast)
        toast.timer = self.scheduler.call_later(
            toast.duration_ms, lambda: self.dismiss(toast.id), label="toast",
        )
        self._call(self.on_show, toast)

    def dismiss(self, toast_id: int):
        toast = self._active.pop(toast_id, None)
        if toast is None:
            return
        toast.dismissed = True
        if toast.timer is not None:
            toast.timer.cancel()
        self._call(self.on_dismiss, toast)

    def active(self) -> list[Toast]:
        return list(self._active.values())

    def history(self) -> list[Toast]:
        return list(self._history)

    def close(self):
        """drop everything on screen and cancel pending dismissals."""
        for toast in list(self._active.values()):
            if toast.timer is not None:
                toast.timer.cancel()
        self._active.clear()

    def _call(self, fn, toast):
        if fn is None:
            return
        try:
            fn(toast)
        except Exception as e:
            warn("notify", f"toast renderer failed: {e}")

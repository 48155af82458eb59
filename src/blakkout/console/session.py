"""session.py - one open console: input buffer, output log, key handling.

every key goes out on the global bus first, so whatever you type here
the secret listener hears too. then the console does its own thing:
Enter runs the line, arrows walk history, Escape closes, Tab completes.

the log only grows, except when clear empties it.
"""

from typing import Callable, Optional

from blakkout.console.completer import complete_command
from blakkout.console.history import HistoryNavigator
from blakkout.console.interpreter import CommandInterpreter, Effect, Result, echo, output
from blakkout.log import debug

BANNER_LINES = (
    "BLAKKOUT Terminal v2.0.77 - secure access enabled",
    'type "help" to list available commands',
)


class OutputLog:
    """append-only console output. clear() is the only way to shrink it."""

    def __init__(self, lines=None):
        self._lines = list(lines or [])
        self.generation = 0  # bumps on every clear

    @property
    def lines(self) -> tuple:
        return tuple(self._lines)

    def append(self, line):
        self._lines.append(line)

    def extend(self, lines):
        self._lines.extend(lines)

    def clear(self):
        self._lines.clear()
        self.generation += 1

    def texts(self) -> list[str]:
        return [line.text for line in self._lines]

    def __len__(self):
        return len(self._lines)


class ConsoleSession:
    """the console surface, minus the drawing."""

    def __init__(self, interpreter: CommandInterpreter, history: HistoryNavigator = None,
                 bus=None, scheduler=None, on_close: Optional[Callable] = None,
                 banner: bool = True):
        self.interpreter = interpreter
        self.history = history or HistoryNavigator()
        self.bus = bus
        self.scheduler = scheduler
        self.on_close = on_close
        self.log = OutputLog([output(t) for t in BANNER_LINES] if banner else [])
        self.buffer = ""
        self.closed = False
        self._draft = ""

    def _now(self) -> float:
        return self.scheduler.now_ms() if self.scheduler is not None else 0.0

    # ============================================================
    # KEYS
    # ============================================================

    def press(self, key: str):
        """one key-down while the console has focus."""
        if self.closed:
            return
        if self.bus is not None:
            self.bus.emit(key, self._now(), source="console")

        if key == "Enter":
            self.submit(self.buffer)
        elif key == "ArrowUp":
            was_browsing = self.history.browsing
            entry = self.history.previous()
            if entry is not None:
                if not was_browsing:
                    self._draft = self.buffer
                self.buffer = entry
        elif key == "ArrowDown":
            entry = self.history.next()
            if entry is not None:
                if not self.history.browsing:
                    entry, self._draft = self._draft, ""
                self.buffer = entry
        elif key == "Escape":
            self.apply(Effect.CLOSE_CONSOLE)
        elif key == "Tab":
            self.buffer = complete_command(self.interpreter.table, self.buffer)
        elif key == "Backspace":
            self.buffer = self.buffer[:-1]
        elif isinstance(key, str) and len(key) == 1:
            self.buffer += key

    def type_text(self, text: str):
        """press every character of text, in order."""
        for ch in text:
            self.press(ch)

    # ============================================================
    # LINES
    # ============================================================

    def submit(self, line: str) -> Result:
        """run a line as if Enter was pressed on it."""
        self.buffer = ""
        self._draft = ""
        if self.closed or not line.strip():
            return Result()

        self.history.submit(line)
        self.log.append(echo(line))
        result = self.interpreter.execute(line)
        self.log.extend(result.lines)
        for effect in result.effects:
            self.apply(effect)
        return result

    def apply(self, effect: Effect):
        debug("console", f"effect {effect.value}")
        if effect is Effect.CLEAR_LOG:
            self.log.clear()
        elif effect is Effect.CLOSE_CONSOLE:
            self.close()

    def close(self):
        if self.closed:
            return
        self.closed = True
        if self.on_close is not None:
            self.on_close()

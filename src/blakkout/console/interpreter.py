"""interpreter.py - the console's command language.

one line in, output lines and side effects out. the first word picks
the command (case doesn't matter), the rest are plain string args.
commands live in a table; adding one is one registration, nothing else.
handlers never take the console down: whatever they raise becomes
an error line.

output lines carry data, not looks. a line is plain text, a list, or a
table, and whoever draws the console decides what that means.
"""

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from blakkout.log import debug, warn

INPUT = "input"
OUTPUT = "output"
ERROR = "error"
SUCCESS = "success"
KINDS = (INPUT, OUTPUT, ERROR, SUCCESS)


class Effect(Enum):
    """what a command asks the console to do besides printing."""
    CLEAR_LOG = "clear-log"
    CLOSE_CONSOLE = "close-console"


# ============================================================
# OUTPUT
# ============================================================

@dataclass(frozen=True)
class TextFragment:
    text: str

    def plain(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListFragment:
    items: tuple
    title: str = ""

    def plain(self) -> str:
        lines = [self.title] if self.title else []
        lines.extend(f"  {item}" for item in self.items)
        return "\n".join(lines)


@dataclass(frozen=True)
class TableFragment:
    headers: tuple
    rows: tuple

    def plain(self) -> str:
        rows = [self.headers, *self.rows]
        widths = [max(len(str(r[i])) for r in rows) for i in range(len(self.headers))]
        return "\n".join(
            "  ".join(str(cell).ljust(w) for cell, w in zip(row, widths)).rstrip()
            for row in rows
        )


_line_ids = itertools.count(1)


@dataclass
class OutputLine:
    """one line of console output. id and timestamp don't count for equality."""
    kind: str
    text: str
    fragment: object = None
    id: int = field(default_factory=lambda: next(_line_ids), compare=False)
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def shape(self) -> str:
        if isinstance(self.fragment, ListFragment):
            return "list"
        if isinstance(self.fragment, TableFragment):
            return "table"
        return "text"


def output(text: str) -> OutputLine:
    return OutputLine(OUTPUT, text)


def error(text: str) -> OutputLine:
    return OutputLine(ERROR, text)


def success(text: str) -> OutputLine:
    return OutputLine(SUCCESS, text)


def echo(raw: str) -> OutputLine:
    """the input line as the log shows it."""
    return OutputLine(INPUT, f"> {raw}")


def listing(items, title: str = "", kind: str = OUTPUT) -> OutputLine:
    frag = ListFragment(items=tuple(items), title=title)
    return OutputLine(kind, frag.plain(), fragment=frag)


def table(headers, rows, kind: str = OUTPUT) -> OutputLine:
    frag = TableFragment(headers=tuple(headers), rows=tuple(tuple(r) for r in rows))
    return OutputLine(kind, frag.plain(), fragment=frag)


@dataclass
class Result:
    """what one execute() produced."""
    lines: list = field(default_factory=list)
    effects: list = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.lines and not self.effects


# ============================================================
# PARSING
# ============================================================

@dataclass(frozen=True)
class CommandLine:
    name: str
    args: tuple
    raw: str


def parse_line(raw: str) -> Optional[CommandLine]:
    """split a line into name + args. None for blank lines."""
    tokens = (raw or "").split()
    if not tokens:
        return None
    return CommandLine(name=tokens[0].lower(), args=tuple(tokens[1:]), raw=raw)


# ============================================================
# COMMAND TABLE
# ============================================================

@dataclass
class Command:
    name: str
    fn: Callable
    description: str = ""
    usage: str = ""
    hidden: bool = False


class CommandTable:
    """name -> handler. handlers are fn(ctx, args)."""

    def __init__(self):
        self._commands: dict[str, Command] = {}

    def register(self, name: str, fn: Callable, description: str = "",
                 usage: str = "", hidden: bool = False) -> Command:
        cmd = Command(name=name.lower(), fn=fn, description=description,
                      usage=usage or name.lower(), hidden=hidden)
        self._commands[cmd.name] = cmd
        return cmd

    def command(self, name: str, description: str = "", usage: str = "",
                hidden: bool = False):
        """decorator form of register()."""
        def deco(fn):
            self.register(name, fn, description=description, usage=usage, hidden=hidden)
            return fn
        return deco

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name.lower())

    def names(self, include_hidden: bool = False) -> list[str]:
        return [c.name for c in self._commands.values() if include_hidden or not c.hidden]

    def visible(self) -> list[Command]:
        return [c for c in self._commands.values() if not c.hidden]

    def copy(self) -> "CommandTable":
        other = CommandTable()
        other._commands = dict(self._commands)
        return other

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._commands

    def __len__(self):
        return len(self._commands)


@dataclass
class CommandContext:
    """what a handler can reach."""
    registry: object
    table: CommandTable
    now: Callable = datetime.now


# ============================================================
# INTERPRETER
# ============================================================

class CommandInterpreter:
    """parse, dispatch, normalize. never raises."""

    def __init__(self, registry, table: CommandTable = None, now: Callable = None):
        if table is None:
            from blakkout.console.commands import COMMANDS
            table = COMMANDS
        self.table = table
        self.ctx = CommandContext(registry=registry, table=table, now=now or datetime.now)

    def execute(self, raw_line: str) -> Result:
        parsed = parse_line(raw_line)
        if parsed is None:
            return Result()

        cmd = self.table.get(parsed.name)
        if cmd is None:
            debug("console", f"unknown command {parsed.name!r}")
            return Result(lines=[
                error(f"unknown command: {parsed.name}"),
                output('type "help" to list available commands'),
            ])

        try:
            return _as_result(cmd.fn(self.ctx, list(parsed.args)))
        except Exception as e:
            warn("console", f"{cmd.name} failed: {e}")
            return Result(lines=[error(f"{cmd.name}: {e}")])


def _as_result(reply) -> Result:
    if reply is None:
        return Result()
    if isinstance(reply, Result):
        return reply
    if isinstance(reply, OutputLine):
        return Result(lines=[reply])
    if isinstance(reply, str):
        return Result(lines=[output(reply)])
    lines = [r if isinstance(r, OutputLine) else output(str(r)) for r in reply]
    return Result(lines=lines)

"""repl.py - the console in a real terminal.

type a command, read the output. rich handles the colors,
readline handles arrows, tab, and history on disk.
every character you type still goes through the session, so the
secret listener hears the console too.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from blakkout.console.commands import COMMANDS
from blakkout.console.completer import read_saved_history, save_history, setup_readline
from blakkout.console.history import HistoryNavigator
from blakkout.console.interpreter import (
    ERROR, INPUT, SUCCESS, ListFragment, TableFragment,
)
from blakkout.log import info
from blakkout.provider import Provider

console = Console()

PROMPT = "[green]user@blakkout:~$ [/green]"

_STYLES = {
    INPUT: "white",
    ERROR: "red",
    SUCCESS: "cyan",
}


def render_line(line, out: Console = None):
    """print one output line. lists and tables become rich tables."""
    out = out or console
    style = _STYLES.get(line.kind, "green")
    frag = line.fragment
    if isinstance(frag, ListFragment):
        if frag.title:
            out.print(f"  {frag.title}", style=style, markup=False)
        for item in frag.items:
            out.print(f"    {item}", style=style, markup=False)
    elif isinstance(frag, TableFragment):
        grid = Table(show_header=True, header_style="bold " + style, box=None, padding=(0, 2))
        for header in frag.headers:
            grid.add_column(str(header))
        for row in frag.rows:
            grid.add_row(*(str(cell) for cell in row))
        out.print(grid)
    else:
        out.print(f"  {line.text}", style=style, markup=False)


def render_toast(toast, out: Console = None):
    """a notification, drawn as a panel."""
    out = out or console
    border = "cyan" if toast.kind == "success" else "yellow"
    icon = "🔓" if toast.kind == "success" else "🔄"
    out.print(Panel(f"{icon} {toast.text}", border_style=border, expand=False))


class Repl:
    """interactive blakkout console."""

    def __init__(self, provider: Provider = None, out: Console = None):
        self.provider = provider or Provider()
        self.out = out or Console(no_color=not self.provider.config.get("color_output"))
        if self.provider.toaster.on_show is None:
            self.provider.toaster.on_show = lambda t: render_toast(t, self.out)
        self.session = None
        self._shown = 0
        self._generation = 0

    def run(self):
        """main loop."""
        with self.provider:
            setup_readline(COMMANDS)
            history = HistoryNavigator(entries=read_saved_history())
            self.session = self.provider.open_console(history=history)
            self.flush()

            while not self.session.closed:
                self.provider.tick()
                try:
                    line = self.out.input(PROMPT)
                except (EOFError, KeyboardInterrupt):
                    self.out.print("\n  [dim]bye[/dim]")
                    break
                self.feed(line)
                self.provider.tick()

        save_history(int(self.provider.config.get("history_size")))
        info("repl", "console closed")

    def feed(self, line: str):
        """type line into the session and press Enter."""
        self.session.type_text(line)
        self.session.press("Enter")
        self.flush()

    def flush(self):
        """print whatever the log gained since last time."""
        log = self.session.log
        if log.generation != self._generation:
            self.out.clear()
            self._generation = log.generation
            self._shown = 0
        for line in log.lines[self._shown:]:
            if line.kind == INPUT:
                continue  # the terminal already shows what was typed
            render_line(line, self.out)
        self._shown = len(log)


def run_repl(provider: Provider = None):
    """entry point for the REPL."""
    repl = Repl(provider=provider)
    repl.run()

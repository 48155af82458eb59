"""completer.py - tab completion and persistent history for the REPL.

complete_command() is the pure part: visible command names by prefix,
or their longest common prefix when there are several.
the readline glue wires it into a real terminal and keeps history on disk.

in the world: the quick fingers. type less, find more.
"""

import os
import readline

from blakkout import paths


_MAX_HISTORY = 1000


# ============================================================
# COMPLETION
# ============================================================

def matches_for(table, text: str) -> list[str]:
    """visible command names starting with text (case-insensitive)."""
    prefix = text.lower()
    return sorted(n for n in table.names() if n.startswith(prefix))


def complete_command(table, text: str) -> str:
    """what Tab turns text into. unchanged when nothing fits."""
    stripped = text.strip()
    if not stripped or " " in stripped:
        return text
    found = matches_for(table, stripped)
    if len(found) == 1:
        return found[0] + " "
    if len(found) > 1:
        common = os.path.commonprefix(found)
        if len(common) > len(stripped):
            return common
    return text


class ConsoleCompleter:
    """readline completer over a command table."""

    def __init__(self, table):
        self.table = table
        self.matches: list[str] = []

    def complete(self, text: str, state: int):
        """readline completion function."""
        if state == 0:
            line = readline.get_line_buffer()
            self.matches = self._get_matches(line, text)
        try:
            return self.matches[state]
        except IndexError:
            return None

    def _get_matches(self, line: str, text: str) -> list[str]:
        stripped = line.lstrip()
        # only the command word completes; args are free text
        if " " in stripped:
            return []
        return [m + " " for m in matches_for(self.table, text)]


# ============================================================
# HISTORY
# ============================================================

def load_history():
    """load REPL history from file."""
    paths.ensure_dir(paths.HISTORY_FILE.parent)
    try:
        if paths.HISTORY_FILE.exists():
            readline.read_history_file(str(paths.HISTORY_FILE))
    except OSError:
        pass


def save_history(max_size: int = _MAX_HISTORY):
    """save REPL history to file."""
    try:
        paths.ensure_dir(paths.HISTORY_FILE.parent)
        readline.set_history_length(max_size)
        readline.write_history_file(str(paths.HISTORY_FILE))
    except OSError:
        pass


def read_saved_history() -> list[str]:
    """entries readline currently holds, oldest first."""
    n = readline.get_current_history_length()
    return [readline.get_history_item(i) for i in range(1, n + 1)
            if readline.get_history_item(i)]


# ============================================================
# SETUP
# ============================================================

def setup_readline(table) -> ConsoleCompleter:
    """configure readline for the console REPL."""
    completer = ConsoleCompleter(table)

    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind("tab: complete")

    # macOS uses libedit, not GNU readline
    if readline.__doc__ and "libedit" in readline.__doc__:
        readline.parse_and_bind("bind ^I rl_complete")

    load_history()
    return completer

"""tests for the console session: keys, history, effects."""

from blakkout.console.history import HistoryNavigator
from blakkout.console.interpreter import CommandInterpreter, INPUT
from blakkout.console.session import BANNER_LINES, ConsoleSession, OutputLog
from blakkout.keys import KeyBus


def _session(registry, **kw):
    return ConsoleSession(CommandInterpreter(registry), **kw)


def _run(session, line):
    session.type_text(line)
    session.press("Enter")


class TestSubmit:

    def test_banner(self, registry):
        s = _session(registry)
        assert s.log.texts() == list(BANNER_LINES)
        assert _session(registry, banner=False).log.texts() == []

    def test_echo_then_output(self, registry):
        s = _session(registry, banner=False)
        _run(s, "echo hi")
        assert s.log.lines[0].kind == INPUT
        assert s.log.lines[0].text == "> echo hi"
        assert s.log.lines[1].text == "hi"
        assert s.buffer == ""

    def test_blank_line_does_nothing(self, registry):
        s = _session(registry, banner=False)
        s.type_text("   ")
        s.press("Enter")
        assert len(s.log) == 0
        assert len(s.history) == 0
        assert s.buffer == ""

    def test_clear_empties_log(self, registry):
        s = _session(registry)
        _run(s, "help")
        _run(s, "clear")
        assert len(s.log) == 0
        assert s.log.generation == 1

    def test_unknown_command_keeps_running(self, registry):
        s = _session(registry, banner=False)
        _run(s, "nope")
        _run(s, "echo still here")
        assert s.log.texts()[-1] == "still here"

    def test_secret_command_unlocks(self, registry):
        s = _session(registry, banner=False)
        _run(s, "glitch")
        assert registry.is_unlocked("glitch")


class TestHistoryKeys:

    def test_arrows_walk_history(self, registry):
        s = _session(registry, banner=False)
        _run(s, "help")
        _run(s, "status")
        s.press("ArrowUp")
        assert s.buffer == "status"
        s.press("ArrowUp")
        assert s.buffer == "help"
        s.press("ArrowDown")
        assert s.buffer == "status"

    def test_draft_comes_back(self, registry):
        s = _session(registry, banner=False)
        _run(s, "help")
        s.type_text("ech")
        s.press("ArrowUp")
        assert s.buffer == "help"
        s.press("ArrowDown")
        assert s.buffer == "ech"

    def test_arrow_down_without_browsing(self, registry):
        s = _session(registry, banner=False)
        s.type_text("abc")
        s.press("ArrowDown")
        assert s.buffer == "abc"

    def test_arrow_up_on_empty_history(self, registry):
        s = _session(registry, banner=False)
        s.type_text("abc")
        s.press("ArrowUp")
        assert s.buffer == "abc"

    def test_history_records_raw_line(self, registry):
        history = HistoryNavigator()
        s = _session(registry, history=history, banner=False)
        _run(s, "HELP")
        assert history.entries == ("HELP",)


class TestEditingKeys:

    def test_backspace(self, registry):
        s = _session(registry)
        s.type_text("helpx")
        s.press("Backspace")
        assert s.buffer == "help"

    def test_tab_completes(self, registry):
        s = _session(registry)
        s.type_text("sta")
        s.press("Tab")
        assert s.buffer == "status "

    def test_tab_common_prefix(self, registry):
        s = _session(registry)
        s.type_text("e")
        s.press("Tab")
        assert s.buffer == "e"  # echo, exit

    def test_named_keys_do_not_type(self, registry):
        s = _session(registry)
        for key in ("Shift", "ArrowLeft", "Control"):
            s.press(key)
        assert s.buffer == ""


class TestClose:

    def test_escape_closes(self, registry):
        closed = []
        s = _session(registry, on_close=lambda: closed.append(True))
        s.press("Escape")
        assert s.closed
        assert closed == [True]

    def test_exit_command_closes(self, registry):
        s = _session(registry, banner=False)
        _run(s, "exit")
        assert s.closed
        assert s.log.texts()[-1] == "console closed."

    def test_closed_session_ignores_keys(self, registry):
        s = _session(registry, banner=False)
        s.press("Escape")
        s.type_text("help")
        s.press("Enter")
        assert len(s.log) == 0

    def test_close_is_idempotent(self, registry):
        calls = []
        s = _session(registry, on_close=lambda: calls.append(1))
        s.close()
        s.close()
        assert calls == [1]


class TestBus:

    def test_every_key_goes_out(self, registry):
        bus = KeyBus()
        seen = []
        bus.subscribe(lambda e: seen.append((e.key, e.source)))
        s = _session(registry, bus=bus)
        s.type_text("hi")
        s.press("Enter")
        assert seen == [("h", "console"), ("i", "console"), ("Enter", "console")]


class TestOutputLog:

    def test_only_clear_shrinks(self):
        log = OutputLog()
        log.append("a")
        log.extend(["b", "c"])
        assert len(log) == 3
        log.clear()
        assert len(log) == 0
        assert log.generation == 1

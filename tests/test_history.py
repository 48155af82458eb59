"""tests for history navigation."""

from blakkout.console.history import HistoryNavigator


class TestNavigation:

    def test_walk_back_and_forth(self):
        h = HistoryNavigator()
        h.submit("a")
        h.submit("b")
        assert h.previous() == "b"
        assert h.previous() == "a"
        assert h.previous() == "a"  # floor at oldest
        assert h.next() == "b"
        assert h.next() == ""       # exits browsing
        assert h.cursor == -1

    def test_previous_on_empty_is_noop(self):
        h = HistoryNavigator()
        assert h.previous() is None
        assert h.cursor == -1

    def test_next_when_not_browsing_is_noop(self):
        h = HistoryNavigator()
        h.submit("a")
        assert h.next() is None
        assert h.cursor == -1

    def test_submit_resets_cursor(self):
        h = HistoryNavigator()
        h.submit("a")
        h.submit("b")
        h.previous()
        h.previous()
        h.submit("c")
        assert h.cursor == -1
        assert h.previous() == "c"

    def test_navigation_never_mutates(self):
        h = HistoryNavigator()
        for line in ("one", "two", "three"):
            h.submit(line)
        before = h.entries
        for _ in range(5):
            h.previous()
        for _ in range(5):
            h.next()
        assert h.entries == before

    def test_keeps_raw_text(self):
        h = HistoryNavigator()
        h.submit("  HELP me  ")
        assert h.entries == ("  HELP me  ",)

    def test_duplicates_kept_in_order(self):
        h = HistoryNavigator()
        h.submit("x")
        h.submit("x")
        assert len(h) == 2


class TestAppendOnly:

    def test_every_submission_is_kept(self):
        h = HistoryNavigator()
        for i in range(1500):
            h.submit(str(i))
        assert len(h) == 1500
        assert h.entries[0] == "0"
        assert h.entries[-1] == "1499"

    def test_seeded_entries(self):
        h = HistoryNavigator(entries=["old1", "old2"])
        assert h.previous() == "old2"

    def test_seed_list_is_copied(self):
        seed = ["a"]
        h = HistoryNavigator(entries=seed)
        h.submit("b")
        assert seed == ["a"]
        assert h.entries == ("a", "b")

"""tests for the keystroke sequence matcher."""

from blakkout.console.matcher import (
    KeystrokeSequenceMatcher, normalize_key, normalize_phrase,
)
from blakkout.config import Config
from blakkout.keys import KeyBus
from blakkout.unlocks import catalog


def _feed(matcher, keys, start_ms=0, step_ms=100):
    """feed keys one by one, returns the list of matches per key."""
    out = []
    t = start_ms
    for k in keys:
        out.append(matcher.on_key(k, t))
        t += step_ms
    return out


class TestNormalize:

    def test_arrows_pass_through(self):
        assert normalize_key("ArrowUp") == "ArrowUp"
        assert normalize_key("ArrowRight") == "ArrowRight"

    def test_a_and_b_become_tokens(self):
        assert normalize_key("a") == "KeyA"
        assert normalize_key("b") == "KeyB"

    def test_everything_else_verbatim(self):
        assert normalize_key("x") == "x"
        assert normalize_key("A") == "A"
        assert normalize_key("Shift") == "Shift"
        assert normalize_key("_") == "_"

    def test_odd_values_degrade(self):
        assert normalize_key(None) == ""
        assert normalize_key(7) == "7"

    def test_phrase(self):
        assert normalize_phrase(catalog.KONAMI_KEYS) == (
            "ArrowUpArrowUpArrowDownArrowDownArrowLeftArrowRightArrowLeftArrowRightKeyBKeyA"
        )
        assert normalize_phrase("grab") == "grKeyAKeyB"


class TestMatching:

    def test_konami_matches_on_last_key(self):
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG)
        results = _feed(m, catalog.KONAMI_KEYS)
        assert results[-1] == ["konami"]
        assert all(r == [] for r in results[:-1])

    def test_typed_phrase(self):
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG)
        results = _feed(m, "follow_the_white_rabbit")
        assert results[-1] == ["matrix"]
        assert all(r == [] for r in results[:-1])

    def test_phrase_inside_noise(self):
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG)
        results = _feed(m, "xyz find_the_truth")
        assert results[-1] == ["hidden"]

    def test_rematches_while_in_buffer(self):
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG)
        _feed(m, "find_the_truth")
        assert m.on_key("x", 1500) == ["hidden"]

    def test_gap_resets_buffer(self):
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG)
        _feed(m, "find_the", start_ms=0, step_ms=100)
        # last key at 700ms; next key 2101ms later
        results = _feed(m, "_truth", start_ms=2801, step_ms=100)
        assert all(r == [] for r in results)
        assert m.buffer == "_truth"

    def test_gap_exactly_at_limit_keeps_buffer(self):
        m = KeystrokeSequenceMatcher(phrases={"hidden": "ab"})
        m.on_key("a", 0)
        assert m.on_key("b", 2000) == ["hidden"]

    def test_truncation(self):
        m = KeystrokeSequenceMatcher()
        _feed(m, "x" * 101)
        assert len(m.buffer) == 50

    def test_buffer_never_exceeds_max(self):
        m = KeystrokeSequenceMatcher()
        for i in range(500):
            m.on_key("ArrowLeft", i)
            assert len(m.buffer) <= 100

    def test_on_match_callback(self):
        hits = []
        m = KeystrokeSequenceMatcher(phrases={"glitch": "ctrl+alt+glitch"}, on_match=hits.append)
        _feed(m, "ctrl+alt+glitch")
        assert hits == ["glitch"]

    def test_callback_errors_are_contained(self):
        def boom(uid):
            raise RuntimeError("nope")
        m = KeystrokeSequenceMatcher(phrases={"glitch": "g"}, on_match=boom)
        assert m.on_key("g", 0) == ["glitch"]

    def test_register_is_open_ended(self):
        m = KeystrokeSequenceMatcher()
        m.register("secret", "xyzzy")
        assert _feed(m, "xyzzy")[-1] == ["secret"]

    def test_config_windows(self):
        config = Config(values={"sequence_gap_ms": 10, "sequence_max_len": 20,
                                "sequence_keep_len": 5})
        m = KeystrokeSequenceMatcher.from_catalog(catalog.CATALOG, config)
        assert (m.gap_ms, m.max_len, m.keep_len) == (10, 20, 5)

    def test_reset(self):
        m = KeystrokeSequenceMatcher()
        m.on_key("x", 0)
        m.reset()
        assert m.buffer == ""
        assert m.last_key_ms is None


class TestKeySource:

    def test_attach_and_detach(self):
        bus = KeyBus()
        hits = []
        m = KeystrokeSequenceMatcher(phrases={"hidden": "hi"}, on_match=hits.append)
        m.attach(bus)
        assert bus.listeners() == 1
        bus.emit("h", 0)
        bus.emit("i", 10)
        assert hits == ["hidden"]

        m.detach()
        assert bus.listeners() == 0
        assert not m.attached

    def test_attach_twice_listens_once(self):
        bus = KeyBus()
        m = KeystrokeSequenceMatcher()
        m.attach(bus)
        m.attach(bus)
        assert bus.listeners() == 1

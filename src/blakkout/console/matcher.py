"""matcher.py - hears secret phrases in the raw key stream.

keys are normalized into tokens and appended to a rolling buffer.
a long pause wipes the buffer. after every key, every registered phrase
is checked by plain substring containment. a phrase that stays in the
buffer matches again on the next key; the registry dedupes, not us.

in the world: the ear pressed to the wall.
"""

from typing import Callable, Optional

from blakkout.log import debug

ARROWS = ("ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight")
_LETTER_TOKENS = {"a": "KeyA", "b": "KeyB"}


def normalize_key(raw) -> str:
    """one raw key -> one token. unknown values pass through as text."""
    if not isinstance(raw, str):
        return "" if raw is None else str(raw)
    if raw in ARROWS:
        return raw
    return _LETTER_TOKENS.get(raw, raw)


def normalize_phrase(keys) -> str:
    """a sequence of raw keys -> the token string the buffer would hold."""
    return "".join(normalize_key(k) for k in keys)


class KeystrokeSequenceMatcher:
    """rolling buffer of key tokens, checked against trigger phrases."""

    def __init__(self, phrases: dict = None, gap_ms: int = 2000,
                 max_len: int = 100, keep_len: int = 50,
                 on_match: Optional[Callable[[str], None]] = None):
        self.gap_ms = gap_ms
        self.max_len = max_len
        self.keep_len = keep_len
        self.on_match = on_match
        self.buffer = ""
        self.last_key_ms: Optional[float] = None
        self._phrases: dict[str, str] = {}
        self._bus = None
        for unlock_id, keys in (phrases or {}).items():
            self.register(unlock_id, keys)

    @classmethod
    def from_catalog(cls, catalog_defs, config=None, on_match=None):
        """one phrase per catalog entry, windows from config."""
        kwargs = {}
        if config is not None:
            kwargs = dict(
                gap_ms=int(config.get("sequence_gap_ms")),
                max_len=int(config.get("sequence_max_len")),
                keep_len=int(config.get("sequence_keep_len")),
            )
        return cls(
            phrases={d.id: d.phrase for d in catalog_defs},
            on_match=on_match,
            **kwargs,
        )

    def register(self, unlock_id: str, keys):
        """add a trigger. keys may be a string (one key per char) or a sequence."""
        token = normalize_phrase(keys)
        if token:
            self._phrases[unlock_id] = token

    @property
    def phrases(self) -> dict:
        return dict(self._phrases)

    def on_key(self, raw_key, now_ms: float) -> list[str]:
        """feed one key. returns the ids whose phrase is in the buffer."""
        if self.last_key_ms is not None and now_ms - self.last_key_ms > self.gap_ms:
            self.buffer = ""
        self.last_key_ms = now_ms

        self.buffer += normalize_key(raw_key)

        matched = [uid for uid, token in self._phrases.items() if token in self.buffer]

        if len(self.buffer) > self.max_len:
            self.buffer = self.buffer[-self.keep_len:]

        for uid in matched:
            debug("matcher", f"phrase for {uid} in buffer")
            if self.on_match is not None:
                try:
                    self.on_match(uid)
                except Exception as e:
                    debug("matcher", f"match handler failed: {e}")
        return matched

    def reset(self):
        self.buffer = ""
        self.last_key_ms = None

    # ============================================================
    # KEY SOURCE
    # ============================================================

    def handle_event(self, event):
        """KeyBus handler."""
        self.on_key(event.key, event.at_ms)

    def attach(self, bus):
        """listen to a key bus. one bus at a time."""
        self.detach()
        bus.subscribe(self.handle_event)
        self._bus = bus

    def detach(self):
        if self._bus is not None:
            self._bus.unsubscribe(self.handle_event)
            self._bus = None

    @property
    def attached(self) -> bool:
        return self._bus is not None

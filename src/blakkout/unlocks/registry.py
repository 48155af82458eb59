"""registry.py - the authority on which secrets are found.

every id is Locked until activated, then Unlocked until an explicit reset.
activate is idempotent: unknown ids, already-unlocked ids, and ids still
inside their debounce window are quiet no-ops. a fresh unlock persists the
whole state, fires one toast, and when it completes the set, schedules
exactly one grand-unlock toast a little later.

persistence and notification are injected. the registry never raises
into its caller: bad payloads fall back to defaults, failed writes are
logged and counted.

in the world: the vault door. it only opens once per lock,
and it remembers.
"""

import json

from blakkout.config import Config
from blakkout.log import debug, info, warn, span
from blakkout.scheduler import Scheduler
from blakkout.unlocks import catalog
from blakkout.unlocks.notify import INFO, SUCCESS


class _NullNotifier:
    def notify(self, kind: str, text: str, duration_ms: int):
        pass


class UnlockRegistry:
    """state machine over the fixed catalog.

    Usage:
        reg = UnlockRegistry(store=JsonFileStore(path), notifier=toaster,
                             scheduler=sched)
        reg.restore()
        reg.activate("konami")      # True the first time
        reg.activate("konami")      # False forever after
    """

    def __init__(self, store=None, notifier=None, scheduler: Scheduler = None,
                 config: Config = None):
        self.config = config or Config()
        self.store = store
        self.notifier = notifier or _NullNotifier()
        self.scheduler = scheduler or Scheduler()
        self.storage_key = self.config.get("storage_key")
        self.debounce_ms = int(self.config.get("debounce_ms"))
        self.grand_delay_ms = int(self.config.get("grand_unlock_delay_ms"))

        self._state: dict[str, bool] = catalog.defaults()
        self._debounce: dict[str, float] = {}
        self._all = False
        self._grand_timer = None
        self._activations = 0
        self._write_failures = 0
        self._grand_fired = 0

    # ============================================================
    # QUERIES
    # ============================================================

    def state(self) -> dict:
        return dict(self._state)

    def is_unlocked(self, unlock_id: str) -> bool:
        return bool(self._state.get(unlock_id, False))

    def unlocked_count(self) -> int:
        return sum(1 for v in self._state.values() if v)

    def total(self) -> int:
        return len(self._state)

    def all_unlocked(self) -> bool:
        return all(self._state.values())

    def unlocked_reward_texts(self) -> list[str]:
        """reward text for every unlocked id, in catalog order."""
        return [catalog.REWARDS[uid] for uid in catalog.UNLOCK_IDS if self._state[uid]]

    def in_debounce(self, unlock_id: str) -> bool:
        expiry = self._debounce.get(unlock_id)
        if expiry is None:
            return False
        if expiry <= self.scheduler.now_ms():
            del self._debounce[unlock_id]
            return False
        return True

    def stats(self) -> dict:
        return {
            "unlocked": self.unlocked_count(),
            "total": self.total(),
            "activations": self._activations,
            "write_failures": self._write_failures,
            "grand_unlocks": self._grand_fired,
            "debouncing": sorted(u for u in list(self._debounce) if self.in_debounce(u)),
        }

    # ============================================================
    # TRANSITIONS
    # ============================================================

    def activate(self, unlock_id: str) -> bool:
        """unlock an id. True only for a fresh unlock."""
        if not catalog.is_known(unlock_id):
            debug("registry", f"ignoring unknown unlock {unlock_id!r}")
            return False
        if self._state[unlock_id]:
            debug("registry", f"{unlock_id} already unlocked")
            return False
        if self.in_debounce(unlock_id):
            debug("registry", f"{unlock_id} still settling")
            return False

        with span("activate", subsystem="registry", unlock_id=unlock_id):
            self._state[unlock_id] = True
            self._debounce[unlock_id] = self.scheduler.now_ms() + self.debounce_ms
            self._activations += 1
            self._persist()
            info("registry", f"unlocked {unlock_id}",
                 count=self.unlocked_count(), total=self.total())
            self._notify(SUCCESS, f"Secret found: {catalog.REWARDS[unlock_id]}",
                         self.config.get("toast_ms"))
            self._check_grand()
        return True

    def reset(self):
        """lock everything again. the only way back."""
        with span("reset", subsystem="registry"):
            self._state = catalog.defaults()
            self._debounce.clear()
            self._all = False
            if self._grand_timer is not None:
                self._grand_timer.cancel()
                self._grand_timer = None
            self._persist()
            info("registry", "all unlocks reset")
            self._notify(INFO, "Secrets reset", self.config.get("reset_toast_ms"))

    def _check_grand(self):
        now_all = self.all_unlocked()
        if now_all and not self._all:
            info("registry", "every secret found, grand unlock scheduled",
                 delay_ms=self.grand_delay_ms)
            self._grand_timer = self.scheduler.call_later(
                self.grand_delay_ms, self._fire_grand, label="grand-unlock",
            )
        self._all = now_all

    def _fire_grand(self):
        self._grand_timer = None
        self._grand_fired += 1
        self._notify(SUCCESS, catalog.GRAND_REWARD, self.config.get("grand_toast_ms"))

    # ============================================================
    # PERSISTENCE
    # ============================================================

    def load(self, payload) -> bool:
        """merge a persisted payload over all-locked defaults.

        accepts a JSON string, bytes, an already-parsed dict, or None.
        unknown keys and non-boolean values are dropped. anything that
        won't parse leaves the defaults in place. returns True if the
        payload was used.
        """
        merged = catalog.defaults()
        used = False
        if payload is not None:
            try:
                if isinstance(payload, (bytes, bytearray)):
                    payload = payload.decode("utf-8")
                data = json.loads(payload) if isinstance(payload, str) else payload
                if not isinstance(data, dict):
                    raise TypeError(f"expected an object, got {type(data).__name__}")
                for key, value in data.items():
                    if catalog.is_known(key) and isinstance(value, bool):
                        merged[key] = value
                used = True
            except (ValueError, TypeError, RecursionError) as e:
                warn("registry", f"discarding persisted unlocks: {e}")
                merged = catalog.defaults()
        self._state = merged
        self._all = self.all_unlocked()
        return used

    def restore(self) -> bool:
        """load from the injected store, if there is one."""
        if self.store is None:
            return False
        try:
            payload = self.store.read(self.storage_key)
        except Exception as e:
            warn("registry", f"store read failed: {e}")
            payload = None
        return self.load(payload)

    def _persist(self):
        if self.store is None:
            return
        try:
            self.store.write(self.storage_key, json.dumps(self._state))
        except Exception as e:
            self._write_failures += 1
            warn("registry", f"could not persist unlocks: {e}")

    def _notify(self, kind: str, text: str, duration_ms):
        try:
            self.notifier.notify(kind, text, int(duration_ms))
        except Exception as e:
            warn("registry", f"notifier failed: {e}")

    # ============================================================
    # TEARDOWN
    # ============================================================

    def close(self):
        """cancel anything this registry still has scheduled."""
        if self._grand_timer is not None:
            self._grand_timer.cancel()
            self._grand_timer = None

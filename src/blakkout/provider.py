"""provider.py - builds the unlock engine and wires it together.

no shared ambient state. the provider owns one scheduler, one key bus,
one toaster, one store, one registry, and one matcher listening on the
bus. mount() restores state and starts listening. unmount() stops
listening and cancels every timer so nothing fires into a dead session.

in the world: the breaker panel. flip it on, everything hums.
flip it off, everything goes quiet.
"""

from typing import Callable, Optional

from blakkout.config import Config
from blakkout.console.history import HistoryNavigator
from blakkout.console.interpreter import CommandInterpreter
from blakkout.console.matcher import KeystrokeSequenceMatcher
from blakkout.console.session import ConsoleSession
from blakkout.keys import KeyBus
from blakkout.log import info
from blakkout.scheduler import Scheduler
from blakkout.unlocks import catalog
from blakkout.unlocks.notify import Toaster
from blakkout.unlocks.registry import UnlockRegistry
from blakkout.unlocks.store import JsonFileStore


class Provider:
    """one running session of the console and its secrets.

    Usage:
        with Provider(config=load_config()) as p:
            console = p.open_console()
            console.type_text("help")
            console.press("Enter")
            p.tick()
    """

    def __init__(self, config: Config = None, store=None, clock=None,
                 on_toast: Optional[Callable] = None,
                 on_dismiss: Optional[Callable] = None):
        self.config = config or Config()
        self.scheduler = Scheduler(clock)
        self.bus = KeyBus()
        self.toaster = Toaster(self.scheduler, on_show=on_toast, on_dismiss=on_dismiss)
        self.store = store if store is not None else JsonFileStore(self.config.store_path())
        self.registry = UnlockRegistry(
            store=self.store,
            notifier=self.toaster,
            scheduler=self.scheduler,
            config=self.config,
        )
        self.matcher = KeystrokeSequenceMatcher.from_catalog(
            catalog.CATALOG, self.config, on_match=self.registry.activate,
        )
        self.mounted = False

    def mount(self) -> "Provider":
        if self.mounted:
            return self
        self.registry.restore()
        self.matcher.attach(self.bus)
        self.mounted = True
        info("provider", "mounted",
             unlocked=self.registry.unlocked_count(), total=self.registry.total())
        return self

    def unmount(self):
        if not self.mounted:
            return
        self.matcher.detach()
        self.registry.close()
        self.toaster.close()
        self.scheduler.cancel_all()
        self.mounted = False
        info("provider", "unmounted")

    def open_console(self, history: HistoryNavigator = None,
                     on_close: Optional[Callable] = None) -> ConsoleSession:
        """a console session sharing this provider's bus and registry."""
        return ConsoleSession(
            interpreter=CommandInterpreter(self.registry),
            history=history or HistoryNavigator(),
            bus=self.bus,
            scheduler=self.scheduler,
            on_close=on_close,
        )

    def key(self, raw_key):
        """a global key-down from outside any console."""
        return self.bus.emit(raw_key, self.scheduler.now_ms(), source="global")

    def tick(self) -> int:
        """run whatever timers are due."""
        return self.scheduler.run_due()

    def __enter__(self):
        return self.mount()

    def __exit__(self, *exc):
        self.unmount()
        return False

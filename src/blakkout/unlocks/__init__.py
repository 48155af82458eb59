"""unlocks: the catalog, the registry, where it's stored, how it's announced."""

from .catalog import CATALOG, UNLOCK_IDS, REWARDS, GRAND_REWARD, UnlockDef
from .store import MemoryStore, JsonFileStore
from .notify import Toast, Toaster, INFO, SUCCESS
from .registry import UnlockRegistry

__all__ = [
    "CATALOG",
    "UNLOCK_IDS",
    "REWARDS",
    "GRAND_REWARD",
    "UnlockDef",
    "MemoryStore",
    "JsonFileStore",
    "Toast",
    "Toaster",
    "INFO",
    "SUCCESS",
    "UnlockRegistry",
]

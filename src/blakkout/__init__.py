"""blakkout: a console with secrets in it, and the engine that keeps track of them."""

from blakkout.unlocks import UnlockRegistry, CATALOG, UNLOCK_IDS, REWARDS
from blakkout.console import (
    CommandInterpreter, HistoryNavigator, KeystrokeSequenceMatcher, ConsoleSession,
)
from blakkout.provider import Provider

__all__ = [
    "UnlockRegistry", "CATALOG", "UNLOCK_IDS", "REWARDS",
    "CommandInterpreter", "HistoryNavigator", "KeystrokeSequenceMatcher", "ConsoleSession",
    "Provider",
]

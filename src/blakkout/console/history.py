"""history.py - what you typed before, and where you are in it.

the list only grows. up and down move a cursor, never the entries.
cursor -1 means you're not browsing.
"""

from typing import Optional


class HistoryNavigator:
    """append-only submissions plus a browsing cursor."""

    def __init__(self, entries=None):
        self._entries: list[str] = list(entries or [])
        self.cursor = -1

    @property
    def entries(self) -> tuple:
        return tuple(self._entries)

    @property
    def browsing(self) -> bool:
        return self.cursor != -1

    def __len__(self):
        return len(self._entries)

    def submit(self, line: str):
        """remember a submission, stop browsing."""
        self._entries.append(line)
        self.cursor = -1

    def previous(self) -> Optional[str]:
        """one step back. stops at the oldest. None if there's nothing."""
        if not self._entries:
            return None
        if self.cursor == -1:
            self.cursor = len(self._entries) - 1
        else:
            self.cursor = max(0, self.cursor - 1)
        return self._entries[self.cursor]

    def next(self) -> Optional[str]:
        """one step forward. past the newest, browsing ends and "" comes back.
        None if not browsing."""
        if self.cursor == -1:
            return None
        self.cursor += 1
        if self.cursor >= len(self._entries):
            self.cursor = -1
            return ""
        return self._entries[self.cursor]

"""paths.py - one place for all blakkout paths.

every file that touches ~/.blakkout/ imports from here.
"""

from pathlib import Path


def blakkout_home() -> Path:
    """~/.blakkout/ - the root of all blakkout state."""
    return Path.home() / ".blakkout"


def ensure_dir(path: Path) -> Path:
    """mkdir -p. returns the path for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path


# -- ~/.blakkout/ paths --
CONFIG_FILE = blakkout_home() / "config.json"
STORAGE_FILE = blakkout_home() / "storage.json"
HISTORY_FILE = blakkout_home() / "repl_history"

"""config.py - configuration management.

layered config: defaults -> global (~/.blakkout/config.json) -> project (.blakkout.json) -> env.
timing windows, buffer sizes, toast durations, where the unlocks live.

in the world: the fuse box. every delay in the console is wired through here.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from blakkout import paths
from blakkout.log import warn


_PROJECT_CONFIG_NAME = ".blakkout.json"


# ============================================================
# DEFAULTS
# ============================================================

DEFAULTS = {
    "debounce_ms": 1000,
    "grand_unlock_delay_ms": 2000,
    "sequence_gap_ms": 2000,
    "sequence_max_len": 100,
    "sequence_keep_len": 50,
    "toast_ms": 5000,
    "reset_toast_ms": 3000,
    "grand_toast_ms": 10000,
    "history_size": 1000,
    "storage_key": "blakkout_easter_eggs",
    "store_path": "",
    "log_level": "warn",
    "color_output": True,
}

_INT_KEYS = {k for k, v in DEFAULTS.items() if isinstance(v, int) and not isinstance(v, bool)}
_BOOL_KEYS = {k for k, v in DEFAULTS.items() if isinstance(v, bool)}


@dataclass
class Config:
    """merged configuration from all layers."""
    values: dict = field(default_factory=dict)
    source: str = ""  # which layer provided the final values

    def get(self, key: str, default=None):
        return self.values.get(key, DEFAULTS.get(key, default))

    def set(self, key: str, value):
        self.values[key] = value

    def __getitem__(self, key: str):
        return self.get(key)

    def __contains__(self, key: str):
        return key in self.values or key in DEFAULTS

    def to_dict(self) -> dict:
        merged = dict(DEFAULTS)
        merged.update(self.values)
        return merged

    def store_path(self) -> Path:
        """where the key-value store lives. empty means the default."""
        raw = self.get("store_path")
        return Path(raw).expanduser() if raw else paths.STORAGE_FILE


# ============================================================
# COERCION
# ============================================================

def coerce(key: str, value):
    """turn a raw (string) value into the type its default has.
    raises ValueError for unknown keys or bad numbers."""
    if key not in DEFAULTS:
        raise ValueError(f"unknown config key: {key}")
    if key in _BOOL_KEYS:
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("true", "1", "yes")
    if key in _INT_KEYS:
        return int(value)
    return str(value)


# ============================================================
# CONFIG LOADING
# ============================================================

def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerced(layer: dict, where: str) -> dict:
    """typed copy of a file layer. unknown keys and bad values are dropped."""
    clean = {}
    for key, value in layer.items():
        try:
            clean[key] = coerce(key, value)
        except (ValueError, TypeError) as e:
            warn("config", f"ignoring {key} from {where}: {e}")
    return clean


def load_global() -> dict:
    """load global config from ~/.blakkout/config.json."""
    return _read_json(paths.CONFIG_FILE)


def save_global(config: dict):
    """save global config."""
    paths.ensure_dir(paths.CONFIG_FILE.parent)
    paths.CONFIG_FILE.write_text(json.dumps(config, indent=2) + "\n")


def load_project(root: str = ".") -> dict:
    """load project config from .blakkout.json in project root."""
    return _read_json(Path(root) / _PROJECT_CONFIG_NAME)


def save_project(config: dict, root: str = "."):
    """save project config to .blakkout.json."""
    config_path = Path(root) / _PROJECT_CONFIG_NAME
    config_path.write_text(json.dumps(config, indent=2) + "\n")


def load_config(root: str = ".") -> Config:
    """load merged config: defaults -> global -> project -> env."""
    merged = dict(DEFAULTS)

    global_config = _coerced(load_global(), "global config")
    merged.update(global_config)

    project_config = _coerced(load_project(root), "project config")
    merged.update(project_config)

    env_overrides = _env_overrides()
    merged.update(env_overrides)

    source = "defaults"
    if env_overrides:
        source = "env"
    elif project_config:
        source = "project"
    elif global_config:
        source = "global"

    return Config(values=merged, source=source)


def _env_overrides() -> dict:
    """BLAKKOUT_<KEY> overrides, e.g. BLAKKOUT_DEBOUNCE_MS=500."""
    overrides = {}
    for key in DEFAULTS:
        value = os.environ.get(f"BLAKKOUT_{key.upper()}")
        if value is None:
            continue
        try:
            overrides[key] = coerce(key, value)
        except ValueError:
            pass
    return overrides


# ============================================================
# CONFIG HELPERS
# ============================================================

def get_value(key: str, root: str = "."):
    """get a single config value (merged)."""
    return load_config(root).get(key)


def set_global_value(key: str, value):
    """set a value in the global config."""
    config = load_global()
    config[key] = coerce(key, value)
    save_global(config)


def set_project_value(key: str, value, root: str = "."):
    """set a value in the project config."""
    config = load_project(root)
    config[key] = coerce(key, value)
    save_project(config, root)


def list_config(root: str = ".") -> dict:
    """list all config values with their sources."""
    global_config = _coerced(load_global(), "global config")
    project_config = _coerced(load_project(root), "project config")
    env = _env_overrides()

    result = {}
    for key in DEFAULTS:
        source = "default"
        value = DEFAULTS[key]

        if key in global_config:
            source = "global"
            value = global_config[key]
        if key in project_config:
            source = "project"
            value = project_config[key]
        if key in env:
            source = "env"
            value = env[key]

        result[key] = {"value": value, "source": source}

    return result

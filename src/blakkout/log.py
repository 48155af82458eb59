"""log.py - the backbone. logger and tracer.

one call per line. everything visible above the level.
every log line is also a span event on whatever span is open,
and goes to the sink if one is registered.

in the world: the wire tap. every keystroke the console
hears leaves a trace somewhere.
"""

import sys
from contextlib import contextmanager
from datetime import datetime

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    SimpleSpanProcessor,
    ConsoleSpanExporter,
)

# ============================================================
# TRACER SETUP
# ============================================================

_provider = TracerProvider()
_tracer = _provider.get_tracer("blakkout", "0.1.0")
_console_export = False


def enable_console_export():
    """turn on span export to stderr."""
    global _console_export
    if not _console_export:
        _provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter())
        )
        _console_export = True


def add_exporter(exporter):
    """add a custom span exporter (OTLP, Jaeger, etc)."""
    _provider.add_span_processor(SimpleSpanProcessor(exporter))


def get_tracer():
    """get the blakkout tracer for custom instrumentation."""
    return _tracer


# ============================================================
# LOGGER
# ============================================================

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_level = LEVELS["info"]
_sink = None


def set_level(level: str):
    """minimum level printed to the console. unknown names fall back to info."""
    global _level
    _level = LEVELS.get(str(level).lower(), LEVELS["info"])


def get_level() -> str:
    for name, value in LEVELS.items():
        if value == _level:
            return name
    return "info"


def set_sink(fn):
    """register where logs go besides console. fn(subsystem, level, message, attrs).
    pass None to remove it."""
    global _sink
    _sink = fn


def log(subsystem: str, level: str, message: str, **attrs):
    """log to console, record as span event, forward to sink."""
    if LEVELS.get(level, LEVELS["info"]) >= _level:
        ts = datetime.now().strftime("%H:%M:%S")
        prefix = f"[{ts} blakkout:{subsystem}]"
        dest = sys.stderr if level in ("warn", "error") else sys.stdout
        print(f"{prefix} {message}", file=dest)

    # record as span event
    current = trace.get_current_span()
    if current and current.is_recording():
        current.add_event(
            f"blakkout.{subsystem}.{level}",
            attributes={"message": message, "subsystem": subsystem,
                        **{k: str(v) for k, v in attrs.items()}},
        )

    if _sink is not None:
        try:
            _sink(subsystem, level, message, attrs if attrs else None)
        except Exception:
            pass  # sink errors never block the caller


def debug(subsystem: str, message: str, **attrs):
    log(subsystem, "debug", message, **attrs)


def info(subsystem: str, message: str, **attrs):
    log(subsystem, "info", message, **attrs)


def warn(subsystem: str, message: str, **attrs):
    log(subsystem, "warn", message, **attrs)


def error(subsystem: str, message: str, **attrs):
    log(subsystem, "error", message, **attrs)


# ============================================================
# SPANS
# ============================================================

@contextmanager
def span(name: str, subsystem: str = "blakkout", **attrs):
    """Create a traced span. Logs inside it become span events.

    Usage:
        with span("activate", subsystem="registry", unlock_id="konami"):
            ...
    """
    with _tracer.start_as_current_span(
        f"blakkout.{subsystem}.{name}",
        attributes={f"blakkout.{k}": str(v) for k, v in attrs.items()},
    ) as s:
        s.set_attribute("blakkout.subsystem", subsystem)
        yield s

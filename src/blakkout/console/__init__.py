"""console: the command language, its history, and the ear on the keyboard."""

from .history import HistoryNavigator
from .matcher import KeystrokeSequenceMatcher, normalize_key, normalize_phrase
from .interpreter import (
    CommandInterpreter,
    CommandTable,
    CommandLine,
    Effect,
    OutputLine,
    Result,
    parse_line,
)
from .commands import COMMANDS
from .session import ConsoleSession, OutputLog

__all__ = [
    "HistoryNavigator",
    "KeystrokeSequenceMatcher",
    "normalize_key",
    "normalize_phrase",
    "CommandInterpreter",
    "CommandTable",
    "CommandLine",
    "Effect",
    "OutputLine",
    "Result",
    "parse_line",
    "COMMANDS",
    "ConsoleSession",
    "OutputLog",
]

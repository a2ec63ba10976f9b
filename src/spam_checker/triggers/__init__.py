"""Trigger word storage and spreadsheet import."""

from .defaults import DEFAULT_TRIGGER_WORDS
from .sheets import (
    EmptyResultError,
    FetchError,
    GoogleSheetClient,
    InvalidUrlError,
    ParseError,
    SchemaError,
    TriggerImportError,
    parse_trigger_csv,
)
from .store import TriggerStore

__all__ = [
    "DEFAULT_TRIGGER_WORDS",
    "EmptyResultError",
    "FetchError",
    "GoogleSheetClient",
    "InvalidUrlError",
    "ParseError",
    "SchemaError",
    "TriggerImportError",
    "TriggerStore",
    "parse_trigger_csv",
]

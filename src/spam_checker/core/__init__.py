"""Core utilities for configuration, logging, and domain models."""

from .config import (
    AppSettings,
    LoggingSettings,
    ScoringSettings,
    SheetSettings,
    load_app_settings,
)
from .logging import configure_logging
from .models import AnalysisReport, TriggerMatch, TriggerWord

__all__ = [
    "AnalysisReport",
    "AppSettings",
    "LoggingSettings",
    "ScoringSettings",
    "SheetSettings",
    "TriggerMatch",
    "TriggerWord",
    "configure_logging",
    "load_app_settings",
]

"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import BaseModel, Field

DEFAULT_EXPORT_URL_TEMPLATE = (
    "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"
)


class ScoringSettings(BaseModel):
    """Weights and thresholds applied by the spam analyzer."""

    high_impact: int = Field(default=15, description="Score added per high trigger")
    medium_impact: int = Field(
        default=8, description="Score added per medium trigger"
    )
    low_impact: int = Field(default=3, description="Score added per low trigger")
    all_caps_penalty: int = Field(
        default=10, description="Score added when capitals dominate the text"
    )
    caps_ratio_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Uppercase-to-length ratio above which text counts as shouting",
    )
    exclamation_threshold: int = Field(
        default=3, ge=0, description="Exclamation marks tolerated before penalising"
    )
    min_words: int = Field(default=20, ge=0, description="Shortest acceptable body")
    max_words: int = Field(default=500, ge=0, description="Longest acceptable body")
    high_score_threshold: int = Field(
        default=30, description="Score above which a rewrite is suggested"
    )
    processing_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Artificial pause before analysis results are produced",
    )

    def impact_for(self, severity: str) -> int:
        """Return the score contribution for a trigger of ``severity``."""
        if severity == "high":
            return self.high_impact
        if severity == "medium":
            return self.medium_impact
        return self.low_impact


class SheetSettings(BaseModel):
    """Settings for importing trigger words from Google Sheets."""

    export_url_template: str = Field(
        default=DEFAULT_EXPORT_URL_TEMPLATE,
        description="CSV export endpoint; must contain a {sheet_id} placeholder",
    )
    timeout_seconds: float = Field(
        default=10.0, gt=0, description="Request timeout for sheet downloads"
    )


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Toggle JSON structured logging"
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    sheets: SheetSettings = Field(default_factory=SheetSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


ENV_PREFIX = "SPAM_CHECKER_"


def _normalize_key(raw_key: str) -> list[str]:
    """Convert an environment variable key into a nested attribute path."""
    trimmed = raw_key.removeprefix(ENV_PREFIX)
    return [segment.lower() for segment in trimmed.split("__") if segment]


def _merge_into_tree(tree: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a value to a nested dictionary given a path."""
    cursor = tree
    for segment in path[:-1]:
        next_node = cursor.setdefault(segment, {})
        cursor = cast(dict[str, Any], next_node)
    cursor[path[-1]] = value


def _collect_env_values(
    env_file: Path | str | None, *, include_environment: bool = True
) -> dict[str, Any]:
    """Load configuration values from environment variables and optional file."""
    collected: dict[str, Any] = {}

    file_values = {}
    if env_file:
        env_path = Path(env_file)
        if env_path.is_file():
            file_values = {
                key: value
                for key, value in dotenv_values(env_path).items()
                if key and key.startswith(ENV_PREFIX)
            }

    env_values = {}
    if include_environment:
        env_values = {
            key: value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        }

    combined: dict[str, Any] = {**file_values, **env_values}

    for key, value in combined.items():
        path = _normalize_key(key)
        if not path:
            continue
        normalized_value: Any = value
        if isinstance(value, str) and value == "":
            # Blank values fall back to the model default.
            continue
        if isinstance(value, str):
            lowercase_value = value.lower()
            if lowercase_value == "true":
                normalized_value = True
            elif lowercase_value == "false":
                normalized_value = False
        _merge_into_tree(collected, path, normalized_value)

    return collected


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load application settings, applying env files and overrides."""
    collected = _collect_env_values(env_file, include_environment=include_environment)
    if overrides:
        collected.update(overrides)
    return AppSettings.model_validate(collected)


__all__ = [
    "AppSettings",
    "DEFAULT_EXPORT_URL_TEMPLATE",
    "LoggingSettings",
    "ScoringSettings",
    "SheetSettings",
    "load_app_settings",
]

"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from spam_checker.core.config import ScoringSettings, load_app_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Ensure each test sees a fresh settings instance."""

    load_app_settings.cache_clear()


def test_defaults_loaded_without_env_file() -> None:
    """Default values should be returned when no overrides are present."""

    settings = load_app_settings(include_environment=False)
    assert settings.scoring.high_impact == 15
    assert settings.scoring.medium_impact == 8
    assert settings.scoring.low_impact == 3
    assert settings.scoring.all_caps_penalty == 10
    assert settings.sheets.export_url_template.endswith("export?format=csv")
    assert settings.logging.level == "INFO"


def test_env_file_overrides(tmp_path: Path) -> None:
    """Values defined in an env file should override defaults."""

    env_file = tmp_path / "test.env"
    env_file.write_text(
        "SPAM_CHECKER_SCORING__HIGH_IMPACT=20\n"
        "SPAM_CHECKER_LOGGING__STRUCTURED=true\n"
        "SPAM_CHECKER_SHEETS__TIMEOUT_SECONDS=\n",
        encoding="utf-8",
    )

    settings = load_app_settings(env_file=env_file, include_environment=False)
    assert settings.scoring.high_impact == 20
    assert settings.logging.structured is True
    assert settings.sheets.timeout_seconds == 10.0


def test_environment_variables_take_precedence(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text("SPAM_CHECKER_SCORING__MIN_WORDS=10\n", encoding="utf-8")
    monkeypatch.setenv("SPAM_CHECKER_SCORING__MIN_WORDS", "5")

    settings = load_app_settings(env_file=env_file)
    assert settings.scoring.min_words == 5


def test_impact_for_maps_severities() -> None:
    scoring = ScoringSettings()

    assert scoring.impact_for("high") == 15
    assert scoring.impact_for("medium") == 8
    assert scoring.impact_for("low") == 3

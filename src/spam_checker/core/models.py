"""Core domain models used across the application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Severity = Literal["low", "medium", "high"]
LengthAnalysis = Literal["too short", "too long", "good"]
ScoreBand = Literal["low", "moderate", "high"]

SEVERITY_LEVELS: tuple[str, ...] = ("low", "medium", "high")


@dataclass(frozen=True, slots=True)
class TriggerWord:
    """Phrase that raises the spam score when present in an email."""

    word: str
    severity: Severity


@dataclass(frozen=True, slots=True)
class TriggerMatch:
    """Trigger found in an analysed email together with its score impact."""

    word: str
    severity: Severity
    impact: int


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Outcome of a single spam analysis run."""

    spam_score: int
    triggers: tuple[TriggerMatch, ...]
    length_analysis: LengthAnalysis
    subject_line_present: bool
    html_content: bool
    all_caps: bool
    excessive_punctuation: bool
    suggestions: tuple[str, ...]
    word_count: int = 0
    exclamation_count: int = 0

    @property
    def score_band(self) -> ScoreBand:
        """Coarse rating used when displaying the score."""
        return score_band(self.spam_score)


def score_band(score: int) -> ScoreBand:
    """Map a spam score onto the low / moderate / high display bands."""
    if score < 15:
        return "low"
    if score < 30:
        return "moderate"
    return "high"


__all__ = [
    "AnalysisReport",
    "LengthAnalysis",
    "SEVERITY_LEVELS",
    "ScoreBand",
    "Severity",
    "TriggerMatch",
    "TriggerWord",
    "score_band",
]

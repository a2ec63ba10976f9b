"""Heuristic spam scoring for email copy."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from spam_checker.core.config import ScoringSettings
from spam_checker.core.interfaces import TriggerProvider
from spam_checker.core.models import (
    AnalysisReport,
    LengthAnalysis,
    TriggerMatch,
    TriggerWord,
)

LOGGER = logging.getLogger(__name__)

SHORT_EMAIL_SUGGESTION = (
    "Email is very short. Consider adding more content to make it appear "
    "legitimate."
)
LONG_EMAIL_SUGGESTION = "Email is quite long, which might decrease readability."
MISSING_SUBJECT_SUGGESTION = (
    "No subject line detected. Include a clear, non-spammy subject line."
)
HTML_SUGGESTION = (
    "HTML content detected. Ensure your HTML is well-formed and balanced with "
    "text."
)
ALL_CAPS_SUGGESTION = (
    "Excessive use of capital letters detected. Reduce capitals to avoid spam "
    "triggers."
)
PUNCTUATION_SUGGESTION = (
    "Excessive exclamation marks detected. Reduce to improve deliverability."
)
HIGH_SCORE_SUGGESTION = (
    "Your email has a high spam score. Consider rewriting with less "
    "promotional language."
)

_SUBJECT_AT_START = re.compile(r"subject:", re.IGNORECASE)
_SUBJECT_ON_LINE = re.compile(r"\nsubject:", re.IGNORECASE)
_HTML_MARKERS = re.compile(r"<html|<body|<table|<div|<img|<a\s+href", re.IGNORECASE)
_UPPERCASE = re.compile(r"[A-Z]")


@lru_cache(maxsize=1024)
def trigger_pattern(phrase: str) -> re.Pattern[str] | None:
    """Compile the word-boundary pattern for ``phrase``.

    Each run of whitespace inside the phrase matches one or more whitespace
    characters in the email. Blank phrases yield ``None``.
    """
    tokens = phrase.split()
    if not tokens:
        return None
    body = r"\s+".join(re.escape(token) for token in tokens)
    return re.compile(rf"\b{body}\b", re.IGNORECASE)


def find_triggers(
    email_text: str,
    triggers: Sequence[TriggerWord],
    settings: ScoringSettings,
) -> list[TriggerMatch]:
    """Return one match per trigger present in ``email_text``, in list order."""
    matches: list[TriggerMatch] = []
    for trigger in triggers:
        pattern = trigger_pattern(trigger.word)
        if pattern is None or pattern.search(email_text) is None:
            continue
        matches.append(
            TriggerMatch(
                word=trigger.word,
                severity=trigger.severity,
                impact=settings.impact_for(trigger.severity),
            )
        )
    return matches


def count_words(email_text: str) -> int:
    return len(email_text.split())


def classify_length(word_count: int, settings: ScoringSettings) -> LengthAnalysis:
    if word_count < settings.min_words:
        return "too short"
    if word_count > settings.max_words:
        return "too long"
    return "good"


def has_subject_line(email_text: str) -> bool:
    return bool(
        _SUBJECT_AT_START.match(email_text) or _SUBJECT_ON_LINE.search(email_text)
    )


def has_html(email_text: str) -> bool:
    return _HTML_MARKERS.search(email_text) is not None


def capitals_ratio(email_text: str) -> float:
    """Share of ``A-Z`` characters over the full text length."""
    if not email_text:
        return 0.0
    return len(_UPPERCASE.findall(email_text)) / len(email_text)


def analyze(
    email_text: str,
    triggers: Sequence[TriggerWord],
    settings: ScoringSettings | None = None,
) -> AnalysisReport:
    """Score ``email_text`` against ``triggers`` and common formatting smells."""
    scoring = settings or ScoringSettings()
    suggestions: list[str] = []

    matches = find_triggers(email_text, triggers, scoring)
    spam_score = sum(match.impact for match in matches)

    word_count = count_words(email_text)
    length_analysis = classify_length(word_count, scoring)
    if length_analysis == "too short":
        suggestions.append(SHORT_EMAIL_SUGGESTION)
    elif length_analysis == "too long":
        suggestions.append(LONG_EMAIL_SUGGESTION)

    subject_line_present = has_subject_line(email_text)
    if not subject_line_present:
        suggestions.append(MISSING_SUBJECT_SUGGESTION)

    html_content = has_html(email_text)
    if html_content:
        suggestions.append(HTML_SUGGESTION)

    all_caps = capitals_ratio(email_text) > scoring.caps_ratio_threshold
    if all_caps:
        spam_score += scoring.all_caps_penalty
        suggestions.append(ALL_CAPS_SUGGESTION)

    exclamation_count = email_text.count("!")
    excessive_punctuation = exclamation_count > scoring.exclamation_threshold
    if excessive_punctuation:
        spam_score += exclamation_count
        suggestions.append(PUNCTUATION_SUGGESTION)

    if spam_score > scoring.high_score_threshold:
        suggestions.append(HIGH_SCORE_SUGGESTION)

    LOGGER.debug(
        "Analysed %d words: score=%d triggers=%d",
        word_count,
        spam_score,
        len(matches),
    )
    return AnalysisReport(
        spam_score=spam_score,
        triggers=tuple(matches),
        length_analysis=length_analysis,
        subject_line_present=subject_line_present,
        html_content=html_content,
        all_caps=all_caps,
        excessive_punctuation=excessive_punctuation,
        suggestions=tuple(suggestions),
        word_count=word_count,
        exclamation_count=exclamation_count,
    )


class AnalysisService:
    """Run analyses against whatever trigger list is active when requested."""

    def __init__(
        self,
        provider: TriggerProvider,
        settings: ScoringSettings | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings or ScoringSettings()

    @property
    def settings(self) -> ScoringSettings:
        return self._settings

    def analyze_now(self, email_text: str) -> AnalysisReport:
        """Analyse synchronously using the current trigger snapshot."""
        return analyze(email_text, tuple(self._provider.triggers), self._settings)

    async def analyze(self, email_text: str) -> AnalysisReport:
        """Analyse after the configured processing delay.

        The trigger list is captured before waiting, so an import that
        completes during the delay does not affect this result.
        """
        snapshot = tuple(self._provider.triggers)
        delay = self._settings.processing_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
        return analyze(email_text, snapshot, self._settings)


def report_payload(report: AnalysisReport) -> dict[str, Any]:
    """Return the camelCase JSON representation of ``report``."""
    return {
        "spamScore": report.spam_score,
        "triggers": [
            {"word": match.word, "severity": match.severity, "impact": match.impact}
            for match in report.triggers
        ],
        "lengthAnalysis": report.length_analysis,
        "subjectLinePresent": report.subject_line_present,
        "htmlContent": report.html_content,
        "allCaps": report.all_caps,
        "excessivePunctuation": report.excessive_punctuation,
        "suggestions": list(report.suggestions),
    }


__all__ = [
    "AnalysisService",
    "analyze",
    "capitals_ratio",
    "classify_length",
    "count_words",
    "find_triggers",
    "has_html",
    "has_subject_line",
    "report_payload",
    "trigger_pattern",
]

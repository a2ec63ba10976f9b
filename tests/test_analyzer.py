"""Tests for the heuristic spam analyzer."""

from __future__ import annotations

import asyncio

import pytest

from spam_checker.analysis import AnalysisService, analyze
from spam_checker.analysis.analyzer import (
    ALL_CAPS_SUGGESTION,
    HIGH_SCORE_SUGGESTION,
    HTML_SUGGESTION,
    LONG_EMAIL_SUGGESTION,
    MISSING_SUBJECT_SUGGESTION,
    PUNCTUATION_SUGGESTION,
    SHORT_EMAIL_SUGGESTION,
    capitals_ratio,
)
from spam_checker.core.config import ScoringSettings
from spam_checker.core.models import TriggerMatch, TriggerWord
from spam_checker.triggers import DEFAULT_TRIGGER_WORDS

FILLER = (
    "Subject: quarterly planning\n"
    "Hi team, here are the notes from our planning session last week. "
    "We reviewed the roadmap, discussed hiring, and agreed on the next "
    "steps for the platform migration."
)


def test_empty_text_produces_clean_report() -> None:
    report = analyze("", DEFAULT_TRIGGER_WORDS)

    assert report.spam_score == 0
    assert report.triggers == ()
    assert report.length_analysis == "too short"
    assert not report.subject_line_present
    assert not report.html_content
    assert not report.all_caps
    assert not report.excessive_punctuation
    assert SHORT_EMAIL_SUGGESTION in report.suggestions
    assert MISSING_SUBJECT_SUGGESTION in report.suggestions


def test_single_trigger_phrase_is_reported_once() -> None:
    report = analyze("please buy now, really, buy now", DEFAULT_TRIGGER_WORDS)

    assert report.triggers == (
        TriggerMatch(word="buy now", severity="high", impact=15),
    )
    assert report.spam_score >= 15


def test_trigger_matching_respects_word_boundaries() -> None:
    report = analyze("We value freedom of speech.", [TriggerWord("free", "medium")])

    assert report.triggers == ()
    assert report.spam_score == 0


def test_multi_word_trigger_tolerates_extra_whitespace() -> None:
    triggers = [TriggerWord("act now", "high")]

    spaced = analyze("You must act    now to continue", triggers)
    wrapped = analyze("You must act\nnow to continue", triggers)

    assert [match.word for match in spaced.triggers] == ["act now"]
    assert [match.word for match in wrapped.triggers] == ["act now"]


def test_trigger_matching_is_case_insensitive() -> None:
    report = analyze("You are a WINNER", [TriggerWord("winner", "high")])

    assert report.triggers[0].impact == 15


def test_triggers_keep_list_order_and_duplicates() -> None:
    triggers = [
        TriggerWord("offer", "low"),
        TriggerWord("cash", "medium"),
        TriggerWord("offer", "low"),
    ]

    report = analyze("cash offer inside", triggers)

    assert [match.word for match in report.triggers] == ["offer", "cash", "offer"]
    assert report.spam_score == 3 + 8 + 3


def test_regex_metacharacters_in_triggers_are_literal() -> None:
    triggers = [TriggerWord("a+b", "low"), TriggerWord("c.d", "low")]

    report = analyze("a+b appears here but cxd does not", triggers)

    assert [match.word for match in report.triggers] == ["a+b"]


def test_blank_trigger_never_matches() -> None:
    report = analyze("anything at all", [TriggerWord("   ", "high")])

    assert report.triggers == ()


def test_long_text_without_triggers_is_flagged_too_long() -> None:
    text = " ".join(f"token{index}" for index in range(600))

    report = analyze(text, DEFAULT_TRIGGER_WORDS)

    assert report.length_analysis == "too long"
    assert LONG_EMAIL_SUGGESTION in report.suggestions
    assert report.spam_score == 0


def test_length_within_bounds_is_good() -> None:
    report = analyze(FILLER, DEFAULT_TRIGGER_WORDS)

    assert report.length_analysis == "good"
    assert SHORT_EMAIL_SUGGESTION not in report.suggestions
    assert LONG_EMAIL_SUGGESTION not in report.suggestions


def test_subject_line_detected_at_start_or_after_newline() -> None:
    assert analyze("SUBJECT: hello", ()).subject_line_present
    assert analyze("From: me\nSubject: hello", ()).subject_line_present
    assert not analyze("Re subject: hello", ()).subject_line_present


@pytest.mark.parametrize(
    "markup",
    [
        "<html><p>Hi</p></html>",
        "<BODY>Hi</BODY>",
        "<table><tr><td>Hi</td></tr></table>",
        '<div class="offer">Hi</div>',
        '<img src="https://example.com/pixel.png">',
        'Click <A HREF="https://example.com">here</a>',
    ],
)
def test_html_markup_is_detected(markup: str) -> None:
    report = analyze(markup, ())

    assert report.html_content
    assert HTML_SUGGESTION in report.suggestions


def test_plain_inline_tags_are_not_flagged_as_html() -> None:
    report = analyze("Prices <span>drop</span> today, a < b and <anchor>", ())

    assert not report.html_content
    assert HTML_SUGGESTION not in report.suggestions


def test_all_caps_adds_fixed_penalty() -> None:
    text = "ALL ENTIRELY UPPERCASE AND LONG ENOUGH TO AVOID THE SHORT-LENGTH RULE"

    report = analyze(text, DEFAULT_TRIGGER_WORDS)

    assert report.all_caps
    assert report.triggers == ()
    assert not report.excessive_punctuation
    assert report.spam_score == 10
    assert ALL_CAPS_SUGGESTION in report.suggestions


def test_capitals_ratio_guards_empty_text() -> None:
    assert capitals_ratio("") == 0.0
    assert capitals_ratio("Ab") == 0.5


def test_exclamation_marks_add_their_count() -> None:
    report = analyze("hello there!!!!!", ())

    assert report.excessive_punctuation
    assert report.spam_score == 5
    assert PUNCTUATION_SUGGESTION in report.suggestions


def test_three_exclamation_marks_are_tolerated() -> None:
    report = analyze("wow!!!", ())

    assert not report.excessive_punctuation
    assert report.spam_score == 0


def test_high_score_adds_rewrite_suggestion_and_score_is_unbounded() -> None:
    text = (
        "WINNER! BUY NOW! ACT NOW! RISK-FREE MILLION CASH! "
        "CONGRATULATIONS, DON'T DELETE THIS URGENT OFFER!!!"
    )

    report = analyze(text, DEFAULT_TRIGGER_WORDS)

    assert report.spam_score > 100
    assert report.suggestions[-1] == HIGH_SCORE_SUGGESTION
    expected = (
        sum(match.impact for match in report.triggers) + 10 + report.exclamation_count
    )
    assert report.spam_score == expected


def test_custom_scoring_settings_are_applied() -> None:
    settings = ScoringSettings(high_impact=40, high_score_threshold=35)

    report = analyze("buy now", DEFAULT_TRIGGER_WORDS, settings)

    assert report.spam_score == 40
    assert HIGH_SCORE_SUGGESTION in report.suggestions


class _MutableProvider:
    def __init__(self, triggers: tuple[TriggerWord, ...]) -> None:
        self.triggers = triggers


@pytest.mark.asyncio
async def test_service_uses_triggers_captured_at_request_time() -> None:
    provider = _MutableProvider((TriggerWord("cash", "medium"),))
    service = AnalysisService(
        provider, ScoringSettings(processing_delay_seconds=0.05)
    )

    pending = asyncio.create_task(service.analyze("cash only"))
    await asyncio.sleep(0)
    provider.triggers = ()
    report = await pending

    assert [match.word for match in report.triggers] == ["cash"]


def test_service_analyze_now_reads_current_triggers() -> None:
    provider = _MutableProvider((TriggerWord("cash", "medium"),))
    service = AnalysisService(provider)

    assert service.analyze_now("cash").spam_score == 8
    provider.triggers = ()
    assert service.analyze_now("cash").spam_score == 0

"""Built-in trigger words used until a custom list is imported."""

from __future__ import annotations

from spam_checker.core.models import TriggerWord

DEFAULT_TRIGGER_WORDS: tuple[TriggerWord, ...] = (
    TriggerWord("free", "medium"),
    TriggerWord("buy now", "high"),
    TriggerWord("click here", "medium"),
    TriggerWord("limited time", "medium"),
    TriggerWord("urgent", "medium"),
    TriggerWord("act now", "high"),
    TriggerWord("guarantee", "low"),
    TriggerWord("cash", "medium"),
    TriggerWord("winner", "high"),
    TriggerWord("discount", "low"),
    TriggerWord("offer", "low"),
    TriggerWord("credit", "medium"),
    TriggerWord("investment", "medium"),
    TriggerWord("congratulations", "medium"),
    TriggerWord("save", "low"),
    TriggerWord("risk-free", "high"),
    TriggerWord("no obligation", "medium"),
    TriggerWord("don't delete", "high"),
    TriggerWord("million", "high"),
    TriggerWord("100%", "medium"),
)

__all__ = ["DEFAULT_TRIGGER_WORDS"]

"""In-memory holder for the active trigger word list."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime

from spam_checker.core.datetime_utils import display_datetime, utc_now
from spam_checker.core.interfaces import SheetSource
from spam_checker.core.models import TriggerWord

from .defaults import DEFAULT_TRIGGER_WORDS
from .sheets import GoogleSheetClient, TriggerImportError

LOGGER = logging.getLogger(__name__)


class TriggerStore:
    """Ordered trigger list that is only ever replaced as a whole.

    The store starts out with the built-in defaults. ``import_from_sheet``
    swaps in a list downloaded from a spreadsheet, and ``load_defaults``
    brings the built-in list back. A failed import leaves the current list
    untouched and records the error message in ``last_error``.
    """

    def __init__(
        self,
        sheet_source: SheetSource | None = None,
        *,
        defaults: Iterable[TriggerWord] = DEFAULT_TRIGGER_WORDS,
    ) -> None:
        self._sheet_source: SheetSource = sheet_source or GoogleSheetClient()
        self._defaults: tuple[TriggerWord, ...] = tuple(defaults)
        self._triggers: tuple[TriggerWord, ...] = self._defaults
        self._last_updated: datetime | None = None
        self._reset_to_defaults = False
        self._last_error: str | None = None
        self._import_lock = asyncio.Lock()

    @property
    def triggers(self) -> tuple[TriggerWord, ...]:
        """Snapshot of the active trigger list."""
        return self._triggers

    @property
    def count(self) -> int:
        return len(self._triggers)

    @property
    def is_default(self) -> bool:
        """Whether the built-in list is the active one."""
        return self._triggers == self._defaults

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def last_updated_label(self) -> str | None:
        """Human readable last-updated indicator, ``None`` before any change."""
        label = display_datetime(self._last_updated)
        if label is not None and self._reset_to_defaults:
            return f"{label} (reset to defaults)"
        return label

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def load_defaults(self) -> None:
        """Restore the built-in trigger list."""
        self._triggers = self._defaults
        self._last_updated = utc_now()
        self._reset_to_defaults = True
        self._last_error = None
        LOGGER.info("Trigger list reset to %d default entries", len(self._defaults))

    def replace(self, triggers: Iterable[TriggerWord]) -> None:
        """Swap in ``triggers`` as the active list."""
        self._triggers = tuple(triggers)
        self._last_updated = utc_now()
        self._reset_to_defaults = False

    async def import_from_sheet(self, url: str) -> tuple[TriggerWord, ...]:
        """Replace the active list with the triggers found behind ``url``.

        Raises a :class:`TriggerImportError` subclass when the link, the
        download, or the sheet contents are unusable.
        """
        async with self._import_lock:
            self._last_error = None
            LOGGER.info("Importing trigger words from %s", url)
            try:
                imported = await self._sheet_source.fetch_triggers(url)
            except TriggerImportError as exc:
                self._last_error = exc.user_message
                LOGGER.warning("Trigger import failed: %s", exc)
                raise
            self.replace(imported)
            LOGGER.info("Imported %d trigger words", len(imported))
            return self._triggers


__all__ = ["TriggerStore"]

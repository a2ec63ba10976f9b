"""Protocol interfaces for decoupling components."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import TriggerWord


class SheetSource(Protocol):
    """Abstraction over a remote spreadsheet that yields trigger words."""

    async def fetch_triggers(self, url: str) -> list[TriggerWord]:
        """Download and validate the trigger list behind a share link."""
        raise NotImplementedError


class TriggerProvider(Protocol):
    """Anything able to hand out the currently active trigger list."""

    @property
    def triggers(self) -> Sequence[TriggerWord]:
        """Return an immutable snapshot of the active triggers."""
        raise NotImplementedError


__all__ = ["SheetSource", "TriggerProvider"]

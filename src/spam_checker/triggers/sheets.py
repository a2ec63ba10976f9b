"""Import trigger words from a publicly shared Google Sheet."""

from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import cast
from urllib.parse import parse_qs, urlsplit

import httpx

from spam_checker.core.config import SheetSettings
from spam_checker.core.models import SEVERITY_LEVELS, Severity, TriggerWord

LOGGER = logging.getLogger(__name__)

_SHEET_ID_PATTERN = re.compile(r"/d/([^/?#]+)")
_GID_PATTERN = re.compile(r"(?:^|[?#&])gid=([0-9]+)")
_GID_VALUE = re.compile(r"[0-9]+")

WORD_COLUMN = "word"
SEVERITY_COLUMN = "severity"


class TriggerImportError(RuntimeError):
    """Raised when a trigger list cannot be imported from a spreadsheet."""

    default_message = "Error fetching Google Sheet"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        """Text suitable for showing directly to the user."""
        return str(self)


class InvalidUrlError(TriggerImportError):
    """The supplied link is not a Google Sheets share link."""

    default_message = "Invalid Google Sheets URL format"


class FetchError(TriggerImportError):
    """The CSV export could not be downloaded."""

    default_message = (
        "Failed to fetch Google Sheet. Make sure the sheet is publicly "
        "accessible or shared."
    )


class ParseError(TriggerImportError):
    """The downloaded body is not valid CSV."""

    default_message = "Error parsing sheet data"


class SchemaError(TriggerImportError):
    """The sheet lacks the required ``word`` and ``severity`` columns."""

    default_message = 'Sheet must contain "word" and "severity" columns'


class EmptyResultError(TriggerImportError):
    """No usable trigger rows remained after validation."""

    default_message = "No valid trigger words found in sheet"


@dataclass(frozen=True, slots=True)
class SheetReference:
    """Identifier of a spreadsheet and, optionally, one of its tabs."""

    sheet_id: str
    gid: str | None = None


def parse_sheet_url(url: str) -> SheetReference:
    """Extract the sheet id (and tab gid when present) from a share link."""
    cleaned = (url or "").strip()
    if not cleaned:
        raise InvalidUrlError("Please enter a Google Sheet URL")
    match = _SHEET_ID_PATTERN.search(cleaned)
    if match is None:
        raise InvalidUrlError()

    try:
        parts = urlsplit(cleaned)
        gid_values = parse_qs(parts.query).get("gid")
    except ValueError as exc:
        raise InvalidUrlError() from exc
    numeric = [value for value in gid_values or () if _GID_VALUE.fullmatch(value)]
    gid = numeric[0] if numeric else None
    if gid is None:
        fragment_match = _GID_PATTERN.search(parts.fragment)
        gid = fragment_match.group(1) if fragment_match else None
    return SheetReference(sheet_id=match.group(1), gid=gid)


def build_export_url(reference: SheetReference, template: str) -> str:
    """Return the CSV export endpoint for ``reference``."""
    export_url = template.format(sheet_id=reference.sheet_id)
    if reference.gid is not None:
        export_url = f"{export_url}&gid={reference.gid}"
    return export_url


def parse_trigger_csv(text: str) -> list[TriggerWord]:
    """Validate a CSV export and convert its rows into trigger words."""
    rows = _read_rows(text)
    if not rows:
        raise EmptyResultError("No data found in sheet")

    first_row = rows[0]
    if not first_row.get(WORD_COLUMN) or not first_row.get(SEVERITY_COLUMN):
        raise SchemaError()

    triggers = list(_normalise_rows(rows))
    if not triggers:
        raise EmptyResultError()
    return triggers


def _read_rows(text: str) -> list[dict[str | None, str | None]]:
    reader = csv.DictReader(io.StringIO(text), strict=True)
    try:
        header = reader.fieldnames
        if header is None:
            return []
        reader.fieldnames = [_clean_header(name) for name in header]
        return list(reader)
    except csv.Error as exc:
        LOGGER.warning("Failed to parse trigger sheet CSV: %s", exc)
        raise ParseError() from exc


def _clean_header(name: str) -> str:
    return name.lstrip("\ufeff").strip()


def _normalise_rows(
    rows: Iterable[Mapping[str | None, str | None]],
) -> Iterable[TriggerWord]:
    for row in rows:
        word = (row.get(WORD_COLUMN) or "").strip().lower()
        severity = (row.get(SEVERITY_COLUMN) or "").strip().lower()
        if word and severity in SEVERITY_LEVELS:
            yield TriggerWord(word=word, severity=cast(Severity, severity))


@dataclass(slots=True)
class GoogleSheetClient:
    """Download trigger lists from the Google Sheets CSV export endpoint."""

    settings: SheetSettings = field(default_factory=SheetSettings)
    transport: httpx.AsyncBaseTransport | None = None

    async def fetch_csv(self, url: str) -> str:
        """Return the raw CSV body behind a Google Sheets share link."""
        reference = parse_sheet_url(url)
        export_url = build_export_url(reference, self.settings.export_url_template)
        LOGGER.info("Fetching trigger sheet %s", reference.sheet_id)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(export_url)
        except httpx.HTTPError as exc:
            LOGGER.warning("Trigger sheet request failed: %s", exc)
            raise FetchError() from exc

        if not response.is_success:
            LOGGER.warning(
                "Trigger sheet request returned HTTP %s", response.status_code
            )
            raise FetchError()
        return response.text

    async def fetch_triggers(self, url: str) -> list[TriggerWord]:
        """Download, parse, and validate the trigger list behind ``url``."""
        body = await self.fetch_csv(url)
        return parse_trigger_csv(body)


__all__ = [
    "EmptyResultError",
    "FetchError",
    "GoogleSheetClient",
    "InvalidUrlError",
    "ParseError",
    "SchemaError",
    "SheetReference",
    "TriggerImportError",
    "build_export_url",
    "parse_sheet_url",
    "parse_trigger_csv",
]

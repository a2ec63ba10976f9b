"""FastAPI web application exposing the spam analyzer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status as http_status
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile
from starlette.templating import Jinja2Templates

from spam_checker.analysis import AnalysisService, report_payload
from spam_checker.core import AppSettings, load_app_settings
from spam_checker.core.models import AnalysisReport, TriggerWord
from spam_checker.triggers import GoogleSheetClient, TriggerImportError, TriggerStore
from .security import CsrfProtector

LOGGER = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

EMPTY_EMAIL_NOTICE = "Paste your email content before running an analysis."

_LENGTH_LABELS: dict[str, str] = {
    "good": "Good length",
    "too short": "Too short",
    "too long": "Very long",
}


@dataclass(slots=True)
class CheckerState:
    """Presentation state for the single-user dashboard."""

    email_text: str = ""
    sheet_url: str = ""
    report: AnalysisReport | None = None
    notice: str | None = None
    import_message: str | None = None


class AnalyzeRequest(BaseModel):
    """JSON body for ``POST /api/analyze``."""

    model_config = ConfigDict(populate_by_name=True)

    email_text: str = Field(alias="emailText")


class ImportRequest(BaseModel):
    """JSON body for ``POST /api/triggers/import``."""

    url: str


def create_app(
    settings: AppSettings | None = None,
    *,
    store: TriggerStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = settings or load_app_settings()
    templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
    app = FastAPI(title="Email Spam Analyzer")

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    csrf = CsrfProtector()
    trigger_store = store or TriggerStore(GoogleSheetClient(app_settings.sheets))
    analysis_service = AnalysisService(trigger_store, app_settings.scoring)
    state = CheckerState()

    app.state.trigger_store = trigger_store
    app.state.checker_state = state

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        csrf_token = csrf.current_token(request)
        context = {
            "email_text": state.email_text,
            "sheet_url": state.sheet_url,
            "notice": state.notice,
            "import_message": state.import_message,
            "sheet_error": trigger_store.last_error,
            "trigger_count": trigger_store.count,
            "last_updated": trigger_store.last_updated_label,
            "report": (
                _serialize_report(state.report) if state.report is not None else None
            ),
            "csrf_token": csrf_token,
            "csrf_field_name": csrf.field_name,
        }
        response = templates.TemplateResponse(request, "index.html", context)
        csrf.set_cookie(response, csrf_token, secure=request.url.scheme == "https")
        return response

    @app.post("/analyze")
    async def analyze_form(request: Request) -> RedirectResponse:
        form = await csrf.checked_form(request)

        email_text = _coerce_form_value(form.get("email_text"))
        state.email_text = email_text
        if not email_text.strip():
            state.report = None
            state.notice = EMPTY_EMAIL_NOTICE
        else:
            state.report = await analysis_service.analyze(email_text)
            state.notice = None
        return RedirectResponse(url="/", status_code=http_status.HTTP_303_SEE_OTHER)

    @app.post("/triggers/import")
    async def import_form(request: Request) -> RedirectResponse:
        form = await csrf.checked_form(request)

        state.sheet_url = _coerce_form_value(form.get("sheet_url")).strip()
        state.import_message = None
        try:
            imported = await trigger_store.import_from_sheet(state.sheet_url)
        except TriggerImportError as exc:
            # The store keeps the message in ``last_error`` for rendering.
            LOGGER.info("Dashboard trigger import rejected: %s", exc)
        else:
            state.import_message = f"Imported {len(imported)} trigger words."
        return RedirectResponse(url="/", status_code=http_status.HTTP_303_SEE_OTHER)

    @app.post("/triggers/reset")
    async def reset_form(request: Request) -> RedirectResponse:
        form = await csrf.checked_form(request)

        trigger_store.load_defaults()
        state.import_message = None
        return RedirectResponse(url="/", status_code=http_status.HTTP_303_SEE_OTHER)

    @app.get("/api/triggers")
    async def list_triggers() -> dict[str, Any]:
        return _serialize_store(trigger_store)

    @app.post("/api/analyze")
    async def analyze_api(payload: AnalyzeRequest) -> dict[str, Any]:
        if not payload.email_text.strip():
            raise HTTPException(
                status_code=http_status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=EMPTY_EMAIL_NOTICE,
            )
        report = await analysis_service.analyze(payload.email_text)
        return _serialize_report(report)

    @app.post("/api/triggers/import")
    async def import_api(payload: ImportRequest) -> dict[str, Any]:
        try:
            await trigger_store.import_from_sheet(payload.url)
        except TriggerImportError as exc:
            raise HTTPException(
                status_code=http_status.HTTP_400_BAD_REQUEST,
                detail=exc.user_message,
            ) from exc
        return _serialize_store(trigger_store)

    @app.post("/api/triggers/reset")
    async def reset_api() -> dict[str, Any]:
        trigger_store.load_defaults()
        return _serialize_store(trigger_store)

    return app


def _serialize_trigger(trigger: TriggerWord) -> dict[str, str]:
    return {"word": trigger.word, "severity": trigger.severity}


def _serialize_store(store: TriggerStore) -> dict[str, Any]:
    return {
        "count": store.count,
        "isDefault": store.is_default,
        "lastUpdated": (
            store.last_updated.isoformat() if store.last_updated else None
        ),
        "lastUpdatedDisplay": store.last_updated_label,
        "lastError": store.last_error,
        "triggers": [_serialize_trigger(trigger) for trigger in store.triggers],
    }


def _serialize_report(report: AnalysisReport) -> dict[str, Any]:
    return {
        **report_payload(report),
        "scoreBand": report.score_band,
        "lengthLabel": _LENGTH_LABELS[report.length_analysis],
        "wordCount": report.word_count,
        "exclamationCount": report.exclamation_count,
    }


def _coerce_form_value(value: UploadFile | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, UploadFile):
        return ""
    return value


__all__ = ["CheckerState", "create_app"]

"""Lightweight CSRF protection for the analyzer's HTML forms."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from fastapi import HTTPException, Request, status
from starlette.datastructures import FormData
from starlette.responses import Response

CSRF_COOKIE_NAME = "spam_checker_csrf"
CSRF_FIELD_NAME = "csrf_token"


@dataclass(slots=True)
class CsrfProtector:
    """Double-submit cookie check for the dashboard's form posts.

    The JSON API is not covered: browsers cannot send a cross-site
    ``application/json`` body without a preflight.
    """

    cookie_name: str = CSRF_COOKIE_NAME
    field_name: str = CSRF_FIELD_NAME
    max_age: int = 60 * 60  # 1 hour

    def current_token(self, request: Request) -> str:
        """Reuse the caller's cookie token so open tabs stay valid."""
        return request.cookies.get(self.cookie_name) or secrets.token_urlsafe(32)

    def set_cookie(self, response: Response, token: str, *, secure: bool) -> None:
        """Refresh the token cookie alongside the rendered dashboard."""
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
            secure=secure,
        )

    async def checked_form(self, request: Request) -> FormData:
        """Read the posted form and reject it unless its token matches the cookie."""
        form = await request.form()
        submitted = form.get(self.field_name)
        self.validate(request, submitted if isinstance(submitted, str) else None)
        return form

    def validate(self, request: Request, token: str | None) -> None:
        """Raise 403 when ``token`` is absent or differs from the cookie copy."""
        cookie_token = request.cookies.get(self.cookie_name)
        if not cookie_token or not token:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Missing CSRF token.",
            )
        if not secrets.compare_digest(cookie_token, token):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid CSRF token.",
            )


__all__ = ["CSRF_COOKIE_NAME", "CSRF_FIELD_NAME", "CsrfProtector"]

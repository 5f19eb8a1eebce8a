from __future__ import annotations

import logging
import re
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from boardgame_list.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")
_LOG = logging.getLogger("boardgame_list.http")

PROBLEM_TYPE_500 = "https://tools.ietf.org/html/rfc7231#section-6.6.1"
GENERIC_ERROR_DETAIL = "An unhandled exception occurred."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def _request_id_from_header(raw: str | None) -> str:
    value = str(raw or "").strip()
    if not value:
        return uuid4().hex
    if not _REQUEST_ID_RE.fullmatch(value):
        return uuid4().hex
    return value


def request_id_for(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = _request_id_from_header(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
    return request_id


def problem_document(request: Request, exc: Exception) -> dict:
    detail = str(exc) if settings.USE_DEVELOPER_EXCEPTION_PAGE and str(exc) else GENERIC_ERROR_DETAIL
    return {
        "type": PROBLEM_TYPE_500,
        "title": "An error occurred while processing your request.",
        "status": 500,
        "detail": detail,
        "traceId": request_id_for(request),
    }


def install_http_hardening(app: FastAPI) -> None:
    @app.middleware("http")
    async def _http_hardening_middleware(request: Request, call_next):
        request_id = request_id_for(request)
        started_at = perf_counter()

        response = await call_next(request)

        for key, value in SECURITY_HEADERS.items():
            response.headers[key] = value
        # Listing routes opt in to shared caching; everything else stays non-cacheable.
        if "cache-control" not in response.headers:
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"
        response.headers[REQUEST_ID_HEADER] = request_id

        duration_ms = (perf_counter() - started_at) * 1000.0
        _LOG.info(
            "%s %s status=%s duration_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        return response

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        body = problem_document(request, exc)
        _LOG.error(
            "Unhandled exception %s %s trace_id=%s",
            request.method,
            request.url.path,
            body["traceId"],
            exc_info=exc,
        )
        headers = {REQUEST_ID_HEADER: body["traceId"], "Cache-Control": "no-store"}
        headers.update(SECURITY_HEADERS)
        return JSONResponse(body, status_code=500, media_type="application/problem+json", headers=headers)

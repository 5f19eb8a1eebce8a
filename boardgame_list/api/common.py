from __future__ import annotations

from fastapi import HTTPException, Request, Response

from boardgame_list.core.config import settings
from boardgame_list.services.query_spec import QuerySpecError


def resource_url(request: Request) -> str:
    return str(request.url.replace(query="", fragment=""))


def validation_error_or_400(exc: QuerySpecError) -> HTTPException:
    return HTTPException(status_code=400, detail={"errors": [e.as_dict() for e in exc.errors]})


def mark_list_cacheable(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={int(settings.LIST_RESPONSE_MAX_AGE_SECONDS)}"


def mark_no_store(response: Response) -> None:
    response.headers["Cache-Control"] = "no-store"

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from boardgame_list.api.common import mark_list_cacheable, mark_no_store, resource_url, validation_error_or_400
from boardgame_list.core.config import settings
from boardgame_list.core.deps import get_list_cache, require_policy
from boardgame_list.db.session import get_db
from boardgame_list.schemas.catalog import MechanicListItem, MechanicRead, MechanicUpdate
from boardgame_list.schemas.common import RestEnvelope
from boardgame_list.services.authorization import ClaimSet, PolicyNames
from boardgame_list.services.envelope import build_record_envelope
from boardgame_list.services.list_cache import ListCache
from boardgame_list.services.listing import list_resource
from boardgame_list.services.mutations import delete_mechanic, update_mechanic
from boardgame_list.services.query_spec import QuerySpecError
from boardgame_list.services.resources import MECHANICS

router = APIRouter()


def _record(row) -> Optional[dict]:
    if row is None:
        return None
    return MechanicRead.model_validate(row).model_dump(mode="json", by_alias=True)


@router.get("", response_model=RestEnvelope[List[MechanicListItem]])
def get_mechanics(
    request: Request,
    response: Response,
    filter_query: Optional[str] = Query(None, alias="filterQuery"),
    sort_column: Optional[str] = Query(None, alias="sortColumn"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page_index: int = Query(0, alias="pageIndex"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache),
):
    try:
        envelope = list_resource(
            db,
            cache,
            MECHANICS,
            settings=settings,
            base_url=resource_url(request),
            filter_query=filter_query,
            sort_column=sort_column,
            sort_order=sort_order,
            page_index=page_index,
            page_size=page_size,
        )
    except QuerySpecError as exc:
        raise validation_error_or_400(exc)
    mark_list_cacheable(response)
    return envelope


@router.post("", response_model=RestEnvelope[Optional[MechanicRead]])
def post_mechanic(
    payload: MechanicUpdate,
    request: Request,
    response: Response,
    claims: ClaimSet = Depends(require_policy(PolicyNames.MODERATOR)),
    db: Session = Depends(get_db),
):
    row = update_mechanic(db, payload)
    mark_no_store(response)
    params = payload.model_dump(by_alias=True, exclude_none=True)
    return build_record_envelope(_record(row), resource_url(request), "POST", params)


@router.delete("", response_model=RestEnvelope[Optional[MechanicRead]])
def delete_mechanic_endpoint(
    request: Request,
    response: Response,
    id: int = Query(...),
    claims: ClaimSet = Depends(require_policy(PolicyNames.ADMINISTRATOR)),
    db: Session = Depends(get_db),
):
    row = delete_mechanic(db, id)
    mark_no_store(response)
    return build_record_envelope(_record(row), resource_url(request), "DELETE", {"id": id})

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from boardgame_list.core.config import Settings
from boardgame_list.services.envelope import build_list_envelope
from boardgame_list.services.list_cache import ListCache
from boardgame_list.services.query_engine import DataSource, Page, SqlAlchemyDataSource, fetch_items
from boardgame_list.services.query_spec import QuerySpec, build_query_spec, cache_key
from boardgame_list.services.resources import ListableResource

logger = logging.getLogger(__name__)


def serve_page(source: DataSource, cache: ListCache, resource: ListableResource, spec: QuerySpec, ttl_seconds: int) -> Page:
    # The count is always live; only the item payload may come from cache.
    total = source.count_matching(spec.filter_text)
    key = cache_key(resource.name, spec)
    items = cache.get(key)
    if items is None:
        logger.debug("list cache miss resource=%s key=%s", resource.name, key)
        items = fetch_items(source, spec, resource.serialize)
        cache.set(key, items, ttl_seconds)
    else:
        logger.debug("list cache hit resource=%s key=%s", resource.name, key)
    return Page(items=tuple(items), total_matching=total)


def list_resource(
    db: Session,
    cache: ListCache,
    resource: ListableResource,
    *,
    settings: Settings,
    base_url: str,
    filter_query: str | None = None,
    sort_column: str | None = None,
    sort_order: str | None = None,
    page_index: int | None = None,
    page_size: int | None = None,
) -> dict[str, Any]:
    logger.info("Get %s list started", resource.name)
    spec = build_query_spec(
        resource,
        filter_query=filter_query,
        sort_column=sort_column,
        sort_order=sort_order,
        page_index=page_index,
        page_size=page_size,
        default_page_size=settings.LIST_DEFAULT_PAGE_SIZE,
        max_page_size=settings.LIST_MAX_PAGE_SIZE,
        max_filter_length=settings.LIST_MAX_FILTER_LENGTH,
    )
    page = serve_page(SqlAlchemyDataSource(db, resource), cache, resource, spec, settings.LIST_CACHE_TTL_SECONDS)
    return build_list_envelope(page, spec, base_url)

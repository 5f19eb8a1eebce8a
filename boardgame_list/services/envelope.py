from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode

from boardgame_list.services.query_engine import Page
from boardgame_list.services.query_spec import QuerySpec


def build_self_link(base_url: str, method: str, params: Mapping[str, Any] | None = None) -> dict[str, str]:
    query = urlencode([(k, v) for k, v in (params or {}).items() if v is not None])
    href = f"{base_url}?{query}" if query else base_url
    return {"href": href, "rel": "self", "type": method.upper()}


def build_list_envelope(page: Page, spec: QuerySpec, base_url: str) -> dict[str, Any]:
    return {
        "data": list(page.items),
        "pageIndex": spec.page_index,
        "pageSize": spec.page_size,
        "recordCount": page.total_matching,
        "links": [build_self_link(base_url, "GET", {"pageIndex": spec.page_index, "pageSize": spec.page_size})],
    }


def build_record_envelope(
    record: dict[str, Any] | None,
    base_url: str,
    method: str,
    params: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "data": record,
        "pageIndex": None,
        "pageSize": None,
        "recordCount": None,
        "links": [build_self_link(base_url, method, params)],
    }

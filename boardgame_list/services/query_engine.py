from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import Session

from boardgame_list.services.query_spec import QuerySpec, SortOrder
from boardgame_list.services.resources import ListableResource


@dataclass(frozen=True)
class Page:
    items: tuple[dict[str, Any], ...]
    total_matching: int


class DataSource(Protocol):
    def count_matching(self, filter_text: str) -> int:
        ...

    def fetch_page(self, spec: QuerySpec) -> Sequence[Any]:
        ...


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlAlchemyDataSource:
    """Reads one listable resource through an ORM session.

    The filter is a case-insensitive substring match on the resource's filter column.
    Rows are ordered by the allow-listed sort column, then by primary key ascending,
    so adjacent pages never overlap or skip rows.
    """

    def __init__(self, db: Session, resource: ListableResource):
        self.db = db
        self.resource = resource

    def _filtered(self, stmt, filter_text: str):
        if filter_text:
            stmt = stmt.where(self.resource.filter_column.ilike(_like_pattern(filter_text), escape="\\"))
        return stmt

    def count_matching(self, filter_text: str) -> int:
        stmt = self._filtered(select(func.count()).select_from(self.resource.model), filter_text)
        return int(self.db.execute(stmt).scalar_one())

    def fetch_page(self, spec: QuerySpec) -> Sequence[Any]:
        column = self.resource.sort_columns[spec.sort_column]
        direction = desc if spec.sort_order is SortOrder.DESC else asc
        stmt = (
            self._filtered(select(self.resource.model), spec.filter_text)
            .order_by(direction(column), asc(self.resource.primary_key))
            .offset(spec.offset)
            .limit(spec.page_size)
        )
        return self.db.execute(stmt).scalars().all()


def fetch_items(source: DataSource, spec: QuerySpec, serialize: Callable[[Any], dict[str, Any]]) -> tuple[dict[str, Any], ...]:
    return tuple(serialize(row) for row in source.fetch_page(spec))

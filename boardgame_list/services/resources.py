from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from sqlalchemy.orm import InstrumentedAttribute

from boardgame_list.models.board_game import BoardGame
from boardgame_list.models.mechanic import Mechanic
from boardgame_list.schemas.catalog import BoardGameListItem, MechanicListItem
from boardgame_list.schemas.common import CamelModel


@dataclass(frozen=True, eq=False)
class ListableResource:
    """Binds a collection name to its ORM model and the fields clients may filter or sort on.

    ``sort_columns`` is the allow-list: wire name -> mapped column. Nothing outside it
    ever reaches ``ORDER BY``.
    """

    name: str
    model: type
    filter_column: InstrumentedAttribute
    sort_columns: Mapping[str, InstrumentedAttribute]
    default_sort: str
    list_schema: type[CamelModel]
    _lookup: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.default_sort not in self.sort_columns:
            raise ValueError(f"default sort column {self.default_sort!r} is not sortable for {self.name}")
        object.__setattr__(self, "sort_columns", MappingProxyType(dict(self.sort_columns)))
        object.__setattr__(self, "_lookup", MappingProxyType({key.lower(): key for key in self.sort_columns}))

    @property
    def primary_key(self) -> InstrumentedAttribute:
        return self.model.id

    def canonical_sort_column(self, raw: str) -> str | None:
        return self._lookup.get(str(raw or "").strip().lower())

    def serialize(self, row: Any) -> dict[str, Any]:
        return self.list_schema.model_validate(row).model_dump(mode="json", by_alias=True)


BOARD_GAMES = ListableResource(
    name="BoardGames",
    model=BoardGame,
    filter_column=BoardGame.name,
    sort_columns={
        "id": BoardGame.id,
        "name": BoardGame.name,
        "year": BoardGame.year,
        "minPlayers": BoardGame.min_players,
        "maxPlayers": BoardGame.max_players,
        "playTime": BoardGame.play_time,
        "minAge": BoardGame.min_age,
        "ownedUsers": BoardGame.owned_users,
    },
    default_sort="name",
    list_schema=BoardGameListItem,
)

MECHANICS = ListableResource(
    name="Mechanics",
    model=Mechanic,
    filter_column=Mechanic.name,
    sort_columns={
        "id": Mechanic.id,
        "name": Mechanic.name,
    },
    default_sort="name",
    list_schema=MechanicListItem,
)

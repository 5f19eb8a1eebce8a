from datetime import datetime
from typing import Optional

from pydantic import Field

from boardgame_list.schemas.common import CamelModel


class BoardGameListItem(CamelModel):
    id: int
    name: str
    year: int
    min_players: int
    max_players: int
    play_time: int
    owned_users: int
    min_age: int


class BoardGameRead(BoardGameListItem):
    created_date: datetime
    last_modified_date: datetime


class BoardGameUpdate(CamelModel):
    id: int
    name: Optional[str] = Field(default=None, max_length=200)
    year: Optional[int] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    play_time: Optional[int] = None
    min_age: Optional[int] = None


class MechanicListItem(CamelModel):
    id: int
    name: str


class MechanicRead(MechanicListItem):
    created_date: datetime
    last_modified_date: datetime


class MechanicUpdate(CamelModel):
    id: int
    name: Optional[str] = Field(default=None, max_length=200)

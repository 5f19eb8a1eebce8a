from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from boardgame_list.db.session import Base
from boardgame_list.models.common import TimestampMixin

class BoardGame(Base, TimestampMixin):
    __tablename__ = "board_games"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_players: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_players: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    play_time: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_age: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    owned_users: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

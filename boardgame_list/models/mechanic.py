from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from boardgame_list.db.session import Base
from boardgame_list.models.common import TimestampMixin

class Mechanic(Base, TimestampMixin):
    __tablename__ = "mechanics"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

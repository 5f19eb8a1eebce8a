from sqlalchemy.engine import Engine

from boardgame_list.db.session import Base
from boardgame_list.models.app_user import AppUser
from boardgame_list.models.board_game import BoardGame
from boardgame_list.models.mechanic import Mechanic

MODELS = (AppUser, BoardGame, Mechanic)


def init_db(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind, tables=[model.__table__ for model in MODELS])

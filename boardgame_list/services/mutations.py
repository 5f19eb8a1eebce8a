from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from boardgame_list.models.board_game import BoardGame
from boardgame_list.models.common import utcnow
from boardgame_list.models.mechanic import Mechanic
from boardgame_list.schemas.catalog import BoardGameUpdate, MechanicUpdate

logger = logging.getLogger(__name__)

# A zero or missing value means "leave unchanged"; an intentional 0 cannot be written.
BOARD_GAME_NUMERIC_FIELDS = ("year", "min_players", "max_players", "play_time", "min_age")


def update_board_game(db: Session, payload: BoardGameUpdate) -> BoardGame | None:
    row = db.get(BoardGame, payload.id)
    if row is None:
        logger.info("BoardGame id=%s not found for update", payload.id)
        return None
    if payload.name:
        row.name = payload.name
    for field_name in BOARD_GAME_NUMERIC_FIELDS:
        value = getattr(payload, field_name)
        if value is not None and value > 0:
            setattr(row, field_name, value)
    row.last_modified_date = utcnow()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_board_game(db: Session, board_game_id: int) -> BoardGame | None:
    row = db.get(BoardGame, board_game_id)
    if row is None:
        logger.info("BoardGame id=%s not found for delete", board_game_id)
        return None
    db.delete(row)
    db.commit()
    return row


def update_mechanic(db: Session, payload: MechanicUpdate) -> Mechanic | None:
    row = db.get(Mechanic, payload.id)
    if row is None:
        logger.info("Mechanic id=%s not found for update", payload.id)
        return None
    if payload.name:
        row.name = payload.name
    row.last_modified_date = utcnow()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_mechanic(db: Session, mechanic_id: int) -> Mechanic | None:
    row = db.get(Mechanic, mechanic_id)
    if row is None:
        logger.info("Mechanic id=%s not found for delete", mechanic_id)
        return None
    db.delete(row)
    db.commit()
    return row

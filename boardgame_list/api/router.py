from fastapi import APIRouter
from boardgame_list.api import account, auth_test, board_games, mechanics

router = APIRouter()
router.include_router(board_games.router, prefix="/BoardGames", tags=["BoardGames"])
router.include_router(mechanics.router, prefix="/Mechanics", tags=["Mechanics"])
router.include_router(account.router, prefix="/Account", tags=["Account"])
router.include_router(auth_test.router, prefix="/AuthTest", tags=["AuthTest"])

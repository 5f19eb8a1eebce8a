from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boardgame_list.db.session import get_db
from boardgame_list.schemas.account import LoginIn, RegisterIn, RegisterOut, TokenOut
from boardgame_list.services.accounts import DuplicateUserError, authenticate, issue_token, register_user

router = APIRouter()


@router.post("/Register", response_model=RegisterOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    try:
        user = register_user(db, payload)
    except DuplicateUserError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return RegisterOut(id=user.id, user_name=user.user_name)


@router.post("/Login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = authenticate(db, payload.user_name, payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid user name or password")
    return TokenOut(access_token=issue_token(user))

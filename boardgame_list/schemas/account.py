from datetime import date
from typing import Optional

from pydantic import Field

from boardgame_list.schemas.common import CamelModel


class RegisterIn(CamelModel):
    user_name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=1)
    phone_number: Optional[str] = Field(default=None, max_length=50)
    date_of_birth: Optional[date] = None


class RegisterOut(CamelModel):
    id: int
    user_name: str


class LoginIn(CamelModel):
    user_name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class TokenOut(CamelModel):
    access_token: str
    token_type: str = "bearer"

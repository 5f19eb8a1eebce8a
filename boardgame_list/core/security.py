from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext

from boardgame_list.core.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def create_jwt(payload: dict, secret: str, expires_delta: timedelta, issuer: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    data = payload.copy()
    data.setdefault("iss", issuer or settings.JWT_ISSUER)
    data.update({"iat": int(now.timestamp()), "exp": int((now + expires_delta).timestamp())})
    return jwt.encode(data, secret, algorithm="HS256")

def decode_jwt(token: str, secret: str, issuer: str | None = None) -> dict:
    # Tokens minted for another issuer are rejected even when the secret matches.
    return jwt.decode(token, secret, algorithms=["HS256"], issuer=issuer or settings.JWT_ISSUER)

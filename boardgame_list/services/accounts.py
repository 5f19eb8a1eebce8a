from __future__ import annotations

from datetime import timedelta

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from boardgame_list.core.config import settings
from boardgame_list.core.security import create_jwt, hash_password, verify_password
from boardgame_list.models.app_user import AppUser
from boardgame_list.schemas.account import RegisterIn
from boardgame_list.services.authorization import ClaimType, DATE_OF_BIRTH_FORMAT, RoleNames


class DuplicateUserError(ValueError):
    pass


def normalize_user_name(raw: str | None) -> str:
    return str(raw or "").strip()


def get_user_by_name(db: Session, user_name: str) -> AppUser | None:
    normalized = normalize_user_name(user_name)
    if not normalized:
        return None
    return db.query(AppUser).filter(func.lower(AppUser.user_name) == normalized.lower()).first()


def is_reserved_user_name(user_name: str) -> bool:
    reserved = normalize_user_name(settings.ADMIN_BOOTSTRAP_USERNAME).lower()
    return bool(reserved) and normalize_user_name(user_name).lower() == reserved


def register_user(db: Session, payload: RegisterIn) -> AppUser:
    user_name = normalize_user_name(payload.user_name)
    if is_reserved_user_name(user_name):
        raise DuplicateUserError(f'User "{user_name}" already exists')
    if get_user_by_name(db, user_name) is not None:
        raise DuplicateUserError(f'User "{user_name}" already exists')
    user = AppUser(
        user_name=user_name,
        email=payload.email.strip().lower(),
        password_hash=hash_password(payload.password),
        phone_number=(payload.phone_number or "").strip() or None,
        date_of_birth=payload.date_of_birth,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateUserError(f'User "{user_name}" already exists') from exc
    db.refresh(user)
    return user


def ensure_bootstrap_admin_for_login(db: Session, user_name: str, password: str) -> AppUser | None:
    if not settings.ADMIN_BOOTSTRAP_ENABLED:
        return None

    normalized = normalize_user_name(user_name)
    if normalized.lower() != normalize_user_name(settings.ADMIN_BOOTSTRAP_USERNAME).lower():
        return None
    if str(password or "") != str(settings.ADMIN_BOOTSTRAP_PASSWORD or ""):
        return None

    user = get_user_by_name(db, normalized)
    if user is None:
        user = AppUser(
            user_name=normalize_user_name(settings.ADMIN_BOOTSTRAP_USERNAME),
            email=str(settings.ADMIN_BOOTSTRAP_EMAIL or "").strip().lower(),
            password_hash=hash_password(str(settings.ADMIN_BOOTSTRAP_PASSWORD or "")),
        )
    else:
        user.password_hash = hash_password(str(settings.ADMIN_BOOTSTRAP_PASSWORD or ""))
    user.role = RoleNames.ADMINISTRATOR
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, user_name: str, password: str) -> AppUser | None:
    user = ensure_bootstrap_admin_for_login(db, user_name, password)
    if user is None:
        user = get_user_by_name(db, user_name)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def token_claims_for(user: AppUser) -> dict:
    roles = [user.role] if user.role else []
    if user.role == RoleNames.ADMINISTRATOR:
        roles.append(RoleNames.MODERATOR)
    claims = {
        ClaimType.SUBJECT.value: str(user.id),
        ClaimType.NAME.value: user.user_name,
        ClaimType.EMAIL.value: user.email,
        ClaimType.ROLE.value: user.role,
        "roles": roles,
    }
    if user.phone_number:
        claims[ClaimType.MOBILE_PHONE.value] = user.phone_number
    if user.date_of_birth is not None:
        claims[ClaimType.DATE_OF_BIRTH.value] = user.date_of_birth.strftime(DATE_OF_BIRTH_FORMAT)
    return claims


def issue_token(user: AppUser) -> str:
    return create_jwt(token_claims_for(user), settings.JWT_SECRET, timedelta(minutes=settings.JWT_TTL_MINUTES))

import logging

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from boardgame_list.core.config import settings
from boardgame_list.core.security import decode_jwt
from boardgame_list.services.authorization import ClaimSet, PolicyRegistry
from boardgame_list.services.list_cache import ListCache

_LOG = logging.getLogger("boardgame_list.auth")

bearer = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_list_cache(request: Request) -> ListCache:
    return request.app.state.list_cache


def get_policies(request: Request) -> PolicyRegistry:
    return request.app.state.policies


def get_claim_set(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> ClaimSet:
    if not creds:
        raise HTTPException(status_code=401, detail="Missing bearer token", headers=_UNAUTHORIZED_HEADERS)
    try:
        payload = decode_jwt(creds.credentials, settings.JWT_SECRET)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token", headers=_UNAUTHORIZED_HEADERS)
    return ClaimSet.from_token_payload(payload)


def enforce_policy(name: str, claims: ClaimSet, policies: PolicyRegistry) -> ClaimSet:
    decision = policies.evaluate(name, claims)
    if not decision.allowed:
        _LOG.warning(
            "policy denied policy=%s subject=%s reason=%s detail=%s",
            name,
            claims.subject or "-",
            decision.reason.value if decision.reason else "-",
            decision.detail,
        )
        raise HTTPException(status_code=403, detail="Forbidden")
    return claims


def require_policy(name: str):
    def _inner(claims: ClaimSet = Depends(get_claim_set), policies: PolicyRegistry = Depends(get_policies)) -> ClaimSet:
        return enforce_policy(name, claims, policies)
    return _inner

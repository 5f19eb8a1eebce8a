"""Claims-based authorization policies.

A policy is a named, side-effect-free predicate over the caller's ``ClaimSet``.
Policies are registered once at startup into a read-only ``PolicyRegistry``;
evaluation never raises and always yields a ``Decision`` whose deny reason can be logged.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Protocol


class RoleNames:
    MODERATOR = "Moderator"
    ADMINISTRATOR = "Administrator"


class ClaimType(str, Enum):
    SUBJECT = "sub"
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    MOBILE_PHONE = "mobile_phone"
    DATE_OF_BIRTH = "date_of_birth"


class DenyReason(str, Enum):
    UNKNOWN_POLICY = "UNKNOWN_POLICY"
    ROLE_MISSING = "ROLE_MISSING"
    CLAIM_MISSING = "CLAIM_MISSING"
    CLAIM_UNPARSABLE = "CLAIM_UNPARSABLE"
    UNDER_AGE = "UNDER_AGE"


DATE_OF_BIRTH_FORMAT = "%Y-%m-%d"

# JWT registered claims that describe the token rather than the caller.
_TOKEN_CLAIMS = {"iat", "exp", "nbf", "iss", "aud", "jti"}


def _claim_key(claim_type: ClaimType | str) -> str:
    return claim_type.value if isinstance(claim_type, ClaimType) else str(claim_type)


@dataclass(frozen=True)
class ClaimSet:
    role: str | None = None
    claims: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "claims", MappingProxyType({str(k): tuple(v) for k, v in dict(self.claims).items()}))

    @classmethod
    def from_token_payload(cls, payload: Mapping[str, Any]) -> "ClaimSet":
        collected: dict[str, list[str]] = {}
        for key, raw in payload.items():
            if key in _TOKEN_CLAIMS or raw is None:
                continue
            # "roles" is folded into the role claim.
            target = ClaimType.ROLE.value if key == "roles" else str(key)
            values = raw if isinstance(raw, (list, tuple)) else [raw]
            bucket = collected.setdefault(target, [])
            for value in values:
                text = str(value).strip()
                if text and text not in bucket:
                    bucket.append(text)
        role = payload.get("role")
        role_text = str(role).strip() if isinstance(role, str) and role.strip() else None
        return cls(role=role_text, claims={k: tuple(v) for k, v in collected.items() if v})

    def values(self, claim_type: ClaimType | str) -> tuple[str, ...]:
        return self.claims.get(_claim_key(claim_type), ())

    def has(self, claim_type: ClaimType | str) -> bool:
        return bool(self.values(claim_type))

    @property
    def roles(self) -> frozenset[str]:
        found = set(self.values(ClaimType.ROLE))
        if self.role:
            found.add(self.role)
        return frozenset(found)

    @property
    def subject(self) -> str | None:
        values = self.values(ClaimType.SUBJECT)
        return values[0] if values else None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: DenyReason | None = None
    detail: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: DenyReason, detail: str = "") -> "Decision":
        return cls(False, reason, detail)


class Predicate(Protocol):
    def check(self, claims: ClaimSet, today: date) -> Decision:
        ...


class RoleMembership:
    def __init__(self, *roles: str):
        if not roles:
            raise ValueError("RoleMembership needs at least one role")
        self.roles = frozenset(roles)

    def check(self, claims: ClaimSet, today: date) -> Decision:
        if claims.roles & self.roles:
            return Decision.allow()
        return Decision.deny(DenyReason.ROLE_MISSING, f"requires role in {sorted(self.roles)}")


class ClaimPresence:
    def __init__(self, claim_type: ClaimType | str):
        self.claim_type = claim_type

    def check(self, claims: ClaimSet, today: date) -> Decision:
        if claims.has(self.claim_type):
            return Decision.allow()
        return Decision.deny(DenyReason.CLAIM_MISSING, f"missing claim {_claim_key(self.claim_type)}")


class ClaimConjunction:
    def __init__(self, *predicates: Predicate):
        if not predicates:
            raise ValueError("ClaimConjunction needs at least one predicate")
        self.predicates = tuple(predicates)

    def check(self, claims: ClaimSet, today: date) -> Decision:
        for predicate in self.predicates:
            decision = predicate.check(claims, today)
            if not decision.allowed:
                return decision
        return Decision.allow()


def years_between(born: date, today: date) -> int:
    # A Feb 29 birthday is reached on Mar 1 in non-leap years.
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


class DerivedAgeAtLeast:
    def __init__(
        self,
        min_years: int,
        claim_type: ClaimType | str = ClaimType.DATE_OF_BIRTH,
        date_format: str = DATE_OF_BIRTH_FORMAT,
    ):
        self.min_years = int(min_years)
        self.claim_type = claim_type
        self.date_format = date_format

    def check(self, claims: ClaimSet, today: date) -> Decision:
        values = claims.values(self.claim_type)
        if not values:
            return Decision.deny(DenyReason.CLAIM_MISSING, f"missing claim {_claim_key(self.claim_type)}")
        try:
            born = datetime.strptime(values[0], self.date_format).date()
        except (TypeError, ValueError):
            return Decision.deny(DenyReason.CLAIM_UNPARSABLE, f"unparsable {_claim_key(self.claim_type)}")
        if years_between(born, today) >= self.min_years:
            return Decision.allow()
        return Decision.deny(DenyReason.UNDER_AGE, f"requires age >= {self.min_years}")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class PolicyRegistry:
    def __init__(self, policies: Mapping[str, Predicate] | Iterable[tuple[str, Predicate]]):
        self._policies = MappingProxyType(dict(policies))

    def __contains__(self, name: object) -> bool:
        return name in self._policies

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._policies)

    def evaluate(self, name: str, claims: ClaimSet, today: date | None = None) -> Decision:
        predicate = self._policies.get(name)
        if predicate is None:
            return Decision.deny(DenyReason.UNKNOWN_POLICY, f"policy {name!r} is not registered")
        return predicate.check(claims, today or utc_today())


class PolicyNames:
    MODERATOR = "Moderator"
    ADMINISTRATOR = "Administrator"
    MODERATOR_WITH_MOBILE_PHONE = "ModeratorWithMobilePhone"
    MIN_AGE_18 = "MinAge18"


def build_default_policies() -> PolicyRegistry:
    return PolicyRegistry(
        {
            PolicyNames.MODERATOR: RoleMembership(RoleNames.MODERATOR, RoleNames.ADMINISTRATOR),
            PolicyNames.ADMINISTRATOR: RoleMembership(RoleNames.ADMINISTRATOR),
            PolicyNames.MODERATOR_WITH_MOBILE_PHONE: ClaimConjunction(
                RoleMembership(RoleNames.MODERATOR),
                ClaimPresence(ClaimType.MOBILE_PHONE),
            ),
            PolicyNames.MIN_AGE_18: DerivedAgeAtLeast(18),
        }
    )

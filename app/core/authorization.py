"""
Resource authorization guard.

A request may act on a record iff the actor is an admin or owns the record.
Ownership is a plain reference column on the record (owner_user_id for brands,
referred_by for consumers and resellers); kinds without an ownership column are
admin-only. The decision is recomputed from the datastore on every request.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from supabase import Client

from app.core.roles import AccountStatus, Role, normalize_roles

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


class Operation(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


DENY_STATUS = {
    DenyReason.UNAUTHENTICATED: 401,
    DenyReason.FORBIDDEN: 403,
    DenyReason.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class Actor:
    id: str
    roles: List[Role] = field(default_factory=list)
    account_status: AccountStatus = AccountStatus.ACTIVE
    is_systemadmin: bool = False
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.is_systemadmin or Role.ADMIN in self.roles

    @property
    def is_active(self) -> bool:
        return self.account_status != AccountStatus.DEACTIVE

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "Actor":
        try:
            status = AccountStatus(profile.get("account_status") or AccountStatus.ACTIVE.value)
        except ValueError:
            status = AccountStatus.ACTIVE
        return cls(
            id=profile["user_id"],
            roles=normalize_roles(profile.get("role")),
            account_status=status,
            is_systemadmin=profile.get("is_systemadmin") is True,
            email=profile.get("email"),
            full_name=profile.get("full_name"),
        )


@dataclass(frozen=True)
class ResourceKind:
    name: str
    label: str
    table: str
    id_column: str
    path_param: str
    ownership_field: Optional[str] = None
    # Profiles-backed kinds share one table; the record must also hold this role
    required_role: Optional[Role] = None

    def lookup_columns(self) -> str:
        columns = [self.id_column]
        if self.ownership_field:
            columns.append(self.ownership_field)
        if self.required_role:
            columns.append("role")
        return ", ".join(columns)


BRANDS = ResourceKind("brands", "Brand", "brands", "id", "brand_id", ownership_field="owner_user_id")
PRODUCTS = ResourceKind("products", "Product", "products", "id", "product_id")
CONSUMERS = ResourceKind(
    "consumers", "Consumer", PROFILES_TABLE, "user_id", "consumer_id",
    ownership_field="referred_by", required_role=Role.CONSUMER,
)
RESELLERS = ResourceKind(
    "resellers", "Reseller", PROFILES_TABLE, "user_id", "reseller_id",
    ownership_field="referred_by", required_role=Role.RESELLER,
)
USERS = ResourceKind("users", "User", PROFILES_TABLE, "user_id", "user_id")

RESOURCE_KINDS = {kind.name: kind for kind in (BRANDS, PRODUCTS, CONSUMERS, RESELLERS, USERS)}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: Optional[DenyReason] = None
    actor: Optional[Actor] = None

    @property
    def http_status(self) -> int:
        if self.allowed:
            return 200
        return DENY_STATUS[self.reason]

    @classmethod
    def allow(cls, actor: Actor) -> "AccessDecision":
        return cls(allowed=True, actor=actor)

    @classmethod
    def deny(cls, reason: DenyReason, actor: Optional[Actor] = None) -> "AccessDecision":
        return cls(allowed=False, reason=reason, actor=actor)


def evaluate_access(
    actor: Optional[Actor],
    resource: Optional[Dict[str, Any]],
    kind: ResourceKind,
) -> AccessDecision:
    """Pure decision over already-fetched actor and resource rows."""
    if actor is None:
        return AccessDecision.deny(DenyReason.UNAUTHENTICATED)
    if not actor.is_active:
        return AccessDecision.deny(DenyReason.FORBIDDEN, actor)
    if resource is None:
        return AccessDecision.deny(DenyReason.NOT_FOUND, actor)
    if kind.required_role and kind.required_role not in normalize_roles(resource.get("role")):
        return AccessDecision.deny(DenyReason.NOT_FOUND, actor)
    if actor.is_admin:
        return AccessDecision.allow(actor)
    if kind.ownership_field:
        owner = resource.get(kind.ownership_field)
        if owner is not None and owner == actor.id:
            return AccessDecision.allow(actor)
    return AccessDecision.deny(DenyReason.FORBIDDEN, actor)


def fetch_actor(supabase: Client, actor_id: str) -> Optional[Actor]:
    """Load the caller's profile. None when there is no profile row."""
    result = supabase.table(PROFILES_TABLE)\
        .select("user_id, email, full_name, role, account_status, is_systemadmin")\
        .eq("user_id", actor_id)\
        .limit(1)\
        .execute()
    if not result.data:
        return None
    return Actor.from_profile(result.data[0])


def fetch_resource(supabase: Client, kind: ResourceKind, resource_id: str) -> Optional[Dict[str, Any]]:
    result = supabase.table(kind.table)\
        .select(kind.lookup_columns())\
        .eq(kind.id_column, resource_id)\
        .limit(1)\
        .execute()
    if not result.data:
        return None
    return result.data[0]


async def _lookup_actor(supabase: Client, actor_id: str) -> Optional[Actor]:
    try:
        return await asyncio.to_thread(fetch_actor, supabase, actor_id)
    except Exception as e:
        logger.error(f"Actor lookup failed for {actor_id}: {e}")
        return None


async def _lookup_resource(supabase: Client, kind: ResourceKind, resource_id: str) -> Optional[Dict[str, Any]]:
    try:
        return await asyncio.to_thread(fetch_resource, supabase, kind, resource_id)
    except Exception as e:
        logger.error(f"{kind.label} lookup failed for {resource_id}: {e}")
        return None


async def authorize(
    supabase: Client,
    actor_id: Optional[str],
    kind: ResourceKind,
    resource_id: str,
    operation: Operation,
) -> AccessDecision:
    """Decide whether actor_id may perform operation on the given record.

    Both lookups are independent reads and run concurrently; the decision is
    made only once both have completed. A failed lookup counts as a missing
    row, so errors can only ever deny.
    """
    if not actor_id:
        return AccessDecision.deny(DenyReason.UNAUTHENTICATED)

    actor, resource = await asyncio.gather(
        _lookup_actor(supabase, actor_id),
        _lookup_resource(supabase, kind, resource_id),
    )
    decision = evaluate_access(actor, resource, kind)
    if not decision.allowed:
        logger.info(
            "Denied %s on %s %s for actor %s: %s",
            operation.value, kind.name, resource_id, actor_id, decision.reason.value,
        )
    return decision

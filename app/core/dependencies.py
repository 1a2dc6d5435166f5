"""
Core dependencies for route protection and resource authorization
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from slowapi.util import get_remote_address
from supabase import Client

from app.core.activity import ActivityLogger
from app.core.authorization import (
    Actor, DenyReason, Operation, ResourceKind, authorize, fetch_actor,
)
from app.core.roles import Role
from app.core.validation import is_valid_uuid
from app.database.supabase_client import get_admin_supabase, get_supabase
from app.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is answered with 401 rather than 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Everything a handler needs about the current request, passed explicitly."""
    actor: Actor
    supabase: Client
    admin_supabase: Client
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def activity(self) -> ActivityLogger:
        return ActivityLogger(self.admin_supabase, self.actor, self.ip_address, self.user_agent)


def _client_details(request: Request) -> Dict[str, Optional[str]]:
    return {
        "ip_address": get_remote_address(request),
        "user_agent": request.headers.get("user-agent"),
    }


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> str:
    """Extract the caller's user id from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user_data = auth_service.get_current_user(credentials.credentials)
    return user_data["id"]


async def get_request_context(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_admin_supabase)
) -> RequestContext:
    """Load the caller's profile fresh from the datastore"""
    try:
        actor = await asyncio.to_thread(fetch_actor, supabase, user_id)
    except Exception as e:
        logger.error(f"Error loading profile for {user_id}: {e}")
        actor = None
    if actor is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User profile not found")
    if not actor.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been deactivated. Please contact the administrator."
        )
    return RequestContext(
        actor=actor, supabase=supabase, admin_supabase=admin_supabase, **_client_details(request)
    )


def require_admin(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    """Dependency allowing only admins (or system admins)"""
    if not ctx.actor.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: Admin access required")
    return ctx


def require_any_role(*roles: Role):
    """Factory for a dependency allowing admins plus any of the given roles"""
    def check_roles(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        if ctx.actor.is_admin or any(role in ctx.actor.roles for role in roles):
            return ctx
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Forbidden: requires one of {', '.join(role.value for role in roles)}"
        )
    return check_roles


def deny_message(reason: DenyReason, kind: ResourceKind, operation: Operation) -> str:
    if reason == DenyReason.UNAUTHENTICATED:
        return "Unauthorized"
    if reason == DenyReason.NOT_FOUND:
        return f"{kind.label} not found"
    return f"Forbidden: Not allowed to {operation.value} this {kind.label.lower()}"


def require_resource_access(kind: ResourceKind, operation: Operation):
    """Factory for a dependency that runs the admin-or-owner guard on the path's record id"""
    async def check_access(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        supabase: Client = Depends(get_supabase),
        admin_supabase: Client = Depends(get_admin_supabase)
    ) -> RequestContext:
        resource_id = request.path_params.get(kind.path_param)
        if not is_valid_uuid(resource_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid {kind.label.lower()} ID format"
            )
        decision = await authorize(supabase, user_id, kind, resource_id, operation)
        if not decision.allowed:
            raise HTTPException(
                status_code=decision.http_status,
                detail=deny_message(decision.reason, kind, operation)
            )
        return RequestContext(
            actor=decision.actor, supabase=supabase, admin_supabase=admin_supabase, **_client_details(request)
        )
    return check_access

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials
from app.database.supabase_client import get_admin_supabase, get_session_supabase
from app.modules.auth.schemas import LoginRequest, TokenResponse, MeResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import RequestContext, get_request_context, security
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


def get_login_service(supabase: Client = Depends(get_session_supabase)) -> AuthService:
    return AuthService(supabase)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_login_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    admin_supabase: Client = Depends(get_admin_supabase)
):
    """Revoke the caller's refresh tokens; the access token expires on its own"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    AuthService(admin_supabase).logout(credentials.credentials)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_current_user(ctx: RequestContext = Depends(get_request_context)):
    """Current actor with normalized roles and capability hints (for frontend UI)."""
    return AuthService.describe(ctx.actor)

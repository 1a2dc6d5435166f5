import logging
from supabase import Client
from app.modules.auth.schemas import LoginRequest, TokenResponse, MeResponse
from app.core.authorization import Actor
from app.core.roles import primary_role, roles_to_storage
from app.config.permissions_config import capabilities_for_roles, get_permission_matrix
from fastapi import HTTPException
from typing import Dict, Any

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.error(f"Login failed: {error_message}")
            raise HTTPException(status_code=500, detail="Login failed")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the caller from a Supabase access token. Verified on every request."""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            return {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Sign the token's session out everywhere; needs the service-role client"""
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    @staticmethod
    def describe(actor: Actor) -> MeResponse:
        """Profile summary plus the capability hints the console uses to build its menus."""
        if actor.is_admin:
            capabilities = [p["name"] for p in get_permission_matrix()["permissions"]]
        else:
            capabilities = capabilities_for_roles(actor.roles)
        return MeResponse(
            id=actor.id,
            email=actor.email,
            full_name=actor.full_name,
            roles=roles_to_storage(actor.roles),
            primary_role=primary_role(actor.roles, actor.is_systemadmin),
            account_status=actor.account_status.value,
            is_systemadmin=actor.is_systemadmin,
            capabilities=capabilities,
        )

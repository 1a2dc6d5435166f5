from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from supabase import create_client, Client

from app.config import Settings, settings as app_settings


@dataclass(frozen=True)
class SupabaseClients:
    client: Client
    service_client: Optional[Client] = None

    @property
    def admin(self) -> Client:
        """Client with service_role key; bypasses RLS. Falls back to the anon client."""
        return self.service_client or self.client


def create_supabase_clients(settings: Settings) -> SupabaseClients:
    """Build the clients once at startup; they are read-only for the process lifetime."""
    client = create_client(settings.supabase_url, settings.supabase_key)
    service_client = None
    if settings.supabase_service_role_key:
        service_client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    return SupabaseClients(client=client, service_client=service_client)


def get_supabase(request: Request) -> Client:
    return request.app.state.supabase.client


def get_admin_supabase(request: Request) -> Client:
    return request.app.state.supabase.admin


def get_session_supabase() -> Client:
    """A throwaway anon client for password sign-in; a sign-in would otherwise attach its session to the shared client."""
    return create_client(app_settings.supabase_url, app_settings.supabase_key)

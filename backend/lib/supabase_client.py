"""
Supabase clients for the backend

Each workspace gets its own client: the auth session of a Supabase client is
per instance, and the user's token is attached to its table requests.
"""
from typing import Tuple

from supabase import create_client, Client

from career_advisor.auth_provider import SupabaseAuthProvider
from career_advisor.config import AdvisorSettings
from career_advisor.repository import CareerRepository


def create_supabase_client(settings: AdvisorSettings) -> Client:
    """Create a new Supabase client with the public (anon) key"""
    if not settings.supabase_configured:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment")

    return create_client(settings.supabase_url, settings.supabase_anon_key)


def supabase_backend(settings: AdvisorSettings) -> Tuple[SupabaseAuthProvider, CareerRepository]:
    """Auth provider and repository sharing one fresh client"""
    client = create_supabase_client(settings)
    return SupabaseAuthProvider(client), CareerRepository(supabase_client=client)

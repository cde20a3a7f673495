"""Backend utilities"""
from .supabase_client import create_supabase_client, supabase_backend
from .auth import create_workspace, get_advisor, get_workspace, require_user

__all__ = ["create_supabase_client", "supabase_backend", "create_workspace", "get_advisor", "get_workspace", "require_user"]

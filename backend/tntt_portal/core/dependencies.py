"""
FastAPI dependency injection functions.
"""

from supabase import Client

from tntt_portal.config import get_settings
from tntt_portal.core.database import get_supabase_admin_client, get_supabase_client


def get_db() -> Client:
    """Dependency: get Supabase client.

    Prefers the service_role client when configured, since the overview and
    report scans must see every row regardless of RLS.
    """
    if get_settings().SUPABASE_SERVICE_KEY:
        return get_supabase_admin_client()
    return get_supabase_client()

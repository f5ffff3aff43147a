import logging
from typing import Optional

from supabase import create_client, Client
from littlebridge.config import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None
    _demo_warned: bool = False

    @classmethod
    def get_client(cls) -> Optional[Client]:
        """Public (anon key) client, or None in demo mode."""
        if settings.is_demo_mode:
            cls._warn_demo_mode()
            return None
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Optional[Client]:
        """Client with service_role key; bypasses RLS. Used by admin reads and seeding."""
        if settings.is_demo_mode:
            cls._warn_demo_mode()
            return None
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def create_session_client(cls) -> Optional[Client]:
        """
        Fresh anon-key client for one Supabase Auth call.

        A client that signs a user in switches its own Authorization header to
        that user's JWT, so sign-in and sign-up never run on the shared client.
        """
        if settings.is_demo_mode:
            return None
        return create_client(settings.supabase_url, settings.supabase_key)

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None
        cls._demo_warned = False

    @classmethod
    def _warn_demo_mode(cls):
        if not cls._demo_warned:
            logger.warning(
                "Running in DEMO MODE -- serving static data. "
                "Set SUPABASE_URL and SUPABASE_KEY to connect to a real database."
            )
            cls._demo_warned = True


def get_supabase() -> Optional[Client]:
    return SupabaseClient.get_client()


def get_service_supabase() -> Optional[Client]:
    return SupabaseClient.get_service_client()

"""Demo mode: no Supabase credentials means static data and no network client."""

from unittest.mock import MagicMock

from littlebridge.config import Settings, settings
from littlebridge.database import supabase_client
from littlebridge.database.supabase_client import SupabaseClient


def test_demo_mode_when_either_credential_missing():
    assert Settings(supabase_url="", supabase_key="anon").is_demo_mode
    assert Settings(supabase_url="https://x.supabase.co", supabase_key=" ").is_demo_mode
    assert not Settings(supabase_url="https://x.supabase.co", supabase_key="anon").is_demo_mode


def test_no_client_is_built_in_demo_mode(monkeypatch):
    create_client = MagicMock()
    monkeypatch.setattr(supabase_client, "create_client", create_client)

    assert SupabaseClient.get_client() is None
    assert SupabaseClient.get_service_client() is None
    create_client.assert_not_called()


def test_live_client_is_cached(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://x.supabase.co")
    monkeypatch.setattr(settings, "supabase_key", "anon")
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    create_client = MagicMock()
    monkeypatch.setattr(supabase_client, "create_client", create_client)

    first = SupabaseClient.get_client()
    assert SupabaseClient.get_client() is first
    # without a service-role key the public client is reused
    assert SupabaseClient.get_service_client() is first
    create_client.assert_called_once_with("https://x.supabase.co", "anon")


def test_cors_origins_list():
    s = Settings(cors_origins="http://a.test, http://b.test,")
    assert s.get_cors_origins_list() == ["http://a.test", "http://b.test"]


def test_health_and_ready(demo_client):
    assert demo_client.get("/health").json() == {"status": "healthy"}
    assert demo_client.get("/ready").json() == {"status": "ready", "mode": "demo"}


def test_demo_directory_is_served(demo_client):
    response = demo_client.get("/api/centers")
    assert response.status_code == 200
    slugs = [c["slug"] for c in response.json()]
    assert len(slugs) == 5
    # founding partners lead the listing
    assert set(slugs[:2]) == {"little-stars-chatswood", "harmony-kids-hurstville"}

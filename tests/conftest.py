"""Shared fixtures: a chainable fake Supabase client and FastAPI test clients."""

from collections import defaultdict
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from littlebridge.config import settings
from littlebridge.database.supabase_client import SupabaseClient, get_supabase, get_service_supabase
from littlebridge.main import app
from littlebridge.modules.auth.service import clear_auth_cache


def api_error(code: str, message: str = "error") -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class FakeQuery:
    """Records every builder call; execute() pops the next queued response for the table."""

    def __init__(self, db, table_name):
        self.db = db
        self.table_name = table_name
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        self.db.executed.append((self.table_name, self.calls))
        queue = self.db.responses[self.table_name]
        item = queue.pop(0) if queue else SimpleNamespace(data=[], count=0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeSupabase:
    def __init__(self):
        self.responses = defaultdict(list)
        self.executed = []
        self.auth = MagicMock()

    def table(self, name):
        return FakeQuery(self, name)

    def queue(self, table, *items):
        """Queue results for a table: lists become `.data`, exceptions are raised."""
        for item in items:
            if isinstance(item, Exception):
                self.responses[table].append(item)
            else:
                self.responses[table].append(SimpleNamespace(data=item, count=len(item or [])))

    def queue_count(self, table, count):
        self.responses[table].append(SimpleNamespace(data=[], count=count))

    def calls_for(self, table):
        return [calls for name, calls in self.executed if name == table]

    def call_names(self, table):
        return [[name for name, _, _ in calls] for calls in self.calls_for(table)]


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "")
    monkeypatch.setattr(settings, "supabase_key", "")
    SupabaseClient.reset_client()
    clear_auth_cache()
    yield
    app.dependency_overrides.clear()
    SupabaseClient.reset_client()
    clear_auth_cache()


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def demo_client():
    """API client with no Supabase credentials (demo data)."""
    return TestClient(app)


@pytest.fixture
def live_client(fake_supabase):
    """API client whose services talk to the fake Supabase."""
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    return TestClient(app)


def bearer(role: str, email: str = None) -> dict:
    """Authorization header carrying a demo-mode token."""
    return {"Authorization": f"Bearer demo:{role}:{email or role + '@example.com'}"}

"""Tests for the HTTP API client."""

from unittest.mock import MagicMock

import pytest

from littlebridge.client.api_client import ApiClient, ApiError


class FakeResponse:
    def __init__(self, status_code, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.content = (text or ("{}" if body is not None else "")).encode()

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


@pytest.fixture
def session():
    session = MagicMock()
    session.request.return_value = FakeResponse(200, {"ok": True})
    return session


@pytest.fixture
def client(session):
    return ApiClient("http://api.test/", session=session)


def test_fetch_api_builds_url_and_json_header(client, session):
    assert client.fetch_api("/centers") == {"ok": True}

    method, url = session.request.call_args.args
    assert method == "GET"
    assert url == "http://api.test/api/centers"
    assert session.request.call_args.kwargs["headers"] == {"Content-Type": "application/json"}


def test_caller_headers_override_content_type(client, session):
    client.fetch_api("/auth/me", headers={"Content-Type": "text/plain", "X-Trace": "1"})
    assert session.request.call_args.kwargs["headers"] == {"Content-Type": "text/plain", "X-Trace": "1"}


def test_error_field_becomes_exception_message(client, session):
    session.request.return_value = FakeResponse(400, {"error": "bad input"})

    with pytest.raises(ApiError) as exc_info:
        client.fetch_api("/enquiries", method="POST", json={})

    assert str(exc_info.value) == "bad input"
    assert exc_info.value.status_code == 400


def test_non_json_error_body_uses_fallback(client, session):
    session.request.return_value = FakeResponse(502, None, text="<html>Bad Gateway</html>")

    with pytest.raises(ApiError) as exc_info:
        client.fetch_api("/centers")

    assert exc_info.value.message == "Request failed"


def test_error_body_without_error_field_uses_fallback(client, session):
    session.request.return_value = FakeResponse(500, {"detail": "boom"})

    with pytest.raises(ApiError, match="Request failed"):
        client.fetch_api("/centers")


def test_redirect_status_is_an_error(client, session):
    session.request.return_value = FakeResponse(302, {"error": "moved"})
    with pytest.raises(ApiError, match="moved"):
        client.fetch_api("/centers")


def test_empty_success_body_returns_none(client, session):
    session.request.return_value = FakeResponse(204)
    assert client.families.delete_child("c1") is None
    assert session.request.call_args.args == ("DELETE", "http://api.test/api/families/children/c1")


def test_center_list_serializes_only_set_filters(client, session):
    client.centers.list(search="chatswood")
    assert session.request.call_args.kwargs["params"] == {"search": "chatswood"}

    client.centers.list(language="Mandarin", ccs=True)
    assert session.request.call_args.kwargs["params"] == {"language": "Mandarin", "ccs": "true"}

    client.centers.list(ccs=False)
    assert session.request.call_args.kwargs["params"] == {}


def test_convenience_calls_map_to_routes(client, session):
    client.enquiries.update("e1", {"status": "contacted"})
    assert session.request.call_args.args == ("PATCH", "http://api.test/api/enquiries/e1")
    assert session.request.call_args.kwargs["json"] == {"status": "contacted"}

    client.auth.sign_in({"email": "a@b.co", "password": "pw"})
    assert session.request.call_args.args == ("POST", "http://api.test/api/auth/signin")

    client.admin.stats()
    assert session.request.call_args.args == ("GET", "http://api.test/api/admin/stats")

    client.waitlist.join("a@b.co", "Ryde")
    assert session.request.call_args.kwargs["json"] == {"email": "a@b.co", "suburb": "Ryde"}

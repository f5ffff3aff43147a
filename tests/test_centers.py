"""Tests for the center directory and listing management."""

import pytest

from littlebridge.core.errors import DataAccessError, ErrorKind
from littlebridge.database import demo_data
from littlebridge.modules.centers.schemas import CenterCreate, CenterUpdate
from littlebridge.modules.centers.service import CenterService, filter_centers, generate_slug
from conftest import api_error, bearer


def test_generate_slug():
    assert generate_slug("Little Stars  Bilingual -- Chatswood!") == "little-stars-bilingual-chatswood"
    assert generate_slug("  ") == ""


def test_filter_by_language_and_ccs():
    rows = filter_centers(demo_data.centers(), language="korean")
    assert [c["slug"] for c in rows] == ["bright-horizons-eastwood"]

    rows = filter_centers(demo_data.centers(), ccs=True)
    assert "sunflower-bilingual-epping" not in [c["slug"] for c in rows]


def test_search_matches_suburb_or_postcode():
    assert [c["slug"] for c in filter_centers(demo_data.centers(), search="box hill")] == ["melbourne-mandarin-boxhill"]
    assert [c["slug"] for c in filter_centers(demo_data.centers(), search="2220")] == ["harmony-kids-hurstville"]


def test_list_route_passes_filters(demo_client):
    response = demo_client.get("/api/centers", params={"language": "Cantonese", "ccs": "true"})
    assert [c["slug"] for c in response.json()] == ["harmony-kids-hurstville"]


def test_detail_photos_sorted(demo_client):
    response = demo_client.get("/api/centers/little-stars-chatswood")
    orders = [p["display_order"] for p in response.json()["center_photos"]]
    assert orders == sorted(orders)


def test_unknown_slug_is_404(demo_client):
    response = demo_client.get("/api/centers/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Center not found", "kind": "not_found"}


def test_family_cannot_create_center(demo_client):
    response = demo_client.post("/api/centers", json={"center_name": "X"}, headers=bearer("family"))
    assert response.status_code == 403


def test_live_list_builds_filters(fake_supabase):
    fake_supabase.queue("center_profiles", [
        {"id": "c1", "center_name": "A", "slug": "a", "staff_languages": [{"language": "Mandarin"}]},
        {"id": "c2", "center_name": "B", "slug": "b", "staff_languages": None},
    ])

    rows = CenterService(fake_supabase).list_centers(search="chats,wood", language="mandarin", ccs=True)

    assert [c.slug for c in rows] == ["a"]
    calls = fake_supabase.calls_for("center_profiles")[0]
    assert ("eq", ("is_ccs_approved", True), {}) in calls
    or_filter = next(args[0] for name, args, _ in calls if name == "or_")
    assert "center_name.ilike.*chatswood*" in or_filter


def test_create_center_duplicate_slug(fake_supabase):
    fake_supabase.queue("center_profiles", api_error("23505", "duplicate key value"))

    with pytest.raises(DataAccessError) as exc_info:
        CenterService(fake_supabase).create_center("u1", CenterCreate(center_name="Little Stars"))

    assert exc_info.value.kind == ErrorKind.DUPLICATE
    assert "little-stars" in exc_info.value.message


def test_create_center_marks_onboarding(fake_supabase):
    fake_supabase.queue("center_profiles", [{"id": "c1", "center_name": "Little Stars", "slug": "little-stars"}])

    center = CenterService(fake_supabase).create_center("u1", CenterCreate(center_name="Little Stars"))

    assert center.slug == "little-stars"
    insert = fake_supabase.calls_for("center_profiles")[0][0]
    assert insert[1][0]["user_id"] == "u1"
    assert fake_supabase.call_names("profiles") == [["update", "eq"]]


def test_update_requires_ownership(fake_supabase):
    fake_supabase.queue("center_profiles", [{"id": "c1", "user_id": "owner", "center_name": "A", "slug": "a"}])

    with pytest.raises(DataAccessError) as exc_info:
        CenterService(fake_supabase).update_center("c1", CenterUpdate(suburb="Ryde"), "intruder", "center")

    assert exc_info.value.kind == ErrorKind.FORBIDDEN


def test_admin_may_update_any_center(fake_supabase):
    fake_supabase.queue("center_profiles", [{"id": "c1", "user_id": "owner", "center_name": "A", "slug": "a"}])
    fake_supabase.queue("center_profiles", [{"id": "c1", "user_id": "owner", "center_name": "A", "slug": "a", "suburb": "Ryde"}])

    center = CenterService(fake_supabase).update_center("c1", CenterUpdate(suburb="Ryde"), "admin-id", "admin")

    assert center.suburb == "Ryde"


def test_delete_photo_of_another_center_is_forbidden(fake_supabase):
    fake_supabase.queue("center_photos", [{"id": "p1", "center_id": "c1"}])
    fake_supabase.queue("center_profiles", [{"id": "c1", "user_id": "owner", "center_name": "A", "slug": "a"}])

    with pytest.raises(DataAccessError) as exc_info:
        CenterService(fake_supabase).delete_photo("p1", "intruder", "center")

    assert exc_info.value.kind == ErrorKind.FORBIDDEN
    assert fake_supabase.call_names("center_photos") == [["select", "eq"]]

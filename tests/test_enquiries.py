"""Tests for enquiry creation, listing and the status workflow."""

import pytest

from littlebridge.core.errors import DataAccessError, ErrorKind
from littlebridge.database.demo_data import DEMO_FAMILY_USER_ID, demo_uuid
from littlebridge.modules.enquiries.schemas import EnquiryCreate, EnquiryUpdate
from littlebridge.modules.enquiries.service import EnquiryService, is_allowed_transition
from conftest import bearer

CENTER_ID = demo_uuid(1)


@pytest.mark.parametrize("current,target", [
    ("new", "contacted"),
    ("new", "enrolled"),
    ("contacted", "tour_booked"),
    ("tour_booked", "declined"),
    ("new", "declined"),
    ("contacted", "contacted"),
])
def test_allowed_transitions(current, target):
    assert is_allowed_transition(current, target)


@pytest.mark.parametrize("current,target", [
    ("contacted", "new"),
    ("tour_booked", "contacted"),
    ("enrolled", "declined"),
    ("declined", "new"),
    ("enrolled", "tour_booked"),
])
def test_rejected_transitions(current, target):
    assert not is_allowed_transition(current, target)


# ---- creation ----

def test_guest_enquiry_from_anonymous_caller(demo_client):
    response = demo_client.post("/api/enquiries", json={
        "center_id": CENTER_ID,
        "guest_name": "Wei Zhang",
        "guest_email": "wei@example.com",
        "guest_message": "Do you have Tuesday vacancies?",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["is_guest"] is True
    assert body["family_profile_id"] is None
    assert body["status"] == "new"


def test_guest_needs_name_or_email(demo_client):
    response = demo_client.post("/api/enquiries", json={"center_id": CENTER_ID})
    assert response.status_code == 400
    assert response.json()["kind"] == "validation"


def test_member_enquiry_is_linked(demo_client):
    response = demo_client.post(
        "/api/enquiries", json={"center_id": CENTER_ID, "guest_message": "Hi"}, headers=bearer("family")
    )
    body = response.json()
    assert body["is_guest"] is False
    assert body["family_profile_id"] == DEMO_FAMILY_USER_ID


def test_invalid_token_on_create_falls_back_to_guest(demo_client):
    response = demo_client.post(
        "/api/enquiries",
        json={"center_id": CENTER_ID, "guest_name": "Wei"},
        headers={"Authorization": "Bearer garbage"},
    )
    assert response.status_code == 201
    assert response.json()["is_guest"] is True


def test_unknown_center_is_404(demo_client):
    response = demo_client.post("/api/enquiries", json={"center_id": demo_uuid(99), "guest_name": "Wei"})
    assert response.status_code == 404


def test_message_length_limit(demo_client):
    response = demo_client.post(
        "/api/enquiries", json={"center_id": CENTER_ID, "guest_name": "Wei", "guest_message": "x" * 2001}
    )
    assert response.status_code == 400


def test_live_create_rejects_missing_center(fake_supabase):
    fake_supabase.queue("center_profiles", [])
    with pytest.raises(DataAccessError) as exc_info:
        EnquiryService(fake_supabase).create_enquiry(EnquiryCreate(center_id="c-x", guest_name="Wei"))
    assert exc_info.value.kind == ErrorKind.NOT_FOUND
    assert fake_supabase.calls_for("enquiries") == []


# ---- listing ----

def test_family_sees_own_enquiries(demo_client):
    rows = demo_client.get("/api/enquiries", headers=bearer("family")).json()
    assert [r["id"] for r in rows] == [demo_uuid(1005)]
    assert rows[0]["center_profiles"]["slug"] == "bright-horizons-eastwood"


def test_center_sees_enquiries_to_owned_center(demo_client):
    rows = demo_client.get("/api/enquiries", headers=bearer("center")).json()
    assert {r["center_id"] for r in rows} == {CENTER_ID}
    created = [r["created_at"] for r in rows]
    assert created == sorted(created, reverse=True)


def test_educator_cannot_list(demo_client):
    assert demo_client.get("/api/enquiries", headers=bearer("educator")).status_code == 403


def test_live_center_without_listing_gets_nothing(fake_supabase):
    fake_supabase.queue("center_profiles", [])
    assert EnquiryService(fake_supabase).list_for_user({"id": "u1", "role": "center"}) == []
    assert fake_supabase.calls_for("enquiries") == []


def test_live_center_query_uses_owned_ids(fake_supabase):
    fake_supabase.queue("center_profiles", [{"id": "c1"}, {"id": "c2"}])
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "new"}])

    rows = EnquiryService(fake_supabase).list_for_user({"id": "u1", "role": "center"})

    assert [r.id for r in rows] == ["e1"]
    assert ("in_", ("center_id", ["c1", "c2"]), {}) in fake_supabase.calls_for("enquiries")[0]


# ---- updates ----

def test_center_moves_enquiry_forward(demo_client):
    response = demo_client.patch(
        f"/api/enquiries/{demo_uuid(1001)}", json={"status": "contacted", "center_notes": "Called"},
        headers=bearer("center"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "contacted"
    assert response.json()["center_notes"] == "Called"


def test_center_cannot_reopen_enrolled_enquiry(demo_client):
    response = demo_client.patch(
        f"/api/enquiries/{demo_uuid(1004)}", json={"status": "new"}, headers=bearer("center")
    )
    assert response.status_code == 409
    assert response.json()["kind"] == "invalid_transition"


def test_admin_bypasses_status_policy(demo_client):
    response = demo_client.patch(
        f"/api/enquiries/{demo_uuid(1004)}", json={"status": "new"}, headers=bearer("admin")
    )
    assert response.status_code == 200
    assert response.json()["status"] == "new"


def test_center_cannot_update_other_centers_enquiry(demo_client):
    response = demo_client.patch(
        f"/api/enquiries/{demo_uuid(1003)}", json={"status": "contacted"}, headers=bearer("center")
    )
    assert response.status_code == 403


def test_family_cannot_update(demo_client):
    response = demo_client.patch(
        f"/api/enquiries/{demo_uuid(1005)}", json={"status": "declined"}, headers=bearer("family")
    )
    assert response.status_code == 403


def test_empty_update_is_rejected(fake_supabase):
    with pytest.raises(DataAccessError) as exc_info:
        EnquiryService(fake_supabase).update_enquiry("e1", {"id": "u1", "role": "admin"}, EnquiryUpdate())
    assert exc_info.value.kind == ErrorKind.VALIDATION
    assert fake_supabase.executed == []


def test_live_update_writes_status(fake_supabase):
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "new",
                                       "center_profiles": {"user_id": "u1"}}])
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "tour_booked"}])

    result = EnquiryService(fake_supabase).update_enquiry(
        "e1", {"id": "u1", "role": "center"}, EnquiryUpdate(status="tour_booked")
    )

    assert result.status == "tour_booked"
    update_call = fake_supabase.calls_for("enquiries")[1][0]
    assert update_call[0] == "update"
    assert update_call[1][0]["status"] == "tour_booked"
    assert fake_supabase.calls_for("enquiries")[1][2] == ("eq", ("status", "new"), {})


def test_concurrent_status_change_is_rejected(fake_supabase):
    # another writer moved the enquiry to declined after it was read
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "new",
                                       "center_profiles": {"user_id": "u1"}}])
    fake_supabase.queue("enquiries", [])

    with pytest.raises(DataAccessError) as exc_info:
        EnquiryService(fake_supabase).update_enquiry(
            "e1", {"id": "u1", "role": "center"}, EnquiryUpdate(status="contacted")
        )

    assert exc_info.value.kind == ErrorKind.INVALID_TRANSITION
    update_calls = fake_supabase.calls_for("enquiries")[1]
    assert ("eq", ("status", "new"), {}) in update_calls


def test_notes_only_update_is_not_status_guarded(fake_supabase):
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "new",
                                       "center_profiles": {"user_id": "u1"}}])
    fake_supabase.queue("enquiries", [{"id": "e1", "center_id": "c1", "status": "new", "center_notes": "Called"}])

    EnquiryService(fake_supabase).update_enquiry(
        "e1", {"id": "u1", "role": "center"}, EnquiryUpdate(center_notes="Called")
    )

    assert [name for name, _, _ in fake_supabase.calls_for("enquiries")[1]] == ["update", "eq"]

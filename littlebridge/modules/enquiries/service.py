import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from supabase import Client

from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.modules.enquiries.schemas import EnquiryCreate, EnquiryUpdate, EnquiryResponse

logger = logging.getLogger(__name__)

STATUS_FLOW = ["new", "contacted", "tour_booked", "enrolled"]
TERMINAL_STATUSES = {"enrolled", "declined"}
WITH_CENTER_SUMMARY = "*, center_profiles(center_name, slug, suburb)"


def is_allowed_transition(current: str, target: str) -> bool:
    """Forward moves along STATUS_FLOW (skipping allowed), any non-terminal status to declined, or no change."""
    if current == target:
        return True
    if current in TERMINAL_STATUSES:
        return False
    if target == "declined":
        return True
    if current not in STATUS_FLOW or target not in STATUS_FLOW:
        return False
    return STATUS_FLOW.index(target) > STATUS_FLOW.index(current)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class EnquiryService:
    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    @property
    def demo(self) -> bool:
        return self.supabase is None

    def create_enquiry(self, enquiry_data: EnquiryCreate, user: Optional[Dict[str, Any]] = None) -> EnquiryResponse:
        """Create a guest enquiry (no user) or a member enquiry linked to the family's profile"""
        is_guest = user is None
        if is_guest and not (enquiry_data.guest_name or enquiry_data.guest_email):
            raise DataAccessError(
                ErrorKind.VALIDATION, "Guest name or email is required for guest enquiries"
            )

        center = self._find_center(enquiry_data.center_id)
        if center is None:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center not found")

        payload = enquiry_data.model_dump(mode="json")
        payload.update({
            "family_profile_id": None if is_guest else user["id"],
            "is_guest": is_guest,
            "status": "new",
        })

        if self.demo:
            return EnquiryResponse(**payload, id=str(uuid.uuid4()), created_at=_now())

        try:
            result = self.supabase.table("enquiries").insert(payload).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Create enquiry")
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to create enquiry")
        return EnquiryResponse(**result.data[0])

    def list_for_user(self, user: Dict[str, Any]) -> List[EnquiryResponse]:
        """Families see their own enquiries, centers the ones sent to them, admins everything"""
        role = user["role"]
        if role not in ("family", "center", "admin"):
            raise DataAccessError(ErrorKind.FORBIDDEN, "Forbidden")
        if self.demo:
            return [EnquiryResponse(**row) for row in self._demo_rows_for(user)]

        try:
            if role == "family":
                result = self.supabase.table("enquiries")\
                    .select(WITH_CENTER_SUMMARY)\
                    .eq("family_profile_id", user["id"])\
                    .order("created_at", desc=True)\
                    .execute()
            elif role == "center":
                centers = self.supabase.table("center_profiles")\
                    .select("id")\
                    .eq("user_id", user["id"])\
                    .execute()
                center_ids = [c["id"] for c in centers.data or []]
                if not center_ids:
                    return []
                result = self.supabase.table("enquiries")\
                    .select("*")\
                    .in_("center_id", center_ids)\
                    .order("created_at", desc=True)\
                    .execute()
            else:
                return self.list_all()
        except Exception as e:
            raise wrap_backend_error(e, "List enquiries")
        return [EnquiryResponse(**row) for row in result.data or []]

    def list_all(self) -> List[EnquiryResponse]:
        if self.demo:
            rows = sorted(demo_data.enquiries(), key=lambda e: e["created_at"], reverse=True)
            return [EnquiryResponse(**row) for row in rows]
        try:
            result = self.supabase.table("enquiries")\
                .select(WITH_CENTER_SUMMARY)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "List enquiries")
        return [EnquiryResponse(**row) for row in result.data or []]

    def update_enquiry(self, enquiry_id: str, user: Dict[str, Any], update: EnquiryUpdate) -> EnquiryResponse:
        """Update status and/or center notes. Centers must own the enquiry's center."""
        role = user["role"]
        if role not in ("center", "admin"):
            raise DataAccessError(ErrorKind.FORBIDDEN, "Only centers and admins can update enquiries")

        update_data = update.model_dump(exclude_unset=True)
        update_data = {k: v for k, v in update_data.items() if k in ("status", "center_notes")}
        if update_data.get("status") is None:
            update_data.pop("status", None)
        if not update_data:
            raise DataAccessError(ErrorKind.VALIDATION, "No fields to update")

        current = self._get_for_update(enquiry_id)
        owner_id = (current.get("center_profiles") or {}).get("user_id")
        if role == "center" and owner_id != user["id"]:
            raise DataAccessError(ErrorKind.FORBIDDEN, "Not authorized to update this enquiry")

        new_status = update_data.get("status")
        if new_status is not None and role != "admin" and not is_allowed_transition(current["status"], new_status):
            raise DataAccessError(
                ErrorKind.INVALID_TRANSITION,
                f"Cannot move enquiry from '{current['status']}' to '{new_status}'"
            )
        update_data["updated_at"] = _now()

        if self.demo:
            current.pop("center_profiles", None)
            return EnquiryResponse(**{**current, **update_data})

        guarded = new_status is not None and role != "admin"
        try:
            query = self.supabase.table("enquiries")\
                .update(update_data)\
                .eq("id", enquiry_id)
            if guarded:
                # only write if nobody moved the enquiry since the transition was checked
                query = query.eq("status", current["status"])
            result = query.execute()
        except Exception as e:
            raise wrap_backend_error(e, "Update enquiry")
        if not result.data:
            if guarded:
                raise DataAccessError(
                    ErrorKind.INVALID_TRANSITION,
                    "Enquiry status changed while updating; reload and try again"
                )
            raise DataAccessError(ErrorKind.NOT_FOUND, "Enquiry not found")
        return EnquiryResponse(**result.data[0])

    def _get_for_update(self, enquiry_id: str) -> Dict[str, Any]:
        if self.demo:
            owners = {c["id"]: c.get("user_id") for c in demo_data.centers()}
            for row in demo_data.enquiries():
                if row["id"] == enquiry_id:
                    row["center_profiles"] = {"user_id": owners.get(row["center_id"])}
                    return row
            raise DataAccessError(ErrorKind.NOT_FOUND, "Enquiry not found")
        try:
            result = self.supabase.table("enquiries")\
                .select("*, center_profiles(user_id)")\
                .eq("id", enquiry_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Enquiry lookup")
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Enquiry not found")
        return result.data[0]

    def _find_center(self, center_id: str) -> Optional[Dict[str, Any]]:
        if self.demo:
            return next((c for c in demo_data.centers() if c["id"] == center_id), None)
        try:
            result = self.supabase.table("center_profiles")\
                .select("id")\
                .eq("id", center_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Center lookup")
        return result.data[0] if result.data else None

    def _demo_rows_for(self, user: Dict[str, Any]) -> List[Dict[str, Any]]:
        rows = demo_data.enquiries()
        if user["role"] == "family":
            rows = [r for r in rows if r["family_profile_id"] == user["id"]]
        elif user["role"] == "center":
            owned = {c["id"] for c in demo_data.centers() if c.get("user_id") == user["id"]}
            rows = [r for r in rows if r["center_id"] in owned]
            for row in rows:
                row.pop("center_profiles", None)
        return sorted(rows, key=lambda e: e["created_at"], reverse=True)

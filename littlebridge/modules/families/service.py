import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from supabase import Client

from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.modules.families.schemas import (
    FamilyProfileUpdate, FamilyProfileResponse, ChildCreate, ChildUpdate, ChildResponse
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "family_name", "suburb", "postcode", "state",
    "mobile_phone", "wechat_id", "preferred_contact", "priorities",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def merge_profile(existing: Optional[Dict[str, Any]], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Apply non-null changes over the stored profile; preferred_contact falls back to email."""
    merged = {field: (existing or {}).get(field) for field in PROFILE_FIELDS}
    for field, value in changes.items():
        if field in PROFILE_FIELDS and value is not None:
            merged[field] = value
    if not merged["preferred_contact"]:
        merged["preferred_contact"] = "email"
    if merged["priorities"] is None:
        merged["priorities"] = []
    return merged


class FamilyService:
    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    @property
    def demo(self) -> bool:
        return self.supabase is None

    def get_profile(self, user_id: str) -> FamilyProfileResponse:
        profile = self._find_profile(user_id)
        if profile is None:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Family profile not found")
        return FamilyProfileResponse(**profile)

    def upsert_profile(self, user_id: str, update: FamilyProfileUpdate) -> FamilyProfileResponse:
        """Create the profile or update it, keeping stored values for omitted fields"""
        existing = self._find_profile(user_id)
        payload = merge_profile(existing, update.model_dump(exclude_unset=True))
        payload["user_id"] = user_id
        payload["updated_at"] = _now()

        if self.demo:
            base = existing or {"id": str(uuid.uuid4()), "created_at": _now()}
            return FamilyProfileResponse(**{**base, **payload})

        try:
            result = self.supabase.table("family_profiles")\
                .upsert(payload, on_conflict="user_id")\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Update family profile")
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to save family profile")
        return FamilyProfileResponse(**result.data[0])

    def list_children(self, user_id: str) -> List[ChildResponse]:
        """Children ordered by date of birth; empty when the family has no profile yet"""
        profile = self._find_profile(user_id)
        if profile is None:
            return []

        if self.demo:
            rows = [c for c in demo_data.children() if c["family_id"] == profile["id"]]
            rows.sort(key=lambda c: c["date_of_birth"] or "")
            return [ChildResponse(**row) for row in rows]

        try:
            result = self.supabase.table("family_children")\
                .select("*")\
                .eq("family_id", profile["id"])\
                .order("date_of_birth")\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "List children")
        return [ChildResponse(**row) for row in result.data or []]

    def add_child(self, user_id: str, child: ChildCreate) -> ChildResponse:
        profile = self._find_profile(user_id) or self._create_empty_profile(user_id)
        payload = child.model_dump(mode="json")
        payload["family_id"] = profile["id"]

        if self.demo:
            return ChildResponse(**payload, id=str(uuid.uuid4()))

        try:
            result = self.supabase.table("family_children").insert(payload).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Add child")
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to add child")
        return ChildResponse(**result.data[0])

    def update_child(self, user_id: str, child_id: str, update: ChildUpdate) -> ChildResponse:
        current = self._get_owned_child(user_id, child_id, "update")
        update_data = {k: v for k, v in update.model_dump(mode="json", exclude_unset=True).items() if v is not None}
        if not update_data:
            return ChildResponse(**current)

        if self.demo:
            return ChildResponse(**{**current, **update_data})

        try:
            result = self.supabase.table("family_children")\
                .update(update_data)\
                .eq("id", child_id)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Update child")
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Child not found")
        return ChildResponse(**result.data[0])

    def delete_child(self, user_id: str, child_id: str) -> None:
        self._get_owned_child(user_id, child_id, "delete")
        if self.demo:
            logger.info(f"Demo mode: child {child_id} not deleted")
            return

        try:
            self.supabase.table("family_children").delete().eq("id", child_id).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Delete child")
        logger.info(f"Child deleted: {child_id}")

    def _find_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        if self.demo:
            profile = demo_data.family_profile()
            return profile if profile["user_id"] == user_id else None
        try:
            result = self.supabase.table("family_profiles")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Family profile lookup")
        return result.data[0] if result.data else None

    def _create_empty_profile(self, user_id: str) -> Dict[str, Any]:
        if self.demo:
            return {"id": str(uuid.uuid4()), "user_id": user_id}
        try:
            result = self.supabase.table("family_profiles").insert({"user_id": user_id}).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Create family profile")
        logger.info(f"Family profile auto-created for user {user_id}")
        return result.data[0]

    def _get_owned_child(self, user_id: str, child_id: str, action: str) -> Dict[str, Any]:
        """The child row, provided it belongs to the caller's family"""
        not_owned = DataAccessError(ErrorKind.FORBIDDEN, f"Not authorized to {action} this child")

        if self.demo:
            profile = self._find_profile(user_id)
            for child in demo_data.children():
                if child["id"] == child_id:
                    if profile is None or child["family_id"] != profile["id"]:
                        raise not_owned
                    return child
            raise not_owned

        try:
            result = self.supabase.table("family_children")\
                .select("*, family_profiles!inner(user_id)")\
                .eq("id", child_id)\
                .eq("family_profiles.user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Child lookup")
        if not result.data:
            raise not_owned
        row = result.data[0]
        row.pop("family_profiles", None)
        return row

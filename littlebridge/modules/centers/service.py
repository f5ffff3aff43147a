import re
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from supabase import Client

from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.modules.centers.schemas import (
    CenterCreate, CenterUpdate, CenterResponse, CenterPhotoCreate, CenterPhotoResponse
)

logger = logging.getLogger(__name__)

CENTER_WITH_PHOTOS = "*, center_photos(id, center_id, photo_url, display_order)"

# Characters that would break a PostgREST or_() filter expression
_FILTER_UNSAFE = re.compile(r"[,()*%]")


def generate_slug(name: str) -> str:
    """Lowercase, strip punctuation, collapse whitespace and hyphens into single hyphens."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _speaks(center: Dict[str, Any], language: str) -> bool:
    needle = language.strip().lower()
    for entry in center.get("staff_languages") or []:
        name = entry.get("language", "") if isinstance(entry, dict) else str(entry)
        if needle in name.lower():
            return True
    return False


def _matches_search(center: Dict[str, Any], term: str) -> bool:
    needle = term.strip().lower()
    return any(
        needle in (center.get(field) or "").lower()
        for field in ("center_name", "suburb", "postcode")
    )


def _sort_key(center: Dict[str, Any]):
    # founding partners first, then alphabetical
    return (not center.get("is_founding_partner"), (center.get("center_name") or "").lower())


def filter_centers(
    centers: List[Dict[str, Any]],
    search: Optional[str] = None,
    language: Optional[str] = None,
    ccs: bool = False,
) -> List[Dict[str, Any]]:
    """Apply the directory filters to already-fetched rows."""
    result = centers
    if search and search.strip():
        result = [c for c in result if _matches_search(c, search)]
    if language and language.strip():
        result = [c for c in result if _speaks(c, language)]
    if ccs:
        result = [c for c in result if c.get("is_ccs_approved")]
    return sorted(result, key=_sort_key)


def to_center_response(row: Dict[str, Any]) -> CenterResponse:
    photos = sorted(row.get("center_photos") or [], key=lambda p: p.get("display_order") or 0)
    return CenterResponse(**{**row, "center_photos": photos})


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CenterService:
    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    @property
    def demo(self) -> bool:
        return self.supabase is None

    def list_centers(
        self,
        search: Optional[str] = None,
        language: Optional[str] = None,
        ccs: bool = False,
    ) -> List[CenterResponse]:
        """Directory search: text over name/suburb/postcode, staff language, CCS approval."""
        if self.demo:
            return [to_center_response(c) for c in filter_centers(demo_data.centers(), search, language, ccs)]
        try:
            query = self.supabase.table("center_profiles").select(CENTER_WITH_PHOTOS)
            if ccs:
                query = query.eq("is_ccs_approved", True)
            term = _FILTER_UNSAFE.sub("", search or "").strip()
            if term:
                query = query.or_(
                    f"center_name.ilike.*{term}*,suburb.ilike.*{term}*,postcode.ilike.*{term}*"
                )
            result = query.order("is_founding_partner", desc=True)\
                .order("center_name")\
                .execute()
            rows = result.data or []
            # staff_languages is jsonb; language match is done here rather than in PostgREST
            if language and language.strip():
                rows = [c for c in rows if _speaks(c, language)]
            return [to_center_response(c) for c in rows]
        except Exception as e:
            raise wrap_backend_error(e, "Centers list")

    def get_by_slug(self, slug: str) -> CenterResponse:
        """Get a single public listing by its slug"""
        if self.demo:
            for center in demo_data.centers():
                if center["slug"] == slug:
                    return to_center_response(center)
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center not found")
        try:
            result = self.supabase.table("center_profiles")\
                .select(CENTER_WITH_PHOTOS)\
                .eq("slug", slug)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Center detail")
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center not found")
        return to_center_response(result.data[0])

    def get_for_owner(self, user_id: str) -> CenterResponse:
        """Center listing owned by a center account"""
        if self.demo:
            for center in demo_data.centers():
                if center.get("user_id") == user_id:
                    return to_center_response(center)
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center profile not found")
        try:
            result = self.supabase.table("center_profiles")\
                .select(CENTER_WITH_PHOTOS)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Center profile")
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center profile not found")
        return to_center_response(result.data[0])

    def find_for_owner(self, user_id: str) -> Optional[CenterResponse]:
        try:
            return self.get_for_owner(user_id)
        except DataAccessError as e:
            if e.kind == ErrorKind.NOT_FOUND:
                return None
            raise

    def create_center(self, user_id: str, center_data: CenterCreate) -> CenterResponse:
        """Create a listing for a center account and mark its onboarding complete"""
        slug = generate_slug(center_data.slug or center_data.center_name)
        if not slug:
            raise DataAccessError(ErrorKind.VALIDATION, "Center name must contain letters or digits")

        payload = center_data.model_dump(mode="json")
        payload.update({"slug": slug, "user_id": user_id})

        if self.demo:
            return to_center_response({**payload, "id": str(uuid.uuid4()), "created_at": _now()})

        try:
            result = self.supabase.table("center_profiles").insert(payload).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Create center", {
                ErrorKind.DUPLICATE: f"A center with the address '{slug}' already exists",
            })
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to create center")

        try:
            self.supabase.table("profiles")\
                .update({"onboarding_completed": True, "updated_at": _now()})\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            # listing is already created; not fatal
            logger.warning(f"Could not mark onboarding complete for {user_id}: {e}")

        return to_center_response(result.data[0])

    def update_center(self, center_id: str, center_data: CenterUpdate, user_id: str, role: str) -> CenterResponse:
        """Update a listing (owner or admin)"""
        current = self._get_owned(center_id, user_id, role)

        update_data = center_data.model_dump(mode="json", exclude_unset=True)
        if "slug" in update_data:
            update_data["slug"] = generate_slug(update_data["slug"] or "")
            if not update_data["slug"]:
                raise DataAccessError(ErrorKind.VALIDATION, "Slug must contain letters or digits")
        if not update_data:
            raise DataAccessError(ErrorKind.VALIDATION, "No fields to update")
        update_data["updated_at"] = _now()

        if self.demo:
            return to_center_response({**current, **update_data})

        try:
            result = self.supabase.table("center_profiles")\
                .update(update_data)\
                .eq("id", center_id)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Update center", {
                ErrorKind.DUPLICATE: f"A center with the address '{update_data.get('slug')}' already exists",
            })
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center not found")
        return to_center_response({**result.data[0], "center_photos": current.get("center_photos")})

    def add_photo(self, center_id: str, photo: CenterPhotoCreate, user_id: str, role: str) -> CenterPhotoResponse:
        self._get_owned(center_id, user_id, role)
        row = {"center_id": center_id, "photo_url": photo.photo_url, "display_order": photo.display_order}
        if self.demo:
            return CenterPhotoResponse(id=str(uuid.uuid4()), **row)
        try:
            result = self.supabase.table("center_photos").insert(row).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Add photo")
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to add photo")
        return CenterPhotoResponse(**result.data[0])

    def delete_photo(self, photo_id: str, user_id: str, role: str) -> bool:
        if self.demo:
            return True
        try:
            found = self.supabase.table("center_photos")\
                .select("id, center_id")\
                .eq("id", photo_id)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Delete photo")
        if not found.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Photo not found")
        self._get_owned(found.data[0]["center_id"], user_id, role)
        try:
            result = self.supabase.table("center_photos")\
                .delete()\
                .eq("id", photo_id)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Delete photo")
        return len(result.data or []) > 0

    def _get_owned(self, center_id: str, user_id: str, role: str) -> Dict[str, Any]:
        """Fetch a center row, enforcing that the caller owns it unless they are an admin."""
        if self.demo:
            row = next((c for c in demo_data.centers() if c["id"] == center_id), None)
        else:
            try:
                result = self.supabase.table("center_profiles")\
                    .select(CENTER_WITH_PHOTOS)\
                    .eq("id", center_id)\
                    .limit(1)\
                    .execute()
            except Exception as e:
                raise wrap_backend_error(e, "Center lookup")
            row = result.data[0] if result.data else None
        if row is None:
            raise DataAccessError(ErrorKind.NOT_FOUND, "Center not found")
        if role != "admin" and row.get("user_id") != user_id:
            raise DataAccessError(ErrorKind.FORBIDDEN, "Not authorized to manage this center")
        return row

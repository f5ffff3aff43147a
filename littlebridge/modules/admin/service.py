import logging
from collections import Counter
from typing import List, Optional, Dict, get_args

from supabase import Client

from littlebridge.core.errors import wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.modules.admin.schemas import AdminStats, StatusCount
from littlebridge.modules.centers.schemas import CenterResponse
from littlebridge.modules.centers.service import CENTER_WITH_PHOTOS, to_center_response
from littlebridge.modules.educators.schemas import EducatorLeadResponse
from littlebridge.modules.educators.service import EducatorService
from littlebridge.modules.enquiries.schemas import EnquiryResponse, EnquiryStatus
from littlebridge.modules.enquiries.service import EnquiryService

logger = logging.getLogger(__name__)

COUNTED_TABLES = {
    "total_centers": "center_profiles",
    "total_enquiries": "enquiries",
    "total_families": "family_profiles",
    "total_educators": "educator_leads",
    "total_waitlist": "waitlist",
}
ENQUIRY_STATUSES = get_args(EnquiryStatus)


class AdminService:
    """Platform-wide reads. Expects the service-role client so row level security does not hide rows."""

    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    def stats(self) -> AdminStats:
        if self.supabase is None:
            statuses = [e["status"] for e in demo_data.enquiries()]
            return AdminStats(
                total_centers=len(demo_data.centers()),
                total_enquiries=len(statuses),
                total_families=len(demo_data.family_profiles()),
                total_educators=len(demo_data.educator_leads()),
                total_waitlist=len(demo_data.waitlist()),
                enquiry_status_breakdown=self._breakdown(Counter(statuses)),
            )

        totals: Dict[str, int] = {}
        try:
            for key, table in COUNTED_TABLES.items():
                result = self.supabase.table(table).select("id", count="exact").execute()
                totals[key] = result.count or 0
            # one exact count per status; a row select would be capped at max-rows
            status_counts = {}
            for status in ENQUIRY_STATUSES:
                result = self.supabase.table("enquiries")\
                    .select("id", count="exact")\
                    .eq("status", status)\
                    .execute()
                status_counts[status] = result.count or 0
        except Exception as e:
            raise wrap_backend_error(e, "Admin stats")

        return AdminStats(**totals, enquiry_status_breakdown=self._breakdown(status_counts))

    def list_enquiries(self) -> List[EnquiryResponse]:
        return EnquiryService(self.supabase).list_all()

    def list_centers(self) -> List[CenterResponse]:
        """All listings, newest first, photos included"""
        if self.supabase is None:
            rows = sorted(demo_data.centers(), key=lambda c: c["created_at"], reverse=True)
            return [to_center_response(row) for row in rows]
        try:
            result = self.supabase.table("center_profiles")\
                .select(CENTER_WITH_PHOTOS)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Admin centers")
        return [to_center_response(row) for row in result.data or []]

    def list_educators(self) -> List[EducatorLeadResponse]:
        return EducatorService(self.supabase).list_leads()

    @staticmethod
    def _breakdown(counts: Dict[str, int]) -> List[StatusCount]:
        """Statuses that occur at least once, alphabetically"""
        return [StatusCount(status=status, count=count) for status, count in sorted(counts.items()) if count]

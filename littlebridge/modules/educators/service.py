import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client

from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.modules.educators.schemas import EducatorLeadCreate, EducatorLeadResponse

logger = logging.getLogger(__name__)

DUPLICATE_LEAD_MESSAGE = "This email is already registered as an educator"


class EducatorService:
    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    def create_lead(self, lead_data: EducatorLeadCreate) -> EducatorLeadResponse:
        payload = lead_data.model_dump(mode="json")

        if self.supabase is None:
            logger.info(f"Demo mode: educator lead for {payload['email']} not persisted")
            return EducatorLeadResponse(
                **payload,
                id=str(uuid.uuid4()),
                created_at=datetime.now(timezone.utc)
            )

        try:
            result = self.supabase.table("educator_leads").insert(payload).execute()
        except Exception as e:
            raise wrap_backend_error(
                e, "Create educator lead", {ErrorKind.DUPLICATE: DUPLICATE_LEAD_MESSAGE}
            )
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to create educator lead")

        logger.info(f"Educator lead created: {result.data[0]['id']}")
        return EducatorLeadResponse(**result.data[0])

    def list_leads(self) -> List[EducatorLeadResponse]:
        """Newest first"""
        if self.supabase is None:
            rows = sorted(demo_data.educator_leads(), key=lambda r: r["created_at"], reverse=True)
            return [EducatorLeadResponse(**row) for row in rows]
        try:
            result = self.supabase.table("educator_leads")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "List educator leads")
        return [EducatorLeadResponse(**row) for row in result.data or []]

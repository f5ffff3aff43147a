import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.modules.waitlist.schemas import WaitlistJoin, WaitlistResponse

logger = logging.getLogger(__name__)


class WaitlistService:
    """Families waiting for a center in a suburb with no listings yet"""

    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    def join(self, entry: WaitlistJoin) -> WaitlistResponse:
        payload = entry.model_dump(mode="json")
        if self.supabase is None:
            return WaitlistResponse(**payload, id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc))

        try:
            result = self.supabase.table("waitlist").insert(payload).execute()
        except Exception as e:
            raise wrap_backend_error(e, "Join waitlist")
        if not result.data:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to join waitlist")
        logger.info(f"Waitlist entry added for suburb {payload.get('suburb')}")
        return WaitlistResponse(**result.data[0])

from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_supabase
from littlebridge.modules.waitlist.schemas import WaitlistJoin, WaitlistResponse
from littlebridge.modules.waitlist.service import WaitlistService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


def get_waitlist_service(supabase: Optional[Client] = Depends(get_supabase)) -> WaitlistService:
    return WaitlistService(supabase)


@router.post("", response_model=WaitlistResponse, status_code=201)
async def join_waitlist(
    entry: WaitlistJoin,
    service: WaitlistService = Depends(get_waitlist_service)
):
    return service.join(entry)

from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_supabase
from littlebridge.modules.educators.schemas import EducatorLeadCreate, EducatorLeadResponse
from littlebridge.modules.educators.service import EducatorService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/educators", tags=["educators"])


def get_educator_service(supabase: Optional[Client] = Depends(get_supabase)) -> EducatorService:
    return EducatorService(supabase)


@router.post("", response_model=EducatorLeadResponse, status_code=201)
async def create_educator_lead(
    lead_data: EducatorLeadCreate,
    service: EducatorService = Depends(get_educator_service)
):
    """Public educator sign-up (recruitment lead)"""
    return service.create_lead(lead_data)

from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_service_supabase
from littlebridge.core.dependencies import require_role
from littlebridge.modules.admin.schemas import AdminStats
from littlebridge.modules.admin.service import AdminService
from littlebridge.modules.centers.schemas import CenterResponse
from littlebridge.modules.educators.schemas import EducatorLeadResponse
from littlebridge.modules.enquiries.schemas import EnquiryResponse
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(supabase: Optional[Client] = Depends(get_service_supabase)) -> AdminService:
    return AdminService(supabase)


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    user_data: Dict = Depends(require_role("admin")),
    service: AdminService = Depends(get_admin_service)
):
    """Platform totals and the enquiry status breakdown"""
    return service.stats()


@router.get("/enquiries", response_model=List[EnquiryResponse])
async def list_enquiries(
    user_data: Dict = Depends(require_role("admin")),
    service: AdminService = Depends(get_admin_service)
):
    return service.list_enquiries()


@router.get("/centers", response_model=List[CenterResponse])
async def list_centers(
    user_data: Dict = Depends(require_role("admin")),
    service: AdminService = Depends(get_admin_service)
):
    return service.list_centers()


@router.get("/educators", response_model=List[EducatorLeadResponse])
async def list_educators(
    user_data: Dict = Depends(require_role("admin")),
    service: AdminService = Depends(get_admin_service)
):
    return service.list_educators()

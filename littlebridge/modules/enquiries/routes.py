from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_supabase
from littlebridge.core.dependencies import get_current_user, get_optional_user
from littlebridge.modules.enquiries.schemas import EnquiryCreate, EnquiryUpdate, EnquiryResponse
from littlebridge.modules.enquiries.service import EnquiryService
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/enquiries", tags=["enquiries"])


def get_enquiry_service(supabase: Optional[Client] = Depends(get_supabase)) -> EnquiryService:
    return EnquiryService(supabase)


@router.post("", response_model=EnquiryResponse, status_code=201)
async def create_enquiry(
    enquiry_data: EnquiryCreate,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: EnquiryService = Depends(get_enquiry_service)
):
    """Create an enquiry; guests need no account"""
    return service.create_enquiry(enquiry_data, user_data)


@router.get("", response_model=List[EnquiryResponse])
async def list_enquiries(
    user_data: Dict = Depends(get_current_user),
    service: EnquiryService = Depends(get_enquiry_service)
):
    return service.list_for_user(user_data)


@router.patch("/{enquiry_id}", response_model=EnquiryResponse)
async def update_enquiry(
    enquiry_id: str,
    update: EnquiryUpdate,
    user_data: Dict = Depends(get_current_user),
    service: EnquiryService = Depends(get_enquiry_service)
):
    """Update status or center notes (owning center or admin)"""
    return service.update_enquiry(enquiry_id, user_data, update)

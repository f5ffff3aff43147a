from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_supabase
from littlebridge.core.dependencies import require_role
from littlebridge.modules.centers.schemas import (
    CenterCreate, CenterUpdate, CenterResponse, CenterPhotoCreate, CenterPhotoResponse
)
from littlebridge.modules.centers.service import CenterService
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/centers", tags=["centers"])


def get_center_service(supabase: Optional[Client] = Depends(get_supabase)) -> CenterService:
    return CenterService(supabase)


@router.get("", response_model=List[CenterResponse])
async def list_centers(
    search: Optional[str] = None,
    language: Optional[str] = None,
    ccs: bool = False,
    service: CenterService = Depends(get_center_service)
):
    """Public directory search"""
    return service.list_centers(search=search, language=language, ccs=ccs)


@router.post("", response_model=CenterResponse, status_code=201)
async def create_center(
    center_data: CenterCreate,
    user_data: Dict = Depends(require_role("center")),
    service: CenterService = Depends(get_center_service)
):
    """Create the listing for the signed-in center account"""
    return service.create_center(user_data["id"], center_data)


@router.get("/mine", response_model=CenterResponse)
async def get_my_center(
    user_data: Dict = Depends(require_role("center")),
    service: CenterService = Depends(get_center_service)
):
    return service.get_for_owner(user_data["id"])


@router.delete("/photos/{photo_id}", status_code=204)
async def delete_photo(
    photo_id: str,
    user_data: Dict = Depends(require_role("center", "admin")),
    service: CenterService = Depends(get_center_service)
):
    service.delete_photo(photo_id, user_data["id"], user_data["role"])
    return None


@router.get("/{slug}", response_model=CenterResponse)
async def get_center(
    slug: str,
    service: CenterService = Depends(get_center_service)
):
    """Public listing by slug"""
    return service.get_by_slug(slug)


@router.patch("/{center_id}", response_model=CenterResponse)
async def update_center(
    center_id: str,
    center_data: CenterUpdate,
    user_data: Dict = Depends(require_role("center", "admin")),
    service: CenterService = Depends(get_center_service)
):
    return service.update_center(center_id, center_data, user_data["id"], user_data["role"])


@router.post("/{center_id}/photos", response_model=CenterPhotoResponse, status_code=201)
async def add_photo(
    center_id: str,
    photo: CenterPhotoCreate,
    user_data: Dict = Depends(require_role("center", "admin")),
    service: CenterService = Depends(get_center_service)
):
    return service.add_photo(center_id, photo, user_data["id"], user_data["role"])

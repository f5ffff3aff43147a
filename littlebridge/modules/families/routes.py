from fastapi import APIRouter, Depends
from littlebridge.database.supabase_client import get_supabase
from littlebridge.core.dependencies import get_current_user
from littlebridge.modules.families.schemas import (
    FamilyProfileUpdate, FamilyProfileResponse, ChildCreate, ChildUpdate, ChildResponse
)
from littlebridge.modules.families.service import FamilyService
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/families", tags=["families"])


def get_family_service(supabase: Optional[Client] = Depends(get_supabase)) -> FamilyService:
    return FamilyService(supabase)


@router.get("/profile", response_model=FamilyProfileResponse)
async def get_profile(
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    return service.get_profile(user_data["id"])


@router.put("/profile", response_model=FamilyProfileResponse)
async def update_profile(
    profile: FamilyProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    """Update (or create) the caller's family profile"""
    return service.upsert_profile(user_data["id"], profile)


@router.get("/children", response_model=List[ChildResponse])
async def list_children(
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    return service.list_children(user_data["id"])


@router.post("/children", response_model=ChildResponse, status_code=201)
async def add_child(
    child: ChildCreate,
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    return service.add_child(user_data["id"], child)


@router.put("/children/{child_id}", response_model=ChildResponse)
async def update_child(
    child_id: str,
    child: ChildUpdate,
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    return service.update_child(user_data["id"], child_id, child)


@router.delete("/children/{child_id}", status_code=204)
async def delete_child(
    child_id: str,
    user_data: Dict = Depends(get_current_user),
    service: FamilyService = Depends(get_family_service)
):
    service.delete_child(user_data["id"], child_id)
    return None

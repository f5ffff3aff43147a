from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime


class StaffLanguage(BaseModel):
    language: str
    count: int = 1


class AgeGroup(BaseModel):
    group_name: str
    capacity: int = 0
    vacancies: int = 0


class CenterPhotoCreate(BaseModel):
    photo_url: str = Field(min_length=1)
    display_order: int = 0


class CenterPhotoResponse(BaseModel):
    id: str
    center_id: Optional[str] = None
    photo_url: str
    display_order: int = 0

    class Config:
        from_attributes = True


class CenterCreate(BaseModel):
    center_name: str = Field(min_length=1)
    slug: Optional[str] = None  # generated from center_name when omitted
    suburb: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    description_en: Optional[str] = None
    description_zh: Optional[str] = None
    fee_min: Optional[float] = None
    fee_max: Optional[float] = None
    nqs_rating: Optional[str] = None
    programs: List[str] = []
    staff_languages: List[StaffLanguage] = []
    age_groups: List[AgeGroup] = []
    is_ccs_approved: bool = False
    acecqa_url: Optional[str] = None
    operating_hours: Optional[Dict[str, Any]] = None


class CenterUpdate(BaseModel):
    center_name: Optional[str] = None
    slug: Optional[str] = None
    suburb: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    description_en: Optional[str] = None
    description_zh: Optional[str] = None
    fee_min: Optional[float] = None
    fee_max: Optional[float] = None
    nqs_rating: Optional[str] = None
    programs: Optional[List[str]] = None
    staff_languages: Optional[List[StaffLanguage]] = None
    age_groups: Optional[List[AgeGroup]] = None
    is_ccs_approved: Optional[bool] = None
    acecqa_url: Optional[str] = None
    operating_hours: Optional[Dict[str, Any]] = None


class CenterSummary(BaseModel):
    center_name: Optional[str] = None
    slug: Optional[str] = None
    suburb: Optional[str] = None


class CenterResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    center_name: str
    slug: str
    suburb: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    description_en: Optional[str] = None
    description_zh: Optional[str] = None
    fee_min: Optional[float] = None
    fee_max: Optional[float] = None
    nqs_rating: Optional[str] = None
    programs: List[str] = []
    staff_languages: List[StaffLanguage] = []
    age_groups: List[AgeGroup] = []
    is_ccs_approved: bool = False
    is_founding_partner: bool = False
    subscription_status: Optional[str] = "trial"
    subscription_trial_end: Optional[datetime] = None
    founding_partner_expires_at: Optional[datetime] = None
    acecqa_url: Optional[str] = None
    operating_hours: Optional[Dict[str, Any]] = None
    center_photos: List[CenterPhotoResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("programs", "staff_languages", "age_groups", "center_photos", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Literal, Any
from datetime import datetime

from littlebridge.modules.centers.schemas import CenterSummary

EnquiryStatus = Literal["new", "contacted", "tour_booked", "enrolled", "declined"]

MAX_MESSAGE_LENGTH = 2000


class EnquiryCreate(BaseModel):
    center_id: str = Field(min_length=1)
    guest_name: Optional[str] = None
    guest_email: Optional[EmailStr] = None
    guest_phone: Optional[str] = None
    guest_wechat_id: Optional[str] = None
    guest_child_age: Optional[str] = None
    guest_child_days_needed: Optional[str] = None
    guest_suburb: Optional[str] = None
    guest_message: Optional[str] = Field(default=None, max_length=MAX_MESSAGE_LENGTH)
    guest_message_translated: Optional[str] = None


class EnquiryUpdate(BaseModel):
    status: Optional[EnquiryStatus] = None
    center_notes: Optional[str] = None


class EnquiryResponse(BaseModel):
    id: str
    center_id: str
    family_profile_id: Optional[str] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    guest_wechat_id: Optional[str] = None
    guest_child_age: Optional[str] = None
    guest_child_days_needed: Optional[str] = None
    guest_suburb: Optional[str] = None
    guest_message: Optional[str] = None
    guest_message_translated: Optional[str] = None
    is_guest: bool = False
    status: EnquiryStatus = "new"
    match_factors: List[Any] = []
    center_notes: Optional[str] = None
    center_profiles: Optional[CenterSummary] = None  # joined center summary
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("match_factors", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True

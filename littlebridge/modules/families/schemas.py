from pydantic import BaseModel, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime

PreferredContact = Literal["email", "phone", "wechat", "sms"]


class FamilyProfileUpdate(BaseModel):
    family_name: Optional[str] = None
    suburb: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    mobile_phone: Optional[str] = None
    wechat_id: Optional[str] = None
    preferred_contact: Optional[PreferredContact] = None
    priorities: Optional[List[str]] = None


class FamilyProfileResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    family_name: Optional[str] = None
    suburb: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    mobile_phone: Optional[str] = None
    wechat_id: Optional[str] = None
    preferred_contact: Optional[str] = "email"
    priorities: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("priorities", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True


class ChildCreate(BaseModel):
    child_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    days_needed: List[str] = []
    notes: Optional[str] = None


class ChildUpdate(BaseModel):
    child_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    days_needed: Optional[List[str]] = None
    notes: Optional[str] = None


class ChildResponse(BaseModel):
    id: str
    family_id: str
    child_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    days_needed: List[str] = []
    notes: Optional[str] = None

    @field_validator("days_needed", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True

from pydantic import BaseModel, EmailStr, Field
from typing import Annotated, Optional, Literal, Union
from datetime import datetime

from littlebridge.modules.centers.schemas import CenterResponse
from littlebridge.modules.families.schemas import FamilyProfileResponse

Role = Literal["family", "educator", "center", "admin"]


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    role: Role
    preferred_language: str = "en"


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class EmailRequest(BaseModel):
    email: EmailStr


class ProfileResponse(BaseModel):
    id: str
    email: str
    role: Role
    preferred_language: Optional[str] = "en"
    is_active: bool = True
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FamilyAccount(ProfileResponse):
    role: Literal["family"]
    family_profile: Optional[FamilyProfileResponse] = None


class CenterAccount(ProfileResponse):
    role: Literal["center"]
    center_profile: Optional[CenterResponse] = None


class EducatorAccount(ProfileResponse):
    role: Literal["educator"]


class AdminAccount(ProfileResponse):
    role: Literal["admin"]


# A profile's meaning depends on its role; each variant carries only its own extension
Account = Annotated[
    Union[FamilyAccount, CenterAccount, EducatorAccount, AdminAccount],
    Field(discriminator="role"),
]


class AuthResponse(BaseModel):
    user: Account


class MessageResponse(BaseModel):
    message: str

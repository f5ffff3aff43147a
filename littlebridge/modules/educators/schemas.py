from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime


class EducatorLeadCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    suburb: Optional[str] = None
    languages: List[str] = []
    qualification: Optional[str] = None
    wwcc_number: Optional[str] = None


class EducatorLeadResponse(BaseModel):
    id: str
    full_name: str
    email: str
    suburb: Optional[str] = None
    languages: List[str] = []
    qualification: Optional[str] = None
    wwcc_number: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("languages", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True

from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class WaitlistJoin(BaseModel):
    email: EmailStr
    suburb: Optional[str] = None


class WaitlistResponse(BaseModel):
    id: str
    email: str
    suburb: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

from pydantic import BaseModel
from typing import List


class StatusCount(BaseModel):
    status: str
    count: int


class AdminStats(BaseModel):
    total_centers: int
    total_enquiries: int
    total_families: int
    total_educators: int
    total_waitlist: int
    enquiry_status_breakdown: List[StatusCount] = []

"""
Pydantic schemas for doctor endpoints
"""
from typing import Optional, List
from pydantic import BaseModel


class DoctorListItem(BaseModel):
    """Doctor directory record: user identity joined with profile data"""
    user_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    specialization: Optional[str] = None
    license_number: Optional[str] = None
    experience_years: Optional[int] = None
    consultation_fee: Optional[float] = None
    available_days: Optional[str] = None
    available_time_start: Optional[str] = None
    available_time_end: Optional[str] = None


class DoctorListResponse(BaseModel):
    """Response schema for doctor list"""
    doctors: List[DoctorListItem]
    total: int

"""
Pydantic schemas for doctor/staff registration review
"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from clinic_admin.models.pending_registration import RegistrationRole


class RegistrationSubmitRequest(BaseModel):
    """Request schema for a doctor/staff self-registration"""
    username: str = Field(..., min_length=3, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: RegistrationRole
    full_name: str = Field(..., min_length=2, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)

    # Doctor specific fields
    specialization: Optional[str] = None
    license_number: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0, le=70)
    consultation_fee: Optional[float] = Field(None, ge=0)
    available_days: Optional[str] = None
    available_time_start: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    available_time_end: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")

    # Staff specific fields
    department: Optional[str] = None
    employee_id: Optional[str] = None


class ApproveRegistrationRequest(BaseModel):
    """Request schema for approving a registration"""
    notes: Optional[str] = None


class RejectRegistrationRequest(BaseModel):
    """Request schema for rejecting a registration"""
    notes: str


class PendingRegistrationResponse(BaseModel):
    """Response schema for a pending registration (never includes the hash)"""
    id: int
    username: str
    email: str
    role: str
    full_name: str
    phone: Optional[str]
    status: str
    admin_notes: Optional[str]
    approved_by: Optional[int]
    approved_by_name: Optional[str] = None
    specialization: Optional[str]
    license_number: Optional[str]
    experience_years: Optional[int]
    consultation_fee: Optional[float]
    available_days: Optional[str]
    available_time_start: Optional[str]
    available_time_end: Optional[str]
    department: Optional[str]
    employee_id: Optional[str]
    created_at: str
    updated_at: str

    model_config = ConfigDict(from_attributes=True)


class PendingRegistrationListResponse(BaseModel):
    registrations: List[PendingRegistrationResponse]
    total: int


class SubmitRegistrationResponse(BaseModel):
    message: str
    registration_id: int
    status: str


class RegistrationDecisionResponse(BaseModel):
    message: str
    registration_id: int
    status: str
    user_id: Optional[int] = None

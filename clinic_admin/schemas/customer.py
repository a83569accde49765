"""
Pydantic schemas for customer (patient) endpoints
"""
from typing import Optional, List, Dict
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from clinic_admin.models.customer import Gender


class CustomerProfileFields(BaseModel):
    """Editable medical and demographic profile fields"""
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    blood_group: Optional[str] = Field(None, pattern=r"^(A|B|AB|O)[+-]$")
    address: Optional[str] = None
    occupation: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    allergies: Optional[str] = None
    medical_conditions: Optional[str] = None
    current_medications: Optional[str] = None
    insurance: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    height: Optional[int] = Field(None, gt=0, lt=300)  # in cm
    weight: Optional[int] = Field(None, gt=0, lt=500)  # in kg


class CustomerSignupRequest(CustomerProfileFields):
    """Request schema for direct customer signup"""
    username: str = Field(..., min_length=3, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=2, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)


class CustomerUpdate(CustomerProfileFields):
    """Schema for updating a customer profile"""


class CustomerProfileResponse(BaseModel):
    """Response schema for a full customer profile"""
    id: int
    user_id: int
    date_of_birth: Optional[str]
    gender: Optional[str]
    blood_group: Optional[str]
    address: Optional[str]
    occupation: Optional[str]
    emergency_contact: Optional[str]
    emergency_contact_name: Optional[str]
    emergency_contact_relation: Optional[str]
    allergies: Optional[str]
    medical_conditions: Optional[str]
    current_medications: Optional[str]
    insurance: Optional[str]
    insurance_policy_number: Optional[str]
    height: Optional[int]
    weight: Optional[int]
    created_at: str
    updated_at: str

    model_config = ConfigDict(from_attributes=True)


class CustomerListItem(BaseModel):
    """Patient directory record: user identity joined with profile data"""
    user_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    address: Optional[str] = None
    medical_conditions: Optional[str] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    created_at: datetime


class CustomerListResponse(BaseModel):
    """Response schema for the patient directory"""
    customers: List[CustomerListItem]
    total: int


class DirectoryStatsResponse(BaseModel):
    """Aggregates over the full (unfiltered) patient directory"""
    total: int
    by_gender: Dict[str, int]
    new_this_month: int
    blood_groups: List[str]

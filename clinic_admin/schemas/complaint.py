"""
Pydantic schemas for feedback and complaints
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from clinic_admin.models.complaint import (
    ComplaintType,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)


class ComplaintCreate(BaseModel):
    """Request schema for a new feedback/complaint"""
    type: ComplaintType
    subject: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    category: Optional[ComplaintCategory] = None
    priority: ComplaintPriority = ComplaintPriority.NORMAL
    rating: Optional[int] = Field(None, ge=1, le=5)


class ComplaintRespondRequest(BaseModel):
    """Request schema for an admin response"""
    status: ComplaintStatus
    admin_response: Optional[str] = None


class ComplaintFeedbackCreate(BaseModel):
    """Request schema for rating the handling of a closed complaint"""
    rating: int = Field(..., ge=1, le=5)
    feedback_text: Optional[str] = None


class ComplaintResponse(BaseModel):
    id: int
    patient_user_id: int
    type: ComplaintType
    subject: str
    description: str
    category: Optional[ComplaintCategory]
    priority: ComplaintPriority
    status: ComplaintStatus
    rating: Optional[int]
    admin_response: Optional[str]
    admin_user_id: Optional[int]
    resolved_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ComplaintListResponse(BaseModel):
    complaints: List[ComplaintResponse]
    total: int


class ComplaintFeedbackResponse(BaseModel):
    id: int
    complaint_id: int
    patient_user_id: int
    rating: int
    feedback_text: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

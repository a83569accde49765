"""
Pydantic schemas for user accounts
"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Response schema for user data"""
    id: int
    username: str
    email: str
    phone: Optional[str]
    full_name: str
    role: str
    status: str
    created_at: str
    updated_at: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: List[UserResponse]
    total: int


class ChangePasswordRequest(BaseModel):
    """Request schema for changing password"""
    old_password: str = Field(..., min_length=8)
    new_password: str = Field(..., min_length=8)


class SignupResponse(BaseModel):
    """Response schema for successful customer signup"""
    message: str
    user_id: int
    email: str


class MessageResponse(BaseModel):
    """Generic message response"""
    message: str
    status: str = "success"

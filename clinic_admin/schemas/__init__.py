"""
Pydantic schemas for API validation and serialization
"""
from clinic_admin.schemas.user import (
    UserResponse,
    UserListResponse,
    ChangePasswordRequest,
    SignupResponse,
    MessageResponse,
)

from clinic_admin.schemas.customer import (
    CustomerSignupRequest,
    CustomerUpdate,
    CustomerProfileResponse,
    CustomerListItem,
    CustomerListResponse,
    DirectoryStatsResponse,
)

from clinic_admin.schemas.doctor import (
    DoctorListItem,
    DoctorListResponse,
)

from clinic_admin.schemas.registration import (
    RegistrationSubmitRequest,
    ApproveRegistrationRequest,
    RejectRegistrationRequest,
    PendingRegistrationResponse,
    PendingRegistrationListResponse,
    SubmitRegistrationResponse,
    RegistrationDecisionResponse,
)

from clinic_admin.schemas.complaint import (
    ComplaintCreate,
    ComplaintRespondRequest,
    ComplaintFeedbackCreate,
    ComplaintResponse,
    ComplaintListResponse,
    ComplaintFeedbackResponse,
)

from clinic_admin.schemas.dashboard import (
    DashboardStats,
    DashboardStatsResponse,
)

__all__ = [
    # User
    "UserResponse",
    "UserListResponse",
    "ChangePasswordRequest",
    "SignupResponse",
    "MessageResponse",
    # Customer
    "CustomerSignupRequest",
    "CustomerUpdate",
    "CustomerProfileResponse",
    "CustomerListItem",
    "CustomerListResponse",
    "DirectoryStatsResponse",
    # Doctor
    "DoctorListItem",
    "DoctorListResponse",
    # Registration
    "RegistrationSubmitRequest",
    "ApproveRegistrationRequest",
    "RejectRegistrationRequest",
    "PendingRegistrationResponse",
    "PendingRegistrationListResponse",
    "SubmitRegistrationResponse",
    "RegistrationDecisionResponse",
    # Complaint
    "ComplaintCreate",
    "ComplaintRespondRequest",
    "ComplaintFeedbackCreate",
    "ComplaintResponse",
    "ComplaintListResponse",
    "ComplaintFeedbackResponse",
    # Dashboard
    "DashboardStats",
    "DashboardStatsResponse",
]

"""
Database models
"""
from clinic_admin.models.user import User, UserRole, UserStatus
from clinic_admin.models.customer import Customer, Gender
from clinic_admin.models.doctor import Doctor
from clinic_admin.models.pending_registration import (
    PendingRegistration,
    RegistrationRole,
    RegistrationStatus,
)
from clinic_admin.models.complaint import (
    FeedbackComplaint,
    ComplaintFeedback,
    ComplaintType,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)
from clinic_admin.models.appointment import (
    Appointment,
    AppointmentStatus,
    AmbulanceRequest,
    AmbulanceStatus,
    AmbulancePriority,
)

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Customer",
    "Gender",
    "Doctor",
    "PendingRegistration",
    "RegistrationRole",
    "RegistrationStatus",
    "FeedbackComplaint",
    "ComplaintFeedback",
    "ComplaintType",
    "ComplaintCategory",
    "ComplaintPriority",
    "ComplaintStatus",
    "Appointment",
    "AppointmentStatus",
    "AmbulanceRequest",
    "AmbulanceStatus",
    "AmbulancePriority",
]

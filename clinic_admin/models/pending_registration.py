"""
Pending registration model for doctor/staff accounts awaiting approval
"""
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
import enum

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow
from clinic_admin.utils.types import StrEnum


class RegistrationRole(str, enum.Enum):
    """Roles that go through admin approval"""
    DOCTOR = "doctor"
    STAFF = "staff"


class RegistrationStatus(str, enum.Enum):
    """Registration status enumeration"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PendingRegistration(Base):
    """
    A staged user account

    The password is hashed at submission; approval copies the hash into
    the new users row as-is.
    """
    __tablename__ = "pending_registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Candidate identity
    username = Column(String(150), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(StrEnum(RegistrationRole, "registration_role"), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)

    # Review
    status = Column(
        StrEnum(RegistrationStatus, "registration_status"),
        nullable=False,
        default=RegistrationStatus.PENDING,
        index=True,
    )
    admin_notes = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Doctor specific fields
    specialization = Column(String(255), nullable=True)
    license_number = Column(String(100), nullable=True)
    experience_years = Column(Integer, nullable=True)
    consultation_fee = Column(Float, nullable=True)
    available_days = Column(String(255), nullable=True)
    available_time_start = Column(String(5), nullable=True)
    available_time_end = Column(String(5), nullable=True)

    # Staff specific fields
    department = Column(String(255), nullable=True)
    employee_id = Column(String(100), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<PendingRegistration {self.email} ({self.role}, {self.status})>"

    @property
    def is_pending(self) -> bool:
        return self.status == RegistrationStatus.PENDING

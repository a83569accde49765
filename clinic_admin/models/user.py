"""
User model for authentication and authorization
"""
from sqlalchemy import Column, Integer, String, DateTime
import enum

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow
from clinic_admin.utils.types import StrEnum


class UserRole(str, enum.Enum):
    """User role enumeration"""
    ADMIN = "admin"
    DOCTOR = "doctor"
    CUSTOMER = "customer"
    STAFF = "staff"


class UserStatus(str, enum.Enum):
    """Account status enumeration"""
    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(Base):
    """
    User model for authentication

    Stores core identity data for all account types. Role-specific data
    lives in the customers and doctors tables.
    """
    __tablename__ = "users"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identity fields
    username = Column(String(150), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(32), unique=True, index=True, nullable=True)
    password_hash = Column(String(255), nullable=False)

    # User details
    full_name = Column(String(255), nullable=False)
    role = Column(StrEnum(UserRole, "user_role"), nullable=False)
    status = Column(StrEnum(UserStatus, "user_status"), nullable=False, default=UserStatus.ACTIVE)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def to_dict(self):
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "full_name": self.full_name,
            "role": self.role.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

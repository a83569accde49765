"""
Appointment and ambulance request models
"""
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
import enum

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow
from clinic_admin.utils.types import StrEnum


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class AmbulanceStatus(str, enum.Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    ON_THE_WAY = "on_the_way"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AmbulancePriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    doctor_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(5), nullable=False)
    status = Column(StrEnum(AppointmentStatus, "appointment_status"), nullable=False, default=AppointmentStatus.PENDING)
    reason = Column(Text, nullable=True)
    symptoms = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class AmbulanceRequest(Base):
    __tablename__ = "ambulance_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    pickup_address = Column(Text, nullable=False)
    destination_address = Column(Text, nullable=False)
    emergency_type = Column(String(100), nullable=False)
    patient_condition = Column(Text, nullable=True)
    contact_number = Column(String(32), nullable=False)
    status = Column(StrEnum(AmbulanceStatus, "ambulance_status"), nullable=False, default=AmbulanceStatus.PENDING)
    priority = Column(StrEnum(AmbulancePriority, "ambulance_priority"), nullable=False, default=AmbulancePriority.NORMAL)
    assigned_staff_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

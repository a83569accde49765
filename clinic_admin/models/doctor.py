"""
Doctor model for credentialing and scheduling data
"""
from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow


class Doctor(Base):
    """
    Doctor model for storing doctor-specific information

    Created when a doctor's pending registration is approved
    """
    __tablename__ = "doctors"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign key to User
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Professional details
    specialization = Column(String(255), nullable=True, index=True)
    license_number = Column(String(100), unique=True, nullable=True)
    experience_years = Column(Integer, nullable=True)

    # Consultation details
    consultation_fee = Column(Float, nullable=True)
    available_days = Column(String(255), nullable=True)  # "Mon,Tue,Thu"
    available_time_start = Column(String(5), nullable=True)  # HH:MM
    available_time_end = Column(String(5), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Doctor {self.user_id} - {self.specialization}>"

    def to_dict(self):
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "specialization": self.specialization,
            "license_number": self.license_number,
            "experience_years": self.experience_years,
            "consultation_fee": self.consultation_fee,
            "available_days": self.available_days,
            "available_time_start": self.available_time_start,
            "available_time_end": self.available_time_end,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

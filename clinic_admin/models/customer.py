"""
Customer (patient) model for medical and demographic data
"""
from sqlalchemy import Column, Integer, String, Date, Text, DateTime, ForeignKey
import enum

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow
from clinic_admin.utils.types import StrEnum


class Gender(str, enum.Enum):
    """Gender enumeration"""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Customer(Base):
    """
    Customer model for storing patient-specific information

    One-to-one extension of a User with role=customer
    """
    __tablename__ = "customers"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign key to User
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Demographics
    date_of_birth = Column(Date, nullable=True)
    gender = Column(StrEnum(Gender, "customer_gender"), nullable=True)
    blood_group = Column(String(5), nullable=True)  # A+, B-, O+, etc.
    address = Column(Text, nullable=True)
    occupation = Column(String(255), nullable=True)

    # Emergency contact
    emergency_contact = Column(String(32), nullable=True)
    emergency_contact_name = Column(String(255), nullable=True)
    emergency_contact_relation = Column(String(100), nullable=True)

    # Medical information
    allergies = Column(Text, nullable=True)
    medical_conditions = Column(Text, nullable=True)
    current_medications = Column(Text, nullable=True)

    # Insurance
    insurance = Column(String(255), nullable=True)
    insurance_policy_number = Column(String(100), nullable=True)

    # Physical measurements
    height = Column(Integer, nullable=True)  # in cm
    weight = Column(Integer, nullable=True)  # in kg

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Customer {self.user_id}>"

    def to_dict(self):
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "gender": self.gender.value if self.gender else None,
            "blood_group": self.blood_group,
            "address": self.address,
            "occupation": self.occupation,
            "emergency_contact": self.emergency_contact,
            "emergency_contact_name": self.emergency_contact_name,
            "emergency_contact_relation": self.emergency_contact_relation,
            "allergies": self.allergies,
            "medical_conditions": self.medical_conditions,
            "current_medications": self.current_medications,
            "insurance": self.insurance,
            "insurance_policy_number": self.insurance_policy_number,
            "height": self.height,
            "weight": self.weight,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

"""
Patient feedback and complaint models
"""
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
import enum

from clinic_admin.database import Base
from clinic_admin.utils.clock import utcnow
from clinic_admin.utils.types import StrEnum


class ComplaintType(str, enum.Enum):
    FEEDBACK = "feedback"
    COMPLAINT = "complaint"


class ComplaintCategory(str, enum.Enum):
    SERVICE = "service"
    FACILITY = "facility"
    STAFF = "staff"
    DOCTOR = "doctor"
    BILLING = "billing"
    OTHER = "other"


class ComplaintPriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ComplaintStatus(str, enum.Enum):
    PENDING = "pending"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
    CLOSED = "closed"


CLOSED_COMPLAINT_STATUSES = (ComplaintStatus.RESOLVED, ComplaintStatus.CLOSED)


class FeedbackComplaint(Base):
    """Feedback or complaint raised by a patient"""
    __tablename__ = "feedback_complaints"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_complaints_rating"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(StrEnum(ComplaintType, "complaint_type"), nullable=False)
    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(StrEnum(ComplaintCategory, "complaint_category"), nullable=True)
    priority = Column(StrEnum(ComplaintPriority, "complaint_priority"), nullable=False, default=ComplaintPriority.NORMAL)
    status = Column(StrEnum(ComplaintStatus, "complaint_status"), nullable=False, default=ComplaintStatus.PENDING)
    rating = Column(Integer, nullable=True)

    # Admin handling
    admin_response = Column(Text, nullable=True)
    admin_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    resolved_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<FeedbackComplaint {self.id} {self.type} ({self.status})>"


class ComplaintFeedback(Base):
    """A patient's rating of how their closed complaint was handled"""
    __tablename__ = "complaint_feedback"
    __table_args__ = (
        UniqueConstraint("complaint_id", "patient_user_id", name="uq_complaint_feedback_patient"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_complaint_feedback_rating"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("feedback_complaints.id", ondelete="CASCADE"), nullable=False)
    patient_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    feedback_text = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

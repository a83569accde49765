"""
Complaint service for patient feedback, complaints and follow-up ratings
"""
import logging
from typing import List

from clinic_admin.core.exceptions import (
    AlreadyDecidedError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from clinic_admin.models.complaint import (
    CLOSED_COMPLAINT_STATUSES,
    ComplaintFeedback,
    FeedbackComplaint,
)
from clinic_admin.models.user import User, UserRole
from clinic_admin.schemas.complaint import (
    ComplaintCreate,
    ComplaintFeedbackCreate,
    ComplaintRespondRequest,
)
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)

COMPLAINT_HANDLER_ROLES = (UserRole.ADMIN, UserRole.STAFF)


class ComplaintService:
    """Service for feedback and complaint handling"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def submit(self, patient: User, data: ComplaintCreate) -> FeedbackComplaint:
        async with self.store.atomic():
            complaint = await self.store.add_complaint(patient.id, **data.model_dump())
        logger.info(f"📨 {data.type.value.capitalize()} {complaint.id} submitted by user {patient.id}")
        return complaint

    async def list_for(self, user: User) -> List[FeedbackComplaint]:
        """Customers see their own submissions; handlers see everything"""
        if user.role in COMPLAINT_HANDLER_ROLES:
            return await self.store.list_complaints()
        return await self.store.list_complaints(patient_user_id=user.id)

    async def respond(
        self, complaint_id: int, handler: User, data: ComplaintRespondRequest
    ) -> FeedbackComplaint:
        """
        Record a handler's response and status change

        Raises:
            NotFoundError: If complaint not found
        """
        async with self.store.atomic():
            complaint = await self.store.get_complaint(complaint_id)
            if not complaint:
                raise NotFoundError("Complaint not found")
            await self.store.respond_to_complaint(
                complaint, data.status, handler.id, data.admin_response
            )
        logger.info(f"Complaint {complaint_id} moved to {data.status.value} by user {handler.id}")
        return complaint

    async def add_feedback(
        self, complaint_id: int, patient: User, data: ComplaintFeedbackCreate
    ) -> ComplaintFeedback:
        """
        Rate how a resolved/closed complaint was handled, once per patient

        Raises:
            NotFoundError: If complaint not found
            AuthorizationError: If the complaint belongs to someone else
            ValidationError: If the complaint is still open
            AlreadyDecidedError: If feedback was already given
        """
        async with self.store.atomic():
            complaint = await self.store.get_complaint(complaint_id)
            if not complaint:
                raise NotFoundError("Complaint not found")
            if complaint.patient_user_id != patient.id:
                raise AuthorizationError("You can only rate your own complaints")
            if complaint.status not in CLOSED_COMPLAINT_STATUSES:
                raise ValidationError("Feedback can only be given once the complaint is resolved")
            if await self.store.get_complaint_feedback(complaint_id, patient.id):
                raise AlreadyDecidedError("Feedback already submitted for this complaint")

            feedback = await self.store.add_complaint_feedback(
                complaint_id, patient.id, data.rating, data.feedback_text
            )
        return feedback

"""
Registration workflow for doctor and staff accounts

submit -> pending -> approved | rejected
"""
import logging
from typing import List, Optional, Tuple

from clinic_admin.core.exceptions import (
    AlreadyDecidedError,
    AuthorizationError,
    DuplicateIdentityError,
    NotFoundError,
    ValidationError,
)
from clinic_admin.core.security import hash_password, validate_password_strength
from clinic_admin.models.pending_registration import (
    PendingRegistration,
    RegistrationRole,
    RegistrationStatus,
)
from clinic_admin.models.user import User, UserRole
from clinic_admin.schemas.registration import RegistrationSubmitRequest
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)

DOCTOR_PROFILE_FIELDS = (
    "specialization",
    "license_number",
    "experience_years",
    "consultation_fee",
    "available_days",
    "available_time_start",
    "available_time_end",
)


class RegistrationService:
    """Service for the doctor/staff approval workflow"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def submit(self, data: RegistrationSubmitRequest) -> PendingRegistration:
        """
        Stage a doctor/staff account for admin review

        Args:
            data: Candidate credentials and role-specific details

        Returns:
            The stored pending registration

        Raises:
            DuplicateIdentityError: If email/username/phone is taken by a user
                or the email/username by another pending registration
            ValidationError: If the password is weak
        """
        logger.info(f"📝 [REGISTRATION] Submission received: {data.email} ({data.role.value})")

        is_valid, error_msg = validate_password_strength(data.password)
        if not is_valid:
            logger.error(f"❌ [VALIDATION] Password validation failed: {error_msg}")
            raise ValidationError(error_msg)

        async with self.store.atomic():
            conflict = await self.store.find_identity_conflict(data.username, data.email, data.phone)
            if conflict:
                logger.error(f"❌ [DUPLICATE CHECK] {conflict} already registered: {data.email}")
                raise DuplicateIdentityError(f"{conflict.capitalize()} already registered")

            open_registration = await self.store.find_open_registration(data.email, data.username)
            if open_registration:
                field = "Email" if open_registration.email == data.email else "Username"
                logger.error(f"❌ [DUPLICATE CHECK] {field} already awaiting approval: {data.email}")
                raise DuplicateIdentityError(f"{field} already registered")

            registration = await self.store.add_pending_registration(
                **data.model_dump(exclude={"password"}),
                password_hash=hash_password(data.password),
            )

        logger.info(f"✅ [REGISTRATION] Pending registration created: {data.email} - ID: {registration.id}")
        return registration

    async def _require_admin(self, reviewer_user_id: int) -> User:
        reviewer = await self.store.get_user(reviewer_user_id)
        if not reviewer:
            raise NotFoundError("Reviewer not found")
        if not reviewer.is_admin:
            raise AuthorizationError("Only admins can review registrations")
        return reviewer

    async def _raise_undecidable(self, pending_id: int):
        """Explain why a conditional status update touched no row"""
        registration = await self.store.get_pending_registration(pending_id)
        if not registration:
            raise NotFoundError("Pending registration not found")
        raise AlreadyDecidedError(f"Registration already {registration.status.value}")

    async def approve(
        self, pending_id: int, reviewer_user_id: int, notes: Optional[str] = None
    ) -> int:
        """
        Approve a registration and create the account

        The status change, the user insert and (for doctors) the doctor
        profile insert commit together or not at all.

        Returns:
            ID of the newly created user

        Raises:
            NotFoundError: Unknown registration or reviewer
            AlreadyDecidedError: Registration is no longer pending
            DuplicateIdentityError: Identity got taken since submission
        """
        await self._require_admin(reviewer_user_id)

        async with self.store.atomic():
            claimed = await self.store.decide_pending_registration(
                pending_id, RegistrationStatus.APPROVED, reviewer_user_id, notes
            )
            if not claimed:
                await self._raise_undecidable(pending_id)

            registration = await self.store.get_pending_registration(pending_id)

            conflict = await self.store.find_identity_conflict(
                registration.username, registration.email, registration.phone
            )
            if conflict:
                raise DuplicateIdentityError(f"{conflict.capitalize()} already registered")

            # The staged hash is stored as-is
            user = await self.store.add_user(
                username=registration.username,
                email=registration.email,
                password_hash=registration.password_hash,
                role=UserRole(registration.role.value),
                full_name=registration.full_name,
                phone=registration.phone,
            )

            if registration.role == RegistrationRole.DOCTOR:
                await self.store.add_doctor(
                    user.id,
                    **{field: getattr(registration, field) for field in DOCTOR_PROFILE_FIELDS},
                )

        logger.info(f"✅ [REGISTRATION] Approved: {registration.email} -> User ID: {user.id}")
        return user.id

    async def reject(self, pending_id: int, reviewer_user_id: int, notes: str) -> PendingRegistration:
        """
        Reject a registration; no account is created

        Raises:
            ValidationError: If notes are blank
            NotFoundError: Unknown registration or reviewer
            AlreadyDecidedError: Registration is no longer pending
        """
        if not notes or not notes.strip():
            raise ValidationError("A reason is required to reject a registration")

        await self._require_admin(reviewer_user_id)

        async with self.store.atomic():
            claimed = await self.store.decide_pending_registration(
                pending_id, RegistrationStatus.REJECTED, reviewer_user_id, notes.strip()
            )
            if not claimed:
                await self._raise_undecidable(pending_id)

            registration = await self.store.get_pending_registration(pending_id)

        logger.info(f"🚫 [REGISTRATION] Rejected registration ID: {pending_id}")
        return registration

    async def list_pending(
        self, status: Optional[RegistrationStatus] = None
    ) -> List[Tuple[PendingRegistration, Optional[str]]]:
        return await self.store.list_pending_registrations(status)

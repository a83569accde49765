"""
Record store: typed persistence operations over the clinic database
"""
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from clinic_admin.core.exceptions import DuplicateIdentityError, PersistenceError
from clinic_admin.models.appointment import Appointment
from clinic_admin.models.complaint import ComplaintFeedback, ComplaintStatus, FeedbackComplaint
from clinic_admin.models.customer import Customer
from clinic_admin.models.doctor import Doctor
from clinic_admin.models.pending_registration import PendingRegistration, RegistrationStatus
from clinic_admin.models.user import User, UserRole, UserStatus
from clinic_admin.schemas.customer import CustomerListItem
from clinic_admin.schemas.doctor import DoctorListItem
from clinic_admin.utils.clock import utcnow

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Persistence facade owning one database session

    Mutating methods only add/flush; callers group them in `atomic()` so
    that a multi-statement operation commits or rolls back as a unit.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator["RecordStore"]:
        """
        Run a block as one transaction

        Raises:
            DuplicateIdentityError: If a unique constraint is violated
            PersistenceError: On any other database failure
        """
        try:
            yield self
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if "UNIQUE" in str(e.orig).upper():
                logger.warning(f"⚠️ [DATABASE] Unique constraint violated: {e.orig}")
                raise DuplicateIdentityError("Record conflicts with an existing account") from e
            logger.error(f"❌ [DATABASE] Integrity error: {e.orig}")
            raise PersistenceError("Database integrity check failed") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"❌ [DATABASE] Transaction failed: {e}")
            raise PersistenceError() from e
        except BaseException:
            await self.db.rollback()
            raise

    async def _flush(self):
        try:
            await self.db.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise PersistenceError() from e

    async def _scalar(self, statement):
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"❌ [DATABASE] Query failed: {e}")
            raise PersistenceError() from e
        return result.scalar_one_or_none()

    async def _rows(self, statement):
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"❌ [DATABASE] Query failed: {e}")
            raise PersistenceError() from e
        return result.all()

    # ------------------------------------------------------------------ users

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._scalar(select(User).where(User.id == user_id))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._scalar(select(User).where(User.email == email))

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._scalar(select(User).where(User.username == username))

    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        return await self._scalar(select(User).where(User.phone == phone))

    async def find_identity_conflict(
        self, username: str, email: str, phone: Optional[str] = None
    ) -> Optional[str]:
        """
        Name the first identity field already taken by an existing user

        Returns:
            "email", "username", "phone" or None
        """
        if await self.get_user_by_email(email):
            return "email"
        if await self.get_user_by_username(username):
            return "username"
        if phone and await self.get_user_by_phone(phone):
            return "phone"
        return None

    async def add_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole,
        full_name: str,
        phone: Optional[str] = None,
    ) -> User:
        """Insert a user; password_hash must already be hashed"""
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            full_name=full_name,
            phone=phone or None,
            status=UserStatus.ACTIVE,
        )
        self.db.add(user)
        await self._flush()
        logger.info(f"👤 [DATABASE] User staged: {email} ({role.value}) - ID: {user.id}")
        return user

    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        """Non-admin users, newest first"""
        query = select(User).where(User.role != UserRole.ADMIN)
        if role:
            query = query.where(User.role == role)
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return [row[0] for row in await self._rows(query)]

    async def set_user_status(self, user: User, status: UserStatus) -> User:
        user.status = status
        user.updated_at = utcnow()
        await self._flush()
        return user

    async def set_user_password(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        user.updated_at = utcnow()
        await self._flush()
        return user

    async def delete_user(self, user_id: int):
        """Delete a user and, before it, the profile rows that reference it"""
        try:
            await self.db.execute(delete(Customer).where(Customer.user_id == user_id))
            await self.db.execute(delete(Doctor).where(Doctor.user_id == user_id))
            await self.db.execute(delete(User).where(User.id == user_id))
        except SQLAlchemyError as e:
            raise PersistenceError() from e
        logger.info(f"🗑️ [DATABASE] User {user_id} and profile rows deleted")

    # -------------------------------------------------------------- customers

    async def add_customer(self, user_id: int, **profile) -> Customer:
        customer = Customer(user_id=user_id, **profile)
        self.db.add(customer)
        await self._flush()
        return customer

    async def get_customer_by_user_id(self, user_id: int) -> Optional[Customer]:
        return await self._scalar(select(Customer).where(Customer.user_id == user_id))

    async def update_customer(self, customer: Customer, changes: Dict) -> Customer:
        for field, value in changes.items():
            if hasattr(customer, field):
                setattr(customer, field, value)
        customer.updated_at = utcnow()
        await self._flush()
        return customer

    async def list_customer_records(self) -> List[CustomerListItem]:
        """Every customer profile joined with its user, ordered by name"""
        rows = await self._rows(
            select(User, Customer)
            .join(Customer, Customer.user_id == User.id)
            .order_by(User.full_name, User.id)
        )
        return [
            CustomerListItem(
                user_id=user.id,
                full_name=user.full_name,
                email=user.email,
                phone=user.phone,
                date_of_birth=customer.date_of_birth,
                gender=customer.gender.value if customer.gender else None,
                blood_group=customer.blood_group,
                address=customer.address,
                medical_conditions=customer.medical_conditions,
                height=customer.height,
                weight=customer.weight,
                created_at=customer.created_at,
            )
            for user, customer in rows
        ]

    async def count_customers(self) -> int:
        return await self._scalar(select(func.count()).select_from(Customer))

    # ---------------------------------------------------------------- doctors

    async def add_doctor(self, user_id: int, **profile) -> Doctor:
        doctor = Doctor(user_id=user_id, **profile)
        self.db.add(doctor)
        await self._flush()
        logger.info(f"🩺 [DATABASE] Doctor profile staged for user_id: {user_id}")
        return doctor

    async def get_doctor_by_user_id(self, user_id: int) -> Optional[Doctor]:
        return await self._scalar(select(Doctor).where(Doctor.user_id == user_id))

    async def list_doctor_records(self) -> List[DoctorListItem]:
        rows = await self._rows(
            select(User, Doctor)
            .join(Doctor, Doctor.user_id == User.id)
            .order_by(User.full_name, User.id)
        )
        return [
            DoctorListItem(
                user_id=user.id,
                full_name=user.full_name,
                email=user.email,
                phone=user.phone,
                specialization=doctor.specialization,
                license_number=doctor.license_number,
                experience_years=doctor.experience_years,
                consultation_fee=doctor.consultation_fee,
                available_days=doctor.available_days,
                available_time_start=doctor.available_time_start,
                available_time_end=doctor.available_time_end,
            )
            for user, doctor in rows
        ]

    async def count_doctors(self) -> int:
        return await self._scalar(select(func.count()).select_from(Doctor))

    # ---------------------------------------------------- pending registrations

    async def add_pending_registration(self, **fields) -> PendingRegistration:
        registration = PendingRegistration(status=RegistrationStatus.PENDING, **fields)
        self.db.add(registration)
        await self._flush()
        return registration

    async def get_pending_registration(self, pending_id: int) -> Optional[PendingRegistration]:
        return await self._scalar(
            select(PendingRegistration)
            .where(PendingRegistration.id == pending_id)
            .execution_options(populate_existing=True)
        )

    async def find_open_registration(
        self, email: str, username: Optional[str] = None
    ) -> Optional[PendingRegistration]:
        """A still-pending registration using this email or username"""
        clauses = [PendingRegistration.email == email]
        if username:
            clauses.append(PendingRegistration.username == username)
        return await self._scalar(
            select(PendingRegistration)
            .where(or_(*clauses), PendingRegistration.status == RegistrationStatus.PENDING)
            .limit(1)
        )

    async def list_pending_registrations(
        self, status: Optional[RegistrationStatus] = None
    ) -> List[Tuple[PendingRegistration, Optional[str]]]:
        """Registrations newest first, paired with the reviewer's full name"""
        reviewer = aliased(User)
        query = (
            select(PendingRegistration, reviewer.full_name)
            .outerjoin(reviewer, PendingRegistration.approved_by == reviewer.id)
            .order_by(PendingRegistration.created_at.desc(), PendingRegistration.id.desc())
        )
        if status:
            query = query.where(PendingRegistration.status == status)
        return [(registration, name) for registration, name in await self._rows(query)]

    async def decide_pending_registration(
        self,
        pending_id: int,
        status: RegistrationStatus,
        reviewer_id: int,
        notes: Optional[str],
    ) -> bool:
        """
        Move a registration out of pending in a single conditional UPDATE

        Status, reviewer, notes and timestamp are written together, and only
        while the row is still pending, so of two racing decisions exactly
        one succeeds.

        Returns:
            True if this call performed the transition
        """
        try:
            result = await self.db.execute(
                update(PendingRegistration)
                .where(
                    PendingRegistration.id == pending_id,
                    PendingRegistration.status == RegistrationStatus.PENDING,
                )
                .values(
                    status=status,
                    approved_by=reviewer_id,
                    admin_notes=notes,
                    updated_at=utcnow(),
                )
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            raise PersistenceError() from e
        return result.rowcount == 1

    async def count_pending_registrations(self) -> int:
        return await self._scalar(
            select(func.count())
            .select_from(PendingRegistration)
            .where(PendingRegistration.status == RegistrationStatus.PENDING)
        )

    # ------------------------------------------------------------- complaints

    async def add_complaint(self, patient_user_id: int, **fields) -> FeedbackComplaint:
        complaint = FeedbackComplaint(patient_user_id=patient_user_id, **fields)
        self.db.add(complaint)
        await self._flush()
        return complaint

    async def get_complaint(self, complaint_id: int) -> Optional[FeedbackComplaint]:
        return await self._scalar(
            select(FeedbackComplaint).where(FeedbackComplaint.id == complaint_id)
        )

    async def list_complaints(self, patient_user_id: Optional[int] = None) -> List[FeedbackComplaint]:
        query = select(FeedbackComplaint).order_by(
            FeedbackComplaint.created_at.desc(), FeedbackComplaint.id.desc()
        )
        if patient_user_id is not None:
            query = query.where(FeedbackComplaint.patient_user_id == patient_user_id)
        return [row[0] for row in await self._rows(query)]

    async def respond_to_complaint(
        self,
        complaint: FeedbackComplaint,
        status: ComplaintStatus,
        admin_user_id: int,
        admin_response: Optional[str],
    ) -> FeedbackComplaint:
        now = utcnow()
        complaint.status = status
        complaint.admin_user_id = admin_user_id
        if admin_response is not None:
            complaint.admin_response = admin_response
        if status in (ComplaintStatus.RESOLVED, ComplaintStatus.CLOSED):
            complaint.resolved_at = complaint.resolved_at or now
        complaint.updated_at = now
        await self._flush()
        return complaint

    async def count_open_complaints(self) -> int:
        return await self._scalar(
            select(func.count())
            .select_from(FeedbackComplaint)
            .where(FeedbackComplaint.status.in_([ComplaintStatus.PENDING, ComplaintStatus.IN_REVIEW]))
        )

    async def get_complaint_feedback(
        self, complaint_id: int, patient_user_id: int
    ) -> Optional[ComplaintFeedback]:
        return await self._scalar(
            select(ComplaintFeedback).where(
                ComplaintFeedback.complaint_id == complaint_id,
                ComplaintFeedback.patient_user_id == patient_user_id,
            )
        )

    async def add_complaint_feedback(
        self, complaint_id: int, patient_user_id: int, rating: int, feedback_text: Optional[str]
    ) -> ComplaintFeedback:
        feedback = ComplaintFeedback(
            complaint_id=complaint_id,
            patient_user_id=patient_user_id,
            rating=rating,
            feedback_text=feedback_text,
        )
        self.db.add(feedback)
        await self._flush()
        return feedback

    # ----------------------------------------------------------- appointments

    async def count_appointments_on(self, day: date) -> int:
        return await self._scalar(
            select(func.count())
            .select_from(Appointment)
            .where(Appointment.appointment_date == day)
        )

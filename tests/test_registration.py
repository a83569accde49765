"""
Tests for the doctor/staff registration workflow
"""
import pytest
from fastapi import status

from clinic_admin.core.exceptions import (
    AlreadyDecidedError,
    AuthorizationError,
    DuplicateIdentityError,
    NotFoundError,
    ValidationError,
)
from clinic_admin.core.security import is_password_hash, verify_password
from clinic_admin.models.pending_registration import RegistrationStatus
from clinic_admin.models.user import UserRole
from clinic_admin.schemas.registration import RegistrationSubmitRequest
from clinic_admin.services.record_store import RecordStore
from clinic_admin.services.registration_service import RegistrationService

from tests.conftest import TEST_PASSWORD


def doctor_payload(**overrides):
    data = {
        "username": "drgrey",
        "email": "grey@clinic.com",
        "password": TEST_PASSWORD,
        "role": "doctor",
        "full_name": "Meredith Grey",
        "phone": "+15550100",
        "specialization": "General Surgery",
        "license_number": "LIC-GREY-01",
        "experience_years": 12,
        "consultation_fee": 150.0,
        "available_days": "Mon,Wed,Fri",
        "available_time_start": "09:00",
        "available_time_end": "17:00",
    }
    data.update(overrides)
    return data


def staff_payload(**overrides):
    data = {
        "username": "nurse.joy",
        "email": "joy@clinic.com",
        "password": TEST_PASSWORD,
        "role": "staff",
        "full_name": "Joy Nurse",
        "department": "Reception",
        "employee_id": "EMP-7",
    }
    data.update(overrides)
    return data


@pytest.fixture
def service(store):
    return RegistrationService(store)


@pytest.fixture
async def admin(make_user):
    return await make_user(UserRole.ADMIN, full_name="Ada Admin")


class TestSubmit:
    """Submitting a registration"""

    async def test_submit_stores_pending_with_hashed_password(self, service, store):
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))

        stored = await store.get_pending_registration(registration.id)
        assert stored.status == RegistrationStatus.PENDING
        assert stored.password_hash != TEST_PASSWORD
        assert is_password_hash(stored.password_hash)

    async def test_submit_weak_password_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.submit(RegistrationSubmitRequest(**doctor_payload(password="alllowercase")))

    async def test_submit_email_of_existing_user_rejected(self, service, make_user):
        await make_user(UserRole.CUSTOMER, email="grey@clinic.com")

        with pytest.raises(DuplicateIdentityError):
            await service.submit(RegistrationSubmitRequest(**doctor_payload()))

    async def test_submit_email_awaiting_review_rejected(self, service):
        await service.submit(RegistrationSubmitRequest(**doctor_payload()))

        with pytest.raises(DuplicateIdentityError):
            await service.submit(RegistrationSubmitRequest(**doctor_payload(username="other")))

    async def test_resubmit_after_rejection_allowed(self, service, admin):
        first = await service.submit(RegistrationSubmitRequest(**doctor_payload()))
        await service.reject(first.id, admin.id, "License could not be verified")

        second = await service.submit(RegistrationSubmitRequest(**doctor_payload()))
        assert second.id != first.id


class TestApprove:
    """Approving a registration"""

    async def test_approve_creates_doctor_account(self, service, store, admin):
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))

        user_id = await service.approve(registration.id, admin.id, "Welcome aboard")

        user = await store.get_user(user_id)
        assert user.role == UserRole.DOCTOR
        assert user.email == "grey@clinic.com"
        assert user.password_hash != TEST_PASSWORD
        assert verify_password(TEST_PASSWORD, user.password_hash)

        doctor = await store.get_doctor_by_user_id(user_id)
        assert doctor.license_number == "LIC-GREY-01"
        assert doctor.specialization == "General Surgery"

        decided = await store.get_pending_registration(registration.id)
        assert decided.status == RegistrationStatus.APPROVED
        assert decided.approved_by == admin.id
        assert decided.admin_notes == "Welcome aboard"

    async def test_approve_staff_creates_no_doctor_profile(self, service, store, admin):
        registration = await service.submit(RegistrationSubmitRequest(**staff_payload()))

        user_id = await service.approve(registration.id, admin.id)

        user = await store.get_user(user_id)
        assert user.role == UserRole.STAFF
        assert await store.get_doctor_by_user_id(user_id) is None

    async def test_approve_twice_creates_one_user(self, service, store, admin):
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))
        await service.approve(registration.id, admin.id)

        with pytest.raises(AlreadyDecidedError):
            await service.approve(registration.id, admin.id)

        doctors = await store.list_users(UserRole.DOCTOR)
        assert len(doctors) == 1

    async def test_stale_reviewer_loses(self, service, session_factory, admin):
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))

        async with session_factory() as other_session:
            other_store = RecordStore(other_session)
            seen = await other_store.get_pending_registration(registration.id)
            assert seen.status == RegistrationStatus.PENDING

            await service.approve(registration.id, admin.id)

            with pytest.raises(AlreadyDecidedError):
                await RegistrationService(other_store).reject(registration.id, admin.id, "Too late")

    async def test_approve_unknown_registration(self, service, admin):
        with pytest.raises(NotFoundError):
            await service.approve(9999, admin.id)

    async def test_approve_by_non_admin_refused(self, service, store, make_user):
        staff = await make_user(UserRole.STAFF)
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))

        with pytest.raises(AuthorizationError):
            await service.approve(registration.id, staff.id)

        still_pending = await store.get_pending_registration(registration.id)
        assert still_pending.status == RegistrationStatus.PENDING

    async def test_identity_taken_since_submission_rolls_back(self, service, store, admin, make_user):
        registration = await service.submit(RegistrationSubmitRequest(**doctor_payload()))
        # Rollback expires loaded instances; keep plain values
        registration_id = registration.id
        taken_by = await make_user(UserRole.CUSTOMER, email="grey@clinic.com")

        with pytest.raises(DuplicateIdentityError):
            await service.approve(registration_id, admin.id)

        unchanged = await store.get_pending_registration(registration_id)
        assert unchanged.status == RegistrationStatus.PENDING
        assert unchanged.approved_by is None
        assert unchanged.admin_notes is None

        assert await store.list_users(UserRole.DOCTOR) == []
        assert await store.get_user_by_username("drgrey") is None
        owner = await store.get_user_by_email("grey@clinic.com")
        assert owner.id == taken_by.id


class TestReject:
    """Rejecting a registration"""

    async def test_reject_records_reason(self, service, store, admin):
        registration = await service.submit(RegistrationSubmitRequest(**staff_payload()))

        rejected = await service.reject(registration.id, admin.id, "  No open positions  ")

        assert rejected.status == RegistrationStatus.REJECTED
        assert rejected.admin_notes == "No open positions"
        assert await store.get_user_by_email("joy@clinic.com") is None

    @pytest.mark.parametrize("notes", ["", "   "])
    async def test_reject_requires_reason(self, service, store, admin, notes):
        registration = await service.submit(RegistrationSubmitRequest(**staff_payload()))

        with pytest.raises(ValidationError):
            await service.reject(registration.id, admin.id, notes)

        unchanged = await store.get_pending_registration(registration.id)
        assert unchanged.status == RegistrationStatus.PENDING

    async def test_approve_after_reject_refused(self, service, admin):
        registration = await service.submit(RegistrationSubmitRequest(**staff_payload()))
        await service.reject(registration.id, admin.id, "Duplicate application")

        with pytest.raises(AlreadyDecidedError):
            await service.approve(registration.id, admin.id)


class TestRegistrationEndpoints:
    """HTTP surface of the workflow"""

    async def test_full_approval_flow(self, client, admin, headers_for):
        response = await client.post("/api/registrations", json=doctor_payload())
        assert response.status_code == status.HTTP_201_CREATED
        registration_id = response.json()["registration_id"]
        assert response.json()["status"] == "pending"

        response = await client.post(
            f"/api/registrations/{registration_id}/approve",
            json={"notes": "Verified"},
            headers=headers_for(admin),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "approved"
        assert response.json()["user_id"] is not None

        response = await client.post(
            f"/api/registrations/{registration_id}/approve",
            json={},
            headers=headers_for(admin),
        )
        assert response.status_code == status.HTTP_409_CONFLICT

        response = await client.get(
            "/api/registrations", params={"status": "approved"}, headers=headers_for(admin)
        )
        assert response.status_code == status.HTTP_200_OK
        listed = response.json()["registrations"]
        assert len(listed) == 1
        assert listed[0]["approved_by_name"] == "Ada Admin"
        assert "password_hash" not in listed[0]

    async def test_duplicate_submission_is_bad_request(self, client):
        await client.post("/api/registrations", json=doctor_payload())

        response = await client.post("/api/registrations", json=doctor_payload())

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already registered" in response.json()["detail"].lower()

    async def test_unknown_registration_is_not_found(self, client, admin, headers_for):
        response = await client.post(
            "/api/registrations/424242/approve", json={}, headers=headers_for(admin)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_blank_rejection_reason_is_unprocessable(self, client, admin, headers_for):
        submitted = await client.post("/api/registrations", json=staff_payload())
        registration_id = submitted.json()["registration_id"]

        response = await client.post(
            f"/api/registrations/{registration_id}/reject",
            json={"notes": "   "},
            headers=headers_for(admin),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_review_requires_admin(self, client, make_user, headers_for):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get("/api/registrations", headers=headers_for(doctor))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_review_requires_token(self, client):
        response = await client.get("/api/registrations")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

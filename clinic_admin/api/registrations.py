"""
Doctor/staff registration API endpoints
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_admin, get_store
from clinic_admin.models.pending_registration import PendingRegistration, RegistrationStatus
from clinic_admin.models.user import User
from clinic_admin.schemas.registration import (
    ApproveRegistrationRequest,
    PendingRegistrationListResponse,
    PendingRegistrationResponse,
    RegistrationDecisionResponse,
    RegistrationSubmitRequest,
    RejectRegistrationRequest,
    SubmitRegistrationResponse,
)
from clinic_admin.services.record_store import RecordStore
from clinic_admin.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/registrations", tags=["Registrations"])


def to_response(registration: PendingRegistration, approved_by_name: Optional[str] = None) -> PendingRegistrationResponse:
    return PendingRegistrationResponse(
        id=registration.id,
        username=registration.username,
        email=registration.email,
        role=registration.role.value,
        full_name=registration.full_name,
        phone=registration.phone,
        status=registration.status.value,
        admin_notes=registration.admin_notes,
        approved_by=registration.approved_by,
        approved_by_name=approved_by_name,
        specialization=registration.specialization,
        license_number=registration.license_number,
        experience_years=registration.experience_years,
        consultation_fee=registration.consultation_fee,
        available_days=registration.available_days,
        available_time_start=registration.available_time_start,
        available_time_end=registration.available_time_end,
        department=registration.department,
        employee_id=registration.employee_id,
        created_at=registration.created_at.isoformat(),
        updated_at=registration.updated_at.isoformat(),
    )


@router.post("", response_model=SubmitRegistrationResponse, status_code=status.HTTP_201_CREATED)
async def submit_registration(
    data: RegistrationSubmitRequest,
    store: RecordStore = Depends(get_store),
):
    """
    Submit a doctor or staff registration

    - Public endpoint
    - The account is created only once an admin approves it
    """
    try:
        registration = await RegistrationService(store).submit(data)
        return SubmitRegistrationResponse(
            message="Registration submitted. An administrator will review it shortly.",
            registration_id=registration.id,
            status=registration.status.value,
        )

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Submit registration error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )


@router.get("", response_model=PendingRegistrationListResponse)
async def list_registrations(
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """List registrations, newest first (admin only)"""
    try:
        rows = await RegistrationService(store).list_pending(status_filter)
        registrations = [to_response(registration, name) for registration, name in rows]
        return PendingRegistrationListResponse(registrations=registrations, total=len(registrations))

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("List registrations error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get registrations"
        )


@router.post("/{registration_id}/approve", response_model=RegistrationDecisionResponse)
async def approve_registration(
    registration_id: int,
    data: ApproveRegistrationRequest,
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """
    Approve a registration

    - Creates the user account (and doctor profile for doctors)
    - 404 unknown id, 409 already decided, 400 identity taken
    """
    try:
        user_id = await RegistrationService(store).approve(registration_id, current_user.id, data.notes)
        return RegistrationDecisionResponse(
            message="Registration approved",
            registration_id=registration_id,
            status=RegistrationStatus.APPROVED.value,
            user_id=user_id,
        )

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Approve registration error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to approve registration"
        )


@router.post("/{registration_id}/reject", response_model=RegistrationDecisionResponse)
async def reject_registration(
    registration_id: int,
    data: RejectRegistrationRequest,
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """
    Reject a registration with a reason

    - 422 blank reason, 404 unknown id, 409 already decided
    """
    try:
        await RegistrationService(store).reject(registration_id, current_user.id, data.notes)
        return RegistrationDecisionResponse(
            message="Registration rejected",
            registration_id=registration_id,
            status=RegistrationStatus.REJECTED.value,
        )

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Reject registration error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reject registration"
        )

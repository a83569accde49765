"""
Doctor API endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_user, get_store
from clinic_admin.models.user import User
from clinic_admin.schemas.doctor import DoctorListResponse
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.get("", response_model=DoctorListResponse)
async def list_doctors(
    current_user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    """
    List doctors

    - Any authenticated role
    - Ordered by name
    """
    try:
        doctors = await store.list_doctor_records()
        logger.info(f"📊 Retrieved {len(doctors)} doctors")
        return DoctorListResponse(doctors=doctors, total=len(doctors))

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Get doctors error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while fetching doctors"
        )

"""
Feedback and complaint API endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_customer, get_current_user, get_store, require_roles
from clinic_admin.models.user import User
from clinic_admin.schemas.complaint import (
    ComplaintCreate,
    ComplaintFeedbackCreate,
    ComplaintFeedbackResponse,
    ComplaintListResponse,
    ComplaintRespondRequest,
    ComplaintResponse,
)
from clinic_admin.services.complaint_service import COMPLAINT_HANDLER_ROLES, ComplaintService
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/complaints", tags=["Complaints"])

get_complaint_handler = require_roles(
    *COMPLAINT_HANDLER_ROLES, detail="Unauthorized to handle complaints"
)


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def submit_complaint(
    data: ComplaintCreate,
    current_user: User = Depends(get_current_customer),
    store: RecordStore = Depends(get_store),
):
    """Submit feedback or a complaint (customers)"""
    try:
        return await ComplaintService(store).submit(current_user, data)

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Submit complaint error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit complaint"
        )


@router.get("", response_model=ComplaintListResponse)
async def list_complaints(
    current_user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    """Customers get their own submissions; staff and admins get all"""
    try:
        complaints = await ComplaintService(store).list_for(current_user)
        return ComplaintListResponse(
            complaints=[ComplaintResponse.model_validate(complaint) for complaint in complaints],
            total=len(complaints),
        )

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("List complaints error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get complaints"
        )


@router.post("/{complaint_id}/respond", response_model=ComplaintResponse)
async def respond_to_complaint(
    complaint_id: int,
    data: ComplaintRespondRequest,
    current_user: User = Depends(get_complaint_handler),
    store: RecordStore = Depends(get_store),
):
    """Respond to a complaint and move its status"""
    try:
        return await ComplaintService(store).respond(complaint_id, current_user, data)

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Respond to complaint error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update complaint"
        )


@router.post(
    "/{complaint_id}/feedback",
    response_model=ComplaintFeedbackResponse,
    status_code=status.HTTP_201_CREATED,
)
async def rate_complaint_handling(
    complaint_id: int,
    data: ComplaintFeedbackCreate,
    current_user: User = Depends(get_current_customer),
    store: RecordStore = Depends(get_store),
):
    """Rate how a resolved complaint was handled (once)"""
    try:
        return await ComplaintService(store).add_feedback(complaint_id, current_user, data)

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Complaint feedback error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit feedback"
        )

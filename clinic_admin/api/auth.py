"""
Account API endpoints: customer signup and self-service
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_user, get_store
from clinic_admin.models.user import User
from clinic_admin.schemas.customer import CustomerSignupRequest
from clinic_admin.schemas.user import (
    ChangePasswordRequest,
    MessageResponse,
    SignupResponse,
    UserResponse,
)
from clinic_admin.services.record_store import RecordStore
from clinic_admin.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: CustomerSignupRequest,
    store: RecordStore = Depends(get_store),
):
    """
    Register a customer (patient)

    - Creates the user account and patient profile together
    - 400 if email, username or phone is already registered
    """
    try:
        user, _ = await UserService(store).signup_customer(data)
        return SignupResponse(
            message="Registration successful",
            user_id=user.id,
            email=user.email,
        )

    except ClinicException as e:
        logger.error(f"❌ SIGNUP FAILED ({e.status_code}): {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Signup error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current user's account"""
    return UserResponse(**current_user.to_dict())


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    """Change the current user's password"""
    try:
        await UserService(store).change_password(current_user.id, data.old_password, data.new_password)
        return MessageResponse(message="Password changed successfully")

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Change password error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change password"
        )

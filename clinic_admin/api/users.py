"""
User management API endpoints (admin only)
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_admin, get_store
from clinic_admin.models.user import User, UserRole
from clinic_admin.schemas.user import MessageResponse, UserListResponse, UserResponse
from clinic_admin.services.record_store import RecordStore
from clinic_admin.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    role: Optional[UserRole] = Query(None),
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """List non-admin accounts, newest first"""
    try:
        users = await UserService(store).list_users(role)
        return UserListResponse(
            users=[UserResponse(**user.to_dict()) for user in users],
            total=len(users),
        )

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("List users error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get users"
        )


@router.post("/{user_id}/suspend", response_model=UserResponse)
async def suspend_user(
    user_id: int,
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """Suspend an account; admins cannot be suspended"""
    try:
        user = await UserService(store).suspend_user(user_id)
        return UserResponse(**user.to_dict())

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Suspend user error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to suspend user"
        )


@router.post("/{user_id}/reactivate", response_model=UserResponse)
async def reactivate_user(
    user_id: int,
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """Reactivate a suspended account"""
    try:
        user = await UserService(store).reactivate_user(user_id)
        return UserResponse(**user.to_dict())

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Reactivate user error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reactivate user"
        )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_admin),
    store: RecordStore = Depends(get_store),
):
    """Delete an account and its patient/doctor profile"""
    try:
        await UserService(store).delete_user(user_id)
        return MessageResponse(message="User deleted")

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Delete user error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user"
        )

"""
Customer (patient) API endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_customer, get_store, require_roles
from clinic_admin.directory.filters import AgeRange, DirectoryFilters, HasConditions, RegistrationPeriod
from clinic_admin.models.user import User, UserRole
from clinic_admin.schemas.customer import (
    CustomerListResponse,
    CustomerProfileResponse,
    CustomerUpdate,
    DirectoryStatsResponse,
)
from clinic_admin.services.customer_service import CustomerService
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/customers", tags=["Customers"])

get_directory_reader = require_roles(
    UserRole.DOCTOR, UserRole.ADMIN, detail="Unauthorized to view patients list"
)
get_profile_editor = require_roles(
    UserRole.STAFF, UserRole.ADMIN, detail="Unauthorized to edit patient profiles"
)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    search: str = Query("", description="Match name or email (any case) or phone"),
    gender: str = Query("all"),
    blood_group: str = Query("all"),
    age_range: AgeRange = Query("all"),
    has_conditions: HasConditions = Query("all"),
    registration_period: RegistrationPeriod = Query("all"),
    current_user: User = Depends(get_directory_reader),
    store: RecordStore = Depends(get_store),
):
    """
    List patients

    - Requires doctor or admin role
    - Ordered by name; optional search and filters narrow the list
    """
    try:
        filters = DirectoryFilters(
            gender=gender,
            blood_group=blood_group,
            age_range=age_range,
            has_conditions=has_conditions,
            registration_period=registration_period,
        )
        customers = await CustomerService(store).list_directory(search, filters)
        return CustomerListResponse(customers=customers, total=len(customers))

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Get customers error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while fetching customers"
        )


@router.get("/stats", response_model=DirectoryStatsResponse)
async def customer_stats(
    current_user: User = Depends(get_directory_reader),
    store: RecordStore = Depends(get_store),
):
    """Totals over the whole patient list"""
    try:
        return await CustomerService(store).directory_stats()

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Get customer stats error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while fetching customer stats"
        )


@router.get("/me", response_model=CustomerProfileResponse)
async def get_my_profile(
    current_user: User = Depends(get_current_customer),
    store: RecordStore = Depends(get_store),
):
    """Get the current customer's profile"""
    try:
        customer = await CustomerService(store).get_profile(current_user.id)
        return CustomerProfileResponse(**customer.to_dict())

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Get profile error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get profile"
        )


@router.put("/me", response_model=CustomerProfileResponse)
async def update_my_profile(
    data: CustomerUpdate,
    current_user: User = Depends(get_current_customer),
    store: RecordStore = Depends(get_store),
):
    """Update the current customer's profile"""
    try:
        customer = await CustomerService(store).update_profile(current_user.id, data)
        return CustomerProfileResponse(**customer.to_dict())

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Update profile error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )


@router.put("/{user_id}", response_model=CustomerProfileResponse)
async def update_customer_profile(
    user_id: int,
    data: CustomerUpdate,
    current_user: User = Depends(get_profile_editor),
    store: RecordStore = Depends(get_store),
):
    """
    Update a patient's profile on their behalf

    - Requires staff or admin role
    """
    try:
        customer = await CustomerService(store).update_profile(user_id, data)
        logger.info(f"Profile of user {user_id} updated by {current_user.role.value} {current_user.id}")
        return CustomerProfileResponse(**customer.to_dict())

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Update customer profile error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )

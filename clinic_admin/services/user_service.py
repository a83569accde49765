"""
User account service: customer signup and admin account management
"""
import logging
from typing import List, Optional, Tuple

from clinic_admin.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateIdentityError,
    NotFoundError,
    ValidationError,
)
from clinic_admin.core.security import hash_password, validate_password_strength, verify_password
from clinic_admin.models.customer import Customer
from clinic_admin.models.user import User, UserRole, UserStatus
from clinic_admin.schemas.customer import CustomerProfileFields, CustomerSignupRequest
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class UserService:
    """Service for user account operations"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def signup_customer(self, data: CustomerSignupRequest) -> Tuple[User, Customer]:
        """
        Register a customer account together with its patient profile

        Args:
            data: Signup data

        Returns:
            Tuple of (user, customer)

        Raises:
            DuplicateIdentityError: If email, username or phone already exists
            ValidationError: If the password is weak
        """
        logger.info(f"🔐 [SIGNUP] Starting customer signup: {data.email}")

        is_valid, error_msg = validate_password_strength(data.password)
        if not is_valid:
            logger.error(f"❌ [VALIDATION] Password validation failed: {error_msg}")
            raise ValidationError(error_msg)

        async with self.store.atomic():
            conflict = await self.store.find_identity_conflict(data.username, data.email, data.phone)
            if conflict:
                logger.error(f"❌ [DUPLICATE CHECK] {conflict} already registered: {data.email}")
                raise DuplicateIdentityError(f"{conflict.capitalize()} already registered")

            user = await self.store.add_user(
                username=data.username,
                email=data.email,
                password_hash=hash_password(data.password),
                role=UserRole.CUSTOMER,
                full_name=data.full_name,
                phone=data.phone,
            )
            profile = data.model_dump(include=set(CustomerProfileFields.model_fields))
            customer = await self.store.add_customer(user.id, **profile)

        logger.info(f"✅ [SIGNUP] Customer registered: {user.email} - ID: {user.id}")
        return user, customer

    async def get_user(self, user_id: int) -> User:
        user = await self.store.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        return await self.store.list_users(role)

    async def _get_mutable_user(self, user_id: int) -> User:
        user = await self.get_user(user_id)
        if user.is_admin:
            raise AuthorizationError("Admin accounts cannot be modified")
        return user

    async def suspend_user(self, user_id: int) -> User:
        async with self.store.atomic():
            user = await self._get_mutable_user(user_id)
            await self.store.set_user_status(user, UserStatus.SUSPENDED)
        logger.info(f"⏸️ User {user_id} suspended")
        return user

    async def reactivate_user(self, user_id: int) -> User:
        async with self.store.atomic():
            user = await self._get_mutable_user(user_id)
            await self.store.set_user_status(user, UserStatus.ACTIVE)
        logger.info(f"▶️ User {user_id} reactivated")
        return user

    async def delete_user(self, user_id: int):
        """
        Delete a non-admin user with its customer/doctor profile

        Raises:
            NotFoundError: If user not found
            AuthorizationError: If the user is an admin
        """
        async with self.store.atomic():
            await self._get_mutable_user(user_id)
            await self.store.delete_user(user_id)
        logger.info(f"🗑️ User {user_id} deleted")

    async def change_password(self, user_id: int, old_password: str, new_password: str):
        """
        Change user password

        Raises:
            AuthenticationError: If old password is invalid
            ValidationError: If new password is weak
        """
        user = await self.get_user(user_id)

        if not verify_password(old_password, user.password_hash):
            raise AuthenticationError("Invalid current password")

        is_valid, error_msg = validate_password_strength(new_password)
        if not is_valid:
            raise ValidationError(error_msg)

        async with self.store.atomic():
            await self.store.set_user_password(user, hash_password(new_password))

        logger.info(f"🔒 Password changed for user: {user.email}")

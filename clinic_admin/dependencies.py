"""
FastAPI dependencies for dependency injection
"""
from typing import Callable
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_admin.database import get_db
from clinic_admin.core.security import decode_access_token
from clinic_admin.models.user import User, UserRole
from clinic_admin.services.record_store import RecordStore

# HTTP Bearer token authentication
security = HTTPBearer()


async def get_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's session"""
    return RecordStore(db)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: RecordStore = Depends(get_store),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token

    Raises:
        HTTPException: 401 if token is invalid or user not found,
            403 if the account is suspended
    """
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await store.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is suspended"
        )

    return user


def require_roles(*roles: UserRole, detail: str = "Access forbidden") -> Callable:
    """
    Build a dependency that admits only the given roles

    Raises:
        HTTPException: 403 if the current user's role is not allowed
    """
    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail
            )
        return current_user

    return dependency


get_current_admin = require_roles(UserRole.ADMIN, detail="Access forbidden: Admin role required")
get_current_customer = require_roles(UserRole.CUSTOMER, detail="Access forbidden: Customer role required")

"""
API Router - combines all API endpoints
"""
from fastapi import APIRouter

from clinic_admin.api import auth, complaints, customers, dashboard, doctors, registrations, users

# Main API router
api_router = APIRouter(prefix="/api")

# Include all endpoint routers
api_router.include_router(auth.router)
api_router.include_router(customers.router)
api_router.include_router(doctors.router)
api_router.include_router(registrations.router)
api_router.include_router(users.router)
api_router.include_router(complaints.router)
api_router.include_router(dashboard.router)

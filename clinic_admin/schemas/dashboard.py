"""
Pydantic schemas for the dashboard
"""
from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_patients: int
    total_doctors: int
    pending_registrations: int
    open_complaints: int
    today_appointments: int


class DashboardStatsResponse(BaseModel):
    stats: DashboardStats

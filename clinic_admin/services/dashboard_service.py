"""
Dashboard counters
"""
from datetime import date
from typing import Optional

from clinic_admin.schemas.dashboard import DashboardStats
from clinic_admin.services.record_store import RecordStore


class DashboardService:
    def __init__(self, store: RecordStore):
        self.store = store

    async def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or date.today()
        return DashboardStats(
            total_patients=await self.store.count_customers(),
            total_doctors=await self.store.count_doctors(),
            pending_registrations=await self.store.count_pending_registrations(),
            open_complaints=await self.store.count_open_complaints(),
            today_appointments=await self.store.count_appointments_on(today),
        )

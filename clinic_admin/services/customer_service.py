"""
Customer service for patient profiles and the patient directory
"""
import logging
from datetime import datetime
from typing import List, Optional

from clinic_admin.core.exceptions import NotFoundError
from clinic_admin.directory.filters import DirectoryFilters, filter_customers, summarize
from clinic_admin.models.customer import Customer
from clinic_admin.schemas.customer import CustomerListItem, CustomerUpdate, DirectoryStatsResponse
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer operations"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_profile(self, user_id: int) -> Customer:
        """
        Get customer profile by user ID

        Raises:
            NotFoundError: If the user has no customer profile
        """
        customer = await self.store.get_customer_by_user_id(user_id)
        if not customer:
            raise NotFoundError("Customer profile not found")
        return customer

    async def update_profile(self, user_id: int, data: CustomerUpdate) -> Customer:
        """
        Update customer profile with the fields present in the request

        Raises:
            NotFoundError: If the user has no customer profile
        """
        async with self.store.atomic():
            customer = await self.get_profile(user_id)
            await self.store.update_customer(customer, data.model_dump(exclude_unset=True))

        logger.info(f"Customer profile updated: {customer.id}")
        return customer

    async def list_directory(
        self,
        search: str = "",
        filters: Optional[DirectoryFilters] = None,
        now: Optional[datetime] = None,
    ) -> List[CustomerListItem]:
        """All customers, narrowed by search text and filters when given"""
        customers = await self.store.list_customer_records()
        logger.info(f"📊 Retrieved {len(customers)} customers")
        if not search and (filters is None or not filters.active_count):
            return customers
        return filter_customers(customers, search, filters, now=now)

    async def directory_stats(self, now: Optional[datetime] = None) -> DirectoryStatsResponse:
        customers = await self.store.list_customer_records()
        return summarize(customers, now=now)

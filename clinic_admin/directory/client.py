"""
Patient directory view state

Holds the fetched customer list together with the current search term and
filters, and recomputes the visible rows on every change.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from clinic_admin.directory.filters import (
    DirectoryFilters,
    blood_group_options,
    filter_customers,
    summarize,
)
from clinic_admin.schemas.customer import CustomerListItem, DirectoryStatsResponse

logger = logging.getLogger(__name__)

CUSTOMERS_PATH = "/api/customers"

EMPTY_NO_PATIENTS = "No patients registered yet"
EMPTY_NO_MATCHES = "No patients match your search or filters"
EMPTY_LOAD_FAILED = "Patient list is unavailable right now"


class PatientDirectory:
    """
    Client-side patient directory

    Args:
        client: HTTP client pointed at the API
        token: Bearer token sent with the fetch
        clock: Returns the reference time for age and period filters
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        self.token = token
        self.clock = clock
        self.customers: List[CustomerListItem] = []
        self.search_term = ""
        self.filters = DirectoryFilters()
        self.loaded = False
        self.load_failed = False

    async def load(self) -> List[CustomerListItem]:
        """
        Fetch the customer list

        Any failure leaves an empty list and flags the empty state instead
        of raising.
        """
        try:
            response = await self.client.get(
                CUSTOMERS_PATH,
                headers={"Authorization": f"Bearer {self.token}"},
            )
            response.raise_for_status()
            payload = response.json()
            self.customers = [
                CustomerListItem.model_validate(item)
                for item in payload.get("customers") or []
            ]
            self.load_failed = False
        except (httpx.HTTPError, ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to fetch customers: {e}")
            self.customers = []
            self.load_failed = True
        finally:
            self.loaded = True

        return self.customers

    def _now(self) -> Optional[datetime]:
        return self.clock() if self.clock else None

    def set_search(self, term: str):
        self.search_term = term

    def update_filter(self, key: str, value: str):
        """Set one filter field; unknown keys and values are rejected"""
        if key not in DirectoryFilters.model_fields:
            raise KeyError(key)
        self.filters = DirectoryFilters.model_validate({**self.filters.model_dump(), key: value})

    def clear_filters(self):
        self.filters = DirectoryFilters()

    @property
    def visible(self) -> List[CustomerListItem]:
        return filter_customers(self.customers, self.search_term, self.filters, now=self._now())

    @property
    def active_filter_count(self) -> int:
        return self.filters.active_count

    @property
    def blood_groups(self) -> List[str]:
        return blood_group_options(self.customers)

    @property
    def stats(self) -> DirectoryStatsResponse:
        return summarize(self.customers, now=self._now())

    @property
    def empty_message(self) -> Optional[str]:
        """Message to show instead of the table, or None when rows are visible"""
        if self.load_failed:
            return EMPTY_LOAD_FAILED
        if not self.customers:
            return EMPTY_NO_PATIENTS
        if not self.visible:
            return EMPTY_NO_MATCHES
        return None

"""
Patient directory search and filtering

Pure functions over an already-fetched list of customer records. Every
active filter must match; the input order is preserved.
"""
import math
from datetime import date, datetime, timezone
from typing import Iterable, List, Literal, Optional, Sequence

from pydantic import BaseModel

from clinic_admin.schemas.customer import CustomerListItem, DirectoryStatsResponse
from clinic_admin.utils.clock import utcnow

ALL = "all"

AgeRange = Literal["all", "0-18", "19-30", "31-50", "51+"]
HasConditions = Literal["all", "yes", "no"]
RegistrationPeriod = Literal["all", "last-week", "last-month", "last-3-months", "last-year"]

# (min_age, max_age) inclusive; None means unbounded
AGE_BRACKETS = {
    "0-18": (None, 18),
    "19-30": (19, 30),
    "31-50": (31, 50),
    "51+": (51, None),
}

# Upper bounds only: "last-year" also matches a record created yesterday
REGISTRATION_PERIOD_DAYS = {
    "last-week": 7,
    "last-month": 30,
    "last-3-months": 90,
    "last-year": 365,
}

SECONDS_PER_DAY = 24 * 60 * 60

GENDERS = ("male", "female", "other")


class DirectoryFilters(BaseModel):
    """Narrowing criteria; every field defaults to no constraint"""
    gender: str = ALL
    blood_group: str = ALL
    age_range: AgeRange = ALL
    has_conditions: HasConditions = ALL
    registration_period: RegistrationPeriod = ALL

    @property
    def active_count(self) -> int:
        return sum(1 for value in self.model_dump().values() if value != ALL)


def _naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def calculate_age(date_of_birth: Optional[date], today: date) -> int:
    """
    Calendar age in whole years

    One year is subtracted when today's month/day falls before the
    birthday. A missing date of birth counts as age 0.
    """
    if date_of_birth is None:
        return 0
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def days_since(created_at: datetime, now: datetime) -> int:
    """Whole days between two moments, rounded up"""
    elapsed = abs((_naive_utc(now) - _naive_utc(created_at)).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def has_medical_conditions(record: CustomerListItem) -> bool:
    return bool(record.medical_conditions and record.medical_conditions.strip())


def matches_search(record: CustomerListItem, term: str) -> bool:
    """Case-insensitive on name and email; phone is matched verbatim"""
    needle = term.lower()
    if needle in record.full_name.lower() or needle in record.email.lower():
        return True
    return bool(record.phone) and term in record.phone


def matches_filters(record: CustomerListItem, filters: DirectoryFilters, now: datetime) -> bool:
    if filters.gender != ALL and record.gender != filters.gender:
        return False

    if filters.blood_group != ALL and record.blood_group != filters.blood_group:
        return False

    if filters.age_range != ALL:
        low, high = AGE_BRACKETS[filters.age_range]
        age = calculate_age(record.date_of_birth, now.date())
        if low is not None and age < low:
            return False
        if high is not None and age > high:
            return False

    if filters.has_conditions != ALL:
        if has_medical_conditions(record) != (filters.has_conditions == "yes"):
            return False

    if filters.registration_period != ALL:
        if days_since(record.created_at, now) > REGISTRATION_PERIOD_DAYS[filters.registration_period]:
            return False

    return True


def filter_customers(
    records: Iterable[CustomerListItem],
    search: str = "",
    filters: Optional[DirectoryFilters] = None,
    now: Optional[datetime] = None,
) -> List[CustomerListItem]:
    """
    Narrow records by search text and filters

    Args:
        records: Customer records in display order
        search: Free text; empty matches everything
        filters: Narrowing criteria, all optional
        now: Reference time for age and registration period (UTC)

    Returns:
        Matching records in their original order
    """
    filters = filters or DirectoryFilters()
    now = _naive_utc(now) if now else utcnow()
    return [
        record
        for record in records
        if matches_search(record, search) and matches_filters(record, filters, now)
    ]


def blood_group_options(records: Iterable[CustomerListItem]) -> List[str]:
    """Distinct non-empty blood groups in first-seen order"""
    seen = []
    for record in records:
        if record.blood_group and record.blood_group not in seen:
            seen.append(record.blood_group)
    return seen


def summarize(records: Sequence[CustomerListItem], now: Optional[datetime] = None) -> DirectoryStatsResponse:
    """Headline counts; pass the unfiltered list"""
    now = _naive_utc(now) if now else utcnow()
    by_gender = {gender: 0 for gender in GENDERS}
    new_this_month = 0

    for record in records:
        if record.gender in by_gender:
            by_gender[record.gender] += 1
        created = _naive_utc(record.created_at)
        if created.year == now.year and created.month == now.month:
            new_this_month += 1

    return DirectoryStatsResponse(
        total=len(records),
        by_gender=by_gender,
        new_this_month=new_this_month,
        blood_groups=blood_group_options(records),
    )

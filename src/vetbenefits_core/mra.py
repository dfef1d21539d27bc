"""FERS Minimum Retirement Age (MRA) calculations.

The MRA rises in two-month steps by birth year: 55 for those born before
1953, up to 56 for 1953-1964, and up to 57 for 1970 and later
(5 U.S.C. 8412(h)).
"""

import math
from datetime import date
from decimal import Decimal
from typing import Optional

import structlog
from dateutil.relativedelta import relativedelta

from .models import MRAInput, MRAResult

logger = structlog.get_logger()

# Birth year -> (years, months) for the stepped bands
MRA_BY_BIRTH_YEAR = {
    1948: (55, 0),
    1949: (55, 2),
    1950: (55, 4),
    1951: (55, 6),
    1952: (55, 8),
    1953: (55, 10),
    1965: (56, 2),
    1966: (56, 4),
    1967: (56, 6),
    1968: (56, 8),
    1969: (56, 10),
}

SPECIAL_PROVISION_AGE = 50
DAYS_PER_MONTH = Decimal("30.44")


def get_minimum_retirement_age(birth_year: int) -> tuple[int, int]:
    """Get the MRA for a birth year.

    Returns:
        Tuple of (years, months)
    """
    if birth_year < 1948:
        return 55, 0
    if 1954 <= birth_year <= 1964:
        return 56, 0
    if birth_year >= 1970:
        return 57, 0
    return MRA_BY_BIRTH_YEAR[birth_year]


def _approx_months_between(start: date, end: date) -> Decimal:
    return Decimal((end - start).days) / DAYS_PER_MONTH


def _can_retire_at(data: MRAInput, mra_text: str) -> str:
    if data.has_special_provisions:
        return (
            f"Age {SPECIAL_PROVISION_AGE} with 20 years of covered service, "
            f"or your MRA ({mra_text}) with 30 years of service"
        )
    if data.has_military_service:
        return (
            f"Your MRA ({mra_text}) with 30 years of service, counting military "
            f"time once the buy-back deposit is paid; age 60 with 20 years; "
            f"or age 62 with 5 years"
        )
    return (
        f"Your MRA ({mra_text}) with 30 years of service, age 60 with 20 years, "
        f"or age 62 with 5 years"
    )


def calculate_mra(data: MRAInput, as_of: Optional[date] = None) -> MRAResult:
    """Calculate MRA, eligibility date and the remaining service needed.

    Service needed is measured from the federal start date to the
    eligibility date in approximate 30.44-day months.

    Args:
        data: Birth date, service start and provision flags
        as_of: Reference date for the eligibility countdown (default: today)

    Returns:
        MRAResult
    """
    as_of = as_of or date.today()
    mra_years, mra_months = get_minimum_retirement_age(data.date_of_birth.year)
    # relativedelta clamps to month end: Dec 31 + 2 months is Feb 28/29
    eligibility_date = data.date_of_birth + relativedelta(years=mra_years, months=mra_months)

    # Truncated remainder: a negative span gives a negative month count
    total_months = _approx_months_between(data.start_date, eligibility_date)
    years_needed = math.floor(total_months / 12)
    months_needed = math.floor(total_months % 12)

    months_until = max(0, math.floor(_approx_months_between(as_of, eligibility_date)))

    reduced_annuity_eligible = None
    if data.years_of_service is not None:
        # MRA+10: at least 10 years but short of the 30 needed for an unreduced annuity
        reduced_annuity_eligible = 10 <= data.years_of_service < 30

    result = MRAResult(
        mra_years=mra_years,
        mra_months=mra_months,
        retirement_eligibility_date=eligibility_date,
        years_of_service_needed=years_needed,
        months_of_service_needed=months_needed,
        special_provision_age=SPECIAL_PROVISION_AGE if data.has_special_provisions else None,
        can_retire_at=_can_retire_at(data, f"{mra_years} years {mra_months} months"),
        eligible_now=eligibility_date <= as_of,
        months_until_eligibility=months_until,
        reduced_annuity_eligible=reduced_annuity_eligible,
    )
    logger.info(
        "mra_calculated",
        birth_year=data.date_of_birth.year,
        mra=result.minimum_retirement_age,
        eligibility_date=eligibility_date.isoformat(),
    )
    return result

"""Unused sick leave service credit.

At retirement, unused sick leave is added to creditable service using
OPM's 2087-hour work year (the chart in 5 CFR 831.302 follows the same
divisor).
"""

import math
from decimal import Decimal

import structlog

from .models import SickLeaveInput, SickLeaveResult

logger = structlog.get_logger()

HOURS_PER_DAY = Decimal("8")
HOURS_PER_WORK_YEAR = Decimal("2087")

# Estimate only: 1% of salary per credited year, independent of the
# buy-back calculator's annuity rates
PENSION_PERCENT_PER_YEAR = Decimal("1")
PENSION_MULTIPLIER = Decimal("0.01")


def calculate_sick_leave(data: SickLeaveInput) -> SickLeaveResult:
    """Convert unused sick leave hours into service credit.

    Args:
        data: Sick leave hours and optional salary / current service

    Returns:
        SickLeaveResult with floored display values and the raw credit
    """
    hours = data.sick_leave_hours
    raw_years = hours / HOURS_PER_WORK_YEAR

    if data.current_salary is not None:
        annual_benefit = data.current_salary * raw_years * PENSION_MULTIPLIER
    else:
        annual_benefit = Decimal("0")

    revised_service = None
    if data.current_years_of_service is not None:
        revised_service = data.current_years_of_service + raw_years

    result = SickLeaveResult(
        days_equivalent=math.floor(hours / HOURS_PER_DAY),
        years_credit=math.floor(raw_years),
        months_credit=math.floor((raw_years % 1) * 12),
        raw_years_credit=raw_years,
        pension_increase_percent=f"{raw_years * PENSION_PERCENT_PER_YEAR:.2f}%",
        estimated_annual_benefit=annual_benefit,
        revised_service_years=revised_service,
    )
    logger.info(
        "sick_leave_credit_calculated",
        hours=str(hours),
        years=result.years_credit,
        months=result.months_credit,
    )
    return result

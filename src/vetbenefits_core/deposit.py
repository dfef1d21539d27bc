"""Military service deposit (base deposit) calculations.

The deposit owed for a span of service is the sum, over each calendar year
touched by the span, of annual base pay times the fraction of that year
served times the deposit rate for that year.

Two service-length measures coexist here and are kept separate:
the calendar-month year fractions used for the deposit integration, and
elapsed days / 365.25 (service_years) used for display and projections.
"""

from datetime import date
from decimal import Decimal
from typing import Union

import structlog

from .models import GradePeriod, PeriodDeposit, RetirementPlan
from .pay_tables import get_deposit_rate, get_military_base_pay

logger = structlog.get_logger()

DAYS_PER_YEAR = Decimal("365.25")


def service_years(start: date, end: date) -> Decimal:
    """Elapsed service in years, as elapsed days / 365.25."""
    return Decimal((end - start).days) / DAYS_PER_YEAR


def year_fraction(year: int, start: date, end: date) -> Decimal:
    """Fraction of a calendar year counted toward the deposit.

    The start year counts from the start month through December, the end
    year counts January through the end month, and interior years count in
    full. When a span starts and ends in the same year the start-year rule
    applies.
    """
    if year == start.year:
        return Decimal(13 - start.month) / 12
    if year == end.year:
        return Decimal(end.month) / 12
    return Decimal("1")


def calculate_period_deposit(
    grade: str,
    start: date,
    end: date,
    plan: Union[RetirementPlan, str],
) -> Decimal:
    """Integrate pay x deposit rate x year fraction across one span.

    Reversed spans (end year before start year) integrate over no years
    and return zero.
    """
    deposit = Decimal("0")
    for year in range(start.year, end.year + 1):
        annual_pay = get_military_base_pay(grade, year)
        rate = get_deposit_rate(year, plan)
        deposit += annual_pay * year_fraction(year, start, end) * rate
    return deposit


def calculate_single_period_deposit(
    grade: str,
    pay_entry_date: date,
    separation_date: date,
    plan: Union[RetirementPlan, str],
) -> Decimal:
    """Calculate the base deposit assuming one grade for the whole span.

    This is the simple calculation path: the separation grade is applied
    to every year of service even though real careers include promotions.

    Args:
        grade: Pay grade held throughout (normally the separation grade)
        pay_entry_date: Pay Entry Base Date
        separation_date: Date of separation from active duty
        plan: Retirement plan

    Returns:
        Base deposit owed, before interest
    """
    deposit = calculate_period_deposit(grade, pay_entry_date, separation_date, plan)
    logger.debug(
        "single_period_deposit",
        grade=grade,
        start=pay_entry_date.isoformat(),
        end=separation_date.isoformat(),
        deposit=str(deposit),
    )
    return deposit


def calculate_multi_period_deposit(
    grade_periods: list[GradePeriod],
    plan: Union[RetirementPlan, str],
) -> tuple[Decimal, list[PeriodDeposit]]:
    """Calculate the base deposit across several grade periods.

    Each period is integrated with its own grade and dates. Periods are
    not checked for order or overlap here; see check_grade_periods.

    Args:
        grade_periods: Periods of service, one per grade held
        plan: Retirement plan

    Returns:
        Tuple of (total_deposit, period_breakdown)
    """
    total_deposit = Decimal("0")
    breakdown: list[PeriodDeposit] = []

    for period in grade_periods:
        deposit = calculate_period_deposit(period.grade, period.from_date, period.to_date, plan)
        total_deposit += deposit
        breakdown.append(PeriodDeposit(
            grade=period.grade,
            years=service_years(period.from_date, period.to_date),
            deposit=deposit,
        ))

    logger.debug(
        "multi_period_deposit",
        periods=len(grade_periods),
        total_deposit=str(total_deposit),
    )
    return total_deposit, breakdown


def check_grade_periods(grade_periods: list[GradePeriod]) -> list[str]:
    """Describe ordering problems in a list of grade periods.

    Returns:
        One message per reversed, empty, overlapping or out-of-order
        period. An empty list means the periods are well formed.
    """
    problems: list[str] = []
    for i, period in enumerate(grade_periods, start=1):
        if period.to_date <= period.from_date:
            problems.append(
                f"Grade period {i} ({period.grade}) ends on or before its start date"
            )
        if i > 1:
            previous = grade_periods[i - 2]
            if period.from_date < previous.to_date:
                problems.append(
                    f"Grade period {i} ({period.grade}) starts before period {i - 1} ends"
                )
    return problems

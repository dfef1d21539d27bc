"""Interest accrual on unpaid military service deposits.

Interest on a deposit starts two years after the employee's federal
civilian hire (the grace period). After that the balance compounds once
per calendar year at OPM's composite rate for that year. This is simple
sequential annual compounding, not day-count interest.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

import structlog

from .pay_tables import get_interest_rate

logger = structlog.get_logger()

GRACE_PERIOD_YEARS = 2


def calculate_interest(
    base_deposit: Union[Decimal, int, float],
    fed_start_year: int,
    current_year: Optional[int] = None,
) -> Decimal:
    """Calculate interest accrued on a deposit.

    Args:
        base_deposit: Principal owed; ints and floats are converted to Decimal
        fed_start_year: Year federal civilian employment began
        current_year: Year to accrue up to, exclusive (default: this year)

    Returns:
        Interest only, not principal plus interest, as a Decimal
    """
    if current_year is None:
        current_year = date.today().year

    interest_start_year = fed_start_year + GRACE_PERIOD_YEARS
    if current_year <= interest_start_year:
        return Decimal("0")

    base_deposit = Decimal(str(base_deposit))
    balance = base_deposit
    for year in range(interest_start_year, current_year):
        balance = balance * (1 + get_interest_rate(year))

    interest = balance - base_deposit
    logger.debug(
        "interest_accrued",
        principal=str(base_deposit),
        start_year=interest_start_year,
        current_year=current_year,
        interest=str(interest),
    )
    return interest

"""FERS basic annuity estimate."""

from decimal import ROUND_HALF_UP, Decimal

import structlog

from .models import FERSPensionInput, FERSPensionResult

logger = structlog.get_logger()

FERS_MULTIPLIER = Decimal("0.01")
# Retiring at 62 or later with at least 20 years of service
FERS_ENHANCED_MULTIPLIER = Decimal("0.011")

CENTS = Decimal("0.01")


def calculate_fers_pension(data: FERSPensionInput) -> FERSPensionResult:
    """Estimate the FERS basic annuity from High-3 salary and service.

    Args:
        data: High-3 salary, years of service and the age-62 flag

    Returns:
        FERSPensionResult with amounts rounded to cents
    """
    if data.retiring_at_62_plus_with_20:
        multiplier = FERS_ENHANCED_MULTIPLIER
        label = "1.1% per year"
    else:
        multiplier = FERS_MULTIPLIER
        label = "1.0% per year"

    annual = data.high3_salary * data.years_of_service * multiplier
    logger.info(
        "fers_pension_estimated",
        high3=str(data.high3_salary),
        years=str(data.years_of_service),
        multiplier=label,
    )
    return FERSPensionResult(
        annual_pension=annual.quantize(CENTS, rounding=ROUND_HALF_UP),
        monthly_pension=(annual / 12).quantize(CENTS, rounding=ROUND_HALF_UP),
        multiplier=multiplier,
        multiplier_used=label,
    )

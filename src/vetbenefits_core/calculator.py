"""Military service buy-back calculation.

MilitaryBuyBackCalculator combines the deposit, interest and annuity
projections into a single result with a recommendation tier. Every step
is recorded in the result's audit log and emitted as a structlog event.

The calculator holds only its settings. Each call builds its own audit
log, so one instance can serve concurrent callers.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from .config import EngineSettings, get_settings
from .deposit import (
    calculate_multi_period_deposit,
    calculate_single_period_deposit,
    check_grade_periods,
    service_years,
)
from .exceptions import ValidationError
from .interest import calculate_interest
from .models import (
    GRADES,
    AuditEntry,
    MilitaryBuyBackInput,
    MilitaryBuyBackResult,
    PeriodDeposit,
    RecommendationTier,
    RetirementPlan,
)
from .pay_tables import DEFAULT_BASE_PAY, get_pay_table_version, normalize_grade

logger = structlog.get_logger()

# Annuity accrual per year of credited service. CSRS is a blend of its
# 1.5% / 1.75% / 2.0% tiers.
ANNUITY_RATES = {
    RetirementPlan.FERS: Decimal("0.01"),
    RetirementPlan.CSRS: Decimal("0.0175"),
}

LIFETIME_BENEFIT_YEARS = 20

# Break-even thresholds (years), exclusive upper bounds
HIGHLY_RECOMMENDED_BELOW = Decimal("2")
STRONGLY_RECOMMENDED_BELOW = Decimal("5")
RECOMMENDED_BELOW = Decimal("10")


def classify_break_even(break_even_years: Decimal) -> RecommendationTier:
    """Map break-even years to a recommendation tier."""
    if break_even_years < HIGHLY_RECOMMENDED_BELOW:
        return RecommendationTier.HIGHLY_RECOMMENDED
    if break_even_years < STRONGLY_RECOMMENDED_BELOW:
        return RecommendationTier.STRONGLY_RECOMMENDED
    if break_even_years < RECOMMENDED_BELOW:
        return RecommendationTier.RECOMMENDED
    return RecommendationTier.CONSULT_SPECIALIST


def build_recommendation(break_even_years: Decimal) -> tuple[RecommendationTier, str]:
    """Build the recommendation tier and its display text.

    Returns:
        Tuple of (tier, recommendation_text)
    """
    tier = classify_break_even(break_even_years)
    years = f"{break_even_years:.1f}"

    if tier == RecommendationTier.HIGHLY_RECOMMENDED:
        text = (
            f"Highly recommended. You would recoup your deposit in about {years} "
            f"years of retirement, and the added annuity continues for life."
        )
    elif tier == RecommendationTier.STRONGLY_RECOMMENDED:
        text = (
            f"Strongly recommended. The deposit pays for itself in about {years} "
            f"years of retirement."
        )
    elif tier == RecommendationTier.RECOMMENDED:
        text = (
            f"Recommended. Break-even comes about {years} years into retirement, "
            f"well within a typical retirement."
        )
    else:
        text = (
            f"Consult a federal retirement specialist. Break-even is about {years} "
            f"years, so the value depends on your retirement timeline."
        )
    return tier, text


class MilitaryBuyBackCalculator:
    """
    Calculate the military service deposit and its payoff.

    Follows OPM's deposit methodology: base pay by grade and year times the
    statutory deposit rate, plus composite-rate interest after the two-year
    grace period. Inputs are assumed pre-validated; numeric edge cases fall
    back to documented defaults instead of raising.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize calculator.

        Args:
            settings: Engine settings (default: loaded from the environment)
        """
        self.settings = settings or get_settings()
        self.table_version = get_pay_table_version()

    def _log_step(
        self,
        audit_log: list[AuditEntry],
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        audit_log.append(entry)
        logger.info(
            "calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _check_input(self, data: MilitaryBuyBackInput) -> list[str]:
        """Collect warnings about input the engine will process anyway.

        Raises:
            ValidationError: Only when strict_grade_periods is enabled and
                the grade periods are malformed.
        """
        warnings: list[str] = []

        if data.uses_grade_periods:
            grades = [period.grade for period in data.grade_periods]
        else:
            grades = [data.separation_grade]

        for grade in grades:
            if normalize_grade(grade) not in GRADES:
                warnings.append(
                    f"Unrecognized pay grade '{grade}'; using default annual pay of {DEFAULT_BASE_PAY}"
                )

        if data.uses_grade_periods:
            problems = check_grade_periods(data.grade_periods)
            if problems and self.settings.strict_grade_periods:
                raise ValidationError(
                    problems[0],
                    field="grade_periods",
                    value=len(data.grade_periods),
                    constraint="Periods must be chronological and non-overlapping",
                    details={"problems": problems},
                )
            warnings.extend(problems)
        elif data.separation_date < data.pay_entry_date:
            warnings.append("Separation date is before pay entry date")

        return warnings

    def calculate(
        self,
        data: MilitaryBuyBackInput,
        as_of: Optional[date] = None,
    ) -> MilitaryBuyBackResult:
        """
        Calculate the deposit, interest and annuity payoff of a buy-back.

        Args:
            data: Service history, federal employment and plan details
            as_of: Date interest is accrued to (default: today)

        Returns:
            MilitaryBuyBackResult with audit trail
        """
        as_of = as_of or date.today()
        audit_log: list[AuditEntry] = []
        warnings = self._check_input(data)
        plan = data.retirement_plan

        # Step 1: Length of service
        total_service = service_years(data.pay_entry_date, data.separation_date)
        self._log_step(
            audit_log,
            step="total_military_service",
            input_value=f"{data.pay_entry_date.isoformat()} to {data.separation_date.isoformat()}",
            output_value=str(total_service),
            source="Elapsed days / 365.25",
        )

        # Step 2: Base deposit
        period_breakdown: Optional[list[PeriodDeposit]] = None
        if data.uses_grade_periods:
            base_deposit, period_breakdown = calculate_multi_period_deposit(
                data.grade_periods, plan
            )
            self._log_step(
                audit_log,
                step="base_deposit",
                input_value=f"{len(data.grade_periods)} grade periods, plan={plan.value}",
                output_value=str(base_deposit),
                source=f"DoD pay tables {self.table_version}",
                notes="Multi-period calculation",
            )
        else:
            base_deposit = calculate_single_period_deposit(
                data.separation_grade,
                data.pay_entry_date,
                data.separation_date,
                plan,
            )
            self._log_step(
                audit_log,
                step="base_deposit",
                input_value=f"grade={data.separation_grade}, plan={plan.value}",
                output_value=str(base_deposit),
                source=f"DoD pay tables {self.table_version}",
                notes="Separation grade applied to entire service span",
            )

        # Step 3: Interest after the grace period
        interest = max(
            Decimal("0"),
            calculate_interest(base_deposit, data.fed_start_date.year, as_of.year),
        )
        self._log_step(
            audit_log,
            step="interest_amount",
            input_value=f"principal={base_deposit}, fed_start_year={data.fed_start_date.year}, as_of={as_of.year}",
            output_value=str(interest),
            source="OPM composite interest rates",
        )

        deposit_amount = base_deposit + interest
        self._log_step(
            audit_log,
            step="deposit_amount",
            input_value=f"{base_deposit} + {interest}",
            output_value=str(deposit_amount),
            source="Calculated",
        )

        # Step 4: Installments
        if data.years_to_retirement > 0:
            monthly_payment = deposit_amount / (data.years_to_retirement * 12)
        else:
            monthly_payment = Decimal("0")
        self._log_step(
            audit_log,
            step="monthly_payment_option",
            input_value=f"{deposit_amount} over {data.years_to_retirement} years",
            output_value=str(monthly_payment),
            source="Calculated",
        )

        # Step 5: Annuity payoff
        annuity_rate = ANNUITY_RATES[plan]
        annuity_increase = data.annual_base_pay * total_service * annuity_rate
        self._log_step(
            audit_log,
            step="annuity_increase",
            input_value=f"{data.annual_base_pay} * {total_service} * {annuity_rate}",
            output_value=str(annuity_increase),
            source=f"{plan.value.upper()} annuity accrual rate",
        )

        if annuity_increase > 0:
            break_even_years = deposit_amount / annuity_increase
        else:
            break_even_years = Decimal("0")
        lifetime_benefit = annuity_increase * LIFETIME_BENEFIT_YEARS
        self._log_step(
            audit_log,
            step="break_even_years",
            input_value=f"{deposit_amount} / {annuity_increase}",
            output_value=str(break_even_years),
            source="Calculated",
            notes=f"Lifetime benefit over {LIFETIME_BENEFIT_YEARS} years: {lifetime_benefit}",
        )

        tier, recommendation = build_recommendation(break_even_years)
        self._log_step(
            audit_log,
            step="recommendation",
            input_value=str(break_even_years),
            output_value=tier.value,
            source="Break-even tiers: <2, <5, <10 years",
        )

        return MilitaryBuyBackResult(
            total_military_service=total_service,
            base_deposit=base_deposit,
            interest_amount=interest,
            deposit_amount=deposit_amount,
            monthly_payment_option=monthly_payment,
            annuity_increase=annuity_increase,
            break_even_years=break_even_years,
            lifetime_benefit=lifetime_benefit,
            recommendation=recommendation,
            recommendation_tier=tier,
            period_breakdown=period_breakdown,
            warnings=warnings,
            audit_log=audit_log if self.settings.audit_enabled else [],
            table_version=self.table_version,
        )


def calculate_military_buyback(
    data: MilitaryBuyBackInput,
    as_of: Optional[date] = None,
    settings: Optional[EngineSettings] = None,
) -> MilitaryBuyBackResult:
    """Calculate a military buy-back with a one-off calculator."""
    return MilitaryBuyBackCalculator(settings=settings).calculate(data, as_of=as_of)

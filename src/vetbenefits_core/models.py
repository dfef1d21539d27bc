"""Data models for federal retirement benefit calculations.

Inputs are built fresh by the caller for each calculation and results are
produced once per call. Every model is frozen, so neither can be mutated
after construction.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMERATIONS
# =============================================================================

class RetirementPlan(str, Enum):
    """Federal civilian retirement plans."""
    FERS = "fers"
    CSRS = "csrs"


class RecommendationTier(str, Enum):
    """Buy-back recommendation tiers, keyed on break-even years."""
    HIGHLY_RECOMMENDED = "highly_recommended"  # < 2 years
    STRONGLY_RECOMMENDED = "strongly_recommended"  # < 5 years
    RECOMMENDED = "recommended"  # < 10 years
    CONSULT_SPECIALIST = "consult_specialist"


# Closed set of normalized pay grades
GRADES: tuple[str, ...] = (
    "e1", "e2", "e3", "e4", "e5", "e6", "e7", "e8", "e9",
    "w1", "w2", "w3", "w4", "w5",
    "o1", "o2", "o3", "o4", "o5", "o6", "o7", "o8", "o9", "o10",
)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# AUDIT
# =============================================================================

class AuditEntry(_FrozenModel):
    """Single calculation step in a result's audit trail.

    Entries carry no timestamp so that identical inputs give identical
    results.
    """
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


# =============================================================================
# MILITARY BUY-BACK
# =============================================================================

class GradePeriod(_FrozenModel):
    """A contiguous span of military service at one pay grade.

    Periods are expected to be chronological and non-overlapping, but this
    is not enforced here.
    """
    grade: str
    from_date: date
    to_date: date


class MilitaryBuyBackInput(_FrozenModel):
    """Input for a military service deposit (buy-back) calculation."""
    branch: Optional[str] = None  # Informational only
    pay_entry_date: date
    separation_date: date
    separation_grade: str
    fed_start_date: date
    retirement_plan: RetirementPlan
    years_to_retirement: int = 0
    annual_base_pay: Decimal = Field(default=Decimal("0"), ge=0)  # Current federal salary
    grade_periods: Optional[list[GradePeriod]] = None

    @property
    def uses_grade_periods(self) -> bool:
        """Whether the multi-period (per-rank) deposit mode applies."""
        return bool(self.grade_periods)


class PeriodDeposit(_FrozenModel):
    """Deposit owed for one grade period."""
    grade: str
    years: Decimal
    deposit: Decimal


class MilitaryBuyBackResult(_FrozenModel):
    """Result of a military buy-back calculation."""
    total_military_service: Decimal
    base_deposit: Decimal
    interest_amount: Decimal
    deposit_amount: Decimal
    monthly_payment_option: Decimal
    annuity_increase: Decimal
    break_even_years: Decimal
    lifetime_benefit: Decimal
    recommendation: str
    recommendation_tier: RecommendationTier
    period_breakdown: Optional[list[PeriodDeposit]] = None
    warnings: list[str] = Field(default_factory=list)
    audit_log: list[AuditEntry] = Field(default_factory=list)
    table_version: str


# =============================================================================
# MINIMUM RETIREMENT AGE
# =============================================================================

class MRAInput(_FrozenModel):
    """Input for a Minimum Retirement Age calculation."""
    date_of_birth: date
    start_date: date  # Federal service start
    has_special_provisions: bool = False  # LEO, firefighter, ATC
    has_military_service: bool = False
    years_of_service: Optional[Decimal] = Field(default=None, ge=0)


class MRAResult(_FrozenModel):
    """Minimum Retirement Age and eligibility countdown."""
    mra_years: int
    mra_months: int
    retirement_eligibility_date: date
    years_of_service_needed: int
    months_of_service_needed: int
    special_provision_age: Optional[int] = None
    can_retire_at: str
    eligible_now: bool
    months_until_eligibility: int
    reduced_annuity_eligible: Optional[bool] = None

    @property
    def minimum_retirement_age(self) -> str:
        """MRA as display text, e.g. "56 years 2 months"."""
        return f"{self.mra_years} years {self.mra_months} months"


# =============================================================================
# SICK LEAVE
# =============================================================================

class SickLeaveInput(_FrozenModel):
    """Input for an unused sick leave service credit calculation."""
    sick_leave_hours: Decimal = Field(ge=0)
    current_salary: Optional[Decimal] = Field(default=None, ge=0)
    current_years_of_service: Optional[Decimal] = Field(default=None, ge=0)


class SickLeaveResult(_FrozenModel):
    """Service credit earned from unused sick leave."""
    days_equivalent: int
    years_credit: int
    months_credit: int
    raw_years_credit: Decimal
    pension_increase_percent: str
    estimated_annual_benefit: Decimal
    revised_service_years: Optional[Decimal] = None


# =============================================================================
# FERS PENSION
# =============================================================================

class FERSPensionInput(_FrozenModel):
    """Input for a basic FERS annuity estimate."""
    high3_salary: Decimal = Field(ge=0)
    years_of_service: Decimal = Field(ge=0)
    retiring_at_62_plus_with_20: bool = False


class FERSPensionResult(_FrozenModel):
    """Estimated FERS basic annuity."""
    annual_pension: Decimal
    monthly_pension: Decimal
    multiplier: Decimal
    multiplier_used: str

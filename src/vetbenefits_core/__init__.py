"""Vetbenefits Core - Federal retirement benefit calculations for veterans."""

__version__ = "0.1.0"

from .calculator import MilitaryBuyBackCalculator, calculate_military_buyback
from .config import EngineSettings
from .deposit import calculate_multi_period_deposit, calculate_single_period_deposit
from .exceptions import BenefitsEngineError, DataIntegrityError, ValidationError
from .interest import calculate_interest
from .models import (
    FERSPensionInput,
    FERSPensionResult,
    GradePeriod,
    MilitaryBuyBackInput,
    MilitaryBuyBackResult,
    MRAInput,
    MRAResult,
    PeriodDeposit,
    RecommendationTier,
    RetirementPlan,
    SickLeaveInput,
    SickLeaveResult,
)
from .mra import calculate_mra
from .pay_tables import get_deposit_rate, get_military_base_pay
from .pension import calculate_fers_pension
from .sick_leave import calculate_sick_leave

__all__ = [
    "MilitaryBuyBackCalculator",
    "calculate_military_buyback",
    "EngineSettings",
    "calculate_multi_period_deposit",
    "calculate_single_period_deposit",
    "BenefitsEngineError",
    "DataIntegrityError",
    "ValidationError",
    "calculate_interest",
    "FERSPensionInput",
    "FERSPensionResult",
    "GradePeriod",
    "MilitaryBuyBackInput",
    "MilitaryBuyBackResult",
    "MRAInput",
    "MRAResult",
    "PeriodDeposit",
    "RecommendationTier",
    "RetirementPlan",
    "SickLeaveInput",
    "SickLeaveResult",
    "calculate_mra",
    "get_deposit_rate",
    "get_military_base_pay",
    "calculate_fers_pension",
    "calculate_sick_leave",
]

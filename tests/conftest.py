"""Shared fixtures for the benefits engine tests."""

from datetime import date
from decimal import Decimal

import pytest
import structlog

from vetbenefits_core import (
    EngineSettings,
    GradePeriod,
    MilitaryBuyBackInput,
    RetirementPlan,
)


@pytest.fixture
def settings() -> EngineSettings:
    """Settings isolated from the developer's environment."""
    return EngineSettings(env="test")


@pytest.fixture
def buyback_input() -> MilitaryBuyBackInput:
    """Four years as an E-5, hired federally in mid-2015 under FERS."""
    return MilitaryBuyBackInput(
        branch="army",
        pay_entry_date=date(2010, 1, 1),
        separation_date=date(2013, 12, 31),
        separation_grade="E-5",
        fed_start_date=date(2015, 6, 1),
        retirement_plan=RetirementPlan.FERS,
        years_to_retirement=10,
        annual_base_pay=Decimal("80000"),
    )


@pytest.fixture
def grade_periods() -> list[GradePeriod]:
    """Two years as an E-4 followed by two years as an E-5."""
    return [
        GradePeriod(grade="E-4", from_date=date(2010, 1, 1), to_date=date(2011, 12, 31)),
        GradePeriod(grade="E-5", from_date=date(2012, 1, 1), to_date=date(2013, 12, 31)),
    ]


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applies."""
    yield
    structlog.reset_defaults()

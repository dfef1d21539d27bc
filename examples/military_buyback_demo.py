#!/usr/bin/env python3
"""
Military Buy-Back Demonstration

This script walks through a veteran's federal retirement picture:
1. Calculate the military service deposit in both grade modes
2. Estimate the Minimum Retirement Age and eligibility countdown
3. Convert unused sick leave into service credit
4. Estimate the FERS basic annuity with and without the buy-back

Run: python examples/military_buyback_demo.py
"""

from datetime import date
from decimal import Decimal

from vetbenefits_core import (
    EngineSettings,
    FERSPensionInput,
    GradePeriod,
    MilitaryBuyBackCalculator,
    MilitaryBuyBackInput,
    MRAInput,
    RetirementPlan,
    SickLeaveInput,
    calculate_fers_pension,
    calculate_mra,
    calculate_sick_leave,
)
from vetbenefits_core.logging_config import configure_logging


def create_sample_input() -> MilitaryBuyBackInput:
    """Create a sample veteran who served six years and joined the VA."""
    return MilitaryBuyBackInput(
        branch="army",
        pay_entry_date=date(2006, 6, 12),
        separation_date=date(2012, 6, 11),
        separation_grade="E-6",
        fed_start_date=date(2014, 3, 3),
        retirement_plan=RetirementPlan.FERS,
        years_to_retirement=14,
        annual_base_pay=Decimal("78500"),
    )


def create_sample_periods() -> list[GradePeriod]:
    """The same service broken out by promotion."""
    return [
        GradePeriod(grade="E-3", from_date=date(2006, 6, 12), to_date=date(2007, 8, 31)),
        GradePeriod(grade="E-4", from_date=date(2007, 9, 1), to_date=date(2009, 10, 31)),
        GradePeriod(grade="E-5", from_date=date(2009, 11, 1), to_date=date(2011, 5, 31)),
        GradePeriod(grade="E-6", from_date=date(2011, 6, 1), to_date=date(2012, 6, 11)),
    ]


def print_section(title: str) -> None:
    print()
    print("=" * 70)
    print(f"  {title}")
    print("=" * 70)


def main():
    """Run the demonstration."""
    settings = EngineSettings(log_level="WARNING")
    configure_logging(settings)
    calculator = MilitaryBuyBackCalculator(settings=settings)

    data = create_sample_input()
    single = calculator.calculate(data)
    multi = calculator.calculate(
        data.model_copy(update={"grade_periods": create_sample_periods()})
    )

    print_section("MILITARY SERVICE DEPOSIT")
    print(f"Military service:        {single.total_military_service:.2f} years")
    print(f"Pay tables:              {single.table_version}")
    print()
    print(f"{'':25}{'Separation grade':>20}{'By grade period':>20}")
    for label, attr in [
        ("Base deposit", "base_deposit"),
        ("Interest", "interest_amount"),
        ("Total deposit", "deposit_amount"),
        ("Monthly installment", "monthly_payment_option"),
        ("Annual annuity increase", "annuity_increase"),
        ("Break-even (years)", "break_even_years"),
    ]:
        print(f"{label:25}{getattr(single, attr):>20,.2f}{getattr(multi, attr):>20,.2f}")
    print()
    print("Per-grade breakdown:")
    for row in multi.period_breakdown:
        print(f"  {row.grade:6} {row.years:5.2f} years  ${row.deposit:>10,.2f}")
    print()
    print(f"Recommendation: {multi.recommendation}")
    for warning in multi.warnings:
        print(f"  Warning: {warning}")

    print_section("AUDIT TRAIL")
    for entry in multi.audit_log:
        print(f"  {entry.step:24} {entry.output_value[:30]:30} {entry.source}")

    print_section("MINIMUM RETIREMENT AGE")
    mra = calculate_mra(
        MRAInput(
            date_of_birth=date(1987, 2, 19),
            start_date=data.fed_start_date,
            has_military_service=True,
            years_of_service=Decimal("11"),
        )
    )
    print(f"MRA:                     {mra.minimum_retirement_age}")
    print(f"Eligible on:             {mra.retirement_eligibility_date.isoformat()}")
    print(f"Months until eligible:   {mra.months_until_eligibility}")
    print(f"Options:                 {mra.can_retire_at}")

    print_section("UNUSED SICK LEAVE")
    sick = calculate_sick_leave(
        SickLeaveInput(
            sick_leave_hours=Decimal("1450"),
            current_salary=data.annual_base_pay,
            current_years_of_service=Decimal("28"),
        )
    )
    print(f"Credit:                  {sick.years_credit} years {sick.months_credit} months")
    print(f"Pension increase:        {sick.pension_increase_percent}")
    print(f"Revised service:         {sick.revised_service_years:.2f} years")

    print_section("FERS BASIC ANNUITY")
    civilian_years = Decimal("28") + sick.raw_years_credit
    for label, years in [
        ("Without buy-back", civilian_years),
        ("With buy-back", civilian_years + single.total_military_service),
    ]:
        pension = calculate_fers_pension(
            FERSPensionInput(
                high3_salary=Decimal("92000"),
                years_of_service=years,
                retiring_at_62_plus_with_20=True,
            )
        )
        print(f"{label:25}${pension.annual_pension:>12,.2f}/yr  ({pension.multiplier_used})")


if __name__ == "__main__":
    main()

"""Tests for base deposit calculations."""

from datetime import date
from decimal import Decimal

import pytest

from vetbenefits_core.deposit import (
    calculate_multi_period_deposit,
    calculate_period_deposit,
    calculate_single_period_deposit,
    check_grade_periods,
    service_years,
    year_fraction,
)
from vetbenefits_core.models import GradePeriod, RetirementPlan


class TestYearFraction:
    """Tests for the calendar-month year fraction."""

    def test_start_year_counts_from_start_month(self):
        """July start counts July through December."""
        start, end = date(2015, 7, 15), date(2017, 3, 10)
        assert year_fraction(2015, start, end) == Decimal("0.5")

    def test_end_year_counts_through_end_month(self):
        """March end counts January through March."""
        start, end = date(2015, 7, 15), date(2017, 3, 10)
        assert year_fraction(2017, start, end) == Decimal("0.25")

    def test_interior_year_is_full(self):
        start, end = date(2015, 7, 15), date(2017, 3, 10)
        assert year_fraction(2016, start, end) == 1

    def test_january_start_and_december_end_are_full(self):
        start, end = date(2010, 1, 1), date(2012, 12, 31)
        assert year_fraction(2010, start, end) == 1
        assert year_fraction(2012, start, end) == 1

    def test_same_year_uses_start_rule(self):
        """A span inside one year ignores its end month."""
        start, end = date(2020, 3, 1), date(2020, 9, 30)
        assert year_fraction(2020, start, end) == Decimal(10) / 12


class TestServiceYears:
    """Tests for elapsed service years."""

    def test_days_over_365_25(self):
        assert service_years(date(2010, 1, 1), date(2013, 12, 31)) == Decimal(1460) / Decimal("365.25")

    def test_four_year_span_is_four_years(self):
        """A span covering one leap day measures exactly four years."""
        assert service_years(date(2011, 1, 1), date(2015, 1, 1)) == Decimal(1461) / Decimal("365.25")
        assert service_years(date(2011, 1, 1), date(2015, 1, 1)) == 4


class TestSinglePeriodDeposit:
    """Tests for the single-grade calculation path."""

    def test_full_calendar_years(self):
        """Three full years at E-5 under FERS."""
        deposit = calculate_single_period_deposit(
            "e5", date(2010, 1, 1), date(2012, 12, 31), RetirementPlan.FERS
        )
        # (29352 + 30012 + 30576) * 3%
        assert deposit == Decimal("2698.20")

    def test_partial_years(self):
        """Half of 2015 and a quarter of 2016 at O-3."""
        deposit = calculate_single_period_deposit(
            "O-3", date(2015, 7, 15), date(2016, 3, 10), "fers"
        )
        # 45888 * 0.5 * 3% + 46356 * 0.25 * 3%
        assert deposit == Decimal("1035.99")

    def test_csrs_exception_years(self):
        """1999 and 2000 use the raised CSRS rates."""
        deposit = calculate_single_period_deposit(
            "e4", date(1999, 1, 1), date(2000, 12, 1), RetirementPlan.CSRS
        )
        # 16476 * 7.25% + 17028 * 7.40%
        assert deposit == Decimal("2454.582")

    def test_same_year_span(self):
        deposit = calculate_single_period_deposit(
            "e4", date(2020, 3, 1), date(2020, 9, 30), RetirementPlan.FERS
        )
        assert deposit == pytest.approx(Decimal("760.5"))

    def test_reversed_span_is_zero(self):
        """Reversed dates integrate over no years."""
        deposit = calculate_single_period_deposit(
            "e5", date(2012, 1, 1), date(2010, 1, 1), RetirementPlan.FERS
        )
        assert deposit == 0

    def test_unknown_grade_uses_default_pay(self):
        deposit = calculate_single_period_deposit(
            "gs-9", date(2010, 1, 1), date(2010, 12, 31), RetirementPlan.FERS
        )
        assert deposit == Decimal("35000") * Decimal("0.03")


class TestMultiPeriodDeposit:
    """Tests for the per-grade calculation path."""

    def test_sums_periods(self, grade_periods):
        """Each period uses its own grade."""
        total, breakdown = calculate_multi_period_deposit(grade_periods, RetirementPlan.FERS)

        # E-4: (25344 + 25908) * 3%, E-5: (30576 + 31128) * 3%
        assert breakdown[0].deposit == Decimal("1537.56")
        assert breakdown[1].deposit == Decimal("1851.12")
        assert total == Decimal("3388.68")

    def test_breakdown_years_use_elapsed_days(self, grade_periods):
        """Breakdown years are elapsed days / 365.25, not calendar counting."""
        _, breakdown = calculate_multi_period_deposit(grade_periods, RetirementPlan.FERS)

        assert breakdown[0].grade == "E-4"
        assert breakdown[0].years == Decimal(729) / Decimal("365.25")
        assert breakdown[1].years == Decimal(730) / Decimal("365.25")

    def test_single_period_list_matches_single_mode(self):
        """One period spanning the whole service equals the single-grade result."""
        start, end = date(2008, 4, 20), date(2014, 9, 2)
        single = calculate_single_period_deposit("o2", start, end, RetirementPlan.CSRS)
        total, _ = calculate_multi_period_deposit(
            [GradePeriod(grade="o2", from_date=start, to_date=end)],
            RetirementPlan.CSRS,
        )
        assert total == pytest.approx(single)

    def test_empty_list(self):
        total, breakdown = calculate_multi_period_deposit([], RetirementPlan.FERS)
        assert total == 0
        assert breakdown == []

    def test_period_deposit_matches_helper(self, grade_periods):
        total, _ = calculate_multi_period_deposit(grade_periods, RetirementPlan.FERS)
        expected = sum(
            calculate_period_deposit(p.grade, p.from_date, p.to_date, RetirementPlan.FERS)
            for p in grade_periods
        )
        assert total == expected


class TestCheckGradePeriods:
    """Tests for grade period ordering checks."""

    def test_well_formed(self, grade_periods):
        assert check_grade_periods(grade_periods) == []

    def test_reversed_period(self):
        periods = [GradePeriod(grade="e3", from_date=date(2012, 1, 1), to_date=date(2011, 1, 1))]
        problems = check_grade_periods(periods)
        assert len(problems) == 1
        assert "ends on or before" in problems[0]

    def test_overlapping_periods(self):
        periods = [
            GradePeriod(grade="e3", from_date=date(2010, 1, 1), to_date=date(2012, 6, 1)),
            GradePeriod(grade="e4", from_date=date(2012, 1, 1), to_date=date(2014, 1, 1)),
        ]
        problems = check_grade_periods(periods)
        assert problems == ["Grade period 2 (e4) starts before period 1 ends"]

    def test_out_of_order_periods(self):
        periods = [
            GradePeriod(grade="e5", from_date=date(2014, 1, 1), to_date=date(2016, 1, 1)),
            GradePeriod(grade="e4", from_date=date(2010, 1, 1), to_date=date(2014, 1, 1)),
        ]
        assert len(check_grade_periods(periods)) == 1

    def test_adjacent_periods_allowed(self):
        """A period may start on the day the previous one ends."""
        periods = [
            GradePeriod(grade="e3", from_date=date(2010, 1, 1), to_date=date(2012, 1, 1)),
            GradePeriod(grade="e4", from_date=date(2012, 1, 1), to_date=date(2014, 1, 1)),
        ]
        assert check_grade_periods(periods) == []

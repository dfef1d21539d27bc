"""Tests for the pay tables, base pay resolution and deposit rates."""

from decimal import Decimal

import pytest

from vetbenefits_core import pay_tables
from vetbenefits_core.exceptions import DataIntegrityError
from vetbenefits_core.models import GRADES, RetirementPlan
from vetbenefits_core.pay_tables import (
    DEFAULT_BASE_PAY,
    DEFAULT_INTEREST_RATE,
    DOD_PAY_TABLES,
    OPM_INTEREST_RATES,
    PAY_TABLE_YEARS,
    get_deposit_rate,
    get_interest_rate,
    get_military_base_pay,
    get_pay_table_version,
    normalize_grade,
    resolve_table_year,
    verify_pay_tables,
)


class TestPayTableData:
    """Tests for the embedded datasets."""

    def test_years_sorted(self):
        """Resolution relies on the year tuple being sorted."""
        assert list(PAY_TABLE_YEARS) == sorted(DOD_PAY_TABLES)
        assert PAY_TABLE_YEARS[0] == 1980
        assert PAY_TABLE_YEARS[-1] == 2024

    def test_every_year_has_every_grade(self):
        """Each year table should cover the closed grade set."""
        for year in PAY_TABLE_YEARS:
            assert set(DOD_PAY_TABLES[year]) == set(GRADES)

    def test_integrity_checks_pass(self):
        """The shipped datasets satisfy their integrity rules."""
        verify_pay_tables()

    def test_version(self):
        """Table version should be exposed."""
        assert get_pay_table_version() == "DFAS-2024"


class TestVerifyPayTables:
    """Tests for dataset integrity failures."""

    def test_negative_pay(self, monkeypatch):
        """Negative pay should be rejected."""
        monkeypatch.setitem(DOD_PAY_TABLES[2024], "e5", Decimal("-1"))

        with pytest.raises(DataIntegrityError) as exc_info:
            verify_pay_tables()

        assert exc_info.value.table == "DOD_PAY_TABLES"
        assert exc_info.value.key == "2024/e5"
        assert exc_info.value.recoverable is False

    def test_decreasing_pay(self, monkeypatch):
        """Pay falling from one embedded year to the next should be rejected."""
        monkeypatch.setitem(DOD_PAY_TABLES[2023], "e5", Decimal("50000"))

        with pytest.raises(DataIntegrityError, match="decreases in 2024"):
            verify_pay_tables()

    def test_missing_grade(self, monkeypatch):
        """A year table without every grade should be rejected."""
        monkeypatch.delitem(DOD_PAY_TABLES[2020], "o10")

        with pytest.raises(DataIntegrityError) as exc_info:
            verify_pay_tables()

        assert exc_info.value.actual == ["o10"]

    def test_interest_rate_out_of_range(self, monkeypatch):
        """Rates must be fractions below 1."""
        monkeypatch.setitem(OPM_INTEREST_RATES, 2024, Decimal("1.2"))

        with pytest.raises(DataIntegrityError, match="2024"):
            verify_pay_tables()


class TestNormalizeGrade:
    """Tests for grade normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("E-5", "e5"),
        ("e5", "e5"),
        ("O-10", "o10"),
        (" W-2 ", "w2"),
        ("o--6", "o6"),
    ])
    def test_normalize(self, raw, expected):
        """Case is folded and every hyphen removed."""
        assert normalize_grade(raw) == expected


class TestResolveTableYear:
    """Tests for floor lookup over the sparse year set."""

    def test_exact_year(self):
        assert resolve_table_year(2015) == 2015

    def test_sparse_gap_floors(self):
        """Years between sparse entries use the earlier table."""
        assert resolve_table_year(1993) == 1990
        assert resolve_table_year(1987) == 1985
        assert resolve_table_year(1994) == 1990

    def test_clamped_high(self):
        assert resolve_table_year(2031) == 2024

    def test_clamped_low(self):
        assert resolve_table_year(1970) == 1980


class TestGetMilitaryBasePay:
    """Tests for base pay resolution."""

    def test_exact_lookups(self):
        """Embedded values are returned unchanged."""
        assert get_military_base_pay("e5", 2024) == Decimal("41532")
        assert get_military_base_pay("o6", 2024) == Decimal("93648")
        assert get_military_base_pay("w3", 2010) == Decimal("43272")

    def test_hyphenated_grade(self):
        """UI-style grades resolve to the same entry."""
        assert get_military_base_pay("E-5", 2024) == get_military_base_pay("e5", 2024)

    def test_extrapolates_after_latest_year(self):
        """Future years inflate the latest table at 2.5% per year."""
        expected = get_military_base_pay("e5", 2024) * Decimal("1.025") ** 2
        assert get_military_base_pay("e5", 2026) == pytest.approx(expected)

    def test_extrapolates_before_earliest_year(self):
        """Years before 1980 deflate the earliest table."""
        expected = Decimal("5796") / Decimal("1.025")
        assert get_military_base_pay("e1", 1979) == pytest.approx(expected)

    def test_sparse_gap_not_inflated(self):
        """In-range gaps use the earlier table as is."""
        assert get_military_base_pay("e5", 1993) == DOD_PAY_TABLES[1990]["e5"]

    def test_unknown_grade_falls_back(self):
        """Unknown grades return the fixed default instead of failing."""
        assert get_military_base_pay("x9", 2020) == DEFAULT_BASE_PAY
        assert get_military_base_pay("", 2020) == Decimal("35000")

    def test_unknown_grade_out_of_range_not_inflated(self):
        """The fallback is flat even outside the embedded range."""
        assert get_military_base_pay("gs12", 2030) == Decimal("35000")

    def test_returns_decimal(self):
        """Callers combine the result with Decimal factors, not floats."""
        pay = get_military_base_pay("e5", 2024)

        assert isinstance(pay, Decimal)
        assert pay * Decimal("1.025") ** 2 == get_military_base_pay("e5", 2026)

    def test_float_year(self):
        """A whole-number float year resolves like the int year."""
        assert get_military_base_pay("e5", 2026.0) == get_military_base_pay("e5", 2026)
        assert get_military_base_pay("e5", 1993.0) == DOD_PAY_TABLES[1990]["e5"]


class TestGetDepositRate:
    """Tests for statutory deposit rates."""

    def test_fers_rates(self):
        assert get_deposit_rate(1999, "fers") == Decimal("0.0325")
        assert get_deposit_rate(2000, "fers") == Decimal("0.0340")
        assert get_deposit_rate(2001, "fers") == Decimal("0.03")
        assert get_deposit_rate(1985, RetirementPlan.FERS) == Decimal("0.03")

    def test_csrs_rates(self):
        assert get_deposit_rate(1999, "csrs") == Decimal("0.0725")
        assert get_deposit_rate(2000, "csrs") == Decimal("0.0740")
        assert get_deposit_rate(2010, RetirementPlan.CSRS) == Decimal("0.07")

    def test_rates_are_exact_decimals(self):
        """Rates compare equal to the float literal's decimal string."""
        rate = get_deposit_rate(1999, "fers")

        assert isinstance(rate, Decimal)
        assert rate == Decimal(str(0.0325))
        assert float(rate) == 0.0325


class TestGetInterestRate:
    """Tests for OPM composite rate lookup."""

    def test_known_year(self):
        assert get_interest_rate(2022) == Decimal("0.01375")

    def test_missing_year_defaults(self):
        assert get_interest_rate(2040) == DEFAULT_INTEREST_RATE
        assert get_interest_rate(1975) == Decimal("0.03")

    def test_all_rates_are_fractions(self):
        assert all(Decimal("0") <= rate < 1 for rate in pay_tables.OPM_INTEREST_RATES.values())

"""Tests for the engine exception hierarchy."""

import pytest

from vetbenefits_core.exceptions import (
    BenefitsEngineError,
    DataIntegrityError,
    ValidationError,
)


class TestBenefitsEngineError:
    """Tests for the base exception."""

    def test_defaults(self):
        error = BenefitsEngineError("boom")

        assert str(error) == "boom"
        assert error.details == {}
        assert error.recoverable is False

    def test_repr(self):
        error = BenefitsEngineError("boom", details={"code": 1})

        assert repr(error) == (
            "BenefitsEngineError(message='boom', details={'code': 1}, recoverable=False)"
        )


class TestValidationError:
    """Tests for ValidationError."""

    def test_fields_copied_to_details(self):
        error = ValidationError(
            "Grade periods overlap",
            field="grade_periods",
            value=2,
            constraint="Periods must be chronological and non-overlapping",
        )

        assert error.recoverable is True
        assert error.details == {
            "field": "grade_periods",
            "value": 2,
            "constraint": "Periods must be chronological and non-overlapping",
        }

    def test_caught_as_base(self):
        with pytest.raises(BenefitsEngineError):
            raise ValidationError("bad input", field="grade_periods")


class TestDataIntegrityError:
    """Tests for DataIntegrityError."""

    def test_not_recoverable(self):
        error = DataIntegrityError(
            "Base pay for e5 decreases in 2010",
            table="DOD_PAY_TABLES",
            key="2010/e5",
            expected=">= 29352",
            actual="29000",
        )

        assert error.recoverable is False
        assert error.details["table"] == "DOD_PAY_TABLES"
        assert error.details["key"] == "2010/e5"
        assert error.details["actual"] == "29000"

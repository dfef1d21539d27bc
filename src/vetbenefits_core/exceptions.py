"""Custom exceptions for the benefits calculation engine.

The calculators themselves degrade gracefully instead of raising: unknown
grades, out-of-range years and missing rates all fall back to documented
constants. Exceptions are reserved for the opt-in strict checks and for
integrity checks on the embedded datasets. All of them inherit from
BenefitsEngineError.

Example:
    try:
        result = calculator.calculate(data)
    except ValidationError as e:
        # Strict grade-period checking rejected the input
        show_form_errors(e.field, e.constraint)
    except BenefitsEngineError as e:
        logger.error("buyback_failed", error=str(e))
"""

from typing import Any, Optional


class BenefitsEngineError(Exception):
    """Base exception for all benefits engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise BenefitsEngineError("Something went wrong", details={"code": 500})
        BenefitsEngineError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize BenefitsEngineError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the caller can recover, for example by
                correcting input. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(BenefitsEngineError):
    """Error raised when calculation input fails a strict check.

    Only raised when strict grade-period checking is enabled in
    EngineSettings. By default the same problems are reported as
    result warnings.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Grade periods overlap",
        ...     field="grade_periods",
        ...     value=1,
        ...     constraint="Periods must be chronological and non-overlapping",
        ... )
        ValidationError: Grade periods overlap
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class DataIntegrityError(BenefitsEngineError):
    """Error raised when an embedded dataset breaks its integrity rules.

    Integrity problems ship with the deployed artifact, so they are never
    recoverable at runtime.

    Attributes:
        table: Name of the dataset (e.g. "DOD_PAY_TABLES").
        key: The year or year/grade key that failed.
        expected: Description of the expected value.
        actual: The value found.

    Example:
        >>> raise DataIntegrityError(
        ...     "Base pay for e5 decreases in 2010",
        ...     table="DOD_PAY_TABLES",
        ...     key="2010/e5",
        ...     expected=">= 29352",
        ...     actual="29000",
        ... )
        DataIntegrityError: Base pay for e5 decreases in 2010
    """

    def __init__(
        self,
        message: str,
        *,
        table: Optional[str] = None,
        key: Optional[Any] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize DataIntegrityError.

        Args:
            message: Human-readable error description.
            table: Name of the dataset that failed the check.
            key: The year or year/grade key that failed.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.table = table
        self.key = key
        self.expected = expected
        self.actual = actual

        if table:
            self.details["table"] = table
        if key is not None:
            self.details["key"] = key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "BenefitsEngineError",
    "ValidationError",
    "DataIntegrityError",
]

"""
Field Validator
===============

Checks that caller-specified fields are populated in every row.

Violations are returned as data inside ValidationResult; nothing here
raises. Whether incomplete data is fatal is the caller's decision.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from insight_ingest.schemas.domain import ValidationIssue, ValidationResult
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_DATA_WARNING = "Data is empty"
NOT_A_SEQUENCE_MESSAGE = "Data must be an array"


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


class FieldValidator:
    """
    Required-field validator.

    Usage:
        result = FieldValidator().validate(rows, ["date", "amount"])
        if not result.is_valid:
            for issue in result.errors:
                print(issue.row, issue.field, issue.message)
    """

    def validate(self, data: Any, required_fields: Sequence[str]) -> ValidationResult:
        """
        Validate rows against required field names.

        Args:
            data: Normalized rows (expected to be a list or tuple)
            required_fields: Field names that must be non-null and non-empty

        Returns:
            ValidationResult with 1-based row numbers in errors
        """
        if not isinstance(data, (list, tuple)):
            logger.warning("Validation input is not a sequence", input_type=type(data).__name__)
            return ValidationResult(
                errors=[
                    ValidationIssue(row=0, field="data", message=NOT_A_SEQUENCE_MESSAGE)
                ],
            )

        errors: list[ValidationIssue] = []
        warnings: list[str] = []

        if not data:
            warnings.append(EMPTY_DATA_WARNING)

        for row_number, row in enumerate(data, start=1):
            for field in required_fields:
                value = row.get(field) if isinstance(row, Mapping) else None
                if _is_missing(value):
                    errors.append(
                        ValidationIssue(
                            row=row_number,
                            field=field,
                            message=f"Required field '{field}' is missing or empty",
                        )
                    )

        result = ValidationResult(errors=errors, warnings=warnings)
        logger.debug(
            "Validation complete",
            row_count=len(data),
            required_fields=list(required_fields),
            error_count=len(errors),
            is_valid=result.is_valid,
        )
        return result

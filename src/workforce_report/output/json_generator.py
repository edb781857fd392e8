"""JSON output generator with schema validation.

This module converts a report document into a JSON-serialisable payload
and validates it against the fixed report schema.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from jsonschema import Draft7Validator

from workforce_report.report_document import ReportDocument

logger = logging.getLogger(__name__)

_COUNT = {"type": "integer", "minimum": 0}

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "WorkforceReport",
    "type": "object",
    "required": [
        "type",
        "title",
        "file_name",
        "report_month",
        "report_year",
        "executive_summary",
        "sections",
        "prepared_by",
        "is_comparison",
    ],
    "properties": {
        "type": {"enum": ["audit", "vacation"]},
        "title": {"type": "string"},
        "file_name": {"type": "string"},
        "report_month": {"type": "string"},
        "report_year": {"type": "string", "pattern": "^[0-9]{4}$"},
        "executive_summary": {"type": "string"},
        "prepared_by": {"type": "string", "minLength": 1},
        "is_comparison": {"type": "boolean"},
        "sections": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["title", "original_sheet_name", "headers", "rows"],
                "properties": {
                    "title": {"type": "string"},
                    "original_sheet_name": {"type": "string"},
                    "headers": {"type": "array", "items": {"type": "string"}},
                    "rows": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "additionalProperties": {
                                "type": ["string", "number", "boolean", "null"]
                            },
                        },
                    },
                },
            },
        },
        "stats": {
            "type": ["object", "null"],
            "required": [
                "total_employees",
                "job_roles_count",
                "joiners_count",
                "leavers_count",
                "transfers_count",
            ],
            "properties": {
                "total_employees": _COUNT,
                "job_roles_count": _COUNT,
                "joiners_count": _COUNT,
                "leavers_count": _COUNT,
                "transfers_count": _COUNT,
            },
        },
        "vacation_stats": {
            "type": ["object", "null"],
            "required": [
                "total_unique_employees",
                "avg_monthly_participation",
                "data_integrity_score",
                "monthly_participation",
                "contract_base",
            ],
            "properties": {
                "total_unique_employees": _COUNT,
                "avg_monthly_participation": {
                    "type": "string",
                    "pattern": "^[0-9]+ Staff/Month$",
                },
                "data_integrity_score": {"type": "string"},
                "contract_base": {"type": "integer", "minimum": 1},
                "monthly_participation": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["month", "count", "percentage"],
                        "properties": {
                            "month": {"type": "string"},
                            "count": {"type": "integer", "minimum": 1},
                            "percentage": {
                                "type": "string",
                                "pattern": "^[0-9]+\\.[0-9]%$",
                            },
                        },
                    },
                },
            },
        },
    },
}


@dataclass
class ValidationResult:
    """Result of JSON schema validation."""

    is_valid: bool
    """Whether the payload is valid against the schema."""

    errors: list[str] = field(default_factory=list)
    """List of validation error messages."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with validation result information.
        """
        return {"is_valid": self.is_valid, "errors": self.errors}


@dataclass
class JsonOutputResult:
    """Result of JSON output generation."""

    data: dict[str, Any]
    """The serialisable report payload."""

    validation_result: ValidationResult
    """Validation result for the payload."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with JSON output result information.
        """
        return {
            "data": self.data,
            "validation": self.validation_result.to_dict(),
        }


def serialize_cell(value: Any) -> Any:
    """Convert a raw cell into a JSON-compatible scalar.

    Dates and times become ISO 8601 strings; any other non-scalar is
    stringified.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


class JsonGenerator:
    """Generates the validated JSON payload of a report document."""

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        """Initialize the JSON generator.

        Args:
            schema: JSON schema to validate against (the report schema if None).
        """
        self.schema = schema or REPORT_SCHEMA
        self._validator = Draft7Validator(self.schema)

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate a payload against the schema.

        Args:
            data: Payload to validate.

        Returns:
            ValidationResult with validation status and errors.
        """
        errors: list[str] = []
        for error in self._validator.iter_errors(data):
            path = (
                ".".join(str(p) for p in error.absolute_path)
                if error.absolute_path
                else "root"
            )
            errors.append(f"{path}: {error.message}")

        return ValidationResult(is_valid=not errors, errors=errors)

    def generate(self, document: ReportDocument) -> JsonOutputResult:
        """Generate the JSON payload for a report document.

        Args:
            document: Report to serialise.

        Returns:
            JsonOutputResult with the payload and its validation result.
        """
        data = self._prepare_data(document)
        validation_result = self.validate(data)

        if not validation_result.is_valid:
            logger.warning(
                f"Report payload failed validation: "
                f"{len(validation_result.errors)} errors"
            )

        return JsonOutputResult(data=data, validation_result=validation_result)

    def _prepare_data(self, document: ReportDocument) -> dict[str, Any]:
        """Build the payload with every cell made serialisable.

        Args:
            document: Report to serialise.

        Returns:
            Payload dictionary.
        """
        data = document.to_dict()
        data["title"] = document.title
        for section in data["sections"]:
            section["rows"] = [
                {key: serialize_cell(value) for key, value in row.items()}
                for row in section["rows"]
            ]
        return data

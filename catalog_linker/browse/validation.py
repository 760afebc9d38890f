"""
Output Validation — schema conformance of browse documents.

Every document leaving the browse layer is checked with jsonschema before
it is handed to a rendering layer. Failures are collected (all of them,
not just the first) and surfaced as OutputValidationError by the pipeline.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from jsonschema import Draft202012Validator

from catalog_linker.browse.metrics import record_output_validation_error

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Schema check of one browse document ("search" / "detail")."""

    document: str
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class OutputValidationError(Exception):
    """Raised when a built document does not conform to its schema."""

    def __init__(self, document: str, errors: List[str]) -> None:
        self.document = document
        self.errors = errors
        super().__init__(f"Output validation failed for '{document}': {errors}")


def validate_document(data: dict, schema: dict, document: str = "document") -> ValidationResult:
    """
    Validate ``data`` against ``schema``.

    Args:
        data: Built output document.
        schema: JSON schema (SEARCH_OUTPUT_SCHEMA / DETAIL_OUTPUT_SCHEMA).
        document: Name used in logs and metrics.

    Returns:
        ValidationResult with every schema error as "path: message".
    """
    validator = Draft202012Validator(schema)
    errors: List[str] = []

    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{path}: {error.message}")

    warnings: List[str] = []
    if document == "search" and not errors and data.get("query") and data.get("matched") == 0:
        warnings.append(f"query '{data['query']}' matched no records")

    if errors:
        record_output_validation_error(document)
        logger.error("%s document failed validation: %d errors", document, len(errors))
        return ValidationResult(document, valid=False, errors=errors, warnings=warnings)

    return ValidationResult(document, valid=True, warnings=warnings)


def ensure_valid(data: dict, schema: dict, document: str) -> dict:
    """Validate and return ``data``; raise OutputValidationError otherwise."""
    result = validate_document(data, schema, document)
    for warning in result.warnings:
        logger.info(warning)
    if not result.valid:
        raise OutputValidationError(document, result.errors)
    return data

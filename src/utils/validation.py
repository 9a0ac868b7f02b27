"""
Schema validation utilities for learner profiles, learning paths and lessons.

Provides JSON Schema validation with clear error messages plus
record-specific consistency checks that a schema cannot express:
- Learning path cursor bounds and completed-lesson membership
- Estimated duration matching the listed lessons
- Removal of unknown keys on request (auto-repair)
"""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

from ..config import config


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )

    def raise_for_errors(self) -> None:
        """Raise ValidationError carrying every message if invalid."""
        if not self.valid:
            raise ValidationError("\n".join(self.errors))


class SchemaValidator:
    """
    JSON Schema validator with auto-repair capabilities.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if result:
            print("Valid!")
        else:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, strip unknown keys and re-validate

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        if errors:
            if auto_repair and isinstance(data, dict):
                repaired = deepcopy(data)
                repairs: list[str] = []
                self._strip_additional_props(repaired, self.schema, repairs)
                result = self.validate(repaired, auto_repair=False)
                result.repairs = repairs
                return result
            return ValidationResult(valid=False, errors=errors, data=data)

        return ValidationResult(valid=True, errors=[], data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _strip_additional_props(
        self, obj: Any, schema: dict, repairs: list[str], path: str = "root"
    ) -> None:
        """
        Recursively remove keys not allowed by schema (additionalProperties: false).
        """
        if not isinstance(schema, dict):
            return

        if isinstance(obj, dict) and "properties" in schema:
            allowed = set(schema["properties"].keys())
            if schema.get("additionalProperties") is False:
                for key in list(obj.keys()):
                    if key not in allowed:
                        del obj[key]
                        repairs.append(f"Removed unknown key '{path}.{key}'")

            for key, subschema in schema["properties"].items():
                if key in obj:
                    self._strip_additional_props(obj[key], subschema, repairs, f"{path}.{key}")

        if isinstance(obj, list) and "items" in schema:
            for i, item in enumerate(obj):
                self._strip_additional_props(item, schema["items"], repairs, f"{path}[{i}]")


class LearnerProfileValidator(SchemaValidator):
    """Validator for learner profile documents."""

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.learner_profile_schema)


class LearningPathValidator(SchemaValidator):
    """
    Validator for learning path documents with path-specific checks.

    Features:
    - JSON Schema validation
    - Cursor never exceeds the number of lessons
    - Completed lessons belong to the path
    - Estimated duration equals the sum of lesson durations
    """

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.learning_path_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        result = super().validate(data, auto_repair=auto_repair)
        if not result.valid:
            return result

        path = result.data
        lessons = path["lessons"]
        lesson_ids = [lesson["id"] for lesson in lessons]
        path_errors = []

        # Check 1: cursor bounds
        if path["nextLessonIndex"] > len(lessons):
            path_errors.append(
                f"nextLessonIndex {path['nextLessonIndex']} exceeds path length {len(lessons)}"
            )

        # Check 2: completed lessons must be in the path
        unknown = [
            lesson_id
            for lesson_id in path.get("completedLessons", [])
            if lesson_id not in lesson_ids
        ]
        if unknown:
            path_errors.append(f"Completed lessons not in path: {unknown}")

        # Check 3: duplicate lesson ids break cursor lookups
        if len(set(lesson_ids)) != len(lesson_ids):
            path_errors.append(f"Duplicate lesson ids in path: {lesson_ids}")

        # Check 4: estimated duration
        total = sum(lesson["durationMinutes"] for lesson in lessons)
        if path["estimatedDuration"] != total:
            path_errors.append(
                f"estimatedDuration mismatch: expected {total}, got {path['estimatedDuration']}"
            )

        return ValidationResult(
            valid=not path_errors,
            errors=path_errors,
            data=path,
            repairs=result.repairs,
        )


class LessonDocumentValidator(SchemaValidator):
    """Validator for stored lesson documents (structural checks only)."""

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.lesson_document_schema)


_validators: dict[type, SchemaValidator] = {}


def _cached(validator_cls: type) -> SchemaValidator:
    """Get a cached validator instance (schemas are read once)."""
    if validator_cls not in _validators:
        _validators[validator_cls] = validator_cls()
    return _validators[validator_cls]


# Convenience functions for quick validation
def validate_learner_profile(data: dict, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of a learner profile document.

    Example:
        result = validate_learner_profile(profile.to_dict())
        if not result:
            print("Errors:", result.errors)
    """
    return _cached(LearnerProfileValidator).validate(data, auto_repair=auto_repair)


def validate_learning_path(data: dict, auto_repair: bool = False) -> ValidationResult:
    """Quick validation of a learning path document."""
    return _cached(LearningPathValidator).validate(data, auto_repair=auto_repair)


def validate_lesson_document(data: Any) -> ValidationResult:
    """Quick structural validation of a lesson document."""
    return _cached(LessonDocumentValidator).validate(data)

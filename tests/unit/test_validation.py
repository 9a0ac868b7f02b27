"""
Unit tests for schema validation utilities.

Tests:
- ValidationResult behaviour
- Auto-repair of unknown keys
- Learner profile, learning path and lesson document validators
"""

import pytest
from jsonschema import ValidationError

from src.engine.path_synthesizer import synthesize_path
from src.models.learner_profile import LearnerProfile
from src.utils.validation import (
    LearningPathValidator,
    SchemaValidator,
    ValidationResult,
    validate_learner_profile,
    validate_learning_path,
    validate_lesson_document,
)


class TestValidationResult:
    """Test suite for ValidationResult."""

    def test_valid_result(self):
        result = ValidationResult(valid=True, errors=[])
        assert result
        assert "passed" in str(result)
        result.raise_for_errors()

    def test_invalid_result(self):
        result = ValidationResult(valid=False, errors=["first", "second"])
        assert not result
        assert "2 error(s)" in str(result)
        with pytest.raises(ValidationError, match="first"):
            result.raise_for_errors()


class TestSchemaValidator:
    """Test suite for the generic validator."""

    def test_custom_schema(self, temp_schema_file):
        validator = SchemaValidator(temp_schema_file)
        assert validator.validate({"test": "ok"}).valid
        result = validator.validate({"test": 1})
        assert not result.valid
        assert "At 'test'" in result.errors[0]


class TestLearnerProfileValidation:
    """Test suite for learner profile documents."""

    def test_valid_profile(self):
        assert validate_learner_profile(LearnerProfile().to_dict()).valid

    def test_missing_required_field(self):
        data = LearnerProfile().to_dict()
        del data["pace"]
        result = validate_learner_profile(data)
        assert not result.valid
        assert any("pace" in error for error in result.errors)

    def test_duplicate_tags(self):
        data = LearnerProfile().to_dict()
        data["goals"] = ["content_creation", "content_creation"]
        assert not validate_learner_profile(data).valid

    def test_auto_repair_strips_unknown_keys(self):
        data = LearnerProfile().to_dict()
        data["legacyScore"] = 12

        result = validate_learner_profile(data, auto_repair=True)
        assert result.valid
        assert "legacyScore" not in result.data
        assert result.repairs == ["Removed unknown key 'root.legacyScore'"]
        assert "legacyScore" in data


class TestLearningPathValidation:
    """Test suite for learning path documents."""

    @pytest.fixture
    def path_data(self, beginner_profile):
        return synthesize_path(beginner_profile).to_dict()

    def test_valid_path(self, path_data):
        assert validate_learning_path(path_data).valid

    def test_empty_path(self, path_data):
        path_data["lessons"] = []
        path_data["estimatedDuration"] = 0
        assert not validate_learning_path(path_data).valid

    def test_cursor_beyond_path(self, path_data):
        path_data["nextLessonIndex"] = 6
        result = LearningPathValidator().validate(path_data)
        assert not result.valid
        assert "exceeds path length" in result.errors[0]

    def test_duplicate_lesson_ids(self, path_data):
        duplicate = dict(path_data["lessons"][0])
        path_data["lessons"].append(duplicate)
        path_data["estimatedDuration"] += duplicate["durationMinutes"]
        result = validate_learning_path(path_data)
        assert not result.valid
        assert "Duplicate lesson ids" in result.errors[0]

    def test_unknown_difficulty(self, path_data):
        path_data["lessons"][0]["difficulty"] = "expert"
        assert not validate_learning_path(path_data).valid


class TestLessonDocumentValidation:
    """Test suite for lesson documents."""

    def test_tiered_lesson(self, tiered_lesson):
        assert validate_lesson_document(tiered_lesson).valid

    def test_plain_lesson(self, plain_lesson):
        assert validate_lesson_document(plain_lesson).valid

    def test_extra_fields_are_allowed(self, plain_lesson):
        plain_lesson["moduleId"] = "m1"
        plain_lesson["createdAt"] = "2024-01-01T00:00:00+00:00"
        assert validate_lesson_document(plain_lesson).valid

    def test_not_an_object(self):
        assert not validate_lesson_document(["lesson"]).valid
        assert not validate_lesson_document(None).valid

    def test_id_is_required(self, plain_lesson):
        del plain_lesson["id"]
        assert not validate_lesson_document(plain_lesson).valid
        assert not validate_lesson_document({}).valid
        assert not validate_lesson_document({"id": ""}).valid

    @pytest.mark.parametrize("rewards", [40, None, {"beginner": 10}])
    def test_reward_shapes(self, plain_lesson, rewards):
        plain_lesson["xpRewards"] = rewards
        assert validate_lesson_document(plain_lesson).valid

    def test_bad_reward_shape(self, plain_lesson):
        plain_lesson["xpRewards"] = "lots"
        assert not validate_lesson_document(plain_lesson).valid

    def test_variant_must_be_object(self, plain_lesson):
        plain_lesson["content"] = "flat text"
        assert not validate_lesson_document(plain_lesson).valid

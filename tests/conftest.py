"""
Shared pytest fixtures and configuration for the adaptive learning-path tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to path so ``src`` imports resolve without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.models.learner_profile import LearnerProfile
from src.utils.document_store import InMemoryDocumentStore


@pytest.fixture
def beginner_profile():
    """
    Fixture providing a slow beginner with no recognised goals.

    Returns:
        LearnerProfile: Produces the five-lesson path with a review lesson
    """
    return LearnerProfile(skill_level="beginner", pace="slow", session_length="medium")


@pytest.fixture
def tiered_lesson():
    """
    Fixture providing a lesson document with tier variants.

    Sandbox has no advanced variant and assessment only an intermediate
    one, so fallbacks can be exercised.

    Returns:
        dict: Raw lesson document as stored in the catalog
    """
    return {
        "id": "prompt-basics",
        "title": "Prompt Basics",
        "order": 1,
        "coreConcept": "Prompts steer what a model produces",
        "content": {
            "beginner": {"introduction": "A prompt is what you type", "keyPoints": ["Be clear"]},
            "intermediate": {"introduction": "Prompts carry role and context", "keyPoints": []},
            "advanced": {"introduction": "Prompt structure and few-shot design", "keyPoints": []},
        },
        "sandbox": {
            "type": "prompt_builder",
            "required": True,
            "beginner": {
                "instructions": "Fill in the blanks",
                "templates": ["Explain {topic} simply"],
            },
            "intermediate": {
                "instructions": "Build a prompt with a role",
                "framework": {"parts": ["role", "task", "format"]},
                "hints": ["Start with the role"],
            },
        },
        "assessment": {
            "intermediate": {"questions": [{"id": "q1"}], "passingScore": 75},
        },
        "xpRewards": {"beginner": 30, "intermediate": 50, "advanced": 80},
        "estimatedTime": {"intermediate": 20},
    }


@pytest.fixture
def plain_lesson():
    """
    Fixture providing a lesson authored without tier variants.

    Returns:
        dict: Raw lesson document with only top-level metadata
    """
    return {
        "id": "ai-welcome",
        "title": "Welcome to AI Learning",
        "order": 1,
        "coreConcept": "AI learns patterns from data",
    }


@pytest.fixture
def perfect_result():
    """Completion record that scores 1.0."""
    return {
        "assessmentScore": 1.0,
        "sandboxCompleted": True,
        "timeSpent": 10,
        "estimatedTime": 15,
    }


@pytest.fixture
def store():
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def temp_schema_file(tmp_path):
    """
    Fixture providing a temporary schema file for testing.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        Path: Path to temporary schema file
    """
    import json

    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"test": {"type": "string"}},
        "required": ["test"],
    }

    schema_file = tmp_path / "test.schema.json"
    with open(schema_file, "w") as f:
        json.dump(schema, f)

    return schema_file


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

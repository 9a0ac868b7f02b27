"""
Utility modules for the adaptive learning-path engine.

This module contains:
- validation: JSON Schema validation for profiles, paths and lessons
- document_store: Async document store (in-memory and JSON files)
- log: Logger setup
"""

from .validation import (
    SchemaValidator,
    ValidationResult,
    LearnerProfileValidator,
    LearningPathValidator,
    LessonDocumentValidator,
    validate_learner_profile,
    validate_learning_path,
    validate_lesson_document,
)
from .document_store import (
    ArrayUnion,
    DocumentNotFoundError,
    DocumentStore,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    LessonNotFoundError,
    WriteBatch,
)
from .log import configure_logging, get_logger

__all__ = [
    # Validation
    "SchemaValidator",
    "ValidationResult",
    "LearnerProfileValidator",
    "LearningPathValidator",
    "LessonDocumentValidator",
    "validate_learner_profile",
    "validate_learning_path",
    "validate_lesson_document",
    # Document store
    "ArrayUnion",
    "DocumentNotFoundError",
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "LessonNotFoundError",
    "WriteBatch",
    # Logging
    "configure_logging",
    "get_logger",
]

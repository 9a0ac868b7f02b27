"""
Configuration management for the adaptive learning-path engine.

This module centralizes all configuration settings:
- Thresholds and weights loaded with sensible defaults
- Environment overrides for deployment-specific values
- Single source of truth for paths and schemas
- Validation that reports every problem at once
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv()


@dataclass
class AdaptationConfig:
    """Difficulty adaptation and performance scoring."""

    # Difficulty resolver thresholds
    promote_threshold: float = 0.9  # >= 90% → move up a tier
    demote_threshold: float = 0.5  # < 50% → move down a tier

    # Performance evaluator weights (must sum to 1)
    assessment_weight: float = 0.6
    sandbox_weight: float = 0.3
    time_weight: float = 0.1

    # Missing telemetry is neutral, not failure
    neutral_performance: float = 0.5
    neutral_time_score: float = 0.5

    # Content adapter defaults
    default_tier: str = "intermediate"
    default_xp_reward: int = 50
    default_estimated_time: int = 15
    default_passing_score: int = 70


@dataclass
class SynthesisConfig:
    """Learning path synthesis."""

    fast_pace_max_lessons: int = 6
    review_insert_index: int = 2
    short_session_max_minutes: int = 25


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("LEARNPATH_DATA_DIR", Path(__file__).parent.parent / "data")
        )
    )

    # Computed from the roots above
    store_dir: Path = field(init=False)
    schemas_dir: Path = field(init=False)
    learner_profile_schema: Path = field(init=False)
    learning_path_schema: Path = field(init=False)
    lesson_document_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.data_dir = Path(self.data_dir)
        self.store_dir = self.data_dir / "store"
        self.schemas_dir = self.project_root / "schemas"
        self.learner_profile_schema = self.schemas_dir / "learner_profile.schema.json"
        self.learning_path_schema = self.schemas_dir / "learning_path.schema.json"
        self.lesson_document_schema = self.schemas_dir / "lesson_document.schema.json"

    def prepare_filesystem(self):
        """
        Create directories if they don't exist.

        Separated from __post_init__ to avoid side-effects on import.
        """
        for directory in [self.data_dir, self.store_dir]:
            directory.mkdir(parents=True, exist_ok=True)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        threshold = config.adaptation.promote_threshold
        cap = config.synthesis.fast_pace_max_lessons
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.adaptation = AdaptationConfig()
            cls._instance.synthesis = SynthesisConfig()
            cls._instance.logging = LoggingConfig()
        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        adaptation = self.adaptation

        if not (0 <= adaptation.demote_threshold <= 1):
            errors.append(
                f"demote_threshold must be in [0, 1], got {adaptation.demote_threshold}"
            )

        if not (0 <= adaptation.promote_threshold <= 1):
            errors.append(
                f"promote_threshold must be in [0, 1], got {adaptation.promote_threshold}"
            )

        if adaptation.demote_threshold >= adaptation.promote_threshold:
            errors.append(
                f"demote_threshold ({adaptation.demote_threshold}) must be < "
                f"promote_threshold ({adaptation.promote_threshold})"
            )

        weight_sum = (
            adaptation.assessment_weight
            + adaptation.sandbox_weight
            + adaptation.time_weight
        )
        if abs(weight_sum - 1.0) > 1e-9:
            errors.append(f"performance weights must sum to 1, got {weight_sum}")

        if self.synthesis.fast_pace_max_lessons < 1:
            errors.append(
                f"fast_pace_max_lessons must be >= 1, got {self.synthesis.fast_pace_max_lessons}"
            )

        if self.synthesis.short_session_max_minutes <= 0:
            errors.append(
                "short_session_max_minutes must be > 0, "
                f"got {self.synthesis.short_session_max_minutes}"
            )

        for schema in [
            self.paths.learner_profile_schema,
            self.paths.learning_path_schema,
            self.paths.lesson_document_schema,
        ]:
            if not schema.exists():
                errors.append(f"Schema not found: {schema}")

        if self.logging.log_level.upper() not in {
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        }:
            errors.append(f"Unknown log level: {self.logging.log_level}")

        return errors


# Global config instance
config = Config()

"""
Unit tests for configuration system.

Tests:
- Config loading and initialization
- Path configuration
- Config validation
- Logging setup
"""

import logging

import pytest

from src.config import Config, config
from src.utils.log import configure_logging, get_logger


class TestConfig:
    """Test suite for Config class."""

    def test_config_singleton(self):
        """Test that Config implements singleton pattern."""
        config1 = Config()
        config2 = Config()
        assert config1 is config2, "Config should be a singleton"
        assert config1 is config

    def test_config_initialization(self):
        """Test that config initializes with expected values."""
        assert config.adaptation.promote_threshold == 0.9
        assert config.adaptation.demote_threshold == 0.5
        assert config.adaptation.default_xp_reward == 50
        assert config.adaptation.default_estimated_time == 15
        assert config.synthesis.fast_pace_max_lessons == 6
        assert config.synthesis.short_session_max_minutes == 25

    def test_weights_sum_to_one(self):
        adaptation = config.adaptation
        total = adaptation.assessment_weight + adaptation.sandbox_weight + adaptation.time_weight
        assert total == pytest.approx(1.0)

    def test_paths_configured(self):
        """Test that all required paths are configured."""
        assert config.paths.project_root.is_absolute()
        assert config.paths.store_dir == config.paths.data_dir / "store"
        assert config.paths.learner_profile_schema.exists()
        assert config.paths.learning_path_schema.exists()
        assert config.paths.lesson_document_schema.exists()

    def test_config_validation_with_valid_config(self, monkeypatch):
        """Test that valid config passes validation."""
        monkeypatch.setattr(config.logging, "log_level", "INFO")
        assert config.validate() == []

    def test_config_validation_catches_inverted_thresholds(self, monkeypatch):
        monkeypatch.setattr(config.adaptation, "demote_threshold", 0.95)
        errors = config.validate()
        assert any("must be <" in error for error in errors)

    def test_config_validation_catches_bad_weights(self, monkeypatch):
        monkeypatch.setattr(config.adaptation, "time_weight", 0.5)
        errors = config.validate()
        assert any("weights must sum to 1" in error for error in errors)

    def test_config_validation_catches_unknown_log_level(self, monkeypatch):
        monkeypatch.setattr(config.logging, "log_level", "CHATTY")
        assert any("Unknown log level" in error for error in config.validate())

    def test_prepare_filesystem(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config.paths, "data_dir", tmp_path / "data")
        monkeypatch.setattr(config.paths, "store_dir", tmp_path / "data" / "store")
        config.prepare_fs()
        assert (tmp_path / "data" / "store").is_dir()


class TestLogging:
    """Test suite for logging helpers."""

    def test_get_logger(self):
        logger = get_logger("src.engine.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "src.engine.test"

    def test_configure_logging_level(self):
        configure_logging(level="debug", force=True)
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(level="warning", force=True)
        assert logging.getLogger().level == logging.WARNING

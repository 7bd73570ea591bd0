"""Tests for config loading."""

import pytest

from job_tailor.config import AppConfig, LLMConfig, StoreConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.analysis_model == "claude-haiku-4-5-20251001"
        assert config.llm.max_attempts == 1
        assert config.payment.delay_seconds == 2.0
        assert config.export.header_threshold == 200

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.llm.tailoring_model == "claude-sonnet-4-5-20250929"
        assert config.upload.max_mb == 5

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "llm:\n  analysis_model: test-model\npayment:\n  delay_seconds: 0.5\n"
        )
        config = load_config(yaml_path)
        assert config.llm.analysis_model == "test-model"
        assert config.payment.delay_seconds == 0.5
        # Defaults for unspecified
        assert config.payment.price_label == "$5.00"
        assert config.usage.enabled is True

    def test_store_resolved_path(self):
        store = StoreConfig(db_path="~/test.db")
        assert "~" not in str(store.resolved_db_path)

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.analysis_model = "changed"


class TestConfigValidation:
    def test_invalid_timeout(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_max_attempts(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  max_attempts: 9\n")
        with pytest.raises(ValueError, match="max_attempts"):
            load_config(yaml)

    def test_negative_payment_delay(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("payment:\n  delay_seconds: -1\n")
        with pytest.raises(ValueError, match="delay_seconds"):
            load_config(yaml)

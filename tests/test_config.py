"""
Tests for analysis configuration.
"""

import pytest

from complexity_lens.config import ENV_BASE, ENV_THRESHOLD, ENV_VARIANT, AnalysisConfig
from complexity_lens.types import ConfigurationError, ErrorCode, Variant


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.variant is Variant.CLASSIC
        assert config.base_complexity == 1
        assert config.complexity_threshold == 10

    def test_variant_string_is_coerced(self):
        assert AnalysisConfig(variant="modified").variant is Variant.MODIFIED


class TestFromEnv:
    """Tests for AnalysisConfig.from_env()."""

    def test_empty_env(self):
        assert AnalysisConfig.from_env({}) == AnalysisConfig()

    def test_reads_values(self):
        config = AnalysisConfig.from_env({ENV_VARIANT: "MODIFIED", ENV_THRESHOLD: "15", ENV_BASE: "2"})
        assert config.variant is Variant.MODIFIED
        assert config.complexity_threshold == 15
        assert config.base_complexity == 2

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_THRESHOLD, "12")
        monkeypatch.delenv(ENV_VARIANT, raising=False)
        monkeypatch.delenv(ENV_BASE, raising=False)
        assert AnalysisConfig.from_env().complexity_threshold == 12

    def test_invalid_variant(self):
        with pytest.raises(ConfigurationError, match="must be 'classic' or 'modified'") as exc_info:
            AnalysisConfig.from_env({ENV_VARIANT: "strict"})
        assert exc_info.value.code == ErrorCode.INVALID_CONFIG
        assert exc_info.value.recovery_actions

    def test_non_integer(self):
        with pytest.raises(ConfigurationError, match="must be an integer") as exc_info:
            AnalysisConfig.from_env({ENV_THRESHOLD: "ten"})
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_non_positive(self):
        with pytest.raises(ConfigurationError, match=">= 1"):
            AnalysisConfig.from_env({ENV_BASE: "0"})

    def test_blank_values_use_defaults(self):
        assert AnalysisConfig.from_env({ENV_THRESHOLD: "  ", ENV_VARIANT: ""}) == AnalysisConfig()

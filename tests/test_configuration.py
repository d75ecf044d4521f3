# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Tests for Configuration class."""

import json

import pytest

from pse_flash_analysis.configuration import (
    DEFAULT_COMPLIANCE_THRESHOLDS,
    Configuration,
    FlashParams,
    PeriodParams,
    RiskParams,
)


class TestConfiguration:
    """Test Configuration class."""

    def test_default_values(self):
        """Test default configuration values."""
        config = Configuration()

        # Flash detection defaults
        assert config.min_flash_intensity == 0.1
        assert config.dangerous_flash_intensity == 0.8
        assert config.flash_lookahead_frames == 5
        assert config.flash_merge_tolerance == 0.1

        # Red flash defaults
        assert config.red_luminance_weight == 1.5
        assert config.red_saturation_threshold == 0.6
        assert config.red_lookahead_frames == 3
        assert config.red_merge_tolerance == 0.05

        # Rate ceilings
        assert config.max_safe_flash_rate == 3.0
        assert config.critical_flash_rate == 5.0
        assert config.max_safe_red_flash_rate == 2.0

        assert config.analysis_window_size == 1.0
        assert config.default_fps == 25.0
        assert config.risk_level_cutoffs == (20.0, 40.0, 60.0, 80.0)

    def test_compliance_thresholds_are_per_instance(self):
        """Test that compliance thresholds are not shared between instances."""
        a = Configuration()
        b = Configuration()
        a.compliance_thresholds["ITC"] = 10.0

        assert b.compliance_thresholds["ITC"] == DEFAULT_COMPLIANCE_THRESHOLDS["ITC"]

    def test_get_luminance_params(self):
        """Test general flash parameters."""
        params = Configuration().get_luminance_params()

        assert isinstance(params, FlashParams)
        assert params.flash_threshold == 0.1
        assert params.lookahead_frames == 5
        assert params.merge_tolerance == 0.1
        assert params.luminance_weight == 1.0
        assert params.saturation_threshold is None

    def test_get_red_flash_params(self):
        """Test red parameters are stricter than general ones."""
        config = Configuration()
        red = config.get_red_flash_params()
        general = config.get_luminance_params()

        assert red.flash_threshold == pytest.approx(0.07)
        assert red.flash_threshold < general.flash_threshold
        assert red.merge_tolerance < general.merge_tolerance
        assert red.luminance_weight == 1.5
        assert red.saturation_threshold == 0.6
        assert red.lookahead_frames == 3

    def test_get_period_params(self):
        """Test dangerous period parameters for both channels."""
        config = Configuration()

        flash = config.get_flash_period_params()
        assert isinstance(flash, PeriodParams)
        assert flash.max_safe_rate == 3.0
        assert flash.critical_rate == 5.0
        assert flash.confidence == 0.85

        red = config.get_red_period_params()
        assert red.max_safe_rate == 2.0
        assert red.critical_rate == 4.0
        assert red.confidence == 0.90
        assert red.label == "red flash"

    def test_get_risk_params(self):
        """Test risk scoring parameters."""
        params = Configuration().get_risk_params()

        assert isinstance(params, RiskParams)
        assert params.max_safe_flash_rate == 3.0
        assert params.max_safe_red_flash_rate == 2.0
        assert params.red_event_limit == 10
        assert params.flash_count_step == 50.0
        assert params.flash_count_step_penalty == 10.0
        assert params.red_rate_weight == 15.0
        assert params.red_risk_cap == 75.0

    def test_risk_scoring_knobs_flow_into_params(self):
        """Test that every risk scoring field reaches RiskParams."""
        config = Configuration()
        config.flash_count_step = 25.0
        config.flash_count_step_penalty = 5.0
        config.flash_count_penalty_cap = 30.0
        config.red_rate_weight = 20.0
        config.red_risk_cap = 60.0

        params = config.get_risk_params()

        assert params.flash_count_step == 25.0
        assert params.flash_count_step_penalty == 5.0
        assert params.flash_count_penalty_cap == 30.0
        assert params.red_rate_weight == 20.0
        assert params.red_risk_cap == 60.0

    def test_custom_thresholds_flow_into_params(self):
        """Test that modified thresholds reach the parameter objects."""
        config = Configuration()
        config.min_flash_intensity = 0.2
        config.max_safe_flash_rate = 4.0

        assert config.get_luminance_params().flash_threshold == 0.2
        assert config.get_red_flash_params().flash_threshold == pytest.approx(0.14)
        assert config.get_risk_params().max_safe_flash_rate == 4.0


class TestConfigurationFromJson:
    """Test loading configuration from appsettings.json."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = Configuration.from_json(str(tmp_path))
        assert config == Configuration()

    def test_sections_override_defaults(self, tmp_path):
        settings = {
            "Flash": {"MinFlashIntensity": 0.2, "MaxSafeFlashRate": 4.0, "ContinuationFactor": 0.4},
            "RedFlash": {
                "RedSaturationThreshold": 0.7,
                "MergeTolerance": 0.02,
                "CriticalRateFactor": 3.0,
            },
            "Temporal": {"DefaultFps": 30.0},
            "Risk": {
                "WarningRiskScore": 25.0,
                "RiskLevelCutoffs": [10, 30, 50, 70],
                "FlashCountStep": 25.0,
                "FlashCountStepPenalty": 5.0,
                "FlashCountPenaltyCap": 30.0,
                "RedRateWeight": 20.0,
                "RedRiskCap": 60.0,
            },
            "Confidence": {
                "FlashPeriodConfidence": 0.7,
                "RedPeriodConfidence": 0.75,
                "AnalysisConfidence": 0.9,
                "LowSampleConfidence": 0.2,
            },
            "Compliance": {"ITC": 35.0},
        }
        (tmp_path / "appsettings.json").write_text(json.dumps(settings))

        config = Configuration.from_json(str(tmp_path))

        assert config.min_flash_intensity == 0.2
        assert config.max_safe_flash_rate == 4.0
        assert config.red_saturation_threshold == 0.7
        assert config.red_merge_tolerance == 0.02
        assert config.default_fps == 30.0
        assert config.warning_risk_score == 25.0
        assert config.risk_level_cutoffs == (10, 30, 50, 70)
        assert config.compliance_thresholds["ITC"] == 35.0
        assert config.duration_continuation_factor == 0.4
        assert config.red_critical_rate_factor == 3.0
        assert config.flash_count_step == 25.0
        assert config.flash_count_step_penalty == 5.0
        assert config.flash_count_penalty_cap == 30.0
        assert config.red_rate_weight == 20.0
        assert config.red_risk_cap == 60.0
        assert config.flash_period_confidence == 0.7
        assert config.red_period_confidence == 0.75
        assert config.analysis_confidence == 0.9
        assert config.low_sample_confidence == 0.2
        assert config.compliance_thresholds["Ofcom"] == 40.0
        # Untouched values keep their defaults
        assert config.dangerous_flash_intensity == 0.8

        # Loaded values reach the component parameters
        assert config.get_luminance_params().continuation_factor == 0.4
        assert config.get_red_period_params().critical_rate == pytest.approx(6.0)
        assert config.get_red_period_params().confidence == 0.75
        assert config.get_risk_params().red_risk_cap == 60.0

    def test_comments_are_stripped(self, tmp_path):
        text = (
            "{\n"
            "  // General flash settings\n"
            '  "Flash": {\n'
            '    "LookaheadFrames": 7 // frames\n'
            "  }\n"
            "}\n"
        )
        (tmp_path / "appsettings.json").write_text(text)

        config = Configuration.from_json(str(tmp_path))

        assert config.flash_lookahead_frames == 7

    def test_malformed_file_raises(self, tmp_path):
        (tmp_path / "appsettings.json").write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            Configuration.from_json(str(tmp_path))

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Configuration for PSE flash analysis."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple


# Compliance ceilings on the overall 0-100 risk score, per broadcast standard
DEFAULT_COMPLIANCE_THRESHOLDS = {
    "ITU-R BT.1702": 20.0,
    "ITC": 40.0,
    "Ofcom": 40.0,
    "EBU Tech 3253": 60.0,
    "FCC": 40.0,
}

STANDARDS_VERSIONS = {
    "ITU-R BT.1702": "2012",
    "ITC": "2001",
    "EBU Tech 3253": "2010",
}

STANDARDS_LAST_UPDATED = "2024-01-01"


@dataclass
class FlashParams:
    """Parameters for one flash detector channel."""
    flash_threshold: float
    lookahead_frames: int
    merge_tolerance: float
    luminance_weight: float = 1.0
    continuation_factor: float = 0.5
    saturation_threshold: Optional[float] = None
    default_fps: float = 25.0


@dataclass
class PeriodParams:
    """Parameters for dangerous period location on one channel."""
    max_safe_rate: float
    critical_rate: float
    confidence: float
    label: str = "flash"


@dataclass
class RiskParams:
    """Parameters for risk scoring."""
    max_safe_flash_rate: float = 3.0
    max_safe_red_flash_rate: float = 2.0
    red_saturation_threshold: float = 0.6
    exceed_base_penalty: float = 40.0
    excess_rate_weight: float = 15.0
    excess_rate_cap: float = 40.0
    flash_count_limit: int = 100
    flash_count_step: float = 50.0
    flash_count_step_penalty: float = 10.0
    flash_count_penalty_cap: float = 20.0
    red_event_limit: int = 10
    red_rate_weight: float = 15.0
    red_risk_cap: float = 75.0
    risk_level_cutoffs: Tuple[float, float, float, float] = (20.0, 40.0, 60.0, 80.0)


@dataclass
class Configuration:
    """Configuration for PSE flash analysis."""

    # Flash detection
    min_flash_intensity: float = 0.1
    dangerous_flash_intensity: float = 0.8
    flash_lookahead_frames: int = 5
    flash_merge_tolerance: float = 0.1
    duration_continuation_factor: float = 0.5

    # Red flash detection
    red_luminance_weight: float = 1.5
    red_threshold_factor: float = 0.7
    red_saturation_threshold: float = 0.6
    red_lookahead_frames: int = 3
    red_merge_tolerance: float = 0.05

    # Flash rate ceilings (flashes per second)
    max_safe_flash_rate: float = 3.0
    critical_flash_rate: float = 5.0
    max_safe_red_flash_rate: float = 2.0
    red_critical_rate_factor: float = 2.0

    # Temporal analysis
    analysis_window_size: float = 1.0  # ITU-R BT.1702 one-second window
    default_fps: float = 25.0
    min_reliable_samples: int = 25

    # Risk scoring
    exceed_base_penalty: float = 40.0
    excess_rate_weight: float = 15.0
    excess_rate_cap: float = 40.0
    flash_count_limit: int = 100
    flash_count_step: float = 50.0
    flash_count_step_penalty: float = 10.0
    flash_count_penalty_cap: float = 20.0
    red_event_limit: int = 10
    red_rate_weight: float = 15.0
    red_risk_cap: float = 75.0
    risk_level_cutoffs: Tuple[float, float, float, float] = (20.0, 40.0, 60.0, 80.0)
    warning_risk_score: float = 30.0

    # Confidence reported with each channel's dangerous periods
    flash_period_confidence: float = 0.85
    red_period_confidence: float = 0.90

    # Overall analysis confidence
    analysis_confidence: float = 0.80
    low_sample_confidence: float = 0.30

    compliance_thresholds: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_COMPLIANCE_THRESHOLDS)
    )

    @classmethod
    def from_json(cls, path: str) -> "Configuration":
        """Load configuration from an appsettings.json file in `path`."""
        config_path = Path(path) / "appsettings.json"

        if not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            # Strip single-line // comments
            lines = []
            for line in f.read().split("\n"):
                comment_idx = line.find("//")
                if comment_idx >= 0:
                    line = line[:comment_idx]
                lines.append(line)
            data = json.loads("\n".join(lines))

        config = cls()

        if "Flash" in data:
            fl = data["Flash"]
            config.min_flash_intensity = fl.get("MinFlashIntensity", config.min_flash_intensity)
            config.dangerous_flash_intensity = fl.get(
                "DangerousFlashIntensity", config.dangerous_flash_intensity
            )
            config.flash_lookahead_frames = fl.get("LookaheadFrames", config.flash_lookahead_frames)
            config.flash_merge_tolerance = fl.get("MergeTolerance", config.flash_merge_tolerance)
            config.max_safe_flash_rate = fl.get("MaxSafeFlashRate", config.max_safe_flash_rate)
            config.critical_flash_rate = fl.get("CriticalFlashRate", config.critical_flash_rate)
            config.duration_continuation_factor = fl.get(
                "ContinuationFactor", config.duration_continuation_factor
            )

        if "RedFlash" in data:
            rf = data["RedFlash"]
            config.red_luminance_weight = rf.get("RedLuminanceWeight", config.red_luminance_weight)
            config.red_threshold_factor = rf.get("ThresholdFactor", config.red_threshold_factor)
            config.red_saturation_threshold = rf.get(
                "RedSaturationThreshold", config.red_saturation_threshold
            )
            config.red_lookahead_frames = rf.get("LookaheadFrames", config.red_lookahead_frames)
            config.red_merge_tolerance = rf.get("MergeTolerance", config.red_merge_tolerance)
            config.max_safe_red_flash_rate = rf.get(
                "MaxSafeRedFlashRate", config.max_safe_red_flash_rate
            )
            config.red_critical_rate_factor = rf.get(
                "CriticalRateFactor", config.red_critical_rate_factor
            )

        if "Temporal" in data:
            tp = data["Temporal"]
            config.analysis_window_size = tp.get("AnalysisWindowSize", config.analysis_window_size)
            config.default_fps = tp.get("DefaultFps", config.default_fps)
            config.min_reliable_samples = tp.get("MinReliableSamples", config.min_reliable_samples)

        if "Risk" in data:
            rk = data["Risk"]
            config.exceed_base_penalty = rk.get("ExceedBasePenalty", config.exceed_base_penalty)
            config.excess_rate_weight = rk.get("ExcessRateWeight", config.excess_rate_weight)
            config.excess_rate_cap = rk.get("ExcessRateCap", config.excess_rate_cap)
            config.flash_count_limit = rk.get("FlashCountLimit", config.flash_count_limit)
            config.flash_count_step = rk.get("FlashCountStep", config.flash_count_step)
            config.flash_count_step_penalty = rk.get(
                "FlashCountStepPenalty", config.flash_count_step_penalty
            )
            config.flash_count_penalty_cap = rk.get(
                "FlashCountPenaltyCap", config.flash_count_penalty_cap
            )
            config.red_event_limit = rk.get("RedEventLimit", config.red_event_limit)
            config.red_rate_weight = rk.get("RedRateWeight", config.red_rate_weight)
            config.red_risk_cap = rk.get("RedRiskCap", config.red_risk_cap)
            config.warning_risk_score = rk.get("WarningRiskScore", config.warning_risk_score)
            if "RiskLevelCutoffs" in rk:
                config.risk_level_cutoffs = tuple(rk["RiskLevelCutoffs"])

        if "Confidence" in data:
            cf = data["Confidence"]
            config.flash_period_confidence = cf.get(
                "FlashPeriodConfidence", config.flash_period_confidence
            )
            config.red_period_confidence = cf.get(
                "RedPeriodConfidence", config.red_period_confidence
            )
            config.analysis_confidence = cf.get("AnalysisConfidence", config.analysis_confidence)
            config.low_sample_confidence = cf.get(
                "LowSampleConfidence", config.low_sample_confidence
            )

        if "Compliance" in data:
            config.compliance_thresholds.update(data["Compliance"])

        return config

    def get_luminance_params(self) -> FlashParams:
        """Get general flash detection parameters."""
        return FlashParams(
            flash_threshold=self.min_flash_intensity,
            lookahead_frames=self.flash_lookahead_frames,
            merge_tolerance=self.flash_merge_tolerance,
            continuation_factor=self.duration_continuation_factor,
            default_fps=self.default_fps,
        )

    def get_red_flash_params(self) -> FlashParams:
        """Get red flash detection parameters (lower threshold, tighter merge)."""
        return FlashParams(
            flash_threshold=self.min_flash_intensity * self.red_threshold_factor,
            lookahead_frames=self.red_lookahead_frames,
            merge_tolerance=self.red_merge_tolerance,
            luminance_weight=self.red_luminance_weight,
            continuation_factor=self.duration_continuation_factor,
            saturation_threshold=self.red_saturation_threshold,
            default_fps=self.default_fps,
        )

    def get_flash_period_params(self) -> PeriodParams:
        """Get dangerous period parameters for general flashes."""
        return PeriodParams(
            max_safe_rate=self.max_safe_flash_rate,
            critical_rate=self.critical_flash_rate,
            confidence=self.flash_period_confidence,
            label="flash",
        )

    def get_red_period_params(self) -> PeriodParams:
        """Get dangerous period parameters for red flashes."""
        return PeriodParams(
            max_safe_rate=self.max_safe_red_flash_rate,
            critical_rate=self.max_safe_red_flash_rate * self.red_critical_rate_factor,
            confidence=self.red_period_confidence,
            label="red flash",
        )

    def get_risk_params(self) -> RiskParams:
        """Get risk scoring parameters."""
        return RiskParams(
            max_safe_flash_rate=self.max_safe_flash_rate,
            max_safe_red_flash_rate=self.max_safe_red_flash_rate,
            red_saturation_threshold=self.red_saturation_threshold,
            exceed_base_penalty=self.exceed_base_penalty,
            excess_rate_weight=self.excess_rate_weight,
            excess_rate_cap=self.excess_rate_cap,
            flash_count_limit=self.flash_count_limit,
            flash_count_step=self.flash_count_step,
            flash_count_step_penalty=self.flash_count_step_penalty,
            flash_count_penalty_cap=self.flash_count_penalty_cap,
            red_event_limit=self.red_event_limit,
            red_rate_weight=self.red_rate_weight,
            red_risk_cap=self.red_risk_cap,
            risk_level_cutoffs=self.risk_level_cutoffs,
        )

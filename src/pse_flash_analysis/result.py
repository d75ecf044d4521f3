# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Result types and enums for PSE flash analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from pse_flash_analysis.frame_data import FlashEvent, RedFlashEvent


class RiskLevel(str, Enum):
    """Categorical risk level, ordered from safe to critical."""
    Safe = "safe"
    Low = "low"
    Medium = "medium"
    High = "high"
    Critical = "critical"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {level: i for i, level in enumerate(RiskLevel)}


class PatternType(str, Enum):
    """Temporal pattern of a flash sequence."""
    NoPattern = "none"
    Irregular = "irregular"
    SemiRegular = "semi_regular"
    RegularStrobe = "regular_strobe"


@dataclass(frozen=True)
class FlashStatistics:
    """Windowed flash rate statistics (flashes per second)."""
    average_rate: float = 0.0
    peak_rate: float = 0.0
    max_rate: float = 0.0
    total_flashes: int = 0

    def to_dict(self) -> dict:
        return {
            "average_rate": self.average_rate,
            "peak_rate": self.peak_rate,
            "max_rate": self.max_rate,
            "total_flashes": self.total_flashes,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Risk evaluation for general flashes."""
    exceeds_threshold: bool = False
    risk_level: RiskLevel = RiskLevel.Safe
    risk_score: float = 0.0

    def to_dict(self) -> dict:
        return {
            "exceeds_threshold": self.exceeds_threshold,
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
        }


@dataclass(frozen=True)
class RedRiskAssessment:
    """Risk evaluation for red flashes."""
    exceeds_red_threshold: bool = False
    high_saturation_count: int = 0
    risk_score: float = 0.0

    def to_dict(self) -> dict:
        return {
            "exceeds_red_threshold": self.exceeds_red_threshold,
            "high_saturation_count": self.high_saturation_count,
            "risk_score": self.risk_score,
        }


@dataclass(frozen=True)
class WindowCount:
    """Number of flash events in one analysis window."""
    start_time: float
    end_time: float
    count: int

    @property
    def rate(self) -> float:
        return self.count / (self.end_time - self.start_time)

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "count": self.count,
        }


@dataclass(frozen=True)
class TimePeriod:
    """An analysis window found to be dangerous."""
    start_time: float
    end_time: float
    risk_level: RiskLevel
    description: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "risk_level": self.risk_level.value,
            "description": self.description,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class FlashDuration:
    """Span and per-event risk of a single flash."""
    start_time: float
    end_time: float
    duration: float
    intensity: float
    screen_area: float = 1.0  # full screen; samples carry no spatial extent
    risk_level: RiskLevel = RiskLevel.Low

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "intensity": self.intensity,
            "screen_area": self.screen_area,
            "risk_level": self.risk_level.value,
        }


@dataclass(frozen=True)
class FlashIntensity:
    """Summary of flash intensities."""
    peak_intensity: float = 0.0
    average_intensity: float = 0.0
    intensity_variance: float = 0.0
    intensity_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "peak_intensity": self.peak_intensity,
            "average_intensity": self.average_intensity,
            "intensity_variance": self.intensity_variance,
            "intensity_distribution": dict(self.intensity_distribution),
        }


@dataclass(frozen=True)
class RhythmPattern:
    """Regularity of the intervals between flashes."""
    regular_rhythm: bool = False
    rhythm_frequency: float = 0.0
    pattern_type: PatternType = PatternType.NoPattern
    temporal_spacing: float = 0.0
    frequency_bands: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "regular_rhythm": self.regular_rhythm,
            "rhythm_frequency": self.rhythm_frequency,
            "pattern_type": self.pattern_type.value,
            "temporal_spacing": self.temporal_spacing,
            "frequency_bands": dict(self.frequency_bands),
        }


@dataclass(frozen=True)
class FlashAnalysis:
    """General (luminance) flash analysis."""
    events: Tuple[FlashEvent, ...] = ()
    statistics: FlashStatistics = field(default_factory=FlashStatistics)
    risk: RiskAssessment = field(default_factory=RiskAssessment)
    pattern: RhythmPattern = field(default_factory=RhythmPattern)
    windows: Tuple[WindowCount, ...] = ()
    durations: Tuple[FlashDuration, ...] = ()
    dangerous_periods: Tuple[TimePeriod, ...] = ()
    intensity: FlashIntensity = field(default_factory=FlashIntensity)

    @property
    def exceeds_threshold(self) -> bool:
        return self.risk.exceeds_threshold

    def to_dict(self) -> dict:
        return {
            "total_flashes": self.statistics.total_flashes,
            "flash_rate": self.statistics.peak_rate,
            "average_flash_rate": self.statistics.average_rate,
            "max_flash_rate": self.statistics.max_rate,
            "flash_events": [e.to_dict() for e in self.events],
            "flash_durations": [d.to_dict() for d in self.durations],
            "flash_frequency_bands": dict(self.pattern.frequency_bands),
            "flash_pattern": self.pattern.to_dict(),
            "temporal_windows": [w.to_dict() for w in self.windows],
            "dangerous_flash_periods": [p.to_dict() for p in self.dangerous_periods],
            "flash_intensity": self.intensity.to_dict(),
            "risk_assessment": self.risk.to_dict(),
            "exceeds_flash_threshold": self.exceeds_threshold,
        }


@dataclass(frozen=True)
class RedFlashAnalysis:
    """Red flash analysis."""
    events: Tuple[RedFlashEvent, ...] = ()
    statistics: FlashStatistics = field(default_factory=FlashStatistics)
    risk: RedRiskAssessment = field(default_factory=RedRiskAssessment)
    windows: Tuple[WindowCount, ...] = ()
    durations: Tuple[FlashDuration, ...] = ()
    dangerous_periods: Tuple[TimePeriod, ...] = ()

    @property
    def exceeds_red_threshold(self) -> bool:
        return self.risk.exceeds_red_threshold

    @property
    def saturation_levels(self) -> Tuple[float, ...]:
        return tuple(e.saturation for e in self.events)

    def to_dict(self) -> dict:
        return {
            "red_flash_count": self.statistics.total_flashes,
            "red_flash_rate": self.statistics.average_rate,
            "max_red_flash_rate": self.statistics.max_rate,
            "red_flash_events": [e.to_dict() for e in self.events],
            "red_flash_durations": [d.to_dict() for d in self.durations],
            "red_saturation_levels": list(self.saturation_levels),
            "temporal_windows": [w.to_dict() for w in self.windows],
            "dangerous_red_periods": [p.to_dict() for p in self.dangerous_periods],
            "risk_assessment": self.risk.to_dict(),
            "exceeds_red_threshold": self.exceeds_red_threshold,
        }


@dataclass(frozen=True)
class LuminanceAnalysis:
    """Frame-to-frame brightness variation."""
    max_luminance_change: float = 0.0
    average_change: float = 0.0
    standard_deviation: float = 0.0
    peak_to_peak: float = 0.0

    def to_dict(self) -> dict:
        return {
            "max_luminance_change": self.max_luminance_change,
            "average_change": self.average_change,
            "standard_deviation": self.standard_deviation,
            "peak_to_peak": self.peak_to_peak,
        }


@dataclass(frozen=True)
class BroadcastCompliance:
    """Compliance with broadcast PSE standards."""
    standards: Dict[str, bool] = field(default_factory=dict)
    compliance_score: float = 100.0
    compliance_level: str = "full"
    notes: Tuple[str, ...] = ()
    last_updated: str = ""

    def is_compliant(self, standard: str) -> bool:
        return self.standards.get(standard, False)

    def to_dict(self) -> dict:
        return {
            "standards": dict(self.standards),
            "compliance_score": self.compliance_score,
            "compliance_level": self.compliance_level,
            "compliance_notes": list(self.notes),
            "last_updated": self.last_updated,
        }


@dataclass(frozen=True)
class PSEAnalysis:
    """Complete photosensitive epilepsy analysis of one input."""
    pse_risk_level: RiskLevel = RiskLevel.Safe
    overall_risk_score: float = 0.0
    max_risk_timestamp: float = 0.0
    risk_reason: str = ""
    safe_for_broadcast: bool = True
    requires_warning: bool = False
    broadcast_compliance: BroadcastCompliance = field(default_factory=BroadcastCompliance)
    flash_analysis: FlashAnalysis = field(default_factory=FlashAnalysis)
    red_flash_analysis: RedFlashAnalysis = field(default_factory=RedFlashAnalysis)
    luminance_analysis: LuminanceAnalysis = field(default_factory=LuminanceAnalysis)
    analysis_duration: float = 0.0
    sampling_rate: float = 0.0
    standards_version: str = ""
    analysis_method: str = ""
    confidence: float = 0.0

    @property
    def dangerous_periods(self) -> Tuple[TimePeriod, ...]:
        """All dangerous periods from both channels, ordered by start time."""
        periods = self.flash_analysis.dangerous_periods + self.red_flash_analysis.dangerous_periods
        return tuple(sorted(periods, key=lambda p: (p.start_time, -p.risk_level.rank)))

    def most_severe_period(self) -> Optional[TimePeriod]:
        return most_severe_period(self.dangerous_periods)

    def to_dict(self) -> dict:
        return {
            "pse_risk_level": self.pse_risk_level.value,
            "overall_risk_score": self.overall_risk_score,
            "max_risk_timestamp": self.max_risk_timestamp,
            "risk_reason": self.risk_reason,
            "safe_for_broadcast": self.safe_for_broadcast,
            "requires_warning": self.requires_warning,
            "broadcast_compliance": self.broadcast_compliance.to_dict(),
            "flash_analysis": self.flash_analysis.to_dict(),
            "red_flash_analysis": self.red_flash_analysis.to_dict(),
            "luminance_analysis": self.luminance_analysis.to_dict(),
            "analysis_duration": self.analysis_duration,
            "sampling_rate": self.sampling_rate,
            "standards_version": self.standards_version,
            "analysis_method": self.analysis_method,
            "confidence": self.confidence,
        }


def most_severe_period(periods: Iterable[TimePeriod]) -> Optional[TimePeriod]:
    """The highest-risk period, the earliest one on ties."""
    best: Optional[TimePeriod] = None
    for period in periods:
        if best is None:
            best = period
        elif period.risk_level.rank > best.risk_level.rank:
            best = period
        elif period.risk_level.rank == best.risk_level.rank and period.start_time < best.start_time:
            best = period
    return best

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Tests for result data structures."""

from pse_flash_analysis.frame_data import FlashEvent, FlashKind
from pse_flash_analysis.result import (
    BroadcastCompliance,
    FlashAnalysis,
    FlashStatistics,
    PatternType,
    PSEAnalysis,
    RedFlashAnalysis,
    RiskLevel,
    TimePeriod,
    WindowCount,
    most_severe_period,
)


def period(start, level):
    return TimePeriod(
        start_time=start,
        end_time=start + 1.0,
        risk_level=level,
        description="test",
        confidence=0.85,
    )


class TestEnums:
    """Test result enums."""

    def test_risk_level_order(self):
        ranks = [level.rank for level in (
            RiskLevel.Safe, RiskLevel.Low, RiskLevel.Medium, RiskLevel.High, RiskLevel.Critical,
        )]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 5

    def test_risk_level_values(self):
        assert RiskLevel.Safe.value == "safe"
        assert RiskLevel.Critical.value == "critical"

    def test_pattern_type_values(self):
        assert PatternType.NoPattern.value == "none"
        assert PatternType.RegularStrobe.value == "regular_strobe"
        assert PatternType.SemiRegular.value == "semi_regular"


class TestMostSeverePeriod:
    """Test most_severe_period function."""

    def test_none_for_no_periods(self):
        assert most_severe_period([]) is None

    def test_highest_level_wins(self):
        periods = [period(0.0, RiskLevel.Medium), period(3.0, RiskLevel.Critical), period(1.0, RiskLevel.High)]
        assert most_severe_period(periods).start_time == 3.0

    def test_earliest_on_ties(self):
        periods = [period(2.0, RiskLevel.High), period(1.0, RiskLevel.High)]
        assert most_severe_period(periods).start_time == 1.0


class TestWindowCount:
    """Test WindowCount class."""

    def test_rate(self):
        assert WindowCount(start_time=0.0, end_time=0.5, count=3).rate == 6.0


class TestBroadcastCompliance:
    """Test BroadcastCompliance class."""

    def test_is_compliant(self):
        compliance = BroadcastCompliance(standards={"ITC": True, "FCC": False})

        assert compliance.is_compliant("ITC") is True
        assert compliance.is_compliant("FCC") is False
        assert compliance.is_compliant("unknown") is False

    def test_to_dict(self):
        data = BroadcastCompliance(notes=("a",)).to_dict()
        assert data["compliance_notes"] == ["a"]


class TestPSEAnalysis:
    """Test PSEAnalysis class."""

    def test_defaults(self):
        result = PSEAnalysis()

        assert result.pse_risk_level == RiskLevel.Safe
        assert result.safe_for_broadcast is True
        assert result.dangerous_periods == ()
        assert result.most_severe_period() is None

    def test_dangerous_periods_merge_channels(self):
        result = PSEAnalysis(
            flash_analysis=FlashAnalysis(dangerous_periods=(period(2.0, RiskLevel.Medium),)),
            red_flash_analysis=RedFlashAnalysis(dangerous_periods=(
                period(0.0, RiskLevel.High),
                period(2.0, RiskLevel.Critical),
            )),
        )

        periods = result.dangerous_periods
        assert [(p.start_time, p.risk_level) for p in periods] == [
            (0.0, RiskLevel.High),
            (2.0, RiskLevel.Critical),
            (2.0, RiskLevel.Medium),
        ]
        assert result.most_severe_period().risk_level == RiskLevel.Critical

    def test_to_dict(self):
        event = FlashEvent(timestamp=0.2, intensity=1.0, duration=0.04, kind=FlashKind.Sudden)
        result = PSEAnalysis(
            pse_risk_level=RiskLevel.High,
            flash_analysis=FlashAnalysis(
                events=(event,),
                statistics=FlashStatistics(average_rate=0.5, peak_rate=1.0, max_rate=1.0, total_flashes=1),
            ),
        )
        data = result.to_dict()

        assert data["pse_risk_level"] == "high"
        assert data["flash_analysis"]["total_flashes"] == 1
        assert data["flash_analysis"]["flash_rate"] == 1.0
        assert data["flash_analysis"]["flash_events"][0]["type"] == "sudden"
        assert data["red_flash_analysis"]["red_flash_count"] == 0
        assert set(data) >= {
            "overall_risk_score",
            "max_risk_timestamp",
            "risk_reason",
            "requires_warning",
            "broadcast_compliance",
            "luminance_analysis",
            "analysis_duration",
            "sampling_rate",
            "standards_version",
            "analysis_method",
            "confidence",
        }

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Flash risk scoring against broadcast safety ceilings."""

from typing import Optional, Sequence, Tuple

from pse_flash_analysis.configuration import RiskParams
from pse_flash_analysis.frame_data import RedFlashEvent
from pse_flash_analysis.result import (
    FlashStatistics,
    RedRiskAssessment,
    RhythmPattern,
    RiskAssessment,
    RiskLevel,
)

MIN_RISK_SCORE = 0.0
MAX_RISK_SCORE = 100.0

# Weights of the worst channel and the channel mean in the overall score
WORST_CHANNEL_WEIGHT = 0.7
MEAN_CHANNEL_WEIGHT = 0.3


def clamp_score(score: float) -> float:
    """Clamp a risk score to [0, 100]."""
    return min(max(score, MIN_RISK_SCORE), MAX_RISK_SCORE)


def combine_scores(scores: Sequence[float]) -> float:
    """
    Blend per-channel risk scores into one overall score.

    The worst channel dominates, but a second risky channel still raises
    the result. No scores gives zero.
    """
    if not scores:
        return MIN_RISK_SCORE
    worst = max(scores)
    mean = sum(scores) / len(scores)
    return clamp_score(WORST_CHANNEL_WEIGHT * worst + MEAN_CHANNEL_WEIGHT * mean)


def score_to_risk_level(
    score: float,
    cutoffs: Tuple[float, float, float, float] = (20.0, 40.0, 60.0, 80.0),
) -> RiskLevel:
    """
    Map a risk score to a risk level.

    Each cutoff is the inclusive upper bound of safe, low, medium and high
    respectively; anything above the last is critical.
    """
    safe, low, medium, high = cutoffs
    if score <= safe:
        return RiskLevel.Safe
    elif score <= low:
        return RiskLevel.Low
    elif score <= medium:
        return RiskLevel.Medium
    elif score <= high:
        return RiskLevel.High
    return RiskLevel.Critical


def assess_flash_risk(
    stats: FlashStatistics,
    params: RiskParams,
    pattern: Optional[RhythmPattern] = None,
) -> RiskAssessment:
    """
    Score general flash risk.

    Exceeding the safe flash rate adds a base penalty plus a capped amount
    proportional to the excess; flash counts over the limit add a further
    capped amount. The rhythm pattern is accepted for reporting but does
    not contribute to the score.

    Args:
        stats: Windowed statistics of general flashes
        params: Risk scoring parameters
        pattern: Rhythm analysis of the same flashes

    Returns:
        RiskAssessment with a score clamped to [0, 100]
    """
    score = 0.0
    exceeds_threshold = False

    if stats.max_rate > params.max_safe_flash_rate:
        exceeds_threshold = True
        score += params.exceed_base_penalty
        excess = stats.max_rate - params.max_safe_flash_rate
        score += min(excess * params.excess_rate_weight, params.excess_rate_cap)

    if stats.total_flashes > params.flash_count_limit:
        over = stats.total_flashes - params.flash_count_limit
        score += min(
            over / params.flash_count_step * params.flash_count_step_penalty,
            params.flash_count_penalty_cap,
        )

    score = clamp_score(score)
    return RiskAssessment(
        exceeds_threshold=exceeds_threshold,
        risk_level=score_to_risk_level(score, params.risk_level_cutoffs),
        risk_score=score,
    )


def assess_red_flash_risk(
    stats: FlashStatistics,
    events: Sequence[RedFlashEvent],
    params: RiskParams,
) -> RedRiskAssessment:
    """
    Check red flashes against the stricter red ceiling.

    The red threshold is exceeded when the windowed red rate is above the
    red ceiling, or when more than the allowed number of highly saturated
    red flashes occur.
    """
    high_saturation = sum(1 for e in events if e.saturation > params.red_saturation_threshold)
    exceeds = (
        stats.max_rate > params.max_safe_red_flash_rate
        or high_saturation > params.red_event_limit
    )

    score = 0.0
    if exceeds:
        score = min(stats.average_rate * params.red_rate_weight, params.red_risk_cap)

    return RedRiskAssessment(
        exceeds_red_threshold=exceeds,
        high_saturation_count=high_saturation,
        risk_score=clamp_score(score),
    )

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Location of dangerous time periods in a flash event stream."""

from typing import Callable, List, Sequence, Tuple

from pse_flash_analysis.configuration import PeriodParams
from pse_flash_analysis.flash_statistics import analysis_windows, window_counts
from pse_flash_analysis.result import RiskLevel, TimePeriod


def locate_dangerous_periods(
    events: Sequence,
    duration: float,
    params: PeriodParams,
    is_dangerous: Callable[[object], bool],
    window_size: float = 1.0,
) -> Tuple[TimePeriod, ...]:
    """
    Flag analysis windows whose flash rate or content is unsafe.

    A window is flagged when its rate exceeds the safe ceiling or when it
    contains at least one dangerous event. The flagged window is critical
    above the critical ceiling, high if dangerous events are present,
    otherwise medium.

    Args:
        events: Time-ordered flash events for one channel
        duration: Analysed duration in seconds
        params: Rate ceilings, confidence and description label
        is_dangerous: Predicate selecting dangerous events
        window_size: Analysis window size in seconds

    Returns:
        Flagged windows in time order
    """
    windows = analysis_windows(duration, window_size)
    if not windows or len(events) == 0:
        return ()

    counts = window_counts([e.timestamp for e in events], duration, window_size)
    dangerous = [e for e in events if is_dangerous(e)]
    dangerous_counts = window_counts([e.timestamp for e in dangerous], duration, window_size)

    periods: List[TimePeriod] = []
    for (start, end), count, n_dangerous in zip(windows, counts, dangerous_counts):
        rate = count / window_size
        if not (rate > params.max_safe_rate or n_dangerous > 0):
            continue

        if rate > params.critical_rate:
            level = RiskLevel.Critical
            description = f"Critical {params.label} rate period: {rate:.1f} {params.label}es/second"
        elif n_dangerous > 0:
            level = RiskLevel.High
            description = f"High intensity {params.label} period: {int(n_dangerous)} dangerous {params.label}es"
        else:
            level = RiskLevel.Medium
            description = f"High {params.label} rate period: {rate:.1f} {params.label}es/second"

        periods.append(TimePeriod(
            start_time=start,
            end_time=end,
            risk_level=level,
            description=description,
            confidence=params.confidence,
        ))

    return tuple(periods)


def intensity_above(threshold: float) -> Callable[[object], bool]:
    """Dangerous-event predicate for general flashes."""
    return lambda event: event.intensity > threshold


def saturation_above(threshold: float) -> Callable[[object], bool]:
    """Dangerous-event predicate for red flashes."""
    return lambda event: event.saturation > threshold

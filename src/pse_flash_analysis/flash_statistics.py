# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Windowed flash rate statistics."""

import math
from typing import List, Sequence, Tuple

import numpy as np

from pse_flash_analysis.frame_data import FlashEvent, RedFlashEvent
from pse_flash_analysis.result import (
    FlashDuration,
    FlashIntensity,
    FlashStatistics,
    RiskLevel,
    WindowCount,
)

INTENSITY_BUCKETS = ("0.0-0.2", "0.2-0.4", "0.4-0.6", "0.6-0.8", "0.8-1.0")
INTENSITY_EDGES = (0.2, 0.4, 0.6, 0.8)


def window_count(duration: float, window_size: float) -> int:
    """Number of windows needed to cover `[0, duration)`."""
    if duration <= 0 or window_size <= 0:
        return 0
    return int(math.ceil(duration / window_size))


def analysis_windows(duration: float, window_size: float) -> List[Tuple[float, float]]:
    """
    Partition `[0, duration)` into consecutive fixed-size windows.

    The last window may extend past `duration`; windows never overlap
    and leave no gaps.
    """
    return [
        (k * window_size, (k + 1) * window_size)
        for k in range(window_count(duration, window_size))
    ]


def window_counts(timestamps: Sequence[float], duration: float, window_size: float) -> np.ndarray:
    """Count timestamps falling in each analysis window."""
    n_windows = window_count(duration, window_size)
    if n_windows == 0:
        return np.zeros(0, dtype=np.int64)

    ts = np.asarray(timestamps, dtype=np.float64)
    if ts.size == 0:
        return np.zeros(n_windows, dtype=np.int64)

    indices = np.floor(ts / window_size)
    indices = indices[np.isfinite(indices) & (indices >= 0) & (indices < n_windows)]
    return np.bincount(indices.astype(np.int64), minlength=n_windows)


def count_windows(
    events: Sequence,
    duration: float,
    window_size: float,
) -> Tuple[WindowCount, ...]:
    """Per-window event counts over the analysed duration."""
    counts = window_counts([e.timestamp for e in events], duration, window_size)
    return tuple(
        WindowCount(start_time=start, end_time=end, count=int(count))
        for (start, end), count in zip(analysis_windows(duration, window_size), counts)
    )


def calculate_statistics(
    events: Sequence,
    duration: float,
    window_size: float = 1.0,
) -> FlashStatistics:
    """
    Calculate average and windowed peak flash rates.

    Args:
        events: Flash or red flash events
        duration: Analysed duration in seconds
        window_size: Analysis window size in seconds

    Returns:
        FlashStatistics (all zero for no events or non-positive duration)
    """
    if len(events) == 0 or duration <= 0 or window_size <= 0:
        return FlashStatistics()

    counts = window_counts([e.timestamp for e in events], duration, window_size)
    peak = float(counts.max()) / window_size if counts.size else 0.0

    # Busiest window as flashes per second, so the ceilings apply to any
    # window size; peak_rate and max_rate are the same value
    return FlashStatistics(
        average_rate=len(events) / duration,
        peak_rate=peak,
        max_rate=peak,
        total_flashes=len(events),
    )


def flash_durations(
    events: Sequence[FlashEvent],
    dangerous_intensity: float = 0.8,
) -> Tuple[FlashDuration, ...]:
    """Per-event spans for general flashes with an intensity-based risk level."""
    durations = []
    for event in events:
        if event.intensity > dangerous_intensity:
            risk = RiskLevel.High
        elif event.intensity > 0.5:
            risk = RiskLevel.Medium
        else:
            risk = RiskLevel.Low
        durations.append(FlashDuration(
            start_time=event.timestamp,
            end_time=event.end,
            duration=event.duration,
            intensity=event.intensity,
            risk_level=risk,
        ))
    return tuple(durations)


def red_flash_durations(events: Sequence[RedFlashEvent]) -> Tuple[FlashDuration, ...]:
    """Per-event spans for red flashes; red flashes start at medium risk."""
    durations = []
    for event in events:
        risk = RiskLevel.Medium
        if event.intensity > 0.8 or event.saturation > 0.9:
            risk = RiskLevel.High
        durations.append(FlashDuration(
            start_time=event.timestamp,
            end_time=event.end,
            duration=event.duration,
            intensity=event.intensity,
            risk_level=risk,
        ))
    return tuple(durations)


def intensity_summary(events: Sequence) -> FlashIntensity:
    """Peak, mean and variance of event intensities with a 5-bucket histogram."""
    if len(events) == 0:
        return FlashIntensity(intensity_distribution={b: 0 for b in INTENSITY_BUCKETS})

    intensities = np.array([e.intensity for e in events], dtype=np.float64)
    buckets = np.searchsorted(INTENSITY_EDGES, intensities, side="right")
    counts = np.bincount(buckets, minlength=len(INTENSITY_BUCKETS))

    return FlashIntensity(
        peak_intensity=float(intensities.max()),
        average_intensity=float(intensities.mean()),
        intensity_variance=float(intensities.var()),
        intensity_distribution={b: int(c) for b, c in zip(INTENSITY_BUCKETS, counts)},
    )

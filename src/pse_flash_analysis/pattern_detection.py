# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Temporal pattern (rhythm) detection over flash events."""

from typing import Dict, Sequence

import numpy as np

from pse_flash_analysis.flash_statistics import window_counts
from pse_flash_analysis.result import PatternType, RhythmPattern

# (label, inclusive upper bound in Hz)
FREQUENCY_BANDS = (
    ("0-1Hz", 1.0),
    ("1-3Hz", 3.0),
    ("3-5Hz", 5.0),
    ("5-10Hz", 10.0),
    ("10-25Hz", 25.0),
    (">25Hz", float("inf")),
)

REGULAR_SPREAD = 0.2
SEMI_REGULAR_SPREAD = 0.5
MIN_PATTERN_EVENTS = 3


def frequency_distribution(
    events: Sequence,
    duration: float,
    window_size: float = 1.0,
) -> Dict[str, int]:
    """
    Histogram of per-window flash rates.

    Each analysis window is assigned to the band containing its rate
    (events per second); band upper bounds are inclusive.
    """
    distribution = {label: 0 for label, _ in FREQUENCY_BANDS}
    counts = window_counts([e.timestamp for e in events], duration, window_size)
    if counts.size == 0:
        return distribution

    rates = counts / window_size
    upper_bounds = [upper for _, upper in FREQUENCY_BANDS[:-1]]
    band_indices = np.searchsorted(upper_bounds, rates, side="left")
    for index in band_indices:
        distribution[FREQUENCY_BANDS[index][0]] += 1

    return distribution


def analyse_rhythm(
    events: Sequence,
    duration: float = 0.0,
    window_size: float = 1.0,
) -> RhythmPattern:
    """
    Classify the regularity of the intervals between consecutive flashes.

    Args:
        events: Time-ordered flash events
        duration: Analysed duration, used for the frequency histogram
        window_size: Analysis window size in seconds

    Returns:
        RhythmPattern; fewer than three events yields no pattern
    """
    bands = frequency_distribution(events, duration, window_size)

    if len(events) < MIN_PATTERN_EVENTS:
        return RhythmPattern(frequency_bands=bands)

    timestamps = np.array([e.timestamp for e in events], dtype=np.float64)
    intervals = np.diff(timestamps)
    average = float(intervals.mean())
    spread = float(intervals.std())

    if not average > 0:
        return RhythmPattern(
            pattern_type=PatternType.Irregular,
            frequency_bands=bands,
        )

    if spread < average * REGULAR_SPREAD:
        return RhythmPattern(
            regular_rhythm=True,
            rhythm_frequency=1.0 / average,
            pattern_type=PatternType.RegularStrobe,
            temporal_spacing=average,
            frequency_bands=bands,
        )

    pattern_type = PatternType.Irregular
    if spread < average * SEMI_REGULAR_SPREAD:
        pattern_type = PatternType.SemiRegular

    return RhythmPattern(
        pattern_type=pattern_type,
        temporal_spacing=average,
        frequency_bands=bands,
    )

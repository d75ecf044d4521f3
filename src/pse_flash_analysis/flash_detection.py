# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Flash detection orchestration for PSE analysis."""

import logging
from typing import Optional, Sequence

from pse_flash_analysis.configuration import Configuration
from pse_flash_analysis.flash import LuminanceFlash, RedFlash
from pse_flash_analysis.flash_statistics import (
    calculate_statistics,
    count_windows,
    flash_durations,
    intensity_summary,
    red_flash_durations,
)
from pse_flash_analysis.frame_data import LuminanceSample, RedSample
from pse_flash_analysis.pattern_detection import analyse_rhythm
from pse_flash_analysis.period_locator import (
    intensity_above,
    locate_dangerous_periods,
    saturation_above,
)
from pse_flash_analysis.result import FlashAnalysis, RedFlashAnalysis
from pse_flash_analysis.risk_assessment import assess_flash_risk, assess_red_flash_risk

logger = logging.getLogger(__name__)


class FlashDetection:
    """
    Orchestrates flash analysis for one input.

    Runs the general and red detectors and feeds their events through
    windowed statistics, rhythm analysis, dangerous period location and
    risk assessment.
    """

    def __init__(self, config: Configuration, fps: Optional[float] = None):
        """
        Initialize flash detection.

        Args:
            config: Configuration parameters
            fps: Nominal frame rate (configured default if missing)
        """
        self.config = config

        self.luminance = LuminanceFlash(config.get_luminance_params(), fps)
        self.red = RedFlash(config.get_red_flash_params(), fps)
        self.fps = self.luminance.fps

        self._risk_params = config.get_risk_params()

    def analyse_flashes(
        self,
        samples: Sequence[LuminanceSample],
        duration: float,
    ) -> FlashAnalysis:
        """
        Analyse general flashes in a luminance sample sequence.

        Args:
            samples: Time-ordered luminance samples
            duration: Analysed duration in seconds

        Returns:
            FlashAnalysis with events, statistics, pattern, periods and risk
        """
        window = self.config.analysis_window_size
        events = self.luminance.detect(samples)
        stats = calculate_statistics(events, duration, window)
        pattern = analyse_rhythm(events, duration, window)
        periods = locate_dangerous_periods(
            events,
            duration,
            self.config.get_flash_period_params(),
            intensity_above(self.config.dangerous_flash_intensity),
            window,
        )
        risk = assess_flash_risk(stats, self._risk_params, pattern)

        logger.info(
            "Flash analysis: %d flashes, max rate %.1f/s, exceeds threshold: %s",
            stats.total_flashes, stats.max_rate, risk.exceeds_threshold,
        )

        return FlashAnalysis(
            events=events,
            statistics=stats,
            risk=risk,
            pattern=pattern,
            windows=count_windows(events, duration, window),
            durations=flash_durations(events, self.config.dangerous_flash_intensity),
            dangerous_periods=periods,
            intensity=intensity_summary(events),
        )

    def analyse_red_flashes(
        self,
        samples: Sequence[RedSample],
        duration: float,
    ) -> RedFlashAnalysis:
        """
        Analyse red flashes in a red sample sequence.

        Args:
            samples: Time-ordered red samples
            duration: Analysed duration in seconds

        Returns:
            RedFlashAnalysis with events, statistics, periods and risk
        """
        window = self.config.analysis_window_size
        events = self.red.detect(samples)
        stats = calculate_statistics(events, duration, window)
        periods = locate_dangerous_periods(
            events,
            duration,
            self.config.get_red_period_params(),
            saturation_above(self.config.red_saturation_threshold),
            window,
        )
        risk = assess_red_flash_risk(stats, events, self._risk_params)

        logger.info(
            "Red flash analysis: %d red flashes, max rate %.1f/s, exceeds red threshold: %s",
            stats.total_flashes, stats.max_rate, risk.exceeds_red_threshold,
        )

        return RedFlashAnalysis(
            events=events,
            statistics=stats,
            risk=risk,
            windows=count_windows(events, duration, window),
            durations=red_flash_durations(events),
            dangerous_periods=periods,
        )

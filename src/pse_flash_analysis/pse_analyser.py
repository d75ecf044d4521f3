# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""PSE analyser: assembles flash analyses into a broadcast safety verdict."""

import json
import logging
import math
import time
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from pse_flash_analysis.configuration import (
    STANDARDS_LAST_UPDATED,
    STANDARDS_VERSIONS,
    Configuration,
)
from pse_flash_analysis.flash_detection import FlashDetection
from pse_flash_analysis.frame_data import LuminanceSample, RedSample, seconds_to_timespan
from pse_flash_analysis.result import (
    BroadcastCompliance,
    FlashAnalysis,
    LuminanceAnalysis,
    PSEAnalysis,
    RedFlashAnalysis,
    TimePeriod,
    most_severe_period,
)
from pse_flash_analysis.risk_assessment import combine_scores, score_to_risk_level

logger = logging.getLogger(__name__)

ANALYSIS_METHOD = "windowed-flash-rate/1.0"

# Standards violated outright by each exceeded threshold
FLASH_VIOLATIONS = ("ITC", "Ofcom", "FCC")
RED_FLASH_VIOLATIONS = ("Ofcom", "EBU Tech 3253", "FCC")


def luminance_variation(samples: Sequence[LuminanceSample]) -> LuminanceAnalysis:
    """Frame-to-frame brightness variation, ignoring non-finite samples."""
    values = np.array([s.luminance for s in samples], dtype=np.float64)
    values = values[np.isfinite(values)]
    if values.size < 2:
        return LuminanceAnalysis()

    changes = np.abs(np.diff(values))
    return LuminanceAnalysis(
        max_luminance_change=float(changes.max()),
        average_change=float(changes.mean()),
        standard_deviation=float(values.std()),
        peak_to_peak=float(np.ptp(values)),
    )


class PSEAnalyser:
    """
    Main analyser for photosensitive epilepsy flash risk.

    Each call to `analyse` is an independent, pure computation over the
    given sample sequences; one analyser may be shared between workers.
    """

    def __init__(self, config: Optional[Configuration] = None):
        """
        Initialize PSE analyser.

        Args:
            config: Configuration parameters (uses defaults if None)
        """
        self.config = config or Configuration()

    def analyse(
        self,
        luminance_samples: Sequence[LuminanceSample],
        red_samples: Sequence[RedSample] = (),
        fps: Optional[float] = None,
        duration: Optional[float] = None,
    ) -> PSEAnalysis:
        """
        Analyse sampled luminance and red sequences for PSE flash risk.

        Args:
            luminance_samples: Time-ordered luminance samples
            red_samples: Time-ordered red samples (independently sampled)
            fps: Nominal frame rate (configured default if missing)
            duration: Analysed duration in seconds; derived from the samples
                when missing or not positive

        Returns:
            PSEAnalysis with the overall verdict and all intermediate results
        """
        start_time = time.perf_counter()

        detection = FlashDetection(self.config, fps)
        duration = self.analysed_duration(luminance_samples, red_samples, detection.fps, duration)

        logger.info(
            "PSE analysis started: %d luminance samples, %d red samples, %.2f fps, %.2fs",
            len(luminance_samples), len(red_samples), detection.fps, duration,
        )

        flash = detection.analyse_flashes(luminance_samples, duration)
        red = detection.analyse_red_flashes(red_samples, duration)

        overall_score = combine_scores((flash.risk.risk_score, red.risk.risk_score))
        safe_for_broadcast = not flash.exceeds_threshold and not red.exceeds_red_threshold
        periods = flash.dangerous_periods + red.dangerous_periods
        worst = most_severe_period(periods)

        requires_warning = (
            not safe_for_broadcast
            or overall_score > self.config.warning_risk_score
            or len(periods) > 0
        )

        confidence = self.config.analysis_confidence
        if len(luminance_samples) < self.config.min_reliable_samples:
            confidence = self.config.low_sample_confidence

        result = PSEAnalysis(
            pse_risk_level=score_to_risk_level(overall_score, self.config.risk_level_cutoffs),
            overall_risk_score=overall_score,
            max_risk_timestamp=worst.start_time if worst is not None else 0.0,
            risk_reason=self._risk_reason(flash, red, periods, worst),
            safe_for_broadcast=safe_for_broadcast,
            requires_warning=requires_warning,
            broadcast_compliance=self.check_broadcast_compliance(overall_score, flash, red),
            flash_analysis=flash,
            red_flash_analysis=red,
            luminance_analysis=luminance_variation(luminance_samples),
            analysis_duration=duration,
            sampling_rate=detection.fps,
            standards_version=", ".join(f"{k} {v}" for k, v in STANDARDS_VERSIONS.items()),
            analysis_method=ANALYSIS_METHOD,
            confidence=confidence,
        )

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "PSE analysis ended in %d ms: risk %s (%.1f), safe for broadcast: %s",
            elapsed_ms, result.pse_risk_level.value, overall_score, safe_for_broadcast,
        )

        return result

    def analysed_duration(
        self,
        luminance_samples: Sequence[LuminanceSample],
        red_samples: Sequence[RedSample],
        fps: float,
        duration: Optional[float] = None,
    ) -> float:
        """
        Resolve the analysed duration.

        A usable caller-supplied duration wins; otherwise the span covered
        by the samples is used (last timestamp plus one frame).
        """
        if duration is not None:
            try:
                duration = float(duration)
            except (TypeError, ValueError):
                duration = None
        if duration is not None and math.isfinite(duration) and duration > 0:
            return duration

        timestamps = [s.timestamp for s in luminance_samples] + [s.timestamp for s in red_samples]
        timestamps = [t for t in timestamps if math.isfinite(t)]
        if not timestamps:
            return 0.0
        return max(timestamps) + 1.0 / fps

    def check_broadcast_compliance(
        self,
        overall_score: float,
        flash: FlashAnalysis,
        red: RedFlashAnalysis,
    ) -> BroadcastCompliance:
        """Evaluate compliance with each configured broadcast standard."""
        violated = set()
        notes: List[str] = []
        score = 100.0

        if flash.exceeds_threshold:
            violated.update(FLASH_VIOLATIONS)
            notes.append(f"Exceeds general flash threshold of {self.config.max_safe_flash_rate:g} Hz")
            score -= 20.0

        if red.exceeds_red_threshold:
            violated.update(RED_FLASH_VIOLATIONS)
            notes.append(f"Exceeds red flash threshold of {self.config.max_safe_red_flash_rate:g} Hz")
            score -= 30.0

        standards = {}
        for name, ceiling in self.config.compliance_thresholds.items():
            within_ceiling = overall_score <= ceiling
            if not within_ceiling:
                notes.append(f"Risk score {overall_score:.1f} above {name} limit of {ceiling:g}")
            standards[name] = within_ceiling and name not in violated

        if score >= 90.0:
            level = "full"
        elif score >= 70.0:
            level = "partial"
        else:
            level = "non-compliant"

        return BroadcastCompliance(
            standards=standards,
            compliance_score=score,
            compliance_level=level,
            notes=tuple(notes),
            last_updated=STANDARDS_LAST_UPDATED,
        )

    def _risk_reason(
        self,
        flash: FlashAnalysis,
        red: RedFlashAnalysis,
        periods: Sequence[TimePeriod],
        worst: Optional[TimePeriod],
    ) -> str:
        reasons = []
        if flash.exceeds_threshold:
            reasons.append(
                f"flash rate {flash.statistics.max_rate:.1f}/s exceeds "
                f"{self.config.max_safe_flash_rate:g}/s"
            )
        if red.exceeds_red_threshold:
            reasons.append(
                f"red flashes exceed limits ({red.statistics.max_rate:.1f}/s, "
                f"{red.risk.high_saturation_count} saturated)"
            )
        if worst is not None:
            reasons.append(
                f"{len(periods)} dangerous period(s), most severe {worst.risk_level.value} "
                f"at {seconds_to_timespan(worst.start_time)}"
            )
        if not reasons:
            return "no flash activity above safety thresholds"
        return "; ".join(reasons)

    def write_json(self, result: PSEAnalysis, path: str) -> None:
        """Write an analysis result to a JSON file."""
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Results Json written to %s", out_path)

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Flash detection base class and implementations."""

import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from pse_flash_analysis.configuration import FlashParams
from pse_flash_analysis.flash_merger import FlashMerger
from pse_flash_analysis.frame_data import (
    FlashEvent,
    FlashKind,
    LuminanceSample,
    RedFlashEvent,
    RedSample,
)


class Flash(ABC):
    """Abstract base class for flash detection (luminance and red)."""

    def __init__(self, flash_params: FlashParams, fps: Optional[float] = None):
        """
        Initialize flash detector.

        Args:
            flash_params: Configuration parameters for this channel
            fps: Nominal frame rate; the configured default is used when
                missing or not positive
        """
        self.params = flash_params
        self.fps = self.resolve_fps(fps, flash_params.default_fps)
        self.frame_interval = 1.0 / self.fps

    @staticmethod
    def resolve_fps(fps: Optional[float], default: float) -> float:
        """Return `fps` if usable, otherwise `default`."""
        if fps is None:
            return default
        try:
            fps = float(fps)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(fps) or fps <= 0:
            return default
        return fps

    @abstractmethod
    def sample_values(self, samples: Sequence) -> np.ndarray:
        """Extract the per-sample signal this detector thresholds."""

    @abstractmethod
    def _create_event(self, sample, intensity: float, duration: float):
        """Build an event for a candidate sample."""

    def _accept(self, sample) -> bool:
        """Whether a candidate sample may produce an event."""
        return True

    @property
    def effective_threshold(self) -> float:
        """Raw (unweighted) frame-to-frame change needed to register a flash."""
        return self.params.flash_threshold / self.params.luminance_weight

    def detect(self, samples: Sequence) -> Tuple[Union[FlashEvent, RedFlashEvent], ...]:
        """
        Detect and merge flash events in a time-ordered sample sequence.

        Args:
            samples: Time-ordered samples for this channel

        Returns:
            Merged events in time order (empty for fewer than 2 samples)
        """
        if len(samples) < 2:
            return ()

        values = self.sample_values(samples)
        weighted = np.abs(np.diff(values)) * self.params.luminance_weight

        with np.errstate(invalid="ignore"):
            candidates = np.flatnonzero(weighted > self.params.flash_threshold) + 1

        merger = FlashMerger(self.params.merge_tolerance)
        for i in candidates:
            sample = samples[i]
            if not self._accept(sample):
                continue
            intensity = self.relative_change(weighted[i - 1], values[i], values[i - 1])
            duration = self.estimate_duration(values, i)
            merger.push(self._create_event(sample, intensity, duration))

        return merger.finish()

    def estimate_duration(self, values: np.ndarray, index: int) -> float:
        """
        Estimate how long a flash starting at `index` lasts.

        Starts at one frame and adds a frame for each following sample (up
        to the lookahead limit) that still differs from the flash sample by
        more than the relaxed continuation threshold.
        """
        base = values[index]
        limit = self.params.flash_threshold * self.params.continuation_factor
        frames = 1

        for value in values[index + 1:index + 1 + self.params.lookahead_frames]:
            if abs(value - base) * self.params.luminance_weight > limit:
                frames += 1
            else:
                break

        return frames / self.fps

    @staticmethod
    def relative_change(delta: float, current: float, previous: float) -> float:
        """Change relative to the brighter of two samples, clipped to [0, 1]."""
        peak = max(current, previous)
        if not peak > 0:
            return 1.0
        return float(min(max(delta / peak, 0.0), 1.0))


class LuminanceFlash(Flash):
    """General flash detection over average frame luminance."""

    def sample_values(self, samples: Sequence[LuminanceSample]) -> np.ndarray:
        return np.array([s.luminance for s in samples], dtype=np.float64)

    def _create_event(self, sample: LuminanceSample, intensity: float, duration: float) -> FlashEvent:
        return FlashEvent(
            timestamp=sample.timestamp,
            intensity=intensity,
            duration=duration,
            kind=FlashKind.classify(intensity),
        )


class RedFlash(Flash):
    """
    Red flash detection.

    Red changes are weighted before thresholding, the threshold is lower
    than for general flashes, and only highly saturated samples count.
    """

    def sample_values(self, samples: Sequence[RedSample]) -> np.ndarray:
        return np.array([s.red_intensity for s in samples], dtype=np.float64)

    def _accept(self, sample: RedSample) -> bool:
        threshold = self.params.saturation_threshold
        if threshold is None:
            return True
        # Out-of-range (or NaN) saturation fails the check
        return threshold < sample.saturation <= 1.0

    def _create_event(self, sample: RedSample, intensity: float, duration: float) -> RedFlashEvent:
        return RedFlashEvent(
            timestamp=sample.timestamp,
            intensity=intensity,
            duration=duration,
            saturation=sample.saturation,
            red_value=sample.red_intensity,
        )

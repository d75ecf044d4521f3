# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Sample and event data structures for PSE flash analysis."""

from dataclasses import dataclass, replace
from enum import Enum


def seconds_to_timespan(seconds: float) -> str:
    """Convert seconds to HH:MM:SS.ffffff format."""
    ms = seconds * 1000.0
    secs = (ms / 1000.0) % 60
    minutes = int((ms / (1000 * 60)) % 60)
    hours = int(ms / (1000 * 60 * 60))
    return f"{hours:02d}:{minutes:02d}:{secs:09.6f}"


class FlashKind(str, Enum):
    """Qualitative flash type, ordered by severity."""
    Subtle = "subtle"
    Gradual = "gradual"
    Sudden = "sudden"

    @property
    def severity(self) -> int:
        return _KIND_SEVERITY[self]

    @classmethod
    def classify(cls, intensity: float) -> "FlashKind":
        """Classify a flash by its relative intensity."""
        if intensity > 0.8:
            return cls.Sudden
        elif intensity > 0.4:
            return cls.Gradual
        return cls.Subtle

    @classmethod
    def most_severe(cls, a: "FlashKind", b: "FlashKind") -> "FlashKind":
        return a if a.severity >= b.severity else b


_KIND_SEVERITY = {
    FlashKind.Subtle: 0,
    FlashKind.Gradual: 1,
    FlashKind.Sudden: 2,
}


@dataclass(frozen=True)
class LuminanceSample:
    """Average luminance of one sampled frame."""
    timestamp: float
    luminance: float


@dataclass(frozen=True)
class RedSample:
    """Average red intensity and saturation of one sampled frame."""
    timestamp: float
    red_intensity: float
    saturation: float


@dataclass(frozen=True)
class FlashEvent:
    """A detected luminance flash."""
    timestamp: float
    intensity: float
    duration: float
    kind: FlashKind = FlashKind.Subtle

    @property
    def end(self) -> float:
        return self.timestamp + self.duration

    def merge(self, other: "FlashEvent") -> "FlashEvent":
        """
        Fold a later event into this one.

        The merged span covers both events, intensities are averaged and
        the more severe kind is kept.
        """
        end = max(self.end, other.end)
        return replace(
            self,
            duration=end - self.timestamp,
            intensity=(self.intensity + other.intensity) / 2,
            kind=FlashKind.most_severe(self.kind, other.kind),
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "intensity": self.intensity,
            "duration": self.duration,
            "type": self.kind.value,
        }


@dataclass(frozen=True)
class RedFlashEvent:
    """A detected saturated red flash."""
    timestamp: float
    intensity: float
    duration: float
    saturation: float
    red_value: float

    @property
    def end(self) -> float:
        return self.timestamp + self.duration

    def merge(self, other: "RedFlashEvent") -> "RedFlashEvent":
        """Fold a later red event into this one, keeping the peak saturation and red value."""
        end = max(self.end, other.end)
        return replace(
            self,
            duration=end - self.timestamp,
            intensity=(self.intensity + other.intensity) / 2,
            saturation=max(self.saturation, other.saturation),
            red_value=max(self.red_value, other.red_value),
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "intensity": self.intensity,
            "duration": self.duration,
            "saturation": self.saturation,
            "red_value": self.red_value,
        }

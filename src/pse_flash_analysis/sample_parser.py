# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Parsing of per-frame sampler output into sample sequences."""

import logging
import math
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from pse_flash_analysis.frame_data import LuminanceSample, RedSample

logger = logging.getLogger(__name__)

Sample = TypeVar("Sample", LuminanceSample, RedSample)


def parse_frame_rate(frame_rate: str) -> Optional[float]:
    """
    Parse a frame rate given as a ratio ("30000/1001") or a decimal ("29.97").

    Returns None when the rate cannot be parsed or is not positive.
    """
    frame_rate = (frame_rate or "").strip()
    if not frame_rate:
        return None

    try:
        if "/" in frame_rate:
            num, den = frame_rate.split("/", 1)
            rate = float(num) / float(den)
        else:
            rate = float(frame_rate)
    except (ValueError, ZeroDivisionError):
        return None

    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def _fields(text: str, min_fields: int):
    """Yield the numeric fields of each parsable line."""
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = [p.strip() for p in line.split(",")]
        if len(parts) < min_fields:
            logger.debug("Skipping line %d: expected %d fields: %r", lineno, min_fields, line)
            continue
        try:
            values = [float(p) for p in parts[:3]]
        except ValueError:
            logger.debug("Skipping unparsable line %d: %r", lineno, line)
            continue
        yield values


def parse_luminance_csv(text: str) -> List[LuminanceSample]:
    """Parse `timestamp,luminance` lines (header and malformed lines are skipped)."""
    return [
        LuminanceSample(timestamp=values[0], luminance=values[1])
        for values in _fields(text, 2)
    ]


def parse_red_csv(text: str) -> List[RedSample]:
    """
    Parse `timestamp,red[,saturation]` lines.

    Without a saturation column the saturation is estimated from the red
    level on a 0-255 scale.
    """
    samples = []
    for values in _fields(text, 2):
        timestamp, red = values[0], values[1]
        if len(values) > 2:
            saturation = values[2]
        else:
            saturation = min(red / 255.0, 1.0)
        samples.append(RedSample(timestamp=timestamp, red_intensity=red, saturation=saturation))
    return samples


def read_samples(path: str, parser: Callable[[str], Sequence[Sample]]) -> Sequence[Sample]:
    """Read a sampler output file and parse it with `parser`."""
    text = Path(path).read_text()
    samples = parser(text)
    logger.info("Read %d samples from %s", len(samples), path)
    return samples

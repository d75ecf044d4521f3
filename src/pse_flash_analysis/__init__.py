# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""
PSE flash analysis: photosensitive epilepsy risk from sampled video levels.

Detects, from per-frame luminance and red samples:
- General (luminance) flashes
- Saturated red flashes
- Regular strobe rhythms

and scores them against broadcast flash-rate ceilings.
"""

from pse_flash_analysis.configuration import Configuration
from pse_flash_analysis.frame_data import FlashEvent, LuminanceSample, RedFlashEvent, RedSample
from pse_flash_analysis.pse_analyser import PSEAnalyser
from pse_flash_analysis.result import PSEAnalysis, RiskLevel

__version__ = "1.0.0"
__all__ = [
    "PSEAnalyser",
    "Configuration",
    "LuminanceSample",
    "RedSample",
    "FlashEvent",
    "RedFlashEvent",
    "PSEAnalysis",
    "RiskLevel",
]

#!/usr/bin/env python3
"""Basic usage example for pse_flash_analysis."""

import logging

from pse_flash_analysis import Configuration, LuminanceSample, PSEAnalyser, RedSample


def main():
    logging.basicConfig(level=logging.INFO)

    # Create configuration (uses defaults)
    config = Configuration()

    # Or customize configuration
    # config.max_safe_flash_rate = 3.0
    # config = Configuration.from_json("settings/")

    # Create analyser
    analyser = PSEAnalyser(config)

    # Synthetic 2 second strobe: black/white every 5 frames at 25 fps
    fps = 25.0
    luminance = [
        LuminanceSample(timestamp=i / fps, luminance=255.0 if (i // 5) % 2 else 0.0)
        for i in range(50)
    ]
    red = [RedSample(timestamp=i / fps, red_intensity=40.0, saturation=0.2) for i in range(50)]

    # Or read sampler output
    # from pse_flash_analysis.sample_parser import parse_luminance_csv, read_samples
    # luminance = read_samples("luma.csv", parse_luminance_csv)

    result = analyser.analyse(luminance, red, fps=fps, duration=2.0)

    # Check result
    if result.safe_for_broadcast and not result.requires_warning:
        print("Content passed photosensitivity check")
    elif result.safe_for_broadcast:
        print("Content passed with warnings")
    else:
        print("Content FAILED photosensitivity check")

    print(f"\nRisk: {result.pse_risk_level.value} ({result.overall_risk_score:.1f}/100)")
    print(f"Reason: {result.risk_reason}")

    # General flashes
    flash = result.flash_analysis
    print("\nFlashes:")
    print(f"  Total: {flash.statistics.total_flashes}")
    print(f"  Max rate: {flash.statistics.max_rate:.1f}/s")
    print(f"  Pattern: {flash.pattern.pattern_type.value}")

    # Compliance per standard
    print("\nCompliance:")
    for standard, compliant in result.broadcast_compliance.standards.items():
        print(f"  {standard}: {'pass' if compliant else 'fail'}")

    analyser.write_json(result, "Results/result.json")


if __name__ == "__main__":
    main()

# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Command-line interface for PSE flash analysis."""

import argparse
import logging
import sys
from pathlib import Path

from pse_flash_analysis.configuration import Configuration
from pse_flash_analysis.pse_analyser import PSEAnalyser
from pse_flash_analysis.frame_data import seconds_to_timespan
from pse_flash_analysis.sample_parser import (
    parse_frame_rate,
    parse_luminance_csv,
    parse_red_csv,
    read_samples,
)

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_NOT_SAFE = 1
EXIT_WARNING = 2
EXIT_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pse-analyse",
        description="Photosensitive epilepsy flash analysis of sampled luminance and red levels",
        epilog="This output report is for informational purposes only "
               "and should not be used as certification or validation of "
               "compliance with any legal, regulatory or other requirements.",
    )

    parser.add_argument(
        "luminance",
        help="CSV of timestamp,luminance samples",
    )

    parser.add_argument(
        "red",
        nargs="?",
        default=None,
        help="CSV of timestamp,red[,saturation] samples",
    )

    parser.add_argument(
        "--fps",
        help="Nominal frame rate, e.g. 25 or 30000/1001",
        default="",
    )

    parser.add_argument(
        "--duration",
        type=float,
        help="Analysed duration in seconds (derived from the samples by default)",
        default=None,
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to directory containing appsettings.json",
        default=".",
    )

    parser.add_argument(
        "-j", "--json",
        help="Write the full analysis to this JSON file",
        default=None,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity (default: WARNING)",
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the pse-analyse CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Validate input files
    for path in (args.luminance, args.red):
        if path is not None and not Path(path).exists():
            print(f"Error: Sample file not found: {path}")
            return EXIT_NOT_SAFE

    try:
        config = Configuration.from_json(args.config)
        analyser = PSEAnalyser(config)

        luminance = read_samples(args.luminance, parse_luminance_csv)
        red = read_samples(args.red, parse_red_csv) if args.red else []

        result = analyser.analyse(
            luminance,
            red,
            fps=parse_frame_rate(args.fps),
            duration=args.duration,
        )

        if args.json:
            analyser.write_json(result, args.json)

    except Exception as e:
        logger.exception("Analysis failed")
        print(f"Error during analysis: {e}")
        return EXIT_ERROR

    flash = result.flash_analysis
    red_flash = result.red_flash_analysis

    # Print summary
    print("\n" + "=" * 50)
    print("PSE ANALYSIS SUMMARY")
    print("=" * 50)
    print(f"Risk Level: {result.pse_risk_level.value} ({result.overall_risk_score:.1f}/100)")
    print(f"Safe For Broadcast: {'yes' if result.safe_for_broadcast else 'no'}")
    print(f"Requires Warning: {'yes' if result.requires_warning else 'no'}")
    print(f"Reason: {result.risk_reason}")
    print(f"Duration: {seconds_to_timespan(result.analysis_duration)} at {result.sampling_rate:g} fps")

    print(f"\nFlashes: {flash.statistics.total_flashes} (max {flash.statistics.max_rate:.1f}/s, "
          f"pattern {flash.pattern.pattern_type.value})")
    print(f"Red Flashes: {red_flash.statistics.total_flashes} (max {red_flash.statistics.max_rate:.1f}/s)")

    periods = result.dangerous_periods
    if periods:
        print("\nDangerous Periods:")
        for period in periods:
            print(f"  {seconds_to_timespan(period.start_time)} [{period.risk_level.value}] "
                  f"{period.description}")

    if args.json:
        print(f"\nResult JSON: {args.json}")

    # Exit with appropriate code
    if not result.safe_for_broadcast:
        return EXIT_NOT_SAFE
    elif result.requires_warning:
        return EXIT_WARNING
    return EXIT_PASS


if __name__ == "__main__":
    sys.exit(main())

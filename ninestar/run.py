"""
CLI wrapper for compute_chart().

Usage:
    ninestar [DATE] [--to END] [--timezone TZ | --latitude LAT --longitude LON]
             [--ephe-path PATH] [-v]
    ninestar --terms YEAR
"""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime

from ninestar.astro_calendar import solar_terms
from ninestar.config import ChartConfig, timezone_for_location
from ninestar.create_chart import chart_range, compute_chart
from ninestar.errors import NineStarError


def build_parser():
    parser = argparse.ArgumentParser(prog="ninestar",
                                     description="Compute a Nine-Star-Ki chart.")
    parser.add_argument("date", nargs="?", default=None,
                        help="ISO date (default: today in the reference timezone)")
    parser.add_argument("--to", dest="end", default=None,
                        help="compute every date up to END (inclusive)")
    parser.add_argument("--terms", type=int, default=None, metavar="YEAR",
                        help="list the 24 solar terms of YEAR instead")
    parser.add_argument("--timezone", default=None, help="reference timezone name")
    parser.add_argument("--latitude", type=float, default=None)
    parser.add_argument("--longitude", type=float, default=None)
    parser.add_argument("--ephe-path", dest="ephe_path", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _config_from_args(args) -> ChartConfig:
    config = ChartConfig.from_env()
    overrides = {}
    if args.latitude is not None or args.longitude is not None:
        if args.latitude is None or args.longitude is None:
            raise ValueError("--latitude and --longitude must be given together")
        overrides["timezone"] = timezone_for_location(args.latitude, args.longitude)
    if args.timezone:
        overrides["timezone"] = args.timezone
    if args.ephe_path:
        overrides["ephe_path"] = args.ephe_path
    return dataclasses.replace(config, **overrides)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _config_from_args(args)
        if args.terms is not None:
            result = [t.to_dict() for t in solar_terms(args.terms, config)]
        else:
            start = args.date or datetime.now(config.tzinfo).date()
            if args.end:
                result = chart_range(start, args.end, config)
            else:
                result = compute_chart(start, config)
    except (NineStarError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

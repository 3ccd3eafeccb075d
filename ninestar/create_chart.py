"""
Chart creation library.
Computes the full Nine-Star-Ki chart for a date: the three central stars,
their rings and the per-palace element comparison.

The result is a plain JSON-ready dict; rendering is left to the caller.

Usage from Python:
    from ninestar.create_chart import compute_chart
    chart = compute_chart("2025-02-26")
    chart["stars"]       # {"year": 2, "month": 2, "day": 9}
    chart["comparison"]  # nine labels in DIRECTIONS order
"""

import logging

from ninestar.astro_calendar import DateInput, date_range, to_civil_date
from ninestar.config import DEFAULT_CONFIG, ChartConfig
from ninestar.rings import DIRECTION_NAMES, DIRECTIONS, ring_for
from ninestar.stars import STAR_NAMES, daily_nine_star, month_star, year_star
from ninestar.wuxing import compare_rings

log = logging.getLogger(__name__)


def compute_chart(value: DateInput, config: ChartConfig = DEFAULT_CONFIG,
                  ephemeris=None) -> dict:
    """
    Compute the Nine-Star-Ki chart for one civil date.

    Returns:
        dict with keys: date, timezone, stars, star_names, rings,
        directions, comparison, day_star
    """
    day = to_civil_date(value, config)

    ds = daily_nine_star(day, config, ephemeris)
    stars = {
        "year": year_star(day, config),
        "month": month_star(day, config),
        "day": ds.star_number,
    }
    rings = {position: ring_for(star) for position, star in stars.items()}
    comparison = compare_rings(rings["day"], rings["month"], rings["year"])

    log.debug("Chart for %s: stars=%s comparison=%s", day, stars, comparison)

    return {
        "date": day.isoformat(),
        "timezone": config.timezone,
        "stars": stars,
        "star_names": {position: STAR_NAMES[star] for position, star in stars.items()},
        "rings": rings,
        "directions": [{"code": code, "name": DIRECTION_NAMES[code]} for code in DIRECTIONS],
        "comparison": comparison,
        "day_star": ds.to_dict(),
    }


def chart_range(start: DateInput, end: DateInput, config: ChartConfig = DEFAULT_CONFIG,
                ephemeris=None) -> list[dict]:
    """Charts for every date from start to end (inclusive)."""
    return [compute_chart(day, config, ephemeris) for day in date_range(start, end, config)]

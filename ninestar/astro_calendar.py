"""
Calendar utilities for Nine-Star-Ki calculations.
Handles civil-date normalization, the 60-day Jia-Zi cycle,
solstice lookups and the 24 solar terms.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Union

from ninestar.config import DEFAULT_CONFIG, ChartConfig
from ninestar.ephemeris import ephemeris_for
from ninestar.errors import AnchorSearchExhausted, EphemerisFieldMissing, InvalidDateInput

log = logging.getLogger(__name__)

DateInput = Union[str, date, datetime, int, float]


# ============================================================
# CIVIL DATE NORMALIZATION
# ============================================================

def to_civil_date(value: DateInput, config: ChartConfig = DEFAULT_CONFIG) -> date:
    """
    Normalize any supported date input to a civil date in the reference timezone.

    Accepted inputs:
        str       ISO date or datetime ("2025-02-26", "2025-02-26T10:00+08:00")
        datetime  aware values are converted; naive values are taken as
                  wall-clock time in the reference timezone
        date      used as-is
        int/float epoch milliseconds (UTC)

    Raises:
        InvalidDateInput: if the value can't be interpreted as a date
    """
    if isinstance(value, bool):
        raise InvalidDateInput(f"Invalid date input: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(config.tzinfo).date()

    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise InvalidDateInput(f"Invalid date input: {value!r}")
        try:
            moment = datetime.fromtimestamp(value / 1000.0, tz=config.tzinfo)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateInput(f"Invalid date input: {value!r}") from e
        return moment.date()

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidDateInput(f"Invalid date input: {value!r}") from e
        return to_civil_date(parsed, config)

    raise InvalidDateInput(f"Invalid date input: {value!r}")


def local_midnight(day: date, config: ChartConfig = DEFAULT_CONFIG) -> datetime:
    """The aware datetime at 00:00 of `day` in the reference timezone."""
    return datetime(day.year, day.month, day.day, tzinfo=config.tzinfo)


def date_range(start: DateInput, end: DateInput,
               config: ChartConfig = DEFAULT_CONFIG) -> list[date]:
    """All civil dates between start and end (inclusive)."""
    start = to_civil_date(start, config)
    end = to_civil_date(end, config)
    if end < start:
        raise ValueError(f"End date {end} is before start date {start}")

    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current += timedelta(days=1)
    return dates


# ============================================================
# SEXAGENARY (JIA-ZI) CYCLE
# ============================================================
#
# 1984-01-31 is a verified Jia-Zi day (index 0 of the 60-day
# stems-and-branches cycle) and serves as day 0 for every
# modulo calculation below.

BASE_JIA_ZI = date(1984, 1, 31)
JIA_ZI_CYCLE = 60


def days_from_base(day: date) -> int:
    """Signed whole-day difference to the base Jia-Zi."""
    return (day - BASE_JIA_ZI).days


def is_jia_zi(day: date) -> bool:
    """True if `day` sits at index 0 of the 60-day cycle."""
    return days_from_base(day) % JIA_ZI_CYCLE == 0


def nearest_jia_zi(target: date, max_offset: int = DEFAULT_CONFIG.jia_zi_search_radius) -> date:
    """
    Find the Jia-Zi day closest to `target`.

    Checks target-offset then target+offset for offset = 0..max_offset,
    so at equal distance the earlier day wins.

    Raises:
        AnchorSearchExhausted: if no Jia-Zi lies within ±max_offset days
    """
    for offset in range(max_offset + 1):
        before = target - timedelta(days=offset)
        if is_jia_zi(before):
            return before
        after = target + timedelta(days=offset)
        if is_jia_zi(after):
            return after

    raise AnchorSearchExhausted(
        f"No Jia-Zi day within ±{max_offset} days of {target.isoformat()}"
    )


# ============================================================
# SOLSTICES
# ============================================================
#
# Field names for the season instants differ between ephemeris
# libraries and versions, so the result is probed against a whitelist.

SOLSTICE_FIELDS = {
    "winter": ("DecSol", "dec_solstice", "DecSolstice", "decSolstice"),
    "summer": ("JunSol", "jun_solstice", "JunSolstice", "junSolstice"),
}


def _probe_field(result, names):
    for name in names:
        if isinstance(result, dict):
            value = result.get(name)
        else:
            value = getattr(result, name, None)
        if value is not None:
            return value
    return None


def _instant_to_datetime(value) -> datetime:
    # Some libraries wrap the instant (e.g. an AstroTime exposing .date)
    if not isinstance(value, datetime) and isinstance(getattr(value, "date", None), datetime):
        value = value.date
    if not isinstance(value, datetime):
        raise EphemerisFieldMissing(f"Unrecognised season instant: {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def solstice_date(year: int, season: str, config: ChartConfig = DEFAULT_CONFIG,
                  ephemeris=None) -> date:
    """
    Civil date (reference timezone) of the winter (December) or summer (June)
    solstice of `year`.

    Raises:
        ValueError: for a season other than "winter"/"summer"
        EphemerisFieldMissing: if the ephemeris result has none of the
            known solstice fields
    """
    if season not in SOLSTICE_FIELDS:
        raise ValueError(f"Unknown season: {season!r} (expected 'winter' or 'summer')")

    eph = ephemeris if ephemeris is not None else ephemeris_for(config.ephe_path)
    seasons = eph.season_instants(year)

    instant = _probe_field(seasons, SOLSTICE_FIELDS[season])
    if instant is None:
        raise EphemerisFieldMissing(
            "Season instants have unexpected field names; please verify the ephemeris version."
        )

    return _instant_to_datetime(instant).astimezone(config.tzinfo).date()


# ============================================================
# 24 SOLAR TERMS
# ============================================================
#
# Order 0 is the winter solstice (270°); each following term adds 15°.
# Odd orders are the 12 Jie (节) terms that bound the solar months.
#
# (month index 0-11, day) of each term's mean date minus 5 days. Day 0
# means the last day of the previous month, as in the published tables.
TERM_SEEDS = [
    (11, 16), (0, 0), (0, 13), (0, 29), (1, 14), (2, 0),
    (2, 15), (3, 0), (3, 15), (4, 0), (4, 15), (4, 31),
    (5, 16), (6, 1), (6, 17), (7, 2), (7, 18), (8, 3),
    (8, 18), (9, 3), (9, 18), (10, 3), (10, 18), (11, 3),
]
SEED_MARGIN_DAYS = 5

# (chinese, pinyin) in order 0-23
SOLAR_TERM_NAMES = [
    ("冬至", "Dong Zhi"), ("小寒", "Xiao Han"), ("大寒", "Da Han"),
    ("立春", "Li Chun"), ("雨水", "Yu Shui"), ("惊蛰", "Jing Zhe"),
    ("春分", "Chun Fen"), ("清明", "Qing Ming"), ("谷雨", "Gu Yu"),
    ("立夏", "Li Xia"), ("小满", "Xiao Man"), ("芒种", "Mang Zhong"),
    ("夏至", "Xia Zhi"), ("小暑", "Xiao Shu"), ("大暑", "Da Shu"),
    ("立秋", "Li Qiu"), ("处暑", "Chu Shu"), ("白露", "Bai Lu"),
    ("秋分", "Qiu Fen"), ("寒露", "Han Lu"), ("霜降", "Shuang Jiang"),
    ("立冬", "Li Dong"), ("小雪", "Xiao Xue"), ("大雪", "Da Xue"),
]


@dataclass(frozen=True)
class SolarTerm:
    order: int
    longitude: float
    name: str
    pinyin: str
    date: date

    @property
    def is_jie(self) -> bool:
        return self.order % 2 == 1

    def to_dict(self):
        return {
            "order": self.order,
            "longitude": self.longitude,
            "name": self.name,
            "pinyin": self.pinyin,
            "is_jie": self.is_jie,
            "date": self.date.isoformat(),
        }


def _check_order(order: int):
    if not 0 <= order < len(TERM_SEEDS):
        raise ValueError(f"Solar term order must be 0-23, got {order}")


def term_longitude(order: int) -> float:
    """Target solar longitude of a term: 0 = winter solstice = 270°."""
    _check_order(order)
    return float((order * 15 + 270) % 360)


def term_seed(year: int, order: int) -> datetime:
    """Approximate instant of a term: its mean date at 12:00 UTC."""
    _check_order(order)
    month_index, day = TERM_SEEDS[order]
    first = datetime(year, month_index + 1, 1, 12, tzinfo=timezone.utc)
    return first + timedelta(days=day - 1 + SEED_MARGIN_DAYS)


def search_direction(current_longitude: float, target: float) -> int:
    """+1 if the target is less than half a circle ahead, else -1."""
    return 1 if (target - current_longitude) % 360.0 < 180.0 else -1


def solar_term_date(year: int, order: int, config: ChartConfig = DEFAULT_CONFIG,
                    ephemeris=None) -> date:
    """
    Civil date of solar term `order` (0-23) in `year`.

    1. Seed from the mean-date table.
    2. Search for the exact longitude crossing in the shorter direction.
    3. If that fails, search once in the opposite direction.
    4. If that fails too, return the seed date.
    """
    target = term_longitude(order)
    seed = term_seed(year, order)
    eph = ephemeris if ephemeris is not None else ephemeris_for(config.ephe_path)

    direction = search_direction(eph.sun_longitude(seed), target)
    limit = config.longitude_search_days

    hit = eph.search_longitude_crossing(target, seed, direction, limit)
    if hit is None:
        log.warning("No %.0f° crossing %s of %s; retrying in the other direction",
                    target, "after" if direction > 0 else "before", seed.date())
        hit = eph.search_longitude_crossing(target, seed, -direction, limit)
    if hit is None:
        log.warning("Solar term %d of %d not found; using approximate date %s",
                    order, year, seed.date())
        return seed.astimezone(config.tzinfo).date()

    return _instant_to_datetime(hit).astimezone(config.tzinfo).date()


def solar_terms(year: int, config: ChartConfig = DEFAULT_CONFIG,
                ephemeris=None) -> list[SolarTerm]:
    """All 24 solar terms for `year`, in order 0-23."""
    terms = []
    for order, (name, pinyin) in enumerate(SOLAR_TERM_NAMES):
        terms.append(SolarTerm(
            order=order,
            longitude=term_longitude(order),
            name=name,
            pinyin=pinyin,
            date=solar_term_date(year, order, config, ephemeris),
        ))
    return terms


def jie_terms(year: int, config: ChartConfig = DEFAULT_CONFIG,
              ephemeris=None) -> list[SolarTerm]:
    """The 12 Jie (节) month-boundary terms of `year`, chronologically."""
    jie = [t for t in solar_terms(year, config, ephemeris) if t.is_jie]
    return sorted(jie, key=lambda t: t.date)


if __name__ == "__main__":
    for term in solar_terms(2026):
        print(f"  {term.order:2d} {term.name} {term.pinyin:12s} {term.longitude:5.0f}° {term.date}")

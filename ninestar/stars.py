"""
Nine-Star-Ki central star computation.

Handles:
- Year star (Li Chun cutoff approximated by Feb 4)
- Month star (mean-month count from a fixed epoch)
- Day star (Jia-Zi day nearest each solstice, yang/yin half-years)

Every star is an integer 1-9. The "1-indexed modulo 9" used throughout
never yields 0: a zero residue means 9.
"""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ninestar.astro_calendar import DateInput, nearest_jia_zi, solstice_date, to_civil_date
from ninestar.config import DEFAULT_CONFIG, ChartConfig


# ============================================================
# NUMERALS AND NAMES
# ============================================================

NUM_TO_CHAR = {1: "一", 2: "二", 3: "三", 4: "四", 5: "五", 6: "六", 7: "七", 8: "八", 9: "九"}
CHAR_TO_NUM = {char: num for num, char in NUM_TO_CHAR.items()}

STAR_NAMES = {
    1: "一白水星",
    2: "二黒土星",
    3: "三碧木星",
    4: "四緑木星",
    5: "五黄土星",
    6: "六白金星",
    7: "七赤金星",
    8: "八白土星",
    9: "九紫火星",
}


def mod9(n: int) -> int:
    """Reduce n to 1-9 (a residue of 0 becomes 9)."""
    return n % 9 or 9


def _check_star(n: int):
    if n not in NUM_TO_CHAR:
        raise ValueError(f"Star number must be 1-9, got {n!r}")


def numeral(n: int) -> str:
    _check_star(n)
    return NUM_TO_CHAR[n]


def number_of(char: str) -> int:
    """Star number of a numeral character."""
    if char not in CHAR_TO_NUM:
        raise ValueError(f"Not a star numeral: {char!r}")
    return CHAR_TO_NUM[char]


def star_name(n: int) -> str:
    _check_star(n)
    return STAR_NAMES[n]


# ============================================================
# YEAR AND MONTH STARS
# ============================================================

# Li Chun (start of spring) falls on Feb 3-5; the year star flips on Feb 4.
RISSHUN_MONTH = 2
RISSHUN_DAY = 4

# 2023-02-04 opened a month ruled by 八白 (8)
MONTH_EPOCH = date(2023, 2, 4)
MONTH_EPOCH_STAR = 8
MEAN_MONTH_DAYS = 30.436875


def year_star(value: DateInput, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """
    Central star of the year.

    Dates before Feb 4 belong to the previous star year.
    """
    day = to_civil_date(value, config)
    base = day.year
    if day < date(day.year, RISSHUN_MONTH, RISSHUN_DAY):
        base -= 1
    return mod9(11 - base % 9)


def elapsed_months(day: date) -> int:
    """Whole mean months between MONTH_EPOCH and `day` (negative before it)."""
    return math.floor((day - MONTH_EPOCH).days / MEAN_MONTH_DAYS)


def month_star(value: DateInput, config: ChartConfig = DEFAULT_CONFIG) -> int:
    """
    Central star of the month.

    Counts mean-length months from MONTH_EPOCH rather than real Jie
    boundaries, so dates within a day or two of a Jie can be off by one.
    """
    day = to_civil_date(value, config)
    return mod9(MONTH_EPOCH_STAR - elapsed_months(day))


# ============================================================
# DAY STAR
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


@dataclass(frozen=True)
class DayStar:
    date: date
    star_number: int
    star_name: str
    half_year: Polarity
    reference_jia_zi: date  # anchor of the current half-year
    delta: int  # days since reference_jia_zi

    def to_dict(self):
        return {
            "date_iso": self.date.isoformat(),
            "star_number": self.star_number,
            "star_name": self.star_name,
            "half_year": self.half_year.value,
            "reference_jia_zi_iso": self.reference_jia_zi.isoformat(),
            "delta": self.delta,
        }


def half_year_anchors(day: date, config: ChartConfig = DEFAULT_CONFIG,
                      ephemeris=None) -> tuple[date, date]:
    """
    The (winter, summer) Jia-Zi anchors framing `day`.

    Jan-Jun look back to the previous December solstice; Jul-Dec use the
    December solstice of the same year. The summer anchor always comes
    from the June solstice of `day`'s year.
    """
    winter_year = day.year - 1 if day.month <= 6 else day.year
    radius = config.jia_zi_search_radius
    winter = nearest_jia_zi(solstice_date(winter_year, "winter", config, ephemeris), radius)
    summer = nearest_jia_zi(solstice_date(day.year, "summer", config, ephemeris), radius)
    return winter, summer


def daily_nine_star(value: DateInput, config: ChartConfig = DEFAULT_CONFIG,
                    ephemeris=None) -> DayStar:
    """
    Compute the day star for a civil date.

    Yang half-year: from the winter anchor (inclusive) to the summer anchor
    (exclusive), counting up from 1. Otherwise yin, counting down from 9
    from the summer anchor.

    Raises:
        InvalidDateInput: if `value` can't be parsed
        AnchorSearchExhausted: if a solstice has no Jia-Zi day within
            config.jia_zi_search_radius
    """
    day = to_civil_date(value, config)
    winter, summer = half_year_anchors(day, config, ephemeris)

    in_yang = winter <= day < summer
    reference = winter if in_yang else summer
    delta = (day - reference).days

    residue = delta % 9
    star = 1 + residue if in_yang else 9 - residue
    if star == 0:
        star = 9

    return DayStar(
        date=day,
        star_number=star,
        star_name=STAR_NAMES[star],
        half_year=Polarity.YANG if in_yang else Polarity.YIN,
        reference_jia_zi=reference,
        delta=delta,
    )


def day_star(value: DateInput, config: ChartConfig = DEFAULT_CONFIG,
             ephemeris=None) -> int:
    return daily_nine_star(value, config, ephemeris).star_number


# ============================================================
# ALL THREE
# ============================================================

@dataclass(frozen=True)
class NineKi:
    year_star: int
    month_star: int
    day_star: int

    def to_dict(self):
        return {"year": self.year_star, "month": self.month_star, "day": self.day_star}


def nine_ki(value: DateInput, config: ChartConfig = DEFAULT_CONFIG,
            ephemeris=None) -> NineKi:
    """Year, month and day central stars for one date."""
    day = to_civil_date(value, config)
    return NineKi(
        year_star=year_star(day, config),
        month_star=month_star(day, config),
        day_star=day_star(day, config, ephemeris),
    )

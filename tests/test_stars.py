import re
from datetime import date, datetime, timezone

import pytest

from ninestar.config import ChartConfig
from ninestar.errors import AnchorSearchExhausted, InvalidDateInput
from ninestar.stars import (
    Polarity,
    daily_nine_star,
    day_star,
    elapsed_months,
    half_year_anchors,
    mod9,
    month_star,
    nine_ki,
    number_of,
    numeral,
    star_name,
    year_star,
)


@pytest.mark.parametrize("n", range(-40, 41))
def test_mod9_never_zero(n):
    result = mod9(n)
    assert 1 <= result <= 9
    assert (result - n) % 9 == 0


def test_numerals_and_names():
    assert numeral(9) == "九"
    assert number_of("三") == 3
    assert star_name(5) == "五黄土星"
    with pytest.raises(ValueError):
        numeral(0)
    with pytest.raises(ValueError):
        number_of("十")


# ============================================================
# YEAR / MONTH
# ============================================================

@pytest.mark.parametrize("value, expected", [
    ("2025-02-26", 2),
    ("2025-02-04", 2),
    ("2025-02-03", 3),
    ("2024-02-04", 3),
    ("2024-02-03", 4),
    ("2000-06-01", 9),
])
def test_year_star(value, expected):
    assert year_star(value) == expected


def test_month_star_epoch():
    assert elapsed_months(date(2023, 2, 4)) == 0
    assert month_star("2023-02-04") == 8
    assert month_star("2023-03-08") == 7


@pytest.mark.parametrize("value, expected", [
    ("2025-02-26", 2),
    ("2025-01-15", 3),
    ("2023-01-01", 1),
])
def test_month_star(value, expected):
    assert month_star(value) == expected


# ============================================================
# DAY STAR
# ============================================================

def test_daily_nine_star_2025_02_26():
    result = daily_nine_star("2025-02-26")
    assert result.date == date(2025, 2, 26)
    assert 1 <= result.star_number <= 9
    assert len(result.star_name) == 4
    assert re.match(r"^[一二三四五六七八九]", result.star_name)
    assert re.match(r"^\d{4}-\d{2}-\d{2}$", result.to_dict()["reference_jia_zi_iso"])


def test_daily_nine_star_known_values():
    result = daily_nine_star("2025-02-26")
    assert result.to_dict() == {
        "date_iso": "2025-02-26",
        "star_number": 9,
        "star_name": "九紫火星",
        "half_year": "yang",
        "reference_jia_zi_iso": "2024-12-26",
        "delta": 62,
    }


@pytest.mark.parametrize("value, star, polarity, reference, delta", [
    ("2025-01-15", 3, Polarity.YANG, date(2024, 12, 26), 20),
    # Jul-Dec never fall in the yang window, even after the December anchor
    ("2024-12-26", 9, Polarity.YIN, date(2024, 6, 29), 180),
    ("2025-06-23", 9, Polarity.YANG, date(2024, 12, 26), 179),
    ("2025-06-24", 9, Polarity.YIN, date(2025, 6, 24), 0),
    ("2025-08-15", 2, Polarity.YIN, date(2025, 6, 24), 52),
    ("2025-12-31", 8, Polarity.YIN, date(2025, 6, 24), 190),
])
def test_daily_nine_star_half_years(value, star, polarity, reference, delta):
    result = daily_nine_star(value)
    assert result.star_number == star
    assert result.half_year is polarity
    assert result.reference_jia_zi == reference
    assert result.delta == delta


def test_half_year_anchors():
    assert half_year_anchors(date(2025, 3, 1)) == (date(2024, 12, 26), date(2025, 6, 24))
    assert half_year_anchors(date(2025, 9, 1)) == (date(2025, 12, 21), date(2025, 6, 24))


def test_polarity_is_consistent_within_a_half_year():
    winter = [daily_nine_star(d).half_year for d in ("2025-01-15", "2025-02-15", "2025-03-15")]
    summer = [daily_nine_star(d).half_year for d in ("2025-07-15", "2025-08-15", "2025-09-15")]
    assert len(set(winter)) == 1
    assert len(set(summer)) == 1
    assert winter[0] is not summer[0]


@pytest.mark.parametrize("value", ["2025-01-01", "2025-06-15", "2025-12-31", "2024-02-29"])
def test_daily_nine_star_dates(value):
    result = daily_nine_star(value)
    assert result.to_dict()["date_iso"] == value
    assert 1 <= result.star_number <= 9


def test_daily_nine_star_input_formats_agree():
    from_string = daily_nine_star("2025-06-24")
    from_datetime = daily_nine_star(datetime(2025, 6, 24, tzinfo=timezone.utc))
    from_millis = daily_nine_star(1750723200000)
    from_date = daily_nine_star(date(2025, 6, 24))
    assert from_string == from_datetime == from_millis == from_date


def test_daily_nine_star_invalid_input():
    with pytest.raises(InvalidDateInput, match="Invalid date input"):
        daily_nine_star("invalid-date")


def test_daily_nine_star_anchor_radius():
    # The 2022 December solstice is 15 days from the nearest Jia-Zi
    with pytest.raises(AnchorSearchExhausted):
        daily_nine_star("2023-03-01")

    wide = ChartConfig(jia_zi_search_radius=30)
    result = daily_nine_star("2023-03-01", config=wide)
    assert result.reference_jia_zi == date(2023, 1, 6)
    assert result.half_year is Polarity.YANG
    assert result.delta == 54
    assert result.star_number == 1


def test_day_star_shortcut():
    assert day_star("2025-02-26") == 9


def test_nine_ki():
    stars = nine_ki("2025-02-26")
    assert (stars.year_star, stars.month_star, stars.day_star) == (2, 2, 9)
    assert stars.to_dict() == {"year": 2, "month": 2, "day": 9}

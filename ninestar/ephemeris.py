"""
Swiss Ephemeris adapter.

The star engine only needs three things from an ephemeris:

- the Sun's apparent ecliptic longitude at an instant
- the instant the Sun crosses a given longitude, searched from a seed
  instant forwards or backwards within a bounded window
- the equinox/solstice instants of a year

SwissEphemeris provides them on top of pyswisseph. Any object with the
same three methods can stand in for it (tests use a fake to exercise the
fallback paths of the solar-term search).

Without data files in the ephemeris path, Swiss Ephemeris falls back to
its built-in Moshier ephemeris, which is accurate to well under a minute
for solar longitude.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import swisseph as swe

log = logging.getLogger(__name__)

# Ecliptic longitude of each season marker
SEASON_LONGITUDES = {
    "mar_equinox": 0.0,
    "jun_solstice": 90.0,
    "sep_equinox": 180.0,
    "dec_solstice": 270.0,
}


# ============================================================
# JULIAN DAY HELPERS
# ============================================================

def _to_julian(moment: datetime) -> float:
    """Convert an aware (or UTC-naive) datetime to a Julian Day (UT)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    decimal_hours = (moment.hour + moment.minute / 60.0
                     + (moment.second + moment.microsecond / 1e6) / 3600.0)
    return swe.julday(moment.year, moment.month, moment.day, decimal_hours)


def _from_julian(jd: float) -> datetime:
    """Convert a Julian Day (UT) to an aware UTC datetime."""
    y, m, d, h = swe.revjul(jd)
    return datetime(y, m, d, tzinfo=timezone.utc) + timedelta(hours=h)


# ============================================================
# ADAPTER
# ============================================================

class SwissEphemeris:
    """Solar longitude queries backed by pyswisseph."""

    def __init__(self, ephe_path: Optional[str] = None):
        self.ephe_path = ephe_path
        if ephe_path:
            swe.set_ephe_path(ephe_path)

    def sun_longitude(self, moment: datetime) -> float:
        """Apparent tropical longitude of the Sun in degrees [0, 360)."""
        result, _flag = swe.calc_ut(_to_julian(moment), swe.SUN, swe.FLG_SWIEPH)
        return result[0] % 360.0

    def search_longitude_crossing(self, target: float, seed: datetime,
                                  direction: int,
                                  limit_days: float) -> Optional[datetime]:
        """
        Find when the Sun crosses `target` degrees.

        Searches forward (direction > 0) or backward (direction < 0) from
        `seed`, no further than `limit_days`. Returns None when there is
        no crossing inside the window or Swiss Ephemeris reports an error.
        """
        jd_seed = _to_julian(seed)
        jd_start = jd_seed if direction > 0 else jd_seed - limit_days

        try:
            jd_cross = swe.solcross_ut(float(target) % 360.0, jd_start, swe.FLG_SWIEPH)
        except swe.Error as e:
            log.debug("solcross_ut failed for %.1f° from JD %.3f: %s", target, jd_start, e)
            return None

        if direction > 0 and jd_cross - jd_seed > limit_days:
            return None
        if direction < 0 and jd_cross > jd_seed:
            return None
        return _from_julian(jd_cross)

    def season_instants(self, year: int) -> dict:
        """Equinox and solstice instants (UTC) for a Gregorian year."""
        jd_year_start = swe.julday(year, 1, 1, 0)
        return {
            name: _from_julian(swe.solcross_ut(lon, jd_year_start, swe.FLG_SWIEPH))
            for name, lon in SEASON_LONGITUDES.items()
        }


@lru_cache(maxsize=None)
def ephemeris_for(ephe_path: Optional[str] = None) -> SwissEphemeris:
    """Shared adapter per ephemeris data path."""
    return SwissEphemeris(ephe_path)

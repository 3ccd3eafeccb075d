"""
Configuration for chart computation.

All date normalization happens in a single reference timezone. Instead of
setting it process-wide, every calculation receives a ChartConfig and
reads the timezone from it. DEFAULT_CONFIG reproduces the traditional
setup (Asia/Taipei civil dates).
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timezonefinder import TimezoneFinder

DEFAULT_TIMEZONE = "Asia/Taipei"

# Max day offset checked on each side of a solstice when looking for
# the anchoring Jia-Zi day.
DEFAULT_JIA_ZI_RADIUS = 14

# Window (days) given to each longitude-crossing search. Seeds sit within
# a few days of the true term, so this only needs to cover seed error.
DEFAULT_LONGITUDE_SEARCH_DAYS = 20.0


@dataclass(frozen=True)
class ChartConfig:
    timezone: str = DEFAULT_TIMEZONE
    ephe_path: Optional[str] = None
    jia_zi_search_radius: int = DEFAULT_JIA_ZI_RADIUS
    longitude_search_days: float = DEFAULT_LONGITUDE_SEARCH_DAYS

    def __post_init__(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {self.timezone!r}") from e
        if self.jia_zi_search_radius < 0:
            raise ValueError("jia_zi_search_radius must be >= 0")
        if self.longitude_search_days <= 0:
            raise ValueError("longitude_search_days must be positive")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, environ=None) -> "ChartConfig":
        """
        Build a config from environment variables.

        NINESTAR_TIMEZONE     reference timezone name
        NINESTAR_EPHE_PATH    Swiss Ephemeris data directory
        NINESTAR_JIA_ZI_RADIUS  Jia-Zi search radius in days
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("NINESTAR_TIMEZONE"):
            kwargs["timezone"] = env["NINESTAR_TIMEZONE"]
        if env.get("NINESTAR_EPHE_PATH"):
            kwargs["ephe_path"] = env["NINESTAR_EPHE_PATH"]
        if env.get("NINESTAR_JIA_ZI_RADIUS"):
            kwargs["jia_zi_search_radius"] = int(env["NINESTAR_JIA_ZI_RADIUS"])
        return cls(**kwargs)


DEFAULT_CONFIG = ChartConfig()


@lru_cache(maxsize=1)
def _timezone_finder() -> TimezoneFinder:
    return TimezoneFinder()


def timezone_for_location(latitude: float, longitude: float) -> str:
    """Resolve an IANA timezone name from coordinates."""
    tz_name = _timezone_finder().timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise ValueError(f"Could not determine timezone for ({latitude}, {longitude})")
    return tz_name

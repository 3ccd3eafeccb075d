import pytest


class FakeEphemeris:
    """Scripted stand-in for SwissEphemeris.

    `hits` are returned one per crossing search (None = not found);
    every search is recorded in `calls`.
    """

    def __init__(self, longitude=0.0, hits=(), seasons=None):
        self.longitude = longitude
        self.hits = list(hits)
        self.seasons = seasons
        self.calls = []

    def sun_longitude(self, moment):
        return self.longitude

    def search_longitude_crossing(self, target, seed, direction, limit_days):
        self.calls.append((target, seed, direction, limit_days))
        return self.hits.pop(0) if self.hits else None

    def season_instants(self, year):
        return self.seasons


@pytest.fixture
def fake_ephemeris():
    return FakeEphemeris

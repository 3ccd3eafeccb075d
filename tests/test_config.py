import dataclasses

import pytest

from ninestar.config import DEFAULT_CONFIG, ChartConfig, timezone_for_location


def test_default_config():
    assert DEFAULT_CONFIG.timezone == "Asia/Taipei"
    assert DEFAULT_CONFIG.jia_zi_search_radius == 14
    assert DEFAULT_CONFIG.tzinfo.key == "Asia/Taipei"


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.timezone = "UTC"


@pytest.mark.parametrize("kwargs", [
    {"timezone": "Not/AZone"},
    {"jia_zi_search_radius": -1},
    {"longitude_search_days": 0},
])
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        ChartConfig(**kwargs)


def test_config_from_env():
    config = ChartConfig.from_env({
        "NINESTAR_TIMEZONE": "Asia/Tokyo",
        "NINESTAR_EPHE_PATH": "/opt/ephe",
        "NINESTAR_JIA_ZI_RADIUS": "30",
    })
    assert config == ChartConfig(timezone="Asia/Tokyo", ephe_path="/opt/ephe",
                                 jia_zi_search_radius=30)


def test_config_from_empty_env():
    assert ChartConfig.from_env({}) == DEFAULT_CONFIG


def test_timezone_for_location():
    assert timezone_for_location(25.033, 121.565) == "Asia/Taipei"
    assert timezone_for_location(35.681, 139.767) == "Asia/Tokyo"

import pytest

from airalert.core.errors import UnsupportedPollutant
from airalert.core.models import Pollutant, PollutantReading
from airalert.utils.air_quality import (
    BREAKPOINTS,
    classify,
    classify_readings,
    get_index_category,
)


@pytest.mark.parametrize(
    "pollutant,concentration,expected",
    [
        (Pollutant.O3, 0, 1),
        (Pollutant.O3, 25, 1),
        (Pollutant.O3, 26, 2),
        (Pollutant.O3, 320, 9),
        (Pollutant.O3, 321, 10),
        (Pollutant.PM10, 100, 9),
        (Pollutant.PM10, 101, 10),
        (Pollutant.PM25, 5, 1),
        (Pollutant.PM25, 5.1, 2),
        (Pollutant.PM25, 36, 6),
    ],
)
def test_classify_uses_inclusive_upper_bounds(pollutant, concentration, expected):
    assert classify(pollutant, concentration) == expected


def test_classify_accepts_pollutant_names():
    assert classify("pm10", 45) == 5
    assert classify("PM25", 45) == 7


def test_classify_rejects_unknown_pollutant():
    with pytest.raises(UnsupportedPollutant) as excinfo:
        classify("no2", 40)
    assert excinfo.value.pollutant == "no2"


@pytest.mark.parametrize("pollutant", list(Pollutant))
def test_classify_never_decreases_with_concentration(pollutant):
    top = BREAKPOINTS[pollutant][-1] + 50
    categories = [classify(pollutant, value) for value in range(0, top)]
    assert categories == sorted(categories)
    assert categories[0] == 1
    assert categories[-1] == 10


def test_classify_readings_takes_worst_pollutant():
    readings = [
        PollutantReading(Pollutant.O3, 30),     # 2
        PollutantReading(Pollutant.PM25, 45),   # 7
        PollutantReading(Pollutant.PM10, 15),   # 2
    ]
    assert classify_readings(readings) == 7


def test_classify_readings_requires_readings():
    with pytest.raises(ValueError):
        classify_readings([])


def test_get_index_category_clamps():
    assert get_index_category(1) == ("index_excellent", "🟦")
    assert get_index_category(0) == get_index_category(1)
    assert get_index_category(42) == ("index_horrible", "🟤")

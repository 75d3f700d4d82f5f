"""Air quality index classification utilities"""
from typing import Iterable, Union

from airalert.core.errors import UnsupportedPollutant
from airalert.core.models import Pollutant, PollutantReading

# Inclusive upper bounds (µg/m³) for categories 1..9, anything above is 10
BREAKPOINTS = {
    Pollutant.O3: (25, 50, 70, 120, 160, 180, 240, 280, 320),
    Pollutant.PM10: (10, 20, 30, 40, 50, 60, 70, 80, 100),
    Pollutant.PM25: (5, 10, 15, 25, 35, 40, 50, 60, 70),
}

MAX_CATEGORY = 10

# Category -> (status_key, emoji)
INDEX_CATEGORIES = {
    1: ("index_excellent", "🟦"),
    2: ("index_very_good", "🔵"),
    3: ("index_good", "🟢"),
    4: ("index_fairly_good", "🟩"),
    5: ("index_moderate", "🟡"),
    6: ("index_poor", "🟠"),
    7: ("index_very_poor", "🔴"),
    8: ("index_bad", "🟥"),
    9: ("index_very_bad", "🟣"),
    10: ("index_horrible", "🟤"),
}


def _as_pollutant(pollutant: Union[Pollutant, str]) -> Pollutant:
    if isinstance(pollutant, Pollutant):
        return pollutant
    try:
        return Pollutant(str(pollutant).lower())
    except ValueError:
        raise UnsupportedPollutant(pollutant) from None


def classify(pollutant: Union[Pollutant, str], concentration: float) -> int:
    """
    Map a pollutant concentration to an index category

    Args:
        pollutant: Pollutant kind (enum member or "o3"/"pm10"/"pm25")
        concentration: Concentration in µg/m³

    Returns:
        Index category (1-10)

    Raises:
        UnsupportedPollutant: If there is no breakpoint table for the pollutant
    """
    bounds = BREAKPOINTS[_as_pollutant(pollutant)]

    for category, upper in enumerate(bounds, start=1):
        if concentration <= upper:
            return category

    # Concentration exceeds all breakpoints
    return MAX_CATEGORY


def classify_readings(readings: Iterable[PollutantReading]) -> int:
    """
    Get the worst index category of several readings

    Args:
        readings: Pollutant readings taken at one location

    Returns:
        Highest category among the readings

    Raises:
        ValueError: If no readings are given
    """
    categories = [classify(r.pollutant, r.concentration) for r in readings]
    if not categories:
        raise ValueError("No pollutant readings to classify")
    return max(categories)


def get_index_category(category: int) -> tuple[str, str]:
    """
    Get index band localization key and emoji

    Args:
        category: Index category (clamped to 1-10)

    Returns:
        Tuple of (status_key, emoji)
    """
    category = min(max(int(category), 1), MAX_CATEGORY)
    return INDEX_CATEGORIES[category]

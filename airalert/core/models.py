"""Plain data structures shared by the alert services"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Pollutant(str, Enum):
    """Pollutants with index breakpoint tables"""

    O3 = "o3"
    PM10 = "pm10"
    PM25 = "pm25"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SavedLocation:
    """A user location checked on every alert cycle"""

    label: str
    coordinates: Coordinates
    id: Optional[int] = None


@dataclass(frozen=True)
class PollutantReading:
    pollutant: Pollutant
    concentration: float


@dataclass(frozen=True)
class AlertSettings:
    """
    Snapshot of the persisted alert settings

    Captured once at the start of a check cycle so that every
    sub-operation of the cycle sees the same values.
    """

    active: bool
    period_minutes: int
    threshold_level: int
    sensitive_group: bool


@dataclass(frozen=True)
class PersonalAlert:
    """Index category reached at one location during a check cycle"""

    index_category: int
    location_label: str
    sensitive_group: bool = False

    def to_dict(self) -> dict:
        return {
            "index_category": self.index_category,
            "location_label": self.location_label,
            "sensitive_group": self.sensitive_group,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PersonalAlert":
        return cls(
            index_category=int(data["index_category"]),
            location_label=str(data["location_label"]),
            sensitive_group=bool(data.get("sensitive_group", False)),
        )


@dataclass
class AlertNotification:
    """System notification carrying a serialized alert list"""

    id: int
    title: str
    text: str
    payload: list[dict[str, Any]] = field(default_factory=list)

from pydantic import BaseModel, Field
from typing import List, Optional


class AlertSettingsOut(BaseModel):
    active: bool
    period_minutes: int
    threshold_level: int
    sensitive_group: bool


class AlertSettingsUpdate(BaseModel):
    # The settings store accepts anything, range checks happen here
    period_minutes: Optional[int] = Field(None, ge=1)
    threshold_level: Optional[int] = Field(None, ge=1, le=10)
    sensitive_group: Optional[bool] = None


class AlertStatus(BaseModel):
    active: bool
    state: str
    timer_armed: bool
    background: bool


class PersonalAlertOut(BaseModel):
    index_category: int
    location_label: str
    sensitive_group: bool


class CheckResult(BaseModel):
    alerts: List[PersonalAlertOut]


class CapabilityUpdate(BaseModel):
    available: bool


class PositionReport(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class PermissionUpdate(BaseModel):
    granted: bool


class SavedLocationIn(BaseModel):
    label: str = Field(min_length=1, max_length=100)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SavedLocationOut(BaseModel):
    id: int
    label: str
    latitude: float
    longitude: float

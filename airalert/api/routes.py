"""
Control API for personal alerts

Used by the device to report its background state and position, and by
the user to change alert settings and saved locations.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import List

from airalert.api.auth import verify_credentials
from airalert.api.schemas import (
    AlertSettingsOut,
    AlertSettingsUpdate,
    AlertStatus,
    CapabilityUpdate,
    CheckResult,
    PermissionUpdate,
    PersonalAlertOut,
    PositionReport,
    SavedLocationIn,
    SavedLocationOut,
)
from airalert.core.errors import EnumerationFailure
from airalert.services.engine import AlertEngine

router = APIRouter(dependencies=[Depends(verify_credentials)])


def get_engine(request: Request) -> AlertEngine:
    """Alert engine created in the application lifespan"""
    return request.app.state.engine


async def _status(engine: AlertEngine) -> AlertStatus:
    return AlertStatus(
        active=await engine.settings.is_active(),
        state=engine.controller.state.name.lower(),
        timer_armed=engine.controller.timer_armed,
        background=engine.host.is_active(),
    )


async def _settings(engine: AlertEngine) -> AlertSettingsOut:
    snapshot = await engine.settings.snapshot()
    return AlertSettingsOut(
        active=snapshot.active,
        period_minutes=snapshot.period_minutes,
        threshold_level=snapshot.threshold_level,
        sensitive_group=snapshot.sensitive_group,
    )


@router.get("/alerts/status", response_model=AlertStatus)
async def alerts_status(engine: AlertEngine = Depends(get_engine)):
    return await _status(engine)


@router.post("/alerts/activate", response_model=AlertStatus)
async def activate_alerts(engine: AlertEngine = Depends(get_engine)):
    await engine.controller.activate()
    return await _status(engine)


@router.post("/alerts/deactivate", response_model=AlertStatus)
async def deactivate_alerts(engine: AlertEngine = Depends(get_engine)):
    await engine.controller.deactivate()
    return await _status(engine)


@router.get("/alerts/settings", response_model=AlertSettingsOut)
async def get_alert_settings(engine: AlertEngine = Depends(get_engine)):
    return await _settings(engine)


@router.put("/alerts/settings", response_model=AlertSettingsOut)
async def update_alert_settings(update: AlertSettingsUpdate, engine: AlertEngine = Depends(get_engine)):
    """
    Partially update alert settings

    A new period applies the next time the timer is armed.
    """
    if update.period_minutes is not None:
        await engine.settings.set_period(update.period_minutes)
    if update.threshold_level is not None:
        await engine.settings.set_threshold(update.threshold_level)
    if update.sensitive_group is not None:
        await engine.settings.set_sensitive(update.sensitive_group)
    return await _settings(engine)


@router.post("/alerts/check", response_model=CheckResult)
async def check_alerts_now(engine: AlertEngine = Depends(get_engine)):
    """Run one check cycle immediately and dispatch its result"""
    alerts = await engine.controller.check_now()
    if alerts is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Alert check already running")
    return CheckResult(alerts=[PersonalAlertOut(**alert.to_dict()) for alert in alerts])


@router.post("/host/background", status_code=status.HTTP_204_NO_CONTENT)
async def host_entered_background(engine: AlertEngine = Depends(get_engine)):
    engine.host.enter_background()


@router.post("/host/foreground", status_code=status.HTTP_204_NO_CONTENT)
async def host_entered_foreground(engine: AlertEngine = Depends(get_engine)):
    engine.host.exit_background()


@router.post("/host/capability", status_code=status.HTTP_204_NO_CONTENT)
async def host_capability(update: CapabilityUpdate, engine: AlertEngine = Depends(get_engine)):
    engine.host.set_capability(update.available)


@router.post("/position", status_code=status.HTTP_204_NO_CONTENT)
async def report_position(report: PositionReport, engine: AlertEngine = Depends(get_engine)):
    engine.positions.report(report.latitude, report.longitude)


@router.put("/position/permission", status_code=status.HTTP_204_NO_CONTENT)
async def update_position_permission(update: PermissionUpdate, engine: AlertEngine = Depends(get_engine)):
    if update.granted:
        engine.positions.grant()
    else:
        engine.positions.revoke()


@router.get("/locations", response_model=List[SavedLocationOut])
async def list_locations(engine: AlertEngine = Depends(get_engine)):
    try:
        locations = await engine.locations.saved_locations()
    except EnumerationFailure:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Saved locations unavailable")

    return [
        SavedLocationOut(
            id=location.id,
            label=location.label,
            latitude=location.coordinates.latitude,
            longitude=location.coordinates.longitude,
        )
        for location in locations
    ]


@router.post("/locations", response_model=SavedLocationOut, status_code=status.HTTP_201_CREATED)
async def add_location(location: SavedLocationIn, engine: AlertEngine = Depends(get_engine)):
    saved = await engine.locations.add_location(location.label, location.latitude, location.longitude)
    return SavedLocationOut(
        id=saved.id,
        label=saved.label,
        latitude=saved.coordinates.latitude,
        longitude=saved.coordinates.longitude,
    )


@router.delete("/locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_location(location_id: int, engine: AlertEngine = Depends(get_engine)):
    if not await engine.locations.remove_location(location_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")

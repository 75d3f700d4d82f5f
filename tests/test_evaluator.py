import asyncio

from airalert.core.cancel_token import CancelToken
from airalert.core.errors import (
    EnumerationFailure,
    GeocodeFailure,
    LookupFailure,
    PermissionDenied,
    PositionUnavailable,
)
from airalert.core.models import Coordinates, PersonalAlert
from airalert.services.evaluator import AlertEvaluator

from conftest import (
    FakeGeocoder,
    FakeIndexClient,
    FakeLocations,
    FakePositions,
    RecordingDispatcher,
    saved,
)

HERE = Coordinates(50.85, 4.35)

LOCATIONS = [
    saved("Home", 1.0, 1.0),
    saved("Office", 2.0, 2.0),
    saved("Gym", 3.0, 3.0),
]


def _evaluator(alert_settings, positions=None, locations=None, categories=None, geocoder=None):
    dispatcher = RecordingDispatcher()
    evaluator = AlertEvaluator(
        alert_settings,
        positions or FakePositions(error=PositionUnavailable("disabled")),
        locations or FakeLocations(),
        FakeIndexClient(categories or {}),
        geocoder or FakeGeocoder(),
        dispatcher,
    )
    return evaluator, dispatcher


def test_saved_locations_filtered_by_threshold_in_order(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        locations=FakeLocations(LOCATIONS),
        categories={(1.0, 1.0): 3, (2.0, 2.0): 5, (3.0, 3.0): 7},
    )

    alerts = asyncio.run(evaluator.run_cycle())

    assert alerts == [
        PersonalAlert(index_category=5, location_label="Office"),
        PersonalAlert(index_category=7, location_label="Gym"),
    ]
    assert dispatcher.dispatched == [alerts]


def test_current_location_comes_first(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        positions=FakePositions(HERE),
        locations=FakeLocations(LOCATIONS[:1]),
        categories={(50.85, 4.35): 6, (1.0, 1.0): 9},
    )

    alerts = asyncio.run(evaluator.run_cycle())

    assert [alert.location_label for alert in alerts] == ["Grand-Place, Brussels", "Home"]


def test_current_location_below_threshold_excluded(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        positions=FakePositions(HERE),
        categories={(50.85, 4.35): 4},
    )

    assert asyncio.run(evaluator.run_cycle()) == []


def test_current_location_alert_is_built_regardless_of_threshold(alert_settings):
    evaluator, _ = _evaluator(
        alert_settings,
        positions=FakePositions(HERE),
        categories={(50.85, 4.35): 1},
    )

    async def main():
        return await evaluator.check_current_location(await alert_settings.snapshot())

    assert asyncio.run(main()) == PersonalAlert(index_category=1, location_label="Grand-Place, Brussels")


def test_geocode_failure_falls_back_to_generic_label(alert_settings):
    evaluator, _ = _evaluator(
        alert_settings,
        positions=FakePositions(HERE),
        categories={(50.85, 4.35): 8},
        geocoder=FakeGeocoder(error=GeocodeFailure("timeout")),
    )

    alerts = asyncio.run(evaluator.run_cycle())

    assert alerts == [PersonalAlert(index_category=8, location_label="Current location")]


def test_position_failure_keeps_saved_alerts(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        positions=FakePositions(error=PermissionDenied("revoked")),
        locations=FakeLocations(LOCATIONS[2:]),
        categories={(3.0, 3.0): 7},
    )

    alerts = asyncio.run(evaluator.run_cycle())

    assert alerts == [PersonalAlert(index_category=7, location_label="Gym")]


def test_failed_lookups_are_skipped(alert_settings):
    evaluator, _ = _evaluator(
        alert_settings,
        positions=FakePositions(HERE),
        locations=FakeLocations(LOCATIONS),
        categories={
            (50.85, 4.35): LookupFailure("unreachable"),
            (1.0, 1.0): 9,
            (2.0, 2.0): LookupFailure("bad answer"),
            (3.0, 3.0): RuntimeError("boom"),
        },
    )

    alerts = asyncio.run(evaluator.run_cycle())

    assert alerts == [PersonalAlert(index_category=9, location_label="Home")]


def test_enumeration_failure_yields_no_saved_alerts(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        locations=FakeLocations(error=EnumerationFailure("database down")),
    )

    assert asyncio.run(evaluator.run_cycle()) == []
    assert dispatcher.dispatched == [[]]


def test_sensitive_flag_copied_into_alerts(alert_settings):
    evaluator, _ = _evaluator(
        alert_settings,
        locations=FakeLocations(LOCATIONS[2:]),
        categories={(3.0, 3.0): 7},
    )

    async def main():
        await alert_settings.set_sensitive(True)
        await alert_settings.set_threshold(7)
        return await evaluator.run_cycle()

    assert asyncio.run(main()) == [
        PersonalAlert(index_category=7, location_label="Gym", sensitive_group=True),
    ]


def test_lookups_run_concurrently(alert_settings):
    started = []

    class SlowIndexClient:
        def __init__(self):
            self.release = None

        async def lookup_index(self, latitude, longitude):
            started.append(latitude)
            await self.release.wait()
            return 6

    client = SlowIndexClient()
    dispatcher = RecordingDispatcher()
    evaluator = AlertEvaluator(
        alert_settings,
        FakePositions(HERE),
        FakeLocations(LOCATIONS),
        client,
        FakeGeocoder(),
        dispatcher,
    )

    async def main():
        client.release = asyncio.Event()
        cycle = asyncio.create_task(evaluator.run_cycle())
        for _ in range(10):
            await asyncio.sleep(0)
        # Every lookup is in flight before any of them finished
        assert sorted(started) == [1.0, 2.0, 3.0, 50.85]
        client.release.set()
        return await cycle

    alerts = asyncio.run(main())
    assert len(alerts) == 4


def test_cancelled_cycle_is_not_dispatched(alert_settings):
    evaluator, dispatcher = _evaluator(
        alert_settings,
        locations=FakeLocations(LOCATIONS[2:]),
        categories={(3.0, 3.0): 7},
    )
    token = CancelToken()
    token.cancel()

    asyncio.run(evaluator.run_cycle(token))

    assert dispatcher.dispatched == []

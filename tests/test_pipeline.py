import threading

import requests

from conftest import FakeResponse, make_client, make_flight
from flightmap.ingestion import CycleResult, RefreshPipeline
from flightmap.view import ERROR_MESSAGE, FlightView


def make_pipeline(*responses, view=None):
    client, session = make_client(*responses)
    view = view or FlightView()
    return RefreshPipeline(view=view, client=client, interval=3600), view, session


def test_successful_cycle_renders_flights_and_hides_message():
    pipeline, view, _ = make_pipeline(
        FakeResponse(json_data={"data": [make_flight(iata="BA1"), make_flight(iata="BA2", latitude=None)]})
    )
    view.show_error()

    assert pipeline.run_cycle() == CycleResult.SUCCESS

    snapshot = view.snapshot()
    assert [m.label for m in snapshot.markers] == ["BA1"]
    assert [c.title for c in snapshot.cards] == ["BA1"]
    assert snapshot.message.visible is False


def test_empty_flight_list_empties_view_without_error():
    pipeline, view, _ = make_pipeline(
        FakeResponse(json_data={"data": [make_flight()]}),
        FakeResponse(json_data={"data": []}),
    )

    pipeline.run_cycle()
    assert pipeline.run_cycle() == CycleResult.SUCCESS

    snapshot = view.snapshot()
    assert snapshot.markers == []
    assert snapshot.cards == []
    assert snapshot.message.visible is False


def test_missing_data_field_shows_message():
    pipeline, view, _ = make_pipeline(FakeResponse(json_data={"unexpected": True}))

    assert pipeline.run_cycle() == CycleResult.FAILED

    message = view.message
    assert message.visible is True
    assert message.text == ERROR_MESSAGE
    assert pipeline.stats["error_count"] == 1
    assert "Invalid API response" in pipeline.stats["last_error"]


def test_failed_cycle_keeps_previous_markers():
    pipeline, view, _ = make_pipeline(
        FakeResponse(json_data={"data": [make_flight(iata="BA1")]}),
        requests.exceptions.ConnectionError("down"),
    )

    pipeline.run_cycle()
    assert pipeline.run_cycle() == CycleResult.FAILED

    snapshot = view.snapshot()
    assert [m.label for m in snapshot.markers] == ["BA1"]
    assert snapshot.message.visible is True


def test_second_cycle_replaces_first_cycle_markers():
    first = [make_flight(iata="AA1", latitude=10.0, longitude=20.0), make_flight(iata="AA2")]
    second = [make_flight(iata="DL9", latitude=-33.9, longitude=151.2)]
    pipeline, view, _ = make_pipeline(
        FakeResponse(json_data={"data": first}),
        FakeResponse(json_data={"data": second}),
    )

    pipeline.run_cycle()
    pipeline.run_cycle()

    markers = view.snapshot().markers
    assert [(m.label, m.latitude, m.longitude) for m in markers] == [("DL9", -33.9, 151.2)]


def test_overlapping_trigger_is_skipped():
    started = threading.Event()
    release = threading.Event()

    class BlockingClient:
        def get_flights(self):
            started.set()
            release.wait(5)
            return []

    view = FlightView()
    pipeline = RefreshPipeline(view=view, client=BlockingClient(), interval=3600)

    worker = threading.Thread(target=pipeline.run_cycle)
    worker.start()
    assert started.wait(5)

    assert pipeline.in_flight is True
    assert pipeline.run_cycle() == CycleResult.SKIPPED

    release.set()
    worker.join(5)

    assert pipeline.in_flight is False
    assert pipeline.stats["skipped_count"] == 1
    assert pipeline.stats["cycle_count"] == 1


def test_background_loop_runs_first_cycle_immediately_and_stops():
    pipeline, view, session = make_pipeline(FakeResponse(json_data={"data": [make_flight()]}))

    pipeline.start_background()
    try:
        for _ in range(100):
            if view.snapshot().updated_at is not None:
                break
            threading.Event().wait(0.05)
        assert len(view.snapshot().markers) == 1
        assert pipeline.running is True
    finally:
        pipeline.stop()

    assert pipeline.running is False
    assert len(session.calls) == 1


def test_concurrent_skips_are_all_counted():
    started = threading.Event()
    release = threading.Event()

    class BlockingClient:
        def get_flights(self):
            started.set()
            release.wait(5)
            return []

    pipeline = RefreshPipeline(view=FlightView(), client=BlockingClient(), interval=3600)
    worker = threading.Thread(target=pipeline.run_cycle)
    worker.start()
    assert started.wait(5)

    triggers = [threading.Thread(target=pipeline.run_cycle) for _ in range(20)]
    for t in triggers:
        t.start()
    for t in triggers:
        t.join(5)

    release.set()
    worker.join(5)

    assert pipeline.stats["skipped_count"] == 20
    assert pipeline.stats["cycle_count"] == 1

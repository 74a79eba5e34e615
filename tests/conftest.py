import pytest
import requests

from flightmap.app import create_app
from flightmap.ingestion import AviationStackClient
from flightmap.view import FlightView


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Returns queued responses (or raises queued exceptions) in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_flight(iata="BA117", icao="BAW117", airline="British Airways", **live):
    live_block = {
        "latitude": 51.4700,
        "longitude": -0.4543,
        "altitude": 10668.0,
        "direction": 270.0,
        "speed_horizontal": 850.5,
        "is_ground": False,
        "updated": "2024-05-03T19:40:00+00:00",
    }
    live_block.update(live)
    return {
        "flight_status": "active",
        "flight": {"iata": iata, "icao": icao, "number": "117"},
        "airline": {"name": airline},
        "departure": {"iata": "LHR"},
        "arrival": {"iata": "JFK"},
        "live": live_block,
    }


def make_client(*responses):
    session = FakeSession(*responses)
    client = AviationStackClient(
        api_key="test-key",
        base_url="https://example.test/v1",
        session=session,
    )
    return client, session


@pytest.fixture
def view():
    return FlightView()


@pytest.fixture
def app_factory(view):
    def factory(*responses):
        client, _ = make_client(*responses)
        app = create_app(start_scheduler=False, client=client, view=view)
        app.config["TESTING"] = True
        return app

    return factory

"""Tests for sonar/trackers/openradar.py"""

import threading

import pytest
import requests

from sonar.client import NetworkError, NotFoundError, ParseError, SonarClient, SonarError
from sonar.models import Classification, Product, Radar, Reproducibility
from sonar.trackers.base import BugTracker, Result
from sonar.trackers.openradar import OpenRadar

BASE = "https://openradar.example.com"
READ_URL = f"{BASE}/api/radar"
CREATE_URL = f"{BASE}/api/radars/add"

DESCRIPTION = (
    "Summary:\nCrashes on launch\n"
    "Steps to Reproduce:\nOpen app\n"
    "Expected Results:\nApp opens\n"
    "Actual Results:\nApp crashes\n"
    "Version:\n1.0\n"
    "Configuration:\nNone\n"
    "Notes:\nSee attached\n"
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def tracker():
    with OpenRadar(token="tok", url=BASE) as t:
        yield t


class Recorder:
    """Completion callback that remembers every call."""

    def __init__(self) -> None:
        self.results: list[Result] = []
        self.threads: list[str] = []

    def __call__(self, result: Result) -> None:
        self.results.append(result)
        self.threads.append(threading.current_thread().name)


def _radar(**overrides) -> Radar:
    fields = dict(
        classification=Classification.OTHER_BUG,
        product=Product.IOS,
        reproducibility=Reproducibility.ALWAYS,
        title="t",
        description="d",
        steps="s",
        expected="e",
        actual="a",
        configuration="c",
        version="1",
        notes="n",
    )
    fields.update(overrides)
    return Radar(**fields)


def test_openradar_is_a_bug_tracker(tracker):
    assert isinstance(tracker, BugTracker)


# ---------------------------------------------------------------------------
# login()
# ---------------------------------------------------------------------------

def test_login_succeeds_without_asking_for_code(tracker):
    asked = []
    done = Recorder()
    result = tracker.login(asked.append, done).result()
    assert result.ok
    assert asked == []
    assert done.results == [result]


# ---------------------------------------------------------------------------
# fetch()
# ---------------------------------------------------------------------------

def test_fetch_parses_radar(tracker, requests_mock):
    adapter = requests_mock.get(READ_URL, json={"result": {
        "classification": "security",
        "reproducible":   "rarely",
        "product":        "SAFARI",
        "title":          "Crash",
        "product_version": "17.2",
        "description":    DESCRIPTION,
    }})
    done = Recorder()
    result = tracker.fetch(123, done).result()

    assert adapter.last_request.qs == {"number": ["123"]}
    assert done.results == [result]
    radar = result.unwrap()
    assert radar.classification is Classification.SECURITY
    assert radar.reproducibility is Reproducibility.RARELY
    assert radar.product is Product.SAFARI
    assert radar.title == "Crash"
    assert radar.version == "17.2"
    assert radar.description == "Crashes on launch"
    assert radar.notes == "See attached"
    assert radar.id is None


def test_fetch_runs_completion_off_caller_thread(tracker, requests_mock):
    requests_mock.get(READ_URL, json={"result": {}})
    done = Recorder()
    tracker.fetch(1, done).result()
    assert done.threads != [threading.current_thread().name]


@pytest.mark.parametrize("radar_id", [0, -5])
def test_fetch_invalid_id_fails_without_request(tracker, requests_mock, radar_id):
    done = Recorder()
    result = tracker.fetch(radar_id, done).result()
    assert not result.ok
    assert result.error.message == "Invalid radar ID"
    assert done.results == [result]
    assert requests_mock.call_count == 0


@pytest.mark.parametrize("payload", [
    {"no_result": {}},
    {"result": "not a mapping"},
    ["a", "list"],
])
def test_fetch_unexpected_shape_is_parse_error(tracker, requests_mock, payload):
    requests_mock.get(READ_URL, json=payload)
    result = tracker.fetch(1).result()
    assert isinstance(result.error, ParseError)
    assert result.error.message == "Unable to parse JSON"


def test_fetch_invalid_json_is_parse_error(tracker, requests_mock):
    requests_mock.get(READ_URL, text="not json")
    result = tracker.fetch(1).result()
    assert result.error.message == "Unable to parse JSON"


def test_fetch_http_error_is_failure(tracker, requests_mock):
    requests_mock.get(READ_URL, status_code=404)
    result = tracker.fetch(1).result()
    assert isinstance(result.error, NotFoundError)
    with pytest.raises(NotFoundError):
        result.unwrap()


def test_fetch_transport_error_is_failure(tracker, requests_mock):
    requests_mock.get(READ_URL, exc=requests.exceptions.ConnectionError)
    done = Recorder()
    result = tracker.fetch(1, done).result()
    assert isinstance(result.error, NetworkError)
    assert done.results == [result]


def test_parallel_fetches_are_independent(tracker, requests_mock):
    requests_mock.get(READ_URL, json={"result": {"title": "same"}})
    futures = [tracker.fetch(i) for i in range(1, 9)]
    titles = [f.result().unwrap().title for f in futures]
    assert titles == ["same"] * 8
    assert requests_mock.call_count == 8


# ---------------------------------------------------------------------------
# create()
# ---------------------------------------------------------------------------

def test_create_without_id_fails_without_request(tracker, requests_mock):
    done = Recorder()
    result = tracker.create(_radar(), done).result()
    assert result.error.message == "Invalid radar ID"
    assert done.results == [result]
    assert requests_mock.call_count == 0


def test_create_echoes_id(tracker, requests_mock):
    adapter = requests_mock.post(CREATE_URL, json={})
    done = Recorder()
    result = tracker.create(_radar(id=42), done).result()
    assert result.ok
    assert result.value == 42
    assert done.results == [result]
    assert "number=42" in adapter.last_request.text


def test_create_http_error_is_failure(tracker, requests_mock):
    requests_mock.post(CREATE_URL, status_code=500, text="boom")
    result = tracker.create(_radar(id=42)).result()
    assert isinstance(result.error, SonarError)
    assert "500" in result.error.message


@pytest.mark.parametrize("failure", [
    requests.exceptions.TooManyRedirects,
    requests.exceptions.ChunkedEncodingError,
])
def test_fetch_any_transport_error_reaches_completion(tracker, requests_mock, failure):
    requests_mock.get(READ_URL, exc=failure)
    done = Recorder()
    result = tracker.fetch(1, done).result()
    assert done.results == [result]
    assert isinstance(result.error, NetworkError)


# ---------------------------------------------------------------------------
# close()
# ---------------------------------------------------------------------------

class ClosingClient(SonarClient):
    def __init__(self) -> None:
        super().__init__(url=BASE, token="tok")
        self.closed = False

    def close(self) -> None:
        self.closed = True
        super().close()


def test_close_leaves_injected_client_open():
    client = ClosingClient()
    OpenRadar(client=client).close()
    assert not client.closed


def test_close_closes_own_client(monkeypatch):
    closed = []
    monkeypatch.setattr(SonarClient, "close", lambda self: closed.append(self))
    OpenRadar(token="tok", url=BASE).close()
    assert len(closed) == 1

import asyncio

import pytest
import requests

from api_adapters import GraphHopperAdapter
from route_config import RouteConfig
from route_errors import NetworkError, RequestError, ServiceError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config():
    return RouteConfig(api_key="secret", host="https://gh.example/api/1/", timeout_ms=2500)


def run(adapter, body=None):
    return asyncio.run(adapter.request_route(body or {'points': [[0, 0], [1, 1]]}))


def test_successful_request(config):
    session = FakeSession(FakeResponse(payload={'paths': []}))
    assert run(GraphHopperAdapter(config, session=session)) == {'paths': []}

    [(url, kwargs)] = session.calls
    assert url == "https://gh.example/api/1/route"
    assert kwargs['params'] == {'key': "secret"}
    assert kwargs['json'] == {'points': [[0, 0], [1, 1]]}
    assert kwargs['timeout'] == 2.5


def test_error_status_becomes_service_error(config):
    session = FakeSession(FakeResponse(400, {'message': "Point 0 is out of bounds"}, "Bad Request"))
    with pytest.raises(ServiceError) as exc:
        run(GraphHopperAdapter(config, session=session))
    assert exc.value.status_code == 400
    assert exc.value.payload['message'] == "Point 0 is out of bounds"
    assert str(exc.value) == "GraphHopper API Error: 400 - Point 0 is out of bounds"


def test_unparseable_error_body_falls_back_to_reason(config):
    session = FakeSession(FakeResponse(502, ValueError("not json"), "Bad Gateway"))
    with pytest.raises(ServiceError) as exc:
        run(GraphHopperAdapter(config, session=session))
    assert exc.value.payload == {'message': "Bad Gateway"}


@pytest.mark.parametrize("error", [
    requests.exceptions.ConnectionError("refused"),
    requests.exceptions.ReadTimeout("slow"),
])
def test_transport_failure_becomes_network_error(config, error):
    with pytest.raises(NetworkError) as exc:
        run(GraphHopperAdapter(config, session=FakeSession(error=error)))
    assert str(exc.value) == "Network Error: Unable to reach GraphHopper API"


def test_other_failures_become_request_error(config):
    session = FakeSession(error=requests.exceptions.InvalidURL("bad url"))
    with pytest.raises(RequestError) as exc:
        run(GraphHopperAdapter(config, session=session))
    assert str(exc.value) == "Request Error: bad url"


def test_invalid_success_body_is_request_error(config):
    session = FakeSession(FakeResponse(payload=ValueError("Expecting value")))
    with pytest.raises(RequestError):
        run(GraphHopperAdapter(config, session=session))


class ClosingSession(FakeSession):
    def __init__(self, response):
        super().__init__(response)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True


def test_each_call_gets_its_own_session(config, monkeypatch):
    opened = []

    def make_session():
        session = ClosingSession(FakeResponse(payload={'paths': []}))
        opened.append(session)
        return session

    monkeypatch.setattr("api_adapters.requests.Session", make_session)
    adapter = GraphHopperAdapter(config)
    run(adapter)
    run(adapter)

    assert len(opened) == 2
    assert all(s.closed and len(s.calls) == 1 for s in opened)

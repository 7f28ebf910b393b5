import random

import pytest

from api_adapters import ApiAdapter
from blucap import Blucap

REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_COORDINATES = [(-120.2, 38.5), (-120.95, 40.7), (-126.453, 43.252)]


class ZeroJitterRandom(random.Random):
    """Always returns the middle of the requested range, so no jitter is applied."""
    def uniform(self, a, b):
        return (a + b) / 2


class FakeAdapter(ApiAdapter):
    """Records request bodies and answers with a canned GraphHopper payload."""
    def __init__(self, response: dict | None = None):
        self.bodies = []
        self.response = response if response is not None else sample_response()

    async def request_route(self, body: dict) -> dict:
        self.bodies.append(body)
        return self.response


def sample_response(distance: float = 123456.7) -> dict:
    return {
        'paths': [{
            'distance': distance,
            'time': 5400000,
            'points': REFERENCE_POLYLINE,
            'points_encoded': True,
            'snapped_waypoints': REFERENCE_POLYLINE,
            'instructions': [{'text': 'Continue', 'distance': 10.0, 'time': 1000, 'interval': [0, 1], 'sign': 0}],
            'ascent': 12.0,
        }],
        'info': {'copyrights': ['GraphHopper'], 'took': 7},
    }


@pytest.fixture
def zero_rng():
    return ZeroJitterRandom()


@pytest.fixture
def fake_adapter():
    return FakeAdapter()


@pytest.fixture
def generator(fake_adapter, zero_rng):
    return Blucap(api_key="test-key", adapter=fake_adapter, rng=zero_rng)

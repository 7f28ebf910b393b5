import math
import random

import pytest

import geo_math
import waypoints
from api_structures import Coordinates, CurveLevel
from conftest import ZeroJitterRandom

BEIJING = Coordinates(lat=39.9042, lon=116.4074)


def test_loop_radius_treats_target_as_circumference():
    assert waypoints.loop_radius_m(120000) == pytest.approx(120000 / (2 * math.pi))


@pytest.mark.parametrize("level,count", [("low", 1), ("medium", 2), ("high", 3), (CurveLevel.HIGH, 3)])
def test_roundtrip_point_count_per_level(zero_rng, level, count):
    points = waypoints.roundtrip_waypoints(BEIJING, 120000, level, 0, zero_rng)
    assert len(points) == count


def test_unknown_level_behaves_like_medium(zero_rng):
    extreme = waypoints.roundtrip_waypoints(BEIJING, 120000, "extreme", 30, zero_rng)
    medium = waypoints.roundtrip_waypoints(BEIJING, 120000, "medium", 30, zero_rng)
    assert extreme == medium


def test_roundtrip_points_sit_on_the_loop_radius(zero_rng):
    radius = waypoints.loop_radius_m(200000)
    points = waypoints.roundtrip_waypoints(BEIJING, 200000, "high", 0, zero_rng)
    for point in points:
        assert geo_math.distance(BEIJING, point) == pytest.approx(radius, rel=1e-3)


def test_roundtrip_bearings_are_evenly_spread(zero_rng):
    points = waypoints.roundtrip_waypoints(BEIJING, 200000, "high", 10, zero_rng)
    bearings = [geo_math.bearing(BEIJING, p) for p in points]
    assert bearings == pytest.approx([130, 250, 10], abs=0.5)


def test_roundtrip_jitter_stays_within_bounds():
    rng = random.Random(42)
    plain = waypoints.roundtrip_waypoints(BEIJING, 150000, "high", 0, ZeroJitterRandom())
    jittered = waypoints.roundtrip_waypoints(BEIJING, 150000, "high", 0, rng)
    for a, b in zip(plain, jittered):
        assert abs(a.lat - b.lat) <= waypoints.JITTER_DEGREES
        assert abs(a.lon - b.lon) <= waypoints.JITTER_DEGREES


def test_same_seed_gives_same_waypoints():
    first = waypoints.roundtrip_waypoints(BEIJING, 150000, "medium", 0, random.Random(9))
    second = waypoints.roundtrip_waypoints(BEIJING, 150000, "medium", 0, random.Random(9))
    assert first == second


def test_roundtrip_ring_closes_on_start(zero_rng):
    ring = waypoints.roundtrip_ring(BEIJING, waypoints.roundtrip_waypoints(BEIJING, 120000, "medium", 0, zero_rng))
    assert len(ring) == 4
    assert ring[0] == ring[-1] == BEIJING


def test_detours_empty_when_target_not_longer_than_direct(zero_rng):
    start = Coordinates(lat=0.0, lon=0.0)
    end = Coordinates(lat=0.0, lon=1.0)
    direct = geo_math.distance(start, end)
    assert waypoints.detour_waypoints(start, end, direct, "high", zero_rng) == []
    assert waypoints.detour_waypoints(start, end, direct - 1, "high", zero_rng) == []


@pytest.mark.parametrize("level,count", [("low", 1), ("medium", 1), ("high", 2), ("extreme", 1)])
def test_detour_count_per_level(zero_rng, level, count):
    start = Coordinates(lat=0.0, lon=0.0)
    end = Coordinates(lat=0.0, lon=0.5)
    assert len(waypoints.detour_waypoints(start, end, 100000, level, zero_rng)) == count


def test_detour_is_pushed_perpendicular(zero_rng):
    start = Coordinates(lat=0.0, lon=0.0)
    end = Coordinates(lat=0.0, lon=0.5)
    target = 100000
    extra = target - geo_math.distance(start, end)

    [detour] = waypoints.detour_waypoints(start, end, target, "low", zero_rng)
    midpoint = Coordinates(lat=0.0, lon=0.25)

    # heading east, so the detour goes south by 30% of the extra distance
    assert geo_math.distance(midpoint, detour) == pytest.approx(extra * 0.3, rel=1e-3)
    assert geo_math.bearing(midpoint, detour) == pytest.approx(180, abs=0.01)


def test_detour_route_keeps_endpoints():
    start, end = Coordinates(0.0, 0.0), Coordinates(1.0, 1.0)
    detour = Coordinates(0.5, 0.7)
    assert waypoints.detour_route(start, end, [detour]) == [start, detour, end]


class MaxJitterRandom(random.Random):
    def uniform(self, a, b):
        return b


def test_jitter_near_antimeridian_keeps_longitude_in_range():
    start = Coordinates(lat=0.0, lon=179.997)
    points = waypoints.roundtrip_waypoints(start, 100000, "medium", 0, MaxJitterRandom())
    for point in points:
        assert -180 <= point.lon < 180
    # due south of start, pushed east across the antimeridian
    assert points[0].lon == pytest.approx(-179.998, abs=1e-6)


def test_normalize_lon():
    assert geo_math.normalize_lon(180.002) == pytest.approx(-179.998)
    assert geo_math.normalize_lon(-180.5) == pytest.approx(179.5)
    assert geo_math.normalize_lon(12.5) == pytest.approx(12.5)

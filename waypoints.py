# Synthesizes the intermediate waypoints that make a route loop or wander.

import logging
import math
import random

import geo_math
from api_structures import Coordinates, CurveLevel, curve_profile

logger = logging.getLogger(__name__)

# Roughly +/-0.5 km of jitter so loops are not perfect polygons.
JITTER_DEGREES = 0.005
# Spread of the perpendicular detour direction, in degrees either side.
DETOUR_BEARING_SPREAD = 30
# Share of the extra distance each detour point is pushed off the direct line.
DETOUR_OFFSET_SHARE = 0.3


def loop_radius_m(target_distance_m: float) -> float:
    """Treats the target distance as the circumference of a circle."""
    radius_km = (target_distance_m / 1000) / (2 * math.pi)
    return radius_km * 1000


def roundtrip_waypoints(
    start: Coordinates,
    target_distance_m: float,
    curve_level: CurveLevel | str | None,
    start_bearing: float,
    rng: random.Random,
) -> list[Coordinates]:
    """
    Places the intermediate points of a loop, evenly spread in bearing
    around start and jittered independently on each axis.

    Points are returned in ring order; the caller closes the loop.
    """
    count = curve_profile(curve_level).intermediate_point_count
    radius = loop_radius_m(target_distance_m)
    points = []

    for i in range(count):
        angle = start_bearing + (360 / count) * (i + 1)
        point = geo_math.destination_point(start, radius, angle)
        points.append(Coordinates(
            lat=point.lat + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES),
            lon=geo_math.normalize_lon(point.lon + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES)),
        ))

    logger.debug("Roundtrip: %d waypoint(s) on a %.1f km radius", len(points), radius / 1000)
    return points


def roundtrip_ring(start: Coordinates, waypoints: list[Coordinates]) -> list[Coordinates]:
    return [start, *waypoints, start]


def detour_waypoints(
    start: Coordinates,
    end: Coordinates,
    target_distance_m: float,
    curve_level: CurveLevel | str | None,
    rng: random.Random,
) -> list[Coordinates]:
    """
    Pushes points off the straight start->end line to stretch the route
    towards target_distance_m. Returns [] when no extra distance is available.
    """
    direct = geo_math.distance(start, end)
    extra = target_distance_m - direct
    if extra <= 0:
        return []

    count = curve_profile(curve_level).detour_count
    heading = geo_math.bearing(start, end)
    offset = (extra / count) * DETOUR_OFFSET_SHARE
    points = []

    for i in range(count):
        progress = (i + 1) / (count + 1)
        mid = geo_math.interpolate(start, end, progress)
        perpendicular = heading + 90 + rng.uniform(-DETOUR_BEARING_SPREAD, DETOUR_BEARING_SPREAD)
        points.append(geo_math.destination_point(mid, offset, perpendicular))

    logger.debug("Point to point: %d detour(s), %.1f km extra", len(points), extra / 1000)
    return points


def detour_route(start: Coordinates, end: Coordinates, detours: list[Coordinates]) -> list[Coordinates]:
    return [start, *detours, end]

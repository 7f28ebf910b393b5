# Spherical geometry helpers: distance, bearing and destination point.

import math

from api_structures import Coordinates

EARTH_RADIUS_M = 6371000


def distance(a: Coordinates, b: Coordinates) -> float:
    """
    Haversine great-circle distance between two points, in meters.
    Spherical Earth, so expect up to ~0.5% difference from ellipsoidal tools.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lon = math.radians(b.lon - a.lon)

    h = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c


def bearing(a: Coordinates, b: Coordinates) -> float:
    """
    Initial bearing from a to b along the great circle, in degrees [0, 360).
    0 = north, 90 = east. Meaningless when a == b.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lon = math.radians(b.lon - a.lon)

    x = math.sin(delta_lon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)

    result = (math.degrees(math.atan2(x, y)) + 360) % 360
    # (-tiny + 360) % 360 can round up to exactly 360.0
    return 0.0 if result >= 360 else result


def destination_point(origin: Coordinates, distance_m: float, bearing_deg: float) -> Coordinates:
    """Projects a point distance_m meters from origin along bearing_deg."""
    lat1 = math.radians(origin.lat)
    lon1 = math.radians(origin.lon)
    theta = math.radians(bearing_deg)
    delta = distance_m / EARTH_RADIUS_M

    lat2 = math.asin(math.sin(lat1) * math.cos(delta) +
                     math.cos(lat1) * math.sin(delta) * math.cos(theta))
    lon2 = lon1 + math.atan2(math.sin(theta) * math.sin(delta) * math.cos(lat1),
                             math.cos(delta) - math.sin(lat1) * math.sin(lat2))

    return Coordinates(lat=math.degrees(lat2), lon=normalize_lon(math.degrees(lon2)))


def interpolate(a: Coordinates, b: Coordinates, fraction: float) -> Coordinates:
    """Linear interpolation of raw coordinates. Not great-circle; fine for short legs."""
    return Coordinates(
        lat=a.lat + (b.lat - a.lat) * fraction,
        lon=a.lon + (b.lon - a.lon) * fraction,
    )


def normalize_lon(lon: float) -> float:
    """Wraps a longitude into [-180, 180)."""
    return (lon + 540) % 360 - 180

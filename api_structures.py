# Defines the standardized, internal data structures for the application.

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from numbers import Real
from typing import Any

import polyline_codec
from route_errors import RouteValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
    """A standardized representation of geographic coordinates."""
    lat: float
    lon: float

    def validate(self, name: str = "point") -> "Coordinates":
        """Checks the WGS84 ranges and returns the coordinates unchanged."""
        if not -90 <= self.lat <= 90:
            raise RouteValidationError(
                f"{name} latitude must be between -90 and 90, got {self.lat}", "latitude_range")
        if not -180 <= self.lon <= 180:
            raise RouteValidationError(
                f"{name} longitude must be between -180 and 180, got {self.lon}", "longitude_range")
        return self


# --- Coordinate order boundary ---
# The public API speaks [lat, lng]; GraphHopper speaks [lng, lat].
# These three functions are the only places the order is interpreted.

def coordinates_from_lat_lng(value: Any, name: str = "point") -> Coordinates:
    """Parses a caller supplied [lat, lng] pair into Coordinates."""
    if isinstance(value, Coordinates):
        return value.validate(name)
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, Real) and not isinstance(v, bool) for v in value)):
        raise RouteValidationError(
            f"{name} must be an array of [lat, lng]", "coordinate_shape")
    return Coordinates(lat=float(value[0]), lon=float(value[1])).validate(name)


def to_wire_point(coords: Coordinates) -> list[float]:
    """Converts Coordinates into GraphHopper's [lng, lat] order."""
    return [coords.lon, coords.lat]


def from_wire_point(pair: list | tuple) -> Coordinates:
    """Parses a GraphHopper [lng, lat] (or [lng, lat, ele]) pair."""
    return Coordinates(lat=float(pair[1]), lon=float(pair[0]))


# --- Curve levels ---

class CurveLevel(str, Enum):
    """How winding and scenic the synthesized route should be."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RouteType(str, Enum):
    ROUNDTRIP = "roundtrip"
    POINT_TO_POINT = "point_to_point"


@dataclass(frozen=True)
class CurveProfile:
    """Routing hints and waypoint counts for a single curve level."""
    avoid_highways: bool
    prefer_scenic: bool
    detour_factor: float
    intermediate_point_count: int
    detour_count: int


CURVE_PROFILES: dict[CurveLevel, CurveProfile] = {
    CurveLevel.LOW: CurveProfile(
        avoid_highways=False, prefer_scenic=False, detour_factor=1.1,
        intermediate_point_count=1, detour_count=1),
    CurveLevel.MEDIUM: CurveProfile(
        avoid_highways=True, prefer_scenic=True, detour_factor=1.3,
        intermediate_point_count=2, detour_count=1),
    CurveLevel.HIGH: CurveProfile(
        avoid_highways=True, prefer_scenic=True, detour_factor=1.6,
        intermediate_point_count=3, detour_count=2),
}


def resolve_curve_level(value: CurveLevel | str | None) -> CurveLevel:
    """Maps a caller supplied level onto a CurveLevel, falling back to medium."""
    if isinstance(value, CurveLevel):
        return value
    if value is None:
        return CurveLevel.MEDIUM
    try:
        return CurveLevel(str(value))
    except ValueError:
        logger.warning("Unknown curve level %r, using 'medium'", value)
        return CurveLevel.MEDIUM


def resolve_route_type(value: RouteType | str) -> RouteType:
    try:
        return RouteType(value)
    except ValueError:
        valid = [t.value for t in RouteType]
        raise RouteValidationError(
            f"route_type must be one of {valid}, got {value!r}", "route_type") from None


def curve_profile(value: CurveLevel | str | None) -> CurveProfile:
    return CURVE_PROFILES[resolve_curve_level(value)]


# --- Path geometry: either still encoded, or already decoded ---

@dataclass(frozen=True)
class EncodedPoints:
    value: str


@dataclass(frozen=True)
class DecodedPoints:
    coordinates: list[tuple[float, ...]]

    def to_geojson(self) -> dict:
        return {"type": "LineString", "coordinates": [list(c) for c in self.coordinates]}


Geometry = EncodedPoints | DecodedPoints


def _parse_geometry(raw: Any) -> Geometry | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return EncodedPoints(raw)
    if isinstance(raw, dict):
        # GraphHopper returns GeoJSON when points_encoded is false.
        raw = raw.get('coordinates', [])
    return DecodedPoints([tuple(float(v) for v in c) for c in raw])


def _decode_geometry(geometry: Geometry | None, with_elevation: bool) -> Geometry | None:
    if isinstance(geometry, EncodedPoints):
        return DecodedPoints(polyline_codec.decode(geometry.value, with_elevation=with_elevation))
    return geometry


def _geometry_to_json(geometry: Geometry | None) -> Any:
    if isinstance(geometry, EncodedPoints):
        return geometry.value
    if isinstance(geometry, DecodedPoints):
        return geometry.to_geojson()
    return None


# --- Route payloads ---

_PATH_FIELDS = {'distance', 'time', 'points', 'instructions', 'snapped_waypoints', 'points_encoded'}


@dataclass(frozen=True)
class Path:
    """One route alternative returned by the routing service."""
    distance: float
    time: int
    points: Geometry | None
    instructions: list[dict] = field(default_factory=list)
    snapped_waypoints: Geometry | None = None
    points_encoded: bool = False
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict) -> "Path":
        return cls(
            distance=float(data.get('distance', 0.0)),
            time=int(data.get('time', 0)),
            points=_parse_geometry(data.get('points')),
            instructions=list(data.get('instructions') or []),
            snapped_waypoints=_parse_geometry(data.get('snapped_waypoints')),
            points_encoded=bool(data.get('points_encoded', False)),
            extra={k: v for k, v in data.items() if k not in _PATH_FIELDS},
        )

    def to_dict(self) -> dict:
        result = dict(self.extra)
        result.update({
            'distance': self.distance,
            'time': self.time,
            'points': _geometry_to_json(self.points),
            'instructions': self.instructions,
            'points_encoded': self.points_encoded,
        })
        if self.snapped_waypoints is not None:
            result['snapped_waypoints'] = _geometry_to_json(self.snapped_waypoints)
        return result


@dataclass(frozen=True)
class RouteInfo:
    """Summary of what was asked for and what the routing service produced."""
    type: RouteType
    target_distance: float | None
    actual_distance: float | None
    curve_level: CurveLevel
    direct_distance: float | None = None
    start_bearing: float | None = None

    def to_dict(self) -> dict:
        result = {
            'type': self.type.value,
            'target_distance': self.target_distance,
            'actual_distance': self.actual_distance,
            'curve_level': self.curve_level.value,
            'direct_distance': self.direct_distance,
            'start_bearing': self.start_bearing,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass(frozen=True)
class RouteResponse:
    """A standardized representation of a routing service answer."""
    paths: list[Path]
    info: dict = field(default_factory=dict)
    route_info: RouteInfo | None = None

    @classmethod
    def from_json(cls, data: dict) -> "RouteResponse":
        return cls(
            paths=[Path.from_json(p) for p in data.get('paths') or []],
            info=dict(data.get('info') or {}),
        )

    def to_dict(self) -> dict:
        result = {'paths': [p.to_dict() for p in self.paths], 'info': self.info}
        if self.route_info is not None:
            result['route_info'] = self.route_info.to_dict()
        return result


def decode_path(path: Path, with_elevation: bool = False) -> Path:
    """Returns a copy of the path with every encoded polyline decoded."""
    return replace(
        path,
        points=_decode_geometry(path.points, with_elevation),
        snapped_waypoints=_decode_geometry(path.snapped_waypoints, with_elevation),
    )


def decode_response(response: RouteResponse, with_elevation: bool = False) -> RouteResponse:
    return replace(response, paths=[decode_path(p, with_elevation) for p in response.paths])

# Assembles the GraphHopper /route request body from waypoints and curve settings.

from dataclasses import dataclass, replace

from api_structures import Coordinates, CurveLevel, curve_profile, to_wire_point
from route_config import CallParameters
from route_errors import RouteValidationError


@dataclass(frozen=True)
class RouteRequest:
    """An ordered list of waypoints plus the routing engine parameters."""
    points: list[Coordinates]
    profile: str
    locale: str
    instructions: bool
    points_encoded: bool
    elevation: bool
    weighting: str | None = None
    avoid: str | None = None

    def __post_init__(self):
        if len(self.points) < 2:
            raise RouteValidationError(
                "At least two points are required to compute a route.", "point_count")

    def to_json(self) -> dict:
        """The JSON body GraphHopper expects, points in [lng, lat] order."""
        body = {
            'points': [to_wire_point(p) for p in self.points],
            'profile': self.profile,
            'locale': self.locale,
            'instructions': self.instructions,
            'points_encoded': self.points_encoded,
            'elevation': self.elevation,
        }
        if self.weighting is not None:
            body['weighting'] = self.weighting
        if self.avoid is not None:
            body['avoid'] = self.avoid
        return body


def build_route_request(points: list[Coordinates], params: CallParameters) -> RouteRequest:
    return RouteRequest(
        points=list(points),
        profile=params.profile,
        locale=params.locale,
        instructions=params.instructions,
        points_encoded=params.points_encoded,
        elevation=params.elevation,
    )


def apply_curve_settings(request: RouteRequest, curve_level: CurveLevel | str | None) -> RouteRequest:
    """Sets weighting and avoid hints for the curve level, unknown levels act as medium."""
    settings = curve_profile(curve_level)
    return replace(
        request,
        # the shortest path tends to leave the arterial roads, which is more fun
        weighting="shortest" if settings.prefer_scenic else "fastest",
        avoid="motorway" if settings.avoid_highways else request.avoid,
    )

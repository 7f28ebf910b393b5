# Public entry point: generates fun roundtrip and point-to-point routes.

import logging
import random
from dataclasses import dataclass, field, replace

import geo_math
import waypoints
from api_adapters import ApiAdapter, GraphHopperAdapter
from api_structures import (
    Coordinates,
    CurveLevel,
    RouteInfo,
    RouteResponse,
    RouteType,
    coordinates_from_lat_lng,
    decode_response,
)
from route_config import CallOverrides, CallParameters, RouteConfig, resolve_call_parameters
from route_errors import RequestError, RouteValidationError
from route_request import apply_curve_settings, build_route_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunRouteRequest:
    """A generic route request, coordinates already parsed and distances in meters."""
    start_point: Coordinates
    target_distance_m: float | None = None
    end_point: Coordinates | None = None
    route_type: RouteType | str | None = None
    curve_level: CurveLevel | str | None = None
    start_bearing: float = 0.0
    overrides: CallOverrides = field(default_factory=CallOverrides)


class Blucap:
    """
    Generates scenic and fun driving routes on top of the GraphHopper API.

    Either pass a ready RouteConfig or its fields as keyword arguments:

        generator = Blucap(api_key="...", profile="car", locale="en")
        route = await generator.generate_round_trip([39.9042, 116.4074], 120)

    The random source used for waypoint jitter can be injected (rng) to make
    results reproducible; the HTTP layer can be swapped through adapter.
    """

    def __init__(
        self,
        config: RouteConfig | None = None,
        *,
        adapter: ApiAdapter | None = None,
        rng: random.Random | None = None,
        **config_fields,
    ):
        if config is None:
            config = RouteConfig(**{'api_key': '', **config_fields})
        elif config_fields:
            config = replace(config, **config_fields)
        self.config = config
        self.adapter = adapter or GraphHopperAdapter(config)
        self.rng = rng or random.Random()

    # --- Public API ---

    async def generate_round_trip(
        self,
        start_point,
        distance_km: float,
        curve_level: CurveLevel | str | None = None,
        start_bearing: float = 0.0,
    ) -> RouteResponse:
        """Generates a loop of roughly distance_km starting and ending at start_point [lat, lng]."""
        start = coordinates_from_lat_lng(start_point, "startPoint")
        self._check_distance_km(distance_km, "distance")

        return await self.generate_fun_route(FunRouteRequest(
            start_point=start,
            target_distance_m=distance_km * 1000,
            route_type=RouteType.ROUNDTRIP,
            curve_level=curve_level,
            start_bearing=start_bearing or 0.0,
        ))

    async def generate_point_to_point(
        self,
        start_point,
        end_point,
        curve_level: CurveLevel | str | None = None,
        target_distance_km: float | None = None,
    ) -> RouteResponse:
        """
        Generates a route from start_point to end_point, both [lat, lng].
        With target_distance_km the route is stretched by detours towards that length.
        """
        start = coordinates_from_lat_lng(start_point, "startPoint")
        end = coordinates_from_lat_lng(end_point, "endPoint")
        if target_distance_km is not None:
            self._check_distance_km(target_distance_km, "targetDistance")

        return await self.generate_fun_route(FunRouteRequest(
            start_point=start,
            end_point=end,
            target_distance_m=None if target_distance_km is None else target_distance_km * 1000,
            route_type=RouteType.POINT_TO_POINT,
            curve_level=curve_level,
        ))

    async def generate_fun_route(self, request: FunRouteRequest) -> RouteResponse:
        """Validates a generic request and dispatches it to the roundtrip or point-to-point flow."""
        overrides = replace(
            request.overrides,
            curve_level=request.curve_level if request.curve_level is not None else request.overrides.curve_level,
            route_type=request.route_type if request.route_type is not None else request.overrides.route_type,
        )
        params = resolve_call_parameters(self.config, overrides)

        start = request.start_point.validate("start_point")
        if params.route_type is RouteType.ROUNDTRIP:
            if request.target_distance_m is None:
                raise RouteValidationError(
                    "A roundtrip route needs a target distance", "target_distance_required")
            self._check_distance_m(request.target_distance_m)
            return await self._round_trip(start, request.target_distance_m, request.start_bearing, params)

        if request.end_point is None:
            raise RouteValidationError(
                "A point to point route needs an end point", "end_point_required")
        end = request.end_point.validate("end_point")
        if request.target_distance_m is not None:
            self._check_distance_m(request.target_distance_m)
        return await self._point_to_point(start, end, request.target_distance_m, params)

    # --- Flows ---

    async def _round_trip(
        self, start: Coordinates, target_m: float, start_bearing: float, params: CallParameters
    ) -> RouteResponse:
        intermediate = waypoints.roundtrip_waypoints(
            start, target_m, params.curve_level, start_bearing, self.rng)
        ring = waypoints.roundtrip_ring(start, intermediate)

        result = await self._request_route(ring, params)
        return replace(result, route_info=RouteInfo(
            type=RouteType.ROUNDTRIP,
            target_distance=target_m,
            actual_distance=self._actual_distance(result),
            curve_level=params.curve_level,
            start_bearing=start_bearing,
        ))

    async def _point_to_point(
        self, start: Coordinates, end: Coordinates, target_m: float | None, params: CallParameters
    ) -> RouteResponse:
        direct = geo_math.distance(start, end)
        points = [start, end]

        if target_m is not None:
            if direct > target_m:
                raise RouteValidationError(
                    f"Direct distance between start and end ({direct / 1000:.1f} km) "
                    f"exceeds the target distance ({target_m / 1000:.1f} km)",
                    "direct_distance_exceeds_target",
                )
            detours = waypoints.detour_waypoints(start, end, target_m, params.curve_level, self.rng)
            points = waypoints.detour_route(start, end, detours)

        result = await self._request_route(points, params)
        return replace(result, route_info=RouteInfo(
            type=RouteType.POINT_TO_POINT,
            target_distance=target_m,
            actual_distance=self._actual_distance(result),
            curve_level=params.curve_level,
            direct_distance=direct,
        ))

    async def _request_route(self, points: list[Coordinates], params: CallParameters) -> RouteResponse:
        request = apply_curve_settings(build_route_request(points, params), params.curve_level)
        logger.debug("Requesting %s route through %d point(s), weighting=%s avoid=%s",
                     params.route_type.value, len(request.points), request.weighting, request.avoid)

        data = await self.adapter.request_route(request.to_json())
        try:
            response = decode_response(RouteResponse.from_json(data), with_elevation=params.elevation)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise RequestError(str(e)) from e

        if response.paths:
            logger.info("Route received: %.1f km over %d path(s)",
                        response.paths[0].distance / 1000, len(response.paths))
        else:
            logger.warning("GraphHopper returned no paths")
        return response

    # --- Helpers ---

    @staticmethod
    def _actual_distance(response: RouteResponse) -> float | None:
        return response.paths[0].distance if response.paths else None

    def _check_distance_km(self, value, name: str) -> None:
        low, high = self.config.distance_range_km
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not low <= value <= high:
            raise RouteValidationError(
                f"{name} must be between {low:g} and {high:g} km", "distance_range")

    def _check_distance_m(self, value: float) -> None:
        low, high = self.config.distance_range_m
        if not low <= value <= high:
            raise RouteValidationError(
                f"target distance must be between {low / 1000:g} and {high / 1000:g} km",
                "distance_range")


# Name used by the original JavaScript package.
FunRouteGenerator = Blucap

# Client configuration, resolved once per client, and the per-call parameter merge.

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from api_structures import CurveLevel, RouteType, resolve_curve_level, resolve_route_type
from route_errors import ConfigurationError, RouteValidationError

DEFAULT_HOST = "https://graphhopper.com/api/1"


@dataclass(frozen=True)
class RouteConfig:
    """
    Process-wide defaults for a client instance. Never mutated after construction.

    api_key            GraphHopper API key (required)
    host               base URL of the routing API
    timeout_ms         request timeout handed to the HTTP layer
    profile            vehicle profile: car, bike, foot, motorcycle
    locale             language of the turn instructions
    instructions       ask for turn-by-turn instructions
    points_encoded     ask for encoded polylines (decoded on return)
    elevation          ask for 3D geometry
    distance_range_m   accepted target distance, inclusive, in meters
    """
    api_key: str
    host: str = DEFAULT_HOST
    timeout_ms: int = 15000
    profile: str = "car"
    locale: str = "en"
    instructions: bool = True
    points_encoded: bool = True
    elevation: bool = False
    distance_range_m: tuple[float, float] = (50000, 500000)
    default_curve_level: CurveLevel = CurveLevel.MEDIUM
    default_route_type: RouteType = RouteType.ROUNDTRIP

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("GraphHopper API key is required")
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be positive, got {self.timeout_ms}")
        low, high = self.distance_range_m
        if low > high:
            raise ConfigurationError(f"distance_range_m is inverted: {self.distance_range_m}")
        # frozen, so normalize through object.__setattr__
        object.__setattr__(self, 'host', self.host.rstrip('/'))
        object.__setattr__(self, 'default_curve_level', resolve_curve_level(self.default_curve_level))
        try:
            object.__setattr__(self, 'default_route_type', resolve_route_type(self.default_route_type))
        except RouteValidationError as e:
            raise ConfigurationError(str(e)) from e

    @property
    def distance_range_km(self) -> tuple[float, float]:
        low, high = self.distance_range_m
        return low / 1000, high / 1000

    @classmethod
    def from_env(cls, **overrides) -> "RouteConfig":
        """Builds a config from GRAPHHOPPER_* variables (a .env file is honored)."""
        load_dotenv()
        values = {
            'api_key': os.getenv("GRAPHHOPPER_API_KEY", ""),
            'host': os.getenv("GRAPHHOPPER_HOST", DEFAULT_HOST),
            'timeout_ms': int(os.getenv("GRAPHHOPPER_TIMEOUT_MS", "15000")),
            'profile': os.getenv("GRAPHHOPPER_PROFILE", "car"),
            'locale': os.getenv("GRAPHHOPPER_LOCALE", "en"),
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class CallOverrides:
    """Per-call engine parameters. None means: use the client default."""
    profile: str | None = None
    locale: str | None = None
    instructions: bool | None = None
    points_encoded: bool | None = None
    elevation: bool | None = None
    curve_level: CurveLevel | str | None = None
    route_type: RouteType | str | None = None


@dataclass(frozen=True)
class CallParameters:
    """Fully resolved parameters for one route request."""
    profile: str
    locale: str
    instructions: bool
    points_encoded: bool
    elevation: bool
    curve_level: CurveLevel
    route_type: RouteType


def _pick(override, default):
    return default if override is None else override


def resolve_call_parameters(config: RouteConfig, overrides: CallOverrides | None = None) -> CallParameters:
    """Merges call overrides over the client defaults, field by field."""
    overrides = overrides or CallOverrides()
    return CallParameters(
        profile=_pick(overrides.profile, config.profile),
        locale=_pick(overrides.locale, config.locale),
        instructions=_pick(overrides.instructions, config.instructions),
        points_encoded=_pick(overrides.points_encoded, config.points_encoded),
        elevation=_pick(overrides.elevation, config.elevation),
        curve_level=resolve_curve_level(_pick(overrides.curve_level, config.default_curve_level)),
        route_type=resolve_route_type(_pick(overrides.route_type, config.default_route_type)),
    )

# Example script: generates a few fun routes against the live GraphHopper API.

import argparse
import asyncio
import logging
import random

from api_structures import RouteResponse
from blucap import Blucap
from route_config import RouteConfig
from route_errors import BlucapError


def format_distance(meters: float) -> str:
    return f"{meters / 1000:.1f} km"


def format_duration(milliseconds: int) -> str:
    """Converts milliseconds into a readable 'XX min' format."""
    return f"{round(milliseconds / 60000)} min"


def display_route(title: str, route: RouteResponse):
    """Prints the headline numbers of a generated route."""
    print(f"\n{title}")
    if not route.paths:
        print("   ! The routing service returned no path.")
        return

    path = route.paths[0]
    print(f"   Total distance: {format_distance(path.distance)}")
    print(f"   Estimated time: {format_duration(path.time)}")
    print(f"   Instructions:   {len(path.instructions)}")

    info = route.route_info
    if info is not None and info.target_distance:
        print(f"   Target:         {format_distance(info.target_distance)}")
    if info is not None and info.direct_distance is not None:
        print(f"   Direct line:    {format_distance(info.direct_distance)}")


async def run_examples(generator: Blucap):
    """Runs the three sample scenarios. A failing scenario does not stop the others."""
    scenarios = [
        ("Roundtrip from Beijing, 120 km, medium curves",
         lambda: generator.generate_round_trip(
             [39.9042, 116.4074], 120, curve_level="medium", start_bearing=90)),
        ("Shanghai to Hangzhou, low curves",
         lambda: generator.generate_point_to_point(
             [31.2304, 121.4737], [30.2741, 120.1551], curve_level="low")),
        ("Hong Kong to Macau, high curves, 200 km detour",
         lambda: generator.generate_point_to_point(
             [22.3193, 114.1694], [22.1987, 113.5439], curve_level="high", target_distance_km=200)),
    ]

    for title, make_call in scenarios:
        try:
            route = await make_call()
        except BlucapError as e:
            print(f"\n{title}")
            print(f"   ! Failed: {e}")
            continue
        display_route(title, route)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description="Fun Route Generator: scenic loops and detours on top of GraphHopper.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the generated waypoints and API calls.")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed for the waypoint jitter, for reproducible routes.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RouteConfig.from_env()
    except ValueError as e:
        print(f"FATAL ERROR: {e}. Set GRAPHHOPPER_API_KEY in your environment or .env file.")
        exit()

    rng = random.Random(args.seed) if args.seed is not None else None
    asyncio.run(run_examples(Blucap(config, rng=rng)))

"""Route catalog and schedule queries."""

import logging
from typing import List, Optional, Union

from .alerts import AlertRegistry
from .models import Direction, Route, RouteCode, ScheduleType
from .terminals import TerminalRegistry
from .timeutil import NOON, Clock

logger = logging.getLogger(__name__)

DirectionLike = Union[Direction, str]


def default_routes() -> List[Route]:
    """The Washington State Ferries routes, as (code, east, west, west name, east name)."""
    return [
        Route.create(RouteCode.BAINBRIDGE, 7, 3, "bainbridge", "bainbridge"),
        Route.create(RouteCode.EDMONDS, 8, 12, "edmonds", "edmonds"),
        Route.create(RouteCode.MUKILTEO, 14, 5, "mukilteo", "mukilteo"),
        Route.create(RouteCode.PT_TOWNSEND, 11, 17, "pt townsend", "pt townsend"),
        Route.create(RouteCode.FAUNTLEROY_SOUTHWORTH, 9, 20,
                     "fauntleroy-southworth", "southworth-fauntleroy"),
        Route.create(RouteCode.FAUNTLEROY_VASHON, 9, 22,
                     "fauntleroy-vashon", "vashon-fauntleroy"),
        Route.create(RouteCode.VASHON_SOUTHWORTH, 22, 20,
                     "vashon-southworth", "southworth-vashon"),
        Route.create(RouteCode.BREMERTON, 7, 4, "bremerton", "bremerton"),
        Route.create(RouteCode.VASHON_PT_DEFIANCE, 21, 16,
                     "vashon-pt defiance", "pt defiance-vashon"),
        Route.create(RouteCode.FRIDAY_HARBOR, 1, 10, "friday harbor", "friday harbor"),
        Route.create(RouteCode.ORCAS, 1, 15, "orcas", "orcas"),
    ]


def _schedule_type_for_key(key: str) -> ScheduleType:
    flag = key[1:2]
    if flag == "e":
        return ScheduleType.WEEKEND
    if flag == "s":
        return ScheduleType.SPECIAL
    return ScheduleType.WEEKDAY


class RouteRegistry:
    """
    Holds the ferry routes and answers schedule questions about them.

    "Now" and "today" come from the shared Clock, so tests can pin time by
    giving the registry a clock with a fixed now_func.
    """

    def __init__(
        self,
        clock: Clock,
        terminals: Optional[TerminalRegistry] = None,
        alerts: Optional[AlertRegistry] = None,
        routes: Optional[List[Route]] = None,
    ):
        """
        Initialize the registry.

        Args:
            clock: Source of the current service time and schedule type.
            terminals: Used to resolve terminal names.
            alerts: Used by has_new_alerts().
            routes: Route catalog. Defaults to the WSF routes.
        """
        self.clock = clock
        self.terminals = terminals
        self.alerts = alerts
        self.routes: List[Route] = routes if routes is not None else default_routes()

    def all_routes(self) -> List[Route]:
        return self.routes

    def find_by_display_name(self, name: str) -> Optional[Route]:
        """First route with this display name in either direction, or None."""
        for route in self.routes:
            if name in (route.display_name[Direction.WEST], route.display_name[Direction.EAST]):
                return route
        return None

    def clear_all_times(self) -> None:
        """Drop every schedule so stale schedule types don't survive a reload."""
        for route in self.routes:
            route.times = {Direction.WEST: {}, Direction.EAST: {}}

    def load_times(self, line: str) -> None:
        """
        Load one departure table.

        Args:
            line: "<route name>,<key>,<time1>,<time2>,..." where key[0] is 'w'
                  or 'e' for the direction and key[1] is 'e' (weekend),
                  's' (special) or anything else (weekday).

        Raises:
            ValueError: If the route name is unknown or the key is missing.
        """
        tokens = line.split(",")
        name = tokens[0]
        route = self.find_by_display_name(name)
        if route is None:
            raise ValueError(f"No route found matching '{name}'")
        if len(tokens) < 2 or not tokens[1]:
            raise ValueError(f"Missing direction/schedule key in line for '{name}'")
        key = tokens[1]
        direction = Direction.WEST if key[0] == "w" else Direction.EAST
        schedule = _schedule_type_for_key(key)
        route.times[direction][schedule] = [int(t) for t in tokens[2:]]
        logger.debug(f"Loaded {len(tokens) - 2} {schedule.value} {direction.value} times for {name}")

    def todays_schedule(self, route: Route) -> ScheduleType:
        """
        Special if the route has a special schedule loaded, else the clock's weekday/weekend.

        Only the west direction is consulted for a special schedule.
        """
        if route.times[Direction.WEST].get(ScheduleType.SPECIAL):
            return ScheduleType.SPECIAL
        return self.clock.todays_schedule_type()

    def _times(self, route: Route, direction: DirectionLike,
               schedule: Optional[ScheduleType]) -> List[int]:
        schedule = schedule or self.todays_schedule(route)
        return route.times[Direction(direction)].get(ScheduleType(schedule), [])

    def future_departures(self, route: Route, direction: DirectionLike,
                          schedule: Optional[ScheduleType] = None) -> List[int]:
        """Departures later than now, from today's schedule unless one is given."""
        now = self.clock.now()
        return [t for t in self._times(route, direction, schedule) if t > now]

    def before_noon(self, route: Route, direction: DirectionLike,
                    schedule: Optional[ScheduleType] = None) -> List[int]:
        return [t for t in self._times(route, direction, schedule) if t < NOON]

    def after_noon(self, route: Route, direction: DirectionLike,
                   schedule: Optional[ScheduleType] = None) -> List[int]:
        return [t for t in self._times(route, direction, schedule) if t >= NOON]

    def term_name(self, route: Route, direction: DirectionLike) -> str:
        """Name of the terminal on the given side of the route."""
        code = route.terminals[Direction(direction)]
        terminal = self.terminals.get(code) if self.terminals else None
        if terminal is None:
            raise ValueError(f"Terminal {code} not found")
        return terminal.name

    def has_new_alerts(self, route: Route) -> bool:
        if self.alerts is None:
            return False
        return self.alerts.has_alerts(route, True)

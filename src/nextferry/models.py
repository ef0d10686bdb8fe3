"""Data models for NextFerry."""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Dict, List, Optional, Tuple


class Direction(str, Enum):
    """Direction of travel on a route."""
    WEST = "west"
    EAST = "east"


class ScheduleType(str, Enum):
    """Which departure table applies on a given service day."""
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    SPECIAL = "special"


class Goodness(str, Enum):
    """How likely a rider is to make a departure."""
    UNKNOWN = "Unknown"
    TOO_LATE = "TooLate"
    RISKY = "Risky"
    INDIFFERENT = "Indifferent"
    GOOD = "Good"


class RouteCode(IntFlag):
    """Bit flag per route; alerts target routes with an OR of these."""
    BAINBRIDGE = 1
    EDMONDS = 1 << 2
    MUKILTEO = 1 << 3
    PT_TOWNSEND = 1 << 4
    FAUNTLEROY_SOUTHWORTH = 1 << 5
    FAUNTLEROY_VASHON = 1 << 6
    VASHON_SOUTHWORTH = 1 << 7
    BREMERTON = 1 << 8
    VASHON_PT_DEFIANCE = 1 << 9
    FRIDAY_HARBOR = 1 << 10
    ORCAS = 1 << 11


def _empty_times() -> Dict[Direction, Dict[ScheduleType, List[int]]]:
    return {Direction.WEST: {}, Direction.EAST: {}}


@dataclass
class Route:
    """A ferry route between two terminals."""
    code: RouteCode
    terminals: Dict[Direction, int]  # direction -> terminal code
    display_name: Dict[Direction, str]
    # times[direction][schedule_type] -> ascending service times
    times: Dict[Direction, Dict[ScheduleType, List[int]]] = field(default_factory=_empty_times)

    @classmethod
    def create(cls, code: RouteCode, east_code: int, west_code: int,
               west_name: str, east_name: str) -> "Route":
        """Build a route from its terminal codes and per-direction names."""
        return cls(
            code=code,
            terminals={Direction.WEST: west_code, Direction.EAST: east_code},
            display_name={Direction.WEST: west_name, Direction.EAST: east_name},
        )


@dataclass
class Terminal:
    """Represents a ferry terminal."""
    code: int
    name: str
    location: Tuple[float, float]  # (latitude, longitude)
    tt: Optional[int] = None  # Travel time in minutes; None when unknown


@dataclass
class Alert:
    """A rider alert affecting one or more routes."""
    id: str
    codes: int  # Bitmask of RouteCode values
    body: str
    unread: bool = True

    def affects(self, route: Route) -> bool:
        """True if the route's code is in this alert's mask."""
        return bool(self.codes & route.code)

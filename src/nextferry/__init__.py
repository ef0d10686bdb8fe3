"""NextFerry - ferry schedules, alerts and travel times for Washington State Ferries."""

__version__ = "0.1.0"

from .models import Route, Terminal, Alert, Direction, ScheduleType, Goodness, RouteCode
from .timeutil import Clock, TimeFormatter, adjust_time, time_string, set_time_format
from .routes import RouteRegistry
from .terminals import TerminalRegistry
from .alerts import AlertRegistry
from .goodness import time_goodness
from .server_io import ServerIO
from .ferry_tracker import FerryTracker

__all__ = [
    "FerryTracker",
    "RouteRegistry",
    "TerminalRegistry",
    "AlertRegistry",
    "ServerIO",
    "Clock",
    "TimeFormatter",
    "adjust_time",
    "time_string",
    "set_time_format",
    "time_goodness",
    "Route",
    "Terminal",
    "Alert",
    "Direction",
    "ScheduleType",
    "Goodness",
    "RouteCode",
]

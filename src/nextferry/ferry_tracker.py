"""Main NextFerry tracker class."""

import logging
from datetime import datetime
from typing import Callable, List, MutableMapping, Optional

import requests

from .alerts import AlertRegistry
from .goodness import time_goodness
from .models import Alert, Direction, Goodness, Route
from .routes import DirectionLike, RouteRegistry
from .server_io import ServerIO
from .terminals import TerminalRegistry
from .timeutil import Clock

logger = logging.getLogger(__name__)

# Minutes the rider wants to be at the terminal before departure
DEFAULT_BUFFER = 15


class FerryTracker:
    """
    Ties together the ferry schedule, terminals, alerts and the server.

    This class provides methods to:
    - Refresh schedules, alerts and travel times from the server
    - Look up routes and their upcoming departures
    - Rate departures by whether the rider can make them
    - Track which alerts the rider has read
    """

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        now_func: Callable[[], datetime] = datetime.now,
        session: Optional[requests.Session] = None,
        buffer: int = DEFAULT_BUFFER,
        load_cache: bool = True,
    ):
        """
        Initialize the tracker.

        Args:
            storage: Persistent settings mapping. Read alert ids are kept under
                     "readlist" and the last schedule under "cache".
            now_func: Wall clock, overridable for tests.
            session: HTTP session passed through to ServerIO.
            buffer: Default minutes of slack used by departure_goodness().
            load_cache: If True, load any cached schedule from storage on init.
        """
        self.storage = storage if storage is not None else {}
        self.buffer = buffer
        self.clock = Clock(now_func)
        self.terminals = TerminalRegistry()
        self.alerts = AlertRegistry(self.storage.get("readlist", "").split())
        self.routes = RouteRegistry(self.clock, self.terminals, self.alerts)
        self.server = ServerIO(
            self.routes,
            self.terminals,
            self.alerts,
            storage=self.storage,
            session=session,
        )
        # Reloads drop read ids whose alerts are gone; keep storage in step
        self.server.add_listener("alerts", self._save_read_ids)

        if load_cache and self.server.load_cached_schedule():
            logger.info("Loaded cached schedule")

    def refresh(self) -> bool:
        """Fetch schedule and alert updates from the server."""
        return self.server.request_update()

    def update_travel_times(self, latitude: float, longitude: float) -> bool:
        """Fetch travel times from the rider's position."""
        return self.server.request_travel_times(latitude, longitude)

    def get_route(self, name: str) -> Route:
        """
        Get a route by display name.

        Raises:
            ValueError: If no route has that name.
        """
        route = self.routes.find_by_display_name(name)
        if route is None:
            raise ValueError(f"No route found matching '{name}'")
        return route

    def next_departures(self, name: str, direction: DirectionLike,
                        limit: Optional[int] = None) -> List[int]:
        """Upcoming departures today for a route, soonest first."""
        departures = self.routes.future_departures(self.get_route(name), direction)
        return departures[:limit] if limit is not None else departures

    @staticmethod
    def departure_terminal(route: Route, direction: DirectionLike) -> int:
        """Code of the terminal a sailing leaves from; westbound boats leave from the east side."""
        direction = Direction(direction)
        opposite = Direction.EAST if direction == Direction.WEST else Direction.WEST
        return route.terminals[opposite]

    def departure_goodness(self, route: Route, direction: DirectionLike, departure: int,
                           buffer: Optional[int] = None) -> Goodness:
        terminal = self.terminals.get(self.departure_terminal(route, direction))
        tt = terminal.tt if terminal else None
        return time_goodness(
            self.clock.now(),
            tt,
            self.buffer if buffer is None else buffer,
            departure,
        )

    def alerts_for(self, name: str) -> List[Alert]:
        return self.alerts.alerts_for(self.get_route(name))

    def mark_alert_read(self, alert_id: str) -> bool:
        """Mark an alert read and persist the read list."""
        found = self.alerts.mark_read(alert_id)
        if found:
            self._save_read_ids()
        return found

    def _save_read_ids(self) -> None:
        self.storage["readlist"] = " ".join(self.alerts.read_ids)

    def new_day(self) -> None:
        """Recompute today's schedule type on next use. Call at day rollover."""
        self.clock.reset()

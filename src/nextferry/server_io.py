"""Communication with the NextFerry server."""

import logging
import time
from typing import Callable, Dict, List, MutableMapping, Optional

import requests

from .alerts import AlertRegistry
from .routes import RouteRegistry
from .terminals import TerminalRegistry

logger = logging.getLogger(__name__)

APP_VERSION = "4.0"
INIT_URL = f"http://nextferry.appspot.com/init/{APP_VERSION}/"
TRAVEL_URL = f"http://nextferry.appspot.com/traveltimes/{APP_VERSION}/"
REQUEST_TIMEOUT = 10  # seconds
TRAVEL_TIMES_THROTTLE = 20  # seconds between travel time requests

SCHEDULE = "schedule"
ALERTS = "alerts"
TRAVEL_TIMES = "traveltimes"


class ServerIO:
    """
    Fetches updates from the server and feeds them into the registries.

    Each load_* method fires the listeners registered for its kind after the
    registry has been updated. Network failures are logged and otherwise
    ignored; the app keeps whatever data it already had.
    """

    def __init__(
        self,
        routes: RouteRegistry,
        terminals: TerminalRegistry,
        alerts: AlertRegistry,
        storage: Optional[MutableMapping[str, str]] = None,
        session: Optional[requests.Session] = None,
        init_url: str = INIT_URL,
        travel_url: str = TRAVEL_URL,
        timeout: float = REQUEST_TIMEOUT,
        throttle: float = TRAVEL_TIMES_THROTTLE,
    ):
        """
        Initialize the server connection.

        Args:
            routes: Receives schedule lines.
            terminals: Receives travel times.
            alerts: Receives alert text.
            storage: Persistent key/value settings ("cachedate", "cache",
                     "useloc"). Defaults to an in-memory dict.
            session: HTTP session to use; one is created if omitted.
        """
        self.routes = routes
        self.terminals = terminals
        self.alerts = alerts
        self.storage = storage if storage is not None else {}
        self.session = session or requests.Session()
        self.init_url = init_url
        self.travel_url = travel_url
        self.timeout = timeout
        self.throttle = throttle
        self._listeners: Dict[str, List[Callable[[], None]]] = {
            SCHEDULE: [],
            ALERTS: [],
            TRAVEL_TIMES: [],
        }
        self._last_tt_request: Optional[float] = None

    def add_listener(self, kind: str, callback: Callable[[], None]) -> None:
        """Call callback after every load of kind ("schedule", "alerts" or "traveltimes")."""
        if kind not in self._listeners:
            raise ValueError(f"Unknown listener kind '{kind}'")
        self._listeners[kind].append(callback)

    def _fire(self, kind: str) -> None:
        for callback in self._listeners[kind]:
            callback()

    def load_schedule(self, text: str) -> None:
        """Load schedule lines; blank-ish lines and "/" comments are skipped."""
        loaded = 0
        for line in text.split("\n"):
            line = line.rstrip("\r")
            if len(line) <= 2 or line.startswith("/"):
                continue
            try:
                self.routes.load_times(line)
                loaded += 1
            except ValueError as e:
                logger.error(f"Skipping schedule line: {e}")
        logger.info(f"Loaded {loaded} schedule lines")
        self._fire(SCHEDULE)

    def load_alerts(self, text: str) -> None:
        self.alerts.load_alerts(text)
        self._fire(ALERTS)

    def load_travel_times(self, text: str) -> None:
        logger.debug(f"Received travel times:\n{text}")
        self.terminals.load_travel_times(text)
        self._fire(TRAVEL_TIMES)

    def load_cached_schedule(self) -> bool:
        """
        Load the schedule saved by the last successful update, if any.

        Returns:
            True if a cached schedule was found.
        """
        cached = self.storage.get("cache")
        if not cached:
            return False
        self.routes.clear_all_times()
        self.load_schedule(cached)
        return True

    def _use_location(self) -> bool:
        return self.storage.get("useloc") == "true"

    def process_reply(self, data: str) -> None:
        """
        Dispatch every section of a server reply.

        The reply is text with sections introduced by lines beginning with '#'.
        Unrecognised sections are ignored.
        """
        chunks = data.split("\n#")
        if chunks[0].startswith("#"):
            chunks[0] = chunks[0][1:]

        for chunk in chunks:
            header, newline, body = chunk.partition("\n")
            body = newline + body
            if header.startswith(SCHEDULE):
                self.routes.clear_all_times()
                self.load_schedule(body)
                self.storage["cachedate"] = header[len("schedule "):]
                self.storage["cache"] = body
            elif header == "special":
                self.load_schedule(body)
            elif header == TRAVEL_TIMES:
                # The user may have turned location off since the request went out
                if self._use_location():
                    self.load_travel_times(body)
            elif header == "allalerts":
                self.load_alerts(body)
            else:
                logger.debug(f"Ignoring reply section '{header}'")

    def _get(self, url: str) -> Optional[str]:
        logger.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch {url}: {e}")
            return None

    def request_update(self) -> bool:
        """
        Ask the server for anything newer than our cached schedule.

        Returns:
            True if a reply was received and processed.
        """
        data = self._get(self.init_url + self.storage.get("cachedate", ""))
        if data is None:
            return False
        self.process_reply(data)
        return True

    def request_travel_times(self, latitude: float, longitude: float) -> bool:
        """
        Ask the server for travel times from the given position to each terminal.

        Skipped when the user hasn't enabled location use, or when called again
        within the throttle window.

        Returns:
            True if a reply was received and processed.
        """
        if not self._use_location():
            return False
        now = time.monotonic()
        if self._last_tt_request is not None and now - self._last_tt_request < self.throttle:
            logger.debug("Travel time request throttled")
            return False
        self._last_tt_request = now

        data = self._get(f"{self.travel_url}{latitude},{longitude}")
        if data is None:
            return False
        self.process_reply(data)
        return True

"""Rider alerts and their read state."""

import logging
from typing import Iterable, List, Optional

from .models import Alert, Route

logger = logging.getLogger(__name__)

ALERT_SEPARATOR = "\n__"


class AlertRegistry:
    """Holds the current alert list and remembers which alerts have been read."""

    def __init__(self, read_ids: Optional[Iterable[str]] = None):
        """
        Initialize the registry.

        Args:
            read_ids: Ids of alerts the user has already read, typically restored
                      from storage. They are matched on the next load_alerts().
        """
        self.alerts: List[Alert] = []
        self._read_ids: List[str] = list(read_ids) if read_ids else []

    @property
    def read_ids(self) -> List[str]:
        return list(self._read_ids)

    def alerts_for(self, route: Route) -> List[Alert]:
        """All alerts whose route mask includes this route."""
        return [a for a in self.alerts if a.affects(route)]

    def has_alerts(self, route: Route, unread_only: bool) -> bool:
        for alert in self.alerts:
            if alert.affects(route) and (alert.unread or not unread_only):
                return True
        return False

    def mark_read(self, alert_id: str) -> bool:
        """
        Mark an alert as read.

        Returns:
            False if no current alert has this id.
        """
        for alert in self.alerts:
            if alert.id == alert_id:
                alert.unread = False
                if alert_id not in self._read_ids:
                    self._read_ids.append(alert_id)
                return True
        logger.debug(f"No alert {alert_id} to mark read")
        return False

    def load_alerts(self, text: str) -> None:
        """
        Replace the alert list from a server payload.

        Records are separated by a line of "__". Each record starts with a line
        "<id> <mask>" and the rest of the record is the body text.
        """
        alerts: List[Alert] = []
        for block in text.split(ALERT_SEPARATOR):
            block = block.lstrip("\n")
            if not block.strip():
                continue
            header, _, body = block.partition("\n")
            fields = header.split()
            try:
                alert_id, codes = fields[0], int(fields[1])
            except (IndexError, ValueError):
                logger.warning(f"Skipping alert with malformed header {header!r}")
                continue
            alerts.append(Alert(id=alert_id, codes=codes, body=body.rstrip("\n")))
        self.alerts = alerts

        # Carry read state forward; forget ids whose alerts are gone
        old_read_ids = self._read_ids
        self._read_ids = []
        by_id = {a.id: a for a in alerts}
        for alert_id in old_read_ids:
            alert = by_id.get(alert_id)
            if alert is not None:
                alert.unread = False
                self._read_ids.append(alert_id)

        logger.info(f"Loaded {len(alerts)} alerts ({len(self._read_ids)} already read)")

"""Tests for FerryTracker."""

import unittest
from unittest.mock import patch, MagicMock
from datetime import datetime
import sys
from pathlib import Path

# Add src to path so we can import nextferry
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nextferry.ferry_tracker import FerryTracker
from nextferry.models import Direction, Goodness, ScheduleType
from nextferry.server_io import ServerIO


class TestFerryTracker(unittest.TestCase):
    """Test the main FerryTracker class."""

    def setUp(self):
        """Tuesday 10:50 am with a cached schedule."""
        self.current = {"now": datetime(2024, 1, 2, 10, 50)}
        self.storage = {
            "cache": "\nbainbridge,wd,600,700,800,1450\nbainbridge,ed,680,760\n",
            "readlist": "42 7",
        }
        self.tracker = FerryTracker(
            storage=self.storage,
            now_func=lambda: self.current["now"],
            session=MagicMock(),
        )

    def test_cached_schedule_loaded_on_init(self):
        self.assertEqual(self.tracker.next_departures("bainbridge", "west"), [700, 800, 1450])

    def test_skip_cache(self):
        tracker = FerryTracker(storage=self.storage, session=MagicMock(), load_cache=False)
        route = tracker.get_route("bainbridge")
        self.assertEqual(route.times[Direction.WEST], {})

    def test_next_departures_limit(self):
        self.assertEqual(self.tracker.next_departures("bainbridge", Direction.WEST, limit=1), [700])

    def test_get_route_not_found(self):
        with self.assertRaises(ValueError):
            self.tracker.get_route("atlantis")

    def test_departure_terminal(self):
        route = self.tracker.get_route("bainbridge")
        # Westbound boats leave Seattle, eastbound leave Bainbridge Island
        self.assertEqual(FerryTracker.departure_terminal(route, "west"), 7)
        self.assertEqual(FerryTracker.departure_terminal(route, "east"), 3)

    def test_departure_goodness(self):
        route = self.tracker.get_route("bainbridge")
        self.assertEqual(
            self.tracker.departure_goodness(route, "west", 700), Goodness.UNKNOWN
        )

        self.tracker.terminals.set_travel_time(7, 20)
        # now 650, 650 + 20 + 15 = 685
        self.assertEqual(self.tracker.departure_goodness(route, "west", 700), Goodness.GOOD)
        self.assertEqual(self.tracker.departure_goodness(route, "west", 684), Goodness.RISKY)
        self.assertEqual(self.tracker.departure_goodness(route, "west", 660), Goodness.TOO_LATE)
        self.assertEqual(self.tracker.departure_goodness(route, "west", 900), Goodness.INDIFFERENT)
        self.assertEqual(
            self.tracker.departure_goodness(route, "west", 700, buffer=32), Goodness.RISKY
        )

    def test_read_list_restored_and_persisted(self):
        self.tracker.server.load_alerts("42 1\nOld news\n__\n43 1\nFresh")
        self.assertEqual(self.tracker.alerts.read_ids, ["42"])
        self.assertEqual([a.id for a in self.tracker.alerts_for("bainbridge") if a.unread], ["43"])

        self.assertTrue(self.tracker.mark_alert_read("43"))
        self.assertEqual(self.storage["readlist"], "42 43")
        self.assertFalse(self.tracker.routes.has_new_alerts(self.tracker.get_route("bainbridge")))

    def test_stale_read_ids_removed_from_storage(self):
        self.tracker.server.load_alerts("43 1\nother")
        self.assertEqual(self.tracker.alerts.read_ids, [])
        self.assertEqual(self.storage["readlist"], "")

        tracker = FerryTracker(storage=self.storage, session=MagicMock(), load_cache=False)
        tracker.server.load_alerts("42 1\nBack again")
        self.assertTrue(tracker.alerts.alerts[0].unread)

    def test_new_day_recomputes_schedule_type(self):
        route = self.tracker.get_route("bainbridge")
        self.assertEqual(self.tracker.routes.todays_schedule(route), ScheduleType.WEEKDAY)

        self.current["now"] = datetime(2024, 1, 6, 9, 0)  # Saturday
        self.assertEqual(self.tracker.routes.todays_schedule(route), ScheduleType.WEEKDAY)
        self.tracker.new_day()
        self.assertEqual(self.tracker.routes.todays_schedule(route), ScheduleType.WEEKEND)
        self.assertEqual(self.tracker.next_departures("bainbridge", "east"), [])

    @patch.object(ServerIO, "request_update")
    def test_refresh(self, mock_update):
        mock_update.return_value = True
        self.assertTrue(self.tracker.refresh())
        mock_update.assert_called_once()

    @patch.object(ServerIO, "request_travel_times")
    def test_update_travel_times(self, mock_request):
        mock_request.return_value = False
        self.assertFalse(self.tracker.update_travel_times(47.6, -122.3))
        mock_request.assert_called_once_with(47.6, -122.3)


class TestIntegration(unittest.TestCase):
    """Integration tests with a mocked server reply."""

    def test_refresh_populates_everything(self):
        reply = MagicMock()
        reply.text = (
            "#schedule 2024.01.02\n"
            "vashon-fauntleroy,wd,400,900\n"
            "vashon-fauntleroy,ed,420,910\n"
            "#traveltimes\n"
            "9:25\n"
            "#allalerts\n"
            "5 64\n"
            "Vashon boat delayed\n"
        )
        session = MagicMock()
        session.get.return_value = reply
        storage = {"useloc": "true"}
        tracker = FerryTracker(
            storage=storage,
            now_func=lambda: datetime(2024, 1, 2, 8, 0),
            session=session,
        )

        self.assertTrue(tracker.refresh())
        self.assertEqual(storage["cachedate"], "2024.01.02")

        route = tracker.get_route("fauntleroy-vashon")
        self.assertEqual(tracker.next_departures("fauntleroy-vashon", "west"), [900])
        # Westbound Fauntleroy -> Vashon leaves Fauntleroy (9)
        self.assertEqual(tracker.departure_goodness(route, "west", 900), Goodness.INDIFFERENT)
        self.assertTrue(tracker.routes.has_new_alerts(route))
        self.assertEqual(tracker.alerts_for("vashon-fauntleroy")[0].body, "Vashon boat delayed")


if __name__ == "__main__":
    unittest.main()

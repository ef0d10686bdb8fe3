"""Example usage of FerryTracker."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import nextferry
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nextferry import Direction, FerryTracker, time_string

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_route(tracker: FerryTracker, name: str):
    """
    Display upcoming departures and alerts for a route.

    Args:
        tracker: A tracker that has already been refreshed.
        name: Route display name (e.g., "bainbridge" or "vashon-fauntleroy")
    """
    route = tracker.get_route(name)

    print(f"\n{'='*70}")
    print(f"Route: {name}  ({tracker.routes.todays_schedule(route).value} schedule)")
    print(f"{'='*70}")

    for direction in Direction:
        departing = tracker.terminals.get(tracker.departure_terminal(route, direction))
        print(f"\n{route.display_name[direction]} (from {departing.name}):")
        departures = tracker.routes.future_departures(route, direction)
        if not departures:
            print("  No more departures today")
        for t in departures[:5]:
            goodness = tracker.departure_goodness(route, direction, t)
            print(f"  {time_string(t):>6}  {goodness.value}")

    alerts = tracker.alerts.alerts_for(route)
    if alerts:
        print("\nALERTS:")
        for alert in alerts:
            marker = "*" if alert.unread else " "
            print(f" {marker} [{alert.id}] {alert.body.strip()}")


def main():
    tracker = FerryTracker()
    if not tracker.refresh():
        print("Could not reach the NextFerry server")
        sys.exit(1)

    names = sys.argv[1:] or [r.display_name[Direction.WEST] for r in tracker.routes.all_routes()]
    for name in names:
        try:
            print_route(tracker, name)
        except ValueError as e:
            print(f"Error: {e}")
    print()


if __name__ == "__main__":
    main()

"""Terminal catalog and travel-time annotations."""

import logging
from typing import Dict, List, Optional

from .models import Terminal

logger = logging.getLogger(__name__)


def default_terminals() -> List[Terminal]:
    """The Washington State Ferries terminals served by the default routes."""
    return [
        Terminal(1, "Anacortes", (48.502220, -122.679455)),
        Terminal(3, "Bainbridge Island", (47.623046, -122.511377)),
        Terminal(4, "Bremerton", (47.564990, -122.627012)),
        Terminal(5, "Clinton", (47.974785, -122.352139)),
        Terminal(7, "Seattle", (47.601767, -122.336089)),
        Terminal(8, "Edmonds", (47.811240, -122.382631)),
        Terminal(9, "Fauntleroy", (47.523115, -122.392952)),
        Terminal(10, "Friday Harbor", (48.535010, -123.014645)),
        Terminal(11, "Coupeville", (48.160592, -122.674305)),
        Terminal(12, "Kingston", (47.796943, -122.496785)),
        Terminal(13, "Lopez Island", (48.570447, -122.883646)),
        Terminal(14, "Mukilteo", (47.947758, -122.304138)),
        Terminal(15, "Orcas Island", (48.597971, -122.943985)),
        Terminal(16, "Point Defiance", (47.305414, -122.514123)),
        Terminal(17, "Port Townsend", (48.112648, -122.760715)),
        Terminal(18, "Shaw Island", (48.583991, -122.929351)),
        Terminal(20, "Southworth", (47.512130, -122.500970)),
        Terminal(21, "Tahlequah", (47.333023, -122.506999)),
        Terminal(22, "Vashon Island", (47.508616, -122.464127)),
    ]


class TerminalRegistry:
    """Lookup of terminals by code, plus the user's travel time to each."""

    def __init__(self, terminals: Optional[List[Terminal]] = None):
        if terminals is None:
            terminals = default_terminals()
        self.terminals: Dict[int, Terminal] = {t.code: t for t in terminals}

    def get(self, code: int) -> Optional[Terminal]:
        return self.terminals.get(code)

    def all_terminals(self) -> List[Terminal]:
        return list(self.terminals.values())

    def clear_all_travel_times(self) -> None:
        for terminal in self.terminals.values():
            terminal.tt = None

    def set_travel_time(self, code: int, minutes: Optional[int]) -> None:
        """Set the travel time to a terminal. Unknown codes are ignored."""
        terminal = self.terminals.get(code)
        if terminal is None:
            logger.warning(f"Travel time for unknown terminal {code} ignored")
            return
        terminal.tt = minutes

    def load_travel_times(self, text: str) -> None:
        """
        Replace all travel times from a server payload.

        Args:
            text: One "code:minutes" pair per line. Terminals missing from the
                  payload end up with an unknown travel time.
        """
        self.clear_all_travel_times()
        loaded = 0
        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            code, sep, minutes = line.partition(":")
            try:
                if not sep:
                    raise ValueError("missing ':'")
                self.set_travel_time(int(code), int(minutes))
                loaded += 1
            except ValueError as e:
                logger.warning(f"Skipping malformed travel time line {line!r}: {e}")
        logger.info(f"Loaded {loaded} travel times")

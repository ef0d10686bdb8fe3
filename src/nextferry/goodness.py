"""Classifies whether a rider can make a departure."""

from typing import Optional

from .models import Goodness

# Beyond this much slack the rider doesn't care about the sailing yet
MAX_INTERESTING_MARGIN = 120


def time_goodness(now: int, tt: Optional[int], buffer: int, departure: int) -> Goodness:
    """
    Rate a departure given the current time and the travel time to the terminal.

    Args:
        now: Current service time.
        tt: Travel time to the terminal in minutes, or None if unknown.
        buffer: Extra minutes the rider wants to arrive ahead of departure.
        departure: Departure service time.

    Returns:
        The first matching Goodness, checked in order: Unknown, TooLate,
        Risky, Indifferent, Good.
    """
    if tt is None:  # 0 is a valid travel time
        return Goodness.UNKNOWN
    if now + 0.95 * (tt + buffer) > departure:
        return Goodness.TOO_LATE
    if now + tt + buffer > departure:
        return Goodness.RISKY
    if now + tt + buffer + MAX_INTERESTING_MARGIN < departure:
        return Goodness.INDIFFERENT
    return Goodness.GOOD

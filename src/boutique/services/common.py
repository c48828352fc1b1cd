# src/boutique/services/common.py
"""
Helpers shared by the record services.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional

from boutique.reports.periods import format_record_date

Clock = Callable[[], datetime]


def new_record_id(existing: Iterable[str], now: Optional[Clock] = None) -> str:
    """Millisecond timestamp id, bumped until it is unused."""
    moment = (now or datetime.now)()
    candidate = int(moment.timestamp() * 1000)
    taken = set(existing)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def today_string(now: Optional[Clock] = None) -> str:
    """Today's date as stored on records (DD/MM/YYYY)."""
    return format_record_date((now or datetime.now)().date())


def matches(query: str, *values: Optional[str]) -> bool:
    """Case-insensitive substring match against any value; empty query matches all."""
    needle = (query or '').strip().lower()
    if not needle:
        return True
    return any(needle in (value or '').lower() for value in values)

# src/boutique/reports/periods.py
"""
PERIOD FILTER
Keeps the records whose DD/MM/YYYY date falls in the day, week, month or
quarter of a reference date. Weeks run Sunday to Saturday.
"""

import calendar
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

DATE_FORMAT = '%d/%m/%Y'


class FilterPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


def coerce_period(value: Any) -> Optional[FilterPeriod]:
    """FilterPeriod for value, None when it is not one of the four periods."""
    if isinstance(value, FilterPeriod):
        return value
    try:
        return FilterPeriod(value)
    except ValueError:
        return None


def parse_record_date(value: Any) -> Optional[date]:
    """Calendar date of a record, None when missing or unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def format_record_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def _record_date_value(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get('date')
    return getattr(record, 'date', None)


def _as_date(reference: Any) -> date:
    if reference is None:
        return datetime.now().date()
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def period_bounds(period: Any, reference: Any = None) -> Optional[Tuple[date, date]]:
    """
    Inclusive (start, end) dates of the period containing reference.

    Returns:
        None for an unrecognized period
    """
    period = coerce_period(period)
    today = _as_date(reference)

    if period == FilterPeriod.DAY:
        return today, today

    if period == FilterPeriod.WEEK:
        # date.weekday() is Monday=0; shift so Sunday=0
        days_since_sunday = (today.weekday() + 1) % 7
        week_start = today - timedelta(days=days_since_sunday)
        return week_start, week_start + timedelta(days=6)

    if period == FilterPeriod.MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)

    if period == FilterPeriod.QUARTER:
        quarter = (today.month - 1) // 3
        first_month = quarter * 3 + 1
        last_month = first_month + 2
        last_day = calendar.monthrange(today.year, last_month)[1]
        return date(today.year, first_month, 1), date(today.year, last_month, last_day)

    return None


def is_in_period(value: Any, period: Any, reference: Any = None) -> bool:
    """True when the date value falls inside the period around reference."""
    bounds = period_bounds(period, reference)
    if bounds is None:
        return True
    record_date = parse_record_date(value)
    if record_date is None:
        return False
    start, end = bounds
    return start <= record_date <= end


def filter_by_period(records: Iterable[Any], period: Any, reference_now: Any = None) -> List[Any]:
    """
    Records dated inside the period, in input order.

    Args:
        records: Records with a `date` attribute or key (DD/MM/YYYY)
        period: FilterPeriod or its string value; anything else keeps all records
        reference_now: date/datetime the period is relative to (default: now)

    Returns:
        New list; input records are not modified
    """
    bounds = period_bounds(period, reference_now)
    if bounds is None:
        return list(records)

    start, end = bounds
    kept = []
    for record in records:
        record_date = parse_record_date(_record_date_value(record))
        if record_date is not None and start <= record_date <= end:
            kept.append(record)
    return kept

"""Merge both event sources and bucket them into the daily, weekly and monthly views.

Everything here is a pure function of its arguments: the board recomputes
buckets from scratch whenever its inputs change.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Event

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
VIEW_MODES = (DAILY, WEEKLY, MONTHLY)

TODAY = "TODAY"
TOMORROW = "TOMORROW"
UPCOMING = "UPCOMING"
WEEK_BUCKET = "EVENTS"

MONTH_LABELS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

# date.weekday() of the first day of a week.
WEEK_STARTS = {"monday": 0, "sunday": 6}

UPCOMING_HORIZON_DAYS = 14


def merge_events(remote: Optional[Iterable[Event]], personal: Optional[Iterable[Event]]) -> List[Event]:
    # sorted() is stable, so remote events stay ahead of personal ones on the same day.
    combined = [*(remote or ()), *(personal or ())]
    return sorted(combined, key=lambda e: e.event_date)


def month_label(d: date) -> str:
    return MONTH_LABELS[d.month - 1]


def week_bounds(reference: date, offset: int = 0, week_starts_on: str = "sunday") -> Tuple[date, date]:
    """Inclusive first and last day of the week holding `reference`, shifted by `offset` weeks."""
    first_weekday = WEEK_STARTS[week_starts_on]
    back = (reference.weekday() - first_weekday) % 7
    start = reference - timedelta(days=back) + timedelta(weeks=offset)
    return start, start + timedelta(days=6)


def daily_buckets(
    events: Iterable[Event],
    reference: date,
    horizon_days: int = UPCOMING_HORIZON_DAYS,
) -> Dict[str, List[Event]]:
    tomorrow = reference + timedelta(days=1)
    horizon = reference + timedelta(days=horizon_days)
    buckets: Dict[str, List[Event]] = {TODAY: [], TOMORROW: [], UPCOMING: []}
    for e in events:
        if e.event_date == reference:
            buckets[TODAY].append(e)
        elif e.event_date == tomorrow:
            buckets[TOMORROW].append(e)
        elif tomorrow < e.event_date < horizon:
            buckets[UPCOMING].append(e)
    return buckets


def weekly_bucket(
    events: Iterable[Event],
    reference: date,
    offset: int = 0,
    week_starts_on: str = "sunday",
) -> List[Event]:
    start, end = week_bounds(reference, offset, week_starts_on)
    return [e for e in events if start <= e.event_date <= end]


def monthly_bucket(events: Iterable[Event], label: str) -> List[Event]:
    # Matches on month only; a term never spans the same month in two years.
    label = normalize_month_label(label)
    return [e for e in events if month_label(e.event_date) == label]


def monthly_bucket_name(label: str) -> str:
    return f"{normalize_month_label(label)} SCHEDULE"


def bucket_events(
    events: Iterable[Event],
    mode: str,
    reference: date,
    param: object = None,
    week_starts_on: str = "sunday",
    horizon_days: int = UPCOMING_HORIZON_DAYS,
) -> Dict[str, List[Event]]:
    events = list(events)
    if mode == DAILY:
        return daily_buckets(events, reference, horizon_days)
    if mode == WEEKLY:
        offset = 0 if param is None else int(param)
        return {WEEK_BUCKET: weekly_bucket(events, reference, offset, week_starts_on)}
    if mode == MONTHLY:
        label = month_label(reference) if param is None else str(param)
        return {monthly_bucket_name(label): monthly_bucket(events, label)}
    raise ValueError(f"Unknown view mode {mode!r}; expected one of {', '.join(VIEW_MODES)}")


def normalize_month_label(label: str) -> str:
    normalized = label.strip().upper()
    if normalized not in MONTH_LABELS:
        raise ValueError(f"Unknown month label {label!r}")
    return normalized

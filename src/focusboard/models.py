from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

CATEGORIES = ("Quiz", "Midsem", "Lab", "Deadline", "Compre", "Personal")
PERSONAL = "Personal"

EventId = Union[int, str]


@dataclass(frozen=True)
class Event:
    id: EventId
    title: str
    event_date: date            # calendar day, no time component
    category: str               # one of CATEGORIES
    time_range: Optional[str] = None
    description: Optional[str] = None
    is_personal: bool = False

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"unknown category {self.category!r}")
        if self.is_personal and self.category != PERSONAL:
            raise ValueError(f"personal event {self.title!r} must have category {PERSONAL!r}")

    @property
    def deletable(self) -> bool:
        return self.is_personal

    @property
    def has_details(self) -> bool:
        return bool(self.description)


def parse_event_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    # Timestamps ("2026-03-10T09:00:00+05:30") keep only the calendar day.
    return date.fromisoformat(text[:10])


def event_from_row(row: Dict[str, Any], personal: bool = False) -> Event:
    """Build an Event from a wire/storage row, raising ValueError on bad rows."""
    title = str(row.get("title") or "").strip()
    if not title:
        raise ValueError("event title is empty")
    if "id" not in row or row["id"] is None:
        raise ValueError(f"event {title!r} has no id")

    category = PERSONAL if personal else str(row.get("type") or "")
    if category not in CATEGORIES:
        raise ValueError(f"event {title!r} has unknown type {category!r}")

    return Event(
        id=row["id"],
        title=title,
        event_date=parse_event_date(row.get("event_date")),
        category=category,
        time_range=row.get("time_range") or None,
        description=row.get("description") or None,
        is_personal=personal,
    )


def event_to_row(e: Event) -> Dict[str, Any]:
    return {
        "id": e.id,
        "title": e.title,
        "event_date": e.event_date.isoformat(),
        "time_range": e.time_range,
        "type": e.category,
        "isPersonal": e.is_personal,
        "description": e.description,
    }

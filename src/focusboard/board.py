from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Protocol

import requests

from .buckets import (
    DAILY,
    MONTHLY,
    TODAY,
    TOMORROW,
    UPCOMING_HORIZON_DAYS,
    VIEW_MODES,
    WEEKLY,
    bucket_events,
    merge_events,
    month_label,
    normalize_month_label,
    week_bounds,
)
from .models import Event, EventId
from .tasks import PersonalTasks


class EventSource(Protocol):
    def fetch(self, today: date) -> List[Event]: ...


@dataclass(frozen=True)
class Bucket:
    label: str
    events: List[Event]
    show_date: bool
    empty_text: str = ""


@dataclass(frozen=True)
class View:
    mode: str
    header: List[str]
    buckets: List[Bucket] = field(default_factory=list)
    loading: bool = False
    tabs: List[str] = field(default_factory=list)
    selected_tab: str = ""


def fmt_day(d: date) -> str:
    # "5 MAR"
    return f"{d.day} {month_label(d)}"


class Board:
    """Session state for the dashboard: loaded events plus the active view."""

    def __init__(
        self,
        source: Optional[EventSource],
        tasks: PersonalTasks,
        today: Callable[[], date] = date.today,
        week_starts_on: str = "sunday",
        month_tabs: Optional[List[str]] = None,
        horizon_days: int = UPCOMING_HORIZON_DAYS,
    ) -> None:
        self.source = source
        self.tasks = tasks
        self.today = today
        self.week_starts_on = week_starts_on
        self.month_tabs = list(month_tabs or ["JAN", "FEB", "MAR", "APR", "MAY"])
        self.horizon_days = horizon_days

        self.remote_events: List[Event] = []
        self.loading = True
        self.mode = DAILY
        self.week_offset = 0
        self.selected_month = month_label(self.today())
        self.tasks.ensure_loaded()

    # --- data ---

    def load(self) -> None:
        today = self.today()
        self.remote_events = []
        if self.source is not None:
            try:
                self.remote_events = list(self.source.fetch(today))
            except (requests.RequestException, ValueError) as e:
                print(f"Remote event fetch failed; continuing without academic events. Error: {e}")
        self.loading = False
        print(f"Loaded {len(self.remote_events)} academic events and {len(self.tasks.events)} personal tasks")

    def events(self) -> List[Event]:
        return merge_events(self.remote_events, self.tasks.events)

    def add_task(self, title: str, time_label: str = "") -> Optional[Event]:
        taken = tuple(e.id for e in self.remote_events)
        return self.tasks.create(title, time_label, taken_ids=taken)

    def delete_task(self, event_id: EventId) -> bool:
        return self.tasks.delete(event_id)

    # --- view state ---

    def set_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode {mode!r}; expected one of {', '.join(VIEW_MODES)}")
        if mode == WEEKLY and self.mode != WEEKLY:
            self.week_offset = 0
        self.mode = mode

    def shift_week(self, delta: int) -> int:
        self.week_offset += delta
        return self.week_offset

    def select_month(self, label: str) -> None:
        self.selected_month = normalize_month_label(label)

    def param(self) -> object:
        if self.mode == WEEKLY:
            return self.week_offset
        if self.mode == MONTHLY:
            return self.selected_month
        return None

    def view(self) -> View:
        today = self.today()
        header = self._header(today)
        tabs = self.month_tabs if self.mode == MONTHLY else []
        selected = self.selected_month if self.mode == MONTHLY else ""
        if self.loading:
            return View(mode=self.mode, header=header, loading=True, tabs=tabs, selected_tab=selected)

        groups = bucket_events(
            self.events(),
            self.mode,
            today,
            self.param(),
            week_starts_on=self.week_starts_on,
            horizon_days=self.horizon_days,
        )
        buckets = [
            Bucket(
                label=label,
                events=events,
                show_date=label not in (TODAY, TOMORROW),
                empty_text=self._empty_text(label),
            )
            for label, events in groups.items()
        ]
        return View(mode=self.mode, header=header, buckets=buckets, tabs=tabs, selected_tab=selected)

    def _header(self, today: date) -> List[str]:
        if self.mode == DAILY:
            return [today.strftime("%A").upper(), fmt_day(today)]
        if self.mode == WEEKLY:
            start, end = week_bounds(today, self.week_offset, self.week_starts_on)
            lines = ["WEEKLY VIEW", f"{fmt_day(start)} - {fmt_day(end)}"]
            if self.week_offset == 0:
                lines.append("Current Week")
            return lines
        return ["SEMESTER VIEW"]

    def _empty_text(self, label: str) -> str:
        if self.mode == DAILY:
            return "No tasks. Stay focused." if label == TODAY else ""
        if self.mode == WEEKLY:
            return "No academic events scheduled for this week."
        return f"No events scheduled for {self.selected_month}."

from __future__ import annotations

import time
from datetime import date
from typing import Callable, List, Optional

from .models import PERSONAL, Event, EventId
from .store import PersonalTaskStore

ALL_DAY = "All Day"
PERSONAL_DESCRIPTION = "Personal Task"


def _millis() -> int:
    return int(time.time() * 1000)


class PersonalTasks:
    """User-owned tasks: the in-memory list plus its persisted copy."""

    def __init__(
        self,
        store: PersonalTaskStore,
        today: Callable[[], date] = date.today,
        clock: Callable[[], int] = _millis,
        all_day_label: str = ALL_DAY,
    ) -> None:
        self.store = store
        self.today = today
        self.clock = clock
        self.all_day_label = all_day_label
        self.events: List[Event] = []
        self.loaded = False

    def load(self) -> List[Event]:
        self.events = self.store.load()
        self.loaded = True
        return self.events

    def ensure_loaded(self) -> List[Event]:
        # Writes replace the whole slot, so the slot must be read before the first change.
        if not self.loaded:
            self.load()
        return self.events

    def create(self, title: str, time_label: str = "", taken_ids: tuple = ()) -> Optional[Event]:
        title = (title or "").strip()
        if not title:
            return None

        self.ensure_loaded()
        event = Event(
            id=self._next_id(taken_ids),
            title=title,
            event_date=self.today(),
            category=PERSONAL,
            time_range=(time_label or "").strip() or self.all_day_label,
            description=PERSONAL_DESCRIPTION,
            is_personal=True,
        )
        self.events = [*self.events, event]
        self.store.save(self.events)
        return event

    def delete(self, event_id: EventId) -> bool:
        self.ensure_loaded()
        remaining = [e for e in self.events if e.id != event_id]
        if len(remaining) == len(self.events):
            return False
        self.events = remaining
        self.store.save(self.events)
        return True

    def _next_id(self, taken_ids: tuple) -> int:
        candidate = self.clock()
        used = [i for i in (*taken_ids, *(e.id for e in self.events)) if isinstance(i, int)]
        if used and candidate <= max(used):
            candidate = max(used) + 1
        return candidate

from __future__ import annotations
from pathlib import Path
from typing import Any, List
import json
import os

from .models import Event, event_from_row, event_to_row


class PersonalTaskStore:
    """One named JSON slot holding the complete list of personal tasks."""

    def __init__(self, directory: str, slot: str = "personalEvals") -> None:
        self.path = Path(directory).expanduser() / f"{slot}.json"

    def read_raw(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")

    def load(self) -> List[Event]:
        raw = self.read_raw()
        if not raw.strip():
            return []
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            print(f"Personal task store {self.path} is corrupt; starting with no tasks. Error: {exc}")
            return []
        if not isinstance(data, list):
            print(f"Personal task store {self.path} does not hold a list; starting with no tasks.")
            return []

        events: List[Event] = []
        for row in data:
            if not isinstance(row, dict):
                print(f"Skipping malformed personal task entry: {row!r}")
                continue
            try:
                events.append(event_from_row(row, personal=True))
            except ValueError as exc:
                print(f"Skipping malformed personal task entry: {exc}")
        return events

    def save(self, events: List[Event]) -> None:
        # Whole-list replace; never an append.
        payload = json.dumps([event_to_row(e) for e in events], indent=2, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, self.path)

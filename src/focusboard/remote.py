from __future__ import annotations

from datetime import date
from typing import Any, List

import requests

from .models import Event, event_from_row


class SupabaseEventSource:
    """Read-only access to the shared academic events table over the PostgREST API."""

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "evals",
        timeout: float = 8,
        user_agent: str = "focusboard/1.0",
    ) -> None:
        self.base_url = url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    def fetch(self, today: date) -> List[Event]:
        """Events dated today or later, ascending by date. Raises on transport or payload errors."""
        resp = self._session.get(
            f"{self.base_url}/rest/v1/{self.table}",
            params={
                "select": "*",
                "event_date": f"gte.{today.isoformat()}",
                "order": "event_date.asc",
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        payload: Any = resp.json()
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list of rows from {self.table}, got {type(payload).__name__}")

        events: List[Event] = []
        for row in payload:
            if not isinstance(row, dict):
                print(f"Skipping malformed {self.table} row: {row!r}")
                continue
            try:
                events.append(event_from_row(row))
            except ValueError as exc:
                print(f"Skipping malformed {self.table} row: {exc}")
        return events

from datetime import date

import pytest
import requests

from focusboard.remote import SupabaseEventSource


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def _source_returning(monkeypatch, response, calls=None) -> SupabaseEventSource:
    source = SupabaseEventSource("https://demo.supabase.co/", "anon-key")

    def fake_get(url, params=None, timeout=None):
        if calls is not None:
            calls.append({"url": url, "params": params, "timeout": timeout})
        return response

    monkeypatch.setattr(source._session, "get", fake_get)
    return source


def test_fetch_queries_today_onwards_in_date_order(monkeypatch):
    calls = []
    source = _source_returning(monkeypatch, FakeResponse([]), calls)

    source.fetch(date(2026, 3, 4))

    assert calls == [
        {
            "url": "https://demo.supabase.co/rest/v1/evals",
            "params": {"select": "*", "event_date": "gte.2026-03-04", "order": "event_date.asc"},
            "timeout": 8,
        }
    ]
    assert source._session.headers["apikey"] == "anon-key"
    assert source._session.headers["Authorization"] == "Bearer anon-key"


def test_fetch_maps_rows_to_read_only_events(monkeypatch):
    rows = [
        {
            "id": 7,
            "title": "Midsem: Signals",
            "event_date": "2026-03-10",
            "time_range": "9:00 - 10:30",
            "description": "Chapters 1-4",
            "type": "Midsem",
        },
        {"id": 8, "title": "Lab 3", "event_date": "2026-03-11T00:00:00+05:30", "type": "Lab"},
    ]
    source = _source_returning(monkeypatch, FakeResponse(rows))

    events = source.fetch(date(2026, 3, 4))

    assert [e.id for e in events] == [7, 8]
    assert events[0].category == "Midsem"
    assert events[0].has_details is True
    assert events[1].event_date == date(2026, 3, 11)
    assert events[1].has_details is False
    assert not any(e.is_personal or e.deletable for e in events)


def test_fetch_skips_rows_outside_the_category_set(monkeypatch, capsys):
    rows = [
        {"id": 1, "title": "Quiz 2", "event_date": "2026-03-10", "type": "Quiz"},
        {"id": 2, "title": "Party", "event_date": "2026-03-10", "type": "Social"},
    ]
    source = _source_returning(monkeypatch, FakeResponse(rows))

    events = source.fetch(date(2026, 3, 4))

    assert [e.id for e in events] == [1]
    assert "unknown type 'Social'" in capsys.readouterr().out


def test_fetch_raises_on_http_errors(monkeypatch):
    source = _source_returning(monkeypatch, FakeResponse({"message": "nope"}, status_code=401))

    with pytest.raises(requests.HTTPError):
        source.fetch(date(2026, 3, 4))


def test_fetch_rejects_non_list_payload(monkeypatch):
    source = _source_returning(monkeypatch, FakeResponse({"rows": []}))

    with pytest.raises(ValueError):
        source.fetch(date(2026, 3, 4))

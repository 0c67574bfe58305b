from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List
import yaml

from .buckets import MONTH_LABELS, WEEK_STARTS

DEFAULT_MONTH_TABS = ["JAN", "FEB", "MAR", "APR", "MAY"]


@dataclass
class RemoteConfig:
    enabled: bool
    table: str
    timeout_seconds: float


@dataclass
class StoreConfig:
    path: str
    slot: str


@dataclass
class ViewConfig:
    week_starts_on: str
    month_tabs: List[str]
    upcoming_days: int
    all_day_label: str


@dataclass
class DisplayConfig:
    width: int
    height: int


@dataclass
class AppConfig:
    timezone: str
    remote: RemoteConfig
    store: StoreConfig
    view: ViewConfig
    display: DisplayConfig


def _month_tabs(raw: Any) -> List[str]:
    tabs = [str(t).strip().upper() for t in (raw or DEFAULT_MONTH_TABS)]
    unknown = [t for t in tabs if t not in MONTH_LABELS]
    if unknown:
        raise ValueError(f"Unknown month tab(s): {', '.join(unknown)}")
    return tabs


def load_config(path: str) -> AppConfig:
    p = Path(path)
    data: Dict[str, Any] = {}
    if p.exists():
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    remote = data.get("remote", {})
    store = data.get("store", {})
    view = data.get("view", {})
    display = data.get("display", {})

    week_starts_on = str(view.get("week_starts_on", "sunday")).strip().lower()
    if week_starts_on not in WEEK_STARTS:
        raise ValueError(f"week_starts_on must be one of {sorted(WEEK_STARTS)}, got {week_starts_on!r}")

    return AppConfig(
        timezone=data.get("timezone", "Asia/Kolkata"),
        remote=RemoteConfig(
            enabled=bool(remote.get("enabled", True)),
            table=str(remote.get("table", "evals")),
            timeout_seconds=float(remote.get("timeout_seconds", 8)),
        ),
        store=StoreConfig(
            path=str(store.get("path", "~/.local/share/focusboard")),
            slot=str(store.get("slot", "personalEvals")),
        ),
        view=ViewConfig(
            week_starts_on=week_starts_on,
            month_tabs=_month_tabs(view.get("month_tabs")),
            upcoming_days=int(view.get("upcoming_days", 14)),
            all_day_label=str(view.get("all_day_label", "All Day")),
        ),
        display=DisplayConfig(
            width=int(display.get("width", 800)),
            height=int(display.get("height", 1200)),
        ),
    )

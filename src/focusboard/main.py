from __future__ import annotations

import argparse
import os
from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from .board import Board
from .buckets import VIEW_MODES
from .config import AppConfig, load_config
from .models import EventId
from .remote import SupabaseEventSource
from .render import render_image, render_text
from .store import PersonalTaskStore
from .tasks import PersonalTasks

CONFIG_PATH_DEFAULT = "~/.config/focusboard/config.yaml"


def build_board(cfg: AppConfig) -> Board:
    tz = ZoneInfo(cfg.timezone)

    def today() -> date:
        return datetime.now(tz=tz).date()

    source: Optional[SupabaseEventSource] = None
    if cfg.remote.enabled:
        url = os.environ.get("SUPABASE_URL", "")
        key = os.environ.get("SUPABASE_ANON_KEY", "")
        if url and key:
            source = SupabaseEventSource(url, key, table=cfg.remote.table, timeout=cfg.remote.timeout_seconds)
        else:
            print("Remote events enabled but SUPABASE_URL/SUPABASE_ANON_KEY not set; skipping academic events.")

    store = PersonalTaskStore(cfg.store.path, cfg.store.slot)
    tasks = PersonalTasks(store, today=today, all_day_label=cfg.view.all_day_label)
    return Board(
        source,
        tasks,
        today=today,
        week_starts_on=cfg.view.week_starts_on,
        month_tabs=cfg.view.month_tabs,
        horizon_days=cfg.view.upcoming_days,
    )


def _parse_id(raw: str) -> EventId:
    # Personal ids are millisecond ints; anything else is matched as text.
    try:
        return int(raw)
    except ValueError:
        return raw


def run(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="focusboard", description="Academic deadlines and personal tasks at a glance")
    ap.add_argument("--config", default=CONFIG_PATH_DEFAULT)
    sub = ap.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print the daily, weekly or monthly view")
    show.add_argument("--view", choices=VIEW_MODES, default="daily")
    show.add_argument("--week-offset", type=int, default=0, help="weeks from the current week (weekly view)")
    show.add_argument("--month", help="month tab such as MAR (monthly view)")
    show.add_argument("--details", action="store_true", help="include event descriptions")
    show.add_argument("--png", help="also write the view as an image to this path")

    add = sub.add_parser("add", help="add a personal task for today")
    add.add_argument("title")
    add.add_argument("--time", default="", help="free-text time label, e.g. '2 PM'")

    delete = sub.add_parser("delete", help="delete a personal task by id")
    delete.add_argument("id")

    args = ap.parse_args(argv)

    load_dotenv()
    cfg = load_config(os.path.expanduser(args.config))
    board = build_board(cfg)

    if args.command == "add":
        # Remote ids must be known so the new id cannot collide with one.
        board.load()
        event = board.add_task(args.title, args.time)
        if event is None:
            print("Task title is empty; nothing added.")
        else:
            print(f"Added personal task {event.id}: {event.title} ({event.time_range})")
        return 0

    if args.command == "delete":
        if board.delete_task(_parse_id(args.id)):
            print(f"Deleted personal task {args.id}")
        else:
            print(f"No personal task with id {args.id}; nothing deleted.")
        return 0

    board.load()
    board.set_mode(args.view)
    if args.view == "weekly" and args.week_offset:
        board.shift_week(args.week_offset)
    if args.view == "monthly" and args.month:
        board.select_month(args.month)

    view = board.view()
    print(render_text(view, details=args.details), end="")
    if args.png:
        render_image(view, cfg.display.width, cfg.display.height).save(args.png)
        print(f"Wrote {args.png}")
    return 0


def main():
    raise SystemExit(run())


if __name__ == "__main__":
    main()

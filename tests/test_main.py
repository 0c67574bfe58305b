import json
from datetime import date
from pathlib import Path

from focusboard import main as cli


def _config(tmp_path: Path) -> Path:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        f"""
        timezone: 'Asia/Kolkata'
        remote:
          enabled: true
        store:
          path: '{tmp_path / "data"}'
        """,
        encoding="utf-8",
    )
    return cfg_path


def _no_env(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)


def test_show_without_credentials_still_renders(tmp_path: Path, monkeypatch, capsys):
    _no_env(monkeypatch)

    assert cli.run(["--config", str(_config(tmp_path)), "show"]) == 0

    out = capsys.readouterr().out
    assert "SUPABASE_URL/SUPABASE_ANON_KEY not set; skipping academic events." in out
    assert "No tasks. Stay focused." in out


def test_add_then_delete_round_trip(tmp_path: Path, monkeypatch, capsys):
    _no_env(monkeypatch)
    cfg = str(_config(tmp_path))
    slot = tmp_path / "data" / "personalEvals.json"

    cli.run(["--config", cfg, "add", "Submit form", "--time", "5 PM"])
    (row,) = json.loads(slot.read_text(encoding="utf-8"))
    assert row["title"] == "Submit form"
    assert row["time_range"] == "5 PM"
    assert row["isPersonal"] is True

    cli.run(["--config", cfg, "show"])
    assert "[PERSONAL] Submit form · 5 PM" in capsys.readouterr().out

    cli.run(["--config", cfg, "delete", str(row["id"])])
    assert json.loads(slot.read_text(encoding="utf-8")) == []
    assert f"Deleted personal task {row['id']}" in capsys.readouterr().out


def test_add_with_blank_title_is_ignored(tmp_path: Path, monkeypatch, capsys):
    _no_env(monkeypatch)

    cli.run(["--config", str(_config(tmp_path)), "add", "  "])

    assert "nothing added" in capsys.readouterr().out
    assert not (tmp_path / "data" / "personalEvals.json").exists()


def test_show_weekly_uses_remote_source(tmp_path: Path, monkeypatch, capsys):
    _no_env(monkeypatch)
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    def fake_fetch(self, today: date):
        from focusboard.models import Event

        return [Event(id=1, title="Lab 4", event_date=today, category="Lab")]

    monkeypatch.setattr("focusboard.main.SupabaseEventSource.fetch", fake_fetch)

    cli.run(["--config", str(_config(tmp_path)), "show", "--view", "weekly"])

    out = capsys.readouterr().out
    assert "WEEKLY VIEW" in out
    assert "Current Week" in out
    assert "[LAB] Lab 4" in out


def test_add_bumps_id_past_remote_ids(tmp_path: Path, monkeypatch):
    _no_env(monkeypatch)
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    remote_id = 10**15

    def fake_fetch(self, today: date):
        from focusboard.models import Event

        return [Event(id=remote_id, title="Compre", event_date=today, category="Compre")]

    monkeypatch.setattr("focusboard.main.SupabaseEventSource.fetch", fake_fetch)

    cli.run(["--config", str(_config(tmp_path)), "add", "Pack bag"])

    (row,) = json.loads((tmp_path / "data" / "personalEvals.json").read_text(encoding="utf-8"))
    assert row["id"] == remote_id + 1

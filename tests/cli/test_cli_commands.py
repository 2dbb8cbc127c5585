"""Tests for the SwimTracker CLI commands."""

import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from cli.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def detach_cli_log_handlers():
    """Drop the handlers the CLI callback attaches to the runner's captured stderr."""
    yield
    logger.remove()


@pytest.fixture
def bundle_file(tmp_path: Path) -> Path:
    """Sample bundle: 4x25 with short rests, a long rest, then 2x25."""
    starts = [0, 35, 70, 105, 200, 235]
    data = {
        "window": {"started_at": "2026-03-02T07:00:00", "ended_at": "2026-03-02T07:05:00", "total_distance_meters": 150},
        "distance_samples": [
            {
                "started_at": f"2026-03-02T07:{s // 60:02d}:{s % 60:02d}",
                "ended_at": f"2026-03-02T07:{(s + 30) // 60:02d}:{(s + 30) % 60:02d}",
                "distance_meters": 25,
            }
            for s in starts
        ],
        "stroke_samples": [
            {
                "started_at": f"2026-03-02T07:{s // 60:02d}:{s % 60:02d}",
                "ended_at": f"2026-03-02T07:{(s + 30) // 60:02d}:{(s + 30) % 60:02d}",
                "count": 18,
                "stroke_style": 2,
            }
            for s in starts
        ],
        "heart_rate_samples": [{"started_at": "2026-03-02T07:00:10", "ended_at": "2026-03-02T07:00:10", "bpm": 140}],
    }
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def plan_file(tmp_path: Path) -> Path:
    """Two proposed workouts, the second with a wrong declared total."""
    data = [
        {"title": "Base", "daysFromNow": 1, "totalDistance": 1200, "sets": [{"reps": 10, "distance": 100}, {"reps": 1, "distance": 200}]},
        {"title": "Long", "daysFromNow": 3, "totalDistance": 1500, "sets": [{"reps": 1, "distance": 1000}]},
    ]
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestFileCommands:
    """Commands that only read local files."""

    def test_analyze(self, bundle_file: Path):
        result = runner.invoke(app, ["analyze", str(bundle_file)])
        assert result.exit_code == 0, result.output
        assert "Total 150m" in result.output
        assert "longest continuous 100m" in result.output

    def test_analyze_rejects_invalid_bundle(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"distance_samples": []}), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1

    def test_analyze_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_check_plan(self, plan_file: Path):
        result = runner.invoke(app, ["check-plan", str(plan_file)])
        assert result.exit_code == 0, result.output
        assert "OK Base: (10x100) + 200 = 1200m" in result.output
        assert "(reported 1500m)" in result.output
        assert "2 workouts, 1 with distance mismatch" in result.output


class TestDatabaseCommands:
    """Commands backed by the (in-memory) database."""

    def test_log_and_progress(self, db_session):
        result = runner.invoke(app, ["log", "--distance", "1200", "--duration", "30", "--date", "2026-01-13T07:00"])
        assert result.exit_code == 0, result.output
        assert "Logged 1200m swim" in result.output

        result = runner.invoke(app, ["progress", "--now", "2026-01-14T12:00"])
        assert result.exit_code == 0, result.output
        assert "Best continuous: 1200m" in result.output

    def test_set_target_then_target(self, db_session):
        result = runner.invoke(app, ["set-target", "--week", "6", "--distance", "1500"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["target", "--week", "6"])
        assert result.exit_code == 0, result.output
        assert "1500m" in result.output
        assert "(override)" in result.output

    def test_import_is_idempotent(self, db_session, bundle_file: Path):
        result = runner.invoke(app, ["import", str(bundle_file), "--external-id", "hk-7", "--effort", "6"])
        assert result.exit_code == 0, result.output
        assert "Imported 150m swim" in result.output

        result = runner.invoke(app, ["import", str(bundle_file), "--external-id", "hk-7"])
        assert result.exit_code == 0, result.output
        assert "already imported" in result.output

    def test_progression_and_insights(self, db_session):
        runner.invoke(app, ["log", "--distance", "900", "--duration", "25", "--date", "2026-01-05T07:00"])
        result = runner.invoke(app, ["progression", "--now", "2026-01-20"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(app, ["insights", "--now", "2026-01-20T12:00"])
        assert result.exit_code == 0, result.output
        assert "Days Since Last Swim" in result.output

    def test_stats(self, db_session):
        for day, distance in (("2026-03-08", 800), ("2026-03-16", 1200), ("2026-03-17", 1000)):
            runner.invoke(app, ["log", "--distance", str(distance), "--duration", "25", "--date", f"{day}T07:00"])
        result = runner.invoke(app, ["stats", "--all", "--now", "2026-03-18T20:00"])
        assert result.exit_code == 0, result.output
        assert "Weekly trend: +1400m" in result.output
        assert "vs last week: distance" in result.output
        assert "Consistency: 2 days" in result.output

    def test_stats_without_sessions(self, db_session):
        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0, result.output
        assert "No swims yet" in result.output

    def test_aware_now_against_stored_sessions(self, db_session):
        """An ISO time with an offset is compared as naive local time."""
        runner.invoke(app, ["log", "--distance", "900", "--duration", "25", "--date", "2026-01-13T07:00"])
        for command in ("insights", "progress", "progression"):
            result = runner.invoke(app, [command, "--now", "2026-01-13T12:00:00+00:00"])
            assert result.exit_code == 0, result.output

    def test_invalid_now(self, db_session):
        result = runner.invoke(app, ["progress", "--now", "yesterday"])
        assert result.exit_code != 0

"""Tests for the studyrank CLI."""

import json
from datetime import date, datetime, timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from studyrank.cli import main
from studyrank.config import Config
from studyrank.core.advice import AdviceResult, BurnoutRisk


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config(tmp_path):
    return Config(data_file=str(tmp_path / "activities.json"))


@pytest.fixture(autouse=True)
def patched_config(config):
    with patch("studyrank.cli.load_config", return_value=config):
        yield


@pytest.fixture
def tomorrow():
    return (date.today() + timedelta(days=1)).isoformat()


def _add(runner, name, day, start, *extra):
    return runner.invoke(main, ["add", name, "--date", day, "--time", start, *extra])


class TestAdd:
    def test_add_and_list(self, runner, tomorrow):
        result = _add(runner, "Calc Final", tomorrow, "09:00", "--type", "final", "--duration", "120")
        assert result.exit_code == 0, result.output
        assert "Calc Final (Final)" in result.output

        listed = runner.invoke(main, ["list", "--json"])
        data = json.loads(listed.output)
        assert data[0]["name"] == "Calc Final"
        assert data[0]["baseScore"] == 10
        assert data[0]["durationMinutes"] == 120

    def test_rejects_overlap(self, runner, tomorrow):
        _add(runner, "Lecture", tomorrow, "10:00")
        result = _add(runner, "Study", tomorrow, "10:59", "--duration", "30")
        assert result.exit_code == 1
        assert "overlaps with an existing schedule item" in result.output
        assert "Conflicts with: Lecture (10:00-11:00)" in result.output

    def test_rejects_score_outside_range(self, runner, tomorrow):
        result = _add(runner, "Midterm", tomorrow, "10:00", "--type", "Midterm", "--score", "2")
        assert result.exit_code == 1
        assert "High (6-9)" in result.output

    def test_rejects_duration_off_the_quarter_hour(self, runner, tomorrow):
        result = _add(runner, "Run", tomorrow, "10:00", "--duration", "20")
        assert result.exit_code == 1
        assert "Duration must be a multiple of 15 minutes" in result.output
        assert json.loads(runner.invoke(main, ["list", "--json"]).output) == []

    def test_rejects_blank_name(self, runner, tomorrow):
        result = _add(runner, "  ", tomorrow, "10:00")
        assert result.exit_code == 1
        assert "Please fill in all required fields." in result.output


class TestList:
    def test_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "No activities found" in result.output

    def test_sorted_by_priority(self, runner, tomorrow):
        far = (date.today() + timedelta(days=10)).isoformat()
        _add(runner, "Far Club", far, "10:00", "--type", "Club")
        _add(runner, "Near Final", tomorrow, "10:00", "--type", "Final")

        data = json.loads(runner.invoke(main, ["list", "--json"]).output)
        assert [a["name"] for a in data] == ["Near Final", "Far Club"]

    def test_today_filter(self, runner, tomorrow):
        _add(runner, "Tomorrow", tomorrow, "10:00")
        result = runner.invoke(main, ["list", "--filter", "today"])
        assert "Tomorrow" not in result.output

    def test_corrupt_data_file(self, runner, config):
        with open(config.data_file, "w") as f:
            f.write("{")
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestRemove:
    def test_remove_by_prefix(self, runner, tomorrow):
        _add(runner, "Lecture", tomorrow, "10:00")
        activity_id = json.loads(runner.invoke(main, ["list", "--json"]).output)[0]["id"]

        result = runner.invoke(main, ["remove", activity_id[:8]])

        assert result.exit_code == 0
        assert "Removed: Lecture" in result.output
        assert json.loads(runner.invoke(main, ["list", "--json"]).output) == []

    def test_unknown_id(self, runner):
        result = runner.invoke(main, ["remove", "nope"])
        assert result.exit_code == 1
        assert "No activity" in result.output


class TestChart:
    def test_empty(self, runner):
        assert "No data to display" in runner.invoke(main, ["chart"]).output

    def test_aggregates_per_day(self, runner, tomorrow):
        _add(runner, "A", tomorrow, "09:00", "--duration", "60")
        _add(runner, "B", tomorrow, "13:00", "--duration", "45")

        data = json.loads(runner.invoke(main, ["chart", "--json"]).output)

        assert len(data) == 1
        assert data[0]["load"] == 105
        assert data[0]["date"] == datetime.fromisoformat(tomorrow).strftime("%b %d")
        assert data[0]["overloaded"] is False

    def test_flags_overloaded_day(self, runner, tomorrow):
        _add(runner, "A", tomorrow, "09:00", "--duration", "120")
        _add(runner, "B", tomorrow, "13:00", "--duration", "75")

        data = json.loads(runner.invoke(main, ["chart", "--json"]).output)
        assert data[0]["load"] == 195
        assert data[0]["overloaded"] is True

        text = runner.invoke(main, ["chart"]).output
        assert "195 min OVERLOADED" in text
        assert "Total: 3 hrs 15 min" in text


class TestAdvise:
    def test_missing_key_fallback(self, runner):
        result = runner.invoke(main, ["advise"])
        assert result.exit_code == 0
        assert "API Key is missing" in result.output

    @patch("studyrank.cli.analyze_schedule")
    def test_json_output(self, mock_analyze, runner):
        mock_analyze.return_value = AdviceResult(summary="ok", tips=["t"], burnout_risk=BurnoutRisk.HIGH)
        result = runner.invoke(main, ["advise", "--json"])
        assert json.loads(result.output) == {"summary": "ok", "tips": ["t"], "burnoutRisk": "High"}


class TestDemo:
    def test_loads_demo_data(self, runner):
        result = runner.invoke(main, ["demo", "--yes"])
        assert result.exit_code == 0
        assert "Loaded 20 demo activities." in result.output
        assert len(json.loads(runner.invoke(main, ["list", "--json"]).output)) == 20

    def test_asks_before_replacing(self, runner, tomorrow):
        _add(runner, "Mine", tomorrow, "10:00")
        runner.invoke(main, ["demo"], input="n\n")
        data = json.loads(runner.invoke(main, ["list", "--json"]).output)
        assert [a["name"] for a in data] == ["Mine"]



class TestWatch:
    @patch("studyrank.scheduler.BlockingScheduler")
    def test_zero_interval_is_rejected(self, mock_scheduler_cls, runner, config):
        config.refresh_interval = 60
        result = runner.invoke(main, ["watch", "--interval", "0"])
        assert result.exit_code == 1
        assert "at least 1 second" in result.output
        mock_scheduler_cls.return_value.start.assert_not_called()

    @patch("studyrank.scheduler.BlockingScheduler")
    def test_defaults_to_configured_interval(self, mock_scheduler_cls, runner, config):
        config.refresh_interval = 5
        result = runner.invoke(main, ["watch"])
        assert result.exit_code == 0, result.output
        trigger = mock_scheduler_cls.return_value.add_job.call_args.args[1]
        assert trigger.interval.total_seconds() == 5
        mock_scheduler_cls.return_value.start.assert_called_once()


def test_types(runner):
    result = runner.invoke(main, ["types"])
    assert "Final" in result.output
    assert "Critical (8-10)" in result.output
    assert "Flexible (1-10)" in result.output

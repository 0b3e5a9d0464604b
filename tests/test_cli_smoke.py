"""
Minimal smoke tests for mesocycle-planner CLI.

Tests basic functionality:
- App runs without errors
- Plan is generated from a YAML request
- JSON output and --output export
- Explain shows the derivation
- Evaluate produces next-cycle hints
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mesocycle_planner.cli.main import app


runner = CliRunner()

DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _write_request(path: Path, trainable: int = 6, days: int = 7) -> Path:
    """Write a plan request YAML with the first ``trainable`` days available."""
    lines = [
        "profile:",
        "  experience_level: Intermediate",
        "  fitness_goal: Hypertrophy",
        "  equipment_profile:",
        "    location: gym",
        "weekly_schedule:",
    ]
    for i, day in enumerate(DAYS[:days]):
        can_train = "true" if i < trainable else "false"
        lines.append(f"  - {{day: {day}, can_train: {can_train}, external_load: none}}")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and lists its commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "plan" in result.output
        assert "evaluate" in result.output

    def test_plan_shows_summary(self, temp_dir):
        """Test plan prints the chosen split and weekly tables."""
        request = _write_request(temp_dir / "request.yaml")
        result = runner.invoke(app, ["plan", str(request)])
        assert result.exit_code == 0, result.output
        assert "Push/Pull/Legs" in result.output
        assert "Week 4" in result.output

    def test_plan_json(self, temp_dir):
        """Test --json emits a parseable mesocycle."""
        request = _write_request(temp_dir / "request.yaml")
        result = runner.invoke(app, ["plan", str(request), "--json", "--weeks", "2"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["split_type"] == "Push/Pull/Legs"
        assert len(data["microcycles"]) == 2

    def test_plan_output_file(self, temp_dir):
        """Test --output writes the plan as JSON."""
        request = _write_request(temp_dir / "request.yaml", trainable=3)
        out = temp_dir / "out" / "plan.json"
        result = runner.invoke(app, ["plan", str(request), "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()
        assert json.loads(out.read_text())["duration_weeks"] == 4

    def test_plan_bad_schedule_fails(self, temp_dir):
        """Test a 5-day schedule is rejected with exit code 1."""
        request = _write_request(temp_dir / "request.yaml", days=5)
        result = runner.invoke(app, ["plan", str(request)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_plan_missing_file_fails(self, temp_dir):
        result = runner.invoke(app, ["plan", str(temp_dir / "missing.yaml")])
        assert result.exit_code == 1

    def test_plan_weeks_out_of_range_fails(self, temp_dir):
        request = _write_request(temp_dir / "request.yaml")
        result = runner.invoke(app, ["plan", str(request), "--weeks", "13"])
        assert result.exit_code == 1

    def test_explain(self, temp_dir):
        """Test explain prints the step-by-step derivation."""
        request = _write_request(temp_dir / "request.yaml", trainable=5)
        result = runner.invoke(app, ["explain", str(request)])
        assert result.exit_code == 0, result.output
        assert "OBJECTIVE" in result.output
        assert "PROGRESSION" in result.output

    def test_evaluate_json(self):
        """Test evaluate turns low RPEs into an aggressive overload factor."""
        result = runner.invoke(app, ["evaluate", "--rpe", "5", "--rpe", "6", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["overload_factor"] == pytest.approx(1.15)
        assert data["focus_suggestion"] == "Progressive Overload"
        assert data["previous_adherence"] == 2

    def test_evaluate_pain_and_difficulty(self):
        result = runner.invoke(
            app, ["evaluate", "-r", "9", "-r", "9", "--difficulty", "5", "--pain", "knee", "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["overload_factor"] == pytest.approx(0.765)
        assert data["focus_suggestion"] == "Rehab/Prehab"

    def test_evaluate_text(self):
        result = runner.invoke(app, ["evaluate", "--rpe", "7.5"])
        assert result.exit_code == 0, result.output
        assert "Next cycle" in result.output

    def test_evaluate_rejects_bad_difficulty(self):
        result = runner.invoke(app, ["evaluate", "--difficulty", "7"])
        assert result.exit_code != 0

    def test_plan_infinite_overload_factor(self, temp_dir):
        """Test a non-finite carry-over factor falls back to 1.0."""
        request = _write_request(temp_dir / "request.yaml")
        with open(request, "a") as f:
            f.write("next_cycle_config:\n  overload_factor: .inf\n")
        result = runner.invoke(app, ["plan", str(request), "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["overload_factor"] == 1.0

    def test_markup_like_day_label(self, temp_dir):
        """Test day labels with square brackets are printed literally."""
        request = _write_request(temp_dir / "request.yaml")
        request.write_text(request.read_text().replace("day: Monday", "day: \"[/]\""))
        for command in ("plan", "explain"):
            result = runner.invoke(app, [command, str(request)])
            assert result.exit_code == 0, result.output
            assert "[/]" in result.output

    def test_plan_verbose(self, temp_dir):
        """Test --verbose does not break planning."""
        request = _write_request(temp_dir / "request.yaml")
        result = runner.invoke(app, ["plan", str(request), "--verbose"])
        assert result.exit_code == 0, result.output


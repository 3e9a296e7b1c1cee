"""Tests for the scenario-eval command-line interface."""

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from scenario_eval.cli.main import app
from scenario_eval.evaluation.domain.result import ScenarioResult, TranscriptTurn
from scenario_eval.evaluation.domain.summary import RunSummary

FIXTURES = Path(__file__).parent.parent / "fixtures"

_ACOMPLETION = "scenario_eval.backend.infrastructure.litellm_backend.litellm.acompletion"

runner = CliRunner()


def _make_acompletion_response(content: str) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def _write_config(
    tmp_path: Path,
    name: str = "cli-test",
    scenarios_path: Path = FIXTURES / "scenarios.json",
) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        f"name: {name}\n"
        "backend:\n"
        "  model: openai/test-model\n"
        "  api_key: ${GATEWAY_API_KEY}\n"
        "  timeout_seconds: 5\n"
        "scenarios:\n"
        f"  path: {scenarios_path}\n"
        "system_prompt:\n"
        "  text: Tu es une conseillère.\n"
        "catalog:\n"
        f"  path: {FIXTURES / 'catalog.yaml'}\n",
        encoding="utf-8",
    )
    return path


def _write_summary(tmp_path: Path) -> Path:
    result = ScenarioResult(
        scenario_id="s1",
        scenario_name="Scenario one",
        success=True,
        response_time_ms=300,
        transcript=[
            TranscriptTurn(role="user", content="Bonjour."),
            TranscriptTurn(role="assistant", content="Merci, au revoir."),
        ],
        outcomes_met=["polite_closure"],
        outcomes_missed=[],
    )
    summary = RunSummary(
        run_id="run-1234",
        total_scenarios=1,
        successful=1,
        failed=0,
        success_rate=1.0,
        avg_response_time_ms=300.0,
        p95_response_time_ms=300,
        handoff_rate=0.0,
        results=[result],
        notable_failures=[],
        example_transcripts=[result],
        run_at=datetime(2025, 3, 4, 9, 15, tzinfo=timezone.utc),
    )
    path = tmp_path / "summary.json"
    path.write_text(summary.model_dump_json(), encoding="utf-8")
    return path


class TestRunCommand:
    def test_run_writes_summary_and_report(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GATEWAY_API_KEY", "secret")
        config_path = _write_config(tmp_path)
        output_dir = tmp_path / "results"
        reply = "Merci de votre patience, un responsable vous rappellera."

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response(reply)),
        ):
            result = runner.invoke(
                app,
                [
                    "run",
                    str(config_path),
                    "--output-dir",
                    str(output_dir),
                    "--log-format",
                    "json",
                ],
            )

        assert result.exit_code == 0, result.output
        json_files = list(output_dir.glob("cli-test_*.json"))
        md_files = list(output_dir.glob("cli-test_*.md"))
        assert len(json_files) == 1
        assert len(md_files) == 1

        summary = RunSummary.model_validate_json(json_files[0].read_text(encoding="utf-8"))
        assert summary.total_scenarios == 2
        assert summary.successful == 2
        assert summary.handoff_rate == pytest.approx(0.5)
        assert [r.scenario_id for r in summary.results] == ["wrong_person", "dispute"]
        assert md_files[0].read_text(encoding="utf-8").startswith(
            "# Scenario Test Report: cli-test"
        )
        report = md_files[0].read_text(encoding="utf-8")
        assert "| identification | 1 | 1 |" in report
        assert "| escalation | 1 | 1 |" in report
        assert "Run Complete" in result.output

    def test_backend_failure_is_recorded_not_fatal(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GATEWAY_API_KEY", "secret")
        config_path = _write_config(tmp_path)
        output_dir = tmp_path / "results"

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=ConnectionError("refused"))):
            result = runner.invoke(
                app,
                ["run", str(config_path), "-o", str(output_dir), "--log-format", "json"],
            )

        assert result.exit_code == 0, result.output
        summary = RunSummary.model_validate_json(
            next(output_dir.glob("*.json")).read_text(encoding="utf-8")
        )
        assert summary.failed == 2
        assert all(r.response_time_ms == 0 for r in summary.results)
        assert all(r.error for r in summary.results)

    def test_missing_credential_exits_with_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GATEWAY_API_KEY", raising=False)
        config_path = _write_config(tmp_path)

        result = runner.invoke(
            app, ["run", str(config_path), "-o", str(tmp_path / "out"), "--log-format", "json"]
        )

        assert result.exit_code == 1
        assert "missing environment variables: GATEWAY_API_KEY" in result.output
        assert not (tmp_path / "out").exists()

    def test_invalid_log_format_exits_with_error(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["run", str(tmp_path / "config.yaml"), "--log-format", "xml"]
        )

        assert result.exit_code == 1
        assert "Invalid log format" in result.output

    def test_unreadable_scenario_file_is_a_load_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GATEWAY_API_KEY", "secret")
        scenarios_path = tmp_path / "scenarios.json"
        scenarios_path.write_bytes(b'{"scenarios": [{"name": "\xff"}]}')
        config_path = _write_config(tmp_path, scenarios_path=scenarios_path)

        result = runner.invoke(
            app, ["run", str(config_path), "-o", str(tmp_path / "out"), "--log-format", "json"]
        )

        assert result.exit_code == 1
        assert "Failed to load scenarios" in result.output
        assert "Unexpected error" not in result.output

    def test_name_with_path_separator_rejected_before_running(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GATEWAY_API_KEY", "secret")
        config_path = _write_config(tmp_path, name="team/agent")
        mock = AsyncMock(return_value=_make_acompletion_response("Merci."))

        with patch(_ACOMPLETION, new=mock):
            result = runner.invoke(
                app,
                ["run", str(config_path), "-o", str(tmp_path / "out"), "--log-format", "json"],
            )

        assert result.exit_code == 1
        assert "Failed to validate config" in result.output
        mock.assert_not_awaited()
        assert not (tmp_path / "out").exists()


class TestReportCommand:
    def test_report_prints_markdown(self, tmp_path: Path) -> None:
        summary_path = _write_summary(tmp_path)

        result = runner.invoke(app, ["report", str(summary_path)])

        assert result.exit_code == 0, result.output
        assert "# Scenario Test Report" in result.output
        assert "| Total scenarios | 1 |" in result.output

    def test_report_writes_file(self, tmp_path: Path) -> None:
        summary_path = _write_summary(tmp_path)
        output = tmp_path / "report.md"

        result = runner.invoke(
            app, ["report", str(summary_path), "-o", str(output), "--title", "Nightly"]
        )

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").startswith("# Nightly\n")

    def test_missing_summary_exits_with_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["report", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "file not found" in result.output

    def test_invalid_summary_exits_with_error(self, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        path.write_text('{"run_id": "x"}', encoding="utf-8")

        result = runner.invoke(app, ["report", str(path)])

        assert result.exit_code == 1
        assert "invalid summary" in result.output

    def test_unreadable_summary_exits_with_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["report", str(tmp_path)])

        assert result.exit_code == 1
        assert "cannot read" in result.output

"""CLI entrypoint for scenario-eval — typer app with `run` and `report` commands."""

import asyncio
import sys
import time
from datetime import datetime
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError

from scenario_eval.backend.infrastructure.factory import LiteLLMChatBackendFactory
from scenario_eval.backend.infrastructure.observer import StructlogBackendObserver
from scenario_eval.config.domain.config import HarnessConfig
from scenario_eval.config.infrastructure.observer import StructlogConfigObserver
from scenario_eval.config.infrastructure.yaml_loader import (
    YamlConfigLoader,
    read_system_prompt,
)
from scenario_eval.core.errors import ScenarioEvalError
from scenario_eval.evaluation.application.batch_runner import BatchRunner
from scenario_eval.evaluation.application.scenario_runner import ScenarioRunner
from scenario_eval.evaluation.domain.observer import EvaluationObserver
from scenario_eval.evaluation.domain.summary import RunSummary
from scenario_eval.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from scenario_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from scenario_eval.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from scenario_eval.outcome.domain.catalog import OutcomeCatalog
from scenario_eval.outcome.domain.observer import CatalogObserver
from scenario_eval.outcome.infrastructure.observer import StructlogCatalogObserver
from scenario_eval.outcome.infrastructure.yaml_loader import YamlCatalogLoader
from scenario_eval.report.markdown import render_markdown
from scenario_eval.scenario.domain.loader import ScenarioLoader
from scenario_eval.scenario.domain.scenario import Scenario
from scenario_eval.scenario.infrastructure.json_loader import JsonScenarioLoader
from scenario_eval.scenario.infrastructure.observer import StructlogScenarioObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _output_stem(config_name: str, run_id: str) -> str:
    """Build the output file stem: {config_name}_{YYYYMMDD}_{short_run_id}."""
    date_str = datetime.now().strftime("%Y%m%d")
    short_id = run_id[:8]
    return f"{config_name}_{date_str}_{short_id}"


def _write_outputs(
    output_dir: Path, stem: str, summary: RunSummary, title: str
) -> tuple[Path, Path]:
    """Write the summary JSON and Markdown report. Returns (json_path, md_path)."""
    json_path = output_dir / f"{stem}.json"
    md_path = output_dir / f"{stem}.md"
    json_path.write_text(summary.model_dump_json(indent=2), encoding="utf-8")
    md_path.write_text(render_markdown(summary=summary, title=title), encoding="utf-8")
    return json_path, md_path


def _warn_unknown_outcomes(
    catalog: OutcomeCatalog,
    config: HarnessConfig,
    scenarios: list[Scenario],
    observer: CatalogObserver,
) -> None:
    handoff_unknown = catalog.unknown(config.scoring.handoff_outcomes)
    if handoff_unknown:
        observer.catalog_outcomes_unknown(purpose="handoff", outcome_ids=handoff_unknown)

    expected = dict.fromkeys(o for s in scenarios for o in s.expected_outcomes)
    expected_unknown = catalog.unknown(list(expected))
    if expected_unknown:
        observer.catalog_outcomes_unknown(
            purpose="expected_outcomes", outcome_ids=expected_unknown
        )


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"


def _rate_color(rate: float) -> str:
    if rate >= 0.8:
        return _GREEN
    if rate >= 0.5:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def _print_summary(
    summary: RunSummary,
    config_name: str,
    json_path: Path,
    md_path: Path,
    elapsed_seconds: float,
) -> None:
    """Print a colourised run summary followed by a one-line verdict per scenario."""
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  scenario-eval  ·  Run Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    color = _rate_color(summary.success_rate)
    meta_rows: list[tuple[str, str]] = [
        ("Run ID", f"{summary.run_id[:8]}-..."),
        ("Config", config_name),
        ("Scenarios", str(summary.total_scenarios)),
        (
            "Passed",
            f"{color}{summary.successful}/{summary.total_scenarios}"
            f" ({summary.success_rate * 100:.1f}%){_RESET}",
        ),
        ("Mean latency", f"{summary.avg_response_time_ms:.0f}ms"),
        ("P95 latency", f"{summary.p95_response_time_ms}ms"),
        ("Handoff rate", f"{summary.handoff_rate * 100:.1f}%"),
        ("Elapsed", _format_elapsed(elapsed_seconds=elapsed_seconds)),
        ("Summary JSON", str(json_path)),
        ("Report", str(md_path)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    if summary.results:
        typer.echo("")
        name_w = min(max(len(r.scenario_name) for r in summary.results), 40)
        for r in summary.results:
            verdict = f"{_GREEN}PASS{_RESET}" if r.success else f"{_RED}FAIL{_RESET}"
            name = r.scenario_name[:name_w]
            detail = f"{_RED}{r.error}{_RESET}" if r.error else (
                f"{_DIM}{len(r.outcomes_met)}/"
                f"{len(r.outcomes_met) + len(r.outcomes_missed)} outcomes{_RESET}"
            )
            typer.echo(
                f"  {verdict}  {name:<{name_w}}  {r.response_time_ms:>6}ms  {detail}"
            )

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to the run config YAML"),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory for output files",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Replay every scenario against the backend and write a summary and report."""
    try:
        _configure_structlog(log_format=log_format)

        config = YamlConfigLoader(observer=StructlogConfigObserver()).load(
            path=config_path
        )
        system_prompt = read_system_prompt(cfg=config)
        scenario_loader: ScenarioLoader = JsonScenarioLoader(
            observer=StructlogScenarioObserver()
        )
        scenarios = scenario_loader.load(path=config.scenarios.path)
        catalog_observer = StructlogCatalogObserver()
        catalog = YamlCatalogLoader(observer=catalog_observer).load(
            path=config.catalog.path
        )
        _warn_unknown_outcomes(
            catalog=catalog,
            config=config,
            scenarios=scenarios,
            observer=catalog_observer,
        )

        output_dir.mkdir(parents=True, exist_ok=True)

        scenario_runner = ScenarioRunner(
            backend_factory=LiteLLMChatBackendFactory(
                config=config.backend,
                observer=StructlogBackendObserver(),
            ),
            catalog=catalog,
            scoring=config.scoring,
        )
        observers: list[EvaluationObserver] = [StructlogEvaluationObserver()]
        if log_format != "json":
            observers.append(ProgressEvaluationObserver())
        batch_runner = BatchRunner(
            scenario_runner=scenario_runner,
            scoring=config.scoring,
            observer=CompositeEvaluationObserver(observers=observers),
        )

        started_at = time.monotonic()
        summary: RunSummary = asyncio.run(
            batch_runner.run(scenarios=scenarios, system_prompt=system_prompt)
        )
        elapsed_seconds = time.monotonic() - started_at

        stem = _output_stem(config_name=config.name, run_id=summary.run_id)
        json_path, md_path = _write_outputs(
            output_dir=output_dir,
            stem=stem,
            summary=summary,
            title=f"Scenario Test Report: {config.name}",
        )

        _print_summary(
            summary=summary,
            config_name=config.name,
            json_path=json_path,
            md_path=md_path,
            elapsed_seconds=elapsed_seconds,
        )

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        typer.echo("Run interrupted.")
        sys.exit(1)
    except ScenarioEvalError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def report(
    summary_path: Path = typer.Argument(..., help="Path to a run summary JSON file"),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the Markdown report here instead of stdout",
    ),
    title: str = typer.Option("Scenario Test Report", "--title", help="Report title"),
) -> None:
    """Render the Markdown report for a previously written run summary."""
    try:
        raw = summary_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        typer.echo(f"Failed to render report: file not found: {summary_path}")
        raise typer.Exit(code=1)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Failed to render report: cannot read {summary_path}: {exc}")
        raise typer.Exit(code=1) from exc

    try:
        summary = RunSummary.model_validate_json(raw)
    except ValidationError as exc:
        typer.echo(f"Failed to render report: invalid summary: {exc}")
        raise typer.Exit(code=1) from exc

    markdown = render_markdown(summary=summary, title=title)
    if output is None:
        typer.echo(markdown, nl=False)
    else:
        output.write_text(markdown, encoding="utf-8")
        typer.echo(f"Wrote {output}")


if __name__ == "__main__":
    app()

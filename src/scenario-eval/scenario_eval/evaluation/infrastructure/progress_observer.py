"""ProgressEvaluationObserver — renders a Rich pass/fail progress bar to stderr."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text


class _VerdictColumn(ProgressColumn):
    """Renders running pass/fail counts in green and red."""

    def render(self, task: Task) -> Text:
        passed = int(task.fields.get("passed", 0))
        failed = int(task.fields.get("failed", 0))
        return Text.assemble(
            (f"{passed} pass", "bright_green"),
            ("  ", ""),
            (f"{failed} fail", "red" if failed else "dim white"),
        )


class ProgressEvaluationObserver:
    """Shows one progress row for the run, labelled with the scenario in flight.

    Only run_started, scenario_started, scenario_completed and run_completed
    produce output; scenario_failed is a no-op because completion follows it.

    Pass ``disabled=True`` to suppress all terminal output (useful in tests);
    the pass/fail tallies are still kept.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self.passed = 0
        self.failed = 0

    def run_started(self, run_id: str, total_scenarios: int) -> None:
        self.passed = 0
        self.failed = 0
        if self._disabled:
            return
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            _VerdictColumn(),
            TimeElapsedColumn(),
            console=Console(stderr=True),
            transient=False,
        )
        self._task_id = self._progress.add_task(
            description="Scenarios", total=float(total_scenarios), passed=0, failed=0
        )
        self._progress.start()

    def run_completed(
        self,
        run_id: str,
        successful: int,
        total_scenarios: int,
        elapsed_seconds: float,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def scenario_started(self, run_id: str, scenario_id: str, position: int) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(self._task_id, description=f"Scenarios [dim]{scenario_id}[/dim]")

    def scenario_completed(
        self,
        run_id: str,
        scenario_id: str,
        success: bool,
        response_time_ms: int,
        outcomes_met: list[str],
        outcomes_missed: list[str],
    ) -> None:
        if success:
            self.passed += 1
        else:
            self.failed += 1
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            advance=1,
            passed=self.passed,
            failed=self.failed,
        )

    def scenario_failed(self, run_id: str, scenario_id: str, reason: str) -> None:
        pass

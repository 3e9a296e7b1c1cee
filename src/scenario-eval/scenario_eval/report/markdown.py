"""Markdown report for a completed run.

Layout is fixed: title and timestamp, summary statistics table, coverage by
scenario category, one section per scenario, up to three example transcripts,
and the notable failures.
"""

from scenario_eval.evaluation.domain.result import ScenarioResult, TranscriptTurn
from scenario_eval.evaluation.domain.summary import RunSummary

_NONE = "None"
_UNCATEGORISED = "uncategorised"
_SPEAKERS = {"user": "Caller", "assistant": "Agent"}


def render_markdown(summary: RunSummary, title: str = "Scenario Test Report") -> str:
    sections = [
        f"# {title}",
        f"**Run:** `{summary.run_id}`  \n"
        f"**Date:** {summary.run_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        _summary_table(summary),
        _coverage(summary.results),
        "## Scenario Results\n\n"
        + "\n".join(_result_section(r) for r in summary.results),
        "## Example Transcripts\n\n" + _transcripts(summary.example_transcripts),
        "## Notable Failures\n\n" + _failures(summary.notable_failures),
        "---\n*Generated automatically by scenario-eval*",
    ]
    return "\n\n".join(sections) + "\n"


def _summary_table(summary: RunSummary) -> str:
    rows = [
        ("Total scenarios", str(summary.total_scenarios)),
        ("Passed", str(summary.successful)),
        ("Failed", str(summary.failed)),
        ("**Success rate**", f"**{summary.success_rate * 100:.1f}%**"),
        ("Mean response time", f"{summary.avg_response_time_ms:.0f}ms"),
        ("P95 response time", f"{summary.p95_response_time_ms}ms"),
        ("Handoff rate", f"{summary.handoff_rate * 100:.1f}%"),
    ]
    lines = ["## Summary", "", "| Metric | Value |", "|--------|-------|"]
    lines.extend(f"| {label} | {value} |" for label, value in rows)
    return "\n".join(lines)


def _coverage(results: list[ScenarioResult]) -> str:
    if not results:
        return "## Scenario Coverage\n\nNo scenarios were run."
    counts: dict[str, list[int]] = {}
    for r in results:
        tally = counts.setdefault(r.category or _UNCATEGORISED, [0, 0])
        tally[0] += 1
        tally[1] += int(r.success)
    lines = [
        "## Scenario Coverage",
        "",
        f"The {len(results)} scenarios cover {len(counts)}"
        f" {'category' if len(counts) == 1 else 'categories'}:",
        "",
        "| Category | Scenarios | Passed |",
        "|----------|-----------|--------|",
    ]
    lines.extend(
        f"| {category} | {total} | {passed} |"
        for category, (total, passed) in counts.items()
    )
    return "\n".join(lines)


def _result_section(result: ScenarioResult) -> str:
    lines = [
        f"### {result.scenario_name}",
        f"- **Status:** {'✅ Passed' if result.success else '❌ Failed'}",
        f"- **Response time:** {result.response_time_ms}ms",
        f"- **Outcomes met:** {', '.join(result.outcomes_met) or _NONE}",
        f"- **Outcomes missed:** {', '.join(result.outcomes_missed) or _NONE}",
    ]
    if result.error:
        lines.append(f"- **Error:** {result.error}")
    return "\n".join(lines) + "\n"


def _turn(turn: TranscriptTurn) -> str:
    return f"**{_SPEAKERS[turn.role]}:** {turn.content}"


def _transcripts(results: list[ScenarioResult]) -> str:
    if not results:
        return "No passing scenarios to show."
    blocks = [
        f"### {r.scenario_name}\n\n" + "\n\n".join(_turn(t) for t in r.transcript)
        for r in results[:3]
    ]
    return "\n\n---\n\n".join(blocks)


def _failures(results: list[ScenarioResult]) -> str:
    if not results:
        return "No notable failures."
    blocks = []
    for r in results:
        lines = [
            f"### {r.scenario_name}",
            f"- **Outcomes missed:** {', '.join(r.outcomes_missed) or _NONE}",
        ]
        if r.error:
            lines.append(f"- **Error:** {r.error}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)

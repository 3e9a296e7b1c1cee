"""JSON scenario loader — reads a scenario file and returns typed Scenario objects."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from scenario_eval.scenario.domain.observer import ScenarioObserver
from scenario_eval.scenario.domain.scenario import Scenario
from scenario_eval.scenario.infrastructure.errors import ScenarioLoadError


class JsonScenarioLoader:
    """Loads a scenario file and returns its scenarios in file order.

    Accepts either ``{"scenarios": [...]}`` or a bare JSON array.
    """

    def __init__(self, observer: ScenarioObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> list[Scenario]:
        """
        Load every scenario from *path*.

        Collects ALL per-scenario problems before raising a single
        ScenarioLoadError listing every issue found.

        Raises:
            ScenarioLoadError: if the file is not found, is not valid JSON, has
                the wrong shape, any entry violates the schema, or two entries
                share an id.
        """
        path_str = str(path)
        self._observer.scenarios_loading_started(path=path_str)

        try:
            entries = self._read_entries(path=path)
            scenarios = self._parse_entries(entries=entries)
        except ScenarioLoadError as exc:
            self._observer.scenarios_loading_failed(path=path_str, reason=str(exc))
            raise

        categories = sorted({s.category for s in scenarios if s.category})
        self._observer.scenarios_loading_completed(
            path=path_str,
            total_scenarios=len(scenarios),
            categories=categories,
        )
        return scenarios

    def _read_entries(self, path: Path) -> list[Any]:
        try:
            with open(path, encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError as exc:
            raise ScenarioLoadError(reason=f"file not found: {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ScenarioLoadError(reason=f"cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ScenarioLoadError(reason=f"invalid JSON: {exc}") from exc

        if isinstance(document, dict):
            document = document.get("scenarios")
        if not isinstance(document, list):
            raise ScenarioLoadError(
                reason="expected a 'scenarios' list or a top-level JSON array"
            )
        return document

    def _parse_entries(self, entries: list[Any]) -> list[Scenario]:
        scenarios: list[Scenario] = []
        errors: list[str] = []
        seen_ids: set[str] = set()

        for index, entry in enumerate(entries):
            try:
                scenario = Scenario.model_validate(entry)
            except ValidationError as exc:
                fields = ", ".join(
                    ".".join(str(part) for part in err["loc"]) or "<root>"
                    for err in exc.errors()
                )
                errors.append(f"scenario {index}: invalid field(s) {fields}")
                continue
            if scenario.id in seen_ids:
                errors.append(f"scenario {index}: duplicate id '{scenario.id}'")
                continue
            seen_ids.add(scenario.id)
            scenarios.append(scenario)

        if errors:
            raise ScenarioLoadError(reason="; ".join(errors))
        return scenarios

"""YAML outcome catalog loader.

The file holds a single ``outcomes`` mapping::

    outcomes:
      polite_closure: ["merci", "au revoir"]
      escalation_offered: ["responsable", "rappel"]
"""

from pathlib import Path
from typing import Any

import yaml

from scenario_eval.outcome.domain.catalog import InvalidPatternError, OutcomeCatalog
from scenario_eval.outcome.domain.observer import CatalogObserver
from scenario_eval.outcome.infrastructure.errors import CatalogLoadError


class YamlCatalogLoader:
    """Returns the built-in catalog, or one read from a YAML file when a path is given."""

    def __init__(self, observer: CatalogObserver) -> None:
        self._observer = observer

    def load(self, path: Path | None) -> OutcomeCatalog:
        """
        Raises:
            CatalogLoadError: if the file is missing, is not a valid catalog
                document, or contains a pattern that does not compile.
        """
        if path is None:
            catalog = OutcomeCatalog.default()
            self._observer.catalog_loaded(source="builtin", total_outcomes=len(catalog))
            return catalog

        patterns = _validate(_parse_yaml(path=path))
        try:
            catalog = OutcomeCatalog.from_mapping(patterns)
        except InvalidPatternError as exc:
            raise CatalogLoadError(str(exc)) from exc

        self._observer.catalog_loaded(source=str(path), total_outcomes=len(catalog))
        return catalog


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise CatalogLoadError(f"file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogLoadError(f"invalid YAML in {path}: {exc}") from exc


def _validate(raw: Any) -> dict[str, list[str]]:
    """Check the document shape, collecting every problem before raising."""
    if not isinstance(raw, dict) or not isinstance(raw.get("outcomes"), dict):
        raise CatalogLoadError("expected a top-level 'outcomes' mapping")

    problems: list[str] = []
    patterns: dict[str, list[str]] = {}
    for outcome_id, sources in raw["outcomes"].items():
        if not isinstance(sources, list) or not sources:
            problems.append(f"outcome '{outcome_id}' must list at least one pattern")
            continue
        if not all(isinstance(s, str) and s for s in sources):
            problems.append(f"outcome '{outcome_id}' has a non-string or empty pattern")
            continue
        patterns[str(outcome_id)] = sources

    if problems:
        raise CatalogLoadError("; ".join(problems))
    return patterns

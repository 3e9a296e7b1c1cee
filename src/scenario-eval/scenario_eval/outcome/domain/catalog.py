"""OutcomeCatalog — outcome identifier to case-insensitive match rules."""

import re
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import TypeAlias

from scenario_eval.outcome.domain.defaults import DEFAULT_OUTCOME_PATTERNS

OutcomeId: TypeAlias = str


class InvalidPatternError(ValueError):
    """A catalog entry holds a regular expression that does not compile."""

    def __init__(self, outcome_id: OutcomeId, pattern: str, reason: str) -> None:
        self.outcome_id = outcome_id
        self.pattern = pattern
        super().__init__(f"outcome '{outcome_id}': invalid pattern {pattern!r}: {reason}")


class OutcomeCatalog:
    """Immutable table of match rules keyed by outcome identifier.

    Rules are compiled once with ``re.IGNORECASE``. Looking up an identifier
    the catalog does not know returns no rules, so that outcome can never be
    met; it is not an error.
    """

    def __init__(self, rules: Mapping[OutcomeId, tuple[re.Pattern[str], ...]]) -> None:
        self._rules = MappingProxyType(dict(rules))

    @classmethod
    def from_mapping(cls, patterns: Mapping[OutcomeId, Sequence[str]]) -> "OutcomeCatalog":
        """Compile a declarative ``{outcome_id: [regex, ...]}`` table.

        Raises:
            InvalidPatternError: on the first pattern that fails to compile.
        """
        compiled: dict[OutcomeId, tuple[re.Pattern[str], ...]] = {}
        for outcome_id, sources in patterns.items():
            rules: list[re.Pattern[str]] = []
            for source in sources:
                try:
                    rules.append(re.compile(source, re.IGNORECASE))
                except re.error as exc:
                    raise InvalidPatternError(outcome_id, source, str(exc)) from exc
            compiled[outcome_id] = tuple(rules)
        return cls(compiled)

    @classmethod
    def default(cls) -> "OutcomeCatalog":
        return cls.from_mapping(DEFAULT_OUTCOME_PATTERNS)

    def lookup(self, outcome_id: OutcomeId) -> tuple[re.Pattern[str], ...]:
        return self._rules.get(outcome_id, ())

    @property
    def outcome_ids(self) -> list[OutcomeId]:
        return list(self._rules)

    def unknown(self, outcome_ids: Sequence[OutcomeId]) -> list[OutcomeId]:
        """Return the identifiers in *outcome_ids* that have no rules here."""
        return [oid for oid in outcome_ids if not self.lookup(oid)]

    def __contains__(self, outcome_id: object) -> bool:
        return outcome_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

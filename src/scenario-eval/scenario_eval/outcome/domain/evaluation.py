"""Outcome evaluation — partitions expected outcomes into met and missed."""

from collections.abc import Sequence

from pydantic import BaseModel

from scenario_eval.outcome.domain.catalog import OutcomeCatalog, OutcomeId


class OutcomeEvaluation(BaseModel, frozen=True):
    """Met and missed outcome identifiers, each in the order they were expected."""

    met: list[OutcomeId]
    missed: list[OutcomeId]

    def passes(self, threshold: float) -> bool:
        """Lenient acceptance: nothing missed, or met >= threshold * expected.

        With the usual 0.5 threshold, one of two outcomes is enough, two of
        three are needed, and zero of one fails.
        """
        if not self.missed:
            return True
        expected = len(self.met) + len(self.missed)
        return len(self.met) >= expected * threshold


def evaluate_outcomes(
    reply: str,
    expected_outcomes: Sequence[OutcomeId],
    catalog: OutcomeCatalog,
) -> OutcomeEvaluation:
    """Check *reply* against the catalog rules of every expected outcome.

    An outcome is met when at least one of its rules matches anywhere in the
    reply. Repeated identifiers are judged separately and appear as many times
    as they were expected.
    """
    met: list[OutcomeId] = []
    missed: list[OutcomeId] = []
    for outcome_id in expected_outcomes:
        if any(rule.search(reply) for rule in catalog.lookup(outcome_id)):
            met.append(outcome_id)
        else:
            missed.append(outcome_id)
    return OutcomeEvaluation(met=met, missed=missed)

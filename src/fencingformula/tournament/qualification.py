"""Ranking of phase results and qualification between phases.

Results are ranked with a tiebreak cascade, victories then indicator then
touches scored by default, all descending. The top of the ranking
qualifies, either a fixed quota or a percentage of the field. Athletes
still level after the whole cascade keep their input order; no further
tiebreak is invented.
"""

# Fencing Formula
# Copyright (C) 2025  Fencing Formula developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from fencingformula.constants import (
    TB_INDICATOR,
    TB_TOUCHES_RECEIVED,
    TB_TOUCHES_SCORED,
    TB_VICTORIES,
    TB_VM_RATIO,
)
from fencingformula.models.enums import QualificationMethod
from fencingformula.models.phase import (
    PhaseConfig,
    QualificationRules,
    TiebreakRule,
    default_tiebreak_rules,
)
from fencingformula.models.results import AthleteResult, PhaseTransitionResult
from fencingformula.utils import setup_logger

logger = setup_logger(__name__)

CRITERIA: Dict[str, Callable[[AthleteResult], float]] = {
    TB_VICTORIES: lambda result: result.victories,
    TB_INDICATOR: lambda result: result.indicator,
    TB_TOUCHES_SCORED: lambda result: result.touches_scored,
    TB_TOUCHES_RECEIVED: lambda result: result.touches_received,
    TB_VM_RATIO: lambda result: result.vm_ratio,
}


def _rankable(rules: List[TiebreakRule]) -> List[TiebreakRule]:
    return [rule for rule in rules if rule.criterion in CRITERIA]


def _sort_key(rules: List[TiebreakRule]) -> Callable[[AthleteResult], Tuple]:
    def key(result: AthleteResult) -> Tuple:
        values = []
        for rule in rules:
            value = CRITERIA[rule.criterion](result)
            values.append(-value if rule.direction == "desc" else value)
        return tuple(values)

    return key


def rank_results(
    results: List[AthleteResult], tiebreak_rules: Optional[List[TiebreakRule]] = None
) -> List[AthleteResult]:
    """Return copies of ``results`` sorted best first with ``rank`` set.

    Args:
        results: Phase results, in input order
        tiebreak_rules: Ranking cascade; defaults to victories, indicator,
            touches scored

    Returns:
        New result objects; the input list and its items are untouched
    """
    rules = _rankable(tiebreak_rules or default_tiebreak_rules())
    ordered = sorted(results, key=_sort_key(rules))
    return [replace(result, rank=index + 1) for index, result in enumerate(ordered)]


class QualificationCalculator:
    """Computes the qualified and eliminated sets of a phase."""

    def calculate(
        self, phase_config: PhaseConfig, results: List[AthleteResult]
    ) -> PhaseTransitionResult:
        """Rank the phase results and split them at the qualification cutoff.

        Configuration problems are returned as errors on an unsuccessful
        result rather than raised.

        Args:
            phase_config: The phase that produced the results
            results: Results of every athlete in the phase

        Returns:
            PhaseTransitionResult with qualified ids best first
        """
        rules = phase_config.qualification
        if rules is None:
            return PhaseTransitionResult(
                success=False,
                errors=[
                    f"No qualification rules defined for phase {phase_config.name}"
                ],
            )

        count, errors = self.qualification_count(rules, len(results))
        if errors:
            return PhaseTransitionResult(success=False, errors=errors)

        warnings = []
        for rule in rules.tiebreak_rules:
            if rule.criterion not in CRITERIA:
                warnings.append(
                    f"Tiebreak criterion {rule.criterion!r} is not applied when ranking"
                )
        if rules.method == QualificationMethod.QUOTA and rules.quota > len(results):
            warnings.append(
                f"Quota {rules.quota} exceeds the {len(results)} athletes in the phase"
            )

        ranking_rules = rules.ranking_rules()
        ranked = rank_results(results, ranking_rules)

        tie = self._cutoff_tie(ranked, count, _rankable(ranking_rules))
        if tie:
            warnings.append(tie)

        qualified = []
        eliminated = []
        for index, result in enumerate(ranked):
            qualifies = index < count
            ranked[index] = replace(
                result, qualifies_for_next=qualifies, is_eliminated=not qualifies
            )
            if qualifies:
                qualified.append(result.athlete_id)
            else:
                eliminated.append(result.athlete_id)

        logger.info(
            "Phase %s: %d qualified, %d eliminated",
            phase_config.name,
            len(qualified),
            len(eliminated),
        )
        return PhaseTransitionResult(
            success=True,
            qualified_athletes=qualified,
            eliminated_athletes=eliminated,
            warnings=warnings,
            ranked_results=ranked,
        )

    @staticmethod
    def qualification_count(
        rules: QualificationRules, result_count: int
    ) -> Tuple[int, List[str]]:
        """Number of athletes that qualify, with any configuration errors.

        Quota qualifies ``min(quota, n)``; percentage qualifies
        ``floor(n * percentage / 100)``.
        """
        if rules.method == QualificationMethod.QUOTA:
            if rules.quota is None or rules.quota < 0:
                return 0, ["Quota qualification needs a non-negative quota"]
            return min(rules.quota, result_count), []

        if rules.method == QualificationMethod.PERCENTAGE:
            if rules.percentage is None or not 0 < rules.percentage <= 100:
                return 0, ["Percentage qualification needs a percentage in (0, 100]"]
            return math.floor(result_count * rules.percentage / 100), []

        return 0, ["Custom qualification rules are not supported by the engine"]

    @staticmethod
    def _cutoff_tie(
        ranked: List[AthleteResult], count: int, rules: List[TiebreakRule]
    ) -> Optional[str]:
        if count <= 0 or count >= len(ranked):
            return None
        key = _sort_key(rules)
        last_in, first_out = ranked[count - 1], ranked[count]
        if key(last_in) != key(first_out):
            return None
        return (
            f"Athletes {last_in.athlete_id} and {first_out.athlete_id} are level at "
            f"the qualification cutoff; input order decided"
        )

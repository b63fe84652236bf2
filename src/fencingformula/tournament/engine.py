"""Formula engine facade.

Drives one tournament through its phases: validates the configuration,
generates poules, computes qualification between phases and lays out
elimination tables. State is held in memory for a single tournament run;
use one engine per tournament and discard it afterwards.
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

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Union

from fencingformula.compatibility.engarde import EngardeFormula, from_engarde_formula
from fencingformula.constants import DEFAULT_CATEGORY, UNRANKED_SENTINEL
from fencingformula.exceptions import (
    MissingConfigurationException,
    PhaseTypeException,
    TournamentStateException,
)
from fencingformula.models.athlete import AthleteData
from fencingformula.models.bracket import BracketGenerationResult
from fencingformula.models.enums import PhaseStatus, Weapon, WarningType
from fencingformula.models.phase import (
    EliminationPhaseConfig,
    PhaseConfig,
    PoulePhaseConfig,
)
from fencingformula.models.poule import PouleGenerationResult, PouleStatistics
from fencingformula.models.results import (
    AthleteResult,
    PhaseState,
    PhaseTransitionResult,
    TournamentState,
)
from fencingformula.models.tournament import TournamentConfig
from fencingformula.models.validation import ValidationResult, ValidationWarning
from fencingformula.options import EngineOptions
from fencingformula.poules.assignment import PouleAssignmentEngine
from fencingformula.poules.sizing import PouleSizeCalculator
from fencingformula.tournament.bracket import BracketGenerator
from fencingformula.tournament.eligibility import validate_roster
from fencingformula.tournament.qualification import (
    QualificationCalculator,
    rank_results,
)
from fencingformula.utils import setup_logger
from fencingformula.validation.formula import FormulaValidator

logger = setup_logger(__name__)


def sort_athletes(
    athletes: List[AthleteData], previous_results: Optional[List[AthleteResult]] = None
) -> List[AthleteData]:
    """Order athletes strongest first for seeding.

    Uses the rank from ``previous_results`` when given, otherwise the
    athlete's initial ranking. Athletes with no rank go last; ties keep
    their input order.
    """
    if previous_results:
        ranks = {
            result.athlete_id: result.rank
            for result in previous_results
            if result.rank is not None
        }

        def rank_of(athlete: AthleteData) -> int:
            return ranks.get(athlete.id, UNRANKED_SENTINEL)

    else:

        def rank_of(athlete: AthleteData) -> int:
            if athlete.ranking and athlete.ranking.rank:
                return athlete.ranking.rank
            return UNRANKED_SENTINEL

    return sorted(athletes, key=rank_of)


class FormulaEngine:
    """Orchestrates poule generation and phase transitions for a tournament."""

    def __init__(
        self,
        validator: Optional[FormulaValidator] = None,
        size_calculator: Optional[PouleSizeCalculator] = None,
        assignment_engine: Optional[PouleAssignmentEngine] = None,
        qualification_calculator: Optional[QualificationCalculator] = None,
        bracket_generator: Optional[BracketGenerator] = None,
    ):
        self.validator = validator or FormulaValidator()
        self.size_calculator = size_calculator or PouleSizeCalculator()
        self.assignment_engine = assignment_engine or PouleAssignmentEngine()
        self.qualification_calculator = (
            qualification_calculator or QualificationCalculator()
        )
        self.bracket_generator = bracket_generator or BracketGenerator()
        self.state: Optional[TournamentState] = None

    # ========== Tournament setup ==========

    def validate_config(self, config: TournamentConfig) -> ValidationResult:
        """Validate a configuration without touching engine state."""
        return self.validator.validate(config)

    def initialize_tournament(self, config: TournamentConfig) -> ValidationResult:
        """Validate ``config`` and start a fresh in-memory tournament state.

        Returns:
            The validation result. When it is invalid the engine is left
            uninitialised.
        """
        validation = self.validator.validate(config)
        if not validation.is_valid:
            logger.info(
                "Tournament %s rejected: %s",
                config.id,
                "; ".join(validation.error_messages),
            )
            return validation

        self.state = TournamentState(
            config=config,
            phases={
                phase.phase_id: PhaseState(phase_id=phase.phase_id)
                for phase in config.ordered_phases()
            },
        )
        first = self.state.current_phase_config()
        if first is not None:
            self.state.phases[first.phase_id].status = PhaseStatus.IN_PROGRESS
        logger.info(
            "Initialized tournament %s with %d phases", config.id, len(config.phases)
        )
        return validation

    def validate_roster(
        self,
        athletes: List[AthleteData],
        reference_date: Optional[date] = None,
        config: Optional[TournamentConfig] = None,
    ) -> ValidationResult:
        """Check athletes against the tournament's weapon, category and size.

        Raises:
            TournamentStateException: If no config is given and the engine
                is not initialised
        """
        config = config or (self.state.config if self.state else None)
        if config is None:
            raise TournamentStateException("Tournament has not been initialized")
        return validate_roster(config, athletes, reference_date)

    # ========== Poules ==========

    def generate_poules(
        self,
        phase_config: PhaseConfig,
        athletes: List[AthleteData],
        previous_results: Optional[List[AthleteResult]] = None,
        options: Optional[EngineOptions] = None,
    ) -> PouleGenerationResult:
        """Generate the poules of a POULE phase.

        Args:
            phase_config: A poule phase
            athletes: Athletes entering the phase
            previous_results: Ranked results of the previous phase, used for
                seeding instead of the initial ranking
            options: Engine options

        Returns:
            PouleGenerationResult with poules, violations and statistics

        Raises:
            PhaseTypeException: If the phase is not a poule phase
            PouleCapacityException: If the poule sizes cannot seat everyone
            SeparationException: Under strict separation when an athlete fits
                no poule
        """
        if not isinstance(phase_config, PoulePhaseConfig):
            raise PhaseTypeException(
                f"Phase {phase_config.name!r} must be of type POULE "
                "for poule generation"
            )
        options = options or EngineOptions()

        sorted_athletes = sort_athletes(athletes, previous_results)
        sizes = self.size_calculator.compute_sizes(
            phase_config.poule_sizes, len(athletes), options.optimize_for_balance
        )
        outcome = self.assignment_engine.assign(
            sorted_athletes, sizes, phase_config.separation_rules, options
        )

        warnings = []
        mismatch = self.size_calculator.sum_mismatch(sizes, len(athletes))
        if mismatch:
            warnings.append(
                ValidationWarning(
                    type=WarningType.BALANCE,
                    message=mismatch,
                    suggestion="Adjust poule sizes to match athlete count",
                )
            )
        if not options.allow_incomplete_poules:
            for poule in outcome.poules:
                if poule.free_seats:
                    warnings.append(
                        ValidationWarning(
                            type=WarningType.BALANCE,
                            message=(
                                f"Poule {poule.number} has {len(poule.athletes)} "
                                f"of {poule.size} athletes"
                            ),
                        )
                    )
        if outcome.violations:
            warnings.append(
                ValidationWarning(
                    type=WarningType.SEPARATION,
                    message=(
                        f"{outcome.forced_placements} athletes were placed "
                        "against separation rules"
                    ),
                    suggestion="Use bigger poules or looser separation limits",
                )
            )

        statistics = PouleStatistics.from_poules(
            outcome.poules, outcome.forced_placements
        )
        logger.info(
            "Generated %d poules for %d athletes in phase %s",
            statistics.total_poules,
            len(athletes),
            phase_config.name,
        )
        return PouleGenerationResult(
            poules=outcome.poules,
            separation_violations=outcome.violations,
            statistics=statistics,
            warnings=warnings,
        )

    # ========== Brackets ==========

    def generate_bracket(
        self,
        phase_config: PhaseConfig,
        ranked_athlete_ids: List[str],
        options: Optional[EngineOptions] = None,
        source_phase_id: Optional[str] = None,
    ) -> BracketGenerationResult:
        """Lay out every table of an elimination-style phase.

        Raises:
            PhaseTypeException: If the phase is not an elimination-style phase
            MissingConfigurationException: If the phase lists no tables
        """
        if not isinstance(phase_config, EliminationPhaseConfig):
            raise PhaseTypeException(
                f"Phase {phase_config.name!r} is not an elimination phase"
            )
        if not phase_config.bracket_configs:
            raise MissingConfigurationException(
                f"Phase {phase_config.name!r} has no bracket configuration"
            )

        combined = BracketGenerationResult()
        for index, bracket_config in enumerate(phase_config.bracket_configs):
            generated = self.bracket_generator.generate(
                bracket_config,
                ranked_athlete_ids,
                phase_id=phase_config.phase_id,
                options=options,
                source_phase_id=source_phase_id,
                index=index + 1,
            )
            combined.brackets.extend(generated.brackets)
            combined.seeding.extend(generated.seeding)
            combined.bye_assignments.extend(generated.bye_assignments)
        return combined

    # ========== Phase transitions ==========

    def calculate_qualification(
        self, phase_config: PhaseConfig, results: List[AthleteResult]
    ) -> PhaseTransitionResult:
        """Compute the qualified and eliminated athletes of a phase."""
        transition = self.qualification_calculator.calculate(phase_config, results)
        if transition.success:
            transition.next_phase_config = self._next_phase(phase_config)
        return transition

    def advance_phase(self, results: List[AthleteResult]) -> PhaseTransitionResult:
        """Close the current phase with its results and move to the next one.

        The last phase may omit qualification rules; its results only
        settle the overall ranking. An elimination-style phase without rules
        ranks its results and passes every athlete on, so a following
        classification or repechage table can take its slice. An
        unsuccessful transition leaves the state untouched.

        Raises:
            TournamentStateException: If the engine is not initialised or the
                tournament is already finished
        """
        if self.state is None:
            raise TournamentStateException("Tournament has not been initialized")
        if self.state.is_finished:
            raise TournamentStateException(
                f"Tournament {self.state.config.id} is already finished"
            )

        phase = self.state.current_phase_config()
        next_phase = self.state.next_phase_config()
        if phase.qualification is None and (
            next_phase is None or isinstance(phase, EliminationPhaseConfig)
        ):
            ranked = rank_results(results)
            advancing = next_phase is not None
            transition = PhaseTransitionResult(
                success=True,
                qualified_athletes=(
                    [result.athlete_id for result in ranked] if advancing else []
                ),
                ranked_results=[
                    replace(result, qualifies_for_next=advancing) for result in ranked
                ],
            )
        else:
            transition = self.calculate_qualification(phase, results)
            if not transition.success:
                return transition

        phase_state = self.state.phases[phase.phase_id]
        phase_state.results = list(transition.ranked_results)
        phase_state.qualified_athletes = list(transition.qualified_athletes)
        phase_state.eliminated_athletes = list(transition.eliminated_athletes)
        phase_state.status = PhaseStatus.COMPLETED

        ranked_ids = [result.athlete_id for result in transition.ranked_results]
        in_phase = set(ranked_ids)
        self.state.overall_ranking = ranked_ids + [
            athlete_id
            for athlete_id in self.state.overall_ranking
            if athlete_id not in in_phase
        ]

        self.state.current_phase += 1
        if next_phase is not None:
            self.state.phases[next_phase.phase_id].status = PhaseStatus.IN_PROGRESS
            transition.next_phase_config = next_phase
        logger.info(
            "Completed phase %s of tournament %s",
            phase.name,
            self.state.config.id,
        )
        return transition

    def _next_phase(self, phase_config: PhaseConfig) -> Optional[PhaseConfig]:
        if self.state is None:
            return None
        ordered = self.state.config.ordered_phases()
        for index, phase in enumerate(ordered):
            if phase is phase_config or phase.phase_id == phase_config.phase_id:
                return ordered[index + 1] if index + 1 < len(ordered) else None
        return None

    # ========== Interop ==========

    @staticmethod
    def from_engarde_formula(
        formula: Union[EngardeFormula, Dict[str, Any]],
        weapon: Weapon = Weapon.EPEE,
        category: str = DEFAULT_CATEGORY,
    ) -> TournamentConfig:
        """Convert an Engarde formula description into a tournament config."""
        return from_engarde_formula(formula, weapon=weapon, category=category)

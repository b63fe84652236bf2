"""Plain data structures consumed and produced by the formula engine."""

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

from fencingformula.models.athlete import AthleteData, AthleteRanking, ClubRef
from fencingformula.models.bracket import (
    BracketGenerationResult,
    BracketMatch,
    BracketRound,
    ByeAssignment,
    GeneratedBracket,
    QualificationSource,
    SeedingResult,
)
from fencingformula.models.enums import (
    BracketType,
    ErrorType,
    PhaseStatus,
    PhaseType,
    PouleSizeMethod,
    QualificationMethod,
    SeedingMethod,
    WarningType,
    Weapon,
)
from fencingformula.models.phase import (
    BracketConfig,
    ClassificationPhaseConfig,
    EliminationPhaseConfig,
    PhaseConfig,
    PoulePhaseConfig,
    PouleSizeConfig,
    QualificationRules,
    RepechagePhaseConfig,
    SeparationRules,
    TiebreakRule,
    phase_config_from_dict,
)
from fencingformula.models.poule import (
    AthleteAssignment,
    GeneratedPoule,
    PouleGenerationResult,
    PouleStatistics,
    SeparationViolation,
)
from fencingformula.models.results import (
    AthleteResult,
    PhaseState,
    PhaseTransitionResult,
    TournamentState,
)
from fencingformula.models.tournament import (
    FormulaTemplate,
    TemplateAdaptation,
    TournamentConfig,
)
from fencingformula.models.validation import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    "AthleteAssignment",
    "AthleteData",
    "AthleteRanking",
    "AthleteResult",
    "BracketConfig",
    "BracketGenerationResult",
    "BracketMatch",
    "BracketRound",
    "BracketType",
    "ByeAssignment",
    "ClassificationPhaseConfig",
    "ClubRef",
    "EliminationPhaseConfig",
    "ErrorType",
    "FormulaTemplate",
    "GeneratedBracket",
    "GeneratedPoule",
    "PhaseConfig",
    "PhaseState",
    "PhaseStatus",
    "PhaseTransitionResult",
    "PhaseType",
    "PouleGenerationResult",
    "PoulePhaseConfig",
    "PouleSizeConfig",
    "PouleSizeMethod",
    "PouleStatistics",
    "QualificationMethod",
    "QualificationRules",
    "QualificationSource",
    "RepechagePhaseConfig",
    "SeedingMethod",
    "SeedingResult",
    "SeparationRules",
    "SeparationViolation",
    "TemplateAdaptation",
    "TiebreakRule",
    "TournamentConfig",
    "TournamentState",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "WarningType",
    "Weapon",
    "phase_config_from_dict",
]

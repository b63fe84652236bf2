"""Engarde formula compatibility layer for Fencing Formula.

Engarde describes a competition as a list of poule rounds followed by a
direct elimination tableau. This module reads that description and maps it
onto an equivalent ``TournamentConfig``. The conversion is one way.
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

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from fencingformula.constants import DEFAULT_CATEGORY
from fencingformula.exceptions import InvalidConfigurationException
from fencingformula.models.enums import (
    BracketType,
    PouleSizeMethod,
    QualificationMethod,
    SeedingMethod,
    Weapon,
)
from fencingformula.models.phase import (
    BracketConfig,
    EliminationPhaseConfig,
    PhaseConfig,
    PoulePhaseConfig,
    PouleSizeConfig,
    QualificationRules,
    SeparationRules,
)
from fencingformula.models.tournament import TournamentConfig
from fencingformula.utils import generate_id, setup_logger

logger = setup_logger(__name__)

SEPARATION_CLUBS = "clubs"
SEPARATION_NATIONS = "nations"


def _get(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key in Engarde's camelCase, falling back to snake_case."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass
class EngardeRound:
    """One poule round of an Engarde formula."""

    round_number: int
    poules: int
    poule_sizes: List[int]
    separation: List[str] = field(default_factory=list)
    qualified: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngardeRound":
        return cls(
            round_number=int(_get(data, "roundNumber", "round_number")),
            poules=int(_get(data, "poules", "poules", 0)),
            poule_sizes=[
                int(size) for size in _get(data, "pouleSizes", "poule_sizes", [])
            ],
            separation=list(_get(data, "separation", "separation", [])),
            qualified=int(_get(data, "qualified", "qualified", 0)),
        )


@dataclass
class EngardeElimination:
    """The direct elimination tableau closing an Engarde formula."""

    tableau_size: int
    has_third_place: bool = False
    repechage: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngardeElimination":
        return cls(
            tableau_size=int(_get(data, "tableauSize", "tableau_size")),
            has_third_place=bool(
                _get(data, "hasThirdPlace", "has_third_place", False)
            ),
            repechage=bool(data.get("repechage", False)),
        )


@dataclass
class EngardeFormula:
    """A complete Engarde formula."""

    total_fencers: int
    rounds: List[EngardeRound] = field(default_factory=list)
    elimination: Optional[EngardeElimination] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngardeFormula":
        """Parse Engarde's formula dictionary.

        Raises:
            InvalidConfigurationException: If a required key is missing or
                not a number
        """
        try:
            elimination = _get(data, "elimination", "elimination")
            return cls(
                total_fencers=int(_get(data, "totalFencers", "total_fencers")),
                rounds=[EngardeRound.from_dict(r) for r in data.get("rounds", [])],
                elimination=(
                    EngardeElimination.from_dict(elimination) if elimination else None
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigurationException(
                f"Invalid Engarde formula: {e}"
            ) from e

    @classmethod
    def from_json(cls, text: str) -> "EngardeFormula":
        """Parse an Engarde formula from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidConfigurationException(
                f"Engarde formula is not valid JSON: {e}"
            ) from e
        return cls.from_dict(data)


def _round_to_phase(round_: EngardeRound, sequence_order: int) -> PoulePhaseConfig:
    if round_.poules and round_.poules != len(round_.poule_sizes):
        logger.warning(
            "Engarde round %d declares %d poules but lists %d sizes",
            round_.round_number,
            round_.poules,
            len(round_.poule_sizes),
        )

    separation = [value.lower() for value in round_.separation]
    return PoulePhaseConfig(
        id=f"phase-{sequence_order}",
        name=f"Round {round_.round_number}",
        sequence_order=sequence_order,
        qualification=QualificationRules(
            method=QualificationMethod.QUOTA, quota=round_.qualified
        ),
        poule_sizes=PouleSizeConfig(
            method=PouleSizeMethod.VARIABLE, sizes=list(round_.poule_sizes)
        ),
        separation_rules=SeparationRules(
            club=SEPARATION_CLUBS in separation,
            country=SEPARATION_NATIONS in separation,
        ),
    )


def from_engarde_formula(
    formula: Union[EngardeFormula, Dict[str, Any]],
    weapon: Weapon = Weapon.EPEE,
    category: str = DEFAULT_CATEGORY,
) -> TournamentConfig:
    """Map an Engarde formula onto a tournament configuration.

    Each round becomes a POULE phase named ``Round <n>`` with the round's
    poule sizes, a quota equal to its ``qualified`` count and club/country
    separation taken from its ``separation`` list. A trailing "Direct
    Elimination" phase holds one MAIN table of ``tableauSize`` seeded by
    ranking.

    Args:
        formula: Parsed formula or Engarde's raw dictionary
        weapon: Weapon of the resulting tournament
        category: Category of the resulting tournament

    Returns:
        TournamentConfig ready for validation
    """
    if isinstance(formula, dict):
        formula = EngardeFormula.from_dict(formula)

    phases: List[PhaseConfig] = [
        _round_to_phase(round_, index + 1)
        for index, round_ in enumerate(formula.rounds)
    ]

    if formula.elimination is not None:
        order = len(phases) + 1
        phases.append(
            EliminationPhaseConfig(
                id=f"phase-{order}",
                name="Direct Elimination",
                sequence_order=order,
                bracket_configs=[
                    BracketConfig(
                        bracket_type=BracketType.MAIN,
                        size=formula.elimination.tableau_size,
                        seeding_method=SeedingMethod.RANKING,
                        configuration={
                            "has_third_place": formula.elimination.has_third_place,
                            "repechage": formula.elimination.repechage,
                        },
                    )
                ],
            )
        )

    logger.info(
        "Converted Engarde formula: %d rounds, %d fencers",
        len(formula.rounds),
        formula.total_fencers,
    )
    return TournamentConfig(
        id=generate_id("engarde"),
        name="Imported from Engarde",
        weapon=weapon,
        category=category,
        total_athletes=formula.total_fencers,
        phases=phases,
    )

"""Generated poules and poule generation results."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fencingformula.models.validation import ValidationWarning
from fencingformula.type_hints import SeparationKind, SizeDistribution


@dataclass(frozen=True)
class AthleteAssignment:
    """An athlete's seat in a poule.

    ``club`` and ``country`` are snapshots taken at placement time and are
    what separation checks count against.
    """

    athlete_id: str
    position: int
    seed_number: Optional[int] = None
    club: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "athlete_id": self.athlete_id,
            "position": self.position,
            "seed_number": self.seed_number,
            "club": self.club,
            "country": self.country,
        }


@dataclass
class GeneratedPoule:
    """A poule produced by the assignment engine.

    Invariants: ``len(athletes) <= size`` and positions are 1..len(athletes).
    """

    id: str
    number: int
    size: int
    athletes: List[AthleteAssignment] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.athletes) >= self.size

    @property
    def free_seats(self) -> int:
        return max(0, self.size - len(self.athletes))

    @property
    def athlete_ids(self) -> List[str]:
        return [assignment.athlete_id for assignment in self.athletes]

    def count_club(self, club: Optional[str]) -> int:
        """Members sharing the given club name."""
        if not club:
            return 0
        return sum(1 for assignment in self.athletes if assignment.club == club)

    def count_country(self, country: Optional[str]) -> int:
        """Members sharing the given nationality."""
        if not country:
            return 0
        return sum(1 for assignment in self.athletes if assignment.country == country)

    def add(
        self,
        athlete_id: str,
        seed_number: Optional[int] = None,
        club: Optional[str] = None,
        country: Optional[str] = None,
    ) -> AthleteAssignment:
        """Seat an athlete at the next position."""
        assignment = AthleteAssignment(
            athlete_id=athlete_id,
            position=len(self.athletes) + 1,
            seed_number=seed_number,
            club=club,
            country=country,
        )
        self.athletes.append(assignment)
        return assignment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "size": self.size,
            "athletes": [assignment.to_dict() for assignment in self.athletes],
        }


@dataclass(frozen=True)
class SeparationViolation:
    """A separation rule broken by a forced placement in relaxed mode.

    Attributes:
        poule_number: 1-based poule the athlete was forced into
        athlete_id: The athlete that was forced
        kind: Which rule was broken, "club" or "country"
        violated_rule: Human-readable rule text
        conflicting_athlete_ids: Members already in the poule sharing the
            club or country
    """

    poule_number: int
    athlete_id: str
    kind: SeparationKind
    violated_rule: str
    conflicting_athlete_ids: List[str] = field(default_factory=list)

    @property
    def athlete_ids(self) -> List[str]:
        """The forced athlete followed by the members it conflicts with."""
        return [self.athlete_id] + list(self.conflicting_athlete_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "poule_number": self.poule_number,
            "athlete_id": self.athlete_id,
            "kind": self.kind,
            "violated_rule": self.violated_rule,
            "athlete_ids": self.athlete_ids,
        }


@dataclass
class PouleStatistics:
    """Summary numbers for a set of generated poules."""

    total_poules: int = 0
    average_size: float = 0.0
    size_distribution: SizeDistribution = field(default_factory=dict)
    separation_success: float = 100.0

    @classmethod
    def from_poules(
        cls, poules: List[GeneratedPoule], forced_placements: int = 0
    ) -> "PouleStatistics":
        """Compute statistics from poules and the number of forced placements."""
        distribution: SizeDistribution = {}
        for poule in poules:
            distribution[poule.size] = distribution.get(poule.size, 0) + 1

        placed = sum(len(poule.athletes) for poule in poules)
        average = placed / len(poules) if poules else 0.0
        success = 100.0 * (placed - forced_placements) / placed if placed else 100.0

        return cls(
            total_poules=len(poules),
            average_size=average,
            size_distribution=distribution,
            separation_success=success,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_poules": self.total_poules,
            "average_size": self.average_size,
            "size_distribution": dict(self.size_distribution),
            "separation_success": self.separation_success,
        }


@dataclass
class PouleGenerationResult:
    """Everything a poule generation call hands back to the caller."""

    poules: List[GeneratedPoule] = field(default_factory=list)
    separation_violations: List[SeparationViolation] = field(default_factory=list)
    statistics: PouleStatistics = field(default_factory=PouleStatistics)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(len(poule.athletes) for poule in self.poules)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "poules": [poule.to_dict() for poule in self.poules],
            "separation_violations": [
                violation.to_dict() for violation in self.separation_violations
            ],
            "statistics": self.statistics.to_dict(),
            "warnings": [warning.to_dict() for warning in self.warnings],
        }

"""Direct elimination tables and their seeding."""

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

from fencingformula.models.enums import BracketType, SeedingMethod


@dataclass
class BracketMatch:
    """A bout slot in a table. Empty athlete slots are byes or still unknown."""

    id: str
    round_number: int
    match_number: int
    athlete_a: Optional[str] = None
    athlete_b: Optional[str] = None
    seed_a: Optional[int] = None
    seed_b: Optional[int] = None
    winner: Optional[str] = None
    is_bye: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "round_number": self.round_number,
            "match_number": self.match_number,
            "athlete_a": self.athlete_a,
            "athlete_b": self.athlete_b,
            "seed_a": self.seed_a,
            "seed_b": self.seed_b,
            "winner": self.winner,
            "is_bye": self.is_bye,
        }


@dataclass
class BracketRound:
    """One round of a table, e.g. "Table of 16"."""

    number: int
    name: str
    matches: List[BracketMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "name": self.name,
            "matches": [match.to_dict() for match in self.matches],
        }


@dataclass
class GeneratedBracket:
    """A fully laid-out elimination table."""

    id: str
    phase_id: str
    bracket_type: BracketType
    size: int
    seeding_method: SeedingMethod
    rounds: List[BracketRound] = field(default_factory=list)
    configuration: Dict[str, Any] = field(default_factory=dict)

    @property
    def first_round(self) -> Optional[BracketRound]:
        return self.rounds[0] if self.rounds else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "phase_id": self.phase_id,
            "bracket_type": self.bracket_type.value,
            "size": self.size,
            "seeding_method": self.seeding_method.value,
            "rounds": [bracket_round.to_dict() for bracket_round in self.rounds],
            "configuration": dict(self.configuration),
        }


@dataclass(frozen=True)
class QualificationSource:
    """Where a seeded athlete came from."""

    phase_id: str
    rank: int


@dataclass(frozen=True)
class SeedingResult:
    """An athlete's seed and first-round slot in a table."""

    athlete_id: str
    seed: int
    position: int
    source: Optional[QualificationSource] = None


@dataclass(frozen=True)
class ByeAssignment:
    """A seeded athlete that goes straight to the second round."""

    athlete_id: str
    seed: int
    round_number: int = 1


@dataclass
class BracketGenerationResult:
    """Tables generated for a phase together with their seeding."""

    brackets: List[GeneratedBracket] = field(default_factory=list)
    seeding: List[SeedingResult] = field(default_factory=list)
    bye_assignments: List[ByeAssignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brackets": [bracket.to_dict() for bracket in self.brackets],
            "seeding": [
                {
                    "athlete_id": seed.athlete_id,
                    "seed": seed.seed,
                    "position": seed.position,
                }
                for seed in self.seeding
            ],
            "bye_assignments": [
                {"athlete_id": bye.athlete_id, "seed": bye.seed}
                for bye in self.bye_assignments
            ],
        }

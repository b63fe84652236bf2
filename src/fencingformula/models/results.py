"""Phase results, phase transitions and in-memory tournament state."""

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

from fencingformula.models.enums import PhaseStatus
from fencingformula.models.phase import PhaseConfig
from fencingformula.models.tournament import TournamentConfig


@dataclass
class AthleteResult:
    """An athlete's record for one phase, as recorded by the match system.

    ``indicator`` defaults to touches scored minus touches received and
    ``vm_ratio`` to victories over matches when not supplied.
    """

    athlete_id: str
    phase_id: str = ""
    rank: Optional[int] = None
    victories: int = 0
    matches: int = 0
    touches_scored: int = 0
    touches_received: int = 0
    indicator: Optional[int] = None
    vm_ratio: Optional[float] = None
    is_eliminated: bool = False
    qualifies_for_next: bool = False

    def __post_init__(self):
        if self.indicator is None:
            self.indicator = self.touches_scored - self.touches_received
        if self.vm_ratio is None:
            self.vm_ratio = self.victories / self.matches if self.matches else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "athlete_id": self.athlete_id,
            "phase_id": self.phase_id,
            "rank": self.rank,
            "victories": self.victories,
            "matches": self.matches,
            "touches_scored": self.touches_scored,
            "touches_received": self.touches_received,
            "indicator": self.indicator,
            "vm_ratio": self.vm_ratio,
            "is_eliminated": self.is_eliminated,
            "qualifies_for_next": self.qualifies_for_next,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AthleteResult":
        return cls(
            athlete_id=data["athlete_id"],
            phase_id=data.get("phase_id", ""),
            rank=data.get("rank"),
            victories=int(data.get("victories", 0)),
            matches=int(data.get("matches", 0)),
            touches_scored=int(data.get("touches_scored", 0)),
            touches_received=int(data.get("touches_received", 0)),
            indicator=data.get("indicator"),
            vm_ratio=data.get("vm_ratio"),
            is_eliminated=bool(data.get("is_eliminated", False)),
            qualifies_for_next=bool(data.get("qualifies_for_next", False)),
        )


@dataclass
class PhaseTransitionResult:
    """Qualified and eliminated sets produced at the end of a phase."""

    success: bool
    qualified_athletes: List[str] = field(default_factory=list)
    eliminated_athletes: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    ranked_results: List[AthleteResult] = field(default_factory=list)
    next_phase_config: Optional[PhaseConfig] = None

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "qualified_athletes": list(self.qualified_athletes),
            "eliminated_athletes": list(self.eliminated_athletes),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "next_phase_id": (
                self.next_phase_config.phase_id if self.next_phase_config else None
            ),
        }


@dataclass
class PhaseState:
    """Progress of a single phase."""

    phase_id: str
    status: PhaseStatus = PhaseStatus.SCHEDULED
    results: List[AthleteResult] = field(default_factory=list)
    qualified_athletes: List[str] = field(default_factory=list)
    eliminated_athletes: List[str] = field(default_factory=list)


@dataclass
class TournamentState:
    """Transient state of one tournament run; never persisted by the engine.

    Attributes:
        config: The tournament being run
        current_phase: Index into ``config.ordered_phases()``
        phases: Per-phase progress keyed by phase id
        overall_ranking: Running ranking, best athlete first
    """

    config: TournamentConfig
    current_phase: int = 0
    phases: Dict[str, PhaseState] = field(default_factory=dict)
    overall_ranking: List[str] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.current_phase >= len(self.config.phases)

    def current_phase_config(self) -> Optional[PhaseConfig]:
        """Configuration of the phase being played, or None when finished."""
        ordered = self.config.ordered_phases()
        if self.current_phase < len(ordered):
            return ordered[self.current_phase]
        return None

    def next_phase_config(self) -> Optional[PhaseConfig]:
        ordered = self.config.ordered_phases()
        if self.current_phase + 1 < len(ordered):
            return ordered[self.current_phase + 1]
        return None

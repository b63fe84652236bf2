"""Tournament configuration and reusable formula templates."""

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

from fencingformula.constants import DEFAULT_CATEGORY
from fencingformula.models.enums import Weapon, coerce_enum
from fencingformula.models.phase import PhaseConfig, phase_config_from_dict


@dataclass
class TournamentConfig:
    """A concrete tournament: its field size and ordered phases.

    Treated as immutable once a phase starts executing.

    Attributes:
        id: Tournament identifier
        name: Display name
        weapon: Weapon fenced
        category: Age category name (e.g. "Senior", "Junior")
        total_athletes: Expected number of athletes
        phases: Phase configurations, ordered by sequence_order
    """

    id: str
    name: str
    weapon: Weapon = Weapon.EPEE
    category: str = DEFAULT_CATEGORY
    total_athletes: int = 0
    phases: List[PhaseConfig] = field(default_factory=list)

    def ordered_phases(self) -> List[PhaseConfig]:
        """Phases sorted by sequence order."""
        return sorted(self.phases, key=lambda phase: phase.sequence_order or 0)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "weapon": self.weapon.value if self.weapon else None,
            "category": self.category,
            "total_athletes": self.total_athletes,
            "phases": [phase.to_dict() for phase in self.phases],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize tournament from dictionary."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            weapon=coerce_enum(Weapon, data.get("weapon", "EPEE")),
            category=data.get("category", DEFAULT_CATEGORY),
            total_athletes=int(data.get("total_athletes", 0)),
            phases=[phase_config_from_dict(phase) for phase in data.get("phases", [])],
        )


@dataclass
class FormulaTemplate:
    """A reusable tournament formula (preset).

    Built-in templates are shared constants; always work on a copy.

    Attributes:
        id: Template identifier
        name: Display name
        description: Optional free text
        weapon: Optional weapon filter, None means any weapon
        category: Optional category filter, None means any category
        phases: Ordered phase configurations
        is_public: Whether other organizations may use the template
        organization_id: Owning organization, None for built-ins
        preset_category: Catalogue grouping (CLASSIC, FIE, NATIONAL, CLUB, CUSTOM)
    """

    id: str
    name: str
    phases: List[PhaseConfig] = field(default_factory=list)
    description: Optional[str] = None
    weapon: Optional[Weapon] = None
    category: Optional[str] = None
    is_public: bool = False
    organization_id: Optional[str] = None
    preset_category: str = "CUSTOM"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "weapon": self.weapon.value if self.weapon else None,
            "category": self.category,
            "phases": [phase.to_dict() for phase in self.phases],
            "is_public": self.is_public,
            "organization_id": self.organization_id,
            "preset_category": self.preset_category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormulaTemplate":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description"),
            weapon=coerce_enum(Weapon, data.get("weapon")),
            category=data.get("category"),
            phases=[phase_config_from_dict(phase) for phase in data.get("phases", [])],
            is_public=bool(data.get("is_public", False)),
            organization_id=data.get("organization_id"),
            preset_category=data.get("preset_category", "CUSTOM"),
        )


@dataclass(frozen=True)
class TemplateAdaptation:
    """One change the template adapter made to a phase."""

    phase_index: int
    field: str
    original_value: Any
    adapted_value: Any
    reason: str

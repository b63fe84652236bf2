"""Phase configuration data classes.

A phase is one step of a tournament formula. Each phase type has its own
configuration class carrying only the fields that make sense for it:

- ``PoulePhaseConfig``: poule sizing policy and separation rules
- ``EliminationPhaseConfig``: direct elimination tables
- ``ClassificationPhaseConfig`` / ``RepechagePhaseConfig``: tables for
  placing or recovering athletes after the main elimination

Use ``phase_config_from_dict`` to build the right class from plain data.
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

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from fencingformula.constants import (
    DEFAULT_MAX_POULE_SIZE,
    DEFAULT_MAX_SAME_CLUB,
    DEFAULT_MAX_SAME_COUNTRY,
    DEFAULT_MIN_POULE_SIZE,
    DEFAULT_TIEBREAK_ORDER,
)
from fencingformula.exceptions import InvalidConfigurationException
from fencingformula.models.enums import (
    BracketType,
    PhaseType,
    PouleSizeMethod,
    QualificationMethod,
    SeedingMethod,
    coerce_enum,
)
from fencingformula.type_hints import Direction

# ========== Separation ==========


@dataclass
class SeparationRules:
    """Club and country separation limits for poule assignment.

    Attributes:
        club: Whether club separation is enforced
        country: Whether country separation is enforced
        max_same_club: Maximum athletes of one club per poule
        max_same_country: Maximum athletes of one country per poule
        strict_separation: Per-phase override of the engine's strictness
    """

    club: bool = True
    country: bool = True
    max_same_club: int = DEFAULT_MAX_SAME_CLUB
    max_same_country: int = DEFAULT_MAX_SAME_COUNTRY
    strict_separation: Optional[bool] = None

    @property
    def club_limit(self) -> Optional[int]:
        """Enforced club limit, or None when club separation is off."""
        return self.max_same_club if self.club else None

    @property
    def country_limit(self) -> Optional[int]:
        """Enforced country limit, or None when country separation is off."""
        return self.max_same_country if self.country else None

    def describe(self) -> str:
        """Human-readable summary used in error messages."""
        parts = []
        if self.club:
            parts.append(f"max {self.max_same_club} per club")
        if self.country:
            parts.append(f"max {self.max_same_country} per country")
        return ", ".join(parts) or "no separation"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "club": self.club,
            "country": self.country,
            "max_same_club": self.max_same_club,
            "max_same_country": self.max_same_country,
            "strict_separation": self.strict_separation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeparationRules":
        return cls(
            club=bool(data.get("club", True)),
            country=bool(data.get("country", True)),
            max_same_club=data.get("max_same_club") or DEFAULT_MAX_SAME_CLUB,
            max_same_country=data.get("max_same_country") or DEFAULT_MAX_SAME_COUNTRY,
            strict_separation=data.get("strict_separation"),
        )


# ========== Poule sizing ==========


@dataclass
class PouleSizeConfig:
    """Poule sizing policy.

    Attributes:
        method: fixed, variable, optimal (default), or the preset shorthands
            uniform and single
        fixed_size: Poule size for the fixed and uniform methods
        sizes: Exact poule sizes for the variable method
        min_size: Smallest poule the optimal method aims for
        max_size: Largest poule the optimal method fills
        preferred_size: Preset hint, used as max_size when that is unset
        allowed_sizes: Preset hint, its minimum is used as min_size when unset
    """

    method: PouleSizeMethod = PouleSizeMethod.OPTIMAL
    fixed_size: Optional[int] = None
    sizes: Optional[List[int]] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None
    preferred_size: Optional[int] = None
    allowed_sizes: Optional[List[int]] = None

    def effective_bounds(self) -> Tuple[int, int]:
        """Return the (min, max) poule size the optimal method works with."""
        max_size = self.max_size or self.preferred_size or DEFAULT_MAX_POULE_SIZE
        if self.min_size:
            min_size = self.min_size
        elif self.allowed_sizes:
            min_size = min(self.allowed_sizes)
        else:
            min_size = DEFAULT_MIN_POULE_SIZE
        return min_size, max_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "fixed_size": self.fixed_size,
            "sizes": list(self.sizes) if self.sizes is not None else None,
            "min_size": self.min_size,
            "max_size": self.max_size,
            "preferred_size": self.preferred_size,
            "allowed_sizes": (
                list(self.allowed_sizes) if self.allowed_sizes is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PouleSizeConfig":
        return cls(
            method=coerce_enum(PouleSizeMethod, data.get("method", "optimal")),
            fixed_size=data.get("fixed_size"),
            sizes=list(data["sizes"]) if data.get("sizes") is not None else None,
            min_size=data.get("min_size"),
            max_size=data.get("max_size"),
            preferred_size=data.get("preferred_size"),
            allowed_sizes=(
                list(data["allowed_sizes"])
                if data.get("allowed_sizes") is not None
                else None
            ),
        )


# ========== Qualification ==========


@dataclass
class TiebreakRule:
    """One step of a ranking cascade."""

    order: int
    criterion: str
    direction: Direction = "desc"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": self.order,
            "criterion": self.criterion,
            "direction": self.direction,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TiebreakRule":
        return cls(
            order=int(data["order"]),
            criterion=data["criterion"],
            direction=data.get("direction", "desc"),
        )


def default_tiebreak_rules() -> List[TiebreakRule]:
    """victories, indicator, touches scored; all descending."""
    return [
        TiebreakRule(order=index + 1, criterion=criterion)
        for index, criterion in enumerate(DEFAULT_TIEBREAK_ORDER)
    ]


@dataclass
class QualificationRules:
    """How many athletes of a phase advance, and how ties are ordered.

    Attributes:
        method: quota, percentage, or custom
        quota: Number of athletes advancing (quota method)
        percentage: Share of athletes advancing, 0-100 (percentage method)
        tiebreak_rules: Ranking cascade; the default cascade applies when empty
    """

    method: QualificationMethod = QualificationMethod.QUOTA
    quota: Optional[int] = None
    percentage: Optional[float] = None
    tiebreak_rules: List[TiebreakRule] = field(default_factory=list)

    def ranking_rules(self) -> List[TiebreakRule]:
        """Tiebreak rules sorted by order, falling back to the default cascade."""
        if not self.tiebreak_rules:
            return default_tiebreak_rules()
        return sorted(self.tiebreak_rules, key=lambda rule: rule.order)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "quota": self.quota,
            "percentage": self.percentage,
            "tiebreak_rules": [rule.to_dict() for rule in self.tiebreak_rules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QualificationRules":
        return cls(
            method=coerce_enum(QualificationMethod, data.get("method", "quota")),
            quota=data.get("quota"),
            percentage=data.get("percentage"),
            tiebreak_rules=[
                TiebreakRule.from_dict(rule) for rule in data.get("tiebreak_rules", [])
            ],
        )


# ========== Brackets ==========


@dataclass
class BracketConfig:
    """A direct elimination table inside a phase.

    ``configuration`` holds table options such as ``has_third_place``,
    ``repechage_source`` or ``classification_positions``.
    """

    bracket_type: BracketType = BracketType.MAIN
    size: int = 32
    seeding_method: SeedingMethod = SeedingMethod.RANKING
    configuration: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bracket_type": self.bracket_type.value,
            "size": self.size,
            "seeding_method": self.seeding_method.value,
            "configuration": dict(self.configuration),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketConfig":
        return cls(
            bracket_type=coerce_enum(BracketType, data.get("bracket_type", "MAIN")),
            size=int(data.get("size", 32)),
            seeding_method=coerce_enum(
                SeedingMethod, data.get("seeding_method", "RANKING")
            ),
            configuration=dict(data.get("configuration") or {}),
        )


# ========== Phases ==========


@dataclass
class PhaseConfig:
    """Fields common to every phase.

    Attributes
    ----------
    name : str
        Display name of the phase.
    sequence_order : int
        1-based position in the tournament; contiguous across a tournament.
    id : str, optional
        Phase identifier; defaults to ``phase-<sequence_order>`` when needed.
    qualification : QualificationRules, optional
        How athletes advance out of this phase.
    configuration : dict
        Free-form extra options kept for the surrounding application.
    """

    phase_type: ClassVar[Optional[PhaseType]] = None

    name: str
    sequence_order: int
    id: Optional[str] = None
    qualification: Optional[QualificationRules] = None
    configuration: Dict[str, Any] = field(default_factory=dict)

    @property
    def phase_id(self) -> str:
        """The phase id, or a stable id derived from the sequence order."""
        return self.id or f"phase-{self.sequence_order}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize phase to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "phase_type": self.phase_type.value if self.phase_type else None,
            "sequence_order": self.sequence_order,
            "qualification": (
                self.qualification.to_dict() if self.qualification else None
            ),
            "configuration": dict(self.configuration),
        }

    @classmethod
    def _common_kwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        qualification = None
        if data.get("qualification"):
            qualification = QualificationRules.from_dict(data["qualification"])
        elif data.get("qualification_quota") is not None:
            qualification = QualificationRules(
                method=QualificationMethod.QUOTA, quota=data["qualification_quota"]
            )
        elif data.get("qualification_percentage") is not None:
            qualification = QualificationRules(
                method=QualificationMethod.PERCENTAGE,
                percentage=data["qualification_percentage"],
            )

        return {
            "id": data.get("id"),
            "name": data.get("name", ""),
            "sequence_order": data.get("sequence_order"),
            "qualification": qualification,
            "configuration": dict(data.get("configuration") or {}),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhaseConfig":
        return cls(**cls._common_kwargs(data))


@dataclass
class PoulePhaseConfig(PhaseConfig):
    """Round-robin poule phase."""

    phase_type: ClassVar[Optional[PhaseType]] = PhaseType.POULE

    poule_sizes: Optional[PouleSizeConfig] = None
    separation_rules: Optional[SeparationRules] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["poule_sizes"] = self.poule_sizes.to_dict() if self.poule_sizes else None
        data["separation_rules"] = (
            self.separation_rules.to_dict() if self.separation_rules else None
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoulePhaseConfig":
        kwargs = cls._common_kwargs(data)
        if data.get("poule_sizes"):
            kwargs["poule_sizes"] = PouleSizeConfig.from_dict(data["poule_sizes"])
        if data.get("separation_rules"):
            kwargs["separation_rules"] = SeparationRules.from_dict(
                data["separation_rules"]
            )
        return cls(**kwargs)


@dataclass
class EliminationPhaseConfig(PhaseConfig):
    """Direct elimination phase made of one or more tables."""

    phase_type: ClassVar[Optional[PhaseType]] = PhaseType.DIRECT_ELIMINATION

    bracket_configs: List[BracketConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["bracket_configs"] = [
            bracket.to_dict() for bracket in self.bracket_configs
        ]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EliminationPhaseConfig":
        kwargs = cls._common_kwargs(data)
        kwargs["bracket_configs"] = [
            BracketConfig.from_dict(bracket)
            for bracket in data.get("bracket_configs") or []
        ]
        return cls(**kwargs)


@dataclass
class ClassificationPhaseConfig(EliminationPhaseConfig):
    """Classification tables for placings below the podium."""

    phase_type: ClassVar[Optional[PhaseType]] = PhaseType.CLASSIFICATION


@dataclass
class RepechagePhaseConfig(EliminationPhaseConfig):
    """Repechage tables giving eliminated athletes a second chance."""

    phase_type: ClassVar[Optional[PhaseType]] = PhaseType.REPECHAGE


PHASE_CONFIG_CLASSES = {
    PhaseType.POULE: PoulePhaseConfig,
    PhaseType.DIRECT_ELIMINATION: EliminationPhaseConfig,
    PhaseType.CLASSIFICATION: ClassificationPhaseConfig,
    PhaseType.REPECHAGE: RepechagePhaseConfig,
}


def phase_config_from_dict(data: Dict[str, Any]) -> PhaseConfig:
    """Build the phase class matching ``data["phase_type"]``.

    Raises:
        InvalidConfigurationException: If the phase type is missing or unknown
    """
    raw_type = data.get("phase_type")
    if raw_type is None:
        raise InvalidConfigurationException(
            f"Phase {data.get('name')!r} has no phase_type"
        )

    phase_type = coerce_enum(PhaseType, raw_type)
    return PHASE_CONFIG_CLASSES[phase_type].from_dict(data)

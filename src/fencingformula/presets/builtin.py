"""Built-in formula presets.

Standard tournament formulas matching common Engarde configurations. The
catalogue is read-only; every getter hands out a deep copy so callers can
adapt or edit a preset freely.
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

import copy
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from fencingformula.exceptions import PresetNotFoundException
from fencingformula.models.enums import (
    BracketType,
    PouleSizeMethod,
    QualificationMethod,
    SeedingMethod,
)
from fencingformula.models.phase import (
    BracketConfig,
    ClassificationPhaseConfig,
    EliminationPhaseConfig,
    PoulePhaseConfig,
    PouleSizeConfig,
    QualificationRules,
    RepechagePhaseConfig,
    SeparationRules,
)
from fencingformula.models.tournament import FormulaTemplate

# Preset category -> display name
PRESET_CATEGORIES = MappingProxyType(
    {
        "CLASSIC": "Classic Formats",
        "FIE": "FIE Official",
        "NATIONAL": "National Championships",
        "CLUB": "Club Tournaments",
        "CUSTOM": "Custom Formats",
    }
)

# Shared by most international formats
INTERNATIONAL_SEPARATION = MappingProxyType(
    {"club": True, "country": True, "max_same_club": 1, "max_same_country": 2}
)


def _poules(
    name: str,
    order: int,
    percentage: float,
    sizes: PouleSizeConfig,
    separation: SeparationRules,
) -> PoulePhaseConfig:
    return PoulePhaseConfig(
        name=name,
        sequence_order=order,
        qualification=QualificationRules(
            method=QualificationMethod.PERCENTAGE, percentage=percentage
        ),
        poule_sizes=sizes,
        separation_rules=separation,
    )


def _table(
    phase_cls,
    name: str,
    order: int,
    size: int,
    bracket_type: BracketType = BracketType.MAIN,
    **configuration,
):
    return phase_cls(
        name=name,
        sequence_order=order,
        bracket_configs=[
            BracketConfig(
                bracket_type=bracket_type,
                size=size,
                seeding_method=SeedingMethod.RANKING,
                configuration=configuration,
            )
        ],
    )


def _optimal(preferred: int, allowed: List[int]) -> PouleSizeConfig:
    return PouleSizeConfig(
        method=PouleSizeMethod.OPTIMAL, preferred_size=preferred, allowed_sizes=allowed
    )


def _build_catalogue() -> Dict[str, FormulaTemplate]:
    presets = [
        FormulaTemplate(
            id="classic-no-3rd",
            name="Classic without match for 3rd place",
            description=(
                "Standard tournament format with poules followed by direct "
                "elimination, no 3rd place playoff"
            ),
            preset_category="CLASSIC",
            is_public=True,
            phases=[
                _poules(
                    "Poules",
                    1,
                    70,
                    _optimal(7, [6, 7, 8]),
                    SeparationRules(**INTERNATIONAL_SEPARATION),
                ),
                _table(EliminationPhaseConfig, "Direct Elimination", 2, 64),
            ],
        ),
        FormulaTemplate(
            id="multi-round-poules",
            name="Multi-round poules (3 rounds)",
            description=(
                "Three rounds of poules with progressive qualification, ideal for "
                "large competitions"
            ),
            preset_category="CLASSIC",
            is_public=True,
            phases=[
                # Mixed poules of 7 and 6
                _poules(
                    "Poules Round 1",
                    1,
                    68,
                    PouleSizeConfig(
                        method=PouleSizeMethod.OPTIMAL,
                        min_size=6,
                        max_size=7,
                        allowed_sizes=[6, 7],
                    ),
                    SeparationRules(**INTERNATIONAL_SEPARATION),
                ),
                _poules(
                    "Poules Round 2",
                    2,
                    76,
                    PouleSizeConfig(method=PouleSizeMethod.UNIFORM, fixed_size=5),
                    SeparationRules(**INTERNATIONAL_SEPARATION),
                ),
                _poules(
                    "Poules Round 3",
                    3,
                    74,
                    PouleSizeConfig(method=PouleSizeMethod.UNIFORM, fixed_size=5),
                    SeparationRules(**INTERNATIONAL_SEPARATION),
                ),
                _table(EliminationPhaseConfig, "Direct Elimination", 4, 64),
            ],
        ),
        FormulaTemplate(
            id="fie-world-cup",
            name="FIE World Cup Format",
            description=(
                "Official FIE World Cup tournament format with comprehensive "
                "bracket system"
            ),
            preset_category="FIE",
            is_public=True,
            phases=[
                _poules(
                    "Poules",
                    1,
                    70,
                    _optimal(7, [6, 7, 8]),
                    SeparationRules(**INTERNATIONAL_SEPARATION),
                ),
                _table(EliminationPhaseConfig, "Table of 64", 2, 64),
                _table(
                    ClassificationPhaseConfig,
                    "Classification 9-16",
                    3,
                    8,
                    BracketType.CLASSIFICATION,
                    classification_positions=[9, 16],
                ),
            ],
        ),
        FormulaTemplate(
            id="club-tournament",
            name="Club Tournament (Small)",
            description="Simple format for small club competitions (8-32 fencers)",
            preset_category="CLUB",
            is_public=True,
            phases=[
                _poules(
                    "Poules",
                    1,
                    75,
                    _optimal(6, [5, 6, 7]),
                    # No separation inside a club
                    SeparationRules(
                        club=False,
                        country=False,
                        max_same_club=10,
                        max_same_country=10,
                    ),
                ),
                _table(EliminationPhaseConfig, "Direct Elimination", 2, 16),
            ],
        ),
        FormulaTemplate(
            id="national-championship",
            name="National Championship",
            description=(
                "Comprehensive national championship format with repechage system"
            ),
            preset_category="NATIONAL",
            is_public=True,
            phases=[
                _poules(
                    "Poules",
                    1,
                    65,
                    _optimal(7, [6, 7, 8]),
                    SeparationRules(
                        club=True,
                        country=False,
                        max_same_club=2,
                        max_same_country=10,
                    ),
                ),
                _table(EliminationPhaseConfig, "Table of 128", 2, 128),
                _table(
                    RepechagePhaseConfig,
                    "Repechage",
                    3,
                    16,
                    BracketType.REPECHAGE,
                ),
                _table(
                    ClassificationPhaseConfig,
                    "Classification 9-16",
                    4,
                    8,
                    BracketType.CLASSIFICATION,
                    classification_positions=[9, 16],
                ),
            ],
        ),
        FormulaTemplate(
            id="direct-elimination-only",
            name="Direct Elimination Only",
            description="Pure knockout tournament, no poules (ideal for small fields)",
            preset_category="CLASSIC",
            is_public=True,
            phases=[_table(EliminationPhaseConfig, "Direct Elimination", 1, 32)],
        ),
        FormulaTemplate(
            id="round-robin",
            name="Round Robin",
            description=(
                "Everyone fences everyone, no elimination (ideal for very small fields)"
            ),
            preset_category="CLASSIC",
            is_public=True,
            phases=[
                _poules(
                    "Round Robin",
                    1,
                    100,
                    PouleSizeConfig(method=PouleSizeMethod.SINGLE),
                    SeparationRules(
                        club=False,
                        country=False,
                        max_same_club=16,
                        max_same_country=16,
                    ),
                ),
            ],
        ),
    ]
    return {preset.id: preset for preset in presets}


BUILT_IN_PRESETS: Mapping[str, FormulaTemplate] = MappingProxyType(_build_catalogue())


def get_built_in_preset_ids() -> List[str]:
    """Ids of every built-in preset, in catalogue order."""
    return list(BUILT_IN_PRESETS)


def is_built_in_preset(preset_id: str) -> bool:
    """Whether ``preset_id`` names a read-only built-in preset."""
    return preset_id in BUILT_IN_PRESETS


def get_built_in_preset(preset_id: str) -> FormulaTemplate:
    """Return a copy of a built-in preset.

    Raises:
        PresetNotFoundException: If no built-in preset has that id
    """
    try:
        return copy.deepcopy(BUILT_IN_PRESETS[preset_id])
    except KeyError:
        raise PresetNotFoundException(f"Unknown preset: {preset_id}") from None


def get_built_in_presets(category: Optional[str] = None):
    """Copies of the built-in presets grouped by preset category.

    Args:
        category: Only return this category's list

    Returns:
        Dict of category -> presets, or the list for ``category`` when given
    """
    grouped: Dict[str, List[FormulaTemplate]] = {name: [] for name in PRESET_CATEGORIES}
    for preset in BUILT_IN_PRESETS.values():
        grouped[preset.preset_category].append(copy.deepcopy(preset))

    if category is not None:
        return grouped.get(category.upper(), [])
    return grouped

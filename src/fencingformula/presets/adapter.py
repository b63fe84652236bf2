"""Fitting formula templates to a concrete tournament."""

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
from dataclasses import replace
from typing import List, Optional, Tuple

from fencingformula.constants import (
    BRACKET_SIZE_LADDER,
    DEFAULT_CATEGORY,
    DEFAULT_PRESET_ATHLETES,
    SMALL_FIELD_ALLOWED_SIZES,
    SMALL_FIELD_PREFERRED_SIZE,
    SMALL_FIELD_THRESHOLD,
)
from fencingformula.models.enums import Weapon
from fencingformula.models.phase import EliminationPhaseConfig, PoulePhaseConfig
from fencingformula.models.tournament import (
    FormulaTemplate,
    TemplateAdaptation,
    TournamentConfig,
)
from fencingformula.presets.builtin import get_built_in_preset
from fencingformula.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def optimal_bracket_size(athlete_count: int, preferred_size: int) -> int:
    """Smallest ladder size holding every athlete, else ``preferred_size``."""
    for size in BRACKET_SIZE_LADDER:
        if size >= athlete_count:
            return size
    return preferred_size


class TemplateAdapter:
    """Rescales formula templates to an athlete count, weapon and category.

    The input template is never modified.
    """

    def adapt(
        self,
        template: FormulaTemplate,
        total_athletes: int,
        weapon: Optional[Weapon] = None,
        category: Optional[str] = None,
    ) -> FormulaTemplate:
        """Return an adapted copy of ``template``."""
        adapted, _ = self.adapt_with_report(template, total_athletes, weapon, category)
        return adapted

    def adapt_with_report(
        self,
        template: FormulaTemplate,
        total_athletes: int,
        weapon: Optional[Weapon] = None,
        category: Optional[str] = None,
    ) -> Tuple[FormulaTemplate, List[TemplateAdaptation]]:
        """Adapt ``template`` and list every change made to its phases.

        - Every table is resized to the smallest of 8, 16, ..., 256 that
          holds ``total_athletes``; beyond 256 the original size is kept.
        - Fields under 20 athletes get poules of preferably 5 (4 to 6).

        Args:
            template: Template to adapt
            total_athletes: Expected field size
            weapon: Weapon override
            category: Category override

        Returns:
            Tuple of (adapted template, adaptations applied)
        """
        adapted = copy.deepcopy(template)
        adaptations: List[TemplateAdaptation] = []

        if weapon is not None:
            adapted.weapon = weapon
        if category:
            adapted.category = category

        for index, phase in enumerate(adapted.phases):
            if isinstance(phase, EliminationPhaseConfig):
                for bracket in phase.bracket_configs:
                    size = optimal_bracket_size(total_athletes, bracket.size)
                    if size != bracket.size:
                        adaptations.append(
                            TemplateAdaptation(
                                phase_index=index,
                                field="bracket_configs.size",
                                original_value=bracket.size,
                                adapted_value=size,
                                reason=f"Table sized for {total_athletes} athletes",
                            )
                        )
                        bracket.size = size

            if (
                isinstance(phase, PoulePhaseConfig)
                and phase.poule_sizes is not None
                and total_athletes < SMALL_FIELD_THRESHOLD
            ):
                original = phase.poule_sizes
                phase.poule_sizes = replace(
                    original,
                    preferred_size=SMALL_FIELD_PREFERRED_SIZE,
                    allowed_sizes=list(SMALL_FIELD_ALLOWED_SIZES),
                    min_size=None,
                    max_size=None,
                )
                adaptations.append(
                    TemplateAdaptation(
                        phase_index=index,
                        field="poule_sizes",
                        original_value=original.to_dict(),
                        adapted_value=phase.poule_sizes.to_dict(),
                        reason=f"Small field of {total_athletes} athletes",
                    )
                )

        logger.debug(
            "Adapted template %s for %d athletes: %d changes",
            template.id,
            total_athletes,
            len(adaptations),
        )
        return adapted, adaptations


def suggest_presets(
    total_athletes: int, is_club_tournament: bool = False
) -> List[FormulaTemplate]:
    """Built-in presets suited to a field size, best candidate first."""
    if total_athletes < 32:
        ids = ["club-tournament", "direct-elimination-only"]
        if total_athletes <= 16:
            ids.append("round-robin")
    elif total_athletes <= 64:
        ids = ["classic-no-3rd"]
        if not is_club_tournament:
            ids.append("fie-world-cup")
        ids.append("club-tournament")
    else:
        ids = [
            "multi-round-poules",
            "national-championship",
            "fie-world-cup",
            "classic-no-3rd",
        ]
    return [get_built_in_preset(preset_id) for preset_id in ids]


def create_tournament_from_preset(
    preset: FormulaTemplate, **overrides
) -> TournamentConfig:
    """Build a tournament configuration from a preset.

    Phases are copied and given ids ``phase-<sequence order>``. Keyword
    arguments override any ``TournamentConfig`` field.

    Args:
        preset: Template to start from
        **overrides: TournamentConfig fields, e.g. ``total_athletes=40``

    Returns:
        A new TournamentConfig
    """
    phases = copy.deepcopy(preset.phases)
    for phase in phases:
        phase.id = f"phase-{phase.sequence_order}"

    config = TournamentConfig(
        id=generate_id("tournament"),
        name=preset.name,
        weapon=preset.weapon or Weapon.EPEE,
        category=preset.category or DEFAULT_CATEGORY,
        total_athletes=DEFAULT_PRESET_ATHLETES,
        phases=phases,
    )
    return replace(config, **overrides)

"""Snake-seeded poule assignment under separation rules.

Athletes arrive sorted strongest first. A cursor walks the poules in a
snake pattern (1, 2, ..., n, n, ..., 2, 1, 1, 2, ...) so every seed band is
spread across all poules. When the cursor's poule rejects an athlete the
poules are scanned in order for the first one that accepts.

If no poule accepts:

- strict separation aborts the whole assignment with a
  ``SeparationException``
- relaxed separation forces the athlete into the cursor's poule (or the
  first poule with room) and records every rule that placement breaks
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
from typing import List, Optional

from fencingformula.exceptions import PouleCapacityException, SeparationException
from fencingformula.models.athlete import AthleteData
from fencingformula.models.phase import SeparationRules
from fencingformula.models.poule import GeneratedPoule, SeparationViolation
from fencingformula.options import EngineOptions
from fencingformula.poules.separation import SeparationValidator
from fencingformula.type_hints import PouleSizes
from fencingformula.utils import setup_logger

logger = setup_logger(__name__)


class SnakeCursor:
    """Boustrophedon pointer over ``count`` poules.

    The position moves by ``direction`` after each placement. When the next
    step would leave the range the direction flips and the position stays,
    so each end poule is visited twice in a row.
    """

    def __init__(self, count: int):
        if count < 0:
            raise ValueError(f"Poule count cannot be negative: {count}")
        self.count = count
        self.position = 0
        self.direction = 1

    def advance(self) -> int:
        """Move to the next poule and return the new position."""
        if self.count <= 1:
            return self.position

        next_position = self.position + self.direction
        if 0 <= next_position < self.count:
            self.position = next_position
        else:
            self.direction = -self.direction
        return self.position

    def __repr__(self) -> str:
        return (
            f"SnakeCursor(position={self.position}, direction={self.direction:+d}, "
            f"count={self.count})"
        )


@dataclass
class AssignmentOutcome:
    """Poules filled by the assignment engine."""

    poules: List[GeneratedPoule] = field(default_factory=list)
    violations: List[SeparationViolation] = field(default_factory=list)
    forced_placements: int = 0


class PouleAssignmentEngine:
    """Distributes sorted athletes into poules of the given sizes."""

    def __init__(self, validator: Optional[SeparationValidator] = None):
        self.validator = validator or SeparationValidator()

    def assign(
        self,
        sorted_athletes: List[AthleteData],
        poule_sizes: PouleSizes,
        rules: Optional[SeparationRules] = None,
        options: Optional[EngineOptions] = None,
    ) -> AssignmentOutcome:
        """Place every athlete into a poule.

        Args:
            sorted_athletes: Athletes strongest first
            poule_sizes: Target size of each poule
            rules: Separation rules; None enforces club and country, max 1 each
            options: Engine options; the rules' own strictness flag wins when set

        Returns:
            The filled poules and any separation violations

        Raises:
            PouleCapacityException: If the sizes cannot seat every athlete
            SeparationException: Under strict separation, if an athlete fits
                no poule
        """
        rules = rules or SeparationRules()
        options = options or EngineOptions()
        strict = (
            rules.strict_separation
            if rules.strict_separation is not None
            else options.strict_separation
        )

        capacity = sum(poule_sizes)
        if capacity < len(sorted_athletes):
            raise PouleCapacityException(capacity, len(sorted_athletes))

        poules = [
            GeneratedPoule(id=f"poule-{index + 1}", number=index + 1, size=size)
            for index, size in enumerate(poule_sizes)
        ]
        outcome = AssignmentOutcome(poules=poules)
        cursor = SnakeCursor(len(poules))

        for seed_index, athlete in enumerate(sorted_athletes):
            target = self._find_poule(athlete, poules, cursor.position, rules)

            if target is None:
                if strict:
                    raise SeparationException(athlete.id, rules.describe(), len(poules))
                target = self._forced_poule(poules, cursor.position)
                broken = self.validator.broken_rules(athlete, poules[target], rules)
                if broken:
                    outcome.violations.extend(broken)
                    outcome.forced_placements += 1
                    logger.warning(
                        "Forced athlete %s into poule %d (%s)",
                        athlete.id,
                        poules[target].number,
                        "; ".join(violation.violated_rule for violation in broken),
                    )

            poules[target].add(
                athlete.id,
                seed_number=seed_index + 1,
                club=athlete.club_name,
                country=athlete.nationality,
            )
            logger.debug(
                "Seed %d (%s) -> poule %d", seed_index + 1, athlete.id, target + 1
            )
            cursor.advance()

        return outcome

    def _find_poule(
        self,
        athlete: AthleteData,
        poules: List[GeneratedPoule],
        preferred: int,
        rules: SeparationRules,
    ) -> Optional[int]:
        """Index of the preferred poule if it accepts, else the first that does."""
        if self.validator.can_place(athlete, poules[preferred], rules):
            return preferred

        for index, poule in enumerate(poules):
            if self.validator.can_place(athlete, poule, rules):
                return index
        return None

    @staticmethod
    def _forced_poule(poules: List[GeneratedPoule], preferred: int) -> int:
        if not poules[preferred].is_full:
            return preferred
        for index, poule in enumerate(poules):
            if not poule.is_full:
                return index
        # Unreachable once capacity has been checked
        raise PouleCapacityException(
            sum(poule.size for poule in poules),
            sum(len(poule.athletes) for poule in poules) + 1,
        )

"""Direct elimination table generation.

Seeds are laid out in the standard tableau order: seed 1 meets seed N,
seeds 1 and 2 can only meet in the final, seeds 1 to 4 only in the
semi-finals, and so on. With fewer athletes than slots the empty slots
face the top seeds, who go straight through to the second round.
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

import random
from typing import List, Optional

from fencingformula.exceptions import InvalidConfigurationException
from fencingformula.models.bracket import (
    BracketGenerationResult,
    BracketMatch,
    BracketRound,
    ByeAssignment,
    GeneratedBracket,
    QualificationSource,
    SeedingResult,
)
from fencingformula.models.enums import SeedingMethod
from fencingformula.models.phase import BracketConfig
from fencingformula.options import EngineOptions
from fencingformula.type_hints import AthleteIds
from fencingformula.utils import setup_logger
from fencingformula.utils.validation import validate_bracket_size

logger = setup_logger(__name__)


def standard_seed_order(size: int) -> List[int]:
    """Seeds in slot order for a table of ``size`` (a power of two).

    >>> standard_seed_order(8)
    [1, 8, 4, 5, 2, 7, 3, 6]
    """
    order = [1]
    while len(order) < size:
        mirror = len(order) * 2 + 1
        order = [slot for seed in order for slot in (seed, mirror - seed)]
    return order


def round_name(size: int, round_number: int) -> str:
    """Display name of a round, e.g. "Table of 16" or "Final"."""
    remaining = size >> (round_number - 1)
    if remaining <= 2:
        return "Final"
    return f"Table of {remaining}"


class BracketGenerator:
    """Lays out seeded direct elimination tables."""

    def generate(
        self,
        bracket_config: BracketConfig,
        ranked_athlete_ids: AthleteIds,
        phase_id: str = "",
        options: Optional[EngineOptions] = None,
        source_phase_id: Optional[str] = None,
        index: int = 1,
    ) -> BracketGenerationResult:
        """Generate one table from a ranked athlete list.

        Args:
            bracket_config: Table type, size and seeding method
            ranked_athlete_ids: Athletes best first; only the first ``size``
                (or the ``classification_positions`` slice) enter
            phase_id: Phase the table belongs to
            options: Engine options, used for the RANDOM seeding seed
            source_phase_id: Phase the ranking comes from, recorded on seeds
            index: Position of the table inside its phase, used in ids

        Returns:
            BracketGenerationResult holding the table, its seeding and byes

        Raises:
            InvalidConfigurationException: If the size is not a power of two
        """
        options = options or EngineOptions()
        size_check = validate_bracket_size(bracket_config.size)
        if not size_check:
            raise InvalidConfigurationException(size_check.error_message)
        size = size_check.sanitized_value

        entrants = self._entrants(bracket_config, ranked_athlete_ids)[:size]
        if bracket_config.seeding_method == SeedingMethod.RANDOM:
            entrants = list(entrants)
            random.Random(options.random_seed).shuffle(entrants)

        # Seed number per slot, None for an empty slot
        if bracket_config.seeding_method == SeedingMethod.MANUAL:
            slot_seeds = [
                slot + 1 if slot < len(entrants) else None for slot in range(size)
            ]
        else:
            slot_seeds = [
                seed if seed <= len(entrants) else None
                for seed in standard_seed_order(size)
            ]

        bracket_type = bracket_config.bracket_type.value.lower()
        bracket_id = f"{phase_id or 'bracket'}-{bracket_type}-{index}"
        result = BracketGenerationResult()
        for slot, seed in enumerate(slot_seeds):
            if seed is None:
                continue
            result.seeding.append(
                SeedingResult(
                    athlete_id=entrants[seed - 1],
                    seed=seed,
                    position=slot + 1,
                    source=(
                        QualificationSource(phase_id=source_phase_id, rank=seed)
                        if source_phase_id
                        else None
                    ),
                )
            )

        rounds = self._build_rounds(bracket_id, size, slot_seeds, entrants, result)
        if bracket_config.configuration.get("has_third_place") and size >= 4:
            rounds.append(
                BracketRound(
                    number=len(rounds) + 1,
                    name="Third Place",
                    matches=[
                        BracketMatch(
                            id=f"{bracket_id}-third-place",
                            round_number=len(rounds) + 1,
                            match_number=1,
                        )
                    ],
                )
            )

        result.brackets.append(
            GeneratedBracket(
                id=bracket_id,
                phase_id=phase_id,
                bracket_type=bracket_config.bracket_type,
                size=size,
                seeding_method=bracket_config.seeding_method,
                rounds=rounds,
                configuration=dict(bracket_config.configuration),
            )
        )
        logger.info(
            "Generated %s table of %d with %d athletes and %d byes",
            bracket_config.bracket_type.value,
            size,
            len(entrants),
            len(result.bye_assignments),
        )
        return result

    @staticmethod
    def _entrants(bracket_config: BracketConfig, ranked: AthleteIds) -> AthleteIds:
        positions = bracket_config.configuration.get("classification_positions")
        if positions:
            first, last = min(positions), max(positions)
            return list(ranked[first - 1 : last])
        return list(ranked)

    def _build_rounds(
        self,
        bracket_id: str,
        size: int,
        slot_seeds: List[Optional[int]],
        entrants: AthleteIds,
        result: BracketGenerationResult,
    ) -> List[BracketRound]:
        rounds = []
        matches_in_round = size // 2
        round_number = 1
        while matches_in_round >= 1:
            rounds.append(
                BracketRound(
                    number=round_number,
                    name=round_name(size, round_number),
                    matches=[
                        BracketMatch(
                            id=f"{bracket_id}-r{round_number}-m{match + 1}",
                            round_number=round_number,
                            match_number=match + 1,
                        )
                        for match in range(matches_in_round)
                    ],
                )
            )
            matches_in_round //= 2
            round_number += 1

        first_round = rounds[0]
        for match in first_round.matches:
            seed_a = slot_seeds[2 * (match.match_number - 1)]
            seed_b = slot_seeds[2 * (match.match_number - 1) + 1]
            match.seed_a, match.seed_b = seed_a, seed_b
            match.athlete_a = entrants[seed_a - 1] if seed_a else None
            match.athlete_b = entrants[seed_b - 1] if seed_b else None

            if match.athlete_a and match.athlete_b:
                continue

            match.is_bye = True
            match.winner = match.athlete_a or match.athlete_b
            if match.winner:
                result.bye_assignments.append(
                    ByeAssignment(athlete_id=match.winner, seed=seed_a or seed_b)
                )
                if len(rounds) > 1:
                    self._advance(rounds[1], match, seed_a or seed_b)

        return rounds

    @staticmethod
    def _advance(next_round: BracketRound, match: BracketMatch, seed: int) -> None:
        """Carry a bye winner into its second-round match."""
        target = next_round.matches[(match.match_number - 1) // 2]
        if match.match_number % 2:
            target.athlete_a, target.seed_a = match.winner, seed
        else:
            target.athlete_b, target.seed_b = match.winner, seed

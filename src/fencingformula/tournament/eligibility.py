"""Roster checks against a tournament configuration."""

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

from datetime import date
from typing import List, Optional

from fencingformula.constants import AGE_CATEGORIES
from fencingformula.models.athlete import AthleteData
from fencingformula.models.enums import ErrorType, WarningType
from fencingformula.models.tournament import TournamentConfig
from fencingformula.models.validation import ValidationResult


def age_category_limits(category: Optional[str]):
    """(min_age, max_age) for a category name, or None if it has no age limits."""
    if not category:
        return None
    return AGE_CATEGORIES.get(category.strip().upper())


def is_age_eligible(
    athlete: AthleteData, category: Optional[str], reference_date: date
) -> Optional[bool]:
    """Whether the athlete's age on ``reference_date`` fits the category.

    Returns None when it cannot be decided (no birth date, or a category
    without age limits).
    """
    limits = age_category_limits(category)
    age = athlete.age_on(reference_date)
    if limits is None or age is None:
        return None

    min_age, max_age = limits
    if min_age is not None and age < min_age:
        return False
    if max_age is not None and age > max_age:
        return False
    return True


def validate_roster(
    config: TournamentConfig,
    athletes: List[AthleteData],
    reference_date: Optional[date] = None,
) -> ValidationResult:
    """Check a roster before poules are generated.

    Args:
        config: The tournament the athletes registered for
        athletes: Registered athletes
        reference_date: Date ages are computed on; defaults to today

    Returns:
        ValidationResult: duplicate ids are errors; count, weapon and age
        category mismatches are warnings
    """
    reference_date = reference_date or date.today()
    result = ValidationResult()

    seen = set()
    for athlete in athletes:
        if athlete.id in seen:
            result.add_error(
                f"Athlete {athlete.id} is registered more than once",
                error_type=ErrorType.DATA,
                field="athletes",
            )
        seen.add(athlete.id)

    if config.total_athletes and len(athletes) != config.total_athletes:
        result.add_warning(
            f"Roster has {len(athletes)} athletes, tournament expects "
            f"{config.total_athletes}",
            warning_type=WarningType.BALANCE,
            suggestion="Update the tournament's athlete count or re-adapt the formula",
        )

    for athlete in athletes:
        if athlete.weapon and config.weapon and athlete.weapon != config.weapon:
            result.add_warning(
                f"Athlete {athlete.id} is registered for {athlete.weapon.value}, "
                f"tournament is {config.weapon.value}",
                warning_type=WarningType.ELIGIBILITY,
            )

        if is_age_eligible(athlete, config.category, reference_date) is False:
            result.add_warning(
                f"Athlete {athlete.id} (age {athlete.age_on(reference_date)}) is "
                f"outside the {config.category} category",
                warning_type=WarningType.ELIGIBILITY,
            )

    return result

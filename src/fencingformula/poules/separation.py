"""Club and country separation checks."""

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

from typing import List

from fencingformula.models.athlete import AthleteData
from fencingformula.models.phase import SeparationRules
from fencingformula.models.poule import GeneratedPoule, SeparationViolation


class SeparationValidator:
    """Decides whether an athlete may join a poule.

    Stateless; every method is a pure function of its arguments.
    """

    def can_place(
        self, athlete: AthleteData, poule: GeneratedPoule, rules: SeparationRules
    ) -> bool:
        """Check whether ``athlete`` can join ``poule`` under ``rules``.

        A full poule always rejects. Otherwise the athlete is rejected when
        an enforced club or country limit is already reached.
        """
        if poule.is_full:
            return False
        return not self.broken_rules(athlete, poule, rules)

    def broken_rules(
        self, athlete: AthleteData, poule: GeneratedPoule, rules: SeparationRules
    ) -> List[SeparationViolation]:
        """List the rules placing ``athlete`` into ``poule`` would break.

        Poule capacity is not considered here.
        """
        violations = []

        club_limit = rules.club_limit
        club = athlete.club_name
        if club_limit is not None and club and poule.count_club(club) >= club_limit:
            violations.append(
                SeparationViolation(
                    poule_number=poule.number,
                    athlete_id=athlete.id,
                    kind="club",
                    violated_rule=f"max {club_limit} per club ({club})",
                    conflicting_athlete_ids=[
                        member.athlete_id
                        for member in poule.athletes
                        if member.club == club
                    ],
                )
            )

        country_limit = rules.country_limit
        country = athlete.nationality
        if (
            country_limit is not None
            and country
            and poule.count_country(country) >= country_limit
        ):
            violations.append(
                SeparationViolation(
                    poule_number=poule.number,
                    athlete_id=athlete.id,
                    kind="country",
                    violated_rule=f"max {country_limit} per country ({country})",
                    conflicting_athlete_ids=[
                        member.athlete_id
                        for member in poule.athletes
                        if member.country == country
                    ],
                )
            )

        return violations

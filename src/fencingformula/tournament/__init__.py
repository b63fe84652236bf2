"""Tournament progression: qualification, tables and the engine facade."""


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

from fencingformula.tournament.bracket import BracketGenerator, standard_seed_order
from fencingformula.tournament.eligibility import is_age_eligible, validate_roster
from fencingformula.tournament.engine import FormulaEngine, sort_athletes
from fencingformula.tournament.qualification import (
    QualificationCalculator,
    rank_results,
)

__all__ = [
    "BracketGenerator",
    "FormulaEngine",
    "QualificationCalculator",
    "is_age_eligible",
    "rank_results",
    "sort_athletes",
    "standard_seed_order",
    "validate_roster",
]

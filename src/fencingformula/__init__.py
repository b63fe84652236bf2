"""Fencing Formula: tournament structure engine for fencing competitions.

Turns a roster of athletes into poules and direct elimination tables,
computes qualification between phases and manages reusable formula
presets.
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

from fencingformula.exceptions import (
    FencingFormulaException,
    PouleCapacityException,
    SeparationException,
)
from fencingformula.options import EngineOptions
from fencingformula.tournament.engine import FormulaEngine

__version__ = "0.1.0"

__all__ = [
    "EngineOptions",
    "FencingFormulaException",
    "FormulaEngine",
    "PouleCapacityException",
    "SeparationException",
    "__version__",
]

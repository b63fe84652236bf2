"""Enumerations shared across the formula engine."""

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

from enum import Enum
from typing import Optional, Type, TypeVar, Union

from fencingformula.exceptions import InvalidConfigurationException

E = TypeVar("E", bound=Enum)


class Weapon(Enum):
    """Fencing weapons."""

    EPEE = "EPEE"
    FOIL = "FOIL"
    SABRE = "SABRE"


class PhaseType(Enum):
    """Kinds of competition phase."""

    POULE = "POULE"
    DIRECT_ELIMINATION = "DIRECT_ELIMINATION"
    CLASSIFICATION = "CLASSIFICATION"
    REPECHAGE = "REPECHAGE"


class PhaseStatus(Enum):
    """Progress of a phase inside a running tournament."""

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class BracketType(Enum):
    """Kinds of direct elimination table."""

    MAIN = "MAIN"
    REPECHAGE = "REPECHAGE"
    CLASSIFICATION = "CLASSIFICATION"
    CONSOLATION = "CONSOLATION"


class SeedingMethod(Enum):
    """How athletes are placed into a table."""

    RANKING = "RANKING"
    SNAKE = "SNAKE"
    MANUAL = "MANUAL"
    RANDOM = "RANDOM"


class PouleSizeMethod(Enum):
    """Poule sizing policies."""

    FIXED = "fixed"
    VARIABLE = "variable"
    OPTIMAL = "optimal"
    UNIFORM = "uniform"  # Preset shorthand: one size repeated
    SINGLE = "single"  # Preset shorthand: everyone in one poule


class QualificationMethod(Enum):
    """How the qualified set of a phase is sized."""

    QUOTA = "quota"
    PERCENTAGE = "percentage"
    CUSTOM = "custom"


class ErrorType(Enum):
    """Category of a validation error."""

    CONFIGURATION = "configuration"
    DATA = "data"
    CONSTRAINT = "constraint"


class WarningType(Enum):
    """Category of a validation warning."""

    OPTIMIZATION = "optimization"
    SEPARATION = "separation"
    BALANCE = "balance"
    ELIGIBILITY = "eligibility"


def coerce_enum(enum_cls: Type[E], value: Union[E, str, None]) -> Optional[E]:
    """Convert a raw value into a member of ``enum_cls``.

    Accepts a member, its value, or its value in another letter case.

    Raises:
        InvalidConfigurationException: If the value matches no member
    """
    if value is None or isinstance(value, enum_cls):
        return value

    for candidate in (value, str(value).upper(), str(value).lower()):
        try:
            return enum_cls(candidate)
        except ValueError:
            continue

    raise InvalidConfigurationException(
        f"Unknown {enum_cls.__name__} value: {value!r}"
    )

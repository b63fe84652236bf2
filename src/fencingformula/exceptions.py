"""Exceptions for use in Fencing Formula"""

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

from typing import List, Optional


# ========== Base Application Exception ==========


class FencingFormulaException(Exception):
    """Base exception for all Fencing Formula errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(FencingFormulaException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass


# ========== Placement Exceptions ==========


class PlacementException(FencingFormulaException):
    """Base exception for poule placement errors."""

    pass


class SeparationException(PlacementException):
    """Raised when an athlete cannot be placed without breaking separation rules.

    Only raised under strict separation. The caller can retry with relaxed
    separation or change the configuration (bigger poules, looser limits,
    more poules).

    Attributes:
        athlete_id: The athlete that could not be placed
        rule: Description of the active separation rule
        poule_count: Number of poules that were tried
    """

    def __init__(self, athlete_id: str, rule: str, poule_count: int = 0):
        self.athlete_id = athlete_id
        self.rule = rule
        self.poule_count = poule_count
        super().__init__(
            f"Cannot assign athlete {athlete_id} to any of {poule_count} poules "
            f"while maintaining separation rules ({rule})"
        )


class PouleCapacityException(PlacementException):
    """Raised when the poule sizes cannot hold every athlete."""

    def __init__(self, capacity: int, athlete_count: int):
        self.capacity = capacity
        self.athlete_count = athlete_count
        super().__init__(
            f"Poule sizes hold {capacity} athletes but {athlete_count} must be placed"
        )


# ========== Tournament Exceptions ==========


class TournamentException(FencingFormulaException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class PhaseTypeException(TournamentException):
    """Raised when an operation is called with a phase of the wrong type."""

    pass


# ========== Preset Exceptions ==========


class PresetException(FencingFormulaException):
    """Base exception for formula preset errors."""

    pass


class PresetNotFoundException(PresetException):
    """Raised when a requested preset does not exist."""

    pass


class InvalidPresetException(PresetException):
    """Raised when an imported or copied preset fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: {', '.join(self.errors)}"
        super().__init__(message)

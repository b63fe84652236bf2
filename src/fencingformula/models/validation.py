"""Structured validation errors and warnings.

Configuration problems are reported as data, never raised. A
``ValidationResult`` is truthy when the configuration is valid.
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
from typing import Any, Dict, List, Optional

from fencingformula.models.enums import ErrorType, WarningType


@dataclass(frozen=True)
class ValidationError:
    """A problem that makes a configuration unusable."""

    type: ErrorType
    message: str
    field: Optional[str] = None
    phase_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "field": self.field,
            "phase_index": self.phase_index,
        }


@dataclass(frozen=True)
class ValidationWarning:
    """A problem worth showing the operator; computation still proceeds."""

    type: WarningType
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationResult:
    """Outcome of validating a configuration or roster."""

    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]

    @property
    def warning_messages(self) -> List[str]:
        return [warning.message for warning in self.warnings]

    def add_error(
        self,
        message: str,
        error_type: ErrorType = ErrorType.CONFIGURATION,
        field: Optional[str] = None,
        phase_index: Optional[int] = None,
    ) -> None:
        self.errors.append(
            ValidationError(
                type=error_type, message=message, field=field, phase_index=phase_index
            )
        )

    def add_warning(
        self,
        message: str,
        warning_type: WarningType = WarningType.OPTIMIZATION,
        suggestion: Optional[str] = None,
    ) -> None:
        self.warnings.append(
            ValidationWarning(type=warning_type, message=message, suggestion=suggestion)
        )

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {len(self.warnings)} warnings)"
        return f"ValidationResult(INVALID, {self.error_messages!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }

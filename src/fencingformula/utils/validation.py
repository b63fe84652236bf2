"""Field validation utilities for Fencing Formula.

This module provides reusable validation functions with consistent error handling.
The formula validator composes them into configuration checks.
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

from typing import Iterable, List, Optional


class FieldCheck:
    """Result of a single field check.

    Attributes:
        is_valid: Whether the check passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[object] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"FieldCheck(VALID, {self.sanitized_value!r})"
        return f"FieldCheck(INVALID, {self.error_message!r})"


# ========== Generic Validation ==========


def validate_non_empty(value: Optional[str], field_name: str = "Field") -> FieldCheck:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        FieldCheck with validation status
    """
    if not value or not str(value).strip():
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return FieldCheck(is_valid=True, sanitized_value=str(value).strip())


def validate_positive_integer(
    value: Optional[int], field_name: str = "Value"
) -> FieldCheck:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        FieldCheck with validation status
    """
    if value is None:
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )

    if int_value <= 0:
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return FieldCheck(is_valid=True, sanitized_value=int_value)


def validate_percentage(
    value: Optional[float], field_name: str = "Percentage"
) -> FieldCheck:
    """Validate a qualification percentage in the range (0, 100].

    Args:
        value: Percentage to validate
        field_name: Name of the field for error messages

    Returns:
        FieldCheck with validation status
    """
    if value is None:
        return FieldCheck(is_valid=False, error_message=f"{field_name} is required")

    try:
        float_value = float(value)
    except (ValueError, TypeError):
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be a number: {value}",
        )

    if float_value <= 0 or float_value > 100:
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be between 0 and 100: {float_value}",
        )
    return FieldCheck(is_valid=True, sanitized_value=float_value)


def validate_bracket_size(size: Optional[int]) -> FieldCheck:
    """Validate a direct elimination table size (a power of two, at least 2)."""
    check = validate_positive_integer(size, "Bracket size")
    if not check:
        return check

    int_size = check.sanitized_value
    if int_size < 2 or int_size & (int_size - 1):
        return FieldCheck(
            is_valid=False,
            error_message=f"Bracket size must be a power of two: {int_size}",
        )
    return FieldCheck(is_valid=True, sanitized_value=int_size)


def find_sequence_gap(orders: Iterable[int]) -> Optional[int]:
    """Find the first position where sequence orders stop being 1..N.

    Args:
        orders: Sequence order of every phase, in any order

    Returns:
        The 1-based position of the first mismatch, or None if the orders
        form a contiguous run starting at 1
    """
    sorted_orders: List[int] = sorted(orders)
    for index, order in enumerate(sorted_orders):
        if order != index + 1:
            return index + 1
    return None


def validate_poule_size(value: object, field_name: str = "Poule size") -> FieldCheck:
    """Validate a poule size taken as-is from configuration data.

    Unlike ``validate_positive_integer`` nothing is converted: a size must
    already be an ``int`` because the sizing code does arithmetic on it.
    """
    if value is None:
        return FieldCheck(is_valid=False, error_message=f"{field_name} is required")

    if isinstance(value, bool) or not isinstance(value, int):
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be a whole number: {value!r}",
        )

    if value <= 0:
        return FieldCheck(
            is_valid=False,
            error_message=f"{field_name} must be positive: {value}",
        )
    return FieldCheck(is_valid=True, sanitized_value=value)

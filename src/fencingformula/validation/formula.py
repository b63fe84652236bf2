"""Tournament formula validation.

``FormulaValidator.validate`` checks a tournament configuration for
internal consistency before the engine uses it. Every check runs
independently and every problem is returned as data; nothing is raised.
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

from typing import List, Optional

from fencingformula.constants import MIN_TOURNAMENT_ATHLETES, RANKABLE_TIEBREAKS
from fencingformula.models.enums import (
    ErrorType,
    PouleSizeMethod,
    QualificationMethod,
    WarningType,
)
from fencingformula.models.phase import (
    EliminationPhaseConfig,
    PhaseConfig,
    PoulePhaseConfig,
    PouleSizeConfig,
    QualificationRules,
    SeparationRules,
)
from fencingformula.models.tournament import FormulaTemplate, TournamentConfig
from fencingformula.models.validation import ValidationResult
from fencingformula.utils.validation import (
    FieldCheck,
    find_sequence_gap,
    validate_bracket_size,
    validate_non_empty,
    validate_percentage,
    validate_poule_size,
    validate_positive_integer,
)


class FormulaValidator:
    """Validates tournament configurations and formula templates."""

    def validate(self, config: TournamentConfig) -> ValidationResult:
        """Validate a tournament configuration.

        Args:
            config: Tournament to validate

        Returns:
            ValidationResult with every error and warning found
        """
        result = ValidationResult()

        if not validate_non_empty(config.id):
            result.add_error("Tournament ID is required", field="id")
        if not validate_non_empty(config.name):
            result.add_error("Tournament name is required", field="name")

        total = config.total_athletes
        if not isinstance(total, int) or total < MIN_TOURNAMENT_ATHLETES:
            result.add_error(
                f"Tournament needs at least {MIN_TOURNAMENT_ATHLETES} athletes",
                error_type=ErrorType.CONSTRAINT,
                field="total_athletes",
            )
            total = None

        self._check_phases(config.phases, result, total)
        return result

    def validate_template(self, template: FormulaTemplate) -> ValidationResult:
        """Validate the shape of a formula template.

        Templates have no athlete count, so only the checks that do not
        depend on one are applied.
        """
        result = ValidationResult()
        if not validate_non_empty(template.name):
            result.add_error("Template name is required", field="name")
        self._check_phases(template.phases, result, None)
        return result

    # ========== Phases ==========

    def _check_phases(
        self,
        phases: List[PhaseConfig],
        result: ValidationResult,
        total: Optional[int],
    ) -> None:
        if not phases:
            result.add_error("At least one phase is required", field="phases")
            return

        orders = {}
        for index, phase in enumerate(phases):
            if not validate_non_empty(phase.name):
                result.add_error(
                    f"Phase {index + 1} name is required",
                    field="name",
                    phase_index=index,
                )
            if phase.phase_type is None:
                result.add_error(
                    f"Phase {index + 1} type is required",
                    field="phase_type",
                    phase_index=index,
                )

            order_check = validate_positive_integer(
                phase.sequence_order, f"Phase {index + 1} sequence order"
            )
            if order_check:
                orders[index] = order_check.sanitized_value
            else:
                result.add_error(
                    order_check.error_message,
                    field="sequence_order",
                    phase_index=index,
                )

        gap = find_sequence_gap(list(orders.values()))
        if gap is not None:
            result.add_error(
                "Phase sequence order must be contiguous starting at 1 "
                f"(first mismatch at position {gap})",
                field="sequence_order",
            )

        last_order = max(orders.values()) if orders else 0
        for index, phase in enumerate(phases):
            if isinstance(phase, PoulePhaseConfig):
                self._check_poule_sizes(phase.poule_sizes, result, total, index)
                self._check_separation(phase.separation_rules, result, index)
                is_last = orders.get(index, 0) >= last_order
                if phase.qualification is None and not is_last:
                    result.add_warning(
                        f"Poule phase {phase.name!r} has no qualification rules",
                        suggestion="Add a quota or percentage so athletes can advance",
                    )
            elif isinstance(phase, EliminationPhaseConfig):
                self._check_brackets(phase, result, index)

            if phase.qualification is not None:
                self._check_qualification(phase.qualification, result, total, index)

    def _check_poule_sizes(
        self,
        policy: Optional[PouleSizeConfig],
        result: ValidationResult,
        total: Optional[int],
        index: int,
    ) -> None:
        if policy is None:
            return

        if policy.method == PouleSizeMethod.FIXED:
            self._add_size_error(
                validate_poule_size(policy.fixed_size, "Fixed poule size"),
                result,
                index,
            )

        if policy.method == PouleSizeMethod.UNIFORM:
            # Same precedence as the size calculator
            size = policy.fixed_size
            if size is None and policy.sizes:
                size = policy.sizes[0]
            if size is None:
                size = policy.preferred_size
            self._add_size_error(
                validate_poule_size(size, "Uniform poule size"), result, index
            )

        if policy.method == PouleSizeMethod.VARIABLE:
            if not policy.sizes:
                result.add_error(
                    "Variable poule sizing needs a list of sizes",
                    field="poule_sizes",
                    phase_index=index,
                )
                return

            checks = [
                validate_poule_size(size, f"Poule size {position + 1}")
                for position, size in enumerate(policy.sizes)
            ]
            for check in checks:
                self._add_size_error(check, result, index)

            size_sum = sum(check.sanitized_value for check in checks if check)
            if all(checks) and total is not None and size_sum != total:
                result.add_warning(
                    f"Poule sizes of phase {index + 1} sum to {size_sum}, "
                    f"tournament has {total} athletes",
                    warning_type=WarningType.BALANCE,
                    suggestion="Adjust the poule sizes or use the optimal method",
                )

        bounds = []
        for value, label in (
            (policy.min_size, "Minimum poule size"),
            (policy.max_size, "Maximum poule size"),
        ):
            if value is None:
                continue
            check = validate_poule_size(value, label)
            self._add_size_error(check, result, index)
            bounds.append(check.sanitized_value if check else None)

        if len(bounds) == 2 and None not in bounds and bounds[0] > bounds[1]:
            result.add_error(
                f"Minimum poule size {policy.min_size} exceeds maximum "
                f"{policy.max_size}",
                field="poule_sizes",
                phase_index=index,
            )

    @staticmethod
    def _add_size_error(
        check: FieldCheck, result: ValidationResult, index: int
    ) -> None:
        if not check:
            result.add_error(
                check.error_message, field="poule_sizes", phase_index=index
            )

    def _check_separation(
        self, rules: Optional[SeparationRules], result: ValidationResult, index: int
    ) -> None:
        if rules is None:
            return
        for enabled, limit, label in (
            (rules.club, rules.max_same_club, "club"),
            (rules.country, rules.max_same_country, "country"),
        ):
            if enabled and (not isinstance(limit, int) or limit < 1):
                result.add_error(
                    f"Maximum athletes per {label} must be at least 1",
                    error_type=ErrorType.CONSTRAINT,
                    field="separation_rules",
                    phase_index=index,
                )

    def _check_brackets(
        self, phase: EliminationPhaseConfig, result: ValidationResult, index: int
    ) -> None:
        if not phase.bracket_configs:
            result.add_warning(
                f"Phase {phase.name!r} has no bracket configuration",
                suggestion="Add at least one table",
            )
        for bracket in phase.bracket_configs:
            check = validate_bracket_size(bracket.size)
            if not check:
                result.add_error(
                    check.error_message, field="bracket_configs", phase_index=index
                )

    def _check_qualification(
        self,
        rules: QualificationRules,
        result: ValidationResult,
        total: Optional[int],
        index: int,
    ) -> None:
        if rules.method == QualificationMethod.QUOTA:
            check = validate_positive_integer(rules.quota, "Qualification quota")
            if not check:
                result.add_error(
                    check.error_message, field="qualification", phase_index=index
                )
            elif total is not None and check.sanitized_value > total:
                result.add_warning(
                    f"Qualification quota {check.sanitized_value} exceeds "
                    f"{total} athletes",
                    warning_type=WarningType.BALANCE,
                    suggestion="Every athlete will qualify; lower the quota",
                )
        elif rules.method == QualificationMethod.PERCENTAGE:
            check = validate_percentage(rules.percentage, "Qualification percentage")
            if not check:
                result.add_error(
                    check.error_message, field="qualification", phase_index=index
                )
        else:
            result.add_error(
                "Custom qualification rules are not supported",
                field="qualification",
                phase_index=index,
            )

        for rule in rules.tiebreak_rules:
            if rule.criterion not in RANKABLE_TIEBREAKS:
                result.add_warning(
                    f"Tiebreak criterion {rule.criterion!r} is ignored when ranking",
                    suggestion=f"Use one of: {', '.join(RANKABLE_TIEBREAKS)}",
                )


def validate_template(template: FormulaTemplate) -> ValidationResult:
    """Validate a template's shape with the default validator."""
    return FormulaValidator().validate_template(template)

"""Poule count and size calculation.

Turns a sizing policy and an athlete count into an ordered list of poule
sizes. The sizes always add up to the athlete count, except for the
``variable`` policy where the caller's list is authoritative.
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

import math
from typing import Optional

from fencingformula.exceptions import InvalidConfigurationException
from fencingformula.models.enums import PouleSizeMethod
from fencingformula.models.phase import PouleSizeConfig
from fencingformula.type_hints import PouleSizes
from fencingformula.utils import setup_logger

logger = setup_logger(__name__)


class PouleSizeCalculator:
    """Derives poule sizes from a sizing policy."""

    def compute_sizes(
        self,
        policy: Optional[PouleSizeConfig],
        total_athletes: int,
        optimize_for_balance: bool = False,
    ) -> PouleSizes:
        """Compute the ordered poule sizes for a field.

        Args:
            policy: Sizing policy; None means the optimal policy with defaults
            total_athletes: Number of athletes to seat
            optimize_for_balance: Use a balanced partition instead of the
                greedy fill for the optimal policy

        Returns:
            One size per poule, in poule order

        Raises:
            InvalidConfigurationException: If the policy lacks the size data
                its method needs
        """
        policy = policy or PouleSizeConfig()

        if total_athletes <= 0:
            return []

        if policy.method in (PouleSizeMethod.FIXED, PouleSizeMethod.UNIFORM):
            return self._fixed_sizes(self._uniform_size(policy), total_athletes)

        if policy.method == PouleSizeMethod.VARIABLE:
            if not policy.sizes:
                raise InvalidConfigurationException(
                    "Variable poule sizing needs a list of sizes"
                )
            sizes = list(policy.sizes)
            mismatch = self.sum_mismatch(sizes, total_athletes)
            if mismatch:
                logger.warning(mismatch)
            return sizes

        if policy.method == PouleSizeMethod.SINGLE:
            return [total_athletes]

        min_size, max_size = policy.effective_bounds()
        if optimize_for_balance:
            return self._balanced_sizes(total_athletes, max_size)
        return self._optimal_sizes(total_athletes, min_size, max_size)

    @staticmethod
    def sum_mismatch(sizes: PouleSizes, total_athletes: int) -> Optional[str]:
        """Describe a mismatch between poule sizes and the field, if any."""
        total = sum(sizes)
        if total == total_athletes:
            return None
        return (
            f"Poule sizes {sizes} hold {total} athletes, "
            f"expected {total_athletes}"
        )

    def _uniform_size(self, policy: PouleSizeConfig) -> int:
        size = policy.fixed_size
        if size is None and policy.sizes:
            size = policy.sizes[0]
        if size is None:
            size = policy.preferred_size
        if not size or size <= 0:
            raise InvalidConfigurationException(
                f"{policy.method.value.capitalize()} poule sizing needs a positive size"
            )
        return size

    def _fixed_sizes(self, fixed_size: int, total_athletes: int) -> PouleSizes:
        """ceil(n / size) poules of ``fixed_size``, the last one truncated."""
        count = math.ceil(total_athletes / fixed_size)
        sizes = [fixed_size] * count
        sizes[-1] = total_athletes - fixed_size * (count - 1)
        return sizes

    def _optimal_sizes(
        self, total_athletes: int, min_size: int, max_size: int
    ) -> PouleSizes:
        """Fill poules at ``max_size``, then settle the remainder.

        A remainder of at least ``min_size`` becomes the last poule. A smaller
        remainder is pooled with the previous poule and the pool split in
        half. A field smaller than ``min_size`` is one undersized poule.
        """
        min_size = min(min_size, max_size)
        if total_athletes < min_size:
            return [total_athletes]

        sizes = []
        remaining = total_athletes
        while remaining >= max_size:
            sizes.append(max_size)
            remaining -= max_size

        if remaining == 0:
            return sizes

        if remaining >= min_size:
            sizes.append(remaining)
            return sizes

        pooled = sizes.pop() + remaining
        half = pooled // 2
        sizes.extend([half, pooled - half])
        logger.debug(
            "Redistributed %d athletes into poules of %d and %d",
            pooled,
            half,
            pooled - half,
        )
        return sizes

    def _balanced_sizes(self, total_athletes: int, max_size: int) -> PouleSizes:
        """ceil(n / max) poules differing in size by at most one, largest first."""
        count = math.ceil(total_athletes / max_size)
        base, extra = divmod(total_athletes, count)
        return [base + 1] * extra + [base] * (count - extra)

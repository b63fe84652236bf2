"""Options threaded through every engine call."""

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

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class EngineOptions:
    """Behaviour switches for poule generation and seeding.

    Attributes:
        strict_separation: Fail instead of breaking a separation rule
        allow_incomplete_poules: Accept poules left below their target size
            without warnings
        optimize_for_balance: Use evenly sized poules instead of filling to
            the maximum size first
        random_seed: Seed for RANDOM bracket seeding, None for nondeterministic
    """

    strict_separation: bool = True
    allow_incomplete_poules: bool = False
    optimize_for_balance: bool = False
    random_seed: Optional[int] = None

    def relaxed(self) -> "EngineOptions":
        """Copy of these options with strict separation switched off."""
        return replace(self, strict_separation=False)

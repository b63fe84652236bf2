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

# --- Constants ---
EXPORTED_BY = "Fencing Formula"

# Poule sizing defaults
DEFAULT_MIN_POULE_SIZE = 5
DEFAULT_MAX_POULE_SIZE = 7

# Small fields get smaller poules when a preset is adapted
SMALL_FIELD_THRESHOLD = 20
SMALL_FIELD_PREFERRED_SIZE = 5
SMALL_FIELD_ALLOWED_SIZES = (4, 5, 6)

# Athletes without a ranking are seeded after every ranked athlete
UNRANKED_SENTINEL = 999999

# Default separation limit when a rule is enabled without an explicit maximum
DEFAULT_MAX_SAME_CLUB = 1
DEFAULT_MAX_SAME_COUNTRY = 1

# Direct elimination tables
BRACKET_SIZE_LADDER = (8, 16, 32, 64, 128, 256)

# Minimum field for a tournament to be valid
MIN_TOURNAMENT_ATHLETES = 3

# Defaults for tournaments created from presets or imports
DEFAULT_CATEGORY = "Senior"
DEFAULT_PRESET_ATHLETES = 64

# Tiebreak criteria
TB_VICTORIES = "victories"
TB_INDICATOR = "indicator"
TB_TOUCHES_SCORED = "touches_scored"
TB_TOUCHES_RECEIVED = "touches_received"
TB_VM_RATIO = "vm_ratio"
TB_HEAD_TO_HEAD = "head_to_head"  # Needs bout data, not ranked by the engine
TB_RANDOM = "random"  # Not ranked by the engine

RANKABLE_TIEBREAKS = (
    TB_VICTORIES,
    TB_INDICATOR,
    TB_TOUCHES_SCORED,
    TB_TOUCHES_RECEIVED,
    TB_VM_RATIO,
)

# victories -> indicator -> touches scored, all descending
DEFAULT_TIEBREAK_ORDER = [TB_VICTORIES, TB_INDICATOR, TB_TOUCHES_SCORED]

# Age categories: (minimum age, maximum age) on the competition date.
# None means unbounded.
AGE_CATEGORIES = {
    "U11": (None, 10),
    "U13": (None, 12),
    "U15": (None, 14),
    "CADET": (None, 16),
    "U17": (None, 16),
    "JUNIOR": (None, 19),
    "U20": (None, 19),
    "SENIOR": (13, None),
    "VETERAN": (40, None),
}

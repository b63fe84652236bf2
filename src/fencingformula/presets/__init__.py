"""Built-in formula presets and preset management."""


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

from fencingformula.presets.adapter import (
    TemplateAdapter,
    create_tournament_from_preset,
    optimal_bracket_size,
    suggest_presets,
)
from fencingformula.presets.builtin import (
    BUILT_IN_PRESETS,
    PRESET_CATEGORIES,
    get_built_in_preset,
    get_built_in_preset_ids,
    get_built_in_presets,
    is_built_in_preset,
)
from fencingformula.presets.exchange import (
    duplicate_preset,
    export_preset,
    export_preset_json,
    filter_presets,
    import_preset,
    search_presets,
)

__all__ = [
    "BUILT_IN_PRESETS",
    "PRESET_CATEGORIES",
    "TemplateAdapter",
    "create_tournament_from_preset",
    "duplicate_preset",
    "export_preset",
    "export_preset_json",
    "filter_presets",
    "get_built_in_preset",
    "get_built_in_preset_ids",
    "get_built_in_presets",
    "import_preset",
    "is_built_in_preset",
    "optimal_bracket_size",
    "search_presets",
    "suggest_presets",
]

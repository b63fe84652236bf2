"""Preset export, import, duplication and lookup helpers.

Presets are exchanged as JSON-ready dictionaries::

    {"name": ..., "description": ..., "weapon": ..., "category": ...,
     "phases": [...], "is_public": ..., "exported_at": ..., "exported_by": ...}

Imports are validated before they are accepted.
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

import copy
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from fencingformula.constants import EXPORTED_BY
from fencingformula.exceptions import (
    ConfigurationException,
    InvalidPresetException,
)
from fencingformula.models.enums import Weapon, coerce_enum
from fencingformula.models.phase import phase_config_from_dict
from fencingformula.models.tournament import FormulaTemplate
from fencingformula.utils import generate_id, setup_logger
from fencingformula.validation.formula import validate_template

logger = setup_logger(__name__)

# ========== Export ==========


def export_preset(template: FormulaTemplate) -> Dict[str, Any]:
    """Serialize a preset for sharing, stamped with export time and origin."""
    return {
        "name": template.name,
        "description": template.description,
        "weapon": template.weapon.value if template.weapon else None,
        "category": template.category,
        "phases": [phase.to_dict() for phase in template.phases],
        "is_public": template.is_public,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "exported_by": EXPORTED_BY,
    }


def export_preset_json(template: FormulaTemplate, indent: int = 2) -> str:
    """Serialize a preset to a JSON string."""
    return json.dumps(export_preset(template), indent=indent)


# ========== Import ==========


def import_preset(
    data: Union[Dict[str, Any], str],
    name: Optional[str] = None,
    is_public: bool = False,
    organization_id: Optional[str] = None,
) -> FormulaTemplate:
    """Create a new preset from exported data.

    Args:
        data: Exported preset, as a dictionary or JSON text
        name: Name for the new preset; defaults to the exported name
        is_public: Whether the new preset is shared
        organization_id: Owning organization

    Returns:
        The validated preset with a fresh id

    Raises:
        InvalidPresetException: If the data cannot be parsed or fails
            validation
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidPresetException("Invalid imported preset", [str(e)]) from e

    try:
        template = FormulaTemplate(
            id=generate_id("preset"),
            name=name or data.get("name") or "Imported Preset",
            description=data.get("description"),
            weapon=coerce_enum(Weapon, data.get("weapon")),
            category=data.get("category"),
            phases=[
                phase_config_from_dict(phase) for phase in data.get("phases") or []
            ],
            is_public=is_public,
            organization_id=organization_id,
        )
    except (
        ConfigurationException,
        AttributeError,
        KeyError,
        TypeError,
        ValueError,
    ) as e:
        raise InvalidPresetException("Invalid imported preset", [str(e)]) from e

    validation = validate_template(template)
    if not validation.is_valid:
        raise InvalidPresetException(
            "Invalid imported preset", validation.error_messages
        )

    logger.info("Imported preset %s (%s)", template.name, template.id)
    return template


def duplicate_preset(
    source: FormulaTemplate,
    new_name: str,
    organization_id: Optional[str] = None,
    description: Optional[str] = None,
    is_public: bool = False,
    weapon: Optional[Weapon] = None,
    category: Optional[str] = None,
) -> FormulaTemplate:
    """Copy a preset under a new name.

    Raises:
        InvalidPresetException: If the copy fails validation
    """
    template = FormulaTemplate(
        id=generate_id("preset"),
        name=new_name,
        description=description or f"Copy of {source.name}",
        weapon=weapon or source.weapon,
        category=category or source.category,
        phases=copy.deepcopy(source.phases),
        is_public=is_public,
        organization_id=organization_id,
    )

    validation = validate_template(template)
    if not validation.is_valid:
        raise InvalidPresetException(
            "Invalid duplicated preset", validation.error_messages
        )
    return template


# ========== Lookup ==========


def filter_presets(
    presets: Iterable[FormulaTemplate],
    weapon: Optional[Weapon] = None,
    category: Optional[str] = None,
) -> List[FormulaTemplate]:
    """Keep presets usable for a weapon and category.

    A preset without a weapon or category restriction matches any value.
    """
    matched = []
    for preset in presets:
        if weapon and preset.weapon and preset.weapon != weapon:
            continue
        if category and preset.category and preset.category != category:
            continue
        matched.append(preset)
    return matched


def search_presets(
    presets: Iterable[FormulaTemplate], query: str
) -> List[FormulaTemplate]:
    """Case-insensitive search in name, description, weapon and category."""
    term = query.lower().strip()
    matched = []
    for preset in presets:
        fields = [
            preset.name,
            preset.description,
            preset.weapon.value if preset.weapon else None,
            preset.category,
        ]
        if any(term in value.lower() for value in fields if value):
            matched.append(preset)
    return matched

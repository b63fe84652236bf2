import json

import pytest

from fencingformula.exceptions import InvalidPresetException, PresetNotFoundException
from fencingformula.models.enums import PhaseType, Weapon
from fencingformula.models.tournament import FormulaTemplate
from fencingformula.presets.adapter import (
    TemplateAdapter,
    create_tournament_from_preset,
    optimal_bracket_size,
    suggest_presets,
)
from fencingformula.presets.builtin import (
    BUILT_IN_PRESETS,
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
from fencingformula.validation.formula import FormulaValidator


def _ids(presets):
    return [preset.id for preset in presets]


# ========== Catalogue ==========


def test_catalogue_order():
    assert get_built_in_preset_ids() == [
        "classic-no-3rd",
        "multi-round-poules",
        "fie-world-cup",
        "club-tournament",
        "national-championship",
        "direct-elimination-only",
        "round-robin",
    ]
    assert is_built_in_preset("round-robin")
    assert not is_built_in_preset("my-preset")


def test_built_in_presets_are_read_only():
    with pytest.raises(TypeError):
        BUILT_IN_PRESETS["mine"] = None

    preset = get_built_in_preset("classic-no-3rd")
    preset.phases[0].qualification.percentage = 10
    assert BUILT_IN_PRESETS["classic-no-3rd"].phases[0].qualification.percentage == 70


def test_unknown_preset():
    with pytest.raises(PresetNotFoundException):
        get_built_in_preset("nope")


def test_presets_grouped_by_category():
    grouped = get_built_in_presets()
    assert _ids(grouped["FIE"]) == ["fie-world-cup"]
    assert grouped["CUSTOM"] == []
    assert len(grouped["CLASSIC"]) == 4
    assert _ids(get_built_in_presets("national")) == ["national-championship"]


def test_round_robin_puts_everyone_in_one_poule():
    phase = BUILT_IN_PRESETS["round-robin"].phases[0]
    assert phase.qualification.percentage == 100
    assert phase.poule_sizes.method.value == "single"


# ========== Suggestions ==========


def test_suggestions_by_field_size():
    assert _ids(suggest_presets(10)) == [
        "club-tournament",
        "direct-elimination-only",
        "round-robin",
    ]
    assert _ids(suggest_presets(20)) == ["club-tournament", "direct-elimination-only"]
    assert _ids(suggest_presets(40)) == [
        "classic-no-3rd",
        "fie-world-cup",
        "club-tournament",
    ]
    assert _ids(suggest_presets(40, is_club_tournament=True)) == [
        "classic-no-3rd",
        "club-tournament",
    ]
    assert _ids(suggest_presets(100))[0] == "multi-round-poules"


# ========== Adaptation ==========


def test_optimal_bracket_size():
    assert optimal_bracket_size(5, 64) == 8
    assert optimal_bracket_size(16, 64) == 16
    assert optimal_bracket_size(17, 64) == 32
    assert optimal_bracket_size(300, 64) == 64


def test_adapt_small_field():
    template = BUILT_IN_PRESETS["classic-no-3rd"]
    adapted, report = TemplateAdapter().adapt_with_report(template, 10)

    poule_sizes = adapted.phases[0].poule_sizes
    assert poule_sizes.preferred_size == 5
    assert poule_sizes.allowed_sizes == [4, 5, 6]
    assert poule_sizes.min_size is None
    assert adapted.phases[1].bracket_configs[0].size == 16
    assert {entry.field for entry in report} == {"poule_sizes", "bracket_configs.size"}

    # The source template is untouched
    assert template.phases[1].bracket_configs[0].size == 64
    assert template.phases[0].poule_sizes.preferred_size == 7


def test_adapt_large_field_keeps_table_sizes():
    template = BUILT_IN_PRESETS["classic-no-3rd"]
    adapted, report = TemplateAdapter().adapt_with_report(template, 300)
    assert adapted.phases[1].bracket_configs[0].size == 64
    assert report == []


def test_adapt_overrides_weapon_and_category():
    adapted = TemplateAdapter().adapt(
        BUILT_IN_PRESETS["fie-world-cup"], 120, weapon=Weapon.SABRE, category="Junior"
    )
    assert adapted.weapon == Weapon.SABRE
    assert adapted.category == "Junior"
    assert adapted.phases[1].bracket_configs[0].size == 128


def test_create_tournament_from_preset():
    config = create_tournament_from_preset(
        get_built_in_preset("classic-no-3rd"), total_athletes=40, name="Spring Open"
    )

    assert config.name == "Spring Open"
    assert config.total_athletes == 40
    assert config.weapon == Weapon.EPEE
    assert config.id.startswith("tournament-")
    assert [phase.id for phase in config.phases] == ["phase-1", "phase-2"]
    assert FormulaValidator().validate(config).is_valid


# ========== Sharing ==========


def test_export_and_import():
    exported = export_preset(BUILT_IN_PRESETS["national-championship"])
    assert exported["exported_by"] == "Fencing Formula"
    assert "exported_at" in exported

    imported = import_preset(json.dumps(exported), organization_id="org-1")

    assert imported.id.startswith("preset-")
    assert imported.name == "National Championship"
    assert imported.organization_id == "org-1"
    assert not imported.is_public
    assert [phase.phase_type for phase in imported.phases] == [
        PhaseType.POULE,
        PhaseType.DIRECT_ELIMINATION,
        PhaseType.REPECHAGE,
        PhaseType.CLASSIFICATION,
    ]


def test_import_keeps_a_new_name():
    text = export_preset_json(BUILT_IN_PRESETS["round-robin"])
    assert import_preset(text, name="Club Night").name == "Club Night"


@pytest.mark.parametrize(
    "data",
    [
        "{not json",
        {"name": "Empty", "phases": []},
        {"name": "Bad type", "phases": [{"name": "X", "phase_type": "SWISS"}]},
        {
            "name": "Gap",
            "phases": [{"name": "Poules", "phase_type": "POULE", "sequence_order": 2}],
        },
        {
            "name": "Text sizes",
            "phases": [
                {
                    "name": "Poules",
                    "phase_type": "POULE",
                    "sequence_order": 1,
                    "poule_sizes": {"method": "variable", "sizes": ["6", "7"]},
                }
            ],
        },
    ],
)
def test_import_rejects_invalid_data(data):
    with pytest.raises(InvalidPresetException) as excinfo:
        import_preset(data)
    assert excinfo.value.errors


def test_import_lists_every_bad_poule_size():
    data = {
        "name": "Text sizes",
        "phases": [
            {
                "name": "Poules",
                "phase_type": "POULE",
                "sequence_order": 1,
                "poule_sizes": {"method": "variable", "sizes": ["6", None]},
            }
        ],
    }
    with pytest.raises(InvalidPresetException) as excinfo:
        import_preset(data)
    assert excinfo.value.errors == [
        "Poule size 1 must be a whole number: '6'",
        "Poule size 2 is required",
    ]


def test_duplicate_preset():
    source = BUILT_IN_PRESETS["club-tournament"]
    copy = duplicate_preset(source, "Tuesday Club", organization_id="org-2")

    assert copy.id != source.id
    assert copy.name == "Tuesday Club"
    assert copy.description == "Copy of Club Tournament (Small)"
    assert copy.phases[0] is not source.phases[0]
    assert copy.phases[0].poule_sizes == source.phases[0].poule_sizes


def test_filter_and_search():
    foil = FormulaTemplate(id="p-1", name="Foil Cup", weapon=Weapon.FOIL)
    junior = FormulaTemplate(id="p-2", name="Junior Cup", category="Junior")
    presets = list(BUILT_IN_PRESETS.values()) + [foil, junior]

    epee = filter_presets(presets, weapon=Weapon.EPEE)
    assert "p-1" not in _ids(epee)
    assert "p-2" in _ids(epee)
    assert _ids(filter_presets([foil, junior], category="Senior")) == ["p-1"]

    assert _ids(search_presets(presets, "world cup")) == ["fie-world-cup"]
    assert _ids(search_presets(presets, "FOIL")) == ["p-1"]

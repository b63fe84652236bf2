from fencingformula.models.enums import (
    BracketType,
    PouleSizeMethod,
    QualificationMethod,
    WarningType,
)
from fencingformula.models.phase import (
    BracketConfig,
    EliminationPhaseConfig,
    PhaseConfig,
    PoulePhaseConfig,
    PouleSizeConfig,
    QualificationRules,
    SeparationRules,
    TiebreakRule,
)
from fencingformula.models.tournament import TournamentConfig
from fencingformula.presets.builtin import BUILT_IN_PRESETS
from fencingformula.validation.formula import FormulaValidator, validate_template


def _poules(order, quota=10, **kwargs):
    return PoulePhaseConfig(
        name=f"Poules {order}",
        sequence_order=order,
        qualification=QualificationRules(method=QualificationMethod.QUOTA, quota=quota),
        **kwargs,
    )


def _table(order, size=16):
    return EliminationPhaseConfig(
        name="Direct Elimination",
        sequence_order=order,
        bracket_configs=[BracketConfig(bracket_type=BracketType.MAIN, size=size)],
    )


def _config(phases, total=20, **kwargs):
    return TournamentConfig(
        id=kwargs.pop("id", "t-1"),
        name=kwargs.pop("name", "Open"),
        total_athletes=total,
        phases=phases,
    )


def _sequence_errors(result):
    return [e for e in result.errors if "sequence order" in e.message]


def test_contiguous_sequence_is_valid():
    result = FormulaValidator().validate(_config([_poules(1), _poules(2), _table(3)]))
    assert result.is_valid
    assert not _sequence_errors(result)
    assert result.warnings == []


def test_gap_in_sequence_is_an_error():
    result = FormulaValidator().validate(_config([_poules(1), _table(3)]))
    assert not result.is_valid
    assert _sequence_errors(result)


def test_duplicate_sequence_is_an_error():
    result = FormulaValidator().validate(_config([_poules(1), _table(1)]))
    assert _sequence_errors(result)


def test_sequence_must_start_at_one():
    result = FormulaValidator().validate(_config([_poules(2), _table(3)]))
    assert _sequence_errors(result)


def test_missing_sequence_order_is_reported_without_raising():
    phase = _poules(1)
    phase.sequence_order = None
    result = FormulaValidator().validate(_config([phase]))
    assert not result.is_valid


def test_basic_fields_are_required():
    result = FormulaValidator().validate(_config([_table(1)], id="", name=""))
    messages = result.error_messages
    assert "Tournament ID is required" in messages
    assert "Tournament name is required" in messages


def test_minimum_field_size():
    result = FormulaValidator().validate(_config([_table(1)], total=2))
    assert not result.is_valid
    assert any("at least 3" in message for message in result.error_messages)


def test_at_least_one_phase():
    result = FormulaValidator().validate(_config([]))
    assert "At least one phase is required" in result.error_messages


def test_phase_without_type_is_an_error():
    phase = PhaseConfig(name="Mystery", sequence_order=1)
    result = FormulaValidator().validate(_config([phase]))
    assert "Phase 1 type is required" in result.error_messages


def test_variable_size_mismatch_is_only_a_warning():
    sizes = PouleSizeConfig(method=PouleSizeMethod.VARIABLE, sizes=[7, 7])
    result = FormulaValidator().validate(
        _config([_poules(1, poule_sizes=sizes), _table(2)])
    )
    assert result.is_valid
    assert [w.type for w in result.warnings] == [WarningType.BALANCE]


def test_size_policy_needs_its_values():
    fixed = PouleSizeConfig(method=PouleSizeMethod.FIXED)
    uniform = PouleSizeConfig(method=PouleSizeMethod.UNIFORM)
    variable = PouleSizeConfig(method=PouleSizeMethod.VARIABLE)
    inverted = PouleSizeConfig(min_size=7, max_size=5)
    for policy in (fixed, uniform, variable, inverted):
        result = FormulaValidator().validate(
            _config([_poules(1, poule_sizes=policy), _table(2)])
        )
        assert not result.is_valid
        assert result.errors[0].phase_index == 0


def test_bad_variable_sizes_are_reported_one_by_one():
    sizes = PouleSizeConfig(method=PouleSizeMethod.VARIABLE, sizes=[5, None, "7", 0])
    result = FormulaValidator().validate(
        _config([_poules(1, poule_sizes=sizes), _table(2)])
    )
    assert not result.is_valid
    assert result.error_messages == [
        "Poule size 2 is required",
        "Poule size 3 must be a whole number: '7'",
        "Poule size 4 must be positive: 0",
    ]
    assert all(e.phase_index == 0 for e in result.errors)
    assert result.warnings == []


def test_bad_size_bounds_are_errors_not_crashes():
    policy = PouleSizeConfig(min_size="5", max_size=7)
    result = FormulaValidator().validate(
        _config([_poules(1, poule_sizes=policy), _table(2)])
    )
    assert result.error_messages == [
        "Minimum poule size must be a whole number: '5'"
    ]


def test_uniform_size_comes_from_any_size_field():
    for policy in (
        PouleSizeConfig(method=PouleSizeMethod.UNIFORM, fixed_size=6),
        PouleSizeConfig(method=PouleSizeMethod.UNIFORM, sizes=[7]),
        PouleSizeConfig(method=PouleSizeMethod.UNIFORM, preferred_size=5),
    ):
        result = FormulaValidator().validate(
            _config([_poules(1, poule_sizes=policy), _table(2)])
        )
        assert result.is_valid


def test_text_sequence_order_is_accepted_without_raising():
    first = _poules(1)
    first.sequence_order = "1"
    result = FormulaValidator().validate(_config([first, _table(2)]))
    assert result.is_valid
    assert result.warnings == []


def test_qualification_values_must_match_method():
    phase = _poules(1, quota=None)
    result = FormulaValidator().validate(_config([phase, _table(2)]))
    assert not result.is_valid

    phase = PoulePhaseConfig(
        name="Poules",
        sequence_order=1,
        qualification=QualificationRules(
            method=QualificationMethod.PERCENTAGE, percentage=150
        ),
    )
    result = FormulaValidator().validate(_config([phase, _table(2)]))
    assert not result.is_valid


def test_quota_above_field_warns():
    result = FormulaValidator().validate(_config([_poules(1, quota=30), _table(2)]))
    assert result.is_valid
    assert any("exceeds" in message for message in result.warning_messages)


def test_bracket_size_must_be_power_of_two():
    result = FormulaValidator().validate(_config([_poules(1), _table(2, size=24)]))
    assert not result.is_valid
    assert result.errors[0].phase_index == 1


def test_separation_limit_must_be_positive():
    rules = SeparationRules(club=True, max_same_club=0)
    result = FormulaValidator().validate(
        _config([_poules(1, separation_rules=rules), _table(2)])
    )
    assert not result.is_valid


def test_poule_phase_without_qualification_before_table_warns():
    phase = PoulePhaseConfig(name="Poules", sequence_order=1)
    result = FormulaValidator().validate(_config([phase, _table(2)]))
    assert result.is_valid
    assert any("no qualification" in message for message in result.warning_messages)


def test_unsupported_tiebreak_warns():
    phase = _poules(1)
    phase.qualification.tiebreak_rules = [TiebreakRule(order=1, criterion="random")]
    result = FormulaValidator().validate(_config([phase, _table(2)]))
    assert result.is_valid
    assert any("random" in message for message in result.warning_messages)


def test_built_in_templates_are_valid():
    for template in BUILT_IN_PRESETS.values():
        result = validate_template(template)
        assert result.is_valid, (template.id, result.error_messages)


def test_result_is_truthy_when_valid():
    validator = FormulaValidator()
    assert validator.validate(_config([_table(1)]))
    assert not validator.validate(_config([]))

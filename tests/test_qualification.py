from fencingformula.models.enums import QualificationMethod
from fencingformula.models.phase import (
    PoulePhaseConfig,
    QualificationRules,
    TiebreakRule,
)
from fencingformula.models.results import AthleteResult
from fencingformula.tournament.qualification import (
    QualificationCalculator,
    rank_results,
)


def _phase(method=QualificationMethod.QUOTA, quota=None, percentage=None, **kwargs):
    return PoulePhaseConfig(
        name="Poules",
        sequence_order=1,
        qualification=QualificationRules(
            method=method, quota=quota, percentage=percentage, **kwargs
        ),
    )


def _result(athlete_id, victories=0, indicator=None, touches_scored=0, **kwargs):
    return AthleteResult(
        athlete_id=athlete_id,
        phase_id="phase-1",
        victories=victories,
        indicator=indicator,
        touches_scored=touches_scored,
        **kwargs,
    )


def _field(n):
    # a0 is strongest; listed weakest first
    return [_result(f"a{i}", victories=n - i) for i in reversed(range(n))]


def test_victories_dominate_indicator():
    results = [
        _result("first", victories=5, indicator=10),
        _result("second", victories=5, indicator=3),
        _result("third", victories=3, indicator=99),
    ]
    transition = QualificationCalculator().calculate(_phase(quota=2), results)

    assert transition.qualified_athletes == ["first", "second"]
    assert transition.eliminated_athletes == ["third"]


def test_touches_scored_breaks_remaining_ties():
    results = [
        _result("low", victories=4, indicator=5, touches_scored=18),
        _result("high", victories=4, indicator=5, touches_scored=21),
    ]
    ranked = rank_results(results)
    assert [r.athlete_id for r in ranked] == ["high", "low"]


def test_quota_of_four_from_ten():
    results = [
        _result("a", victories=2, indicator=1),
        _result("b", victories=5, indicator=-2),
        _result("c", victories=5, indicator=4),
        _result("d", victories=1, indicator=8),
        _result("e", victories=4, indicator=0, touches_scored=20),
        _result("f", victories=4, indicator=0, touches_scored=22),
        _result("g", victories=3, indicator=6),
        _result("h", victories=0, indicator=-15),
        _result("i", victories=2, indicator=-3),
        _result("j", victories=3, indicator=-1),
    ]
    transition = QualificationCalculator().calculate(_phase(quota=4), results)

    assert transition.success
    assert transition.qualified_athletes == ["c", "b", "f", "e"]
    assert len(transition.eliminated_athletes) == 6
    assert set(transition.qualified_athletes) | set(
        transition.eliminated_athletes
    ) == {r.athlete_id for r in results}
    assert not set(transition.qualified_athletes) & set(
        transition.eliminated_athletes
    )


def test_quota_qualifies_min_of_quota_and_field():
    calculator = QualificationCalculator()
    for quota in range(0, 15):
        transition = calculator.calculate(_phase(quota=quota), _field(10))
        assert len(transition.qualified_athletes) == min(quota, 10)
        assert len(transition.eliminated_athletes) == 10 - min(quota, 10)


def test_quota_above_field_warns():
    transition = QualificationCalculator().calculate(_phase(quota=12), _field(10))
    assert len(transition.qualified_athletes) == 10
    assert any("exceeds" in warning for warning in transition.warnings)


def test_percentage_rounds_down():
    calculator = QualificationCalculator()
    phase = _phase(method=QualificationMethod.PERCENTAGE, percentage=68)
    transition = calculator.calculate(phase, _field(10))
    assert transition.qualified_athletes == ["a0", "a1", "a2", "a3", "a4", "a5"]

    phase = _phase(method=QualificationMethod.PERCENTAGE, percentage=70)
    assert len(calculator.calculate(phase, _field(10)).qualified_athletes) == 7


def test_missing_rules_is_an_error_not_a_default():
    phase = PoulePhaseConfig(name="Poules", sequence_order=1)
    transition = QualificationCalculator().calculate(phase, _field(4))

    assert not transition.success
    assert transition.qualified_athletes == []
    assert "No qualification rules" in transition.errors[0]


def test_method_without_its_value_is_an_error():
    calculator = QualificationCalculator()
    assert not calculator.calculate(_phase(quota=None), _field(4)).success
    phase = _phase(method=QualificationMethod.PERCENTAGE, percentage=None)
    assert not calculator.calculate(phase, _field(4)).success
    phase = _phase(method=QualificationMethod.PERCENTAGE, percentage=120)
    assert not calculator.calculate(phase, _field(4)).success


def test_custom_method_is_not_supported():
    phase = _phase(method=QualificationMethod.CUSTOM)
    transition = QualificationCalculator().calculate(phase, _field(4))
    assert not transition.success


def test_ranked_results_carry_rank_and_flags():
    results = _field(5)
    transition = QualificationCalculator().calculate(_phase(quota=2), results)

    ranked = transition.ranked_results
    assert [r.rank for r in ranked] == [1, 2, 3, 4, 5]
    assert [r.qualifies_for_next for r in ranked] == [True, True, False, False, False]
    assert ranked[4].is_eliminated
    # Inputs are left untouched
    assert all(r.rank is None for r in results)


def test_level_athletes_at_cutoff_keep_input_order_and_warn():
    results = [
        _result("x", victories=3, indicator=2, touches_scored=15),
        _result("y", victories=3, indicator=2, touches_scored=15),
        _result("z", victories=1, indicator=-4),
    ]
    transition = QualificationCalculator().calculate(_phase(quota=1), results)

    assert transition.qualified_athletes == ["x"]
    assert any("level at the qualification cutoff" in w for w in transition.warnings)


def test_custom_tiebreak_cascade():
    rules = [
        TiebreakRule(order=2, criterion="touches_received", direction="asc"),
        TiebreakRule(order=1, criterion="victories"),
        TiebreakRule(order=3, criterion="head_to_head"),
    ]
    results = [
        _result("a", victories=3, touches_received=12),
        _result("b", victories=3, touches_received=9),
        _result("c", victories=4, touches_received=20),
    ]
    transition = QualificationCalculator().calculate(
        _phase(quota=3, tiebreak_rules=rules), results
    )

    assert transition.qualified_athletes == ["c", "b", "a"]
    assert any("head_to_head" in warning for warning in transition.warnings)


def test_indicator_and_ratio_default_from_touches():
    result = AthleteResult(
        athlete_id="a", victories=3, matches=4, touches_scored=20, touches_received=12
    )
    assert result.indicator == 8
    assert result.vm_ratio == 0.75

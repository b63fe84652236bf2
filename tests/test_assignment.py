import logging

import pytest

from fencingformula.exceptions import PouleCapacityException, SeparationException
from fencingformula.models.athlete import AthleteData, ClubRef
from fencingformula.models.phase import SeparationRules
from fencingformula.options import EngineOptions
from fencingformula.poules.assignment import PouleAssignmentEngine, SnakeCursor
from fencingformula.poules.sizing import PouleSizeCalculator

NO_SEPARATION = SeparationRules(club=False, country=False)
RELAXED = EngineOptions(strict_separation=False)


def _athlete(athlete_id, club=None, country=None):
    return AthleteData(
        id=athlete_id,
        name=athlete_id,
        nationality=country,
        club=ClubRef(id=club, name=club) if club else None,
    )


def _athletes(n, clubs=None):
    return [
        _athlete(f"a{i + 1}", club=clubs[i] if clubs else None) for i in range(n)
    ]


def _walk(cursor, steps):
    positions = [cursor.position]
    for _ in range(steps):
        positions.append(cursor.advance())
    return positions


# ========== Snake cursor ==========


def test_snake_cursor_reverses_at_both_ends():
    assert _walk(SnakeCursor(3), 7) == [0, 1, 2, 2, 1, 0, 0, 1]


def test_snake_cursor_with_two_poules():
    assert _walk(SnakeCursor(2), 5) == [0, 1, 1, 0, 0, 1]


def test_snake_cursor_with_one_poule_stays_put():
    assert _walk(SnakeCursor(1), 4) == [0, 0, 0, 0, 0]


def test_snake_cursor_with_no_poules():
    cursor = SnakeCursor(0)
    assert cursor.advance() == 0


def test_snake_cursor_rejects_negative_count():
    with pytest.raises(ValueError):
        SnakeCursor(-1)


# ========== Assignment ==========


def test_no_athletes_and_no_poules():
    outcome = PouleAssignmentEngine().assign([], [], NO_SEPARATION)
    assert outcome.poules == []
    assert outcome.violations == []


def test_no_athletes_leaves_poules_empty():
    outcome = PouleAssignmentEngine().assign([], [3, 3], NO_SEPARATION)
    assert [len(poule.athletes) for poule in outcome.poules] == [0, 0]


def test_athletes_without_poules_exceed_capacity():
    with pytest.raises(PouleCapacityException):
        PouleAssignmentEngine().assign(_athletes(1), [], NO_SEPARATION)


def test_single_athlete_single_poule():
    outcome = PouleAssignmentEngine().assign(_athletes(1), [1], NO_SEPARATION)
    (assignment,) = outcome.poules[0].athletes
    assert assignment.athlete_id == "a1"
    assert assignment.position == 1
    assert assignment.seed_number == 1


def test_snake_order_spreads_seeds():
    outcome = PouleAssignmentEngine().assign(_athletes(6), [3, 3], NO_SEPARATION)
    assert outcome.poules[0].athlete_ids == ["a1", "a4", "a5"]
    assert outcome.poules[1].athlete_ids == ["a2", "a3", "a6"]
    assert [a.position for a in outcome.poules[0].athletes] == [1, 2, 3]


def test_distinct_clubs_are_never_grouped():
    clubs = [f"club-{i}" for i in range(8)]
    rules = SeparationRules(club=True, country=False, max_same_club=1)
    outcome = PouleAssignmentEngine().assign(_athletes(8, clubs), [4, 4], rules)

    assert sum(len(poule.athletes) for poule in outcome.poules) == 8
    for poule in outcome.poules:
        poule_clubs = [assignment.club for assignment in poule.athletes]
        assert len(poule_clubs) == len(set(poule_clubs))
    assert outcome.violations == []


def test_separation_moves_athlete_to_another_poule():
    rules = SeparationRules(club=True, country=False)
    outcome = PouleAssignmentEngine().assign(
        _athletes(4, ["A", "B", "B", "C"]), [2, 2], rules
    )

    # a3 is kept out of poule 2, where a2 of the same club already sits
    assert outcome.poules[0].athlete_ids == ["a1", "a3"]
    assert outcome.poules[1].athlete_ids == ["a2", "a4"]
    assert outcome.violations == []


def test_strict_separation_aborts_with_athlete_and_rule():
    rules = SeparationRules(club=True, country=False)
    with pytest.raises(SeparationException) as excinfo:
        PouleAssignmentEngine().assign(_athletes(4, ["X"] * 4), [2, 2], rules)

    assert excinfo.value.athlete_id == "a3"
    assert "per club" in excinfo.value.rule
    assert excinfo.value.poule_count == 2


def test_relaxed_separation_records_forced_placements():
    rules = SeparationRules(club=True, country=False)
    outcome = PouleAssignmentEngine().assign(
        _athletes(4, ["X"] * 4), [2, 2], rules, RELAXED
    )

    assert [len(poule.athletes) for poule in outcome.poules] == [2, 2]
    assert outcome.forced_placements == 2
    assert [v.athlete_id for v in outcome.violations] == ["a3", "a4"]
    assert outcome.violations[0].conflicting_athlete_ids == ["a2"]
    assert outcome.violations[1].conflicting_athlete_ids == ["a1"]


def test_forced_placements_are_logged_as_warnings(caplog):
    rules = SeparationRules(club=True, country=False)
    with caplog.at_level(logging.WARNING, logger="fencingformula"):
        PouleAssignmentEngine().assign(
            _athletes(4, ["X"] * 4), [2, 2], rules, RELAXED
        )

    forced = [r for r in caplog.records if "Forced athlete" in r.getMessage()]
    assert [r.name for r in forced] == ["fencingformula.poules.assignment"] * 2


def test_phase_strictness_overrides_engine_option():
    rules = SeparationRules(club=True, country=False, strict_separation=False)
    outcome = PouleAssignmentEngine().assign(
        _athletes(4, ["X"] * 4), [2, 2], rules, EngineOptions(strict_separation=True)
    )
    assert outcome.forced_placements == 2


def test_forced_placement_skips_full_poule():
    rules = SeparationRules(club=True, country=False)
    outcome = PouleAssignmentEngine().assign(
        _athletes(4, ["X"] * 4), [1, 3], rules, RELAXED
    )

    assert outcome.poules[0].athlete_ids == ["a1"]
    assert outcome.poules[1].athlete_ids == ["a2", "a3", "a4"]
    for poule in outcome.poules:
        assert len(poule.athletes) <= poule.size


def test_relaxed_assignment_places_everyone():
    calculator = PouleSizeCalculator()
    engine = PouleAssignmentEngine()
    rules = SeparationRules(club=True, country=True, max_same_club=1)

    for n in range(0, 40):
        athletes = [
            _athlete(f"a{i}", club=f"club-{i % 3}", country=f"C{i % 2}")
            for i in range(n)
        ]
        outcome = engine.assign(
            athletes, calculator.compute_sizes(None, n), rules, RELAXED
        )
        placed = [a for poule in outcome.poules for a in poule.athlete_ids]
        assert sorted(placed) == sorted(athlete.id for athlete in athletes)
        for poule in outcome.poules:
            assert len(poule.athletes) <= poule.size
            positions = [assignment.position for assignment in poule.athletes]
            assert positions == list(range(1, len(positions) + 1))

from datetime import date

import pytest

from fencingformula.exceptions import (
    InvalidConfigurationException,
    PouleCapacityException,
    SeparationException,
)
from fencingformula.models.athlete import AthleteData
from fencingformula.models.enums import (
    PhaseType,
    QualificationMethod,
    Weapon,
    coerce_enum,
)
from fencingformula.models.phase import (
    PoulePhaseConfig,
    SeparationRules,
    phase_config_from_dict,
)
from fencingformula.models.poule import GeneratedPoule, PouleStatistics
from fencingformula.models.results import AthleteResult
from fencingformula.models.tournament import TournamentConfig
from fencingformula.models.validation import ValidationResult
from fencingformula.options import EngineOptions
from fencingformula.presets.builtin import BUILT_IN_PRESETS


def test_coerce_enum():
    assert coerce_enum(Weapon, "foil") == Weapon.FOIL
    assert coerce_enum(Weapon, Weapon.SABRE) == Weapon.SABRE
    assert coerce_enum(Weapon, None) is None
    with pytest.raises(InvalidConfigurationException):
        coerce_enum(Weapon, "pistol")


def test_athlete_from_dict():
    athlete = AthleteData.from_dict(
        {
            "id": "a1",
            "first_name": "Alex",
            "last_name": "Martin",
            "nationality": "FRA",
            "club": {"id": "c1", "name": "Salle Lyon"},
            "ranking": {"rank": 3},
            "weapon": "epee",
            "date_of_birth": "2000-06-15",
        }
    )

    assert athlete.name == "Alex Martin"
    assert athlete.club_name == "Salle Lyon"
    assert athlete.ranking.rank == 3
    assert athlete.weapon == Weapon.EPEE
    assert athlete.age_on(date(2026, 6, 14)) == 25
    assert athlete.age_on(date(2026, 6, 15)) == 26
    assert AthleteData.from_dict(athlete.to_dict()) == athlete


def test_phase_from_dict_picks_the_phase_class():
    phase = phase_config_from_dict(
        {
            "name": "Poules",
            "phase_type": "POULE",
            "sequence_order": 1,
            "qualification_percentage": 70,
            "separation_rules": {"club": True, "country": False, "max_same_club": 2},
        }
    )

    assert isinstance(phase, PoulePhaseConfig)
    assert phase.phase_type == PhaseType.POULE
    assert phase.phase_id == "phase-1"
    assert phase.qualification.method == QualificationMethod.PERCENTAGE
    assert phase.separation_rules.club_limit == 2
    assert phase.separation_rules.country_limit is None


def test_phase_from_dict_needs_a_known_type():
    with pytest.raises(InvalidConfigurationException):
        phase_config_from_dict({"name": "Poules", "sequence_order": 1})
    with pytest.raises(InvalidConfigurationException):
        phase_config_from_dict({"name": "Swiss", "phase_type": "SWISS"})


def test_tournament_config_round_trip():
    config = TournamentConfig(
        id="t-1",
        name="Open",
        weapon=Weapon.SABRE,
        total_athletes=30,
        phases=list(reversed(BUILT_IN_PRESETS["classic-no-3rd"].phases)),
    )

    restored = TournamentConfig.from_dict(config.to_dict())

    assert restored == config
    assert [phase.sequence_order for phase in restored.ordered_phases()] == [1, 2]


def test_separation_rules_describe():
    assert SeparationRules().describe() == "max 1 per club, max 1 per country"
    assert SeparationRules(club=False, country=False).describe() == "no separation"


def test_athlete_result_derived_fields():
    result = AthleteResult(
        athlete_id="a1", victories=3, matches=4, touches_scored=20, touches_received=12
    )
    assert result.indicator == 8
    assert result.vm_ratio == 0.75
    assert AthleteResult(athlete_id="a2").vm_ratio == 0.0


def test_generated_poule_counts():
    poule = GeneratedPoule(id="poule-1", number=1, size=3)
    poule.add("a1", seed_number=1, club="Salle", country="FRA")
    poule.add("a2", seed_number=2, club="Salle", country="ITA")

    assert poule.athlete_ids == ["a1", "a2"]
    assert poule.count_club("Salle") == 2
    assert poule.count_country("ITA") == 1
    assert poule.count_club(None) == 0
    assert poule.free_seats == 1
    assert not poule.is_full


def test_statistics_for_no_poules():
    stats = PouleStatistics.from_poules([])
    assert stats.total_poules == 0
    assert stats.separation_success == 100.0


def test_validation_result():
    result = ValidationResult()
    assert result
    result.add_warning("Heads up")
    assert result.is_valid
    result.add_error("Broken", field="id")

    assert not result
    assert result.to_dict()["errors"] == [
        {
            "type": "configuration",
            "message": "Broken",
            "field": "id",
            "phase_index": None,
        }
    ]
    assert "INVALID" in repr(result)


def test_engine_options_relaxed():
    options = EngineOptions(random_seed=3)
    relaxed = options.relaxed()
    assert options.strict_separation
    assert not relaxed.strict_separation
    assert relaxed.random_seed == 3


def test_placement_exception_messages():
    error = SeparationException("a9", "max 1 per club", 4)
    assert error.athlete_id == "a9"
    assert "a9" in str(error) and "4 poules" in str(error)

    error = PouleCapacityException(10, 12)
    assert "hold 10" in str(error)

from fencingformula.models.athlete import AthleteData, ClubRef
from fencingformula.models.phase import SeparationRules
from fencingformula.models.poule import GeneratedPoule
from fencingformula.poules.separation import SeparationValidator


def _athlete(athlete_id, club=None, country=None):
    return AthleteData(
        id=athlete_id,
        name=athlete_id.upper(),
        nationality=country,
        club=ClubRef(id=club, name=club) if club else None,
    )


def _poule(size, *athletes):
    poule = GeneratedPoule(id="poule-1", number=1, size=size)
    for athlete in athletes:
        poule.add(athlete.id, club=athlete.club_name, country=athlete.nationality)
    return poule


def test_full_poule_rejects():
    validator = SeparationValidator()
    poule = _poule(1, _athlete("a"))
    rules = SeparationRules(club=False, country=False)
    assert not validator.can_place(_athlete("b"), poule, rules)


def test_club_limit_is_enforced():
    validator = SeparationValidator()
    poule = _poule(5, _athlete("a", club="Lagardere"))
    candidate = _athlete("b", club="Lagardere")

    assert not validator.can_place(candidate, poule, SeparationRules(country=False))
    assert validator.can_place(
        candidate, poule, SeparationRules(country=False, max_same_club=2)
    )


def test_disabled_rule_is_unbounded():
    validator = SeparationValidator()
    poule = _poule(5, _athlete("a", club="Lagardere", country="FRA"))
    candidate = _athlete("b", club="Lagardere", country="FRA")
    rules = SeparationRules(club=False, country=False, max_same_club=1)

    assert rules.club_limit is None
    assert validator.can_place(candidate, poule, rules)


def test_country_limit_is_enforced():
    validator = SeparationValidator()
    poule = _poule(5, _athlete("a", country="ITA"), _athlete("b", country="ITA"))
    rules = SeparationRules(club=False, max_same_country=2)

    assert not validator.can_place(_athlete("c", country="ITA"), poule, rules)
    assert validator.can_place(_athlete("d", country="HUN"), poule, rules)


def test_athlete_without_club_or_country_is_never_separated():
    validator = SeparationValidator()
    poule = _poule(5, _athlete("a"))
    assert validator.can_place(_athlete("b"), poule, SeparationRules())


def test_broken_rules_lists_each_violation():
    validator = SeparationValidator()
    poule = _poule(5, _athlete("a", club="Lagardere", country="FRA"))
    violations = validator.broken_rules(
        _athlete("b", club="Lagardere", country="FRA"), poule, SeparationRules()
    )

    assert [v.kind for v in violations] == ["club", "country"]
    assert violations[0].conflicting_athlete_ids == ["a"]
    assert violations[0].athlete_ids == ["b", "a"]
    assert violations[0].poule_number == 1

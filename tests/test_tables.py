import pytest

from harmony_match.models import Animal
from harmony_match.services import tables
from harmony_match.services.tables import (
    ALLIES,
    CLASHES,
    SECRET_FRIENDS,
    TRINES,
    RelationTableError,
    same_trine,
    validate_tables,
    zodiac_data,
)


def test_tables_are_valid():
    validate_tables()


@pytest.mark.parametrize("animal", list(Animal))
def test_each_animal_has_one_of_each_relation(animal):
    assert sum(animal in t for t in TRINES) == 1
    assert len(set(ALLIES[animal])) == 2
    assert CLASHES[CLASHES[animal]] == animal
    assert SECRET_FRIENDS[SECRET_FRIENDS[animal]] == animal
    for ally in ALLIES[animal]:
        assert animal in ALLIES[ally]
        assert not same_trine(animal, ally)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        CLASHES[Animal.RAT] = Animal.OX


def test_asymmetric_clash_is_rejected(monkeypatch):
    broken = dict(CLASHES)
    broken[Animal.RAT] = Animal.OX
    monkeypatch.setattr(tables, "CLASHES", broken)

    with pytest.raises(RelationTableError, match="clash"):
        validate_tables()


def test_overlapping_rules_are_rejected(monkeypatch):
    # Trine-mates as allies: Rat/Dragon would match both the trine and the ally rule
    broken = {
        a: tuple(b for b in Animal if b != a and same_trine(a, b))
        for a in Animal
    }
    monkeypatch.setattr(tables, "ALLIES", broken)

    with pytest.raises(RelationTableError, match="several rules"):
        validate_tables()


def test_zodiac_data_exposes_reference_wheel():
    data = zodiac_data()

    assert data["animals"][0] == "Rat"
    assert data["animals"][-1] == "Pig"
    assert data["elements"] == ["Wood", "Fire", "Earth", "Metal", "Water"]
    assert data["chinese"]["Dragon"] == "龙"
    assert data["element_colors"]["Water"] == "#1E90FF"
    assert ["Rat", "Dragon", "Monkey"] in data["compatibility_groups"]["trines"]
    assert data["compatibility_groups"]["clashes"]["Rat"] == "Horse"
    assert data["compatibility_groups"]["secret_friends"]["Horse"] == "Goat"
    assert data["element_cycles"]["generating"]["Wood"] == "Fire"
    assert data["element_cycles"]["overcoming"]["Wood"] == "Earth"

import pytest
from pydantic import ValidationError

from harmony_match.models import Animal, Element, Polarity
from harmony_match.services.chinese import (
    element_for_year,
    polarity_for_year,
    resolve_profile,
    years_for_animal,
    zodiac_for_year,
)

SAMPLE_YEARS = list(range(1850, 2060, 7)) + [-3, 0, 1899, 1900, 1901]


def test_known_years():
    assert zodiac_for_year(1900) == Animal.RAT
    assert zodiac_for_year(1984) == Animal.RAT
    assert zodiac_for_year(1990) == Animal.HORSE
    assert zodiac_for_year(1991) == Animal.GOAT
    assert zodiac_for_year(2000) == Animal.DRAGON

    assert element_for_year(1900) == Element.WOOD
    assert element_for_year(1984) == Element.EARTH
    assert element_for_year(1988) == Element.WATER
    assert element_for_year(1992) == Element.FIRE


def test_years_before_base_wrap_around():
    assert zodiac_for_year(1899) == Animal.PIG
    assert element_for_year(1899) == Element.WATER
    assert element_for_year(1898) == Element.WATER
    assert element_for_year(1897) == Element.METAL


@pytest.mark.parametrize("year", SAMPLE_YEARS)
def test_animal_repeats_every_12_years(year):
    assert resolve_profile(year).animal == resolve_profile(year + 12).animal


@pytest.mark.parametrize("year", SAMPLE_YEARS)
def test_element_repeats_every_10_years(year):
    assert resolve_profile(year).element == resolve_profile(year + 10).element


@pytest.mark.parametrize("year", SAMPLE_YEARS)
def test_polarity_follows_parity(year):
    expected = Polarity.YANG if year % 2 == 0 else Polarity.YIN
    assert polarity_for_year(year) == expected
    assert resolve_profile(year).polarity != resolve_profile(year + 1).polarity


def test_profile_metadata():
    p = resolve_profile(1990)

    assert p.year == 1990
    assert p.animal == Animal.HORSE
    assert p.animal_chinese == "马"
    assert p.emoji == "🐴"
    assert p.element == Element.WOOD
    assert p.element_chinese == "木"
    assert p.element_color == "#228B22"
    assert p.polarity == Polarity.YANG
    assert p.clash == Animal.RAT
    assert p.secret_friend == Animal.GOAT
    assert len(p.allies) == 2
    assert p.full_sign == "Wood Horse"


def test_profile_is_pure_and_immutable():
    p = resolve_profile(1975)
    assert p == resolve_profile(1975)

    with pytest.raises(ValidationError):
        p.year = 1976


def test_years_for_animal():
    assert years_for_animal(Animal.RAT) == [1948, 1960, 1972, 1984, 1996, 2008, 2020]
    assert years_for_animal(Animal.DRAGON, 1940, 1952) == [1940, 1952]
    assert years_for_animal(Animal.PIG, 2000, 2005) == []
    assert years_for_animal(Animal.OX, 2010, 2000) == []
    assert all(zodiac_for_year(y) == Animal.GOAT for y in years_for_animal(Animal.GOAT))

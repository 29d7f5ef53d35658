import logging
from typing import List

from ..models import Animal, Element, Polarity, Profile
from .tables import (
    ALLIES,
    ANIMAL_CHINESE,
    ANIMAL_EMOJI,
    ANIMALS,
    CLASHES,
    ELEMENT_CHINESE,
    ELEMENT_COLORS,
    ELEMENTS,
    SECRET_FRIENDS,
)

logger = logging.getLogger(__name__)

# 1900 is a Rat year and opens the element cycle
CYCLE_BASE_YEAR = 1900


def zodiac_for_year(year: int) -> Animal:
    """Chinese zodiac animal for a year (fixed 12-year cycle)."""
    # Python's % is already non-negative for a positive modulus
    return ANIMALS[(year - CYCLE_BASE_YEAR) % 12]


def element_for_year(year: int) -> Element:
    """
    Simple element cycle with 2-year periods:
    - floor division keeps years before 1900 on the same grid
    - full element cycle repeats every 10 years
    """
    return ELEMENTS[((year - CYCLE_BASE_YEAR) // 2) % 5]


def polarity_for_year(year: int) -> Polarity:
    return Polarity.YANG if year % 2 == 0 else Polarity.YIN


def resolve_profile(year: int) -> Profile:
    """Full profile for a year. Pure: the same year always gives an equal Profile."""
    animal = zodiac_for_year(year)
    element = element_for_year(year)

    return Profile(
        year=year,
        animal=animal,
        animal_chinese=ANIMAL_CHINESE[animal],
        emoji=ANIMAL_EMOJI[animal],
        element=element,
        element_chinese=ELEMENT_CHINESE[element],
        element_color=ELEMENT_COLORS[element],
        polarity=polarity_for_year(year),
        allies=ALLIES[animal],
        clash=CLASHES[animal],
        secret_friend=SECRET_FRIENDS[animal],
        full_sign=f"{element.value} {animal.value}",
    )


def years_for_animal(animal: Animal, start_year: int = 1940, end_year: int = 2030) -> List[int]:
    """All years in [start_year, end_year] ruled by the given animal."""
    if start_year > end_year:
        logger.debug("empty year range %s..%s for %s", start_year, end_year, animal.value)
        return []

    offset = (ANIMALS.index(animal) - (start_year - CYCLE_BASE_YEAR)) % 12
    return list(range(start_year + offset, end_year + 1, 12))

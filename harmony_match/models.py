from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Animal(str, Enum):
    RAT = "Rat"
    OX = "Ox"
    TIGER = "Tiger"
    RABBIT = "Rabbit"
    DRAGON = "Dragon"
    SNAKE = "Snake"
    HORSE = "Horse"
    GOAT = "Goat"
    MONKEY = "Monkey"
    ROOSTER = "Rooster"
    DOG = "Dog"
    PIG = "Pig"


class Element(str, Enum):
    WOOD = "Wood"
    FIRE = "Fire"
    EARTH = "Earth"
    METAL = "Metal"
    WATER = "Water"


class Polarity(str, Enum):
    YANG = "Yang"
    YIN = "Yin"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Profile(_Frozen):
    """
    A year's zodiac profile:
    - animal / element / polarity derived from the year alone
    - display labels (Chinese characters, emoji, element color)
    - relation metadata keyed off the animal (allies, clash, secret friend)
    """
    year: int
    animal: Animal
    animal_chinese: str
    emoji: str
    element: Element
    element_chinese: str
    element_color: str
    polarity: Polarity
    allies: Tuple[Animal, Animal]
    clash: Animal
    secret_friend: Animal
    full_sign: str


class ElementRelation(_Frozen):
    score: int
    relationship: str
    description: str


class PolarityRelation(_Frozen):
    score: int
    balanced: bool
    description: str


class Scores(_Frozen):
    overall: int
    animal: int
    element: int
    polarity: int


class Dynamics(_Frozen):
    is_trine_match: bool
    is_secret_friend: bool
    is_clash: bool
    is_same_animal: bool
    is_same_element: bool


class CompatibilityResult(_Frozen):
    """Everything a page needs to render one pairing."""
    partner1: Profile
    partner2: Profile
    scores: Scores
    level: str
    level_description: str
    element_relationship: ElementRelation
    polarity_relationship: PolarityRelation
    dynamics: Dynamics
    pairing_key: str

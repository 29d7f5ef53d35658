import logging
import math
from typing import Callable, Tuple

from ..models import (
    Animal,
    CompatibilityResult,
    Dynamics,
    Element,
    ElementRelation,
    Polarity,
    PolarityRelation,
    Scores,
)
from .chinese import resolve_profile
from .tables import ALLIES, CLASHES, GENERATING, OVERCOMING, SECRET_FRIENDS, same_trine

logger = logging.getLogger(__name__)

ANIMAL_BASE_SCORE = 50

# Checked in order, every match overwrites the running score (last match wins).
AnimalRule = Tuple[str, Callable[[Animal, Animal], bool], int]
ANIMAL_RULES: Tuple[AnimalRule, ...] = (
    ("same", lambda a1, a2: a1 == a2, 70),
    ("trine", same_trine, 90),
    ("secret_friend", lambda a1, a2: SECRET_FRIENDS[a1] == a2, 85),
    ("ally", lambda a1, a2: a2 in ALLIES[a1], 88),
    ("clash", lambda a1, a2: CLASHES[a1] == a2, 35),
)

WEIGHTS = {"animal": 0.50, "element": 0.35, "polarity": 0.15}

# (threshold, level, description), highest first
LEVELS: Tuple[Tuple[int, str, str], ...] = (
    (85, "Excellent", "A truly harmonious match with natural understanding"),
    (75, "Very Good", "Strong compatibility with great potential"),
    (65, "Good", "Solid foundation with room for growth"),
    (50, "Moderate", "Requires effort but can flourish with understanding"),
    (40, "Challenging", "Significant differences to navigate mindfully"),
)
FLOOR_LEVEL = ("Difficult", "Major challenges requiring dedicated work")


def score_animals(a1: Animal, a2: Animal) -> int:
    score = ANIMAL_BASE_SCORE
    for _name, applies, rule_score in ANIMAL_RULES:
        if applies(a1, a2):
            score = rule_score
    return score


def score_element(e1: Element, e2: Element) -> ElementRelation:
    """
    Wu Xing relation of e1 towards e2:
    - same       75
    - generating 90 (e1 feeds e2)
    - receiving  85 (e2 feeds e1)
    - overcoming 45 (e1 controls e2)
    - controlled 50 (e2 controls e1)
    - neutral    65
    """
    n1, n2 = e1.value, e2.value

    if e1 == e2:
        return ElementRelation(
            score=75,
            relationship="same",
            description="Shared elemental nature creates understanding but may amplify weaknesses",
        )
    if GENERATING[e1] == e2:
        return ElementRelation(
            score=90,
            relationship="generating",
            description=f"{n1} generates {n2}, creating a nurturing flow of energy",
        )
    if GENERATING[e2] == e1:
        return ElementRelation(
            score=85,
            relationship="receiving",
            description=f"{n2} nurtures {n1}, providing supportive energy",
        )
    if OVERCOMING[e1] == e2:
        return ElementRelation(
            score=45,
            relationship="overcoming",
            description=f"{n1} controls {n2}, which requires mindful balance",
        )
    if OVERCOMING[e2] == e1:
        return ElementRelation(
            score=50,
            relationship="controlled",
            description=f"{n2} has controlling influence over {n1}, needing awareness",
        )
    return ElementRelation(
        score=65,
        relationship="neutral",
        description="Elements coexist independently with potential for growth",
    )


def score_polarity(p1: Polarity, p2: Polarity) -> PolarityRelation:
    if p1 != p2:
        return PolarityRelation(
            score=85,
            balanced=True,
            description="Complementary energies create balance - Yin and Yang in harmony",
        )
    return PolarityRelation(
        score=70,
        balanced=False,
        description=(
            f"Both partners share {p1.value} energy - "
            "similar drive but may need conscious balance"
        ),
    )


def round_half_up(value: float) -> int:
    # round() would give banker's rounding (82.5 -> 82)
    return int(math.floor(value + 0.5))


def weighted_overall(animal: int, element: int, polarity: int) -> int:
    return round_half_up(
        animal * WEIGHTS["animal"]
        + element * WEIGHTS["element"]
        + polarity * WEIGHTS["polarity"]
    )


def classify(overall: int) -> Tuple[str, str]:
    for threshold, level, description in LEVELS:
        if overall >= threshold:
            return level, description
    return FLOOR_LEVEL


def pairing_key(a1: Animal, a2: Animal) -> str:
    """Order-independent key for an unordered animal pair, e.g. 'Goat-Horse'."""
    return "-".join(sorted((a1.value, a2.value)))


def calculate_compatibility(year1: int, year2: int) -> CompatibilityResult:
    """
    Full compatibility analysis for two birth years:
    - both profiles are resolved from the years
    - animal / element / polarity are scored in (partner1, partner2) order
    - overall = 50% animal + 35% element + 15% polarity, rounded half-up
    - level and dynamics flags are derived from the same inputs
    Years are expected to be validated beforehand (see validation.py).
    """
    p1 = resolve_profile(year1)
    p2 = resolve_profile(year2)

    animal_score = score_animals(p1.animal, p2.animal)
    element_rel = score_element(p1.element, p2.element)
    polarity_rel = score_polarity(p1.polarity, p2.polarity)

    overall = weighted_overall(animal_score, element_rel.score, polarity_rel.score)
    level, level_description = classify(overall)

    dynamics = Dynamics(
        is_trine_match=same_trine(p1.animal, p2.animal),
        is_secret_friend=SECRET_FRIENDS[p1.animal] == p2.animal,
        is_clash=CLASHES[p1.animal] == p2.animal,
        is_same_animal=p1.animal == p2.animal,
        is_same_element=p1.element == p2.element,
    )

    logger.debug(
        "compatibility %s/%s -> overall=%s animal=%s element=%s polarity=%s",
        year1, year2, overall, animal_score, element_rel.score, polarity_rel.score,
    )

    return CompatibilityResult(
        partner1=p1,
        partner2=p2,
        scores=Scores(
            overall=overall,
            animal=animal_score,
            element=element_rel.score,
            polarity=polarity_rel.score,
        ),
        level=level,
        level_description=level_description,
        element_relationship=element_rel,
        polarity_relationship=polarity_rel,
        dynamics=dynamics,
        pairing_key=pairing_key(p1.animal, p2.animal),
    )

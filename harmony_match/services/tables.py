import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Tuple

from ..models import Animal, Element

logger = logging.getLogger(__name__)

# Cycle order matters: index 0 is 1900 for animals, 1900-1901 for elements
ANIMALS: Tuple[Animal, ...] = tuple(Animal)
ELEMENTS: Tuple[Element, ...] = tuple(Element)

A = Animal
E = Element

ANIMAL_CHINESE: Mapping[Animal, str] = MappingProxyType({
    A.RAT: "鼠", A.OX: "牛", A.TIGER: "虎", A.RABBIT: "兔",
    A.DRAGON: "龙", A.SNAKE: "蛇", A.HORSE: "马", A.GOAT: "羊",
    A.MONKEY: "猴", A.ROOSTER: "鸡", A.DOG: "狗", A.PIG: "猪",
})

ANIMAL_EMOJI: Mapping[Animal, str] = MappingProxyType({
    A.RAT: "🐀", A.OX: "🐂", A.TIGER: "🐅", A.RABBIT: "🐇",
    A.DRAGON: "🐲", A.SNAKE: "🐍", A.HORSE: "🐴", A.GOAT: "🐐",
    A.MONKEY: "🐵", A.ROOSTER: "🐓", A.DOG: "🐕", A.PIG: "🐷",
})

ELEMENT_CHINESE: Mapping[Element, str] = MappingProxyType({
    E.WOOD: "木", E.FIRE: "火", E.EARTH: "土", E.METAL: "金", E.WATER: "水",
})

ELEMENT_COLORS: Mapping[Element, str] = MappingProxyType({
    E.WOOD: "#228B22",
    E.FIRE: "#DC143C",
    E.EARTH: "#DAA520",
    E.METAL: "#C0C0C0",
    E.WATER: "#1E90FF",
})

# Four trines of three: Doers, Thinkers, Protectors, Diplomats
TRINES: Tuple[FrozenSet[Animal], ...] = (
    frozenset({A.RAT, A.DRAGON, A.MONKEY}),
    frozenset({A.OX, A.SNAKE, A.ROOSTER}),
    frozenset({A.TIGER, A.HORSE, A.DOG}),
    frozenset({A.RABBIT, A.GOAT, A.PIG}),
)

# Allies sit two places either side in the cycle, never trine-mates,
# clash partners or secret friends.
ALLIES: Mapping[Animal, Tuple[Animal, Animal]] = MappingProxyType({
    A.RAT: (A.TIGER, A.DOG),
    A.OX: (A.RABBIT, A.PIG),
    A.TIGER: (A.RAT, A.DRAGON),
    A.RABBIT: (A.OX, A.SNAKE),
    A.DRAGON: (A.TIGER, A.HORSE),
    A.SNAKE: (A.RABBIT, A.GOAT),
    A.HORSE: (A.DRAGON, A.MONKEY),
    A.GOAT: (A.SNAKE, A.ROOSTER),
    A.MONKEY: (A.HORSE, A.DOG),
    A.ROOSTER: (A.GOAT, A.PIG),
    A.DOG: (A.MONKEY, A.RAT),
    A.PIG: (A.ROOSTER, A.OX),
})

CLASHES: Mapping[Animal, Animal] = MappingProxyType({
    A.RAT: A.HORSE,
    A.OX: A.GOAT,
    A.TIGER: A.MONKEY,
    A.RABBIT: A.ROOSTER,
    A.DRAGON: A.DOG,
    A.SNAKE: A.PIG,
    A.HORSE: A.RAT,
    A.GOAT: A.OX,
    A.MONKEY: A.TIGER,
    A.ROOSTER: A.RABBIT,
    A.DOG: A.DRAGON,
    A.PIG: A.SNAKE,
})

SECRET_FRIENDS: Mapping[Animal, Animal] = MappingProxyType({
    A.RAT: A.OX,
    A.OX: A.RAT,
    A.TIGER: A.PIG,
    A.PIG: A.TIGER,
    A.RABBIT: A.DOG,
    A.DOG: A.RABBIT,
    A.DRAGON: A.ROOSTER,
    A.ROOSTER: A.DRAGON,
    A.SNAKE: A.MONKEY,
    A.MONKEY: A.SNAKE,
    A.HORSE: A.GOAT,
    A.GOAT: A.HORSE,
})

# Sheng: e feeds GENERATING[e]
GENERATING: Mapping[Element, Element] = MappingProxyType({
    E.WOOD: E.FIRE,
    E.FIRE: E.EARTH,
    E.EARTH: E.METAL,
    E.METAL: E.WATER,
    E.WATER: E.WOOD,
})

# Ke: e controls OVERCOMING[e]
OVERCOMING: Mapping[Element, Element] = MappingProxyType({
    E.WOOD: E.EARTH,
    E.EARTH: E.WATER,
    E.WATER: E.FIRE,
    E.FIRE: E.METAL,
    E.METAL: E.WOOD,
})

del A, E


class RelationTableError(ValueError):
    """Raised when the static relation tables break one of their invariants."""


def same_trine(a1: Animal, a2: Animal) -> bool:
    return any(a1 in t and a2 in t for t in TRINES)


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise RelationTableError(message)


def validate_tables() -> None:
    """
    Checks the relation tables before anything is scored:
    - every animal sits in exactly one trine, every trine has 3 animals
    - exactly 2 allies, 1 clash, 1 secret friend per animal, never itself
    - allies, clashes and secret friends are symmetric
    - clash partners sit 6 places apart in the cycle
    - no pair of distinct animals matches more than one scoring override
      (trine, secret friend, ally, clash), so rule order never decides a score
    - the element cycles are permutations without fixed points
    """
    _check(len(ANIMALS) == 12, "expected 12 animals")
    _check(len(ELEMENTS) == 5, "expected 5 elements")
    _check(len(TRINES) == 4, "expected 4 trines")

    for table_name, table in (
        ("ANIMAL_CHINESE", ANIMAL_CHINESE),
        ("ANIMAL_EMOJI", ANIMAL_EMOJI),
        ("ALLIES", ALLIES),
        ("CLASHES", CLASHES),
        ("SECRET_FRIENDS", SECRET_FRIENDS),
    ):
        _check(set(table) == set(ANIMALS), f"{table_name} must cover every animal")
    for table_name, table in (
        ("ELEMENT_CHINESE", ELEMENT_CHINESE),
        ("ELEMENT_COLORS", ELEMENT_COLORS),
        ("GENERATING", GENERATING),
        ("OVERCOMING", OVERCOMING),
    ):
        _check(set(table) == set(ELEMENTS), f"{table_name} must cover every element")

    for trine in TRINES:
        _check(len(trine) == 3, f"trine {sorted(trine)} must have 3 animals")
    for animal in ANIMALS:
        count = sum(animal in t for t in TRINES)
        _check(count == 1, f"{animal.value} belongs to {count} trines")

        allies = ALLIES[animal]
        _check(len(set(allies)) == 2, f"{animal.value} must have exactly 2 allies")
        _check(animal not in allies, f"{animal.value} lists itself as an ally")
        for ally in allies:
            _check(animal in ALLIES[ally], f"ally {animal.value}/{ally.value} is not symmetric")

        clash = CLASHES[animal]
        _check(clash != animal, f"{animal.value} clashes with itself")
        _check(CLASHES[clash] == animal, f"clash {animal.value}/{clash.value} is not symmetric")
        distance = (ANIMALS.index(clash) - ANIMALS.index(animal)) % 12
        _check(distance == 6, f"clash {animal.value}/{clash.value} is not opposite in the cycle")

        friend = SECRET_FRIENDS[animal]
        _check(friend != animal, f"{animal.value} is its own secret friend")
        _check(
            SECRET_FRIENDS[friend] == animal,
            f"secret friend {animal.value}/{friend.value} is not symmetric",
        )

    for a1 in ANIMALS:
        for a2 in ANIMALS:
            if a1 == a2:
                continue
            matched = [
                name
                for name, hit in (
                    ("trine", same_trine(a1, a2)),
                    ("secret friend", SECRET_FRIENDS[a1] == a2),
                    ("ally", a2 in ALLIES[a1]),
                    ("clash", CLASHES[a1] == a2),
                )
                if hit
            ]
            _check(
                len(matched) <= 1,
                f"{a1.value}/{a2.value} matches several rules: {', '.join(matched)}",
            )

    for cycle_name, cycle in (("GENERATING", GENERATING), ("OVERCOMING", OVERCOMING)):
        _check(
            set(cycle.values()) == set(ELEMENTS),
            f"{cycle_name} must be a permutation of the elements",
        )
        _check(
            all(src != dst for src, dst in cycle.items()),
            f"{cycle_name} maps an element to itself",
        )

    logger.debug("relation tables validated")


def zodiac_data() -> Dict[str, Any]:
    """Full static tables for rendering a reference wheel, independent of any year."""
    return {
        "animals": [a.value for a in ANIMALS],
        "chinese": {a.value: ch for a, ch in ANIMAL_CHINESE.items()},
        "emojis": {a.value: em for a, em in ANIMAL_EMOJI.items()},
        "elements": [e.value for e in ELEMENTS],
        "element_chinese": {e.value: ch for e, ch in ELEMENT_CHINESE.items()},
        "element_colors": {e.value: c for e, c in ELEMENT_COLORS.items()},
        "compatibility_groups": {
            "trines": [[a.value for a in ANIMALS if a in t] for t in TRINES],
            "allies": {a.value: [x.value for x in allies] for a, allies in ALLIES.items()},
            "clashes": {a.value: b.value for a, b in CLASHES.items()},
            "secret_friends": {a.value: b.value for a, b in SECRET_FRIENDS.items()},
        },
        "element_cycles": {
            "generating": {e.value: f.value for e, f in GENERATING.items()},
            "overcoming": {e.value: f.value for e, f in OVERCOMING.items()},
        },
    }

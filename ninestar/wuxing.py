"""
Five-Element (五行) comparison of the day, month and year rings.

Each palace holds three stars. Their elements are compared and the
palace gets one label:

    "(木)"        all three share an element
    "火"          two share an element and one side generates the other;
                  the generated element is shown
    "X"           two share an element and one side restrains the other
    "O"           all three differ
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class Element(Enum):
    WOOD = "木"
    FIRE = "火"
    EARTH = "土"
    METAL = "金"
    WATER = "水"

    @property
    def english(self) -> str:
        return self.name.lower()


STAR_ELEMENTS = {
    "一": Element.WATER,
    "二": Element.EARTH,
    "三": Element.WOOD,
    "四": Element.WOOD,
    "五": Element.EARTH,
    "六": Element.METAL,
    "七": Element.METAL,
    "八": Element.EARTH,
    "九": Element.FIRE,
}

# Production cycle: Wood → Fire → Earth → Metal → Water → Wood
GENERATES = {
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
}

# Control cycle: each element restrains the one two steps ahead
RESTRAINS = {
    Element.WOOD: Element.EARTH,
    Element.FIRE: Element.METAL,
    Element.EARTH: Element.WATER,
    Element.METAL: Element.WOOD,
    Element.WATER: Element.FIRE,
}


class Relation(Enum):
    GENERATES = "generates"
    RESTRAINS = "restrains"
    GENERATED_BY = "generated_by"
    RESTRAINED_BY = "restrained_by"
    SAME = "same"


def element_of(star: str) -> Optional[Element]:
    """Element of a star numeral, or None for anything else."""
    return STAR_ELEMENTS.get(star)


def element_relation(a: Optional[Element], b: Optional[Element]) -> Relation:
    """
    Relation of `a` towards `b`.

    Unknown elements have no entry in the cycle tables and are treated
    as restraining.
    """
    if a == b:
        return Relation.SAME
    if a in GENERATES:
        if GENERATES[a] == b:
            return Relation.GENERATES
        if RESTRAINS[a] == b:
            return Relation.RESTRAINS
    if b in GENERATES:
        if GENERATES[b] == a:
            return Relation.GENERATED_BY
        if RESTRAINS[b] == a:
            return Relation.RESTRAINED_BY
    return Relation.RESTRAINS


# ============================================================
# PALACE COMPARISON
# ============================================================

class ComparisonKind(Enum):
    ALL_SAME = "all_same"
    GENERATING = "generating"
    CONFLICT = "conflict"
    TWO_SAME = "two_same"
    ALL_DIFFERENT = "all_different"


CONFLICT_LABEL = "X"
ALL_DIFFERENT_LABEL = "O"
TWO_SAME_LABEL = "有两个一样"


@dataclass(frozen=True)
class PositionComparison:
    kind: ComparisonKind
    label: str
    elements: tuple  # (day, month, year)


def _symbol(element: Optional[Element]) -> str:
    return element.value if element is not None else ""


def compare_position(day_star: str, month_star: str, year_star: str) -> PositionComparison:
    """Classify the elements of the three stars sharing one palace."""
    d, m, y = element_of(day_star), element_of(month_star), element_of(year_star)
    elements = (d, m, y)

    if d == m == y:
        return PositionComparison(ComparisonKind.ALL_SAME, f"({_symbol(d)})", elements)

    if d == m:
        shared, different = d, y
    elif d == y:
        shared, different = d, m
    elif m == y:
        shared, different = m, d
    else:
        return PositionComparison(ComparisonKind.ALL_DIFFERENT, ALL_DIFFERENT_LABEL, elements)

    relation = element_relation(shared, different)
    if relation is Relation.GENERATES:
        return PositionComparison(ComparisonKind.GENERATING, _symbol(different), elements)
    if relation is Relation.GENERATED_BY:
        return PositionComparison(ComparisonKind.GENERATING, _symbol(shared), elements)
    if relation in (Relation.RESTRAINS, Relation.RESTRAINED_BY):
        return PositionComparison(ComparisonKind.CONFLICT, CONFLICT_LABEL, elements)
    # Unreachable: shared != different by construction
    return PositionComparison(ComparisonKind.TWO_SAME, TWO_SAME_LABEL, elements)  # pragma: no cover


def compare_ring_positions(day_ring: Sequence[str], month_ring: Sequence[str],
                           year_ring: Sequence[str]) -> list[PositionComparison]:
    if not len(day_ring) == len(month_ring) == len(year_ring):
        raise ValueError("Rings must have the same length.")
    return [compare_position(d, m, y) for d, m, y in zip(day_ring, month_ring, year_ring)]


def compare_rings(day_ring: Sequence[str], month_ring: Sequence[str],
                  year_ring: Sequence[str]) -> list[str]:
    """One label per palace, in ring order."""
    return [c.label for c in compare_ring_positions(day_ring, month_ring, year_ring)]

import pytest

from ninestar.rings import ring_for
from ninestar.wuxing import (
    ComparisonKind,
    Element,
    Relation,
    compare_position,
    compare_ring_positions,
    compare_rings,
    element_of,
    element_relation,
)


def test_element_of_stars():
    assert element_of("一") is Element.WATER
    assert element_of("二") is element_of("五") is element_of("八") is Element.EARTH
    assert element_of("九") is Element.FIRE
    assert element_of("十") is None


@pytest.mark.parametrize("a, b, expected", [
    (Element.WOOD, Element.FIRE, Relation.GENERATES),
    (Element.FIRE, Element.WOOD, Relation.GENERATED_BY),
    (Element.WOOD, Element.EARTH, Relation.RESTRAINS),
    (Element.EARTH, Element.WOOD, Relation.RESTRAINED_BY),
    (Element.WATER, Element.FIRE, Relation.RESTRAINS),
    (Element.METAL, Element.WATER, Relation.GENERATES),
    (Element.METAL, Element.METAL, Relation.SAME),
])
def test_element_relation(a, b, expected):
    assert element_relation(a, b) is expected


def test_element_relation_unknown_defaults_to_restrains():
    assert element_relation(None, Element.WOOD) is Relation.RESTRAINS
    assert element_relation(Element.WOOD, None) is Relation.RESTRAINS


@pytest.mark.parametrize("a", list(Element))
def test_every_pair_has_a_relation(a):
    others = [element_relation(a, b) for b in Element if b is not a]
    assert sorted(r.value for r in others) == sorted(
        ["generates", "restrains", "generated_by", "restrained_by"]
    )


def test_identical_rings_all_parenthesized():
    ring = ring_for(5)
    labels = compare_rings(ring, ring, ring)
    assert labels == ["(火)", "(土)", "(金)", "(金)", "(水)", "(土)", "(木)", "(木)", "(土)"]


def test_three_different_elements_is_o():
    result = compare_position("一", "二", "三")
    assert result.kind is ComparisonKind.ALL_DIFFERENT
    assert result.label == "O"


def test_shared_generates_different_shows_different():
    # day/month wood, year fire: wood generates fire
    result = compare_position("三", "四", "九")
    assert result.kind is ComparisonKind.GENERATING
    assert result.label == "火"


def test_different_generates_shared_shows_shared():
    # month/year earth, day fire: fire generates earth
    assert compare_position("九", "二", "八").label == "土"


def test_restraining_either_way_is_x():
    # day/year metal restrains month wood
    assert compare_position("六", "三", "七").label == "X"
    # month/year earth restrained by day wood
    assert compare_position("三", "五", "八").label == "X"
    assert compare_position("三", "五", "八").kind is ComparisonKind.CONFLICT


def test_two_equal_earth_stars_count_as_same_element():
    # 2, 5 and 8 all carry earth
    result = compare_position("二", "五", "八")
    assert result.label == "(土)"


def test_compare_rings_for_2025_02_26():
    day, month, year = ring_for(9), ring_for(2), ring_for(2)
    assert compare_rings(day, month, year) == ["X", "金", "X", "木", "金", "X", "X", "X", "土"]


def test_compare_ring_positions_keeps_elements():
    positions = compare_ring_positions(ring_for(1), ring_for(2), ring_for(3))
    assert len(positions) == 9
    assert positions[-1].elements == (Element.WATER, Element.EARTH, Element.WOOD)
    assert positions[-1].label == "O"


def test_compare_rings_length_mismatch():
    with pytest.raises(ValueError):
        compare_rings(ring_for(1), ring_for(2), ring_for(3)[:8])

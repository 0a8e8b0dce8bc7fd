"""Tests for treasure, chests and carts."""

import random

import pytest

from treasure.engine.container import Container
from treasure.engine.items import (
    COND_ADJECTIVE,
    COND_NONE,
    COND_PARENTHETICAL,
    IMMOVABLE_WEIGHT,
    ITEM_TYPES,
    MAT_NONE,
    MAT_PREFIX,
    MAT_SUFFIX,
    MATERIALS,
    Cart,
    Chest,
    Treasure,
    describe,
    generate_treasure,
    render_name,
)


def silk_shirt(condition=2):
    return Treasure(type_index=0, material_index=9, condition_index=condition)


def iron_cap():
    return Treasure(type_index=8, material_index=0, condition_index=2)


def test_treasure_names():
    shirt = silk_shirt(condition=0)
    assert shirt.name() == "shirt"
    assert shirt.name(COND_ADJECTIVE, MAT_PREFIX) == "awesome silk shirt"
    assert shirt.name(COND_PARENTHETICAL, MAT_SUFFIX) == "shirt (awesome) made of silk"
    assert shirt.name(COND_NONE, MAT_SUFFIX) == "shirt made of silk"
    assert render_name(shirt, COND_ADJECTIVE, MAT_NONE) == "awesome shirt"


def test_chest_shows_condition_unless_asked_for_one():
    assert Chest().name() == "chest"
    assert Chest(integrity=0.5).name() == "chest (dented)"
    assert Chest(integrity=0.2).name(COND_NONE, MAT_SUFFIX) == "chest (battered)"
    assert Chest(integrity=0.5).name(COND_ADJECTIVE) == "chest"


def test_cart_shows_item_count():
    cart = Cart(contents=Container())
    assert cart.name() == "cart (empty)"
    assert cart.name(COND_ADJECTIVE, MAT_PREFIX) == "cart"

    cart.contents.items.append(silk_shirt())
    assert cart.name() == "cart (1 item)"

    cart.contents.money[1] = 5
    assert cart.name() == "cart (2 items)"


def test_treasure_weight_and_value():
    cap = iron_cap()
    assert cap.weight() == pytest.approx(1.5)
    assert cap.value() == pytest.approx(300 * 0.4 * 0.6 * 0.9)
    assert cap.value(1.0) == pytest.approx(0.4 * 0.6 * 0.9)
    assert not cap.immovable


def test_chests_and_carts_are_heavy_and_worthless():
    for item in (Chest(), Cart(contents=Container())):
        assert item.weight() == IMMOVABLE_WEIGHT
        assert item.value() == 0
        assert item.immovable


def test_broken_chest_is_movable():
    assert not Chest(integrity=0).immovable


def test_generate_treasure_is_deterministic():
    a = [generate_treasure(random.Random(7)) for _ in range(3)]
    b = [generate_treasure(random.Random(7)) for _ in range(3)]
    assert a == b


def test_generate_treasure_prefers_common_entries():
    rng = random.Random(42)
    drawn = [generate_treasure(rng) for _ in range(5000)]

    assert all(0 <= t.type_index < len(ITEM_TYPES) for t in drawn)
    assert all(0 <= t.material_index < len(MATERIALS) for t in drawn)
    # 0.4 + 0.6 * 4/13 of all types are among the first four
    common = sum(1 for t in drawn if t.type_index < 4)
    assert common / len(drawn) > 0.5


def test_describe_specific_treasure():
    text = describe(silk_shirt(), specific=True)
    assert text.startswith("It is a shirt made of silk. It is in good condition.\n")
    assert "you could probably purchase" in text


def test_describe_group_member():
    text = describe(silk_shirt(), specific=False)
    assert text == "You see a shirt made of silk, in good condition.\n"


def test_describe_chest_and_cart():
    assert "open" in describe(Chest(), specific=True)

    cart = Cart(contents=Container())
    assert "currently empty" in describe(cart, specific=True)
    cart.contents.items.append(silk_shirt())
    assert "a silk shirt" in describe(cart, specific=True)

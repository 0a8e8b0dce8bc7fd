"""Treasure, chests, carts and coins.

An item is exactly one of Treasure, Chest or Cart. Treasure is described
by three indexes into the attribute tables below, which together decide
its name, weight and worth.
"""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .appraisal import appraise
from .words import add_article

if TYPE_CHECKING:
    from .container import Container


@dataclass(frozen=True)
class Attribute:
    """A row of an attribute table."""

    name: str
    worth: float
    weight: float


# Reference value: 1.0 = gold. Ordered by descending worth.
DENOMINATIONS = (
    Attribute("platinum", 10, 0.01),
    Attribute("gold", 1, 0.01),
    Attribute("silver", 0.6, 0.01),
    Attribute("bronze", 0.4, 0.01),
    Attribute("copper", 0.2, 0.01),
    Attribute("wood", 0.01, 0.01),
)

# Reference value: 1.0 = excellent. The three most common come first.
# Damage moves an item down this list.
CONDITIONS = (
    Attribute("awesome", 1.2, 0),
    Attribute("excellent", 1, 0),
    Attribute("good", 0.9, 0),
    Attribute("average", 0.75, 0),
    Attribute("poor", 0.5, 0),
    Attribute("bad", 0.6, 0),
    Attribute("thrashed", 0.4, 0),
)

# Raw material cost and weight. The two most common come first.
MATERIALS = (
    Attribute("iron", 0.4, 3),
    Attribute("fur", 0.01, 0.2),
    Attribute("gold", 1, 3.5),
    Attribute("bronze", 0.1, 2.7),
    Attribute("pewter", 0.05, 2),
    Attribute("chromium", 0.9, 2),
    Attribute("platinum", 2, 4),
    Attribute("bamboo", 0.01, 1),
    Attribute("leather", 0.09, 0.5),
    Attribute("silk", 0.03, 0.1),
    Attribute("steel", 0.7, 3),
    Attribute("glass", 0.04, 2),
)

# Worth and weight multipliers; shirt = 1.0 for both.
# The four most common come first.
ITEM_TYPES = (
    Attribute("shirt", 1, 1),
    Attribute("shoe", 0.4, 1),
    Attribute("bracelet", 0.2, 0.2),
    Attribute("tie", 0.25, 0.25),
    Attribute("sceptre", 4, 2.5),
    Attribute("crown", 3, 0.6),
    Attribute("leggings", 0.8, 0.5),
    Attribute("dagger", 0.1, 1.5),
    Attribute("cap", 0.6, 0.5),
    Attribute("battlesuit", 10, 5.0),
    Attribute("hammer", 0.4, 3.0),
    Attribute("cape", 0.7, 1),
    Attribute("overalls", 4, 4.0),
)

# Body parts the player may sprain, with the hitpoint cost.
BODY_PARTS = (
    Attribute("finger", 10, 0),
    Attribute("elbow", 60, 0),
    Attribute("teeth", 30, 0),
    Attribute("toe", 40, 0),
    Attribute("shoulder", 100, 0),
)

# Tunnel flavours. Only used for variety.
ENVIRONMENTS = (
    Attribute("dark", 0, 0),
    Attribute("tall", 0, 0),
    Attribute("humid", 0, 0),
    Attribute("beautiful", 0, 0),
    Attribute("narrow", 0, 0),
)

VALUE_CONSTANT = 300.0
IMMOVABLE_WEIGHT = 999.0

# Condition styles for render_name()
COND_NONE, COND_ADJECTIVE, COND_PARENTHETICAL = 0, 1, 2
# Material styles for render_name()
MAT_NONE, MAT_PREFIX, MAT_SUFFIX = 0, 1, 2


@dataclass
class Treasure:
    type_index: int
    material_index: int
    condition_index: int

    @property
    def type_name(self) -> str:
        return ITEM_TYPES[self.type_index].name

    @property
    def material_name(self) -> str:
        return MATERIALS[self.material_index].name

    @property
    def condition_name(self) -> str:
        return CONDITIONS[self.condition_index].name

    @property
    def immovable(self) -> bool:
        return False

    def weight(self) -> float:
        return MATERIALS[self.material_index].weight * ITEM_TYPES[self.type_index].weight

    def value(self, constant: float = VALUE_CONSTANT) -> float:
        return (
            constant
            * MATERIALS[self.material_index].worth
            * ITEM_TYPES[self.type_index].worth
            * CONDITIONS[self.condition_index].worth
        )

    def name(self, cond: int = COND_NONE, mat: int = MAT_NONE) -> str:
        return render_name(self, cond, mat)


@dataclass
class Chest:
    """A locked chest. Too heavy to carry; pry it open for its contents."""

    integrity: float = 1.0

    type_name = "chest"
    material_name = ""

    @property
    def condition_name(self) -> str:
        if self.integrity < 0.35:
            return "battered"
        if self.integrity < 0.75:
            return "dented"
        return "good"

    @property
    def immovable(self) -> bool:
        return self.integrity > 0

    def weight(self) -> float:
        return IMMOVABLE_WEIGHT

    def value(self, constant: float = VALUE_CONSTANT) -> float:
        return 0.0

    def name(self, cond: int = COND_NONE, mat: int = MAT_NONE) -> str:
        return render_name(self, cond, mat)


@dataclass
class Cart:
    """A cart that can be pulled around and filled with items."""

    contents: "Container"

    type_name = "cart"
    material_name = ""

    @property
    def condition_name(self) -> str:
        n = self.contents.count_items()
        if not n:
            return "empty"
        if n == 1:
            return "1 item"
        return f"{n} items"

    @property
    def immovable(self) -> bool:
        return True

    def weight(self) -> float:
        return IMMOVABLE_WEIGHT

    def value(self, constant: float = VALUE_CONSTANT) -> float:
        return 0.0

    def name(self, cond: int = COND_NONE, mat: int = MAT_NONE) -> str:
        return render_name(self, cond, mat)


Item = Union[Treasure, Chest, Cart]


def render_name(item: Item, cond: int = COND_NONE, mat: int = MAT_NONE) -> str:
    """Render an item name.

    mat=1 turns "shirt" into "silk shirt", mat=2 into "shirt made of silk".
    cond=1 turns "shirt" into "awesome shirt", cond=2 into "shirt (awesome)".

    Chests and carts invert the condition rule: their condition shows in
    parentheses unless a condition style was asked for, so that a player
    can address them as plain "chest" or "cart". A chest in good
    condition never shows it. Neither has a material.
    """
    match item:
        case Chest():
            cond = COND_PARENTHETICAL if not cond and item.condition_name != "good" else COND_NONE
            mat = MAT_NONE
        case Cart():
            cond = COND_PARENTHETICAL if not cond else COND_NONE
            mat = MAT_NONE

    result = item.type_name
    if mat == MAT_PREFIX:
        result = f"{item.material_name} {result}"
    if cond == COND_ADJECTIVE:
        result = f"{item.condition_name} {result}"
    if cond == COND_PARENTHETICAL:
        result += f" ({item.condition_name})"
    if mat == MAT_SUFFIX:
        result += f" made of {item.material_name}"
    return result


def generate_treasure(rng: random.Random) -> Treasure:
    """Draw a random treasure, biased towards the common table entries."""
    type_index = rng.randrange(len(ITEM_TYPES)) if rng.random() > 0.4 else rng.randrange(4)
    material_index = rng.randrange(len(MATERIALS)) if rng.random() > 0.4 else rng.randrange(2)
    condition_index = rng.randrange(len(CONDITIONS)) if rng.random() > 0.8 else rng.randrange(3)
    return Treasure(type_index, material_index, condition_index)


def describe(item: Item, specific: bool) -> str:
    """Text for looking at an item.

    specific is true when the player asked about this one item rather
    than a whole group.
    """
    full_name = add_article(item.name(COND_NONE, MAT_SUFFIX))
    if specific:
        common = f"It is {full_name}. It is in {item.condition_name} condition.\n"
    else:
        common = f"You see {full_name}, in {item.condition_name} condition.\n"

    if not specific:
        return common

    match item:
        case Cart():
            if item.contents.weight() == 0:
                info = (
                    "The cart is currently empty. "
                    "You can put stuff in it with 'put <items> in cart'.\n"
                )
            else:
                info = (
                    "The cart contains the following items:\n"
                    + item.contents.render_all(False)[0]
                )
            info += (
                "Type 'pull' to pull the cart around.\n"
                "You can get items from the cart with 'get <item> from cart'.\n"
            )
        case Chest():
            info = (
                "It appears to be way too heavy to lift up. "
                "It is closed. You can try to 'open' it.\n"
            )
        case _:
            info = (
                "You estimate that with it you could probably purchase "
                f"{appraise(item.value(), 1)}.\n"
            )
    return common + info

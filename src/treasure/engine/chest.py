"""Prying chests open.

Every attempt wears the chest down a little. The tool used (or bare
hands) decides how hard the chest is hit, how likely the tool is to get
damaged, and how much effort the attempt costs.
"""

import random
from dataclasses import dataclass

from ..logging import get_logger
from .container import Container
from .items import (
    BODY_PARTS,
    COND_ADJECTIVE,
    CONDITIONS,
    DENOMINATIONS,
    ITEM_TYPES,
    MAT_PREFIX,
    MATERIALS,
    Chest,
    Treasure,
    generate_treasure,
)
from .maze import Room

logger = get_logger(__name__)

# Bare hands pry about as well as a leather sceptre and take damage
# about as well as a good leather dagger.
BARE_HANDS_POWER = 0.5 / 2.5
BARE_HANDS_RESISTANCE = (0.5 * 1.5) / (0.9 * 0.09 * 0.1)
BARE_HANDS_EFFORT = 8


@dataclass
class PryResult:
    effort: int = BARE_HANDS_EFFORT
    # Name of the tool as it was before this attempt; "" for bare hands.
    tool_name: str = ""
    tool_damaged: bool = False
    tool_destroyed: bool = False
    tool_condition: str = ""
    sprained: str = ""
    sprain_cost: int = 0
    opened: bool = False
    suggest_tool: bool = False

    @property
    def life_cost(self) -> int:
        return self.effort + self.sprain_cost


def pry_seed(room: Room, tool_index: int | None, integrity: float, x: int, y: int) -> int:
    tool = -1 if tool_index is None else tool_index
    return int(
        71161183 * room.seed + tool + integrity * 0x8088401 + 971697 * x + 5197161 * y
    ) & 0xFFFFFFFF


def _spill_contents(rng: random.Random, floor: Container) -> None:
    """Scatter a broken chest's contents. There is always at least one thing."""
    while True:
        if rng.random() > 0.96:  # pure money is rare
            kind = int((1.0 - rng.random() ** 4) * (len(DENOMINATIONS) - 1))
            floor.money[kind] += rng.randint(1, int(1600 / DENOMINATIONS[kind].worth))
        else:
            floor.items.insert(0, generate_treasure(rng))
        if rng.random() <= 0.3:
            break


def pry_open(
    rng: random.Random,
    room: Room,
    x: int,
    y: int,
    chest_index: int,
    inventory: Container,
    tool_index: int | None = None,
) -> PryResult:
    """Make one attempt at prying open the chest at room.items.items[chest_index].

    tool_index points into inventory.items, or is None for bare hands.
    A chest that breaks is removed from the room and its contents are
    put on the floor.
    """
    chest = room.items.items[chest_index]
    if not isinstance(chest, Chest):
        raise ValueError(f"item {chest_index} is not a chest")

    rng.seed(pry_seed(room, tool_index, chest.integrity, x, y))
    result = PryResult()

    power = BARE_HANDS_POWER
    resistance = BARE_HANDS_RESISTANCE
    tool: Treasure | None = None
    if tool_index is not None:
        tool = inventory.items[tool_index]
        # Heavy materials on light items pry best; heavy, cheap items
        # hold up best.
        power = MATERIALS[tool.material_index].weight / ITEM_TYPES[tool.type_index].weight
        resistance = tool.weight() / tool.value(1.0)
        result.effort = int(tool.weight())
        result.tool_name = tool.name(COND_ADJECTIVE, MAT_PREFIX)

    chest.integrity -= power * (0.5 + 5.0 * rng.random() ** 4)

    if rng.random() > 0.75 and rng.random() > resistance / 500.0:
        if tool is not None and rng.random() >= 0.25:
            result.tool_damaged = True
            tool.condition_index += 1
            if tool.condition_index >= len(CONDITIONS):
                result.tool_destroyed = True
                del inventory.items[tool_index]
            else:
                result.tool_condition = tool.condition_name
        else:
            part = BODY_PARTS[rng.randrange(len(BODY_PARTS))]
            result.sprained = part.name
            result.sprain_cost = int(part.worth)

    if chest.integrity > 0:
        result.suggest_tool = tool is None and rng.random() < 0.3
        return result

    result.opened = True
    del room.items.items[chest_index]
    _spill_contents(rng, room.items)
    logger.info("chest_opened", x=x, y=y, items=len(room.items.items))
    return result

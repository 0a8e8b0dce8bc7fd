"""The infinite maze.

Rooms are generated the first time they are visited and kept forever.
Each room's contents come from a generator reseeded from the room's
coordinates, so a room looks the same no matter when it is first seen.
A freshly generated room starts out as a copy of a neighbouring "model"
room, which is what makes walls line up into corridors.
"""

import random
from dataclasses import dataclass, field

from ..logging import get_logger
from .container import Container
from .items import ENVIRONMENTS, Cart, Chest, generate_treasure

logger = get_logger(__name__)

# How far the view is generated from the player, per direction.
NORTH_SOUTH_REACH = 4
EAST_WEST_REACH = 5

# Map view size around the player.
VIEW_HALF_WIDTH = 5
VIEW_HALF_HEIGHT = 4

# (dx, dy, seed) for the four cardinal neighbours: north, west, east, south.
_NEIGHBOURS = ((0, -1, 1), (-1, 0, 2), (1, 0, 3), (0, 1, 4))


@dataclass
class Room:
    wall: bool = False
    env: int = 0
    seed: int = 0
    items: Container = field(default_factory=Container)

    @property
    def environment(self) -> str:
        return ENVIRONMENTS[self.env].name


DEFAULT_ROOM = Room()


def room_seed(x: int, y: int) -> int:
    return (y * 0xC70F6907 + x * 2166136261) & 0xFFFFFFFF


class Maze:
    """A sparse grid of rooms keyed by (x, y)."""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.rooms: dict[tuple[int, int], Room] = {}

    def __len__(self) -> int:
        return len(self.rooms)

    def is_generated(self, x: int, y: int) -> bool:
        return (x, y) in self.rooms

    def generate_room(self, x: int, y: int, model: Room = DEFAULT_ROOM, seed: int = 0) -> Room:
        """Return the room at (x, y), generating it if this is the first visit.

        model is the neighbouring room this one should resemble; seed is
        compared against model.seed to decide how likely a wall is.
        """
        room = self.rooms.get((x, y))
        if room is not None:
            return room

        rng = self.rng
        rng.seed(room_seed(x, y))
        room = Room(wall=model.wall, env=model.env, seed=model.seed)

        chest_roll = rng.random()
        room.seed = (seed + (rng.randrange(4) if rng.random() > 0.95 else 0)) & 3
        if rng.random() > 0.9:
            room.env = rng.randrange(len(ENVIRONMENTS))
        if rng.random() > (0.95 if seed == model.seed else 0.1):
            room.wall = rng.random() < 0.4

        # Nearly all rooms are empty; a few hold up to eight items.
        count = int(rng.random() ** 40 * 8.5)
        room.items.items = [generate_treasure(rng) for _ in range(count)]
        if chest_roll < 0.1:
            room.items.items.insert(0, Chest())
        if rng.random() < 0.005:
            room.items.items.insert(0, Cart(contents=Container()))

        self.rooms[(x, y)] = room
        logger.debug(
            "room_generated",
            x=x,
            y=y,
            wall=room.wall,
            items=len(room.items.items),
            rooms=len(self),
        )
        return room

    def room_at(self, x: int, y: int) -> Room:
        return self.generate_room(x, y)

    def can_enter(self, x: int, y: int, model: Room = DEFAULT_ROOM) -> bool:
        return not self.generate_room(x, y, model, 0).wall

    def _spawn_neighbours(self, x: int, y: int, model: Room) -> None:
        for dx, dy, seed in _NEIGHBOURS:
            self.generate_room(x + dx, y + dy, model, seed)

    def spawn_rooms(self, x: int, y: int, model: Room = DEFAULT_ROOM) -> Room:
        """Generate everything the player can see from (x, y).

        Walks out from the center along each axis, stopping at the first
        wall, and fills in the side rooms of every step on the way.
        """
        center = self.generate_room(x, y, model, 0)
        self._spawn_neighbours(x, y, center)

        arms = (
            (0, 1, NORTH_SOUTH_REACH),
            (0, -1, NORTH_SOUTH_REACH),
            (-1, 0, EAST_WEST_REACH),
            (1, 0, EAST_WEST_REACH),
        )
        for dx, dy, reach in arms:
            previous = center
            for step in range(1, reach + 1):
                sx, sy = x + dx * step, y + dy * step
                if not self.can_enter(sx, sy, previous):
                    break
                previous = self.generate_room(sx, sy, previous, 0)
                self._spawn_neighbours(sx, sy, previous)
        return center

    def char_at(self, x: int, y: int) -> str:
        """One-character map symbol for a room."""
        room = self.rooms.get((x, y))
        if room is None:
            return " "
        if room.wall:
            return "#"
        items = room.items.items
        if any(isinstance(item, Chest) for item in items):
            return "c"
        if any(isinstance(item, Cart) for item in items):
            return "r"
        if items:
            return "i"
        return "."

    def render_map(self, x: int, y: int) -> list[str]:
        """Map lines around (x, y) with the player drawn as '@'."""
        lines = []
        for dy in range(-VIEW_HALF_HEIGHT, VIEW_HALF_HEIGHT + 1):
            line = ""
            for dx in range(-VIEW_HALF_WIDTH, VIEW_HALF_WIDTH + 1):
                line += "@" if dx == 0 and dy == 0 else self.char_at(x + dx, y + dy)
            lines.append(line)
        return lines

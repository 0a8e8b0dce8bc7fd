"""Mutable per-player game state.

The random generator lives here and is handed to the maze and to chest
prying explicitly; both reseed it right before drawing, so the same room
always generates the same way.
"""

import random
from dataclasses import dataclass, field

from .container import Container
from .maze import Maze, Room

STARTING_LIFE = 1000
START_X, START_Y = 0, 0


@dataclass
class GameState:
    """Everything that changes while a player explores."""

    rng: random.Random = field(default_factory=random.Random)
    x: int = START_X
    y: int = START_Y
    life: int = STARTING_LIFE
    pulling: bool = False
    turns: int = 0
    is_finished: bool = False
    inventory: Container = field(default_factory=Container)
    maze: Maze = field(init=False)

    def __post_init__(self):
        self.maze = Maze(self.rng)

    @property
    def room(self) -> Room:
        return self.maze.room_at(self.x, self.y)


def new_game_state(starting_life: int = STARTING_LIFE) -> GameState:
    """Create a fresh game with the view around the start generated."""
    state = GameState(life=starting_life)
    state.maze.spawn_rooms(state.x, state.y)
    return state

"""Tests for game state."""

from treasure.engine.state import START_X, START_Y, STARTING_LIFE, new_game_state


def test_new_game_state():
    """A fresh game starts at the origin with the view generated."""
    state = new_game_state()
    assert (state.x, state.y) == (START_X, START_Y)
    assert state.life == STARTING_LIFE
    assert state.turns == 0
    assert not state.is_finished
    assert not state.pulling
    assert state.inventory.items == []
    for x, y in ((0, 0), (0, -1), (-1, 0), (1, 0), (0, 1)):
        assert state.maze.is_generated(x, y)


def test_starting_life():
    assert new_game_state(50).life == 50


def test_room_is_current_room():
    state = new_game_state()
    assert state.room is state.maze.rooms[(0, 0)]


def test_games_share_the_same_maze_layout():
    a, b = new_game_state(), new_game_state()
    assert a.maze.rooms == b.maze.rooms

"""Shared test fixtures for Treasure Dungeon."""

import pytest

from treasure.app import create_app
from treasure.config import Config
from treasure.engine.container import Container
from treasure.engine.maze import Room
from treasure.engine.state import GameState, new_game_state


@pytest.fixture
def state() -> GameState:
    """A game whose start room is empty and whose east neighbour is open."""
    state = new_game_state()
    state.maze.rooms[(0, 0)] = Room()
    state.maze.rooms[(1, 0)] = Room()
    return state


@pytest.fixture
def floor(state: GameState) -> Container:
    return state.maze.rooms[(0, 0)].items


@pytest.fixture
def test_config() -> Config:
    return Config(starting_life=1000)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
